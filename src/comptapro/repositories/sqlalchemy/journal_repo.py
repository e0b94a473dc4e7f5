"""SQLAlchemy implementation of JournalRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from comptapro.domain.models import Journal
from comptapro.repositories.sqlalchemy.orm_models import JournalORM


class SqlAlchemyJournalRepository:
    """SQLAlchemy-backed journal repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, journal: Journal) -> Journal:
        """Persist a new journal."""
        orm_journal = JournalORM(
            id_journal=journal.id_journal,
            code_journal=journal.code_journal,
            libelle_journal=journal.libelle_journal,
            entreprise_id=journal.entreprise_id,
        )
        self._db.add(orm_journal)
        self._db.commit()
        self._db.refresh(orm_journal)
        return self._to_domain(orm_journal)

    def get_by_id(self, entreprise_id: str, id_journal: str) -> Optional[Journal]:
        """Retrieve a company journal by ID."""
        orm_journal = self._db.query(JournalORM).filter(
            JournalORM.entreprise_id == entreprise_id,
            JournalORM.id_journal == id_journal,
        ).first()
        return self._to_domain(orm_journal) if orm_journal else None

    def get_by_code(self, entreprise_id: str, code_journal: str) -> Optional[Journal]:
        """Retrieve a company journal by code."""
        orm_journal = self._db.query(JournalORM).filter(
            JournalORM.entreprise_id == entreprise_id,
            JournalORM.code_journal == code_journal,
        ).first()
        return self._to_domain(orm_journal) if orm_journal else None

    def list_all(self, entreprise_id: str) -> list[Journal]:
        """List a company's journals by code."""
        orm_journals = (
            self._db.query(JournalORM)
            .filter(JournalORM.entreprise_id == entreprise_id)
            .order_by(JournalORM.code_journal)
            .all()
        )
        return [self._to_domain(j) for j in orm_journals]

    @staticmethod
    def _to_domain(orm: JournalORM) -> Journal:
        """Convert ORM model to domain model."""
        return Journal(
            id_journal=orm.id_journal,
            code_journal=orm.code_journal,
            libelle_journal=orm.libelle_journal,
            entreprise_id=orm.entreprise_id,
        )
