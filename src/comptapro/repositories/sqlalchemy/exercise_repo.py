"""SQLAlchemy implementation of ExerciseRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from comptapro.domain.models import Exercice, StatutExercice
from comptapro.repositories.sqlalchemy.orm_models import ExerciceORM


class SqlAlchemyExerciseRepository:
    """SQLAlchemy-backed accounting period repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, exercice: Exercice) -> Exercice:
        """Persist a new exercise."""
        orm_exercice = ExerciceORM(
            id_exercice=exercice.id_exercice,
            libelle=exercice.libelle,
            date_debut=exercice.date_debut,
            date_fin=exercice.date_fin,
            statut=exercice.statut,
            entreprise_id=exercice.entreprise_id,
        )
        self._db.add(orm_exercice)
        self._db.commit()
        self._db.refresh(orm_exercice)
        return self._to_domain(orm_exercice)

    def get_by_id(self, entreprise_id: str, id_exercice: str) -> Optional[Exercice]:
        """Retrieve a company exercise by ID."""
        orm_exercice = self._db.query(ExerciceORM).filter(
            ExerciceORM.entreprise_id == entreprise_id,
            ExerciceORM.id_exercice == id_exercice,
        ).first()
        return self._to_domain(orm_exercice) if orm_exercice else None

    def list_all(
        self,
        entreprise_id: str,
        statut: Optional[StatutExercice] = None,
    ) -> list[Exercice]:
        """List a company's exercises, most recent first."""
        query = self._db.query(ExerciceORM).filter(ExerciceORM.entreprise_id == entreprise_id)
        if statut is not None:
            query = query.filter(ExerciceORM.statut == statut)
        orm_exercices = query.order_by(ExerciceORM.date_debut.desc()).all()
        return [self._to_domain(e) for e in orm_exercices]

    def update(self, exercice: Exercice) -> Exercice:
        """Update label and status."""
        orm_exercice = self._db.query(ExerciceORM).filter(
            ExerciceORM.id_exercice == exercice.id_exercice
        ).first()
        if orm_exercice:
            orm_exercice.libelle = exercice.libelle
            orm_exercice.statut = exercice.statut
            self._db.commit()
            self._db.refresh(orm_exercice)
            return self._to_domain(orm_exercice)
        raise ValueError(f"Exercice not found: {exercice.id_exercice}")

    @staticmethod
    def _to_domain(orm: ExerciceORM) -> Exercice:
        """Convert ORM model to domain model."""
        return Exercice(
            id_exercice=orm.id_exercice,
            libelle=orm.libelle,
            date_debut=orm.date_debut,
            date_fin=orm.date_fin,
            statut=orm.statut,
            entreprise_id=orm.entreprise_id,
        )
