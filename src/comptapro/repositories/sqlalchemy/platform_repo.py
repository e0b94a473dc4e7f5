"""SQLAlchemy implementation of PlatformRepository (super-admin maintenance)."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from comptapro.domain.views import PlatformStat
from comptapro.repositories.sqlalchemy.database import Base
from comptapro.repositories.sqlalchemy.orm_models import (
    ArticleORM,
    BulletinPaieORM,
    CompteORM,
    DotationAmortissementORM,
    EcritureORM,
    EmployeORM,
    EntrepriseORM,
    ExerciceORM,
    FactureLigneORM,
    FactureORM,
    ImmobilisationORM,
    JournalORM,
    LigneEcritureORM,
    MouvementStockORM,
    ProfilORM,
    TiersORM,
)

logger = logging.getLogger(__name__)

# Tenant-owned tables in deletion order (children first)
_TENANT_TABLES = [
    MouvementStockORM,
    ArticleORM,
    DotationAmortissementORM,
    ImmobilisationORM,
    BulletinPaieORM,
    EmployeORM,
    FactureORM,
    TiersORM,
    EcritureORM,
    JournalORM,
    CompteORM,
    ExerciceORM,
]


class SqlAlchemyPlatformRepository:
    """Cross-tenant statistics and cascading company deletion."""

    def __init__(self, db: Session):
        self._db = db

    def table_row_counts(self) -> list[PlatformStat]:
        """Row count of every table, by table name."""
        stats = []
        for table in sorted(Base.metadata.tables.values(), key=lambda t: t.name):
            count = self._db.execute(select(func.count()).select_from(table)).scalar_one()
            stats.append(PlatformStat(table_name=table.name, row_count=count))
        return stats

    def delete_company(self, entreprise_id: str) -> None:
        """Delete every row owned by a company, then the company itself."""
        facture_ids = select(FactureORM.id_facture).where(FactureORM.entreprise_id == entreprise_id)
        ecriture_ids = select(EcritureORM.id_ecriture).where(EcritureORM.entreprise_id == entreprise_id)

        self._db.query(FactureLigneORM).filter(
            FactureLigneORM.facture_id.in_(facture_ids)
        ).delete(synchronize_session=False)
        self._db.query(LigneEcritureORM).filter(
            LigneEcritureORM.ecriture_id.in_(ecriture_ids)
        ).delete(synchronize_session=False)
        for orm_model in _TENANT_TABLES:
            self._db.query(orm_model).filter(
                orm_model.entreprise_id == entreprise_id
            ).delete(synchronize_session=False)

        self._db.query(ProfilORM).filter(
            ProfilORM.entreprise_id == entreprise_id
        ).update({ProfilORM.entreprise_id: None}, synchronize_session=False)
        self._db.query(EntrepriseORM).filter(
            EntrepriseORM.id_entreprise == entreprise_id
        ).delete(synchronize_session=False)
        self._db.commit()
        self._db.expire_all()
        logger.info("Deleted company %s and all its data", entreprise_id)
