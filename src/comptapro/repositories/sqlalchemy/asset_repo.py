"""SQLAlchemy implementation of AssetRepository."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from comptapro.core.money import round_money
from comptapro.domain.models import DotationAmortissement, Ecriture, Immobilisation
from comptapro.repositories.sqlalchemy.ledger_repo import ecriture_to_orm
from comptapro.repositories.sqlalchemy.orm_models import DotationAmortissementORM, ImmobilisationORM


class SqlAlchemyAssetRepository:
    """SQLAlchemy-backed fixed asset repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, immobilisation: Immobilisation) -> Immobilisation:
        """Persist a new fixed asset."""
        orm_immo = ImmobilisationORM(
            id_immo=immobilisation.id_immo,
            entreprise_id=immobilisation.entreprise_id,
            libelle=immobilisation.libelle,
            date_achat=immobilisation.date_achat,
            date_mise_en_service=immobilisation.date_mise_en_service,
            valeur_origine=immobilisation.valeur_origine,
            duree_amortissement=immobilisation.duree_amortissement,
            compte_immo_id=immobilisation.compte_immo_id,
            compte_amort_id=immobilisation.compte_amort_id,
        )
        self._db.add(orm_immo)
        self._db.commit()
        self._db.refresh(orm_immo)
        return self._to_domain(orm_immo)

    def get_by_id(self, entreprise_id: str, id_immo: str) -> Optional[Immobilisation]:
        """Retrieve a company asset with its accumulated depreciation."""
        orm_immo = self._db.query(ImmobilisationORM).filter(
            ImmobilisationORM.entreprise_id == entreprise_id,
            ImmobilisationORM.id_immo == id_immo,
        ).first()
        return self._to_domain(orm_immo) if orm_immo else None

    def list_all(self, entreprise_id: str) -> list[Immobilisation]:
        """List a company's assets, most recent purchase first."""
        orm_immos = (
            self._db.query(ImmobilisationORM)
            .filter(ImmobilisationORM.entreprise_id == entreprise_id)
            .order_by(ImmobilisationORM.date_achat.desc())
            .all()
        )
        return [self._to_domain(i) for i in orm_immos]

    def get_dotation(self, immo_id: str, exercice_id: str) -> Optional[DotationAmortissement]:
        """Depreciation already posted for an asset in an exercise."""
        orm_dotation = self._db.query(DotationAmortissementORM).filter(
            DotationAmortissementORM.immo_id == immo_id,
            DotationAmortissementORM.exercice_id == exercice_id,
        ).first()
        return self._dotation_to_domain(orm_dotation) if orm_dotation else None

    def create_dotation(
        self, dotation: DotationAmortissement, ecriture: Ecriture
    ) -> DotationAmortissement:
        """Record an allowance and its validated entry in one transaction."""
        self._db.add(ecriture_to_orm(ecriture))
        orm_dotation = DotationAmortissementORM(
            id_dotation=dotation.id_dotation,
            entreprise_id=dotation.entreprise_id,
            immo_id=dotation.immo_id,
            exercice_id=dotation.exercice_id,
            montant=dotation.montant,
            ecriture_id=dotation.ecriture_id,
        )
        self._db.add(orm_dotation)
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        self._db.refresh(orm_dotation)
        return self._dotation_to_domain(orm_dotation)

    def list_dotations(self, immo_id: str) -> list[DotationAmortissement]:
        orm_dotations = self._db.query(DotationAmortissementORM).filter(
            DotationAmortissementORM.immo_id == immo_id
        ).all()
        return [self._dotation_to_domain(d) for d in orm_dotations]

    def _to_domain(self, orm: ImmobilisationORM) -> Immobilisation:
        """Convert ORM model to domain model, summing posted allowances."""
        cumul = self._db.query(
            func.coalesce(func.sum(DotationAmortissementORM.montant), 0)
        ).filter(DotationAmortissementORM.immo_id == orm.id_immo).scalar()
        return Immobilisation(
            id_immo=orm.id_immo,
            entreprise_id=orm.entreprise_id,
            libelle=orm.libelle,
            date_achat=orm.date_achat,
            date_mise_en_service=orm.date_mise_en_service,
            valeur_origine=orm.valeur_origine,
            duree_amortissement=orm.duree_amortissement,
            compte_immo_id=orm.compte_immo_id,
            compte_amort_id=orm.compte_amort_id,
            cumul_amortissements=round_money(cumul),
        )

    @staticmethod
    def _dotation_to_domain(orm: DotationAmortissementORM) -> DotationAmortissement:
        return DotationAmortissement(
            id_dotation=orm.id_dotation,
            entreprise_id=orm.entreprise_id,
            immo_id=orm.immo_id,
            exercice_id=orm.exercice_id,
            montant=orm.montant,
            ecriture_id=orm.ecriture_id,
        )
