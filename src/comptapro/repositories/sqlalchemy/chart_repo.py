"""SQLAlchemy implementation of ChartRepository."""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from comptapro.domain.models import Compte, CompteModele
from comptapro.repositories.sqlalchemy.orm_models import (
    CompteModeleORM,
    CompteORM,
    FactureLigneORM,
    ImmobilisationORM,
    LigneEcritureORM,
)


class SqlAlchemyChartRepository:
    """SQLAlchemy-backed master plan and company chart repository."""

    def __init__(self, db: Session):
        self._db = db

    # -------------------------------------------------------------------------
    # Master plan (plansyscoamodele)
    # -------------------------------------------------------------------------

    def list_master(self, search: Optional[str] = None) -> list[CompteModele]:
        """List master accounts, optionally filtered by number or label."""
        query = self._db.query(CompteModeleORM)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                CompteModeleORM.numero_compte.like(pattern),
                CompteModeleORM.libelle_compte.ilike(pattern),
            ))
        return [self._modele_to_domain(m) for m in query.order_by(CompteModeleORM.numero_compte).all()]

    def get_master(self, id_modele: str) -> Optional[CompteModele]:
        orm_modele = self._db.query(CompteModeleORM).filter(
            CompteModeleORM.id_modele == id_modele
        ).first()
        return self._modele_to_domain(orm_modele) if orm_modele else None

    def get_master_by_numero(self, numero_compte: str) -> Optional[CompteModele]:
        orm_modele = self._db.query(CompteModeleORM).filter(
            CompteModeleORM.numero_compte == numero_compte
        ).first()
        return self._modele_to_domain(orm_modele) if orm_modele else None

    def create_master(self, modele: CompteModele) -> CompteModele:
        """Persist a new master account."""
        orm_modele = CompteModeleORM(
            id_modele=modele.id_modele,
            numero_compte=modele.numero_compte,
            libelle_compte=modele.libelle_compte,
            classe_compte=modele.classe_compte,
        )
        self._db.add(orm_modele)
        self._db.commit()
        self._db.refresh(orm_modele)
        return self._modele_to_domain(orm_modele)

    def update_master(self, modele: CompteModele) -> CompteModele:
        """Update a master account."""
        orm_modele = self._db.query(CompteModeleORM).filter(
            CompteModeleORM.id_modele == modele.id_modele
        ).first()
        if orm_modele:
            orm_modele.numero_compte = modele.numero_compte
            orm_modele.libelle_compte = modele.libelle_compte
            orm_modele.classe_compte = modele.classe_compte
            self._db.commit()
            self._db.refresh(orm_modele)
            return self._modele_to_domain(orm_modele)
        raise ValueError(f"CompteModele not found: {modele.id_modele}")

    def delete_master(self, id_modele: str) -> None:
        """Delete a master account (company charts keep their copies)."""
        self._db.query(CompteModeleORM).filter(
            CompteModeleORM.id_modele == id_modele
        ).delete()
        self._db.commit()

    # -------------------------------------------------------------------------
    # Company chart (plancomptableentreprise)
    # -------------------------------------------------------------------------

    def list_accounts(
        self,
        entreprise_id: str,
        prefix: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Compte]:
        """List a company's accounts by number."""
        query = self._db.query(CompteORM).filter(CompteORM.entreprise_id == entreprise_id)
        if prefix:
            query = query.filter(CompteORM.numero_compte.like(f"{prefix}%"))
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                CompteORM.numero_compte.like(pattern),
                CompteORM.libelle_compte.ilike(pattern),
            ))
        return [self._to_domain(c) for c in query.order_by(CompteORM.numero_compte).all()]

    def get_account(self, entreprise_id: str, id_compte: str) -> Optional[Compte]:
        """Retrieve one of the company's accounts by ID."""
        orm_compte = self._db.query(CompteORM).filter(
            CompteORM.entreprise_id == entreprise_id,
            CompteORM.id_compte == id_compte,
        ).first()
        return self._to_domain(orm_compte) if orm_compte else None

    def get_account_by_numero(self, entreprise_id: str, numero_compte: str) -> Optional[Compte]:
        """Retrieve one of the company's accounts by number."""
        orm_compte = self._db.query(CompteORM).filter(
            CompteORM.entreprise_id == entreprise_id,
            CompteORM.numero_compte == numero_compte,
        ).first()
        return self._to_domain(orm_compte) if orm_compte else None

    def create_account(self, compte: Compte) -> Compte:
        """Persist a new company account."""
        orm_compte = self._to_orm(compte)
        self._db.add(orm_compte)
        self._db.commit()
        self._db.refresh(orm_compte)
        return self._to_domain(orm_compte)

    def create_accounts(self, comptes: list[Compte]) -> int:
        """Persist several accounts in one transaction; returns the count."""
        self._db.add_all([self._to_orm(c) for c in comptes])
        self._db.commit()
        return len(comptes)

    def update_account(self, compte: Compte) -> Compte:
        """Update an account's label."""
        orm_compte = self._db.query(CompteORM).filter(
            CompteORM.entreprise_id == compte.entreprise_id,
            CompteORM.id_compte == compte.id_compte,
        ).first()
        if orm_compte:
            orm_compte.libelle_compte = compte.libelle_compte
            self._db.commit()
            self._db.refresh(orm_compte)
            return self._to_domain(orm_compte)
        raise ValueError(f"Compte not found: {compte.id_compte}")

    def delete_account(self, entreprise_id: str, id_compte: str) -> None:
        """Delete a company account."""
        self._db.query(CompteORM).filter(
            CompteORM.entreprise_id == entreprise_id,
            CompteORM.id_compte == id_compte,
        ).delete()
        self._db.commit()

    def count_references(self, id_compte: str) -> int:
        """Entry lines (draft or validated), assets and invoice lines using an account."""
        lignes = self._db.query(LigneEcritureORM).filter(
            LigneEcritureORM.compte_id == id_compte
        ).count()
        immobilisations = self._db.query(ImmobilisationORM).filter(
            or_(
                ImmobilisationORM.compte_immo_id == id_compte,
                ImmobilisationORM.compte_amort_id == id_compte,
            )
        ).count()
        lignes_facture = self._db.query(FactureLigneORM).filter(
            FactureLigneORM.compte_id == id_compte
        ).count()
        return lignes + immobilisations + lignes_facture

    @staticmethod
    def _to_orm(compte: Compte) -> CompteORM:
        return CompteORM(
            id_compte=compte.id_compte,
            numero_compte=compte.numero_compte,
            libelle_compte=compte.libelle_compte,
            classe_compte=compte.classe_compte,
            entreprise_id=compte.entreprise_id,
        )

    @staticmethod
    def _to_domain(orm: CompteORM) -> Compte:
        """Convert ORM model to domain model."""
        return Compte(
            id_compte=orm.id_compte,
            numero_compte=orm.numero_compte,
            libelle_compte=orm.libelle_compte,
            classe_compte=orm.classe_compte,
            entreprise_id=orm.entreprise_id,
        )

    @staticmethod
    def _modele_to_domain(orm: CompteModeleORM) -> CompteModele:
        return CompteModele(
            id_modele=orm.id_modele,
            numero_compte=orm.numero_compte,
            libelle_compte=orm.libelle_compte,
            classe_compte=orm.classe_compte,
        )
