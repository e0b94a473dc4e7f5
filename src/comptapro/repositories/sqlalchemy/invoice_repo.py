"""SQLAlchemy implementation of InvoiceRepository."""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from comptapro.domain.models import (
    Facture,
    FactureLigne,
    StatutPiece,
    Tiers,
    TypeDocument,
    TypeTiers,
)
from comptapro.repositories.sqlalchemy.orm_models import FactureLigneORM, FactureORM, TiersORM


class SqlAlchemyInvoiceRepository:
    """SQLAlchemy-backed third-party and invoice repository."""

    def __init__(self, db: Session):
        self._db = db

    # -------------------------------------------------------------------------
    # Third parties
    # -------------------------------------------------------------------------

    def create_tiers(self, tiers: Tiers) -> Tiers:
        """Persist a new customer or supplier."""
        orm_tiers = TiersORM(
            id_tiers=tiers.id_tiers,
            nom_tiers=tiers.nom_tiers,
            type_tiers=tiers.type_tiers,
            entreprise_id=tiers.entreprise_id,
        )
        self._db.add(orm_tiers)
        self._db.commit()
        self._db.refresh(orm_tiers)
        return self._tiers_to_domain(orm_tiers)

    def get_tiers(self, entreprise_id: str, id_tiers: str) -> Optional[Tiers]:
        orm_tiers = self._db.query(TiersORM).filter(
            TiersORM.entreprise_id == entreprise_id,
            TiersORM.id_tiers == id_tiers,
        ).first()
        return self._tiers_to_domain(orm_tiers) if orm_tiers else None

    def list_tiers(self, entreprise_id: str, type_tiers: Optional[TypeTiers] = None) -> list[Tiers]:
        """List a company's third parties by name."""
        query = self._db.query(TiersORM).filter(TiersORM.entreprise_id == entreprise_id)
        if type_tiers is not None:
            query = query.filter(TiersORM.type_tiers == type_tiers)
        return [self._tiers_to_domain(t) for t in query.order_by(TiersORM.nom_tiers).all()]

    # -------------------------------------------------------------------------
    # Invoices
    # -------------------------------------------------------------------------

    def create(self, facture: Facture) -> Facture:
        """Persist an invoice and its lines in one transaction."""
        orm_facture = FactureORM(
            id_facture=facture.id_facture,
            entreprise_id=facture.entreprise_id,
            tiers_id=facture.tiers_id,
            exercice_id=facture.exercice_id,
            numero_facture=facture.numero_facture,
            date_facture=facture.date_facture,
            date_echeance=facture.date_echeance,
            type_document=facture.type_document,
            montant_ht=facture.montant_ht,
            montant_tva=facture.montant_tva,
            montant_ttc=facture.montant_ttc,
            statut=facture.statut,
            ecriture_id=facture.ecriture_id,
            created_at=facture.created_at,
        )
        for position, ligne in enumerate(facture.lignes):
            orm_facture.lignes.append(FactureLigneORM(
                id_ligne=ligne.id_ligne,
                compte_id=ligne.compte_id,
                description=ligne.description,
                quantite=ligne.quantite,
                prix_unitaire_ht=ligne.prix_unitaire_ht,
                taux_tva=ligne.taux_tva,
                total_ht=ligne.total_ht,
                position=position,
            ))
        self._db.add(orm_facture)
        self._db.commit()
        self._db.refresh(orm_facture)
        return self._to_domain(orm_facture)

    def get_by_id(self, entreprise_id: str, id_facture: str) -> Optional[Facture]:
        """Retrieve a company invoice with its lines."""
        orm_facture = self._db.query(FactureORM).filter(
            FactureORM.entreprise_id == entreprise_id,
            FactureORM.id_facture == id_facture,
        ).first()
        return self._to_domain(orm_facture) if orm_facture else None

    def query(
        self,
        entreprise_id: str,
        type_document: Optional[TypeDocument] = None,
        exercice_id: Optional[str] = None,
        statut: Optional[StatutPiece] = None,
    ) -> list[Facture]:
        """List invoices with filters, most recent first."""
        query = (
            self._db.query(FactureORM)
            .options(selectinload(FactureORM.lignes))
            .filter(FactureORM.entreprise_id == entreprise_id)
        )
        if type_document is not None:
            query = query.filter(FactureORM.type_document == type_document)
        if exercice_id:
            query = query.filter(FactureORM.exercice_id == exercice_id)
        if statut is not None:
            query = query.filter(FactureORM.statut == statut)
        orm_factures = query.order_by(
            FactureORM.date_facture.desc(),
            FactureORM.numero_facture.desc(),
        ).all()
        return [self._to_domain(f) for f in orm_factures]

    def get_by_numero(self, entreprise_id: str, numero_facture: str) -> Optional[Facture]:
        orm_facture = self._db.query(FactureORM).filter(
            FactureORM.entreprise_id == entreprise_id,
            FactureORM.numero_facture == numero_facture,
        ).first()
        return self._to_domain(orm_facture) if orm_facture else None

    def list_numeros(self, entreprise_id: str, prefix: str) -> list[str]:
        """Invoice numbers of a company starting with a prefix."""
        rows = (
            self._db.query(FactureORM.numero_facture)
            .filter(
                FactureORM.entreprise_id == entreprise_id,
                FactureORM.numero_facture.like(f"{prefix}%"),
            )
            .all()
        )
        return [numero for (numero,) in rows]

    def mark_validated(self, entreprise_id: str, id_facture: str, ecriture_id: str) -> Facture:
        """Set an invoice as validated and link its posting."""
        orm_facture = self._db.query(FactureORM).filter(
            FactureORM.entreprise_id == entreprise_id,
            FactureORM.id_facture == id_facture,
        ).first()
        if orm_facture:
            orm_facture.statut = StatutPiece.VALIDEE
            orm_facture.ecriture_id = ecriture_id
            self._db.commit()
            self._db.refresh(orm_facture)
            return self._to_domain(orm_facture)
        raise ValueError(f"Facture not found: {id_facture}")

    def delete(self, entreprise_id: str, id_facture: str) -> None:
        """Delete an invoice and its lines."""
        orm_facture = self._db.query(FactureORM).filter(
            FactureORM.entreprise_id == entreprise_id,
            FactureORM.id_facture == id_facture,
        ).first()
        if orm_facture:
            self._db.delete(orm_facture)
            self._db.commit()

    @staticmethod
    def _tiers_to_domain(orm: TiersORM) -> Tiers:
        return Tiers(
            id_tiers=orm.id_tiers,
            nom_tiers=orm.nom_tiers,
            type_tiers=orm.type_tiers,
            entreprise_id=orm.entreprise_id,
        )

    @staticmethod
    def _to_domain(orm: FactureORM) -> Facture:
        """Convert ORM model to domain model."""
        return Facture(
            id_facture=orm.id_facture,
            entreprise_id=orm.entreprise_id,
            tiers_id=orm.tiers_id,
            exercice_id=orm.exercice_id,
            numero_facture=orm.numero_facture,
            date_facture=orm.date_facture,
            date_echeance=orm.date_echeance,
            type_document=orm.type_document,
            montant_ht=orm.montant_ht,
            montant_tva=orm.montant_tva,
            montant_ttc=orm.montant_ttc,
            statut=orm.statut,
            ecriture_id=orm.ecriture_id,
            created_at=orm.created_at,
            lignes=[
                FactureLigne(
                    id_ligne=ligne.id_ligne,
                    facture_id=ligne.facture_id,
                    compte_id=ligne.compte_id,
                    description=ligne.description,
                    quantite=ligne.quantite,
                    prix_unitaire_ht=ligne.prix_unitaire_ht,
                    taux_tva=ligne.taux_tva,
                    total_ht=ligne.total_ht,
                )
                for ligne in orm.lignes
            ],
        )
