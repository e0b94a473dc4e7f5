"""SQLAlchemy implementation of LedgerRepository.

Besides entry persistence, this repository computes the two ledger views
(trial balance and general ledger) and the cross-tenant aggregates used by
the super-admin console. Only validated entries are aggregated.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from comptapro.core.money import ZERO, round_money
from comptapro.domain.models import Ecriture, LigneEcriture, StatutPiece
from comptapro.domain.views import ActivityLogEntry, BalanceLine, GrandLivreLine, SyntheseLine
from comptapro.repositories.sqlalchemy.orm_models import (
    CompteORM,
    EcritureORM,
    EntrepriseORM,
    JournalORM,
    LigneEcritureORM,
)


def ecriture_to_orm(ecriture: Ecriture) -> EcritureORM:
    """Build the ORM row of an entry and its lines, ready to be added to a session."""
    orm_ecriture = EcritureORM(
        id_ecriture=ecriture.id_ecriture,
        entreprise_id=ecriture.entreprise_id,
        exercice_id=ecriture.exercice_id,
        journal_id=ecriture.journal_id,
        date_ecriture=ecriture.date_ecriture,
        libelle_operation=ecriture.libelle_operation,
        statut=ecriture.statut,
        reference_piece=ecriture.reference_piece,
        created_at=ecriture.created_at,
    )
    for position, ligne in enumerate(ecriture.lignes):
        orm_ecriture.lignes.append(LigneEcritureORM(
            id_ligne=ligne.id_ligne,
            compte_id=ligne.compte_id,
            montant_debit=ligne.montant_debit,
            montant_credit=ligne.montant_credit,
            position=position,
        ))
    return orm_ecriture


class SqlAlchemyLedgerRepository:
    """SQLAlchemy-backed journal entry repository and ledger views."""

    def __init__(self, db: Session):
        self._db = db

    # -------------------------------------------------------------------------
    # Entries
    # -------------------------------------------------------------------------

    def create(self, ecriture: Ecriture) -> Ecriture:
        """Persist an entry and its lines in one transaction."""
        orm_ecriture = ecriture_to_orm(ecriture)
        self._db.add(orm_ecriture)
        self._db.commit()
        self._db.refresh(orm_ecriture)
        return self._to_domain(orm_ecriture)

    def get_by_id(self, entreprise_id: str, id_ecriture: str) -> Optional[Ecriture]:
        """Retrieve a company entry with its lines."""
        orm_ecriture = self._db.query(EcritureORM).filter(
            EcritureORM.entreprise_id == entreprise_id,
            EcritureORM.id_ecriture == id_ecriture,
        ).first()
        return self._to_domain(orm_ecriture) if orm_ecriture else None

    def query(
        self,
        entreprise_id: str,
        exercice_id: Optional[str] = None,
        journal_id: Optional[str] = None,
        statut: Optional[StatutPiece] = None,
    ) -> list[Ecriture]:
        """List entries with filters, most recent first."""
        query = (
            self._db.query(EcritureORM)
            .options(selectinload(EcritureORM.lignes))
            .filter(EcritureORM.entreprise_id == entreprise_id)
        )
        if exercice_id:
            query = query.filter(EcritureORM.exercice_id == exercice_id)
        if journal_id:
            query = query.filter(EcritureORM.journal_id == journal_id)
        if statut is not None:
            query = query.filter(EcritureORM.statut == statut)
        orm_ecritures = query.order_by(
            EcritureORM.date_ecriture.desc(),
            EcritureORM.created_at.desc(),
        ).all()
        return [self._to_domain(e) for e in orm_ecritures]

    def update_status(self, entreprise_id: str, id_ecriture: str, statut: StatutPiece) -> Ecriture:
        """Change the status of an entry."""
        orm_ecriture = self._db.query(EcritureORM).filter(
            EcritureORM.entreprise_id == entreprise_id,
            EcritureORM.id_ecriture == id_ecriture,
        ).first()
        if orm_ecriture:
            orm_ecriture.statut = statut
            self._db.commit()
            self._db.refresh(orm_ecriture)
            return self._to_domain(orm_ecriture)
        raise ValueError(f"Ecriture not found: {id_ecriture}")

    def delete(self, entreprise_id: str, id_ecriture: str) -> None:
        """Delete an entry and its lines."""
        orm_ecriture = self._db.query(EcritureORM).filter(
            EcritureORM.entreprise_id == entreprise_id,
            EcritureORM.id_ecriture == id_ecriture,
        ).first()
        if orm_ecriture:
            self._db.delete(orm_ecriture)
            self._db.commit()

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def balance(self, entreprise_id: str, exercice_id: str) -> list[BalanceLine]:
        """Trial balance: per-account totals of validated lines (vue_balance)."""
        rows = (
            self._db.query(
                CompteORM.id_compte,
                CompteORM.numero_compte,
                CompteORM.libelle_compte,
                CompteORM.classe_compte,
                func.coalesce(func.sum(LigneEcritureORM.montant_debit), 0),
                func.coalesce(func.sum(LigneEcritureORM.montant_credit), 0),
            )
            .join(LigneEcritureORM, LigneEcritureORM.compte_id == CompteORM.id_compte)
            .join(EcritureORM, EcritureORM.id_ecriture == LigneEcritureORM.ecriture_id)
            .filter(
                EcritureORM.entreprise_id == entreprise_id,
                EcritureORM.exercice_id == exercice_id,
                EcritureORM.statut == StatutPiece.VALIDEE,
            )
            .group_by(
                CompteORM.id_compte,
                CompteORM.numero_compte,
                CompteORM.libelle_compte,
                CompteORM.classe_compte,
            )
            .order_by(CompteORM.numero_compte)
            .all()
        )
        return [
            BalanceLine(
                id_exercice=exercice_id,
                id_compte=id_compte,
                numero_compte=numero,
                libelle_compte=libelle,
                classe_compte=classe,
                total_debit=round_money(debit),
                total_credit=round_money(credit),
            )
            for id_compte, numero, libelle, classe, debit, credit in rows
        ]

    def grand_livre(
        self,
        entreprise_id: str,
        exercice_id: str,
        compte_id: Optional[str] = None,
    ) -> list[GrandLivreLine]:
        """General ledger lines with a running balance per account (vue_grandlivre)."""
        query = (
            self._db.query(LigneEcritureORM, EcritureORM, CompteORM, JournalORM)
            .join(EcritureORM, EcritureORM.id_ecriture == LigneEcritureORM.ecriture_id)
            .join(CompteORM, CompteORM.id_compte == LigneEcritureORM.compte_id)
            .join(JournalORM, JournalORM.id_journal == EcritureORM.journal_id)
            .filter(
                EcritureORM.entreprise_id == entreprise_id,
                EcritureORM.exercice_id == exercice_id,
                EcritureORM.statut == StatutPiece.VALIDEE,
            )
        )
        if compte_id:
            query = query.filter(LigneEcritureORM.compte_id == compte_id)
        rows = query.order_by(
            CompteORM.numero_compte,
            EcritureORM.date_ecriture,
            EcritureORM.created_at,
            LigneEcritureORM.position,
        ).all()

        lines: list[GrandLivreLine] = []
        running: dict[str, Decimal] = {}
        for ligne, ecriture, compte, journal in rows:
            debit = round_money(ligne.montant_debit)
            credit = round_money(ligne.montant_credit)
            solde = running.get(compte.id_compte, ZERO) + debit - credit
            running[compte.id_compte] = solde
            lines.append(GrandLivreLine(
                id_exercice=exercice_id,
                id_compte=compte.id_compte,
                numero_compte=compte.numero_compte,
                libelle_compte=compte.libelle_compte,
                date_ecriture=ecriture.date_ecriture,
                libelle_operation=ecriture.libelle_operation,
                montant_debit=debit,
                montant_credit=credit,
                reference_piece=ecriture.reference_piece,
                journal_code=journal.code_journal,
                solde_cumule=solde,
            ))
        return lines

    # -------------------------------------------------------------------------
    # Cross-tenant aggregates
    # -------------------------------------------------------------------------

    def activity_log(self, limit: int) -> list[ActivityLogEntry]:
        """Entry lines of every company, most recent first."""
        rows = (
            self._db.query(LigneEcritureORM, EcritureORM, CompteORM, JournalORM, EntrepriseORM)
            .join(EcritureORM, EcritureORM.id_ecriture == LigneEcritureORM.ecriture_id)
            .join(CompteORM, CompteORM.id_compte == LigneEcritureORM.compte_id)
            .join(JournalORM, JournalORM.id_journal == EcritureORM.journal_id)
            .join(EntrepriseORM, EntrepriseORM.id_entreprise == EcritureORM.entreprise_id)
            .order_by(
                EcritureORM.date_ecriture.desc(),
                EcritureORM.created_at.desc(),
                LigneEcritureORM.position,
            )
            .limit(limit)
            .all()
        )
        return [
            ActivityLogEntry(
                date_op=ecriture.date_ecriture,
                journal_code=journal.code_journal,
                libelle_op=ecriture.libelle_operation,
                montant_debit=round_money(ligne.montant_debit),
                montant_credit=round_money(ligne.montant_credit),
                nom_ent=entreprise.nom_entreprise,
                num_compte=compte.numero_compte,
                statut=ecriture.statut.value,
            )
            for ligne, ecriture, compte, journal, entreprise in rows
        ]

    def synthese(self) -> list[SyntheseLine]:
        """Validated totals per company and account class."""
        rows = (
            self._db.query(
                EntrepriseORM.id_entreprise,
                EntrepriseORM.nom_entreprise,
                CompteORM.classe_compte,
                func.coalesce(func.sum(LigneEcritureORM.montant_debit), 0),
                func.coalesce(func.sum(LigneEcritureORM.montant_credit), 0),
            )
            .join(EcritureORM, EcritureORM.entreprise_id == EntrepriseORM.id_entreprise)
            .join(LigneEcritureORM, LigneEcritureORM.ecriture_id == EcritureORM.id_ecriture)
            .join(CompteORM, CompteORM.id_compte == LigneEcritureORM.compte_id)
            .filter(EcritureORM.statut == StatutPiece.VALIDEE)
            .group_by(
                EntrepriseORM.id_entreprise,
                EntrepriseORM.nom_entreprise,
                CompteORM.classe_compte,
            )
            .order_by(EntrepriseORM.nom_entreprise, CompteORM.classe_compte)
            .all()
        )
        return [
            SyntheseLine(
                id_entreprise=id_entreprise,
                nom_entreprise=nom,
                classe_compte=classe,
                total_debit=round_money(debit),
                total_credit=round_money(credit),
            )
            for id_entreprise, nom, classe, debit, credit in rows
        ]

    @staticmethod
    def _to_domain(orm: EcritureORM) -> Ecriture:
        """Convert ORM model to domain model."""
        return Ecriture(
            id_ecriture=orm.id_ecriture,
            entreprise_id=orm.entreprise_id,
            exercice_id=orm.exercice_id,
            journal_id=orm.journal_id,
            date_ecriture=orm.date_ecriture,
            libelle_operation=orm.libelle_operation,
            statut=orm.statut,
            reference_piece=orm.reference_piece,
            created_at=orm.created_at,
            lignes=[
                LigneEcriture(
                    id_ligne=ligne.id_ligne,
                    ecriture_id=ligne.ecriture_id,
                    compte_id=ligne.compte_id,
                    montant_debit=ligne.montant_debit,
                    montant_credit=ligne.montant_credit,
                )
                for ligne in orm.lignes
            ],
        )
