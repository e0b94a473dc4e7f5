"""SYSCOHADA financial statements and dashboard figures.

Both statements are computed from the trial balance of validated entries.
Income statement rubrics by account prefix:

    ventes de marchandises      701
    achats de marchandises      601, 6031
    produits financiers         77, 787, 797
    charges financières         67, 697
    autres produits / charges   rest of classes 7 / 6
    produits HAO                82, 84, 86, 88
    charges HAO                 rest of class 8

Products are credit minus debit, charges debit minus credit.
"""

from decimal import Decimal

from comptapro.core.money import ZERO
from comptapro.domain.models import StatutPiece, TypeDocument
from comptapro.domain.views import BalanceLine, Bilan, CompteDeResultat, DashboardKpis
from comptapro.repositories.protocols import (
    ExerciseRepository,
    InvoiceRepository,
    LedgerRepository,
)
from comptapro.services.exercise_service import ExerciseService

VENTES_PREFIXES = ("701",)
ACHATS_PREFIXES = ("601", "6031")
PRODUITS_FINANCIERS_PREFIXES = ("77", "787", "797")
CHARGES_FINANCIERES_PREFIXES = ("67", "697")
PRODUITS_HAO_PREFIXES = ("82", "84", "86", "88")
TRESORERIE_PREFIXES = ("52", "57")


def compute_compte_de_resultat(balance: list[BalanceLine]) -> CompteDeResultat:
    """Income statement from trial balance lines."""
    cr = CompteDeResultat()
    for line in balance:
        numero = line.numero_compte
        produit = line.total_credit - line.total_debit
        charge = line.total_debit - line.total_credit
        if line.classe_compte == 7:
            if numero.startswith(VENTES_PREFIXES):
                cr.ventes_marchandises += produit
            elif numero.startswith(PRODUITS_FINANCIERS_PREFIXES):
                cr.produits_financiers += produit
            else:
                cr.autres_produits_exploitation += produit
        elif line.classe_compte == 6:
            if numero.startswith(ACHATS_PREFIXES):
                cr.achats_marchandises += charge
            elif numero.startswith(CHARGES_FINANCIERES_PREFIXES):
                cr.charges_financieres += charge
            else:
                cr.autres_charges_exploitation += charge
        elif line.classe_compte == 8:
            if numero.startswith(PRODUITS_HAO_PREFIXES):
                cr.produits_hao += produit
            else:
                cr.charges_hao += charge
    return cr


def compute_bilan(balance: list[BalanceLine]) -> Bilan:
    """
    Balance sheet from trial balance lines.

    Class 2 is taken net (28x and 29x reduce it); classes 3 to 5 split into
    debit balances (actif) and credit balances (passif); class 1 splits into
    equity (10 to 15) and long-term debt (16 to 19). The result of classes
    6 to 8 is added to equity, so a balanced ledger gives equal totals.
    """
    bilan = Bilan()
    for line in balance:
        classe = line.classe_compte
        if classe == 1:
            montant = line.total_credit - line.total_debit
            if line.numero_compte[1:2] in ("6", "7", "8", "9"):
                bilan.dettes_long_terme += montant
            else:
                bilan.capitaux_propres += montant
        elif classe == 2:
            bilan.actif_immobilise += line.solde
        elif classe in (3, 4):
            bilan.actif_circulant += line.solde_debit
            bilan.passif_circulant += line.solde_credit
        elif classe == 5:
            bilan.tresorerie_actif += line.solde_debit
            bilan.tresorerie_passif += line.solde_credit

    bilan.resultat = compute_compte_de_resultat(balance).resultat_net
    bilan.capitaux_propres += bilan.resultat
    return bilan


class ReportingService:
    """Service for the bilan, the compte de résultat and the dashboard."""

    def __init__(
        self,
        ledger_repo: LedgerRepository,
        invoice_repo: InvoiceRepository,
        exercise_repo: ExerciseRepository,
    ):
        self._ledger_repo = ledger_repo
        self._invoice_repo = invoice_repo
        self._exercises = ExerciseService(exercise_repo)

    def get_bilan(self, entreprise_id: str, exercice_id: str) -> Bilan:
        self._exercises.get_exercice(entreprise_id, exercice_id)
        return compute_bilan(self._ledger_repo.balance(entreprise_id, exercice_id))

    def get_compte_de_resultat(self, entreprise_id: str, exercice_id: str) -> CompteDeResultat:
        self._exercises.get_exercice(entreprise_id, exercice_id)
        return compute_compte_de_resultat(self._ledger_repo.balance(entreprise_id, exercice_id))

    def get_dashboard(self, entreprise_id: str) -> DashboardKpis:
        """KPIs of the most recent open exercise."""
        exercice = self._exercises.get_current_open(entreprise_id)
        balance = self._ledger_repo.balance(entreprise_id, exercice.id_exercice)
        factures = self._invoice_repo.query(entreprise_id, exercice_id=exercice.id_exercice)

        def total_ttc(type_document: TypeDocument) -> Decimal:
            return sum(
                (f.montant_ttc for f in factures
                 if f.type_document == type_document and f.statut == StatutPiece.VALIDEE),
                ZERO,
            )

        tresorerie = sum(
            (line.solde_debit - line.solde_credit for line in balance
             if line.numero_compte.startswith(TRESORERIE_PREFIXES)),
            ZERO,
        )
        return DashboardKpis(
            id_exercice=exercice.id_exercice,
            libelle_exercice=exercice.libelle,
            chiffre_affaires=total_ttc(TypeDocument.VENTE),
            total_achats=total_ttc(TypeDocument.ACHAT),
            resultat_net=compute_compte_de_resultat(balance).resultat_net,
            tresorerie=tresorerie,
            factures_brouillon=sum(1 for f in factures if f.statut == StatutPiece.BROUILLON),
        )
