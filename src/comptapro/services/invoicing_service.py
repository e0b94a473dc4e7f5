"""Sales and purchase invoicing with automatic posting."""

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from comptapro.config.settings import get_settings
from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.core.money import ZERO, round_money, to_decimal
from comptapro.core.timezone import now_local
from comptapro.domain.models import (
    Facture,
    FactureLigne,
    StatutPiece,
    Tiers,
    TypeDocument,
    TypeTiers,
)
from comptapro.repositories.protocols import (
    ChartRepository,
    ExerciseRepository,
    InvoiceRepository,
    JournalRepository,
    LedgerRepository,
)
from comptapro.services.exercise_service import ExerciseService
from comptapro.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

NUMERO_PREFIXES = {
    TypeDocument.VENTE: "FAC",
    TypeDocument.ACHAT: "ACH",
}

# Accounts of the automatic postings
COMPTE_CLIENTS = "411"
COMPTE_FOURNISSEURS = "401"
COMPTE_VENTES = "701"
COMPTE_TVA_FACTUREE = "443"
COMPTE_TVA_RECUPERABLE = "445"

JOURNAUX = {
    TypeDocument.VENTE: "VT",
    TypeDocument.ACHAT: "AC",
}


@dataclass
class FactureLigneCreate:
    """Input data for one invoice line."""

    description: str = ""
    quantite: Decimal = Decimal("1")
    prix_unitaire_ht: Decimal = Decimal("0")
    taux_tva: Optional[Decimal] = None
    compte_id: Optional[str] = None


@dataclass
class FactureCreate:
    """Input data for a sales or purchase invoice."""

    tiers_id: Optional[str]
    exercice_id: Optional[str]
    date_facture: date
    lignes: list[FactureLigneCreate] = field(default_factory=list)
    numero_facture: Optional[str] = None
    date_echeance: Optional[date] = None
    statut: StatutPiece = StatutPiece.BROUILLON


def compute_totals(lignes: list[FactureLigne]) -> tuple[Decimal, Decimal, Decimal]:
    """(HT, TVA, TTC) of invoice lines, rounded to the cent."""
    montant_ht = sum((ligne.total_ht for ligne in lignes), ZERO)
    montant_tva = round_money(sum(
        (ligne.total_ht * ligne.taux_tva / Decimal("100") for ligne in lignes),
        ZERO,
    ))
    montant_ht = round_money(montant_ht)
    return montant_ht, montant_tva, montant_ht + montant_tva


class InvoicingService:
    """
    Service for third parties, invoices and their postings.

    A validated sales invoice posts in VT (debit 411, credit 701 or the
    line account, credit 443); a validated purchase invoice posts in AC
    (debit the line accounts, debit 445, credit 401).
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        ledger_repo: LedgerRepository,
        chart_repo: ChartRepository,
        journal_repo: JournalRepository,
        exercise_repo: ExerciseRepository,
    ):
        self._invoice_repo = invoice_repo
        self._chart_repo = chart_repo
        self._ledger = LedgerService(ledger_repo, chart_repo, journal_repo, exercise_repo)
        self._exercises = ExerciseService(exercise_repo)

    # -------------------------------------------------------------------------
    # Third parties
    # -------------------------------------------------------------------------

    def create_tiers(self, entreprise_id: str, nom_tiers: str, type_tiers: TypeTiers) -> Tiers:
        nom = (nom_tiers or "").strip()
        if not nom:
            raise ValidationError("Le nom du tiers est obligatoire.")
        return self._invoice_repo.create_tiers(Tiers(
            id_tiers=str(uuid.uuid4()),
            nom_tiers=nom,
            type_tiers=TypeTiers(type_tiers),
            entreprise_id=entreprise_id,
        ))

    def list_tiers(self, entreprise_id: str, type_tiers: Optional[TypeTiers] = None) -> list[Tiers]:
        return self._invoice_repo.list_tiers(entreprise_id, type_tiers=type_tiers)

    # -------------------------------------------------------------------------
    # Invoices
    # -------------------------------------------------------------------------

    def next_numero(self, entreprise_id: str, type_document: TypeDocument, year: int) -> str:
        """Next free number, e.g. FAC-2024-0003."""
        prefix = f"{NUMERO_PREFIXES[TypeDocument(type_document)]}-{year}-"
        last = 0
        for numero in self._invoice_repo.list_numeros(entreprise_id, prefix):
            suffix = numero.rsplit("-", 1)[-1]
            if suffix.isdigit():
                last = max(last, int(suffix))
        return f"{prefix}{last + 1:04d}"

    def create_facture(
        self,
        entreprise_id: str,
        type_document: TypeDocument,
        data: FactureCreate,
    ) -> Facture:
        """
        Create an invoice, posting it at once when statut is Validee.

        Args:
            entreprise_id: Company of the caller
            type_document: VENTE or ACHAT
            data: Invoice header and lines

        Returns:
            Created Facture
        """
        type_document = TypeDocument(type_document)
        is_sale = type_document == TypeDocument.VENTE
        if not data.tiers_id or not data.exercice_id:
            raise ValidationError(
                "Client, numéro et exercice obligatoires" if is_sale
                else "Fournisseur, numéro et exercice obligatoires"
            )

        tiers = self._invoice_repo.get_tiers(entreprise_id, data.tiers_id)
        if not tiers:
            raise NotFoundError("Tiers", data.tiers_id)
        expected = TypeTiers.CLIENT if is_sale else TypeTiers.FOURNISSEUR
        if tiers.type_tiers != expected:
            raise ValidationError(f"Le tiers {tiers.nom_tiers} n'est pas un {expected.value.lower()}.")

        exercice = self._exercises.require_open(entreprise_id, data.exercice_id)
        if not exercice.contains(data.date_facture):
            raise ValidationError(
                f"La date de la facture doit être comprise dans l'exercice {exercice.libelle}."
            )

        numero = (data.numero_facture or "").strip() or self.next_numero(
            entreprise_id, type_document, data.date_facture.year
        )
        if self._invoice_repo.get_by_numero(entreprise_id, numero):
            raise ValidationError(f"Le numéro de facture {numero} existe déjà.")

        lignes = self._build_lines(entreprise_id, type_document, data.lignes)
        montant_ht, montant_tva, montant_ttc = compute_totals(lignes)

        statut = StatutPiece(data.statut)
        if statut == StatutPiece.VALIDEE:
            self._require_posting_setup(entreprise_id, type_document)

        facture = self._invoice_repo.create(Facture(
            id_facture=str(uuid.uuid4()),
            entreprise_id=entreprise_id,
            tiers_id=tiers.id_tiers,
            exercice_id=exercice.id_exercice,
            numero_facture=numero,
            date_facture=data.date_facture,
            date_echeance=data.date_echeance,
            type_document=type_document,
            montant_ht=montant_ht,
            montant_tva=montant_tva,
            montant_ttc=montant_ttc,
            statut=StatutPiece.BROUILLON,
            lignes=lignes,
            created_at=now_local(),
        ))
        logger.info("Created %s invoice %s (TTC %s)", type_document.value, numero, montant_ttc)

        if statut == StatutPiece.VALIDEE:
            return self.validate_facture(entreprise_id, facture.id_facture)
        return facture

    def get_facture(self, entreprise_id: str, id_facture: str) -> Facture:
        facture = self._invoice_repo.get_by_id(entreprise_id, id_facture)
        if not facture:
            raise NotFoundError("Facture", id_facture)
        return facture

    def list_factures(
        self,
        entreprise_id: str,
        type_document: Optional[TypeDocument] = None,
        exercice_id: Optional[str] = None,
        statut: Optional[StatutPiece] = None,
    ) -> list[Facture]:
        return self._invoice_repo.query(
            entreprise_id,
            type_document=type_document,
            exercice_id=exercice_id,
            statut=statut,
        )

    def validate_facture(self, entreprise_id: str, id_facture: str) -> Facture:
        """Post a draft invoice and mark it validated."""
        facture = self.get_facture(entreprise_id, id_facture)
        if facture.statut == StatutPiece.VALIDEE:
            raise ValidationError(f"La facture {facture.numero_facture} est déjà validée.")

        tiers = self._invoice_repo.get_tiers(entreprise_id, facture.tiers_id)
        nom_tiers = tiers.nom_tiers if tiers else ""
        if facture.type_document == TypeDocument.VENTE:
            libelle = f"Facture {facture.numero_facture} {nom_tiers}".strip()
        else:
            libelle = f"Achat {facture.numero_facture} {nom_tiers}".strip()

        ecriture = self._ledger.post_validated(
            entreprise_id,
            facture.exercice_id,
            JOURNAUX[facture.type_document],
            facture.date_facture,
            libelle,
            self._posting_lines(entreprise_id, facture),
            reference_piece=facture.numero_facture,
        )
        return self._invoice_repo.mark_validated(entreprise_id, id_facture, ecriture.id_ecriture)

    def delete_facture(self, entreprise_id: str, id_facture: str) -> None:
        """Delete a draft invoice."""
        facture = self.get_facture(entreprise_id, id_facture)
        if facture.statut == StatutPiece.VALIDEE:
            raise ValidationError("Une facture validée ne peut pas être supprimée.")
        self._invoice_repo.delete(entreprise_id, id_facture)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _build_lines(
        self,
        entreprise_id: str,
        type_document: TypeDocument,
        lignes: list[FactureLigneCreate],
    ) -> list[FactureLigne]:
        default_rate = get_settings().default_vat_rate
        built = []
        for ligne in lignes:
            description = (ligne.description or "").strip()
            prix = to_decimal(ligne.prix_unitaire_ht)
            # Purchase lines carry one amount HT on an expense account
            quantite = Decimal("1") if type_document == TypeDocument.ACHAT else to_decimal(ligne.quantite)
            if not description or quantite <= ZERO or prix <= ZERO:
                continue
            if type_document == TypeDocument.ACHAT and not ligne.compte_id:
                continue
            if ligne.compte_id:
                self._check_line_account(entreprise_id, type_document, ligne.compte_id)
            taux = default_rate if ligne.taux_tva is None else to_decimal(ligne.taux_tva)
            if taux < ZERO:
                raise ValidationError("Le taux de TVA doit être positif.")
            built.append(FactureLigne(
                id_ligne=str(uuid.uuid4()),
                description=description,
                quantite=quantite,
                prix_unitaire_ht=prix,
                taux_tva=taux,
                total_ht=round_money(quantite * prix),
                compte_id=ligne.compte_id,
            ))
        if not built:
            raise ValidationError("Au moins une ligne valide requise")
        return built

    def _check_line_account(self, entreprise_id: str, type_document: TypeDocument, compte_id: str) -> None:
        compte = self._chart_repo.get_account(entreprise_id, compte_id)
        if not compte:
            raise NotFoundError("Compte", compte_id)
        if type_document == TypeDocument.ACHAT and compte.classe_compte != 6:
            raise ValidationError(
                f"Le compte {compte.numero_compte} n'est pas un compte de charge (classe 6)."
            )
        if type_document == TypeDocument.VENTE and compte.classe_compte != 7:
            raise ValidationError(
                f"Le compte {compte.numero_compte} n'est pas un compte de produit (classe 7)."
            )

    def _require_posting_setup(self, entreprise_id: str, type_document: TypeDocument) -> None:
        self._ledger.require_journal(entreprise_id, JOURNAUX[type_document])
        if type_document == TypeDocument.VENTE:
            numeros = [COMPTE_CLIENTS, COMPTE_VENTES, COMPTE_TVA_FACTUREE]
        else:
            numeros = [COMPTE_FOURNISSEURS, COMPTE_TVA_RECUPERABLE]
        for numero in numeros:
            self._ledger.require_account(entreprise_id, numero)

    def _posting_lines(self, entreprise_id: str, facture: Facture) -> list[tuple[str, Decimal, Decimal]]:
        # HT amounts grouped by account, in line order
        par_compte: "OrderedDict[str, Decimal]" = OrderedDict()
        is_sale = facture.type_document == TypeDocument.VENTE
        compte_ventes = None
        for ligne in facture.lignes:
            compte_id = ligne.compte_id
            if compte_id is None:
                if compte_ventes is None:
                    compte_ventes = self._ledger.require_account(entreprise_id, COMPTE_VENTES).id_compte
                compte_id = compte_ventes
            par_compte[compte_id] = par_compte.get(compte_id, ZERO) + ligne.total_ht

        if is_sale:
            clients = self._ledger.require_account(entreprise_id, COMPTE_CLIENTS)
            tva = self._ledger.require_account(entreprise_id, COMPTE_TVA_FACTUREE)
            mouvements = [(clients.id_compte, facture.montant_ttc, ZERO)]
            mouvements += [(compte_id, ZERO, montant) for compte_id, montant in par_compte.items()]
            mouvements.append((tva.id_compte, ZERO, facture.montant_tva))
        else:
            fournisseurs = self._ledger.require_account(entreprise_id, COMPTE_FOURNISSEURS)
            tva = self._ledger.require_account(entreprise_id, COMPTE_TVA_RECUPERABLE)
            mouvements = [(compte_id, montant, ZERO) for compte_id, montant in par_compte.items()]
            mouvements.append((tva.id_compte, facture.montant_tva, ZERO))
            mouvements.append((fournisseurs.id_compte, ZERO, facture.montant_ttc))
        return mouvements
