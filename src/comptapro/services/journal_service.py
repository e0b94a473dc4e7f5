"""Journals and the accounting configuration check."""

import uuid

from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.domain.models import Journal
from comptapro.domain.views import ConfigurationCheck
from comptapro.repositories.protocols import ChartRepository, JournalRepository

# Journals created for every new company
DEFAULT_JOURNALS = [
    ("VT", "Ventes"),
    ("AC", "Achats"),
    ("BQ", "Banque"),
    ("OD", "Opérations Diverses"),
    ("PA", "Paie"),
]

# Journals and accounts that automatic postings rely on
REQUIRED_JOURNALS = ["VT", "AC", "OD", "BQ", "PA"]
REQUIRED_ACCOUNTS = ["445", "401", "411", "661", "664", "422", "431", "681", "701"]


class JournalService:
    """Service for company journals."""

    def __init__(self, journal_repo: JournalRepository, chart_repo: ChartRepository):
        self._journal_repo = journal_repo
        self._chart_repo = chart_repo

    def list_journals(self, entreprise_id: str) -> list[Journal]:
        return self._journal_repo.list_all(entreprise_id)

    def get_journal(self, entreprise_id: str, id_journal: str) -> Journal:
        journal = self._journal_repo.get_by_id(entreprise_id, id_journal)
        if not journal:
            raise NotFoundError("Journal", id_journal)
        return journal

    def create_journal(self, entreprise_id: str, code_journal: str, libelle_journal: str) -> Journal:
        """Create a journal; the code is stored trimmed and upper-cased."""
        code = (code_journal or "").strip().upper()
        libelle = (libelle_journal or "").strip()
        if not code or not libelle:
            raise ValidationError("Code et libellé obligatoires")
        if self._journal_repo.get_by_code(entreprise_id, code):
            raise ValidationError(f"Le journal {code} existe déjà.")
        return self._journal_repo.create(Journal(
            id_journal=str(uuid.uuid4()),
            code_journal=code,
            libelle_journal=libelle,
            entreprise_id=entreprise_id,
        ))

    def create_default_journals(self, entreprise_id: str) -> list[Journal]:
        """Create the standard journals the company does not have yet."""
        created = []
        for code, libelle in DEFAULT_JOURNALS:
            if not self._journal_repo.get_by_code(entreprise_id, code):
                created.append(self.create_journal(entreprise_id, code, libelle))
        return created

    def check_configuration(self, entreprise_id: str) -> ConfigurationCheck:
        """List the required journals and accounts missing from the company."""
        codes = {j.code_journal for j in self._journal_repo.list_all(entreprise_id)}
        missing_journaux = [code for code in REQUIRED_JOURNALS if code not in codes]
        missing_comptes = [
            numero for numero in REQUIRED_ACCOUNTS
            if not self._chart_repo.get_account_by_numero(entreprise_id, numero)
        ]

        check = ConfigurationCheck(missing_journaux=missing_journaux, missing_comptes=missing_comptes)
        if not check.is_complete:
            parts = []
            if missing_journaux:
                parts.append("journaux " + ", ".join(missing_journaux))
            if missing_comptes:
                parts.append("comptes " + ", ".join(missing_comptes))
            check.message = "Configuration incomplète : " + " ; ".join(parts)
        return check
