"""CSV export of the ledger views and the activity log."""

import csv
import io
from pathlib import Path
from typing import Optional

from comptapro.config.settings import get_settings
from comptapro.domain.views import ActivityLogEntry
from comptapro.services.ledger_service import LedgerService

BALANCE_COLUMNS = [
    "numero_compte",
    "libelle_compte",
    "classe_compte",
    "total_debit",
    "total_credit",
    "solde_debit",
    "solde_credit",
]

GRAND_LIVRE_COLUMNS = [
    "numero_compte",
    "libelle_compte",
    "date_ecriture",
    "journal",
    "reference_piece",
    "libelle_operation",
    "montant_debit",
    "montant_credit",
    "solde_cumule",
]

ACTIVITY_LOG_COLUMNS = [
    "date_op",
    "nom_ent",
    "journal_code",
    "num_compte",
    "libelle_op",
    "montant_debit",
    "montant_credit",
    "statut",
]


def _render(columns: list[str], rows: list[dict]) -> str:
    # Semicolon separated, as expected by French spreadsheet locales
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, delimiter=";")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def activity_log_csv(entries: list[ActivityLogEntry]) -> str:
    """Render the cross-tenant activity log."""
    return _render(ACTIVITY_LOG_COLUMNS, [
        {
            "date_op": entry.date_op.isoformat(),
            "nom_ent": entry.nom_ent,
            "journal_code": entry.journal_code,
            "num_compte": entry.num_compte,
            "libelle_op": entry.libelle_op,
            "montant_debit": str(entry.montant_debit),
            "montant_credit": str(entry.montant_credit),
            "statut": entry.statut,
        }
        for entry in entries
    ])


class CsvExporter:
    """
    CSV exporter for a company's trial balance and general ledger.

    Rendering returns the CSV text; export_to_file() writes it under a path.
    """

    def __init__(self, ledger_service: LedgerService):
        self._ledger = ledger_service

    def balance_csv(self, entreprise_id: str, exercice_id: str) -> str:
        lines = self._ledger.get_balance(entreprise_id, exercice_id)
        return _render(BALANCE_COLUMNS, [
            {
                "numero_compte": line.numero_compte,
                "libelle_compte": line.libelle_compte,
                "classe_compte": line.classe_compte,
                "total_debit": str(line.total_debit),
                "total_credit": str(line.total_credit),
                "solde_debit": str(line.solde_debit),
                "solde_credit": str(line.solde_credit),
            }
            for line in lines
        ])

    def grand_livre_csv(
        self,
        entreprise_id: str,
        exercice_id: str,
        compte_id: Optional[str] = None,
    ) -> str:
        lines = self._ledger.get_grand_livre(entreprise_id, exercice_id, compte_id=compte_id)
        return _render(GRAND_LIVRE_COLUMNS, [
            {
                "numero_compte": line.numero_compte,
                "libelle_compte": line.libelle_compte,
                "date_ecriture": line.date_ecriture.isoformat(),
                "journal": line.journal_code or "",
                "reference_piece": line.reference_piece or "",
                "libelle_operation": line.libelle_operation,
                "montant_debit": str(line.montant_debit),
                "montant_credit": str(line.montant_credit),
                "solde_cumule": str(line.solde_cumule),
            }
            for line in lines
        ])

    @staticmethod
    def export_to_file(path: str, content: str) -> Path:
        """
        Write rendered CSV content to a file, creating parent directories.

        A relative path is resolved against the configured export directory.
        """
        file_path = Path(path)
        if not file_path.is_absolute():
            file_path = get_settings().get_export_dir() / file_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
            csvfile.write(content)
        return file_path
