"""Journal repository protocol."""

from typing import Protocol, Optional

from comptapro.domain.models import Journal


class JournalRepository(Protocol):
    """Interface for journal data access."""

    def create(self, journal: Journal) -> Journal:
        ...

    def get_by_id(self, entreprise_id: str, id_journal: str) -> Optional[Journal]:
        ...

    def get_by_code(self, entreprise_id: str, code_journal: str) -> Optional[Journal]:
        ...

    def list_all(self, entreprise_id: str) -> list[Journal]:
        ...
