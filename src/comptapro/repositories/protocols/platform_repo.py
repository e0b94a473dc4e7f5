"""Platform maintenance repository protocol."""

from typing import Protocol

from comptapro.domain.views import PlatformStat


class PlatformRepository(Protocol):
    """Interface for cross-tenant statistics and tenant deletion."""

    def table_row_counts(self) -> list[PlatformStat]:
        ...

    def delete_company(self, entreprise_id: str) -> None:
        """Delete a company and everything it owns."""
        ...
