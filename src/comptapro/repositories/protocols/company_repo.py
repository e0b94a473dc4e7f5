"""Company repository protocol."""

from typing import Protocol, Optional

from comptapro.domain.models import Entreprise, Plan


class CompanyRepository(Protocol):
    """Interface for company and subscription plan data access."""

    def create(self, entreprise: Entreprise) -> Entreprise:
        """Persist a new company."""
        ...

    def get_by_id(self, entreprise_id: str) -> Optional[Entreprise]:
        """Retrieve company by ID."""
        ...

    def list_all(self) -> list[Entreprise]:
        """List all companies."""
        ...

    def update(self, entreprise: Entreprise) -> Entreprise:
        """Update an existing company."""
        ...

    def member_counts(self) -> dict[str, int]:
        """Number of profiles per company."""
        ...

    def list_plans(self) -> list[Plan]:
        """List subscription plans."""
        ...

    def get_plan(self, id_plan: int) -> Optional[Plan]:
        """Retrieve a plan by ID."""
        ...

    def update_plan(self, plan: Plan) -> Plan:
        """Update a plan."""
        ...
