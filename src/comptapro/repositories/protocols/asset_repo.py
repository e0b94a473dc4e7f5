"""Fixed asset repository protocol."""

from typing import Protocol, Optional

from comptapro.domain.models import DotationAmortissement, Ecriture, Immobilisation


class AssetRepository(Protocol):
    """Interface for fixed assets and depreciation allowances."""

    def create(self, immobilisation: Immobilisation) -> Immobilisation:
        ...

    def get_by_id(self, entreprise_id: str, id_immo: str) -> Optional[Immobilisation]:
        ...

    def list_all(self, entreprise_id: str) -> list[Immobilisation]:
        ...

    def get_dotation(self, immo_id: str, exercice_id: str) -> Optional[DotationAmortissement]:
        ...

    def create_dotation(
        self, dotation: DotationAmortissement, ecriture: Ecriture
    ) -> DotationAmortissement:
        ...

    def list_dotations(self, immo_id: str) -> list[DotationAmortissement]:
        ...
