"""View models for financial statements and the dashboard."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


def _zero() -> Decimal:
    return Decimal("0")


@dataclass
class Bilan:
    """SYSCOHADA balance sheet for one exercise."""

    actif_immobilise: Decimal = field(default_factory=_zero)
    actif_circulant: Decimal = field(default_factory=_zero)
    tresorerie_actif: Decimal = field(default_factory=_zero)
    capitaux_propres: Decimal = field(default_factory=_zero)
    dettes_long_terme: Decimal = field(default_factory=_zero)
    passif_circulant: Decimal = field(default_factory=_zero)
    tresorerie_passif: Decimal = field(default_factory=_zero)
    resultat: Decimal = field(default_factory=_zero)

    @property
    def total_actif(self) -> Decimal:
        return self.actif_immobilise + self.actif_circulant + self.tresorerie_actif

    @property
    def total_passif(self) -> Decimal:
        return (
            self.capitaux_propres
            + self.dettes_long_terme
            + self.passif_circulant
            + self.tresorerie_passif
        )


@dataclass
class CompteDeResultat:
    """SYSCOHADA income statement; intermediate results are derived."""

    ventes_marchandises: Decimal = field(default_factory=_zero)
    achats_marchandises: Decimal = field(default_factory=_zero)
    autres_produits_exploitation: Decimal = field(default_factory=_zero)
    autres_charges_exploitation: Decimal = field(default_factory=_zero)
    produits_financiers: Decimal = field(default_factory=_zero)
    charges_financieres: Decimal = field(default_factory=_zero)
    produits_hao: Decimal = field(default_factory=_zero)
    charges_hao: Decimal = field(default_factory=_zero)

    @property
    def marge_commerciale(self) -> Decimal:
        return self.ventes_marchandises - self.achats_marchandises

    @property
    def resultat_exploitation(self) -> Decimal:
        return (
            self.marge_commerciale
            + self.autres_produits_exploitation
            - self.autres_charges_exploitation
        )

    @property
    def resultat_financier(self) -> Decimal:
        return self.produits_financiers - self.charges_financieres

    @property
    def resultat_activites_ordinaires(self) -> Decimal:
        return self.resultat_exploitation + self.resultat_financier

    @property
    def resultat_hao(self) -> Decimal:
        return self.produits_hao - self.charges_hao

    @property
    def resultat_net(self) -> Decimal:
        return self.resultat_activites_ordinaires + self.resultat_hao


@dataclass
class DashboardKpis:
    """Headline figures for the open exercise."""

    id_exercice: str
    libelle_exercice: str
    chiffre_affaires: Decimal = field(default_factory=_zero)
    total_achats: Decimal = field(default_factory=_zero)
    resultat_net: Decimal = field(default_factory=_zero)
    tresorerie: Decimal = field(default_factory=_zero)
    factures_brouillon: int = 0


@dataclass
class ConfigurationCheck:
    """Missing journals/accounts required by automatic postings."""

    missing_journaux: list[str] = field(default_factory=list)
    missing_comptes: list[str] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return not self.missing_journaux and not self.missing_comptes
