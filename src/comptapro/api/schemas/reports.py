"""Pydantic schemas for financial statements and the dashboard."""

from decimal import Decimal

from pydantic import BaseModel


class BilanResponse(BaseModel):
    """Response schema for get_bilan."""

    model_config = {"from_attributes": True}

    actif_immobilise: Decimal
    actif_circulant: Decimal
    tresorerie_actif: Decimal
    total_actif: Decimal
    capitaux_propres: Decimal
    dettes_long_terme: Decimal
    passif_circulant: Decimal
    tresorerie_passif: Decimal
    total_passif: Decimal
    resultat: Decimal


class CompteDeResultatResponse(BaseModel):
    """Response schema for get_compte_de_resultat."""

    model_config = {"from_attributes": True}

    ventes_marchandises: Decimal
    achats_marchandises: Decimal
    marge_commerciale: Decimal
    autres_produits_exploitation: Decimal
    autres_charges_exploitation: Decimal
    resultat_exploitation: Decimal
    produits_financiers: Decimal
    charges_financieres: Decimal
    resultat_financier: Decimal
    resultat_activites_ordinaires: Decimal
    produits_hao: Decimal
    charges_hao: Decimal
    resultat_hao: Decimal
    resultat_net: Decimal


class DashboardResponse(BaseModel):
    """Response schema for the dashboard KPIs."""

    model_config = {"from_attributes": True}

    id_exercice: str
    libelle_exercice: str
    chiffre_affaires: Decimal
    total_achats: Decimal
    resultat_net: Decimal
    tresorerie: Decimal
    factures_brouillon: int
