"""Domain models package."""

from comptapro.domain.models.enums import (
    Role,
    StatutExercice,
    StatutPiece,
    TypeDocument,
    TypeTiers,
    TypeMouvement,
    AuthEvent,
)
from comptapro.domain.models.company import (
    Plan,
    Entreprise,
    User,
    Profil,
    DEFAULT_COMPANY_NAME,
    DEFAULT_PLAN_ID,
)
from comptapro.domain.models.chart import (
    CompteModele,
    Compte,
    Journal,
    Exercice,
    classe_from_numero,
)
from comptapro.domain.models.ledger import Ecriture, LigneEcriture
from comptapro.domain.models.invoice import Tiers, Facture, FactureLigne
from comptapro.domain.models.asset import Immobilisation, DotationAmortissement
from comptapro.domain.models.payroll import Employe, BulletinPaie
from comptapro.domain.models.stock import Article, MouvementStock

__all__ = [
    "Role",
    "StatutExercice",
    "StatutPiece",
    "TypeDocument",
    "TypeTiers",
    "TypeMouvement",
    "AuthEvent",
    "Plan",
    "Entreprise",
    "User",
    "Profil",
    "DEFAULT_COMPANY_NAME",
    "DEFAULT_PLAN_ID",
    "CompteModele",
    "Compte",
    "Journal",
    "Exercice",
    "classe_from_numero",
    "Ecriture",
    "LigneEcriture",
    "Tiers",
    "Facture",
    "FactureLigne",
    "Immobilisation",
    "DotationAmortissement",
    "Employe",
    "BulletinPaie",
    "Article",
    "MouvementStock",
]
