"""Enumerations for domain models."""

from enum import Enum


class Role(str, Enum):
    """Member roles inside a company."""

    ADMIN_ENTITE = "admin_entite"
    COMPTABLE = "comptable"
    GESTIONNAIRE = "gestionnaire"
    UTILISATEUR = "utilisateur"

    @property
    def label(self) -> str:
        """Display label used by the front end."""
        return {
            Role.ADMIN_ENTITE: "Admin",
            Role.COMPTABLE: "Comptable",
            Role.GESTIONNAIRE: "Directeur",
            Role.UTILISATEUR: "Utilisateur",
        }[self]


class StatutExercice(str, Enum):
    """Accounting period status."""

    OUVERT = "Ouvert"
    CLOTURE = "Cloture"


class StatutPiece(str, Enum):
    """Status shared by entries, invoices and payslips."""

    BROUILLON = "Brouillon"
    VALIDEE = "Validee"


class TypeDocument(str, Enum):
    """Invoice direction."""

    VENTE = "VENTE"
    ACHAT = "ACHAT"


class TypeTiers(str, Enum):
    """Third-party kind."""

    CLIENT = "Client"
    FOURNISSEUR = "Fournisseur"


class TypeMouvement(str, Enum):
    """Stock movement direction."""

    ENTREE = "entree"
    SORTIE = "sortie"


class AuthEvent(str, Enum):
    """Events published to auth state subscribers."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
