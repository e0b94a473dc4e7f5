"""SQLAlchemy ORM model definitions.

Table and column names follow the French relational contract consumed by
the bookkeeping front end (entreprises, exercicescomptables, ecritures...).
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Integer,
    Date,
    DateTime,
    Text,
    ForeignKey,
    Numeric,
    UniqueConstraint,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from comptapro.repositories.sqlalchemy.database import Base
from comptapro.domain.models.enums import (
    Role,
    StatutExercice,
    StatutPiece,
    TypeDocument,
    TypeTiers,
    TypeMouvement,
)

MONEY = Numeric(precision=18, scale=2)
QUANTITY = Numeric(precision=18, scale=3)


# =============================================================================
# TENANTS & IDENTITY
# =============================================================================


class PlanORM(Base):
    """Subscription plan."""

    __tablename__ = "plans"

    id_plan = Column(Integer, primary_key=True)
    nom_plan = Column(String(50), nullable=False)
    niveau = Column(Integer, nullable=False)
    prix_mensuel = Column(MONEY, nullable=False, default=Decimal("0"))


class EntrepriseORM(Base):
    """Tenant company."""

    __tablename__ = "entreprises"

    id_entreprise = Column(String(36), primary_key=True)
    nom_entreprise = Column(String(255), nullable=False)
    plan_id = Column(Integer, ForeignKey("plans.id_plan"), nullable=False, default=1)
    date_creation = Column(DateTime, nullable=False, default=datetime.utcnow)

    plan = relationship("PlanORM")
    profils = relationship("ProfilORM", back_populates="entreprise")


class UserORM(Base):
    """Identity store (email/password)."""

    __tablename__ = "utilisateurs"

    user_id = Column(String(36), primary_key=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    token_version = Column(Integer, nullable=False, default=0)


class ProfilORM(Base):
    """User profile and membership."""

    __tablename__ = "profilsutilisateurs"

    id_profil = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("utilisateurs.user_id"), unique=True, nullable=False)
    email = Column(String(255), nullable=False)
    nom = Column(String(100), nullable=True)
    prenom = Column(String(100), nullable=True)
    role = Column(SqlEnum(Role), nullable=False, default=Role.UTILISATEUR)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=True)

    entreprise = relationship("EntrepriseORM", back_populates="profils")


class SuperAdminORM(Base):
    """Platform super administrators."""

    __tablename__ = "superadmins"

    user_id = Column(String(36), ForeignKey("utilisateurs.user_id"), primary_key=True)


# =============================================================================
# CHART OF ACCOUNTS, JOURNALS, EXERCISES
# =============================================================================


class CompteModeleORM(Base):
    """SYSCOHADA master plan shared by all tenants."""

    __tablename__ = "plansyscoamodele"

    id_modele = Column(String(36), primary_key=True)
    numero_compte = Column(String(20), unique=True, nullable=False)
    libelle_compte = Column(String(255), nullable=False)
    classe_compte = Column(Integer, nullable=False)


class CompteORM(Base):
    """Company chart of accounts."""

    __tablename__ = "plancomptableentreprise"
    __table_args__ = (UniqueConstraint("entreprise_id", "numero_compte"),)

    id_compte = Column(String(36), primary_key=True)
    numero_compte = Column(String(20), nullable=False)
    libelle_compte = Column(String(255), nullable=False)
    classe_compte = Column(Integer, nullable=False)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)


class JournalORM(Base):
    """Company journals."""

    __tablename__ = "journaux"
    __table_args__ = (UniqueConstraint("entreprise_id", "code_journal"),)

    id_journal = Column(String(36), primary_key=True)
    code_journal = Column(String(10), nullable=False)
    libelle_journal = Column(String(255), nullable=False)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)


class ExerciceORM(Base):
    """Accounting periods."""

    __tablename__ = "exercicescomptables"

    id_exercice = Column(String(36), primary_key=True)
    libelle = Column(String(100), nullable=False)
    date_debut = Column(Date, nullable=False)
    date_fin = Column(Date, nullable=False)
    statut = Column(SqlEnum(StatutExercice), nullable=False, default=StatutExercice.OUVERT)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)


# =============================================================================
# JOURNAL ENTRIES
# =============================================================================


class EcritureORM(Base):
    """Journal entry header."""

    __tablename__ = "ecritures"

    id_ecriture = Column(String(36), primary_key=True)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)
    exercice_id = Column(String(36), ForeignKey("exercicescomptables.id_exercice"), nullable=False)
    journal_id = Column(String(36), ForeignKey("journaux.id_journal"), nullable=False)
    date_ecriture = Column(Date, nullable=False)
    libelle_operation = Column(String(255), nullable=False)
    statut = Column(SqlEnum(StatutPiece), nullable=False, default=StatutPiece.BROUILLON)
    reference_piece = Column(String(100), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    journal = relationship("JournalORM")
    lignes = relationship(
        "LigneEcritureORM",
        back_populates="ecriture",
        cascade="all, delete-orphan",
        order_by="LigneEcritureORM.position",
    )


class LigneEcritureORM(Base):
    """Journal entry line."""

    __tablename__ = "lignesecriture"

    id_ligne = Column(String(36), primary_key=True)
    ecriture_id = Column(String(36), ForeignKey("ecritures.id_ecriture"), nullable=False)
    compte_id = Column(String(36), ForeignKey("plancomptableentreprise.id_compte"), nullable=False)
    montant_debit = Column(MONEY, nullable=False, default=Decimal("0"))
    montant_credit = Column(MONEY, nullable=False, default=Decimal("0"))
    position = Column(Integer, nullable=False, default=0)

    ecriture = relationship("EcritureORM", back_populates="lignes")
    compte = relationship("CompteORM")


# =============================================================================
# THIRD PARTIES & INVOICES
# =============================================================================


class TiersORM(Base):
    """Customers and suppliers."""

    __tablename__ = "tiers"

    id_tiers = Column(String(36), primary_key=True)
    nom_tiers = Column(String(255), nullable=False)
    type_tiers = Column(SqlEnum(TypeTiers), nullable=False)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)


class FactureORM(Base):
    """Invoice header."""

    __tablename__ = "factures"
    __table_args__ = (UniqueConstraint("entreprise_id", "numero_facture"),)

    id_facture = Column(String(36), primary_key=True)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)
    tiers_id = Column(String(36), ForeignKey("tiers.id_tiers"), nullable=False)
    exercice_id = Column(String(36), ForeignKey("exercicescomptables.id_exercice"), nullable=False)
    numero_facture = Column(String(50), nullable=False)
    date_facture = Column(Date, nullable=False)
    date_echeance = Column(Date, nullable=True)
    type_document = Column(SqlEnum(TypeDocument), nullable=False)
    montant_ht = Column(MONEY, nullable=False, default=Decimal("0"))
    montant_tva = Column(MONEY, nullable=False, default=Decimal("0"))
    montant_ttc = Column(MONEY, nullable=False, default=Decimal("0"))
    statut = Column(SqlEnum(StatutPiece), nullable=False, default=StatutPiece.BROUILLON)
    ecriture_id = Column(String(36), ForeignKey("ecritures.id_ecriture"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    lignes = relationship(
        "FactureLigneORM",
        back_populates="facture",
        cascade="all, delete-orphan",
        order_by="FactureLigneORM.position",
    )


class FactureLigneORM(Base):
    """Invoice line."""

    __tablename__ = "facturelignes"

    id_ligne = Column(String(36), primary_key=True)
    facture_id = Column(String(36), ForeignKey("factures.id_facture"), nullable=False)
    compte_id = Column(String(36), ForeignKey("plancomptableentreprise.id_compte"), nullable=True)
    description = Column(Text, nullable=False)
    quantite = Column(QUANTITY, nullable=False, default=Decimal("1"))
    prix_unitaire_ht = Column(MONEY, nullable=False)
    taux_tva = Column(Numeric(precision=5, scale=2), nullable=False, default=Decimal("18"))
    total_ht = Column(MONEY, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    facture = relationship("FactureORM", back_populates="lignes")


# =============================================================================
# FIXED ASSETS
# =============================================================================


class ImmobilisationORM(Base):
    """Fixed asset."""

    __tablename__ = "immobilisations"

    id_immo = Column(String(36), primary_key=True)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)
    libelle = Column(String(255), nullable=False)
    date_achat = Column(Date, nullable=False)
    date_mise_en_service = Column(Date, nullable=False)
    valeur_origine = Column(MONEY, nullable=False)
    duree_amortissement = Column(Integer, nullable=False, default=5)
    compte_immo_id = Column(String(36), ForeignKey("plancomptableentreprise.id_compte"), nullable=False)
    compte_amort_id = Column(String(36), ForeignKey("plancomptableentreprise.id_compte"), nullable=False)

    dotations = relationship("DotationAmortissementORM", back_populates="immobilisation")


class DotationAmortissementORM(Base):
    """Depreciation posted for an asset in an exercise."""

    __tablename__ = "dotationsamortissement"
    __table_args__ = (UniqueConstraint("immo_id", "exercice_id"),)

    id_dotation = Column(String(36), primary_key=True)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)
    immo_id = Column(String(36), ForeignKey("immobilisations.id_immo"), nullable=False)
    exercice_id = Column(String(36), ForeignKey("exercicescomptables.id_exercice"), nullable=False)
    montant = Column(MONEY, nullable=False)
    ecriture_id = Column(String(36), ForeignKey("ecritures.id_ecriture"), nullable=True)

    immobilisation = relationship("ImmobilisationORM", back_populates="dotations")


# =============================================================================
# PAYROLL
# =============================================================================


class EmployeORM(Base):
    """Employee."""

    __tablename__ = "employes"

    id_employe = Column(String(36), primary_key=True)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)
    nom = Column(String(100), nullable=False)
    prenom = Column(String(100), nullable=False)
    poste = Column(String(100), nullable=True)
    salaire_de_base = Column(MONEY, nullable=False, default=Decimal("0"))


class BulletinPaieORM(Base):
    """Payslip."""

    __tablename__ = "bulletinspaie"

    id_bulletin = Column(String(36), primary_key=True)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)
    employe_id = Column(String(36), ForeignKey("employes.id_employe"), nullable=False)
    exercice_id = Column(String(36), ForeignKey("exercicescomptables.id_exercice"), nullable=False)
    periode_debut = Column(Date, nullable=False)
    periode_fin = Column(Date, nullable=False)
    salaire_brut = Column(MONEY, nullable=False)
    cotisations_salariales = Column(MONEY, nullable=False, default=Decimal("0"))
    cotisations_patronales = Column(MONEY, nullable=False, default=Decimal("0"))
    salaire_net = Column(MONEY, nullable=False)
    statut = Column(SqlEnum(StatutPiece), nullable=False, default=StatutPiece.BROUILLON)
    ecriture_id = Column(String(36), ForeignKey("ecritures.id_ecriture"), nullable=True)


# =============================================================================
# STOCK
# =============================================================================


class ArticleORM(Base):
    """Stocked item."""

    __tablename__ = "articles"
    __table_args__ = (UniqueConstraint("entreprise_id", "reference"),)

    id_article = Column(String(36), primary_key=True)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)
    reference = Column(String(50), nullable=False)
    denomination = Column(String(255), nullable=False)
    unite_stockage = Column(String(30), nullable=False, default="unité")
    quantite_en_stock = Column(QUANTITY, nullable=False, default=Decimal("0"))
    valeur_stock = Column(MONEY, nullable=False, default=Decimal("0"))


class MouvementStockORM(Base):
    """Stock movement journal."""

    __tablename__ = "mouvementsstock"

    id_mouvement = Column(String(36), primary_key=True)
    entreprise_id = Column(String(36), ForeignKey("entreprises.id_entreprise"), nullable=False)
    article_id = Column(String(36), ForeignKey("articles.id_article"), nullable=False)
    type_mouvement = Column(SqlEnum(TypeMouvement), nullable=False)
    quantite = Column(QUANTITY, nullable=False)
    cout_unitaire = Column(Numeric(precision=18, scale=4), nullable=False)
    valeur = Column(MONEY, nullable=False)
    libelle = Column(String(255), nullable=True)
    date_mouvement = Column(DateTime, nullable=False, default=datetime.utcnow)
