"""Reference data loaded at database initialisation."""

import logging
import uuid
from decimal import Decimal

from sqlalchemy.orm import Session

from comptapro.domain.models import classe_from_numero
from comptapro.repositories.sqlalchemy.orm_models import CompteModeleORM, PlanORM

logger = logging.getLogger(__name__)

# (id_plan, nom_plan, niveau, prix_mensuel en FCFA)
PLANS = [
    (1, "Gratuit", 1, Decimal("0")),
    (2, "Starter", 2, Decimal("15000")),
    (3, "Pro", 3, Decimal("35000")),
    (4, "Entreprise", 4, Decimal("75000")),
]

# SYSCOHADA starter chart; every account used by automatic postings is here.
SYSCOHADA_MASTER_PLAN = [
    ("101", "Capital social"),
    ("106", "Réserves"),
    ("121", "Report à nouveau créditeur"),
    ("131", "Résultat net : bénéfice"),
    ("139", "Résultat net : perte"),
    ("162", "Emprunts et dettes auprès des établissements de crédit"),
    ("213", "Logiciels et sites internet"),
    ("231", "Bâtiments industriels, agricoles, administratifs et commerciaux"),
    ("241", "Matériel et outillage industriel et commercial"),
    ("244", "Matériel et mobilier"),
    ("245", "Matériel de transport"),
    ("2813", "Amortissements des logiciels et sites internet"),
    ("2831", "Amortissements des bâtiments"),
    ("2841", "Amortissements du matériel et outillage"),
    ("2844", "Amortissements du matériel et mobilier"),
    ("2845", "Amortissements du matériel de transport"),
    ("311", "Marchandises"),
    ("401", "Fournisseurs, dettes en compte"),
    ("411", "Clients"),
    ("421", "Personnel, avances et acomptes"),
    ("422", "Personnel, rémunérations dues"),
    ("431", "Sécurité sociale"),
    ("443", "État, TVA facturée"),
    ("445", "État, TVA récupérable"),
    ("447", "État, impôts retenus à la source"),
    ("521", "Banques locales"),
    ("571", "Caisse siège social"),
    ("601", "Achats de marchandises"),
    ("6031", "Variations des stocks de marchandises"),
    ("604", "Achats stockés de matières et fournitures consommables"),
    ("605", "Autres achats"),
    ("622", "Locations et charges locatives"),
    ("624", "Entretien, réparations et maintenance"),
    ("627", "Publicité, publications, relations publiques"),
    ("628", "Frais de télécommunications"),
    ("631", "Frais bancaires"),
    ("641", "Impôts et taxes directs"),
    ("661", "Rémunérations directes versées au personnel national"),
    ("664", "Charges sociales"),
    ("671", "Intérêts des emprunts"),
    ("681", "Dotations aux amortissements d'exploitation"),
    ("701", "Ventes de marchandises"),
    ("706", "Services vendus"),
    ("707", "Produits accessoires"),
    ("771", "Intérêts de prêts"),
    ("812", "Valeurs comptables des cessions d'immobilisations"),
    ("822", "Produits des cessions d'immobilisations"),
    ("891", "Impôts sur les bénéfices de l'exercice"),
]


def seed_reference_data(db: Session) -> None:
    """Insert plans and the master chart when they are missing."""
    existing_plans = {p.id_plan for p in db.query(PlanORM).all()}
    for id_plan, nom_plan, niveau, prix in PLANS:
        if id_plan not in existing_plans:
            db.add(PlanORM(id_plan=id_plan, nom_plan=nom_plan, niveau=niveau, prix_mensuel=prix))

    if db.query(CompteModeleORM).count() == 0:
        for numero, libelle in SYSCOHADA_MASTER_PLAN:
            db.add(CompteModeleORM(
                id_modele=str(uuid.uuid4()),
                numero_compte=numero,
                libelle_compte=libelle,
                classe_compte=classe_from_numero(numero),
            ))
        logger.info("Seeded SYSCOHADA master plan with %d accounts", len(SYSCOHADA_MASTER_PLAN))

    db.commit()
