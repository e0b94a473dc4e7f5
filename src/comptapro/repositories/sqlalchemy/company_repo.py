"""SQLAlchemy implementation of CompanyRepository."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from comptapro.domain.models import Entreprise, Plan
from comptapro.repositories.sqlalchemy.orm_models import EntrepriseORM, PlanORM, ProfilORM


class SqlAlchemyCompanyRepository:
    """SQLAlchemy-backed company and plan repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, entreprise: Entreprise) -> Entreprise:
        """Persist a new company."""
        orm_entreprise = EntrepriseORM(
            id_entreprise=entreprise.id_entreprise,
            nom_entreprise=entreprise.nom_entreprise,
            plan_id=entreprise.plan_id,
            date_creation=entreprise.date_creation,
        )
        self._db.add(orm_entreprise)
        self._db.commit()
        self._db.refresh(orm_entreprise)
        return self._to_domain(orm_entreprise)

    def get_by_id(self, entreprise_id: str) -> Optional[Entreprise]:
        """Retrieve company by ID."""
        orm_entreprise = self._db.query(EntrepriseORM).filter(
            EntrepriseORM.id_entreprise == entreprise_id
        ).first()
        return self._to_domain(orm_entreprise) if orm_entreprise else None

    def list_all(self) -> list[Entreprise]:
        """List all companies by name."""
        orm_entreprises = self._db.query(EntrepriseORM).order_by(EntrepriseORM.nom_entreprise).all()
        return [self._to_domain(e) for e in orm_entreprises]

    def update(self, entreprise: Entreprise) -> Entreprise:
        """Update name and plan of a company."""
        orm_entreprise = self._db.query(EntrepriseORM).filter(
            EntrepriseORM.id_entreprise == entreprise.id_entreprise
        ).first()
        if orm_entreprise:
            orm_entreprise.nom_entreprise = entreprise.nom_entreprise
            orm_entreprise.plan_id = entreprise.plan_id
            self._db.commit()
            self._db.refresh(orm_entreprise)
            return self._to_domain(orm_entreprise)
        raise ValueError(f"Entreprise not found: {entreprise.id_entreprise}")

    def member_counts(self) -> dict[str, int]:
        """Return {entreprise_id: number of profiles}."""
        rows = (
            self._db.query(ProfilORM.entreprise_id, func.count(ProfilORM.id_profil))
            .filter(ProfilORM.entreprise_id.isnot(None))
            .group_by(ProfilORM.entreprise_id)
            .all()
        )
        return {entreprise_id: count for entreprise_id, count in rows}

    def list_plans(self) -> list[Plan]:
        """List subscription plans by level."""
        orm_plans = self._db.query(PlanORM).order_by(PlanORM.niveau).all()
        return [self._plan_to_domain(p) for p in orm_plans]

    def get_plan(self, id_plan: int) -> Optional[Plan]:
        """Retrieve a plan by ID."""
        orm_plan = self._db.query(PlanORM).filter(PlanORM.id_plan == id_plan).first()
        return self._plan_to_domain(orm_plan) if orm_plan else None

    def update_plan(self, plan: Plan) -> Plan:
        """Update a plan's price and name."""
        orm_plan = self._db.query(PlanORM).filter(PlanORM.id_plan == plan.id_plan).first()
        if orm_plan:
            orm_plan.nom_plan = plan.nom_plan
            orm_plan.prix_mensuel = plan.prix_mensuel
            self._db.commit()
            self._db.refresh(orm_plan)
            return self._plan_to_domain(orm_plan)
        raise ValueError(f"Plan not found: {plan.id_plan}")

    @staticmethod
    def _to_domain(orm: EntrepriseORM) -> Entreprise:
        """Convert ORM model to domain model."""
        return Entreprise(
            id_entreprise=orm.id_entreprise,
            nom_entreprise=orm.nom_entreprise,
            plan_id=orm.plan_id,
            date_creation=orm.date_creation,
        )

    @staticmethod
    def _plan_to_domain(orm: PlanORM) -> Plan:
        return Plan(
            id_plan=orm.id_plan,
            nom_plan=orm.nom_plan,
            niveau=orm.niveau,
            prix_mensuel=orm.prix_mensuel,
        )
