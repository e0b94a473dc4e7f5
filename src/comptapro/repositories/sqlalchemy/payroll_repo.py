"""SQLAlchemy implementation of PayrollRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from comptapro.domain.models import BulletinPaie, Employe, StatutPiece
from comptapro.repositories.sqlalchemy.orm_models import BulletinPaieORM, EmployeORM


class SqlAlchemyPayrollRepository:
    """SQLAlchemy-backed employee and payslip repository."""

    def __init__(self, db: Session):
        self._db = db

    # -------------------------------------------------------------------------
    # Employees
    # -------------------------------------------------------------------------

    def create_employe(self, employe: Employe) -> Employe:
        """Persist a new employee."""
        orm_employe = EmployeORM(
            id_employe=employe.id_employe,
            entreprise_id=employe.entreprise_id,
            nom=employe.nom,
            prenom=employe.prenom,
            poste=employe.poste,
            salaire_de_base=employe.salaire_de_base,
        )
        self._db.add(orm_employe)
        self._db.commit()
        self._db.refresh(orm_employe)
        return self._employe_to_domain(orm_employe)

    def get_employe(self, entreprise_id: str, id_employe: str) -> Optional[Employe]:
        orm_employe = self._db.query(EmployeORM).filter(
            EmployeORM.entreprise_id == entreprise_id,
            EmployeORM.id_employe == id_employe,
        ).first()
        return self._employe_to_domain(orm_employe) if orm_employe else None

    def list_employes(self, entreprise_id: str) -> list[Employe]:
        """List a company's employees by name."""
        orm_employes = (
            self._db.query(EmployeORM)
            .filter(EmployeORM.entreprise_id == entreprise_id)
            .order_by(EmployeORM.nom, EmployeORM.prenom)
            .all()
        )
        return [self._employe_to_domain(e) for e in orm_employes]

    def update_employe(self, employe: Employe) -> Employe:
        """Update an employee."""
        orm_employe = self._db.query(EmployeORM).filter(
            EmployeORM.entreprise_id == employe.entreprise_id,
            EmployeORM.id_employe == employe.id_employe,
        ).first()
        if orm_employe:
            orm_employe.nom = employe.nom
            orm_employe.prenom = employe.prenom
            orm_employe.poste = employe.poste
            orm_employe.salaire_de_base = employe.salaire_de_base
            self._db.commit()
            self._db.refresh(orm_employe)
            return self._employe_to_domain(orm_employe)
        raise ValueError(f"Employe not found: {employe.id_employe}")

    def delete_employe(self, entreprise_id: str, id_employe: str) -> None:
        self._db.query(EmployeORM).filter(
            EmployeORM.entreprise_id == entreprise_id,
            EmployeORM.id_employe == id_employe,
        ).delete()
        self._db.commit()

    def count_bulletins(self, id_employe: str) -> int:
        return self._db.query(BulletinPaieORM).filter(
            BulletinPaieORM.employe_id == id_employe
        ).count()

    # -------------------------------------------------------------------------
    # Payslips
    # -------------------------------------------------------------------------

    def create_bulletin(self, bulletin: BulletinPaie) -> BulletinPaie:
        """Persist a new payslip."""
        orm_bulletin = BulletinPaieORM(
            id_bulletin=bulletin.id_bulletin,
            entreprise_id=bulletin.entreprise_id,
            employe_id=bulletin.employe_id,
            exercice_id=bulletin.exercice_id,
            periode_debut=bulletin.periode_debut,
            periode_fin=bulletin.periode_fin,
            salaire_brut=bulletin.salaire_brut,
            cotisations_salariales=bulletin.cotisations_salariales,
            cotisations_patronales=bulletin.cotisations_patronales,
            salaire_net=bulletin.salaire_net,
            statut=bulletin.statut,
            ecriture_id=bulletin.ecriture_id,
        )
        self._db.add(orm_bulletin)
        self._db.commit()
        self._db.refresh(orm_bulletin)
        return self._bulletin_to_domain(orm_bulletin)

    def get_bulletin(self, entreprise_id: str, id_bulletin: str) -> Optional[BulletinPaie]:
        orm_bulletin = self._db.query(BulletinPaieORM).filter(
            BulletinPaieORM.entreprise_id == entreprise_id,
            BulletinPaieORM.id_bulletin == id_bulletin,
        ).first()
        return self._bulletin_to_domain(orm_bulletin) if orm_bulletin else None

    def list_bulletins(
        self,
        entreprise_id: str,
        exercice_id: Optional[str] = None,
        employe_id: Optional[str] = None,
    ) -> list[BulletinPaie]:
        """List payslips, most recent period first."""
        query = self._db.query(BulletinPaieORM).filter(BulletinPaieORM.entreprise_id == entreprise_id)
        if exercice_id:
            query = query.filter(BulletinPaieORM.exercice_id == exercice_id)
        if employe_id:
            query = query.filter(BulletinPaieORM.employe_id == employe_id)
        orm_bulletins = query.order_by(BulletinPaieORM.periode_fin.desc()).all()
        return [self._bulletin_to_domain(b) for b in orm_bulletins]

    def mark_validated(self, entreprise_id: str, id_bulletin: str, ecriture_id: str) -> BulletinPaie:
        """Set a payslip as validated and link its posting."""
        orm_bulletin = self._db.query(BulletinPaieORM).filter(
            BulletinPaieORM.entreprise_id == entreprise_id,
            BulletinPaieORM.id_bulletin == id_bulletin,
        ).first()
        if orm_bulletin:
            orm_bulletin.statut = StatutPiece.VALIDEE
            orm_bulletin.ecriture_id = ecriture_id
            self._db.commit()
            self._db.refresh(orm_bulletin)
            return self._bulletin_to_domain(orm_bulletin)
        raise ValueError(f"BulletinPaie not found: {id_bulletin}")

    @staticmethod
    def _employe_to_domain(orm: EmployeORM) -> Employe:
        return Employe(
            id_employe=orm.id_employe,
            entreprise_id=orm.entreprise_id,
            nom=orm.nom,
            prenom=orm.prenom,
            poste=orm.poste,
            salaire_de_base=orm.salaire_de_base,
        )

    @staticmethod
    def _bulletin_to_domain(orm: BulletinPaieORM) -> BulletinPaie:
        return BulletinPaie(
            id_bulletin=orm.id_bulletin,
            entreprise_id=orm.entreprise_id,
            employe_id=orm.employe_id,
            exercice_id=orm.exercice_id,
            periode_debut=orm.periode_debut,
            periode_fin=orm.periode_fin,
            salaire_brut=orm.salaire_brut,
            cotisations_salariales=orm.cotisations_salariales,
            cotisations_patronales=orm.cotisations_patronales,
            statut=orm.statut,
            ecriture_id=orm.ecriture_id,
        )
