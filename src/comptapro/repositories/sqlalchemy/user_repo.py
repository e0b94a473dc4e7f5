"""SQLAlchemy implementation of UserRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from comptapro.domain.models import Profil, User
from comptapro.repositories.sqlalchemy.orm_models import ProfilORM, SuperAdminORM, UserORM


class SqlAlchemyUserRepository:
    """SQLAlchemy-backed identity, profile and super-admin repository."""

    def __init__(self, db: Session):
        self._db = db

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    def create_user(self, user: User) -> User:
        """Persist a new identity."""
        orm_user = UserORM(
            user_id=user.user_id,
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
            token_version=user.token_version,
        )
        self._db.add(orm_user)
        self._db.commit()
        self._db.refresh(orm_user)
        return self._user_to_domain(orm_user)

    def get_user(self, user_id: str) -> Optional[User]:
        """Retrieve identity by ID."""
        orm_user = self._db.query(UserORM).filter(UserORM.user_id == user_id).first()
        return self._user_to_domain(orm_user) if orm_user else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Retrieve identity by (normalised) email."""
        orm_user = self._db.query(UserORM).filter(UserORM.email == email).first()
        return self._user_to_domain(orm_user) if orm_user else None

    def update_user(self, user: User) -> User:
        """Update password hash and token version."""
        orm_user = self._db.query(UserORM).filter(UserORM.user_id == user.user_id).first()
        if orm_user:
            orm_user.password_hash = user.password_hash
            orm_user.token_version = user.token_version
            self._db.commit()
            self._db.refresh(orm_user)
            return self._user_to_domain(orm_user)
        raise ValueError(f"User not found: {user.user_id}")

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    def create_profile(self, profil: Profil) -> Profil:
        """Persist a new profile."""
        orm_profil = ProfilORM(
            id_profil=profil.id_profil,
            user_id=profil.user_id,
            email=profil.email,
            nom=profil.nom,
            prenom=profil.prenom,
            role=profil.role,
            entreprise_id=profil.entreprise_id,
        )
        self._db.add(orm_profil)
        self._db.commit()
        self._db.refresh(orm_profil)
        return self._profil_to_domain(orm_profil)

    def get_profile(self, user_id: str) -> Optional[Profil]:
        """Retrieve the profile of a user."""
        orm_profil = self._db.query(ProfilORM).filter(ProfilORM.user_id == user_id).first()
        return self._profil_to_domain(orm_profil) if orm_profil else None

    def update_profile(self, profil: Profil) -> Profil:
        """Update names, role and company of a profile."""
        orm_profil = self._db.query(ProfilORM).filter(
            ProfilORM.id_profil == profil.id_profil
        ).first()
        if orm_profil:
            orm_profil.nom = profil.nom
            orm_profil.prenom = profil.prenom
            orm_profil.role = profil.role
            orm_profil.entreprise_id = profil.entreprise_id
            self._db.commit()
            self._db.refresh(orm_profil)
            return self._profil_to_domain(orm_profil)
        raise ValueError(f"Profil not found: {profil.id_profil}")

    def list_profiles(self, entreprise_id: Optional[str] = None) -> list[Profil]:
        """List profiles, optionally restricted to one company."""
        query = self._db.query(ProfilORM)
        if entreprise_id is not None:
            query = query.filter(ProfilORM.entreprise_id == entreprise_id)
        orm_profils = query.order_by(ProfilORM.nom, ProfilORM.email).all()
        return [self._profil_to_domain(p) for p in orm_profils]

    # -------------------------------------------------------------------------
    # Super administrators
    # -------------------------------------------------------------------------

    def is_superadmin(self, user_id: str) -> bool:
        """Check membership of the superadmins table."""
        return self._db.query(SuperAdminORM).filter(
            SuperAdminORM.user_id == user_id
        ).first() is not None

    def add_superadmin(self, user_id: str) -> None:
        """Grant super-admin rights."""
        if not self.is_superadmin(user_id):
            self._db.add(SuperAdminORM(user_id=user_id))
            self._db.commit()

    def list_superadmin_ids(self) -> set[str]:
        """Return the IDs of all super administrators."""
        return {row.user_id for row in self._db.query(SuperAdminORM).all()}

    @staticmethod
    def _user_to_domain(orm: UserORM) -> User:
        """Convert ORM model to domain model."""
        return User(
            user_id=orm.user_id,
            email=orm.email,
            password_hash=orm.password_hash,
            created_at=orm.created_at,
            token_version=orm.token_version,
        )

    @staticmethod
    def _profil_to_domain(orm: ProfilORM) -> Profil:
        return Profil(
            id_profil=orm.id_profil,
            user_id=orm.user_id,
            email=orm.email,
            nom=orm.nom,
            prenom=orm.prenom,
            role=orm.role,
            entreprise_id=orm.entreprise_id,
        )
