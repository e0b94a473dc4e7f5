"""User repository protocol."""

from typing import Protocol, Optional

from comptapro.domain.models import Profil, User


class UserRepository(Protocol):
    """Interface for identities, profiles and super administrators."""

    def create_user(self, user: User) -> User:
        ...

    def get_user(self, user_id: str) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def update_user(self, user: User) -> User:
        ...

    def create_profile(self, profil: Profil) -> Profil:
        ...

    def get_profile(self, user_id: str) -> Optional[Profil]:
        """Retrieve the profile of a user."""
        ...

    def update_profile(self, profil: Profil) -> Profil:
        ...

    def list_profiles(self, entreprise_id: Optional[str] = None) -> list[Profil]:
        """List profiles, optionally restricted to one company."""
        ...

    def is_superadmin(self, user_id: str) -> bool:
        ...

    def add_superadmin(self, user_id: str) -> None:
        ...

    def list_superadmin_ids(self) -> set[str]:
        ...
