"""Identity service: sign-up, sign-in, sessions and auth state events."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from comptapro.config.settings import get_settings
from comptapro.core.exceptions import AuthenticationError, ValidationError
from comptapro.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from comptapro.core.timezone import now_local
from comptapro.domain.models import (
    DEFAULT_COMPANY_NAME,
    DEFAULT_PLAN_ID,
    AuthEvent,
    Entreprise,
    Profil,
    Role,
    User,
)
from comptapro.domain.views import AuthSession
from comptapro.repositories.protocols import CompanyRepository, UserRepository

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, Optional[AuthSession]], None]


class AuthSubscription:
    """Handle returned by AuthEventBus.subscribe()."""

    def __init__(self, bus: "AuthEventBus", callback: AuthListener):
        self._bus = bus
        self.callback = callback

    def unsubscribe(self) -> None:
        self._bus.remove(self.callback)


class AuthEventBus:
    """Publishes SIGNED_IN / SIGNED_OUT to subscribed callbacks."""

    def __init__(self):
        self._listeners: list[AuthListener] = []

    def subscribe(self, callback: AuthListener) -> AuthSubscription:
        self._listeners.append(callback)
        return AuthSubscription(self, callback)

    def remove(self, callback: AuthListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def emit(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, session)
            except Exception:
                logger.exception("Auth listener failed on %s", event.value)


# Process-wide bus shared by every AuthService instance
auth_events = AuthEventBus()


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    """
    Service for email/password identities and bearer sessions.

    Access tokens are JWTs carrying the user's token_version; signing out
    increments the version, which revokes every token issued before.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        company_repo: CompanyRepository,
        events: Optional[AuthEventBus] = None,
    ):
        self._user_repo = user_repo
        self._company_repo = company_repo
        self._events = events or auth_events

    def sign_up(self, email: str, password: str) -> User:
        """
        Register a new identity.

        The user gets a placeholder company on the free plan and a plain
        'utilisateur' profile; onboarding names the company later.

        Returns:
            Created User
        """
        email = normalize_email(email)
        if not email or "@" not in email:
            raise ValidationError("Adresse email invalide.")
        min_length = get_settings().min_password_length
        if not password or len(password) < min_length:
            raise ValidationError(
                f"Le mot de passe doit contenir au moins {min_length} caractères."
            )
        if self._user_repo.get_user_by_email(email):
            raise ValidationError("Un compte existe déjà avec cet email.")

        user = self._user_repo.create_user(User(
            user_id=str(uuid.uuid4()),
            email=email,
            password_hash=hash_password(password),
            created_at=now_local(),
        ))
        entreprise = self._company_repo.create(Entreprise(
            id_entreprise=str(uuid.uuid4()),
            nom_entreprise=DEFAULT_COMPANY_NAME,
            plan_id=DEFAULT_PLAN_ID,
            date_creation=now_local(),
        ))
        self._user_repo.create_profile(Profil(
            id_profil=str(uuid.uuid4()),
            user_id=user.user_id,
            email=email,
            role=Role.UTILISATEUR,
            entreprise_id=entreprise.id_entreprise,
        ))
        logger.info("Signed up user %s", email)
        return user

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Check credentials and issue an access token."""
        email = normalize_email(email)
        user = self._user_repo.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Rejected sign-in for %s", email)
            raise AuthenticationError("Email ou mot de passe incorrect.")

        token, expire = create_access_token(
            user.user_id,
            claims={"email": user.email, "ver": user.token_version},
        )
        session = self._build_session(user, token, expire)
        logger.info("User %s signed in", email)
        self._events.emit(AuthEvent.SIGNED_IN, session)
        return session

    def get_session(self, token: Optional[str]) -> Optional[AuthSession]:
        """Session for a bearer token; None when invalid, expired or revoked."""
        if not token:
            return None
        payload = decode_access_token(token)
        if payload is None:
            return None
        user = self._user_repo.get_user(payload["sub"])
        if not user or payload.get("ver") != user.token_version:
            return None
        expire = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        return self._build_session(user, token, expire)

    def sign_out(self, token: Optional[str]) -> None:
        """Revoke every token issued so far to the token's user."""
        session = self.get_session(token)
        if session is None:
            raise AuthenticationError("Session invalide ou expirée.")
        user = self._user_repo.get_user(session.user_id)
        user.token_version += 1
        self._user_repo.update_user(user)
        logger.info("User %s signed out", user.email)
        self._events.emit(AuthEvent.SIGNED_OUT, session)

    def on_auth_state_change(self, callback: AuthListener) -> AuthSubscription:
        """Subscribe to SIGNED_IN / SIGNED_OUT events."""
        return self._events.subscribe(callback)

    def _build_session(self, user: User, token: str, expire: datetime) -> AuthSession:
        profil = self._user_repo.get_profile(user.user_id)
        entreprise = None
        if profil and profil.entreprise_id:
            entreprise = self._company_repo.get_by_id(profil.entreprise_id)
        return AuthSession(
            access_token=token,
            user_id=user.user_id,
            email=user.email,
            expires_at=expire,
            profil=profil,
            entreprise=entreprise,
            is_superadmin=self._user_repo.is_superadmin(user.user_id),
        )
