"""Admin sign-in, sign-out and identity checks."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Set
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from portfolio_app.services.backend import BackendSettings
from portfolio_app.services.errors import BackendUnavailableError, InvalidCredentialsError


ALGORITHM = "HS256"

# pbkdf2_sha256 needs no native bcrypt backend
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class Identity(BaseModel):
    """An authenticated admin."""

    email: str
    role: str = "admin"


IdentityListener = Callable[[Optional[Identity]], None]


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


class AuthService:
    """Email/password authentication for the single admin account."""

    def __init__(self, settings: BackendSettings, available: bool):
        """
        Initialize the auth service.

        Args:
            settings: Backend settings holding the admin account and token secret
            available: Whether the backend is available (sign-in needs it)
        """
        self.settings = settings
        self.available = available
        self.password_hash = settings.admin_password_hash or (
            hash_password(settings.admin_password) if settings.admin_password else ""
        )
        self._revoked: Set[str] = set()
        self._listeners: List[IdentityListener] = []

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """
        Register a listener called whenever the signed-in identity changes.

        Returns:
            Callable: Removes the listener when called
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, identity: Optional[Identity]) -> None:
        for listener in list(self._listeners):
            listener(identity)

    def sign_in(self, email: str, password: str) -> str:
        """
        Check the admin credentials and issue an access token.

        Raises:
            BackendUnavailableError: If the backend is not available
            InvalidCredentialsError: If email or password is wrong
        """
        if not self.available:
            raise BackendUnavailableError("Backend is not available. Cannot sign in.")

        if (
            email.lower() != self.settings.admin_email.lower()
            or not self.password_hash
            or not pwd_context.verify(password, self.password_hash)
        ):
            raise InvalidCredentialsError("Invalid credentials")

        expire = datetime.now(timezone.utc) + timedelta(
            minutes=self.settings.access_token_expire_minutes
        )
        token = jwt.encode(
            {
                "sub": self.settings.admin_email,
                "role": "admin",
                "jti": uuid.uuid4().hex,
                "exp": expire,
            },
            self.settings.auth_secret,
            algorithm=ALGORITHM,
        )
        self._notify(Identity(email=self.settings.admin_email))
        return token

    def sign_out(self, token: str) -> None:
        """
        Revoke a token.

        Raises:
            BackendUnavailableError: If the backend is not available
        """
        if not self.available:
            raise BackendUnavailableError("Backend is not available. Cannot sign out.")

        claims = self._decode(token)
        if claims is None:
            return
        self._revoked.add(claims.get("jti", ""))
        self._notify(None)

    def _decode(self, token: str) -> Optional[dict]:
        if not self.available or not token:
            return None
        try:
            return jwt.decode(token, self.settings.auth_secret, algorithms=[ALGORITHM])
        except JWTError:
            return None

    def current_identity(self, token: Optional[str]) -> Optional[Identity]:
        """The identity a token belongs to, or None if it is missing, invalid or revoked."""
        claims = self._decode(token or "")
        if claims is None:
            return None
        if claims.get("jti") in self._revoked:
            return None
        if claims.get("sub") != self.settings.admin_email or claims.get("role") != "admin":
            return None
        return Identity(email=claims["sub"], role=claims["role"])
