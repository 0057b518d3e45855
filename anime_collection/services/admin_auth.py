"""
Authentification de l'espace d'administration cote serveur.

Le mot de passe soumis est compare a celui de la configuration, puis un jeton
JWT signe et a duree limitee est emis. Chaque route d'administration verifie
ce jeton ; rien n'est decide cote navigateur.
"""

import hmac
from datetime import UTC, datetime, timedelta
from typing import Optional

import jwt
from loguru import logger

from anime_collection.core.exceptions import AuthenticationError, ConfigurationError

ADMIN_SUBJECT = "admin"
TOKEN_TYPE = "admin_session"


class AdminAuthService:
    """
    Emission et verification des jetons d'administration.

    Example:
        auth = AdminAuthService(password="s3cret", secret_key="k")
        token = auth.login("s3cret")
        auth.verify(token)  # leve AuthenticationError si invalide
    """

    def __init__(
        self,
        password: Optional[str],
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 720,
    ) -> None:
        """
        Args:
            password: Mot de passe attendu (None = administration desactivee)
            secret_key: Cle de signature des jetons
            algorithm: Algorithme JWT
            expire_minutes: Duree de validite d'un jeton
        """
        self._password = password
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @property
    def enabled(self) -> bool:
        """True si un mot de passe d'administration est configure."""
        return bool(self._password)

    def login(self, password: str) -> str:
        """
        Verifie le mot de passe et emet un jeton.

        Raises:
            ConfigurationError: Aucun mot de passe configure
            AuthenticationError: Mot de passe incorrect
        """
        if not self.enabled:
            raise ConfigurationError(
                "Admin access is not configured. Set ANIMECOL_ADMIN_PASSWORD."
            )
        if not hmac.compare_digest(password.encode(), self._password.encode()):
            logger.warning("Tentative de connexion admin refusee")
            raise AuthenticationError("Incorrect password")
        logger.info("Connexion admin")
        return self.issue_token()

    def issue_token(self, expires_delta: Optional[timedelta] = None) -> str:
        """Emet un jeton d'administration signe."""
        expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=self._expire_minutes))
        payload = {"sub": ADMIN_SUBJECT, "exp": expire, "type": TOKEN_TYPE}
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> None:
        """
        Verifie un jeton d'administration.

        Raises:
            AuthenticationError: Jeton absent, expire, invalide ou d'un autre type
        """
        if not token:
            raise AuthenticationError("Missing admin token")
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Admin session has expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Jeton admin invalide: {e}")
            raise AuthenticationError("Invalid admin token")

        if payload.get("sub") != ADMIN_SUBJECT or payload.get("type") != TOKEN_TYPE:
            raise AuthenticationError("Invalid admin token")
