# client_registry/adapters/outbound/security/api_token_manager.py

from datetime import datetime, timedelta, timezone
from typing import Iterable
from jose import jwt, JWTError

from client_registry.adapters.configuration.config import settings
from client_registry.domain.exceptions import InvalidCredentialsException, PermissionDeniedException

DEFAULT_EXPIRES_MINUTES = 60


class ApiTokenManager:
    """
    Bearer tokens guarding the registry API.

    Tokens are JWTs signed with SECRET_KEY whose space-delimited ``scope``
    claim must contain API_SCOPE.
    """

    @classmethod
    def create_api_token(
            cls, subject: str, scopes: Iterable[str] = None, expires_delta: timedelta = None
    ) -> str:
        """
        Create a JWT for ``subject`` granting ``scopes`` (API_SCOPE by default).
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=DEFAULT_EXPIRES_MINUTES)
        if scopes is None:
            scopes = [settings.API_SCOPE]

        expire = datetime.now(timezone.utc) + expires_delta
        payload = {
            "sub": str(subject),
            "exp": int(expire.timestamp()),
            "scope": " ".join(scopes),
        }
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @classmethod
    def verify_api_token(cls, token: str) -> dict:
        """
        Decode the token and check it grants API_SCOPE.

        Raises:
            InvalidCredentialsException: If the token is malformed, badly signed or expired
            PermissionDeniedException: If the token lacks the API scope
        """
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except JWTError:
            raise InvalidCredentialsException(detail="Invalid or expired access token.")

        granted = str(payload.get("scope", "")).split()
        if settings.API_SCOPE not in granted:
            raise PermissionDeniedException(
                detail="Access token does not grant access to the client registry",
                permission=settings.API_SCOPE,
            )
        return payload
