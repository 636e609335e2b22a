# client_registry/domain/models/client_domain_model.py

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import List, Optional

from client_registry.domain.exceptions import InvalidInputException


class AccessTokenType(IntEnum):
    """Kind of access token issued to a client. Stored as its integer code."""
    JWT = 0
    REFERENCE = 1

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: str) -> "AccessTokenType":
        """
        Resolve a token type name ("Jwt", "Reference"; case-insensitive).

        Raises:
            InvalidInputException: If the value does not name a token type
        """
        member = cls.__members__.get(value.strip().upper()) if isinstance(value, str) else None
        if member is not None:
            return member
        raise InvalidInputException(
            detail=f"Token type [{value}] does not exist.",
            fields={"accessTokenType": str(value)},
        )

    @classmethod
    def from_code(cls, code: int) -> "AccessTokenType":
        return cls(code)


@dataclass
class Client:
    """Domain model for a client registration. Never holds the raw secret."""
    id: str
    name: Optional[str] = None
    allowed_cors_origins: List[str] = field(default_factory=list)
    redirect_uris: List[str] = field(default_factory=list)
    post_logout_redirect_uris: List[str] = field(default_factory=list)
    allowed_scopes: List[str] = field(default_factory=list)
    access_token_type: AccessTokenType = AccessTokenType.JWT
    enabled: bool = True
    secret_hashes: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ClientPage:
    """One offset page of the registry."""
    skip: int
    total_size: int
    clients: List[Client]
