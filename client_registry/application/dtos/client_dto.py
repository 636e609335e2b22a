# client_registry/application/dtos/client_dto.py

"""
DTOs for client registrations.

Input models accept the plaintext secret; output resources never carry it.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import Field

from client_registry.application.dtos.base_dto import CustomBaseModel

T = TypeVar("T")


class ClientBase(CustomBaseModel):
    """Fields shared by the create and update requests. All optional."""
    name: Optional[str] = Field(None, description="Display name")
    secret: Optional[str] = Field(None, description="Plaintext secret, hashed before storage")
    allowed_cors_origins: Optional[List[str]] = Field(None, description="Allowed CORS origins")
    redirect_uris: Optional[List[str]] = Field(None, description="Allowed redirect URIs")
    post_logout_redirect_uris: Optional[List[str]] = Field(None, description="Allowed post-logout redirect URIs")
    allowed_scopes: Optional[List[str]] = Field(None, description="Allowed scopes")
    access_token_type: Optional[str] = Field(None, description="Access token type: Jwt or Reference")
    enabled: Optional[bool] = Field(None, description="Whether the client may authenticate")


class ClientCreate(ClientBase):
    """Registration request."""
    id: str = Field(..., min_length=1, max_length=200, description="Unique client identifier")


class ClientUpdate(ClientBase):
    """
    Partial update request.

    Omitted or null fields leave the stored value unchanged. ``id`` is
    accepted for symmetry with the resource shape but ignored.
    """
    id: Optional[str] = Field(None, description="Ignored, identifiers are immutable")


class ClientSummaryResource(CustomBaseModel):
    """Summary projection used in listings."""
    url: str
    id: str
    name: Optional[str] = None
    enabled: bool


class ClientResource(CustomBaseModel):
    """Full public projection of a client. Never includes the secret."""
    url: str
    id: str
    name: Optional[str] = None
    allowed_cors_origins: List[str] = []
    redirect_uris: List[str] = []
    post_logout_redirect_uris: List[str] = []
    allowed_scopes: List[str] = []
    access_token_type: str
    enabled: bool


class ResourceSet(CustomBaseModel, Generic[T]):
    """One offset page: the effective skip, the registry size and the items."""
    skip: int
    total_size: int
    resources: List[T]


class ErrorOutput(CustomBaseModel):
    message: str
    code: str
