# client_registry/adapters/outbound/persistence/models/client_model.py

"""
Client registration models.

This module defines the ``Client`` model describing an application allowed
to authenticate against the identity provider, and ``ClientSecret``, the
hashed credential entries attached to it.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, BigInteger, String, Boolean, DateTime, Integer, ForeignKey, JSON
from sqlalchemy.orm import relationship

from client_registry.adapters.outbound.persistence.models.base_model import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Client(Base):
    """
    A client registration.

    Attributes:
        id: Surrogate primary key
        client_id: Public client identifier, unique
        client_name: Display name
        allowed_cors_origins: Origins allowed for CORS requests
        redirect_uris: Allowed redirect URIs, ordered
        post_logout_redirect_uris: Allowed post-logout redirect URIs, ordered
        allowed_scopes: Scopes the client may request
        access_token_type: Integer code of the access token type
        enabled: Whether the client may authenticate
        secrets: Hashed credential entries
    """
    __tablename__ = "clients"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    client_id = Column(String(200), unique=True, nullable=False, index=True)
    client_name = Column(String(200), nullable=True)
    allowed_cors_origins = Column(JSON, nullable=False, default=list)
    redirect_uris = Column(JSON, nullable=False, default=list)
    post_logout_redirect_uris = Column(JSON, nullable=False, default=list)
    allowed_scopes = Column(JSON, nullable=False, default=list)
    access_token_type = Column(Integer, nullable=False, default=0)
    enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    secrets = relationship(
        "ClientSecret",
        back_populates="client",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ClientSecret.id",
    )

    def __repr__(self) -> str:
        return f"<Client(client_id={self.client_id}, enabled={self.enabled})>"


class ClientSecret(Base):
    """A hashed credential entry. Never holds the raw secret."""
    __tablename__ = "client_secrets"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    client_pk = Column(BigInteger, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(String(2000), nullable=False)
    type = Column(String(250), nullable=False, default="SharedSecret")
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    client = relationship("Client", back_populates="secrets")

    def __repr__(self) -> str:
        return f"<ClientSecret(id={self.id}, type={self.type})>"
