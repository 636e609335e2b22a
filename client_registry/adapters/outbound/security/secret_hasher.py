# client_registry/adapters/outbound/security/secret_hasher.py

from passlib.context import CryptContext

from client_registry.adapters.configuration.config import settings
from client_registry.application.ports.outbound import ISecretHasher


class ClientSecretHasher(ISecretHasher):
    """
    One-way hashing of client secrets with bcrypt over a SHA-256 digest,
    so secrets longer than 72 bytes are not truncated. Plain bcrypt hashes
    still verify.

    Raw secrets only ever pass through ``hash`` and ``verify``; they are
    never stored or returned.
    """

    def __init__(self, rounds: int = None):
        self.crypt_context = CryptContext(
            schemes=["bcrypt_sha256", "bcrypt"],
            deprecated="auto",
            bcrypt_sha256__rounds=rounds or settings.CLIENT_SECRET_HASH_ROUNDS,
        )

    def hash(self, secret: str) -> str:
        """Generate a salted hash for storage in the database."""
        return self.crypt_context.hash(secret)

    def verify(self, secret: str, secret_hash: str) -> bool:
        """Compare a plaintext secret with a stored hash."""
        return self.crypt_context.verify(secret, secret_hash)


secret_hasher = ClientSecretHasher()
