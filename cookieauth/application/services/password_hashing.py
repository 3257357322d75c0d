"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from cookieauth.domain.users.repositories import PasswordHasher
from cookieauth.shared.config import SecurityConfig


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted hashes in werkzeug's ``method$salt$hash`` format.

    ``method`` carries the work factor, e.g. ``scrypt:32768:8:1`` or
    ``pbkdf2:sha256:600000``. Verification compares digests in constant time.
    """

    def __init__(self, method: str = "scrypt", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    @classmethod
    def from_config(cls, config: SecurityConfig) -> WerkzeugPasswordHasher:
        return cls(method=config.password_hash_method, salt_length=config.password_salt_length)

    @property
    def method(self) -> str:
        return self._method

    def hash(self, password: str) -> str:
        return str(
            generate_password_hash(password, method=self._method, salt_length=self._salt_length)
        )

    def verify(self, password: str, hashed: str) -> bool:
        return bool(check_password_hash(hashed, password))
