"""Salted Argon2id password hashing using argon2-cffi's low-level API.

The hash and salt are stored separately, both base64-encoded. Every call to
``hash_password`` draws a fresh random salt, so equal passwords never share a
(hash, salt) pair.
"""
import base64
import binascii
import hmac
import secrets

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from gatehouse.config import HasherSettings
from gatehouse.domain.identity.value_objects import PasswordHash, PasswordSalt


class CredentialHasher:
    def __init__(self, settings: HasherSettings) -> None:
        self._settings = settings

    def _derive(self, raw_password: str, salt: bytes) -> bytes:
        return hash_secret_raw(
            secret=raw_password.encode("utf-8"),
            salt=salt,
            time_cost=self._settings.time_cost,
            memory_cost=self._settings.memory_cost,
            parallelism=self._settings.parallelism,
            hash_len=self._settings.hash_len,
            type=Type.ID,
        )

    def hash_password(self, raw_password: str) -> tuple[PasswordHash, PasswordSalt]:
        """Hash a raw password with a fresh salt. Returns opaque (hash, salt)."""
        salt = secrets.token_bytes(self._settings.salt_len)
        digest = self._derive(raw_password, salt)
        return (
            PasswordHash(base64.b64encode(digest).decode("ascii")),
            PasswordSalt(base64.b64encode(salt).decode("ascii")),
        )

    def verify_password(
        self,
        raw_password: str,
        password_hash: PasswordHash | str,
        password_salt: PasswordSalt | str,
    ) -> bool:
        """Recompute with the stored salt and compare in constant time.

        Undecodable or unusable hash/salt values verify as ``False``.
        """
        if password_hash is None:
            raise ValueError("password_hash must not be None")
        if password_salt is None:
            raise ValueError("password_salt must not be None")

        try:
            expected = base64.b64decode(str(password_hash), validate=True)
            salt = base64.b64decode(str(password_salt), validate=True)
            computed = self._derive(raw_password, salt)
        except (binascii.Error, ValueError, HashingError):
            return False
        return hmac.compare_digest(computed, expected)
