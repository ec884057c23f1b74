"""Password hashing and random identifiers (pycryptodome)

Hash format: pbkdf2_sha256$<iterations>$<salt hex>$<key hex>
Bearer tokens are stored as their SHA-256 digest.
"""

from __future__ import annotations

import hmac

from Crypto.Hash import SHA256
from Crypto.Protocol.KDF import PBKDF2
from Crypto.Random import get_random_bytes

from app.config import settings

_SCHEME = "pbkdf2_sha256"
_SALT_BYTES = 16
_KEY_BYTES = 32


def _derive(password: str, salt: bytes, iterations: int, key_len: int = _KEY_BYTES) -> bytes:
    return PBKDF2(password, salt, dkLen=key_len, count=iterations, hmac_hash_module=SHA256)


def hash_password(password: str, iterations: int | None = None) -> str:
    """Salted PBKDF2-SHA256 hash in a self-describing string"""
    iterations = iterations or settings.PASSWORD_HASH_ITERATIONS
    salt = get_random_bytes(_SALT_BYTES)
    key = _derive(password, salt, iterations)
    return f"{_SCHEME}${iterations}${salt.hex()}${key.hex()}"


def verify_password(password: str, encoded: str | None) -> bool:
    """Constant-time check of password against hash_password output

    Malformed or foreign-scheme hashes never verify.
    """
    if not encoded:
        return False
    try:
        scheme, iterations, salt_hex, key_hex = encoded.split("$")
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(key_hex)
        count = int(iterations)
    except ValueError:
        return False
    if scheme != _SCHEME or count <= 0:
        return False
    actual = _derive(password, salt, count, key_len=len(expected))
    return hmac.compare_digest(actual, expected)


def generate_token(nbytes: int | None = None) -> str:
    """Random bearer token (hex)"""
    return get_random_bytes(nbytes or settings.API_TOKEN_BYTES).hex()


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a bearer token; only the digest is stored"""
    return SHA256.new(token.encode("utf-8")).hexdigest()


def generate_share_id(length: int | None = None) -> str:
    """Random lowercase hex id of `length` characters"""
    length = length or settings.SHARE_ID_LENGTH
    return get_random_bytes((length + 1) // 2).hex()[:length]
