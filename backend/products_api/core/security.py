# backend/products_api/core/security.py

import secrets

from passlib.context import CryptContext

# bcrypt first: the users table is shared with services that store
# bcrypt($2a$/$2b$) hashes of password + salt
pwd_context = CryptContext(schemes=["bcrypt", "pbkdf2_sha256"], deprecated="auto")


def generate_salt() -> str:
    return secrets.token_hex(16)


def hash_password(password: str, salt: str) -> str:
    return pwd_context.hash((password or "") + (salt or ""))


def verify_password(plain_password: str, salt: str, hashed_password) -> bool:
    """Check ``plain_password + salt`` against a stored hash.

    Unrecognized or malformed hashes count as a mismatch instead of raising,
    so a bad row in the users table can never turn into a 500.
    """
    if not hashed_password:
        return False

    if isinstance(hashed_password, (bytes, bytearray)):
        hashed_password = hashed_password.decode("utf-8", errors="ignore")

    try:
        return pwd_context.verify((plain_password or "") + (salt or ""), str(hashed_password).strip())
    except (ValueError, TypeError):
        return False


def dummy_verify() -> bool:
    """Spend as long as a real check, for usernames that do not exist."""
    pwd_context.dummy_verify()
    return False
