import hmac

import bcrypt

# bcrypt only consumes the first 72 bytes of a secret.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> tuple[bytes, bytes]:
    """
    Hashes a plain text password with a freshly generated salt.

    Returns:
        A (digest, salt) pair; both must be stored to verify the password later.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt), salt


def check_password(password: str, password_hash: bytes, password_salt: bytes) -> bool:
    """Recomputes the digest with the stored salt and compares it in constant time."""
    computed = bcrypt.hashpw(_encode(password), password_salt)
    return hmac.compare_digest(computed, password_hash)
