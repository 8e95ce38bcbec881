"""
Password hashing.

Hashes are Argon2id PHC strings (``$argon2id$v=19$m=...,t=...,p=...$salt$digest``)
so each stored value carries its own salt and cost parameters. Changing the
``ARGON2_*`` settings only affects hashes created afterwards; older hashes
keep verifying with the parameters they were made with, and are replaced
on the next successful verification (see ``verify_and_update``).
"""
import logging

from argon2 import PasswordHasher
from argon2.exceptions import HashingError as Argon2HashingError
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher

from forum.config import settings
from forum.exceptions import HashingError

logger = logging.getLogger(__name__)

password_hash = PasswordHash(
    (
        Argon2Hasher(
            time_cost=settings.ARGON2_TIME_COST,
            memory_cost=settings.ARGON2_MEMORY_COST,
            parallelism=settings.ARGON2_PARALLELISM,
        ),
    )
)

# Verification reads the cost parameters from the hash itself. pwdlib's
# verify folds a corrupt hash into a plain mismatch, so the check goes
# straight to argon2-cffi, which reports the two separately.
_verifier = PasswordHasher()


def hash_password(password: str) -> str:
    """Derive a freshly salted hash for *password*."""
    try:
        return password_hash.hash(password)
    except (Argon2HashingError, TypeError, ValueError) as exc:
        raise HashingError("Could not hash password") from exc


def verify_password(password: str, hashed: str) -> bool:
    """
    Check *password* against *hashed* in constant time.

    Raises ``HashingError`` when *hashed* is not a hash this service can
    read, rather than reporting a plain mismatch.
    """
    if not Argon2Hasher.identify(hashed):
        logger.error("Stored password hash has an unrecognised format")
        raise HashingError("Stored password hash is malformed")
    try:
        return _verifier.verify(hashed, password)
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError) as exc:
        logger.error("Stored password hash could not be decoded: %s", exc)
        raise HashingError("Stored password hash is malformed") from exc
    except (TypeError, ValueError) as exc:
        raise HashingError("Could not verify password") from exc


def needs_rehash(hashed: str) -> bool:
    """True when *hashed* was made with parameters other than the current ones."""
    return password_hash.current_hasher.check_needs_rehash(hashed)


def verify_and_update(password: str, hashed: str) -> tuple[bool, str | None]:
    """
    Verify *password* and, when it matches a hash made with outdated
    parameters, return a replacement hash alongside the result.
    """
    if not verify_password(password, hashed):
        return False, None
    if needs_rehash(hashed):
        return True, hash_password(password)
    return True, None
