"""Password digests: bcrypt for writes, read compatibility for historical formats.

Stored digests are self-describing. bcrypt output starts with ``$2b$`` (or the
older ``$2a$``/``$2y$`` variants) and embeds cost and salt; records written by
the first dashboard revisions carry either the ``pseudoSalt_`` pseudo-hash or
the bare password. ``verify_password`` dispatches on that prefix so legacy
accounts keep working while ``hash_password`` only ever writes bcrypt.
"""

import hmac
from enum import StrEnum

import bcrypt

from vehiclevault.core.config import get_settings

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
LEGACY_PREFIX = "pseudoSalt_"

# Min/max lengths for account fields (input validation).
FULL_NAME_MAX_LEN = 50
COMPANY_MAX_LEN = 50
PHONE_MAX_LEN = 20
PASSWORD_MAX_LEN = 128


class DigestScheme(StrEnum):
    BCRYPT = "bcrypt"
    LEGACY = "legacy"
    PLAINTEXT = "plaintext"


CURRENT_SCHEME = DigestScheme.BCRYPT


def _to_int32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


def legacy_pseudo_hash(plain_password: str) -> str:
    """
    Reproduce the historical ``pseudoSalt_<hex>`` digest.

    32-bit rolling hash (h * 31 + unit) over UTF-16 code units with signed
    wraparound, rendered as signed hex. Not a security primitive; only used to
    check records written before the move to bcrypt.
    """
    if not plain_password:
        return ""
    units = plain_password.encode("utf-16-le")
    h = 0
    for i in range(0, len(units), 2):
        unit = units[i] | (units[i + 1] << 8)
        h = _to_int32(_to_int32(h << 5) - h + unit)
    return f"{LEGACY_PREFIX}{h:x}"


def identify_scheme(digest: str | None) -> DigestScheme | None:
    """Return the scheme that produced ``digest``, or None when there is nothing to check."""
    if not digest or not isinstance(digest, str):
        return None
    if digest.startswith(BCRYPT_PREFIXES):
        return DigestScheme.BCRYPT
    if digest.startswith(LEGACY_PREFIX):
        return DigestScheme.LEGACY
    return DigestScheme.PLAINTEXT


def _bcrypt_input(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage with the current scheme. Length checks belong to the caller."""
    cost = rounds if rounds is not None else get_settings().BCRYPT_ROUNDS
    return bcrypt.hashpw(_bcrypt_input(plain_password), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, digest: str | None) -> bool:
    """
    Verify a plain password against a stored digest of any known scheme.

    Missing, malformed or disabled-scheme digests simply return False, the same
    answer as a wrong password.
    """
    if not isinstance(plain_password, str):
        return False
    match identify_scheme(digest):
        case DigestScheme.BCRYPT:
            try:
                return bcrypt.checkpw(_bcrypt_input(plain_password), digest.encode("utf-8"))
            except (ValueError, TypeError):
                return False
        case DigestScheme.LEGACY:
            candidate = legacy_pseudo_hash(plain_password)
            return hmac.compare_digest(candidate.encode("utf-8"), digest.encode("utf-8"))
        case DigestScheme.PLAINTEXT:
            if not get_settings().ALLOW_PLAINTEXT_DIGESTS:
                return False
            return hmac.compare_digest(plain_password.encode("utf-8"), digest.encode("utf-8"))
        case None:
            return False


def needs_rehash(digest: str | None, rounds: int | None = None) -> bool:
    """True when ``digest`` was not written by the current scheme at the configured cost."""
    if identify_scheme(digest) is not CURRENT_SCHEME:
        return True
    cost = rounds if rounds is not None else get_settings().BCRYPT_ROUNDS
    try:
        stored_cost = int(digest.split("$")[2])
    except (IndexError, ValueError):
        return True
    return stored_cost < cost
