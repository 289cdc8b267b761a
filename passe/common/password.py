"""
Deterministic per-domain password derivation.

A password is derived by repeatedly hashing ``master + suffix + ":" + domain``
and re-encoding the digest as alphanumerics until the prefix of the
requested length starts lowercase and contains an uppercase letter and a
digit. Nothing is stored; the same inputs always give the same password.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import string

from passe.common.config import Config
from passe.common.exceptions import ValidationError
from passe.common.models import DomainConfig

logger = logging.getLogger(__name__)

_DEFAULTS = Config()

# Encoding artifacts are replaced so the buffer stays alphanumeric:
# "+" -> "9", "/" -> "8", padding -> "A"
_SUBSTITUTIONS = bytes.maketrans(b"+/=", b"98A")


def _iterate(value: bytes) -> bytes:
    digest = hashlib.md5(value, usedforsecurity=False).digest()
    return base64.b64encode(digest).translate(_SUBSTITUTIONS)


def _is_valid(candidate: str) -> bool:
    return (
        bool(candidate)
        and candidate[0] in string.ascii_lowercase
        and any(ch in string.ascii_uppercase for ch in candidate)
        and any(ch in string.digits for ch in candidate)
    )


def generate(
    domain: str,
    master_password: str,
    config: DomainConfig,
    *,
    min_rounds: int = _DEFAULTS.MIN_ROUNDS,
    max_rounds: int = _DEFAULTS.MAX_ROUNDS,
) -> str:
    """Derive the password for ``domain``.

    Args:
        domain: Site or service name
        master_password: The user's master secret
        config: Domain settings; ``length`` and ``suffix`` are used
        min_rounds: Rounds always run before checking validity
        max_rounds: Total rounds after which generation gives up

    Returns:
        A password of exactly ``config.length`` characters

    Raises:
        ValidationError: No valid candidate within ``max_rounds`` rounds
    """
    seed = f"{master_password}{config.suffix or ''}:{domain}"
    value = seed.encode()
    rounds = 0
    while rounds < min_rounds:
        value = _iterate(value)
        rounds += 1

    while not _is_valid(value[: config.length].decode("ascii")):
        if rounds >= max_rounds:
            msg = f"Didn't find a valid password after {rounds} iterations"
            raise ValidationError(msg)
        value = _iterate(value)
        rounds += 1
        logger.debug("Iteration: %d", rounds)

    return value[: config.length].decode("ascii")
