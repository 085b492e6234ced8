"""Random identity strings for nodes created without an explicit name."""

import logging
import secrets
import string as _string

from ..errors import IdentityGenerationError

logger = logging.getLogger(__name__)

CHARSET = _string.ascii_lowercase


def string(length: int) -> str:
    """Return a random string of lowercase letters.

    Each character is drawn independently from the OS randomness source,
    so there is no shared seed state between calls.

    Args:
        length: Number of characters to produce

    Returns:
        String of exactly ``length`` characters from ``CHARSET``

    Raises:
        ValueError: If length is negative
        IdentityGenerationError: If the randomness source is unavailable
    """
    if length < 0:
        raise ValueError(f"length must be >= 0, got: {length}")

    try:
        return "".join(secrets.choice(CHARSET) for _ in range(length))
    except (OSError, NotImplementedError) as e:
        logger.error(f"Random source failed while generating identity: {e}")
        raise IdentityGenerationError(f"cannot generate random identity: {e}") from e
