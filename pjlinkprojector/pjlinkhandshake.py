"""
Implements the PJLink session handshake.

Directly after connecting the projector sends a greeting:
  PJLINK 0            no authentication
  PJLINK 1 <seed>     authentication, seed is 8 hexadecimal characters
When authentication is required every command line is prefixed with the digest of the seed
and the password.

Created on 19 Oct 2026
"""

import logging
import re
from dataclasses import dataclass

from .pjlinkauth import calculate_digest
from .pjlinkclasses import (
    PJLinkAuthenticationError,
    PJLinkAuthenticationRequiredError,
    PJLinkInvalidParameterError,
    PJLinkProtocolError,
)
from .pjlinkcodec import AUTHENTICATION_ERROR, decode_line
from .pjlinkconnection import PJLinkConnection

logger = logging.getLogger(__name__)

GREETING_RE = re.compile(r"^PJLINK (?:(0)|(1) ([0-9A-Fa-f]{8}))$")


@dataclass(frozen=True)
class PJLinkSession:
    """
    The outcome of a successful handshake.
    """

    digest: str | None = None

    @property
    def authenticated(self) -> bool:
        return self.digest is not None


def parse_greeting(greeting: str) -> str | None:
    """
    Parses the greeting and returns the authentication seed, or None if no authentication is
    required.
    """
    if greeting.upper() == AUTHENTICATION_ERROR:
        raise PJLinkAuthenticationError()

    matches = GREETING_RE.match(greeting)
    if not matches:
        logger.error("Unexpected greeting: %s", greeting)
        raise PJLinkProtocolError(response=greeting)

    if matches.group(1) is not None:
        return None

    return matches.group(3)


async def handshake(
    connection: PJLinkConnection, password: str | None = None
) -> PJLinkSession:
    """
    Reads the greeting from a freshly opened connection and authenticates if required.
    """
    greeting = decode_line(await connection.readline())
    logger.debug("Greeting: %s", greeting)

    seed = parse_greeting(greeting)
    if seed is None:
        logger.debug("No authentication required")
        return PJLinkSession()

    if not password:
        logger.error("Projector requires authentication but no password is given")
        raise PJLinkAuthenticationRequiredError()

    if not password.isascii():
        logger.error("Password contains non ASCII characters")
        raise PJLinkInvalidParameterError(parameter="password")

    logger.debug("Authentication required")
    return PJLinkSession(calculate_digest(seed, password))
