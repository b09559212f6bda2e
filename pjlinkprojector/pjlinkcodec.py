"""
Implements the PJLink command line encoding and response line decoding.

Created on 19 Oct 2026
"""

import logging
import re

from .pjlinkclasses import (
    ERROR_TOKENS,
    MAX_PARAMETER_LENGTH,
    PJLinkAuthenticationError,
    PJLinkCommand,
    PJLinkInvalidParameterError,
    PJLinkMalformedResponseError,
    PJLinkProtocolError,
    PJLinkRawCommand,
)

logger = logging.getLogger(__name__)

WHITESPACE = "\r\n\x00"
AUTHENTICATION_ERROR = "PJLINK ERRA"

MNEMONIC_RE = re.compile(r"^[A-Z0-9]{4}$")
CONTROL_CHARACTER_RE = re.compile(r"[\x00-\x1f\x7f]")
RESPONSE_RE = re.compile(r"^%([12])([A-Z0-9]{4})=(.*)$", re.DOTALL)


def encode_command(command: PJLinkRawCommand, digest: str | None = None) -> bytes:
    """
    Encodes a command into a command line.

    If the session is authenticated the digest is prepended to the command line.
    """
    if isinstance(command, PJLinkCommand):
        if not MNEMONIC_RE.match(command.mnemonic):
            raise PJLinkInvalidParameterError(command, command.mnemonic)
        if not isinstance(command.parameter, str):
            raise PJLinkInvalidParameterError(command, command.parameter)
        if len(command.parameter.encode("ascii", errors="replace")) > MAX_PARAMETER_LENGTH:
            raise PJLinkInvalidParameterError(command, command.parameter)
        # A terminator in the parameter would frame more than one command line
        if CONTROL_CHARACTER_RE.search(command.parameter):
            raise PJLinkInvalidParameterError(command, command.parameter)

    line = command.raw_command
    if digest:
        line = f"{digest}{line}"

    try:
        return f"{line}\r".encode("ascii")
    except UnicodeEncodeError as ex:
        raise PJLinkInvalidParameterError(command, command.parameter) from ex


def decode_line(line: bytes) -> str:
    """
    Decodes a received line and strips the terminator.

    Some projectors pad their lines with NUL characters.
    """
    return line.decode("ascii", errors="replace").strip(WHITESPACE)


def check_authentication(command: PJLinkRawCommand, response: str) -> None:
    """
    Raises a PJLinkAuthenticationError if the projector rejected the authentication digest.
    """
    if response.upper() == AUTHENTICATION_ERROR:
        logger.error("Projector rejected authentication for command %s", command)
        raise PJLinkAuthenticationError(command)


def decode_response(command: PJLinkCommand, response: str) -> str:
    """
    Validates a response line against the command it answers and returns the payload.

    Error tokens are raised as their matching PJLinkProjectorError.
    """
    check_authentication(command, response)

    matches = RESPONSE_RE.match(response)
    if not matches:
        logger.error("Unexpected response format, response: %s", response)
        raise PJLinkMalformedResponseError(command, response)

    if matches.group(2) != command.mnemonic:
        logger.error(
            "Response %s does not match command %s", response, command.raw_command
        )
        raise PJLinkProtocolError(command, response)

    if matches.group(1) != command.pjlink_class.value:
        logger.debug(
            "Response class %s differs from command class %s",
            matches.group(1),
            command.pjlink_class.value,
        )

    payload = matches.group(3)

    error = ERROR_TOKENS.get(payload)
    if error is not None:
        logger.warning("Command %s returned %s", command.raw_command, payload)
        raise error(command)

    logger.debug("Processed response: %s", payload)

    return payload
