"""
Implements the PJLink status vocabulary.

Every status value a projector reports maps onto exactly one member of the enumerations in this
module. Payloads which don't, raise a PJLinkMalformedResponseError.

Created on 19 Oct 2026
"""

import logging
import string
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

from .pjlinkclasses import (
    PJLinkClass,
    PJLinkCommand,
    PJLinkCommandName,
    PJLinkInvalidParameterError,
    PJLinkMalformedResponseError,
)

logger = logging.getLogger(__name__)

SUCCESS = "OK"


class PowerStatus(IntEnum):
    """
    Projector power status.
    """

    OFF = 0
    ON = 1
    COOLING = 2
    WARMING = 3


class InputType(IntEnum):
    """
    Input source types, the first digit of an input code.
    """

    RGB = 1
    VIDEO = 2
    DIGITAL = 3
    STORAGE = 4
    NETWORK = 5
    # Class 2 only
    INTERNAL = 6


CLASS1_INPUT_TYPES = [
    InputType.RGB,
    InputType.VIDEO,
    InputType.DIGITAL,
    InputType.STORAGE,
    InputType.NETWORK,
]
CLASS1_INPUT_NUMBERS = "123456789"
CLASS2_INPUT_NUMBERS = CLASS1_INPUT_NUMBERS + string.ascii_uppercase


@dataclass(frozen=True)
class InputSource:
    """
    An input source, the combination of an input type and an input number.

    Class 1 projectors number their inputs 1 to 9, class 2 projectors also use A to Z.
    """

    type: InputType
    number: str

    @property
    def code(self) -> str:
        """
        The two character input code as used on the wire.
        """
        return f"{self.type.value}{self.number}"

    def valid_for(self, pjlink_class: PJLinkClass) -> bool:
        """
        Tests if the input source can be used with the given protocol class.
        """
        if not isinstance(self.type, InputType):
            return False
        if not isinstance(self.number, str) or len(self.number) != 1:
            return False

        if pjlink_class == PJLinkClass.ONE:
            return (
                self.type in CLASS1_INPUT_TYPES
                and self.number in CLASS1_INPUT_NUMBERS
            )

        return self.number in CLASS2_INPUT_NUMBERS

    def __str__(self):
        return f"{self.type.name} {self.number}"


class MuteTarget(IntEnum):
    """
    What an A/V mute command acts on.
    """

    VIDEO = 1
    AUDIO = 2
    AUDIO_VIDEO = 3


@dataclass(frozen=True)
class AVMuteStatus:
    """
    Audio and video mute state.
    """

    video: bool
    audio: bool


_AV_MUTE_STATUS = {
    "11": AVMuteStatus(video=True, audio=False),
    "21": AVMuteStatus(video=False, audio=True),
    "31": AVMuteStatus(video=True, audio=True),
    "30": AVMuteStatus(video=False, audio=False),
}


class ErrorLevel(IntEnum):
    """
    Error level of a single projector subsystem.
    """

    OK = 0
    WARNING = 1
    ERROR = 2


@dataclass(frozen=True)
class ErrorStatus:
    """
    Error levels of the projector subsystems, in the order the projector reports them.
    """

    fan: ErrorLevel
    lamp: ErrorLevel
    temperature: ErrorLevel
    cover_open: ErrorLevel
    filter: ErrorLevel
    other: ErrorLevel

    def has_errors(self) -> bool:
        """
        True if any of the subsystems reports a warning or an error.
        """
        return any(level != ErrorLevel.OK for level in self.levels())

    def levels(self) -> tuple[ErrorLevel, ...]:
        return (
            self.fan,
            self.lamp,
            self.temperature,
            self.cover_open,
            self.filter,
            self.other,
        )


@dataclass(frozen=True)
class LampStatus:
    """
    Usage time and state of a single lamp.
    """

    hours: int
    on: bool


class FreezeStatus(IntEnum):
    OFF = 0
    ON = 1


class VolumeAdjust(IntEnum):
    DOWN = 0
    UP = 1


def _malformed(command: PJLinkCommand, payload: str) -> PJLinkMalformedResponseError:
    logger.error("Unexpected %s response: %s", command.name, payload)
    return PJLinkMalformedResponseError(command, payload)


def _parse_enum(enum_type, command: PJLinkCommand, payload: str):
    if len(payload) != 1 or not payload.isdigit():
        raise _malformed(command, payload)
    try:
        return enum_type(int(payload))
    except ValueError as ex:
        raise _malformed(command, payload) from ex


def parse_power(command: PJLinkCommand, payload: str) -> PowerStatus:
    """
    Parses a power status payload, a single digit 0 to 3.
    """
    return _parse_enum(PowerStatus, command, payload)


def format_power(on: bool) -> str:
    return "1" if on else "0"


def parse_input_source(
    code: str, pjlink_class: PJLinkClass = PJLinkClass.TWO
) -> InputSource | None:
    """
    Parses a two character input code, returns None if the code is not valid for the protocol
    class.
    """
    if len(code) != 2 or not code[0].isdigit():
        return None
    try:
        input_type = InputType(int(code[0]))
    except ValueError:
        return None

    source = InputSource(input_type, code[1])
    if not source.valid_for(pjlink_class):
        return None

    return source


def parse_input(command: PJLinkCommand, payload: str) -> InputSource:
    """
    Parses an input payload like 31, input type 3 and input number 1.
    """
    source = parse_input_source(payload, command.pjlink_class)
    if source is None:
        raise _malformed(command, payload)

    return source


def format_input(
    source: InputSource, pjlink_class: PJLinkClass = PJLinkClass.ONE
) -> str:
    if not isinstance(source, InputSource) or not isinstance(source.type, InputType):
        raise PJLinkInvalidParameterError(parameter=source)
    if not source.valid_for(pjlink_class):
        raise PJLinkInvalidParameterError(parameter=source)

    return source.code


def parse_av_mute(command: PJLinkCommand, payload: str) -> AVMuteStatus:
    """
    Parses an A/V mute payload.
    """
    status = _AV_MUTE_STATUS.get(payload)
    if status is None:
        raise _malformed(command, payload)

    return status


def format_av_mute_status(status: AVMuteStatus) -> str:
    for payload, _status in _AV_MUTE_STATUS.items():
        if _status == status:
            return payload

    raise PJLinkInvalidParameterError(parameter=status)


def format_av_mute(target: MuteTarget, muted: bool) -> str:
    try:
        target = MuteTarget(target)
    except ValueError as ex:
        raise PJLinkInvalidParameterError(parameter=target) from ex

    return f"{target.value}{1 if muted else 0}"


def parse_error_status(command: PJLinkCommand, payload: str) -> ErrorStatus:
    """
    Parses an error status payload, six digits, one for every subsystem.
    """
    if len(payload) != 6:
        raise _malformed(command, payload)

    levels = [_parse_enum(ErrorLevel, command, c) for c in payload]

    return ErrorStatus(*levels)


def format_error_status(status: ErrorStatus) -> str:
    return "".join(str(level.value) for level in status.levels())


def iter_lamp_status(command: PJLinkCommand, payload: str) -> Iterator[LampStatus]:
    """
    Yields the status of every lamp in a lamp payload.

    The payload is a space separated sequence of usage hours and on/off flag pairs, one pair
    for every lamp. The number of lamps is device dependent.
    """
    tokens = iter(payload.split())
    for hours in tokens:
        flag = next(tokens, None)
        if flag is None:
            # Odd number of tokens
            raise _malformed(command, payload)
        if not hours.isdigit() or flag not in ("0", "1"):
            raise _malformed(command, payload)

        yield LampStatus(int(hours), flag == "1")


def parse_lamps(command: PJLinkCommand, payload: str) -> list[LampStatus]:
    lamps = list(iter_lamp_status(command, payload))
    if len(lamps) == 0:
        raise _malformed(command, payload)

    return lamps


def format_lamps(lamps: list[LampStatus]) -> str:
    return " ".join(f"{lamp.hours} {1 if lamp.on else 0}" for lamp in lamps)


def parse_hours(command: PJLinkCommand, payload: str) -> int:
    if not payload.isdigit():
        raise _malformed(command, payload)

    return int(payload)


def parse_freeze(command: PJLinkCommand, payload: str) -> FreezeStatus:
    return _parse_enum(FreezeStatus, command, payload)


def format_freeze(frozen: bool) -> str:
    return "1" if frozen else "0"


def format_volume_adjust(adjust: VolumeAdjust) -> str:
    try:
        adjust = VolumeAdjust(adjust)
    except ValueError as ex:
        raise PJLinkInvalidParameterError(parameter=adjust) from ex

    return str(adjust.value)


def parse_text(command: PJLinkCommand, payload: str) -> str:
    """
    Informational responses are passed through with only surrounding whitespace removed.
    """
    # pylint: disable=unused-argument
    return payload.strip()


def parse_success(command: PJLinkCommand, payload: str) -> None:
    """
    Set commands respond with OK.
    """
    if payload != SUCCESS:
        raise _malformed(command, payload)


_QUERY_PARSERS = {
    PJLinkCommandName.POWER: parse_power,
    PJLinkCommandName.INPUT: parse_input,
    PJLinkCommandName.AV_MUTE: parse_av_mute,
    PJLinkCommandName.ERROR_STATUS: parse_error_status,
    PJLinkCommandName.LAMP: parse_lamps,
    PJLinkCommandName.INPUT_LIST: parse_text,
    PJLinkCommandName.NAME: parse_text,
    PJLinkCommandName.MANUFACTURER: parse_text,
    PJLinkCommandName.PRODUCT_NAME: parse_text,
    PJLinkCommandName.OTHER_INFO: parse_text,
    PJLinkCommandName.CLASS: parse_text,
    PJLinkCommandName.SERIAL_NUMBER: parse_text,
    PJLinkCommandName.SOFTWARE_VERSION: parse_text,
    PJLinkCommandName.INPUT_NAME: parse_text,
    PJLinkCommandName.INPUT_RESOLUTION: parse_text,
    PJLinkCommandName.RECOMMENDED_RESOLUTION: parse_text,
    PJLinkCommandName.FILTER_TIME: parse_hours,
    PJLinkCommandName.LAMP_MODEL: parse_text,
    PJLinkCommandName.FILTER_MODEL: parse_text,
    PJLinkCommandName.FREEZE: parse_freeze,
}


def decode_payload(command: PJLinkCommand, payload: str):
    """
    Decodes the payload of a successful response into a typed value.
    """
    if not command.is_query:
        return parse_success(command, payload)

    parser = _QUERY_PARSERS[command.name]

    return parser(command, payload)
