"""
Implements the PJLinkProjector command and error classes.

Created on 19 Oct 2026
"""

from enum import Enum

QUERY = "?"
MAX_PARAMETER_LENGTH = 128


class PJLinkClass(Enum):
    """
    PJLink protocol class.
    """

    ONE = "1"
    TWO = "2"


class PJLinkCommandName(Enum):
    """
    The known PJLink command mnemonics.
    """

    # Class 1
    POWER = "POWR"
    INPUT = "INPT"
    AV_MUTE = "AVMT"
    ERROR_STATUS = "ERST"
    LAMP = "LAMP"
    INPUT_LIST = "INST"
    NAME = "NAME"
    MANUFACTURER = "INF1"
    PRODUCT_NAME = "INF2"
    OTHER_INFO = "INFO"
    CLASS = "CLSS"
    # Class 2
    SERIAL_NUMBER = "SNUM"
    SOFTWARE_VERSION = "SVER"
    INPUT_NAME = "INNM"
    INPUT_RESOLUTION = "IRES"
    RECOMMENDED_RESOLUTION = "RRES"
    FILTER_TIME = "FILT"
    LAMP_MODEL = "RLMP"
    FILTER_MODEL = "RFIL"
    SPEAKER_VOLUME = "SVOL"
    MICROPHONE_VOLUME = "MVOL"
    FREEZE = "FREZ"

    @property
    def pjlink_class(self) -> PJLinkClass:
        """
        The lowest protocol class that defines the command.
        """
        if self in _CLASS1_COMMANDS:
            return PJLinkClass.ONE

        return PJLinkClass.TWO


_CLASS1_COMMANDS = [
    PJLinkCommandName.POWER,
    PJLinkCommandName.INPUT,
    PJLinkCommandName.AV_MUTE,
    PJLinkCommandName.ERROR_STATUS,
    PJLinkCommandName.LAMP,
    PJLinkCommandName.INPUT_LIST,
    PJLinkCommandName.NAME,
    PJLinkCommandName.MANUFACTURER,
    PJLinkCommandName.PRODUCT_NAME,
    PJLinkCommandName.OTHER_INFO,
    PJLinkCommandName.CLASS,
]


class PJLinkRawCommand:
    """
    PJLink Raw Command.
    """

    def __init__(self, raw_command: str):
        assert raw_command is not None

        self._name = None
        self._parameter = None
        self._raw_command = raw_command

    @property
    def name(self) -> PJLinkCommandName | None:
        """
        The command name.
        """
        return self._name

    @property
    def parameter(self) -> str | None:
        """
        The command parameter.
        """
        return self._parameter

    @property
    def raw_command(self) -> str:
        """
        The raw command, without authentication digest and terminator.
        """
        return self._raw_command

    def __str__(self):
        return self._raw_command


class PJLinkCommand(PJLinkRawCommand):
    """
    PJLink Command.

    A command name together with its parameter. Queries use the ? parameter.
    """

    def __init__(
        self,
        name: PJLinkCommandName,
        parameter: str = QUERY,
        pjlink_class: PJLinkClass | None = None,
    ):
        assert name is not None
        assert parameter is not None

        name = PJLinkCommandName(name)
        if pjlink_class is None:
            pjlink_class = name.pjlink_class
        pjlink_class = PJLinkClass(pjlink_class)

        super().__init__(f"%{pjlink_class.value}{name.value} {parameter}")

        self._name = name
        self._parameter = parameter
        self._pjlink_class = pjlink_class

    @property
    def mnemonic(self) -> str:
        """
        The four character command mnemonic.
        """
        return self._name.value

    @property
    def pjlink_class(self) -> PJLinkClass:
        """
        The protocol class the command is sent with.
        """
        return self._pjlink_class

    @property
    def is_query(self) -> bool:
        """
        True if the command queries a value, False if the command sets a value.
        """
        return self._parameter.startswith(QUERY)

    def __eq__(self, other):
        if not isinstance(other, PJLinkCommand):
            return NotImplemented
        return self._raw_command == other.raw_command

    def __hash__(self):
        return hash(self._raw_command)

    def __repr__(self):
        return f"PJLinkCommand({self._raw_command!r})"


class PJLinkProjectorError(Exception):
    """
    Generic PJLink Projector error.
    """

    def __init__(self, command: PJLinkRawCommand | None = None):
        super().__init__()
        self.command = command

    def __str__(self):
        return f"Error for command '{self.command}'"


class PJLinkProtocolError(PJLinkProjectorError):
    """
    Protocol error.

    When the projector sends something that does not follow the PJLink protocol, like a
    malformed greeting or a response to a different command.
    """

    def __init__(self, command=None, response=None):
        super().__init__(command)
        self.response = response

    def __str__(self):
        if self.command is None:
            return f"Protocol error, received: {self.response}"
        return f"Protocol error for command '{self.command}', response: {self.response}"


class PJLinkAuthenticationRequiredError(PJLinkProjectorError):
    """
    Authentication required error.

    If the projector requires authentication but no password is given.
    """

    def __str__(self):
        return "Projector requires authentication but no password is given"


class PJLinkAuthenticationError(PJLinkProjectorError):
    """
    Authentication error.

    If the projector rejects the authentication digest, it responds with ERRA.
    """

    def __str__(self):
        return f"Authentication failed for command '{self.command}'"


class PJLinkUndefinedCommandError(PJLinkProjectorError):
    """
    Undefined command error.

    If the projector does not know the command it responds with ERR1.
    """

    def __str__(self):
        return f"Undefined command '{self.command}'"


class PJLinkOutOfParameterError(PJLinkProjectorError):
    """
    Out of parameter error.

    If the parameter is not valid for the projector it responds with ERR2.
    """

    def __str__(self):
        return f"Out of parameter for command '{self.command}'"


class PJLinkDeviceBusyError(PJLinkProjectorError):
    """
    Device busy error.

    If the command can not be executed at this time the projector responds with ERR3, for
    instance while the projector is warming up or cooling down.
    """

    def __str__(self):
        return f"Projector unavailable for command '{self.command}'"


class PJLinkDeviceFailureError(PJLinkProjectorError):
    """
    Device failure error.

    If the projector has a failure it responds with ERR4.
    """

    def __str__(self):
        return f"Projector failure for command '{self.command}'"


class PJLinkMalformedResponseError(PJLinkProjectorError):
    """
    Malformed response error.

    If the response payload does not match the expected format.
    """

    def __init__(self, command=None, response=None):
        super().__init__(command)
        self.response = response

    def __str__(self):
        return f"Malformed response for command '{self.command}', response: {self.response}"


class PJLinkInvalidParameterError(PJLinkProjectorError, ValueError):
    """
    Invalid parameter error.

    If a parameter is outside of the domain of the command, it's never sent to the projector.
    """

    def __init__(self, command=None, parameter=None):
        super().__init__(command)
        self.parameter = parameter

    def __str__(self):
        if self.command is None:
            return f"Invalid parameter '{self.parameter}'"
        return f"Invalid parameter '{self.parameter}' for command '{self.command}'"


class PJLinkTooBusyError(PJLinkProjectorError):
    """
    Too busy error.

    If the connection is already processing another command.
    """

    def __str__(self):
        return f"Too busy to send '{self.command}'"


ERROR_TOKENS = {
    "ERR1": PJLinkUndefinedCommandError,
    "ERR2": PJLinkOutOfParameterError,
    "ERR3": PJLinkDeviceBusyError,
    "ERR4": PJLinkDeviceFailureError,
    "ERRA": PJLinkAuthenticationError,
}
