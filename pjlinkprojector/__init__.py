"""
Implements the PJLink projector library for controlling projectors over the PJLink protocol.

Created on 19 Oct 2026
"""

from ._version import __version__
from .pjlinkauth import calculate_digest
from .pjlinkclasses import (
    PJLinkAuthenticationError,
    PJLinkAuthenticationRequiredError,
    PJLinkClass,
    PJLinkCommand,
    PJLinkCommandName,
    PJLinkDeviceBusyError,
    PJLinkDeviceFailureError,
    PJLinkInvalidParameterError,
    PJLinkMalformedResponseError,
    PJLinkOutOfParameterError,
    PJLinkProjectorError,
    PJLinkProtocolError,
    PJLinkRawCommand,
    PJLinkTooBusyError,
    PJLinkUndefinedCommandError,
)
from .pjlinkconnection import (
    DEFAULT_PORT,
    PJLinkConnection,
    PJLinkConnectionError,
    PJLinkConnectionTimeoutError,
    PJLinkNotConnectedError,
    PJLinkTCPConnection,
)
from .pjlinkprojector import PJLinkProjector, PJLinkProjectorTCP
from .pjlinkstatus import (
    AVMuteStatus,
    ErrorLevel,
    ErrorStatus,
    FreezeStatus,
    InputSource,
    InputType,
    LampStatus,
    MuteTarget,
    PowerStatus,
    VolumeAdjust,
)
