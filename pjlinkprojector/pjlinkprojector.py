"""
Implements the PJLinkProjector class for controlling PJLink projectors.

Created on 19 Oct 2026
"""

import asyncio
import logging

from .pjlinkclasses import (
    QUERY,
    PJLinkAuthenticationError,
    PJLinkClass,
    PJLinkCommand,
    PJLinkCommandName,
    PJLinkInvalidParameterError,
    PJLinkProtocolError,
    PJLinkRawCommand,
    PJLinkTooBusyError,
)
from .pjlinkcodec import decode_line, decode_response, encode_command
from .pjlinkconnection import (
    DEFAULT_PORT,
    PJLinkConnection,
    PJLinkNotConnectedError,
    PJLinkTCPConnection,
)
from .pjlinkhandshake import PJLinkSession, handshake
from .pjlinkstatus import (
    AVMuteStatus,
    ErrorStatus,
    FreezeStatus,
    InputSource,
    LampStatus,
    MuteTarget,
    PowerStatus,
    VolumeAdjust,
    decode_payload,
    format_av_mute,
    format_av_mute_status,
    format_freeze,
    format_input,
    format_power,
    format_volume_adjust,
    parse_input_source,
)

logger = logging.getLogger(__name__)


class PJLinkProjector:
    """
    PJLinkProjector base class for controlling PJLink projectors.

    Every operation sends exactly one command and reads exactly one response. Only one command
    can be outstanding at a time.
    """

    connection: PJLinkConnection | None = None
    session: PJLinkSession | None = None
    unique_id = None

    def __init__(self, connection: PJLinkConnection, password: str | None = None):
        """
        Initialises the PJLinkProjector object.
        """
        assert connection is not None

        self.connection = connection
        self._password = password
        if self.unique_id is None:
            self.unique_id = str(connection)

        self._connection_lock = asyncio.Lock()

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await self.disconnect()

    def busy(self):
        """
        True if the connection is already in use.
        """
        return self._connection_lock.locked()

    async def connect(self) -> bool:
        """
        Connect to the PJLink projector and perform the session handshake.
        """
        if self.connected():
            return True

        logger.info("Connecting to %s", self.unique_id)
        await self.connection.open()

        try:
            self.session = await handshake(self.connection, self._password)
        except BaseException:
            await self._disconnect()
            raise

        logger.info("Device %s available", self.unique_id)

        return True

    def connected(self) -> bool:
        """
        True if there is a connection with the projector.
        """
        return (
            self.connection is not None
            and self.connection.is_open()
            and self.session is not None
        )

    async def _disconnect(self):
        self.session = None
        await self.connection.close()

    async def disconnect(self) -> bool:
        """
        Disconnect from the PJLink projector.
        """
        if self.connected():
            logger.info("Disconnecting from %s", self.unique_id)
        await self._disconnect()

        return not self.connected()

    async def _exchange(self, command: PJLinkRawCommand) -> str:
        """
        Writes a single command line and reads a single response line.
        """
        if not self.connected():
            raise PJLinkNotConnectedError()

        # Encoding validates the command, nothing is written if it fails
        data = encode_command(command, self.session.digest)

        if self._connection_lock.locked():
            raise PJLinkTooBusyError(command)

        async with self._connection_lock:
            logger.debug("command %s", command.raw_command)
            await self.connection.write(data)

            response = decode_line(await self.connection.readline())
            logger.debug("Response: %s", response)

            return response

    async def _send_command(self, command: PJLinkCommand) -> str:
        """
        Send a command to the PJLink projector and return the response payload.
        """
        response = await self._exchange(command)

        try:
            return decode_response(command, response)
        except (PJLinkAuthenticationError, PJLinkProtocolError):
            logger.error("Problem communicating with %s", self.unique_id)
            # The session can't be trusted anymore
            await self._disconnect()
            raise

    async def _query(
        self,
        name: PJLinkCommandName,
        parameter: str = QUERY,
        pjlink_class: PJLinkClass | None = None,
    ):
        command = PJLinkCommand(name, parameter, pjlink_class)
        payload = await self._send_command(command)

        return decode_payload(command, payload)

    async def _set(
        self,
        name: PJLinkCommandName,
        parameter: str,
        pjlink_class: PJLinkClass | None = None,
    ) -> bool:
        command = PJLinkCommand(name, parameter, pjlink_class)
        payload = await self._send_command(command)
        decode_payload(command, payload)

        return True

    async def send_command(
        self,
        name: PJLinkCommandName | str,
        parameter: str = QUERY,
        pjlink_class: PJLinkClass | None = None,
    ) -> str:
        """
        Send a command to the PJLink projector and return the undecoded response payload.

        Error responses are raised like they are for the typed operations.
        """
        try:
            name = PJLinkCommandName(name)
        except ValueError as ex:
            raise PJLinkInvalidParameterError(parameter=name) from ex

        return await self._send_command(PJLinkCommand(name, parameter, pjlink_class))

    async def send_raw_command(self, raw_command: str) -> str:
        """
        Send a raw command to the PJLink projector.

        The raw command is sent as is, prefixed with the authentication digest if needed. The
        response line is returned without any interpretation.
        """
        return await self._exchange(PJLinkRawCommand(raw_command))

    async def get_power(self) -> PowerStatus:
        """
        Get the current power status.
        """
        return await self._query(PJLinkCommandName.POWER)

    async def set_power(self, on: bool) -> bool:
        """
        Turn the projector on or off.
        """
        return await self._set(PJLinkCommandName.POWER, format_power(on))

    async def turn_on(self) -> bool:
        """
        Turn the projector on.
        """
        logger.info("Turning on projector")
        return await self.set_power(True)

    async def turn_off(self) -> bool:
        """
        Turn the projector off.
        """
        logger.info("Turning off projector")
        return await self.set_power(False)

    async def get_input(self, pjlink_class: PJLinkClass = PJLinkClass.ONE) -> InputSource:
        """
        Get the current input source.
        """
        return await self._query(PJLinkCommandName.INPUT, pjlink_class=pjlink_class)

    async def set_input(
        self, source: InputSource | str, pjlink_class: PJLinkClass | None = None
    ) -> bool:
        """
        Select the input source.

        Sources which are only defined for class 2 are sent as a class 2 command.
        """
        if isinstance(source, str):
            code = source
            source = parse_input_source(code)
            if source is None:
                raise PJLinkInvalidParameterError(parameter=code)

        if pjlink_class is None:
            pjlink_class = PJLinkClass.ONE
            if isinstance(source, InputSource) and not source.valid_for(PJLinkClass.ONE):
                pjlink_class = PJLinkClass.TWO

        parameter = format_input(source, pjlink_class)

        return await self._set(PJLinkCommandName.INPUT, parameter, pjlink_class)

    async def get_av_mute(self) -> AVMuteStatus:
        """
        Get the current audio and video mute state.
        """
        return await self._query(PJLinkCommandName.AV_MUTE)

    async def set_av_mute(self, target: MuteTarget, muted: bool) -> bool:
        """
        Mute or unmute audio, video or both.
        """
        return await self._set(PJLinkCommandName.AV_MUTE, format_av_mute(target, muted))

    async def set_av_mute_status(self, status: AVMuteStatus) -> AVMuteStatus:
        """
        Set audio and video mute at once and return the resulting mute state.

        A mute command acts on a single target, differing audio and video states take two
        commands.
        """
        if not isinstance(status, AVMuteStatus):
            raise PJLinkInvalidParameterError(parameter=status)

        if status.video == status.audio:
            await self._set(PJLinkCommandName.AV_MUTE, format_av_mute_status(status))
        else:
            await self.set_av_mute(MuteTarget.VIDEO, status.video)
            await self.set_av_mute(MuteTarget.AUDIO, status.audio)

        return await self.get_av_mute()

    async def get_error_status(self) -> ErrorStatus:
        """
        Get the error status of the projector subsystems.
        """
        return await self._query(PJLinkCommandName.ERROR_STATUS)

    async def get_lamps(self) -> list[LampStatus]:
        """
        Get usage time and state of every lamp.
        """
        return await self._query(PJLinkCommandName.LAMP)

    async def get_input_list(self) -> str:
        return await self._query(PJLinkCommandName.INPUT_LIST)

    async def get_name(self) -> str:
        return await self._query(PJLinkCommandName.NAME)

    async def get_manufacturer(self) -> str:
        return await self._query(PJLinkCommandName.MANUFACTURER)

    async def get_product_name(self) -> str:
        return await self._query(PJLinkCommandName.PRODUCT_NAME)

    async def get_other_info(self) -> str:
        """
        Get the manufacturer specific other information, it's returned as is.
        """
        return await self._query(PJLinkCommandName.OTHER_INFO)

    async def get_class(self) -> str:
        """
        Get the PJLink class the projector implements.
        """
        return await self._query(PJLinkCommandName.CLASS)

    async def get_serial_number(self) -> str:
        return await self._query(PJLinkCommandName.SERIAL_NUMBER)

    async def get_software_version(self) -> str:
        return await self._query(PJLinkCommandName.SOFTWARE_VERSION)

    async def get_input_name(self, source: InputSource) -> str:
        """
        Get the name of an input terminal.
        """
        if not isinstance(source, InputSource) or not source.valid_for(PJLinkClass.TWO):
            raise PJLinkInvalidParameterError(parameter=source)

        return await self._query(PJLinkCommandName.INPUT_NAME, f"{QUERY}{source.code}")

    async def get_input_resolution(self) -> str:
        """
        Get the input signal resolution, - when there is no signal and * when unknown.
        """
        return await self._query(PJLinkCommandName.INPUT_RESOLUTION)

    async def get_recommended_resolution(self) -> str:
        return await self._query(PJLinkCommandName.RECOMMENDED_RESOLUTION)

    async def get_filter_time(self) -> int:
        """
        Get the filter usage time in hours.
        """
        return await self._query(PJLinkCommandName.FILTER_TIME)

    async def get_lamp_model(self) -> str:
        return await self._query(PJLinkCommandName.LAMP_MODEL)

    async def get_filter_model(self) -> str:
        return await self._query(PJLinkCommandName.FILTER_MODEL)

    async def get_freeze(self) -> FreezeStatus:
        return await self._query(PJLinkCommandName.FREEZE)

    async def set_freeze(self, frozen: bool) -> bool:
        return await self._set(PJLinkCommandName.FREEZE, format_freeze(frozen))

    async def speaker_volume(self, adjust: VolumeAdjust) -> bool:
        """
        Step the speaker volume up or down.
        """
        return await self._set(
            PJLinkCommandName.SPEAKER_VOLUME, format_volume_adjust(adjust)
        )

    async def microphone_volume(self, adjust: VolumeAdjust) -> bool:
        """
        Step the microphone volume up or down.
        """
        return await self._set(
            PJLinkCommandName.MICROPHONE_VOLUME, format_volume_adjust(adjust)
        )


class PJLinkProjectorTCP(PJLinkProjector):
    """
    PJLink Projector class for controlling PJLink projectors over a TCP connection.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        password: str | None = None,
        timeout: float | None = None,
        record: bool = False,
    ) -> None:
        """
        Initializes the PJLinkProjectorTCP object.
        """
        assert host is not None
        assert port is not None

        self.unique_id = f"{host}:{port}"

        connection = PJLinkTCPConnection(host, port, timeout, record)

        super().__init__(connection, password)
