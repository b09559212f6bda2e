# pylint: disable=invalid-name
# pylint: disable=missing-class-docstring
# pylint: disable=missing-function-docstring
# pylint: disable=protected-access
"""
Created on 19 Oct 2026
"""

import asyncio
import logging
import unittest

from pjlinkprojector import (
    AVMuteStatus,
    ErrorLevel,
    FreezeStatus,
    InputSource,
    InputType,
    LampStatus,
    MuteTarget,
    PJLinkAuthenticationError,
    PJLinkAuthenticationRequiredError,
    PJLinkClass,
    PJLinkConnection,
    PJLinkConnectionError,
    PJLinkDeviceBusyError,
    PJLinkInvalidParameterError,
    PJLinkMalformedResponseError,
    PJLinkNotConnectedError,
    PJLinkOutOfParameterError,
    PJLinkProjector,
    PJLinkProtocolError,
    PJLinkTooBusyError,
    PJLinkUndefinedCommandError,
    PowerStatus,
    VolumeAdjust,
)

logger = logging.getLogger(__name__)

DIGEST = "1c8d9dcdd3335251cb5272bb4cd028d2"


class FakeConnection(PJLinkConnection):
    """
    In memory connection, replays the given lines and records everything written.
    """

    def __init__(self, greeting: bytes = b"PJLINK 0\r"):
        super().__init__()
        self._lines = [greeting]
        self._open = False
        self.written = []
        self.open_count = 0

    def respond(self, *lines: bytes):
        self._lines.extend(lines)

    def __str__(self):
        return "fake"

    async def open(self) -> bool:
        self._open = True
        self.open_count += 1
        return True

    def is_open(self):
        return self._open

    async def close(self) -> bool:
        self._open = False
        return True

    async def readline(self) -> bytes:
        if not self._open:
            raise PJLinkNotConnectedError()
        # Give other tasks the chance to run while "waiting" for the projector
        await asyncio.sleep(0)
        if len(self._lines) == 0:
            await self.close()
            raise PJLinkConnectionError("Connection closed before a full line was received")
        return self._lines.pop(0)

    async def write(self, data: bytes) -> int:
        if not self._open:
            raise PJLinkNotConnectedError()
        self.written.append(data)
        return len(data)


class TestConnect(unittest.IsolatedAsyncioTestCase):
    async def test_connect_no_authentication(self):
        connection = FakeConnection(b"PJLINK 0\r")
        projector = PJLinkProjector(connection)
        self.assertTrue(await projector.connect())
        self.assertTrue(projector.connected())
        self.assertFalse(projector.session.authenticated)

        connection.respond(b"%1POWR=1\r")
        self.assertEqual(PowerStatus.ON, await projector.get_power())
        self.assertEqual([b"%1POWR ?\r"], connection.written)

    async def test_connect_authentication(self):
        connection = FakeConnection(b"PJLINK 1 12345678\r")
        projector = PJLinkProjector(connection, "JBMIAProjectorLink")
        await projector.connect()
        self.assertTrue(projector.session.authenticated)

        connection.respond(b"%1POWR=0\r", b"%1NAME=Projector\r")
        self.assertEqual(PowerStatus.OFF, await projector.get_power())
        self.assertEqual("Projector", await projector.get_name())
        # Every command line is prefixed with the digest
        self.assertEqual(
            [
                DIGEST.encode() + b"%1POWR ?\r",
                DIGEST.encode() + b"%1NAME ?\r",
            ],
            connection.written,
        )

    async def test_connect_authentication_required(self):
        connection = FakeConnection(b"PJLINK 1 12345678\r")
        projector = PJLinkProjector(connection)
        with self.assertRaises(PJLinkAuthenticationRequiredError):
            await projector.connect()
        self.assertFalse(projector.connected())
        self.assertFalse(connection.is_open())
        self.assertEqual([], connection.written)

        with self.assertRaises(PJLinkNotConnectedError):
            await projector.get_power()

    async def test_connect_non_ascii_password(self):
        connection = FakeConnection(b"PJLINK 1 12345678\r")
        projector = PJLinkProjector(connection, "p\u00e4ssword")
        with self.assertRaises(PJLinkInvalidParameterError):
            await projector.connect()
        self.assertFalse(projector.connected())
        self.assertFalse(connection.is_open())
        self.assertEqual([], connection.written)

    async def test_connect_malformed_greeting(self):
        connection = FakeConnection(b"HELLO\r")
        projector = PJLinkProjector(connection)
        with self.assertRaises(PJLinkProtocolError):
            await projector.connect()
        self.assertFalse(projector.connected())

    async def test_context_manager(self):
        connection = FakeConnection()
        async with PJLinkProjector(connection) as projector:
            self.assertTrue(projector.connected())
            connection.respond(b"%1CLSS=1\r")
            self.assertEqual("1", await projector.get_class())
        self.assertFalse(projector.connected())
        self.assertFalse(connection.is_open())

    async def test_unique_id(self):
        projector = PJLinkProjector(FakeConnection())
        self.assertEqual("fake", projector.unique_id)
        with self.assertLogs("pjlinkprojector.pjlinkprojector", level="INFO") as logs:
            await projector.connect()
            await projector.disconnect()
        self.assertIn("Connecting to fake", logs.output[0])
        self.assertIn("Disconnecting from fake", logs.output[-1])

    async def test_connect_twice(self):
        connection = FakeConnection()
        projector = PJLinkProjector(connection)
        await projector.connect()
        await projector.connect()
        self.assertEqual(1, connection.open_count)


class TestCommands(unittest.IsolatedAsyncioTestCase):
    connection: FakeConnection = None
    projector: PJLinkProjector = None

    async def asyncSetUp(self):
        self.connection = FakeConnection()
        self.projector = PJLinkProjector(self.connection)
        await self.projector.connect()

    async def asyncTearDown(self):
        await self.projector.disconnect()

    async def test_power(self):
        self.connection.respond(b"%1POWR=OK\r", b"%1POWR=3\r", b"%1POWR=OK\r")
        self.assertTrue(await self.projector.turn_on())
        self.assertEqual(PowerStatus.WARMING, await self.projector.get_power())
        self.assertTrue(await self.projector.turn_off())
        self.assertEqual(
            [b"%1POWR 1\r", b"%1POWR ?\r", b"%1POWR 0\r"], self.connection.written
        )

    async def test_power_device_busy(self):
        self.connection.respond(b"%1POWR=ERR3\r", b"%1POWR=1\r")
        with self.assertRaises(PJLinkDeviceBusyError):
            await self.projector.get_power()

        # A command error leaves the connection usable
        self.assertTrue(self.projector.connected())
        self.assertEqual(PowerStatus.ON, await self.projector.get_power())

    async def test_power_malformed(self):
        self.connection.respond(b"%1POWR=9\r", b"%1POWR=2\r")
        with self.assertRaises(PJLinkMalformedResponseError):
            await self.projector.get_power()
        self.assertEqual(PowerStatus.COOLING, await self.projector.get_power())

    async def test_desynchronization(self):
        self.connection.respond(b"%1INPT=31\r")
        with self.assertRaises(PJLinkProtocolError):
            await self.projector.get_power()
        self.assertFalse(self.projector.connected())

        with self.assertRaises(PJLinkNotConnectedError):
            await self.projector.get_power()
        self.assertEqual(1, len(self.connection.written))

    async def test_authentication_error(self):
        self.connection.respond(b"PJLINK ERRA\r")
        with self.assertRaises(PJLinkAuthenticationError):
            await self.projector.get_power()
        self.assertFalse(self.projector.connected())

    async def test_undefined_command(self):
        self.connection.respond(b"%1LAMP=ERR1\r")
        with self.assertRaises(PJLinkUndefinedCommandError):
            await self.projector.get_lamps()

    async def test_input(self):
        self.connection.respond(b"%1INPT=OK\r", b"%1INPT=31\r")
        self.assertTrue(await self.projector.set_input(InputSource(InputType.DIGITAL, "1")))
        self.assertEqual(
            InputSource(InputType.DIGITAL, "1"), await self.projector.get_input()
        )
        self.assertEqual([b"%1INPT 31\r", b"%1INPT ?\r"], self.connection.written)

    async def test_input_code(self):
        self.connection.respond(b"%1INPT=OK\r")
        self.assertTrue(await self.projector.set_input("52"))
        self.assertEqual([b"%1INPT 52\r"], self.connection.written)

    async def test_input_class2(self):
        self.connection.respond(b"%2INPT=OK\r", b"%2INPT=61\r")
        self.assertTrue(await self.projector.set_input(InputSource(InputType.INTERNAL, "1")))
        self.assertEqual(
            InputSource(InputType.INTERNAL, "1"),
            await self.projector.get_input(PJLinkClass.TWO),
        )
        self.assertEqual([b"%2INPT 61\r", b"%2INPT ?\r"], self.connection.written)

    async def test_input_out_of_range(self):
        for source in [
            InputSource(InputType.RGB, "0"),
            InputSource(InputType.VIDEO, "10"),
            InputSource(InputType.RGB, 1),
            InputSource(3, "1"),
            "30",
            "71",
        ]:
            with self.assertRaises(PJLinkInvalidParameterError):
                await self.projector.set_input(source)
        with self.assertRaises(PJLinkInvalidParameterError):
            await self.projector.set_input(InputSource(InputType.RGB, "A"), PJLinkClass.ONE)

        # Nothing is sent to the projector
        self.assertEqual([], self.connection.written)
        self.assertTrue(self.projector.connected())

    async def test_av_mute(self):
        self.connection.respond(b"%1AVMT=OK\r", b"%1AVMT=31\r", b"%1AVMT=OK\r")
        self.assertTrue(await self.projector.set_av_mute(MuteTarget.AUDIO_VIDEO, True))
        self.assertEqual(
            AVMuteStatus(video=True, audio=True), await self.projector.get_av_mute()
        )
        self.assertTrue(await self.projector.set_av_mute(MuteTarget.VIDEO, False))
        self.assertEqual(
            [b"%1AVMT 31\r", b"%1AVMT ?\r", b"%1AVMT 10\r"], self.connection.written
        )

    async def test_av_mute_status(self):
        self.connection.respond(b"%1AVMT=OK\r", b"%1AVMT=30\r")
        self.assertEqual(
            AVMuteStatus(video=False, audio=False),
            await self.projector.set_av_mute_status(AVMuteStatus(video=False, audio=False)),
        )
        self.assertEqual([b"%1AVMT 30\r", b"%1AVMT ?\r"], self.connection.written)

    async def test_av_mute_status_differing(self):
        self.connection.respond(b"%1AVMT=OK\r", b"%1AVMT=OK\r", b"%1AVMT=11\r")
        self.assertEqual(
            AVMuteStatus(video=True, audio=False),
            await self.projector.set_av_mute_status(AVMuteStatus(video=True, audio=False)),
        )
        self.assertEqual(
            [b"%1AVMT 11\r", b"%1AVMT 20\r", b"%1AVMT ?\r"], self.connection.written
        )

        with self.assertRaises(PJLinkInvalidParameterError):
            await self.projector.set_av_mute_status((True, False))

    async def test_error_status(self):
        self.connection.respond(b"%1ERST=000020\r")
        status = await self.projector.get_error_status()
        self.assertEqual(ErrorLevel.ERROR, status.filter)
        self.assertTrue(status.has_errors())

    async def test_lamps(self):
        self.connection.respond(b"%1LAMP=1234 1 5678 0\r")
        self.assertEqual(
            [LampStatus(1234, True), LampStatus(5678, False)],
            await self.projector.get_lamps(),
        )

    async def test_information(self):
        self.connection.respond(
            b"%1INST=11 12 31 32\r",
            b"%1NAME=Meeting room\r",
            b"%1INF1=EPSON\r",
            b"%1INF2=EB-1795F\r",
            b"%1INFO=Firmware 1.02 \r",
            b"%1CLSS=2\r",
        )
        self.assertEqual("11 12 31 32", await self.projector.get_input_list())
        self.assertEqual("Meeting room", await self.projector.get_name())
        self.assertEqual("EPSON", await self.projector.get_manufacturer())
        self.assertEqual("EB-1795F", await self.projector.get_product_name())
        self.assertEqual("Firmware 1.02", await self.projector.get_other_info())
        self.assertEqual("2", await self.projector.get_class())

    async def test_class2_queries(self):
        self.connection.respond(
            b"%2SNUM=XA3C2400119\r",
            b"%2SVER=24011273HQWWV105\r",
            b"%2INNM=DVI-D\r",
            b"%2IRES=1920x1080\r",
            b"%2RRES=1920x1200\r",
            b"%2FILT=100\r",
            b"%2RLMP=ELPLP96\r",
            b"%2RFIL=ELPAF46\r",
        )
        self.assertEqual("XA3C2400119", await self.projector.get_serial_number())
        self.assertEqual("24011273HQWWV105", await self.projector.get_software_version())
        self.assertEqual(
            "DVI-D", await self.projector.get_input_name(InputSource(InputType.DIGITAL, "1"))
        )
        self.assertEqual("1920x1080", await self.projector.get_input_resolution())
        self.assertEqual("1920x1200", await self.projector.get_recommended_resolution())
        self.assertEqual(100, await self.projector.get_filter_time())
        self.assertEqual("ELPLP96", await self.projector.get_lamp_model())
        self.assertEqual("ELPAF46", await self.projector.get_filter_model())
        self.assertEqual(b"%2INNM ?31\r", self.connection.written[2])

    async def test_input_name_invalid_source(self):
        for source in [
            InputSource(InputType.DIGITAL, 1),
            InputSource(InputType.DIGITAL, "11"),
            "31",
        ]:
            with self.assertRaises(PJLinkInvalidParameterError):
                await self.projector.get_input_name(source)
        self.assertEqual([], self.connection.written)

    async def test_freeze(self):
        self.connection.respond(b"%2FREZ=OK\r", b"%2FREZ=1\r")
        self.assertTrue(await self.projector.set_freeze(True))
        self.assertEqual(FreezeStatus.ON, await self.projector.get_freeze())
        self.assertEqual([b"%2FREZ 1\r", b"%2FREZ ?\r"], self.connection.written)

    async def test_volume(self):
        self.connection.respond(b"%2SVOL=OK\r", b"%2MVOL=OK\r", b"%2SVOL=2\r")
        self.assertTrue(await self.projector.speaker_volume(VolumeAdjust.UP))
        self.assertTrue(await self.projector.microphone_volume(VolumeAdjust.DOWN))
        with self.assertRaises(PJLinkMalformedResponseError):
            await self.projector.speaker_volume(VolumeAdjust.UP)
        self.assertEqual(
            [b"%2SVOL 1\r", b"%2MVOL 0\r", b"%2SVOL 1\r"], self.connection.written
        )

    async def test_send_command(self):
        self.connection.respond(b"%1POWR=1\r", b"%1INPT=ERR2\r")
        self.assertEqual("1", await self.projector.send_command("POWR"))
        with self.assertRaises(PJLinkOutOfParameterError):
            await self.projector.send_command("INPT", "99")
        with self.assertRaises(PJLinkInvalidParameterError):
            await self.projector.send_command("XXXX")

    async def test_send_command_control_characters(self):
        for parameter in ["1\r%1POWR 0", "1\n", "1\x00"]:
            with self.assertRaises(PJLinkInvalidParameterError):
                await self.projector.send_command("POWR", parameter)
        self.assertEqual([], self.connection.written)
        self.assertTrue(self.projector.connected())

    async def test_send_raw_command(self):
        self.connection.respond(b"%2ABCD=whatever\r")
        response = await self.projector.send_raw_command("%2ABCD ?")
        self.assertEqual("%2ABCD=whatever", response)
        self.assertEqual([b"%2ABCD ?\r"], self.connection.written)

    async def test_disconnect(self):
        self.assertTrue(await self.projector.disconnect())
        self.assertFalse(self.projector.connected())
        with self.assertRaises(PJLinkNotConnectedError):
            await self.projector.get_power()
        with self.assertRaises(PJLinkNotConnectedError):
            await self.projector.send_raw_command("%1POWR ?")
        self.assertEqual([], self.connection.written)

    async def test_connection_lost(self):
        # No response, the connection closes
        with self.assertRaises(PJLinkConnectionError):
            await self.projector.get_power()
        self.assertFalse(self.projector.connected())
        with self.assertRaises(PJLinkNotConnectedError):
            await self.projector.get_power()

    async def test_too_busy(self):
        self.connection.respond(b"%1POWR=1\r")
        first = asyncio.create_task(self.projector.get_power())
        await asyncio.sleep(0)
        self.assertTrue(self.projector.busy())
        with self.assertRaises(PJLinkTooBusyError):
            await self.projector.get_name()
        self.assertEqual(PowerStatus.ON, await first)
        self.assertEqual([b"%1POWR ?\r"], self.connection.written)


if __name__ == "__main__":
    unittest.main()
