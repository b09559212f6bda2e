"""
Implements the connection types for connecting to PJLink projectors.

Created on 19 Oct 2026
"""

import asyncio
import logging
import socket
import time
from abc import ABC, abstractmethod

import aiofiles

logger = logging.getLogger(__name__)

DEFAULT_PORT = 4352
# Timeout in seconds
_CONNECT_TIMEOUT = 10

TERMINATOR = b"\r"


class PJLinkConnectionError(Exception):
    """
    PJLink Connection Error.

    When an error occurs while connecting to or communicating with the PJLink Projector.
    """


class PJLinkConnectionTimeoutError(PJLinkConnectionError):
    """
    PJLink Connection Timeout Error.
    """


class PJLinkNotConnectedError(PJLinkConnectionError):
    """
    PJLink Not Connected Error.

    When the connection is used after it has been closed.
    """

    def __str__(self):
        return "Not connected"


class PJLinkConnection(ABC):
    """
    Abstract class on which the different connection types are build.
    """

    _reader: asyncio.StreamReader = None
    _writer: asyncio.StreamWriter = None
    _read_timeout = None
    _record_file = None

    def __init__(self, record: bool = False):
        super().__init__()

        self._record = record

    @abstractmethod
    async def open(self) -> bool:
        """
        Opens the connection to the PJLink projector.
        """
        if self._record:
            file_name = time.strftime("%Y%m%d-%H%M%S.txt")
            self._record_file = await aiofiles.open(file_name, "wb")

    def is_open(self):
        """
        Checks if the connection is open.
        """
        return self._writer is not None

    async def close(self) -> bool:
        """
        Closes the connection to the PJLink projector.
        """
        if self._record_file:
            await self._record_file.close()
            self._record_file = None

        if not self.is_open():
            return True

        try:
            self._writer.close()
            await self._writer.wait_closed()
        except (ConnectionError, TimeoutError):
            pass
        except OSError as ex:
            if ex.errno in [64, 113]:
                pass
            else:
                logger.exception("Unhandeled OSError")

        self._reader = None
        self._writer = None

        logger.debug("Connection closed")
        return True

    async def _record_data(self, data: bytes) -> None:
        if self._record_file:
            await self._record_file.write(data)

    async def readline(self) -> bytes:
        """
        Reads a line, up to and including the carriage return terminator.
        """
        if not self.is_open():
            raise PJLinkNotConnectedError()

        try:
            response = await asyncio.wait_for(
                self._reader.readuntil(TERMINATOR), timeout=self._read_timeout
            )

            await self._record_data(response)

            return response
        except asyncio.IncompleteReadError as ex:
            if ex.partial:
                await self._record_data(ex.partial)
            await self.close()
            raise PJLinkConnectionError(
                f"Connection closed before a full line was received: {ex.partial!r}"
            ) from ex
        except asyncio.LimitOverrunError as ex:
            await self.close()
            raise PJLinkConnectionError("Line too long") from ex
        except asyncio.exceptions.TimeoutError as ex:
            await self.close()
            raise PJLinkConnectionTimeoutError("Timeout while waiting for response") from ex
        except (ConnectionError, TimeoutError) as ex:
            await self.close()
            raise PJLinkConnectionError(str(ex)) from ex
        except OSError as ex:
            await self.close()
            raise PJLinkConnectionError(str(ex)) from ex

    async def write(self, data: bytes) -> int:
        """
        Output the given bytes over the connection.
        """
        if not self.is_open():
            raise PJLinkNotConnectedError()

        try:
            self._writer.write(data)
            await self._writer.drain()

            return len(data)
        except (ConnectionError, TimeoutError) as ex:
            await self.close()
            raise PJLinkConnectionError(str(ex)) from ex
        except OSError as ex:
            await self.close()
            raise PJLinkConnectionError(str(ex)) from ex


class PJLinkTCPConnection(PJLinkConnection):
    """
    Class to handle the TCP connection type.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float | None = None,
        record: bool = False,
    ):
        super().__init__(record)
        assert host is not None
        assert port is not None
        assert timeout is None or timeout > 0

        self._host = host
        self._port = port
        self._read_timeout = timeout

    def __str__(self):
        return f"{self._host}:{self._port}"

    async def open(self) -> bool:
        await super().open()

        try:
            if not self.is_open():
                self._reader, self._writer = await asyncio.wait_for(
                    asyncio.open_connection(self._host, self._port),
                    timeout=self._read_timeout or _CONNECT_TIMEOUT,
                )

            return True
        except asyncio.exceptions.TimeoutError as ex:
            await self.close()
            raise PJLinkConnectionTimeoutError(
                f"Timeout while connecting to {self}"
            ) from ex
        except socket.gaierror as ex:
            await self.close()
            raise PJLinkConnectionError(str(ex)) from ex
        except OSError as ex:
            await self.close()
            raise PJLinkConnectionError(str(ex)) from ex
