"""TCP sender for the Carbon plaintext protocol."""

import re
import socket
import threading
from typing import BinaryIO

from carbonpy.core.logs import get_logger

logger = get_logger(__name__)

DEFAULT_PORT = 2003
DEFAULT_TIMEOUT = 10.0

_WHITESPACE = re.compile(r"\s+")


def sanitize(text: str) -> str:
    """Replace whitespace runs, which would break the line format, with '-'."""
    return _WHITESPACE.sub("-", text)


class GraphiteTCPSender:
    """Carbon plaintext sender over a TCP connection.

    Implements GraphiteSenderPort. Lines are buffered and written to the
    socket on flush() or when the buffer fills up.

    Example:
        ```python
        sender = GraphiteTCPSender("graphite.local")
        sender.connect()
        try:
            sender.send("app.base.requests.count", "42", 1702300000)
        finally:
            sender.close()
        ```
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float | None = DEFAULT_TIMEOUT,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the sender without connecting.

        Args:
            host: Carbon receiver host name or address.
            port: Carbon plaintext port (default 2003).
            timeout: Socket timeout in seconds for connect and writes.
                None blocks indefinitely.
            encoding: Encoding of the written lines.
        """
        self._address = (host, port)
        self._timeout = timeout
        self._encoding = encoding
        self._lock = threading.Lock()
        self._socket: socket.socket | None = None
        self._writer: BinaryIO | None = None
        self._pending = 0
        self._failures = 0

    @property
    def is_connected(self) -> bool:
        """Whether the sender holds an open socket."""
        return self._socket is not None

    @property
    def failures(self) -> int:
        """Number of lines that could not be written or flushed."""
        return self._failures

    def connect(self) -> None:
        """Open the TCP connection.

        Raises:
            RuntimeError: If the sender is already connected.
            OSError: If the receiver cannot be reached.
        """
        with self._lock:
            if self._socket is not None:
                raise RuntimeError("Already connected")
            sock = socket.create_connection(self._address, timeout=self._timeout)
            self._socket = sock
            self._writer = sock.makefile("wb")
            self._pending = 0
            logger.debug("Connected to Graphite at %s:%d", *self._address)

    def send(self, name: str, value: str, timestamp: int) -> None:
        """Write one sample line.

        Raises:
            OSError: If the sender is not connected or the write fails.
                A failed write also loses the lines still buffered, and
                all of them are counted as failures.
        """
        line = f"{sanitize(name)} {sanitize(value)} {timestamp}\n"
        with self._lock:
            if self._writer is None:
                self._failures += 1
                raise ConnectionError("Not connected to Graphite")
            try:
                self._writer.write(line.encode(self._encoding))
            except OSError:
                self._drop_pending(extra=1)
                raise
            self._pending += 1

    def flush(self) -> None:
        """Write buffered lines to the socket. No-op when not connected.

        Raises:
            OSError: If the write fails. The lines still buffered are
                counted as failures.
        """
        with self._lock:
            if self._writer is None:
                return
            try:
                self._writer.flush()
            except OSError:
                self._drop_pending()
                raise
            self._pending = 0

    def close(self) -> None:
        """Close the connection. No-op when not connected.

        The socket is released even if the final flush fails.
        """
        with self._lock:
            writer, sock = self._writer, self._socket
            self._writer = None
            self._socket = None
            if sock is None:
                return
            try:
                if writer is not None:
                    writer.close()
            except OSError:
                self._drop_pending()
                raise
            finally:
                self._pending = 0
                sock.close()
                logger.debug("Closed Graphite connection to %s:%d", *self._address)

    def _drop_pending(self, extra: int = 0) -> None:
        lost = self._pending + extra
        self._pending = 0
        if lost:
            self._failures += lost
            logger.debug("Dropped %d unflushed Graphite lines", lost)
