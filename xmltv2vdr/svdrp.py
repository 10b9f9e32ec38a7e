"""
xmltv2vdr.svdrp - VDR integration

Pushes EPG records to VDR over SVDRP, the line based request/reply protocol
of VDR. Every reply carries a 3 digit code; multi-line replies mark every
line but the last with '-' in the 4th column.

The client talks to an injectable transport: a live TCP connection or a
simulation that writes the exact bytes sent, CRLF included, to a local
binary stream. One deadline covers the whole session; any failure aborts it
without retry.
"""

import logging
import socket
import sys
import time
from collections import deque
from typing import BinaryIO, Callable, List, Optional

from .store import ChannelRecordStore
from .tables import ChannelTable

DEFAULT_PORT = 6419
ENCODING = "utf-8"
RECV_SIZE = 4096

# Reply codes
BANNER = 220
CLOSING = 221
ACTION_OK = 250
START_INPUT = 354


class SvdrpError(Exception):
    """Fatal SVDRP session failure"""


class SvdrpReplyError(SvdrpError):
    """VDR answered with an unexpected reply code"""

    def __init__(self, expected: int, received: str, reply: Optional[List[str]] = None):
        super().__init__(f"expected SVDRP code {expected}, but received {received}")
        self.expected = expected
        self.received = received
        self.reply = reply or []


class SvdrpTimeoutError(SvdrpError):
    """The session deadline expired"""


class Deadline:
    """Single deadline for a whole session, 0 means no limit"""

    def __init__(self, timeout: float, clock: Callable[[], float] = time.monotonic):
        self.timeout = timeout
        self.clock = clock
        self.expires_at = clock() + timeout if timeout else None

    def remaining(self) -> Optional[float]:
        """Seconds left, None without limit"""
        if self.expires_at is None:
            return None
        return self.expires_at - self.clock()

    def check(self, action: str) -> Optional[float]:
        """Return the remaining time, raise SvdrpTimeoutError once expired"""
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise SvdrpTimeoutError(f"timeout after {self.timeout}s while {action}")
        return remaining


class SocketTransport:
    """Live TCP connection to VDR"""

    def __init__(self, host: str = "localhost", port: int = DEFAULT_PORT):
        self.host = host
        self.port = port
        self.sock: Optional[socket.socket] = None
        self._buffer = b""

    def connect(self, deadline: Deadline):
        timeout = deadline.check(f"connecting to {self.host}:{self.port}")
        try:
            self.sock = socket.create_connection((self.host, self.port), timeout=timeout)
        except socket.timeout as e:
            raise SvdrpTimeoutError(
                f"timeout after {deadline.timeout}s while connecting to {self.host}:{self.port}"
            ) from e
        except socket.gaierror as e:
            raise SvdrpError(f"no host: {self.host}") from e
        except OSError as e:
            raise SvdrpError(f"connect to {self.host}:{self.port}: {e}") from e
        logging.info("Connected to VDR at %s:%d", self.host, self.port)

    def send(self, data: bytes, deadline: Deadline):
        self.sock.settimeout(deadline.check("sending"))
        try:
            self.sock.sendall(data)
        except socket.timeout as e:
            raise SvdrpTimeoutError(f"timeout after {deadline.timeout}s while sending") from e
        except OSError as e:
            raise SvdrpError(f"send to {self.host}:{self.port}: {e}") from e

    def readline(self, deadline: Deadline) -> str:
        # Deadline checked before every recv
        while b"\n" not in self._buffer:
            self.sock.settimeout(deadline.check("waiting for reply"))
            try:
                chunk = self.sock.recv(RECV_SIZE)
            except socket.timeout as e:
                raise SvdrpTimeoutError(
                    f"timeout after {deadline.timeout}s while waiting for reply"
                ) from e
            except OSError as e:
                raise SvdrpError(f"receive from {self.host}:{self.port}: {e}") from e
            if not chunk:
                raise SvdrpError(f"connection closed by {self.host}:{self.port}")
            self._buffer += chunk

        line, _, self._buffer = self._buffer.partition(b"\n")
        return line.decode(ENCODING, errors="replace") + "\n"

    def close(self):
        self._buffer = b""
        if self.sock is not None:
            self.sock.close()
            self.sock = None


class SimulatedTransport:
    """Writes the encoded commands to a binary stream and answers like VDR would"""

    REPLIES = {
        "CLRE": f"{ACTION_OK} EPG data cleared",
        "PUTE": f'{START_INPUT} Enter EPG data, end with "." on a line by itself',
        "QUIT": f"{CLOSING} closing connection",
    }

    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream or sys.stdout.buffer
        self.replies: deque = deque()
        self.sent: List[str] = []

    def connect(self, deadline: Deadline):
        deadline.check("connecting to simulation")
        self.replies.append(f"{BANNER} simulation SVDRP ready")

    def send(self, data: bytes, deadline: Deadline):
        deadline.check("sending")
        text = data.decode(ENCODING)
        self.sent.append(text)
        self.stream.write(data)

        command = text.split("\r\n", 1)[0].strip().upper()
        # Anything else is a PUTE data block
        self.replies.append(self.REPLIES.get(command, f"{ACTION_OK} EPG data processed"))

    def readline(self, deadline: Deadline) -> str:
        deadline.check("waiting for reply")
        if not self.replies:
            raise SvdrpError("simulation has no pending reply")
        return self.replies.popleft() + "\r\n"

    def close(self):
        self.stream.flush()


class SvdrpClient:
    """SVDRP session pushing the channel record store to VDR"""

    def __init__(self, transport, timeout: float = 60, clock: Callable[[], float] = time.monotonic):
        self.transport = transport
        self.timeout = timeout
        self.clock = clock
        self.deadline: Optional[Deadline] = None
        self.channels_sent = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.transport.close()

    def connect(self):
        """Open the transport and wait for the banner"""
        self.deadline = Deadline(self.timeout, self.clock)
        self.transport.connect(self.deadline)
        self.receive(BANNER)

    def send(self, command: str):
        logging.debug("Send : %s", command)
        self.transport.send(f"{command}\r\n".encode(ENCODING), self.deadline)

    def receive(self, expected: int) -> List[str]:
        """
        Read one reply and check its code

        Args:
            expected: Reply code required in the current state

        Returns:
            Reply lines without line terminators

        Raises:
            SvdrpReplyError: if the final line carries another code
        """
        reply = []
        while True:
            line = self.transport.readline(self.deadline).rstrip()
            logging.debug("Receive : %s", line)
            reply.append(line)
            if line[3:4] not in ("", " "):
                continue  # continuation line
            code = line[:3]
            if code != str(expected):
                raise SvdrpReplyError(expected, code, reply)
            return reply

    def clear_schedule(self):
        self.send("CLRE")
        self.receive(ACTION_OK)

    def put_channel(self, selector: str, text: str):
        """Send one channel's records as a PUTE transaction"""
        self.send("PUTE")
        self.receive(START_INPUT)
        self.send(f"{selector}\r\n{text}c\r\n.")
        self.receive(ACTION_OK)

    def quit(self):
        self.send("QUIT")
        self.receive(CLOSING)

    def push(self, store: ChannelRecordStore, channels: ChannelTable) -> int:
        """
        Run a complete session: banner, CLRE, one PUTE per channel, QUIT

        Args:
            store: Rendered records per XMLTV channel id
            channels: Channel table providing names and selectors

        Returns:
            Number of channels sent
        """
        logging.info("Sending data...")
        self.channels_sent = 0

        self.connect()
        self.clear_schedule()

        for xmltv_id, text in store.items():
            name = channels.get_name(xmltv_id)
            if not text:
                logging.info("No data for %s (%s)", xmltv_id, name)
                continue

            selector = channels.get_selector(xmltv_id)
            if selector is None:
                logging.warning("No VDR channel for %s, skipping its programmes", xmltv_id)
                continue

            logging.info("Send %s => %s", xmltv_id, name)
            self.put_channel(selector, text)
            self.channels_sent += 1

        self.quit()
        logging.info("%d channels sent to VDR", self.channels_sent)
        return self.channels_sent
