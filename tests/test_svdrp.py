"""
Tests for the SVDRP client and its transports
"""

import io
import itertools
from collections import deque

import pytest

from xmltv2vdr.store import ChannelRecordStore
from xmltv2vdr.svdrp import (
    Deadline,
    SimulatedTransport,
    SocketTransport,
    SvdrpClient,
    SvdrpError,
    SvdrpReplyError,
    SvdrpTimeoutError,
)
from xmltv2vdr.tables import ChannelTable

RECORD = "E 1 1704070800 3600 0\r\nT News\r\ne\r\n"


class ScriptedTransport:
    """Answers with canned reply lines and records what was sent"""

    def __init__(self, *replies):
        self.replies = deque(replies)
        self.sent = []
        self.closed = False

    def connect(self, deadline):
        deadline.check("connecting")

    def send(self, data, deadline):
        self.sent.append(data.decode("utf-8"))

    def readline(self, deadline):
        deadline.check("waiting for reply")
        if not self.replies:
            raise SvdrpError("connection closed")
        return self.replies.popleft() + "\r\n"

    def close(self):
        self.closed = True


@pytest.fixture
def channels(channels_file):
    return ChannelTable().load(channels_file)


@pytest.fixture
def store(channels):
    store = ChannelRecordStore(channels)
    store.append("das-erste.de", RECORD)
    store.append("tnt.fr", RECORD)
    return store


# ---------------------------------------------------------------------------
# Deadline
# ---------------------------------------------------------------------------


class TestDeadline:

    def test_remaining(self):
        clock = iter([100.0, 104.0])
        deadline = Deadline(10, clock=lambda: next(clock))
        assert deadline.remaining() == 6.0

    def test_expired(self):
        clock = iter([100.0, 110.0])
        deadline = Deadline(10, clock=lambda: next(clock))
        with pytest.raises(SvdrpTimeoutError, match="while sending"):
            deadline.check("sending")

    def test_zero_means_no_limit(self):
        deadline = Deadline(0)
        assert deadline.remaining() is None
        assert deadline.check("sending") is None


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class TestSession:

    def test_complete_session(self, store, channels):
        transport = ScriptedTransport("220 vdr SVDRP ready", "250 cleared", "354 go",
                                      "250 done", "354 go", "250 done", "221 bye")
        with SvdrpClient(transport) as client:
            assert client.push(store, channels) == 2

        assert transport.sent == [
            "CLRE\r\n",
            "PUTE\r\n",
            f"C S19.2E-1-1019-10301 Das Erste HD;ARD\r\n{RECORD}c\r\n.\r\n",
            "PUTE\r\n",
            f"C T-0-474-100 TNT\r\n{RECORD}c\r\n.\r\n",
            "QUIT\r\n",
        ]
        assert transport.closed

    def test_reply_mismatch_aborts_session(self, store, channels):
        transport = ScriptedTransport("220 vdr SVDRP ready", "250 cleared", "451 busy")
        client = SvdrpClient(transport)

        with pytest.raises(SvdrpReplyError) as excinfo:
            client.push(store, channels)

        assert str(excinfo.value) == "expected SVDRP code 354, but received 451"
        assert excinfo.value.reply == ["451 busy"]
        # Nothing after the failing command, no later channel, no QUIT
        assert transport.sent == ["CLRE\r\n", "PUTE\r\n"]

    def test_wrong_banner(self, store, channels):
        transport = ScriptedTransport("554 access denied")
        with pytest.raises(SvdrpReplyError):
            SvdrpClient(transport).push(store, channels)
        assert transport.sent == []

    def test_multi_line_reply(self):
        transport = ScriptedTransport("220-first line", "220-second line", "220 ready")
        client = SvdrpClient(transport)
        client.connect()
        assert transport.replies == deque()

    def test_multi_line_reply_with_wrong_final_code(self):
        transport = ScriptedTransport("250-fine", "550 not fine")
        client = SvdrpClient(transport)
        client.deadline = Deadline(0)
        with pytest.raises(SvdrpReplyError) as excinfo:
            client.receive(250)
        assert excinfo.value.reply == ["250-fine", "550 not fine"]

    def test_empty_channels_are_skipped(self, channels):
        store = ChannelRecordStore(channels)
        transport = ScriptedTransport("220 ready", "250 cleared", "221 bye")
        assert SvdrpClient(transport).push(store, channels) == 0
        assert transport.sent == ["CLRE\r\n", "QUIT\r\n"]

    def test_unknown_channel_is_not_sent(self, channels, caplog):
        store = ChannelRecordStore(channels)
        store.append("other.tv", RECORD)
        transport = ScriptedTransport("220 ready", "250 cleared", "221 bye")
        assert SvdrpClient(transport).push(store, channels) == 0
        assert "No VDR channel for other.tv" in caplog.text

    def test_session_timeout(self, store, channels):
        # Every clock reading advances by 3 seconds
        ticks = itertools.count(0, 3)
        transport = ScriptedTransport("220 ready", "250 cleared", "354 go", "250 done",
                                      "354 go", "250 done", "221 bye")
        client = SvdrpClient(transport, timeout=5, clock=lambda: next(ticks))

        with pytest.raises(SvdrpTimeoutError):
            client.push(store, channels)
        assert "QUIT\r\n" not in transport.sent


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------


class TestSimulatedTransport:

    def test_sent_bytes_written_to_stream(self, store, channels):
        output = io.BytesIO()
        with SvdrpClient(SimulatedTransport(output)) as client:
            assert client.push(store, channels) == 2

        data = output.getvalue()
        assert data.startswith(b"CLRE\r\nPUTE\r\nC S19.2E-1-1019-10301 Das Erste HD;ARD\r\nE 1 ")
        assert data.endswith(b"c\r\n.\r\nQUIT\r\n")
        assert data.count(b"PUTE\r\n") == 2

    def test_stream_matches_sent_commands(self, store, channels):
        output = io.BytesIO()
        transport = SimulatedTransport(output)
        SvdrpClient(transport).push(store, channels)
        assert output.getvalue() == "".join(transport.sent).encode("utf-8")

    def test_sent_commands_are_kept(self, store, channels):
        transport = SimulatedTransport(io.BytesIO())
        SvdrpClient(transport).push(store, channels)
        assert transport.sent[0] == "CLRE\r\n"
        assert transport.sent[-1] == "QUIT\r\n"


# ---------------------------------------------------------------------------
# Socket transport
# ---------------------------------------------------------------------------


class FakeSocket:
    """Returns the given chunks from recv, one per call"""

    def __init__(self, *chunks):
        self.chunks = deque(chunks)
        self.timeouts = []

    def settimeout(self, timeout):
        self.timeouts.append(timeout)

    def recv(self, size):
        return self.chunks.popleft() if self.chunks else b""

    def close(self):
        pass


def socket_transport(fake_socket):
    transport = SocketTransport("vdr.local")
    transport.sock = fake_socket
    return transport


class TestSocketTransport:

    def test_lines_split_across_chunks(self):
        transport = socket_transport(FakeSocket(b"220-vdr ", b"ready\r\n220 ", b"go\r\n"))
        deadline = Deadline(0)
        assert transport.readline(deadline) == "220-vdr ready\r\n"
        assert transport.readline(deadline) == "220 go\r\n"

    def test_trickling_peer_hits_deadline(self):
        # One byte per recv while the clock advances a second per reading
        ticks = itertools.count()
        fake_socket = FakeSocket(*[bytes([byte]) for byte in b"220 vdr ready\r\n"])
        transport = socket_transport(fake_socket)
        deadline = Deadline(5, clock=lambda: next(ticks))

        with pytest.raises(SvdrpTimeoutError, match="waiting for reply"):
            transport.readline(deadline)
        assert len(fake_socket.timeouts) == 4

    def test_closed_connection(self):
        transport = socket_transport(FakeSocket(b"220 partial"))
        with pytest.raises(SvdrpError, match="connection closed by vdr.local"):
            transport.readline(Deadline(0))
