import io
import os
import signal
from collections import deque
from types import SimpleNamespace
from unittest import mock

import pytest

from sigtalk.protocol import encode_bits
from sigtalk.server import Server, main


@pytest.fixture
def sent():
    calls = []
    with mock.patch("os.kill", side_effect=lambda pid, sig: calls.append((pid, sig))):
        yield calls


def _signals(message):
    return [signal.SIGUSR1 if bit else signal.SIGUSR2 for bit in encode_bits(message)]


def _send(server, message, pid):
    return [server.handle_signal(sig, pid) for sig in _signals(message)]


def test_receives_message_and_acknowledges_each_bit(sent):
    server = Server(output=io.StringIO())
    results = _send(server, "hi", 100)
    assert results[-1] == b"hi"
    assert all(result is None for result in results[:-1])
    assert server.output.getvalue() == "hi\nSuccessfully received Message\n"
    assert len(sent) == len(results)
    assert sent[:-1] == [(100, signal.SIGUSR1)] * (len(results) - 1)
    assert sent[-1] == (100, signal.SIGUSR2)
    assert server.current_pid is None


def test_other_client_is_dismissed(sent):
    server = Server(output=io.StringIO())
    signals = _signals("x")
    server.handle_signal(signals[0], 100)
    assert server.handle_signal(signal.SIGUSR1, 200) is None
    assert sent[-1] == (200, signal.SIGUSR2)
    assert server.current_pid == 100
    results = [server.handle_signal(sig, 100) for sig in signals[1:]]
    assert results[-1] == b"x"


def test_timeout_drops_client_and_partial_data(sent):
    server = Server(output=io.StringIO())
    for sig in _signals("zz")[:3]:
        server.handle_signal(sig, 100)
    server.timeout()
    assert server.output.getvalue() == "\nTimeout: Client dropped.\n"
    assert server.current_pid is None
    assert _send(server, "ok", 200)[-1] == b"ok"


def test_consecutive_clients_are_served(sent):
    server = Server(output=io.StringIO())
    assert _send(server, "one", 100)[-1] == b"one"
    assert _send(server, "two", 200)[-1] == b"two"
    assert server.output.getvalue().count("Successfully received Message") == 2


def test_unexpected_signal_is_rejected(sent):
    server = Server(output=io.StringIO())
    with pytest.raises(ValueError):
        server.handle_signal(signal.SIGINT, 100)
    assert sent == []


def _script(events):
    queue = deque(events)

    def fake(*args):
        if not queue:
            raise RuntimeError("stop")
        return queue.popleft()

    return fake


def test_serve_forever_handles_waited_signals(sent):
    server = Server(output=io.StringIO())
    events = [SimpleNamespace(si_signo=sig, si_pid=300) for sig in _signals("ab")]
    fake = _script(events)
    with mock.patch("signal.sigwaitinfo", fake), mock.patch("signal.sigtimedwait", fake):
        with pytest.raises(RuntimeError):
            server.serve_forever()
    assert server.output.getvalue() == "ab\nSuccessfully received Message\n"
    assert sent[-1] == (300, signal.SIGUSR2)


def test_serve_forever_times_out_silent_client(sent):
    server = Server(output=io.StringIO())
    fake = _script([SimpleNamespace(si_signo=signal.SIGUSR1, si_pid=300), None])
    with mock.patch("signal.sigwaitinfo", fake), mock.patch("signal.sigtimedwait", fake):
        with pytest.raises(RuntimeError):
            server.serve_forever()
    assert server.output.getvalue() == "\nTimeout: Client dropped.\n"
    assert server.current_pid is None


def test_main_prints_pid_first(capsys):
    with mock.patch("signal.sigwaitinfo", side_effect=KeyboardInterrupt):
        assert main([]) == 0
    assert capsys.readouterr().out == f"{os.getpid()}\n"