"""Client: send one message to a server process, one signal per bit,
waiting for the server to acknowledge every bit."""

from __future__ import annotations

import contextlib
import enum
import os
import signal
import sys
from collections.abc import Callable, Iterator, Sequence
from typing import Optional, Union

from sigtalk.helper import safe_kill
from sigtalk.output import put_endl
from sigtalk.protocol import ACK_TIMEOUT, encode_bits
from sigtalk.text import parse_int

_SIGNALS = (signal.SIGUSR1, signal.SIGUSR2)


class Outcome(enum.Enum):
    """How an attempt to send a message ended."""

    SENT = "sent"
    CLOSED = "closed"
    BUSY = "busy"
    TIMEOUT = "timeout"


def _ignore(signum, frame) -> None:
    pass


@contextlib.contextmanager
def _acknowledgements() -> Iterator[Callable[[float], Optional[int]]]:
    """Hold SIGUSR1 and SIGUSR2 back and yield a function that waits for one."""
    previous = {signum: signal.signal(signum, _ignore) for signum in _SIGNALS}
    mask = signal.pthread_sigmask(signal.SIG_BLOCK, _SIGNALS)

    def wait(timeout: float) -> Optional[int]:
        info = signal.sigtimedwait(_SIGNALS, timeout)
        return None if info is None else info.si_signo

    try:
        yield wait
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, mask)
        for signum, handler in previous.items():
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)


def send_message(message: Union[str, bytes], pid: int) -> Outcome:
    """Send *message* to the server with process id *pid*.

    Raises ConnectionError when a signal cannot be delivered.
    """
    bits = encode_bits(message)
    with _acknowledgements() as wait:
        for index, bit in enumerate(bits):
            sig = signal.SIGUSR1 if bit else signal.SIGUSR2
            if not safe_kill(pid, sig, "Error communicating with server\n"):
                raise ConnectionError("Error during communication")
            reply = wait(ACK_TIMEOUT)
            if reply is None:
                return Outcome.TIMEOUT
            if reply == signal.SIGUSR2:
                return Outcome.BUSY if index < 8 else Outcome.CLOSED
    return Outcome.SENT


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry: ``client <server pid> <message>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        return 0
    pid = parse_int(args[0])
    try:
        outcome = send_message(os.fsencode(args[1]), pid)
    except ConnectionError as exc:
        put_endl(str(exc), sys.stdout)
        return 1
    if outcome is Outcome.BUSY:
        put_endl("Server is busy with another client.", sys.stdout)
    elif outcome is Outcome.CLOSED:
        put_endl("Server closed Connection.", sys.stdout)
    elif outcome is Outcome.TIMEOUT:
        put_endl("Failed attempt to communicate with Server", sys.stdout)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())