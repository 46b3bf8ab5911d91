"""Server: receive messages from one client at a time, one signal per bit,
acknowledging each bit and turning away other clients meanwhile."""

from __future__ import annotations

import contextlib
import os
import signal
import sys
from collections.abc import Iterator, Sequence
from typing import Optional, TextIO

from sigtalk.helper import safe_kill
from sigtalk.output import put_char, put_endl, put_nbr, put_str
from sigtalk.protocol import ACK_TIMEOUT, MessageDecoder

_SIGNALS = (signal.SIGUSR1, signal.SIGUSR2)


def _ignore(signum, frame) -> None:
    pass


@contextlib.contextmanager
def _captured_signals() -> Iterator[None]:
    """Hold SIGUSR1 and SIGUSR2 back so they can be waited for."""
    previous = {signum: signal.signal(signum, _ignore) for signum in _SIGNALS}
    mask = signal.pthread_sigmask(signal.SIG_BLOCK, _SIGNALS)
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, mask)
        for signum, handler in previous.items():
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)


class Server:
    """Receives messages and writes them to *output* (standard output by default)."""

    def __init__(self, output: Optional[TextIO] = None, ack_timeout: float = ACK_TIMEOUT) -> None:
        self.output = output
        self.ack_timeout = ack_timeout
        self.current_pid: Optional[int] = None
        self._decoder = MessageDecoder()

    @property
    def _stream(self) -> TextIO:
        return sys.stdout if self.output is None else self.output

    def _drop_client(self) -> None:
        self._decoder.reset()
        self.current_pid = None

    def handle_signal(self, sig: int, pid: int) -> Optional[bytes]:
        """Process one bit signal from *pid*; return a message once complete."""
        if sig not in _SIGNALS:
            raise ValueError(f"unexpected signal {sig}")
        if self.current_pid is None:
            self.current_pid = pid
        if pid != self.current_pid:
            safe_kill(pid, signal.SIGUSR2, "Failed to dismiss new client.")
            return None
        stream = self._stream
        try:
            message = self._decoder.feed(sig == signal.SIGUSR1)
        except OverflowError:
            put_endl("\nMessage too long: Client dropped.", stream)
            stream.flush()
            self._drop_client()
            safe_kill(pid, signal.SIGUSR2, "Failed to close Connection.")
            return None
        if message is None:
            safe_kill(pid, signal.SIGUSR1, "Failed to communicate with client.")
            return None
        self.current_pid = None
        put_str(message.decode("utf-8", "replace"), stream)
        put_str("\nSuccessfully received Message\n", stream)
        stream.flush()
        safe_kill(pid, signal.SIGUSR2, "Failed to close Connection.")
        return message

    def timeout(self) -> None:
        """Give up on the current client and discard what it sent so far."""
        stream = self._stream
        put_endl("\nTimeout: Client dropped.", stream)
        stream.flush()
        self._drop_client()

    def serve_forever(self) -> None:
        """Wait for signals and handle them until interrupted."""
        with _captured_signals():
            while True:
                if self.current_pid is None:
                    info = signal.sigwaitinfo(_SIGNALS)
                else:
                    info = signal.sigtimedwait(_SIGNALS, self.ack_timeout)
                    if info is None:
                        self.timeout()
                        continue
                self.handle_signal(info.si_signo, info.si_pid)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry: print the process id, then serve until interrupted."""
    put_nbr(os.getpid(), sys.stdout)
    put_char("\n", sys.stdout)
    sys.stdout.flush()
    try:
        Server().serve_forever()
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())