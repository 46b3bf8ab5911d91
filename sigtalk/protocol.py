"""The wire format: one signal per bit, most significant bit first, each
message ended by a NUL byte. SIGUSR1 carries a one, SIGUSR2 a zero."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Optional, Union

# How long either side waits for the other before giving up, in seconds.
ACK_TIMEOUT = 0.9

# Bytes a received message may occupy, its terminator included.
MESSAGE_CAPACITY = 2097152


def _bits(data: bytes) -> Iterator[bool]:
    for byte in data:
        for shift in range(7, -1, -1):
            yield bool((byte >> shift) & 1)


def encode_bits(message: Union[str, bytes]) -> Iterator[bool]:
    """Yield the bits of *message* followed by its NUL terminator.

    Text is encoded as UTF-8. A message holding a NUL byte is rejected.
    """
    if isinstance(message, str):
        data = message.encode("utf-8", "surrogateescape")
    elif isinstance(message, (bytes, bytearray, memoryview)):
        data = bytes(message)
    else:
        raise TypeError(f"expected str or bytes, not {type(message).__name__}")
    if 0 in data:
        raise ValueError("message must not contain a NUL byte")
    return _bits(data + b"\0")


class MessageDecoder:
    """Assembles bits into bytes and bytes into NUL-terminated messages."""

    def __init__(self, capacity: int = MESSAGE_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._buffer = bytearray()
        self._byte = 0
        self._bits = 0

    def feed(self, bit: object) -> Optional[bytes]:
        """Take one bit; return the whole message once its terminator is in.

        Raises OverflowError, and starts over, when the message would not
        fit in the decoder's capacity.
        """
        self._byte = ((self._byte << 1) | (1 if bit else 0)) & 0xFF
        self._bits += 1
        if self._bits < 8:
            return None
        byte = self._byte
        self._byte = 0
        self._bits = 0
        if byte:
            if len(self._buffer) >= self.capacity - 1:
                self.reset()
                raise OverflowError("message exceeds decoder capacity")
            self._buffer.append(byte)
            return None
        message = bytes(self._buffer)
        self._buffer.clear()
        return message

    def reset(self) -> None:
        """Discard any partly received byte and message."""
        self._buffer.clear()
        self._byte = 0
        self._bits = 0