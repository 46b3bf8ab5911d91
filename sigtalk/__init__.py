"""Text messaging between processes over SIGUSR1/SIGUSR2 signals, with the
small character, byte-buffer and string helpers it is built on."""

__version__ = "0.1.0"