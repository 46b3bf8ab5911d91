"""Sending a signal to another process without letting a failure escape."""

from __future__ import annotations

import os
import sys

from sigtalk.output import put_endl


def safe_kill(pid: int, sig: int, err_message: str) -> bool:
    """Send *sig* to *pid*.

    Returns True when the signal was sent. When it could not be sent,
    *err_message* is written to standard output and False is returned.
    """
    try:
        os.kill(pid, sig)
    except OSError:
        put_endl(err_message, sys.stdout)
        sys.stdout.flush()
        return False
    return True