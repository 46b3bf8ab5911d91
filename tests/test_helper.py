import os
from unittest import mock

import pytest

from sigtalk.helper import safe_kill


def test_signal_zero_to_self_succeeds(capsys):
    assert safe_kill(os.getpid(), 0, "unused message") is True
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("error", [ProcessLookupError, PermissionError])
def test_failure_prints_message_and_returns_false(capsys, error):
    with mock.patch("os.kill", side_effect=error()):
        assert safe_kill(12345, 10, "Failed to close Connection.") is False
    assert capsys.readouterr().out == "Failed to close Connection.\n"


def test_passes_pid_and_signal_through():
    with mock.patch("os.kill") as kill:
        assert safe_kill(4242, 12, "unused message") is True
    kill.assert_called_once_with(4242, 12)