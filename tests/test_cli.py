import sys

import pytest

from ircserv.cli import main
from ircserv.logger import get_logger


@pytest.mark.parametrize("argv", [[], ["6677"], ["6677", "pass123", "extra"]])
def test_wrong_argument_count_prints_usage(argv):
    assert main(argv) == 1
    assert "Usage: ircserv <port> <password>" in get_logger().log


def test_default_argv_comes_from_sys_argv(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["ircserv"])
    assert main() == 1
    assert "Usage: ircserv <port> <password>" in get_logger().log


def test_invalid_port_reports_exception(capsys):
    assert main(["99999", "pass123"]) == 1
    assert "Exception: invalid port number" in capsys.readouterr().err


def test_invalid_password_reports_exception(capsys):
    assert main(["6677", ""]) == 1
    assert "Exception: invalid password" in capsys.readouterr().err