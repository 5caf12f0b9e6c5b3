"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from vmscrub.utils.shell import CommandResult


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's $VMSCRUB_CONFIG out of the tests."""
    monkeypatch.delenv("VMSCRUB_CONFIG", raising=False)


@pytest.fixture
def mock_depends_output() -> str:
    """Sample apt-cache depends output for ubuntu-standard."""
    return """ubuntu-standard
  Depends: apparmor
  Depends: bash-completion
 |Depends: cron
  Depends: <cron-daemon>
  PreDepends: dpkg
  Depends: apparmor
  Recommends: lxd-installer
  Suggests: ubuntu-docs"""


@pytest.fixture
def mock_showmanual_output() -> str:
    """Sample apt-mark showmanual output."""
    return """apparmor
htop
nginx
ubuntu-minimal
ubuntu-standard"""


@pytest.fixture
def mock_showauto_output() -> str:
    """Sample apt-mark showauto output."""
    return """htop
libnginx-mod-http-geoip2
nginx"""


@pytest.fixture
def mock_empty_output() -> str:
    """Empty output for testing edge cases."""
    return ""


@pytest.fixture
def mock_passwd_content() -> str:
    """Sample /etc/passwd with system accounts and two regular users."""
    return """root:x:0:0:root:/root:/bin/bash
daemon:x:1:1:daemon:/usr/sbin:/usr/sbin/nologin
syslog:x:104:111::/home/syslog:/usr/sbin/nologin
ubuntu:x:1000:1000:Ubuntu:/home/ubuntu:/bin/bash
deploy:x:1001:1001::/home/deploy:/bin/bash"""


@pytest.fixture
def passwd_file(tmp_path: Path, mock_passwd_content: str) -> Path:
    """Write the sample account database to a temporary file."""
    path = tmp_path / "passwd"
    path.write_text(mock_passwd_content + "\n")
    return path


@pytest.fixture
def fake_apt_queries(
    mock_depends_output: str,
    mock_showmanual_output: str,
    mock_showauto_output: str,
) -> Callable[..., CommandResult]:
    """Side effect for run_command answering the apt queries."""
    outputs = {
        ("apt-cache", "depends", "ubuntu-standard"): mock_depends_output,
        ("apt-mark", "showmanual"): mock_showmanual_output,
        ("apt-mark", "showauto"): mock_showauto_output,
    }

    def _run(args: list[str], **_: object) -> CommandResult:
        return CommandResult(stdout=outputs[tuple(args)], stderr="", returncode=0)

    return _run
