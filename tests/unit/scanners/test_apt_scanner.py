"""Unit tests for AptScanner.

Tests for the read-only APT queries.
"""

import subprocess
from unittest.mock import patch

import pytest
from vmscrub.scanners.apt import AptScanner
from vmscrub.scanners.errors import QueryError
from vmscrub.utils.shell import CommandResult


class TestAptScanner:
    """Tests for AptScanner class."""

    @pytest.fixture
    def scanner(self) -> AptScanner:
        """Create AptScanner instance."""
        return AptScanner()

    def test_auto_packages(self, scanner: AptScanner, mock_showauto_output: str) -> None:
        with patch("vmscrub.scanners.apt.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout=mock_showauto_output + "\n", stderr="", returncode=0
            )

            packages = scanner.auto_packages()

        assert packages == ["htop", "libnginx-mod-http-geoip2", "nginx"]
        assert mock_run.call_args[0][0] == ["apt-mark", "showauto"]

    def test_manual_packages(self, scanner: AptScanner, mock_showmanual_output: str) -> None:
        with patch("vmscrub.scanners.apt.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout=mock_showmanual_output, stderr="", returncode=0
            )

            packages = scanner.manual_packages()

        assert "nginx" in packages
        assert len(packages) == 5
        assert mock_run.call_args[0][0] == ["apt-mark", "showmanual"]

    def test_empty_listing(self, scanner: AptScanner, mock_empty_output: str) -> None:
        with patch("vmscrub.scanners.apt.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout=mock_empty_output, stderr="", returncode=0)

            assert scanner.auto_packages() == []

    def test_listing_failure_raises(self, scanner: AptScanner) -> None:
        """Query failures carry the tool's exit code and stderr."""
        with patch("vmscrub.scanners.apt.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="", stderr="E: Could not open lock file", returncode=100
            )

            with pytest.raises(QueryError, match="lock file") as exc_info:
                scanner.auto_packages()

        assert exc_info.value.returncode == 100
        assert exc_info.value.stderr == "E: Could not open lock file"

    def test_missing_tool_raises(self, scanner: AptScanner) -> None:
        with (
            patch("vmscrub.scanners.apt.run_command", side_effect=FileNotFoundError),
            pytest.raises(QueryError, match="command not found") as exc_info,
        ):
            scanner.manual_packages()

        assert exc_info.value.returncode == 127

    def test_timeout_raises_query_error(self, scanner: AptScanner) -> None:
        timeout = subprocess.TimeoutExpired(["apt-mark", "showmanual"], 120)
        with (
            patch("vmscrub.scanners.apt.run_command", side_effect=timeout),
            pytest.raises(QueryError, match="timed out after 120 seconds") as exc_info,
        ):
            scanner.manual_packages()

        assert exc_info.value.returncode == 124

    def test_depends_parses_depends_lines(
        self, scanner: AptScanner, mock_depends_output: str
    ) -> None:
        """Depends, alternatives and PreDepends are kept; virtual ones are not."""
        with patch("vmscrub.scanners.apt.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout=mock_depends_output, stderr="", returncode=0
            )

            deps = scanner.depends("ubuntu-standard")

        assert deps == ["apparmor", "bash-completion", "cron", "dpkg"]
        assert mock_run.call_args[0][0] == ["apt-cache", "depends", "ubuntu-standard"]

    def test_depends_failure_raises(self, scanner: AptScanner) -> None:
        with patch("vmscrub.scanners.apt.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="", stderr="E: No packages found", returncode=100
            )

            with pytest.raises(QueryError, match="No packages found"):
                scanner.depends("ubuntu-standard")
