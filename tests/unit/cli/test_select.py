"""Unit tests for select command.

Tests for the CLI select command implementation.
"""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from osdpkg.cli.main import app
from osdpkg.errors import ServiceConnectionError, TaskSequenceEnvironmentError
from osdpkg.models.package import PackageRecord
from osdpkg.tsenv.memory import MemoryTaskSequenceEnvironment
from typer.testing import CliRunner

runner = CliRunner()

SERVICE_ARGS = ["--endpoint", "http://cm01/ConfigMgrWebService/ConfigMgr.asmx", "--secret", "s3"]
DELL_7490 = ["--manufacturer", "Dell Inc.", "--model", "Latitude 7490"]


def _make_record(package_id: str, name: str, created: str) -> PackageRecord:
    """Create a test Dell PackageRecord."""
    return PackageRecord(
        package_id=package_id,
        name=name,
        manufacturer="Dell",
        created=datetime.fromisoformat(created).replace(tzinfo=UTC),
    )


class _FakeClient:
    """Stand-in for PackageServiceClient (class and instance in one)."""

    def __init__(
        self,
        records: list[PackageRecord] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.records = records or []
        self.error = error
        self.endpoint: str | None = None
        self.calls: list[tuple[str, str]] = []

    def __call__(self, endpoint: str, timeout: float = 30.0) -> "_FakeClient":
        self.endpoint = endpoint
        return self

    def __enter__(self) -> "_FakeClient":
        return self

    def __exit__(self, *args: Any) -> None:
        return None

    def list_packages(self, secret: str, filter: str = "") -> list[PackageRecord]:
        self.calls.append((secret, filter))
        if self.error is not None:
            raise self.error
        return list(self.records)


@pytest.fixture
def two_packages() -> _FakeClient:
    """Client returning two packages for the Latitude 7490."""
    return _FakeClient(
        [
            _make_record("P1", "Latitude 7490 BIOS A", "2020-01-01"),
            _make_record("P2", "Latitude 7490 BIOS B", "2021-06-01"),
        ]
    )


@pytest.fixture
def task_sequence(tmp_path: Path) -> MemoryTaskSequenceEnvironment:
    """Task sequence environment logging into tmp_path."""
    return MemoryTaskSequenceEnvironment({"_SMSTSLogPath": str(tmp_path)})


@pytest.fixture(autouse=True)
def temp_log_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep fallback log files inside tmp_path."""
    monkeypatch.setattr("osdpkg.logs.cmtrace.tempfile.gettempdir", lambda: str(tmp_path))
    return tmp_path


class TestSelectCommand:
    """Tests for osdpkg select command."""

    def test_select_help(self) -> None:
        """Select command shows help."""
        result = runner.invoke(app, ["select", "--help"])
        assert result.exit_code == 0
        assert "Select the package for this machine" in result.stdout

    def test_publishes_newest_package(
        self,
        two_packages: _FakeClient,
        task_sequence: MemoryTaskSequenceEnvironment,
        tmp_path: Path,
    ) -> None:
        """The newest matching package is written to the task sequence."""
        with (
            patch("osdpkg.cli.commands.select.PackageServiceClient", two_packages),
            patch(
                "osdpkg.cli.commands.select.ComTaskSequenceEnvironment",
                return_value=task_sequence,
            ),
        ):
            result = runner.invoke(app, ["select", *SERVICE_ARGS, *DELL_7490])

        assert result.exit_code == 0
        assert task_sequence.get("OSDDownloadDownloadPackages") == "P2"
        assert "Set OSDDownloadDownloadPackages to P2" in result.output

        log = (tmp_path / "OSDPackageSelector.log").read_text(encoding="utf-8")
        assert "Computer model determined as: Latitude 7490" in log
        assert "Selected package P2" in log

    def test_single_package(self, task_sequence: MemoryTaskSequenceEnvironment) -> None:
        """A single matching package is selected."""
        client = _FakeClient([_make_record("P1", "Latitude 7490 BIOS A", "2020-01-01")])
        with (
            patch("osdpkg.cli.commands.select.PackageServiceClient", client),
            patch(
                "osdpkg.cli.commands.select.ComTaskSequenceEnvironment",
                return_value=task_sequence,
            ),
        ):
            result = runner.invoke(app, ["select", *SERVICE_ARGS, *DELL_7490])

        assert result.exit_code == 0
        assert task_sequence.get("OSDDownloadDownloadPackages") == "P1"

    def test_passes_secret_and_filter(
        self,
        two_packages: _FakeClient,
        task_sequence: MemoryTaskSequenceEnvironment,
    ) -> None:
        """Endpoint, secret and filter reach the service client."""
        with (
            patch("osdpkg.cli.commands.select.PackageServiceClient", two_packages),
            patch(
                "osdpkg.cli.commands.select.ComTaskSequenceEnvironment",
                return_value=task_sequence,
            ),
        ):
            runner.invoke(app, ["select", *SERVICE_ARGS, "--filter", "BIOS", *DELL_7490])

        assert two_packages.endpoint == "http://cm01/ConfigMgrWebService/ConfigMgr.asmx"
        assert two_packages.calls == [("s3", "BIOS")]

    def test_custom_log_file(
        self,
        two_packages: _FakeClient,
        task_sequence: MemoryTaskSequenceEnvironment,
        tmp_path: Path,
    ) -> None:
        """--log-file changes the log file name."""
        with (
            patch("osdpkg.cli.commands.select.PackageServiceClient", two_packages),
            patch(
                "osdpkg.cli.commands.select.ComTaskSequenceEnvironment",
                return_value=task_sequence,
            ),
        ):
            runner.invoke(
                app, ["select", *SERVICE_ARGS, *DELL_7490, "--log-file", "BIOSPackage.log"]
            )

        assert (tmp_path / "BIOSPackage.log").exists()

    def test_dry_run(self, two_packages: _FakeClient) -> None:
        """--dry-run selects without opening the task sequence."""
        with (
            patch("osdpkg.cli.commands.select.PackageServiceClient", two_packages),
            patch("osdpkg.cli.commands.select.ComTaskSequenceEnvironment") as mock_com,
        ):
            result = runner.invoke(app, ["select", "--dry-run", *SERVICE_ARGS, *DELL_7490])

        assert result.exit_code == 0
        assert "Dry run" in result.output
        assert "P2" in result.output
        mock_com.assert_not_called()

    def test_no_match_exits_with_error(
        self,
        task_sequence: MemoryTaskSequenceEnvironment,
        tmp_path: Path,
    ) -> None:
        """An empty catalog exits 1 without writing the variable."""
        with (
            patch("osdpkg.cli.commands.select.PackageServiceClient", _FakeClient([])),
            patch(
                "osdpkg.cli.commands.select.ComTaskSequenceEnvironment",
                return_value=task_sequence,
            ),
        ):
            result = runner.invoke(app, ["select", *SERVICE_ARGS, *DELL_7490])

        assert result.exit_code == 1
        assert "No package found" in result.output
        assert task_sequence.get("OSDDownloadDownloadPackages") == ""

        log = (tmp_path / "OSDPackageSelector.log").read_text(encoding="utf-8")
        assert 'type="3"' in log

    def test_unsupported_manufacturer(
        self,
        two_packages: _FakeClient,
        task_sequence: MemoryTaskSequenceEnvironment,
    ) -> None:
        """Unsupported manufacturers exit 1."""
        with (
            patch("osdpkg.cli.commands.select.PackageServiceClient", two_packages),
            patch(
                "osdpkg.cli.commands.select.ComTaskSequenceEnvironment",
                return_value=task_sequence,
            ),
        ):
            result = runner.invoke(
                app, ["select", *SERVICE_ARGS, "--manufacturer", "LENOVO", "--model", "20L5"]
            )

        assert result.exit_code == 1
        assert "not supported" in result.output
        assert task_sequence.variables.get("OSDDownloadDownloadPackages") is None

    def test_service_error(self, task_sequence: MemoryTaskSequenceEnvironment) -> None:
        """Connection failures exit 1."""
        client = _FakeClient(error=ServiceConnectionError("Unable to connect to package service"))
        with (
            patch("osdpkg.cli.commands.select.PackageServiceClient", client),
            patch(
                "osdpkg.cli.commands.select.ComTaskSequenceEnvironment",
                return_value=task_sequence,
            ),
        ):
            result = runner.invoke(app, ["select", *SERVICE_ARGS, *DELL_7490])

        assert result.exit_code == 1
        assert "Unable to connect" in result.output

    def test_environment_unavailable(self, two_packages: _FakeClient, tmp_path: Path) -> None:
        """Failing to open the task sequence exits 1 and logs to temp."""
        with (
            patch("osdpkg.cli.commands.select.PackageServiceClient", two_packages),
            patch(
                "osdpkg.cli.commands.select.ComTaskSequenceEnvironment",
                side_effect=TaskSequenceEnvironmentError("Unable to open the task sequence"),
            ),
        ):
            result = runner.invoke(app, ["select", *SERVICE_ARGS, *DELL_7490])

        assert result.exit_code == 1
        assert "Unable to open" in result.output
        assert two_packages.calls == []
        assert (tmp_path / "OSDPackageSelector.log").exists()

    def test_missing_endpoint(self) -> None:
        """Running without endpoint and secret exits 1."""
        result = runner.invoke(app, ["select", "--dry-run", *DELL_7490])

        assert result.exit_code == 1
        assert "Missing required" in result.output

    def test_settings_from_config_file(self, two_packages: _FakeClient, tmp_path: Path) -> None:
        """Endpoint and secret can come from the config file."""
        config_file = tmp_path / "osdpkg.toml"
        config_file.write_text(
            'endpoint = "http://cm02/ConfigMgrWebService/ConfigMgr.asmx"\n'
            'secret_key = "from-file"\n'
            'filter = "BIOS"\n'
        )
        with patch("osdpkg.cli.commands.select.PackageServiceClient", two_packages):
            result = runner.invoke(
                app, ["--config", str(config_file), "select", "--dry-run", *DELL_7490]
            )

        assert result.exit_code == 0
        assert two_packages.endpoint == "http://cm02/ConfigMgrWebService/ConfigMgr.asmx"
        assert two_packages.calls == [("from-file", "BIOS")]

    def test_invalid_config_file(self, tmp_path: Path) -> None:
        """An invalid config file exits 1 and is logged as an error."""
        config_file = tmp_path / "osdpkg.toml"
        config_file.write_text("endpoint = \n")

        result = runner.invoke(
            app, ["--config", str(config_file), "select", "--dry-run", *DELL_7490]
        )

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

        log = (tmp_path / "OSDPackageSelector.log").read_text(encoding="utf-8")
        assert 'type="3"' in log
        assert "Invalid TOML" in log

    def test_invalid_option_value_is_logged(self, tmp_path: Path) -> None:
        """Invalid option values are logged to the default log file."""
        result = runner.invoke(
            app, ["select", "--dry-run", *SERVICE_ARGS, *DELL_7490, "--log-file", ""]
        )

        assert result.exit_code == 1
        assert "Invalid option value" in result.output

        log = (tmp_path / "OSDPackageSelector.log").read_text(encoding="utf-8")
        assert 'type="3"' in log

    def test_malformed_endpoint(
        self,
        task_sequence: MemoryTaskSequenceEnvironment,
        tmp_path: Path,
    ) -> None:
        """An endpoint that is not a valid URL exits 1 and logs an error."""
        with patch(
            "osdpkg.cli.commands.select.ComTaskSequenceEnvironment",
            return_value=task_sequence,
        ):
            result = runner.invoke(
                app,
                ["select", "-u", "http://cm01:notaport/ConfigMgr.asmx", "-k", "s", *DELL_7490],
            )

        assert result.exit_code == 1
        assert "Unable to connect" in result.output
        assert task_sequence.variables.get("OSDDownloadDownloadPackages") is None

        log = (tmp_path / "OSDPackageSelector.log").read_text(encoding="utf-8")
        error_lines = [line for line in log.splitlines() if 'type="3"' in line]
        assert any("Unable to connect" in line for line in error_lines)
