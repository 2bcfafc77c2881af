"""Unit tests for the monitor command."""

from unittest.mock import patch

from btrfsctl.cli.main import app
from btrfsctl.core.errors import MonitorCancelled, MonitorError
from btrfsctl.utils.shell import CommandResult
from typer.testing import CliRunner

runner = CliRunner()


def _ok(stdout: str) -> CommandResult:
    return CommandResult(stdout=stdout, stderr="", returncode=0)


class TestMonitorCommand:
    """Tests for btrfsctl monitor."""

    def test_prints_changes_until_finished(self) -> None:
        """Progress lines are printed and completion is reported."""
        outputs = [
            _ok("Status: running\n(12.0%)\nRate: 250.0MiB/s"),
            _ok("Status: running\n(12.0%)\nRate: 250.0MiB/s"),
            _ok("Status: finished\n"),
        ]
        with (
            patch("btrfsctl.scrub.monitor.run_command", side_effect=outputs),
            patch("btrfsctl.scrub.monitor.time.sleep"),
        ):
            result = runner.invoke(app, ["monitor", "/mnt/data"])

        assert result.exit_code == 0
        assert result.output.count("Progress:") == 1
        assert "12.0%" in result.output
        assert "250.0 MB/s" in result.output
        assert "Scrub completed successfully" in result.output

    def test_not_running(self) -> None:
        """A filesystem without a scrub ends monitoring normally."""
        with patch("btrfsctl.scrub.monitor.run_command", return_value=_ok("no stats available")):
            result = runner.invoke(app, ["monitor", "/mnt/data"])

        assert result.exit_code == 0
        assert "Scrub not running" in result.output

    def test_cancel_exits_130(self) -> None:
        """Ctrl+C exits with status 130."""
        with patch(
            "btrfsctl.scrub.monitor.TaskMonitor.monitor_loop",
            side_effect=MonitorCancelled("scrub keeps running"),
        ):
            result = runner.invoke(app, ["monitor", "/mnt/data"])

        assert result.exit_code == 130
        assert "keeps running" in result.output

    def test_status_failure_exits_1(self) -> None:
        """A failing status query exits with status 1."""
        with patch(
            "btrfsctl.scrub.monitor.TaskMonitor.monitor_loop",
            side_effect=MonitorError("Cannot query scrub status"),
        ):
            result = runner.invoke(app, ["monitor", "/mnt/data"])

        assert result.exit_code == 1
        assert "Cannot query scrub status" in result.output

    def test_uses_configured_binary(self, isolated_config_home) -> None:
        """The status query uses the btrfs binary from the config."""
        config_file = isolated_config_home / "btrfsctl" / "config.toml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text('btrfs_binary = "/opt/btrfs"\n')

        with patch(
            "btrfsctl.scrub.monitor.run_command", return_value=_ok("Status: finished")
        ) as mock_run:
            result = runner.invoke(app, ["monitor", "/mnt/data"])

        assert result.exit_code == 0
        assert mock_run.call_args[0][0][0] == "/opt/btrfs"

    def test_bracketed_mount_name(self) -> None:
        """Brackets in the mount point are printed literally."""
        with patch(
            "btrfsctl.scrub.monitor.run_command", return_value=_ok("Status: finished")
        ) as mock_run:
            result = runner.invoke(app, ["monitor", "/mnt/backup [old]"])

        assert result.exit_code == 0
        assert "/mnt/backup [old]" in result.output
        assert mock_run.call_args[0][0][-1] == "/mnt/backup [old]"
