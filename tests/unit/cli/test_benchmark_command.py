"""Unit tests for the benchmark command."""

import subprocess
from pathlib import Path
from unittest.mock import patch

from btrfsctl.cli.main import app
from btrfsctl.core.btrfs import BtrfsTool
from btrfsctl.models.device import ClassificationResult
from typer.testing import CliRunner

runner = CliRunner()


class TestBenchmarkCommand:
    """Tests for btrfsctl benchmark."""

    @patch.object(BtrfsTool, "device_size", return_value="1.82TiB")
    @patch(
        "btrfsctl.devices.classifier.DeviceClassifier.classify",
        return_value=ClassificationResult.from_counts(0, 1),
    )
    def test_ssd_estimates(self, _mock_classify, _mock_size, tmp_path: Path) -> None:
        """SSD filesystems show NVMe figures and a short duration."""
        result = runner.invoke(app, ["benchmark", str(tmp_path)])

        assert result.exit_code == 0
        assert "SCRUB SPEED BENCHMARK" in result.output
        assert "NVMe Gen4" in result.output
        assert "10-30 minutes" in result.output
        assert "1.82TiB" in result.output

    @patch.object(BtrfsTool, "device_size", return_value=None)
    @patch(
        "btrfsctl.devices.classifier.DeviceClassifier.classify",
        return_value=ClassificationResult.from_counts(3, 0),
    )
    def test_without_size_skips_time_estimates(
        self, _mock_classify, _mock_size, tmp_path: Path
    ) -> None:
        """Time estimates need the filesystem size."""
        result = runner.invoke(app, ["benchmark", str(tmp_path)])

        assert result.exit_code == 0
        assert "HDD 7200rpm" in result.output
        assert "TIME ESTIMATES" not in result.output

    def test_missing_mount_point(self, tmp_path: Path) -> None:
        """A missing mount point exits with status 1."""
        result = runner.invoke(app, ["benchmark", str(tmp_path / "missing")])

        assert result.exit_code == 1

    @patch(
        "btrfsctl.core.btrfs.run_command",
        side_effect=subprocess.TimeoutExpired(["btrfs", "filesystem", "usage"], 60),
    )
    @patch(
        "btrfsctl.devices.classifier.DeviceClassifier.classify",
        return_value=ClassificationResult.from_counts(0, 1),
    )
    def test_hanging_usage_query(self, _mock_classify, _mock_run, tmp_path: Path) -> None:
        """A timed-out size query still prints the throughput estimates."""
        result = runner.invoke(app, ["benchmark", str(tmp_path)])

        assert result.exit_code == 0
        assert result.exception is None
        assert "NVMe Gen4" in result.output
        assert "TIME ESTIMATES" not in result.output

    @patch.object(BtrfsTool, "device_size", return_value=None)
    @patch(
        "btrfsctl.devices.classifier.DeviceClassifier.classify",
        return_value=ClassificationResult.from_counts(0, 1),
    )
    def test_bracketed_mount_name(self, _mock_classify, _mock_size, tmp_path: Path) -> None:
        """Brackets in the mount point are printed literally."""
        mount = tmp_path / "backup [old]"
        mount.mkdir()

        result = runner.invoke(app, ["benchmark", str(mount)])

        assert result.exit_code == 0
        assert "backup [old]" in " ".join(result.output.split())
