"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory for every test."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def mock_filesystem_show_output() -> str:
    """Sample btrfs filesystem show output with two devices."""
    return """Label: 'data'  uuid: 5f6c3a2e-9b1d-4c7e-8a0f-2d3e4f5a6b7c
\tTotal devices 2 FS bytes used 51.00GiB
\tdevid    1 size 931.51GiB used 60.03GiB path /dev/sda
\tdevid    2 size 931.51GiB used 60.03GiB path /dev/sdb
"""


@pytest.fixture
def mock_scrub_running_output() -> str:
    """Sample btrfs scrub status output while a scrub is running."""
    return """UUID:             5f6c3a2e-9b1d-4c7e-8a0f-2d3e4f5a6b7c
Scrub started:    Sat Oct 17 10:00:00 2026
Status:           running
Duration:         0:05:12
Time left:        0:07:01
ETA:              Sat Oct 17 10:12:13 2026
Total to scrub:   120.00GiB
Bytes scrubbed:   51.00GiB  (42.50%)
Rate:             310.20MiB/s
Error summary:    no errors found
"""


@pytest.fixture
def mock_scrub_finished_output() -> str:
    """Sample btrfs scrub status output after a completed scrub."""
    return """UUID:             5f6c3a2e-9b1d-4c7e-8a0f-2d3e4f5a6b7c
Scrub started:    Sat Oct 17 10:00:00 2026
Status:           finished
Duration:         0:12:13
Total to scrub:   120.00GiB
Rate:             167.60MiB/s
Error summary:    no errors found
"""


@pytest.fixture
def mock_scrub_aborted_output() -> str:
    """Sample btrfs scrub status output after a cancelled scrub."""
    return """UUID:             5f6c3a2e-9b1d-4c7e-8a0f-2d3e4f5a6b7c
Scrub started:    Sat Oct 17 10:00:00 2026
Status:           aborted
Duration:         0:01:02
Error summary:    no errors found
"""


@pytest.fixture
def mock_device_stats_output() -> str:
    """Sample btrfs device stats output with one non-zero counter."""
    return """[/dev/sda].write_io_errs    0
[/dev/sda].read_io_errs     0
[/dev/sda].flush_io_errs    0
[/dev/sda].corruption_errs  3
[/dev/sda].generation_errs  0
"""
