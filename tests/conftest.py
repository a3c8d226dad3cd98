"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture
def mock_lsof_output() -> str:
    """Sample lsof +D output with the header line already removed."""
    return """Preview    4211 alice  12r   REG   1,18   482133   91 /Volumes/SD/a.jpg
Preview    4211 alice  13w   REG   1,18     1024   92 /Volumes/SD/b.jpg
mds_stores  310  root   5u   REG   1,18     8192   17 /Volumes/SD/.Spotlight-V100
Terminal   5120 alice   4r   DIR   1,18      256    2 /Volumes/SD
ffmpeg     6001 alice   3u   REG   1,18  9000000  120 /Volumes/SD/out.mp4"""


@pytest.fixture
def mock_lsof_system_only() -> str:
    """lsof output where only macOS background services hold handles."""
    return """mds         301  root   4r   DIR   1,18      256    2 /Volumes/SD
mds_stores  310  root   5u   REG   1,18     8192   17 /Volumes/SD/.Spotlight-V100
fseventsd    88  root  11u   REG   1,18     4096   18 /Volumes/SD/.fseventsd/0001"""


@pytest.fixture
def mock_lsof_readers_only() -> str:
    """lsof output where user apps only read from the volume."""
    return """Preview    4211 alice  12r   REG   1,18   482133   91 /Volumes/SD/a.jpg
QuickLook  4300 alice   7r   REG   1,18   482133   91 /Volumes/SD/a.jpg"""


@pytest.fixture
def mount_root(tmp_path: Path) -> Path:
    """Fake /Volumes with two removable volumes and the boot volume."""
    root = tmp_path / "Volumes"
    root.mkdir()
    (root / "Macintosh HD").mkdir()
    (root / "SD Card").mkdir()
    (root / "Backup").mkdir()
    return root
