"""btrfsctl - BTRFS scrub orchestration and filesystem reports.

Classifies the devices behind a BTRFS mount, tunes and launches scrubs,
and monitors their progress.
"""

__version__ = "0.1.0"
