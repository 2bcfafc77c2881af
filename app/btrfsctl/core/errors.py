"""Exception hierarchy for btrfsctl.

Unknown device classification is not an error and has no exception here;
it is a regular result with a conservative tuning profile.
"""


class BtrfsctlError(Exception):
    """Base exception for btrfsctl errors."""


class DeviceEnumerationError(BtrfsctlError):
    """Raised when the devices backing a mount cannot be listed."""


class LaunchError(BtrfsctlError):
    """Raised when the scrub process cannot be spawned."""


class TaskError(BtrfsctlError):
    """Raised when the background scrub exits with a non-zero status.

    Attributes:
        exit_code: Exit status reported by the scrub process.
    """

    def __init__(self, exit_code: int, message: str | None = None) -> None:
        self.exit_code = exit_code
        super().__init__(message or f"Scrub failed with exit code {exit_code}")


class MonitorError(BtrfsctlError):
    """Raised when a scrub status query fails."""


class MonitorCancelled(BtrfsctlError):
    """Raised when the monitor loop is interrupted by the user.

    The scrub being monitored keeps running.
    """


class ConfigError(BtrfsctlError):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""
