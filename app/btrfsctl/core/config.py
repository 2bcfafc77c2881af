"""Configuration model and I/O.

Settings are stored in ~/.config/btrfsctl/config.toml. A missing file
means all defaults apply.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from btrfsctl.core.errors import ConfigError, ConfigParseError
from btrfsctl.core.paths import get_config_path


class BtrfsctlConfig(BaseModel):
    """Runtime settings for btrfsctl.

    Attributes:
        btrfs_binary: Name or path of the btrfs executable.
        poll_interval_seconds: Delay between scrub status polls.
        settle_seconds: Delay between starting a scrub and monitoring it.
        use_ionice: Allow ionice for priority scrubs.
    """

    model_config = ConfigDict(extra="forbid")

    btrfs_binary: Annotated[
        str,
        Field(min_length=1, description="btrfs executable name or path"),
    ] = "btrfs"
    poll_interval_seconds: Annotated[
        float,
        Field(ge=0.5, le=60.0, description="Seconds between status polls (0.5-60)"),
    ] = 2.0
    settle_seconds: Annotated[
        float,
        Field(ge=0.0, le=30.0, description="Seconds to wait before monitoring a new scrub"),
    ] = 2.0
    use_ionice: Annotated[
        bool,
        Field(description="Use ionice to raise I/O priority for priority scrubs"),
    ] = True


def load_config(path: Path | None = None) -> BtrfsctlConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated BtrfsctlConfig. Defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return BtrfsctlConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return BtrfsctlConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: BtrfsctlConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary file first and moved into place
    with os.replace().

    Args:
        config: The configuration to save.
        path: Destination. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config.model_dump()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
