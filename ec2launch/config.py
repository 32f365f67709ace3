"""Deal with configuration file."""
import logging
import os
from io import StringIO
from pathlib import Path
from typing import Any, MutableMapping, Optional, Union

import toml

# Order matters here. Local should take precedence over global.
CONFIG_PATHS = [
    Path("~/.config/ec2launch.toml").expanduser(),
    Path("/etc/ec2launch.toml"),
]

ConfigFile = Union[Path, StringIO]
log = logging.getLogger(__name__)


def _load(path: ConfigFile) -> MutableMapping[str, Any]:
    try:
        config = toml.load(path)
    except toml.TomlDecodeError as e:
        raise ValueError(
            "Could not parse configuration file pointed to by "
            "{}".format(path)
        ) from e
    log.debug("Loaded configuration from %s", path)
    return config


def parse_config(
    config_file: Optional[ConfigFile] = None,
) -> MutableMapping[str, Any]:
    """Find the relevant TOML, load, and return it.

    A file chosen explicitly, through `config_file` or $EC2LAUNCH_CONFIG,
    must exist. The default locations are optional; when none of them
    exists an empty configuration is returned.

    Raises:
        ValueError: an explicit file is missing, or a file cannot be
            parsed
    """
    explicit = config_file
    if not explicit and os.environ.get("EC2LAUNCH_CONFIG"):
        explicit = Path(os.environ["EC2LAUNCH_CONFIG"])
    if explicit:
        try:
            return _load(explicit)
        except FileNotFoundError:
            raise ValueError(
                "Configuration file {} not found".format(explicit)
            ) from None

    for path in CONFIG_PATHS:
        try:
            return _load(path)
        except FileNotFoundError:
            continue
    log.debug("No configuration file found, using defaults")
    return {}
