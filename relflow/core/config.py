"""Typed configuration loading and access.

Configuration is optional. When present it lives in `relflow.toml` at the
workspace root:

    [scan]
    exclude = ["relflow-test-projects", "target"]

    [changelog]
    file = "CHANGELOG.md"
    max_depth = 3

    [publish]
    require_metadata = true
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_int, get_str, get_str_list, get_table

__all__ = [
    "Config",
    "ConfigError",
    "ScanConfig",
    "ChangelogConfig",
    "PublishConfig",
    "CONFIG_FILE_NAME",
    "MANIFEST_FILE_NAME",
    "TEST_PROJECTS_DIR",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "relflow.toml"
MANIFEST_FILE_NAME = "Cargo.toml"

# Fixture workspaces used by our own test suite; never part of a real scan.
TEST_PROJECTS_DIR = "relflow-test-projects"

DEFAULT_EXCLUDE: tuple[str, ...] = (TEST_PROJECTS_DIR, "target")
DEFAULT_CHANGELOG_FILE = "CHANGELOG.md"
DEFAULT_MAX_HEADING_DEPTH = 3


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Directory traversal settings.

    `exclude` holds directory *names*; a directory with one of these names is
    not entered, wherever it sits in the tree.
    """

    exclude: tuple[str, ...] = DEFAULT_EXCLUDE

    def is_excluded(self, directory: Path) -> bool:
        return directory.name in self.exclude


@dataclass(frozen=True, slots=True)
class ChangelogConfig:
    file: str = DEFAULT_CHANGELOG_FILE
    max_depth: int = DEFAULT_MAX_HEADING_DEPTH


@dataclass(frozen=True, slots=True)
class PublishConfig:
    require_metadata: bool = True


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    scan: ScanConfig = field(default_factory=ScanConfig)
    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a value is present but out of range.
        """
        scan: StrDict = get_table(data, "scan") or {}
        changelog: StrDict = get_table(data, "changelog") or {}
        publish: StrDict = get_table(data, "publish") or {}

        exclude = get_str_list(scan, "exclude")
        max_depth = get_int(changelog, "max_depth")
        if max_depth is not None and not 1 <= max_depth <= 6:
            raise ValueError(f"changelog.max_depth must be between 1 and 6, got {max_depth}")

        require_metadata = get_bool(publish, "require_metadata")

        return cls(
            scan=ScanConfig(exclude=DEFAULT_EXCLUDE if exclude is None else exclude),
            changelog=ChangelogConfig(
                file=get_str(changelog, "file") or DEFAULT_CHANGELOG_FILE,
                max_depth=max_depth or DEFAULT_MAX_HEADING_DEPTH,
            ),
            publish=PublishConfig(
                require_metadata=True if require_metadata is None else require_metadata,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relflow.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(root: Path) -> Result[Config, ConfigError]:
    """Load `relflow.toml` from a workspace root, or defaults if there is none.

    A file that exists but cannot be parsed is still an error.
    """
    path = root / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
