"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from chartdag._scales import DEFAULT_BAND_PADDING


class ConfigError(Exception):
    """Error in chartdag configuration."""


@dataclass(slots=True, frozen=True)
class ChartdagConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    spec: Path | None = None
    output: Path | None = None
    band_padding: float = DEFAULT_BAND_PADDING
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.chartdag].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def load_config(pyproject_path: Path) -> ChartdagConfig:
    """Load and validate [tool.chartdag] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed ChartdagConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("chartdag", {})
    if not section:
        return ChartdagConfig(project_root=project_root)

    band_padding = section.get("band-padding", DEFAULT_BAND_PADDING)
    # bool is an int subclass but never a valid padding
    if isinstance(band_padding, bool) or not isinstance(band_padding, (int, float)):
        msg = "Invalid [tool.chartdag].band-padding: expected a number"
        raise ConfigError(msg)
    if not 0 <= band_padding < 1:
        msg = f"Invalid [tool.chartdag].band-padding: {band_padding} is not in [0, 1)"
        raise ConfigError(msg)

    return ChartdagConfig(
        spec=_parse_path(section, "spec", project_root),
        output=_parse_path(section, "output", project_root),
        band_padding=float(band_padding),
        project_root=project_root,
    )


def get_config() -> ChartdagConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        ChartdagConfig (may be empty if no pyproject.toml or no [tool.chartdag] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return ChartdagConfig()
    return load_config(pyproject_path)
