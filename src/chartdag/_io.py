"""Loading chart specifications from files."""

import json
import logging
import tomllib
from pathlib import Path

from ._spec import ChartSpec

logger = logging.getLogger(__name__)


def load_chart_spec(path: Path) -> ChartSpec:
    """Load a chart specification from a JSON or TOML file.

    Args:
        path: Path to a ``.json`` or ``.toml`` file.

    Returns:
        The validated ChartSpec.

    Raises:
        ValueError: If the file suffix is not supported.
        pydantic.ValidationError: If the content does not match the schema.

    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    elif suffix == ".toml":
        with path.open("rb") as f:
            data = tomllib.load(f)
    else:
        msg = f"Unsupported chart specification format: '{path.suffix}' (expected .json or .toml)"
        raise ValueError(msg)

    logger.debug("Loaded chart specification from %s", path)
    return ChartSpec.model_validate(data)
