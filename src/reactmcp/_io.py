"""Reading application IR files and writing analysis results."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ._ir import AppIR

if TYPE_CHECKING:
    from ._analyze import AnalysisResult

logger = logging.getLogger(__name__)


class IRLoadError(Exception):
    """Error reading an IR file."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load IR from {path}: {reason}")


def _read_raw(path: Path) -> Any:
    match path.suffix.lower():
        case ".json":
            with path.open(encoding="utf-8") as f:
                return json.load(f)
        case ".toml":
            with path.open("rb") as f:
                return tomllib.load(f)
        case _:
            msg = f"unsupported file type '{path.suffix}' (expected .json or .toml)"
            raise IRLoadError(path, msg)


def load_ir(path: Path) -> AppIR:
    """Load an application IR from a JSON or TOML file.

    The file holds the four IR collections at top level::

        [[inputs]]
        id = "species"
        type = "select"

        [[outputs]]
        id = "scatter"
        type = "plot"
        input_deps = ["species"]

    Args:
        path: Path to a ``.json`` or ``.toml`` file.

    Returns:
        The validated AppIR. ``source`` defaults to the file path.

    Raises:
        IRLoadError: If the file cannot be read, parsed or validated.

    """
    logger.debug(f"Loading IR from {path}")
    try:
        data = _read_raw(path)
    except OSError as e:
        raise IRLoadError(path, str(e)) from e
    except UnicodeDecodeError as e:
        raise IRLoadError(path, f"invalid encoding: {e}") from e
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise IRLoadError(path, f"invalid {path.suffix.lstrip('.').upper()}: {e}") from e

    if not isinstance(data, dict):
        raise IRLoadError(path, "top level must be a table/object")
    data.setdefault("source", str(path))

    try:
        return AppIR.model_validate(data)
    except ValidationError as e:
        raise IRLoadError(path, str(e)) from e


def export_analysis_to_json(result: AnalysisResult, path: Path, *, indent: int = 2) -> None:
    """Write an AnalysisResult to a JSON file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=indent)
        f.write("\n")
