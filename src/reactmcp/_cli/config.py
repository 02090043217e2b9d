"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Error in reactmcp configuration."""


@dataclass(slots=True, frozen=True)
class ReactmcpConfig:
    """Configuration loaded from the ``[tool.reactmcp]`` table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    ir: Path | None = None
    strict_references: bool | None = None
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


def load_config(pyproject_path: Path) -> ReactmcpConfig:
    """Load and validate [tool.reactmcp] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed ReactmcpConfig

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

    section = data.get("tool", {}).get("reactmcp", {})
    if not section:
        return ReactmcpConfig(project_root=project_root)

    unknown = set(section) - {"ir", "strict_references"}
    if unknown:
        msg = f"Unknown [tool.reactmcp] key(s): {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    ir_path: Path | None = None
    if "ir" in section:
        ir_value = section["ir"]
        if not isinstance(ir_value, str):
            msg = "Invalid [tool.reactmcp].ir: expected string path"
            raise ConfigError(msg)
        ir_path = Path(ir_value)
        if not ir_path.is_absolute():
            ir_path = project_root / ir_path

    strict: bool | None = None
    if "strict_references" in section:
        strict = section["strict_references"]
        if not isinstance(strict, bool):
            msg = "Invalid [tool.reactmcp].strict_references: expected boolean"
            raise ConfigError(msg)

    return ReactmcpConfig(
        ir=ir_path,
        strict_references=strict,
        project_root=project_root,
    )


def get_config() -> ReactmcpConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        ReactmcpConfig (may be empty if no pyproject.toml or no [tool.reactmcp] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return ReactmcpConfig()
    return load_config(pyproject_path)
