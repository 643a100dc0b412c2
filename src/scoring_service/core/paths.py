from pathlib import Path

import toml

from scoring_service.core.constants import DISTRIBUTION_NAME

PACKAGE_DIR = Path(__file__).parent.parent
DATA_DIR = PACKAGE_DIR / "data"


class ProjectRootNotFound(Exception):
    pass


def _declares_project(pyproject: Path, name: str) -> bool:
    try:
        data = toml.load(pyproject)
    except (OSError, toml.TomlDecodeError):
        return False
    return bool(data.get("project", {}).get("name") == name)


def get_project_root_dir(
    name: str = DISTRIBUTION_NAME, start: Path | None = None
) -> Path:
    """Look for the root pyproject.toml of this project.

    A pyproject.toml that declares a different project (e.g. the host
    project of an environment the package is installed into) is skipped.
    """
    current = start if start is not None else Path(__file__).parent

    # Walk up until we hit the root
    while True:
        candidate = current / "pyproject.toml"
        if candidate.exists() and _declares_project(candidate, name):
            return current

        parent = current.parent
        if parent == current:
            raise ProjectRootNotFound

        current = parent
