import os
from pathlib import Path

ENV_FILE_VAR = "FINASSIST_ENV_FILE"

# Checked in order when FINASSIST_ENV_FILE is unset or points nowhere
_ENV_CANDIDATES = ("config/.env.dev", "config/.env")


def project_root() -> Path:
    """Directory holding pyproject.toml (or .git), else the installed package parent."""
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").is_file() or (parent / ".git").is_dir():
            return parent
    return here.parents[2]


def resolve_env_file_path(root: Path | None = None) -> Path | None:
    """Resolve the .env file for Settings.

    Priority:
    1. FINASSIST_ENV_FILE (absolute, or relative to the project root)
    2. config/.env.dev (local development)
    3. config/.env (deployment)
    """
    root = root or project_root()

    explicit = os.environ.get(ENV_FILE_VAR)
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = root / path
        if path.is_file():
            return path

    for candidate in _ENV_CANDIDATES:
        path = root / candidate
        if path.is_file():
            return path
    return None
