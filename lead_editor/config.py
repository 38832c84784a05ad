"""
Runtime configuration.

Values come from environment variables; `load_env()` can pull them from a
`.env` file first. Database settings are read by `DatabaseConnectionPool`
itself (DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_CACHE_TTL_SECONDS = 5 * 60


def load_env(env_path: str | Path | None = None, override: bool = False) -> bool:
    """
    Load environment variables from a .env file.

    Args:
        env_path: Path to the .env file (defaults to ./.env)
        override: Whether values in the file replace variables already set

    Returns:
        True if a file was found and loaded
    """
    path = Path(env_path) if env_path else Path.cwd() / ".env"
    if not path.exists():
        return False
    return load_dotenv(path, override=override)


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def cache_ttl_seconds() -> float:
    return float(os.getenv("CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS)))


def strict_normalization() -> bool:
    return _flag("STRICT_NORMALIZATION")


def schema_path() -> str | None:
    return os.getenv("LEAD_EDITOR_SCHEMA_PATH")


def rules_path() -> str | None:
    return os.getenv("LEAD_EDITOR_RULES_PATH")


def database_configured() -> bool:
    """Whether a PostgreSQL store can be built (a password is required)."""
    return bool(os.getenv("DB_PASSWORD"))
