import os
from typing import List


def _required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(
            f"Missing required environment variable '{name}'. "
            "Set it in the environment or the container .env."
        )
    return value


# PUBLIC_INTERFACE
def database_dsn() -> str:
    """
    Build the DSN from the standardized database env vars.

    Uses:
      - POSTGRES_URL (optional full DSN; if provided, it wins)
      - POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_DB, POSTGRES_PORT
      - POSTGRES_HOST (defaults to localhost)
    """
    url = os.getenv("POSTGRES_URL")
    if url:
        return url

    user = _required_env("POSTGRES_USER")
    password = _required_env("POSTGRES_PASSWORD")
    db = _required_env("POSTGRES_DB")
    port = _required_env("POSTGRES_PORT")
    host = os.getenv("POSTGRES_HOST", "localhost")
    return f"postgresql://{user}:{password}@{host}:{port}/{db}"


# PUBLIC_INTERFACE
def pool_bounds() -> tuple:
    """Return (minconn, maxconn) for the connection pool."""
    minconn = int(os.getenv("DB_POOL_MIN", "1"))
    maxconn = int(os.getenv("DB_POOL_MAX", "5"))
    if minconn > maxconn:
        raise RuntimeError(f"DB_POOL_MIN ({minconn}) cannot exceed DB_POOL_MAX ({maxconn})")
    return minconn, maxconn


# PUBLIC_INTERFACE
def cors_allow_origins() -> List[str]:
    """Allowed CORS origins; all by default, restricted via CORS_ALLOW_ORIGINS (comma separated)."""
    env_val = os.getenv("CORS_ALLOW_ORIGINS")
    if not env_val:
        return ["*"]
    return [o.strip() for o in env_val.split(",") if o.strip()]


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def port() -> int:
    return int(os.getenv("PORT", "3000"))


DOCS_URL = "/api-docs"
