"""SDK configuration: environment variables and derived constants.

Loads the Bot API endpoint, default timeouts, and the name of the token
environment variable via ``python-dotenv``.  All values are resolved at
import time so other modules can ``from config import …`` without repeated
lookups.  The token itself is read lazily through :func:`get_env_token` so a
client constructed later still sees variables set after import.
"""

# ── stdlib ───────────────────────────────────────────────────────────────────
import os

# ── third-party ──────────────────────────────────────────────────────────────
from dotenv import load_dotenv

# ── core ─────────────────────────────────────────────────────────────────────
from core.logger import SdkLogger

# ── Environment bootstrap ────────────────────────────────────────────────────
load_dotenv()

# ── Logger (used for startup diagnostics at the bottom of this module) ───────
logger = SdkLogger.get_logger()


# ── Helper functions (private) ───────────────────────────────────────────────


def _parse_seconds(raw: str | None, default: float) -> float:
    """Parse a positive number of seconds, falling back to *default*.

    Empty, non-numeric, and non-positive values are ignored.
    """
    if not raw:
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def _parse_workers(raw: str | None, default: int) -> int:
    """Parse a positive worker count, falling back to *default*."""
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


# ── Public constants ─────────────────────────────────────────────────────────

BOT_TOKEN_ENV_NAME: str = "TELEGRAM_BOT_TOKEN"
BASE_BOT_URL: str = os.environ.get("TELEGRAM_BASE_BOT_URL") or "https://api.telegram.org/bot"
DEFAULT_TIMEOUT: float = _parse_seconds(os.environ.get("TELEGRAM_TIMEOUT"), 60)
DEFAULT_CONNECT_TIMEOUT: float = _parse_seconds(os.environ.get("TELEGRAM_CONNECT_TIMEOUT"), 10)
MAX_ASYNC_WORKERS: int = _parse_workers(os.environ.get("TELEGRAM_MAX_ASYNC_WORKERS"), 4)


def get_env_token(name: str = BOT_TOKEN_ENV_NAME) -> str | None:
    """Return the bot token stored in the environment variable *name*."""
    return os.environ.get(name) or None


# ── Startup diagnostics ─────────────────────────────────────────────────────

if get_env_token():
    logger.debug("Config loaded, bot token found in environment", extra={"env_name": BOT_TOKEN_ENV_NAME})
else:
    logger.debug("Config loaded, no bot token in environment", extra={"env_name": BOT_TOKEN_ENV_NAME})

logger.debug(
    "Bot API endpoint resolved",
    extra={
        "base_bot_url": BASE_BOT_URL,
        "timeout": DEFAULT_TIMEOUT,
        "connect_timeout": DEFAULT_CONNECT_TIMEOUT,
        "max_async_workers": MAX_ASYNC_WORKERS,
    },
)
