import logging
import os

logger = logging.getLogger(__name__)


def _canon_prefix(val):
    """
    Normalize API prefix to always be exactly like '/api':
      - defaults to '/api' when unset/empty
      - ensures a single leading slash
      - removes any trailing slash (except for root)
    """
    val = (val or "/api").strip()
    if not val.startswith("/"):
        val = "/" + val
    if len(val) > 1 and val.endswith("/"):
        val = val[:-1]
    return val


def _parse_int(env_var: str, default: int, *, minimum: int = 0) -> int:
    raw_value = os.getenv(env_var)
    if raw_value is None or not raw_value.strip():
        return default

    try:
        value = int(raw_value)
    except ValueError:
        logger.warning(
            "%s is not a valid integer (got %r); defaulting to %d",
            env_var,
            raw_value,
            default,
        )
        return default

    if value < minimum:
        logger.warning(
            "%s must be >= %d (got %d); defaulting to %d",
            env_var,
            minimum,
            value,
            default,
        )
        return default

    return value


def _parse_bool(env_var: str, default: bool) -> bool:
    raw_value = os.getenv(env_var)
    if raw_value is None or not raw_value.strip():
        return default
    return raw_value.strip().lower() == "true"


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

# Completion search
DEFAULT_SOLUTION_LIMIT = _parse_int("DEFAULT_SOLUTION_LIMIT", 50, minimum=1)
MAX_SOLUTION_LIMIT = max(
    _parse_int("MAX_SOLUTION_LIMIT", 200, minimum=1), DEFAULT_SOLUTION_LIMIT
)
RANKED_OVERFLOW_FACTOR = _parse_int("RANKED_OVERFLOW_FACTOR", 3, minimum=1)
DEFAULT_FORBID_FIRST_ZERO = _parse_bool("DEFAULT_FORBID_FIRST_ZERO", True)
DEFAULT_PREFER_REALISM = _parse_bool("DEFAULT_PREFER_REALISM", True)
COMPLETION_CACHE_TTL_SECONDS = _parse_int("COMPLETION_CACHE_TTL_SECONDS", 300)
COMPLETION_RATE_LIMIT = (
    os.getenv("COMPLETION_RATE_LIMIT") or "60/minute"
).strip()


def rate_limits_disabled() -> bool:
    return (os.getenv("DISABLE_RATE_LIMITS") or "").lower() == "true"
