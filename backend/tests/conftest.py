import asyncio
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# app.main refuses to import without an explicit origin list
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
os.environ.setdefault("ALLOW_CREDENTIALS", "false")
os.environ.setdefault("DISABLE_RATE_LIMITS", "true")


@pytest.fixture(autouse=True)
def clear_completion_cache():
    """Each test sees a cold completion cache."""

    from app.cache import completion_cache

    asyncio.run(completion_cache.clear())
    yield
