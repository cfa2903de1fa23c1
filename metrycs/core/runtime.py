# metrycs/core/runtime.py
"""
Request-scoped sources of randomness and time.

Routes take these as FastAPI dependencies so tests can pin both through
app.dependency_overrides.
"""

import random
from datetime import datetime, timezone
from typing import Optional

from metrycs.core.config import settings

_seeded_rng: Optional[random.Random] = None


def get_rng() -> random.Random:
    """A process-wide seeded generator when RANDOM_SEED is set, else a fresh one."""
    global _seeded_rng
    if settings.RANDOM_SEED is None:
        return random.Random()
    if _seeded_rng is None:
        _seeded_rng = random.Random(settings.RANDOM_SEED)
    return _seeded_rng


def get_current_time() -> datetime:
    return datetime.now(timezone.utc)
