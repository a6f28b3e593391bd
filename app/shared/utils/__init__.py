"""Shared utilities: datetime, generators, retry backoff."""

from app.shared.utils.datetime import ensure_utc, hours_between, utc_now
from app.shared.utils.generators import generate_cuid
from app.shared.utils.retry import compute_backoff

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "hours_between",
    "compute_backoff",
]
