"""
Common/Shared Fixtures

Base factories and generators used across test layers.
"""
import itertools
import uuid
from datetime import datetime, timezone
from typing import Optional

_owner_ids = itertools.count(1000)


def make_owner_id() -> int:
    """Generate a unique integer owner ID"""
    return next(_owner_ids)


def make_username(prefix: str = "user") -> str:
    """Generate a unique username"""
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def make_email(prefix: Optional[str] = None) -> str:
    """Generate a unique email"""
    prefix = prefix or f"test_{uuid.uuid4().hex[:8]}"
    return f"{prefix}@example.com"


def make_timestamp() -> datetime:
    """Current UTC timestamp"""
    return datetime.now(timezone.utc)
