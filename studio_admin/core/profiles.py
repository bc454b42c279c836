"""Application profile records stored under users/<uid>."""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Tuple

from studio_admin.core.firebase.records import SERVER_TIMESTAMP

PROFILE_ROOT = "users"
ACCOUNT_STATUS_ACTIVE = "active"

# Named subscription tiers and their starting quantities.
DEFAULT_SUBSCRIPTION = {"free": 1, "pro": 0, "studio": 0}

# Characters the Realtime Database rejects in a key.
_FORBIDDEN_KEY_CHARS = frozenset(".$#[]/")

logger = logging.getLogger(__name__)


def profile_path(uid: str) -> str:
    """Return users/<uid>, rejecting uids that are not usable as a record key."""
    if not uid or any(char in _FORBIDDEN_KEY_CHARS or ord(char) < 32 or ord(char) == 127 for char in uid):
        raise ValueError(f"uid {uid!r} is not a valid profile key")
    return f"{PROFILE_ROOT}/{uid}"


def new_profile(email: Optional[str]) -> Dict[str, Any]:
    return {
        "email": email or "",
        "accountStatus": ACCOUNT_STATUS_ACTIVE,
        "subscription": dict(DEFAULT_SUBSCRIPTION),
        "createdAt": SERVER_TIMESTAMP,
    }


def initialize_profile(records, uid: str, email: Optional[str] = None) -> Tuple[Dict[str, Any], bool]:
    """Create the profile for uid unless it already exists.

    Returns:
        (profile, created) where profile is the stored record
    """
    path = profile_path(uid)
    existing = records.get(path)
    if existing:
        return existing, False

    records.set(path, new_profile(email))
    logger.info(f"Initialized profile for {uid}")
    # Re-read so createdAt carries the resolved server timestamp.
    return records.get(path) or new_profile(email), True
