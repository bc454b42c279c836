"""Enable/disable toggle for identity records."""
from __future__ import annotations
import logging

logger = logging.getLogger(__name__)


def set_account_disabled(identity, uid: str, disabled: bool) -> str:
    """Set the disabled flag and return a confirmation message.

    Upstream failures propagate unchanged; the caller reports them as 500.
    """
    if not uid:
        raise ValueError("uid must be a non-empty string")
    identity.set_disabled(uid, disabled)
    state = "disabled" if disabled else "enabled"
    logger.info(f"User {uid} {state}")
    return f"User {uid} has been {state}."
