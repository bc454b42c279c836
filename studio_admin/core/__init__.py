"""Core business logic for the studio admin backend.

This module contains pure business logic, independent of Flask.
"""
from .account_state import set_account_disabled
from .asset_cleanup import (
    delete_assets,
    delete_assets_by_url,
    delete_folder_tree,
    derive_parent_folder,
    extract_public_id,
)
from .deprovisioning import DeprovisioningService, user_asset_folder
from .profiles import initialize_profile, profile_path
from .results import CleanupReport, DeprovisioningResult, StepOutcome, StepStatus

__all__ = [
    "set_account_disabled",
    "delete_assets",
    "delete_assets_by_url",
    "delete_folder_tree",
    "derive_parent_folder",
    "extract_public_id",
    "DeprovisioningService",
    "user_asset_folder",
    "initialize_profile",
    "profile_path",
    "CleanupReport",
    "DeprovisioningResult",
    "StepOutcome",
    "StepStatus",
]
