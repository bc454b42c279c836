"""
User deprovisioning: ordered, best-effort removal of a user's state.

Steps run strictly one after another:

    1. assets    delete everything under the user's asset folder   (TOLERATED on failure)
    2. profile   remove the user's profile subtree                 (FATAL on failure)
    3. identity  delete the identity record                        (FATAL on failure)

Identity goes last because its deletion cannot be undone; everything that
depends on it is removed (or abandoned as orphaned media) first. The three
stores are not transactional: a fatal failure in step 2 or 3 leaves the
earlier steps applied.
"""
from __future__ import annotations
import logging

from studio_admin.core.asset_cleanup import delete_folder_tree
from studio_admin.core.exceptions import IdentityNotFoundError, UpstreamError
from studio_admin.core.profiles import profile_path
from studio_admin.core.results import DeprovisioningResult, StepOutcome, StepStatus

DEFAULT_FOLDER_TEMPLATE = "user/{uid}"

logger = logging.getLogger(__name__)


def user_asset_folder(uid: str, template: str = DEFAULT_FOLDER_TEMPLATE) -> str:
    return template.format(uid=uid).strip("/")


class DeprovisioningService:
    """Coordinates asset cleanup, profile removal and identity deletion for one user."""

    def __init__(self, identity, records, assets, folder_template: str = DEFAULT_FOLDER_TEMPLATE):
        self.identity = identity
        self.records = records
        self.assets = assets
        self.folder_template = folder_template

    def deprovision(self, uid: str) -> DeprovisioningResult:
        if not isinstance(uid, str) or not uid.strip():
            raise ValueError("uid must be a non-empty string")
        # Rejected before any store is touched.
        profile_path(uid)

        result = DeprovisioningResult(uid=uid, success=False, message="")
        for step in (self._cleanup_assets, self._remove_profile, self._delete_identity):
            outcome = step(uid)
            result.steps.append(outcome)

            if outcome.status is StepStatus.FATAL:
                logger.error(f"Deprovisioning {uid} aborted at step '{outcome.step}': {outcome.error}")
                result.message = f"Failed to delete user {uid}"
                result.error = outcome.error
                result.not_found = outcome.not_found
                return result
            if outcome.status is StepStatus.TOLERATED:
                logger.warning(f"Deprovisioning {uid} continuing past step '{outcome.step}': {outcome.error}")

        result.success = True
        result.message = f"User {uid} and associated data deleted."
        logger.info(result.message)
        return result

    def _cleanup_assets(self, uid: str) -> StepOutcome:
        folder = user_asset_folder(uid, self.folder_template)
        try:
            report = delete_folder_tree(self.assets, folder)
        except ValueError as exc:
            return StepOutcome.tolerated("assets", str(exc))

        errors = [
            f"{key}: {value['error']}"
            for key, value in report.details.items()
            if isinstance(value, dict) and "error" in value
        ]
        if report.folder_outcome is not None and report.folder_outcome.error:
            errors.append(f"folder: {report.folder_outcome.error}")

        if errors:
            return StepOutcome.tolerated("assets", "; ".join(errors), detail=report.to_dict())
        return StepOutcome.ok("assets", report.to_dict())

    def _remove_profile(self, uid: str) -> StepOutcome:
        try:
            self.records.remove(profile_path(uid))
        except UpstreamError as exc:
            return StepOutcome.fatal("profile", exc.message, not_found=exc.status_code == 404)
        except ValueError as exc:
            return StepOutcome.fatal("profile", str(exc))
        return StepOutcome.ok("profile")

    def _delete_identity(self, uid: str) -> StepOutcome:
        try:
            self.identity.delete_user(uid)
        except IdentityNotFoundError as exc:
            return StepOutcome.fatal("identity", exc.message, not_found=True)
        except UpstreamError as exc:
            return StepOutcome.fatal("identity", exc.message)
        return StepOutcome.ok("identity")
