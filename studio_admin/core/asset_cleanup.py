"""Best-effort media asset cleanup.

The caller does not reliably know which content-type class an asset id was
uploaded under, so deletions are attempted across every class. A class that
does not hold the id is expected to report "not_found" or fail; either way
the outcome is recorded in the report and never raised.
"""
from __future__ import annotations
import logging
import re
from typing import Iterable, Mapping, Optional
from urllib.parse import urlparse

from studio_admin.core.cloudinary import RESOURCE_TYPES
from studio_admin.core.exceptions import UpstreamError
from studio_admin.core.results import CleanupReport, StepOutcome

logger = logging.getLogger(__name__)

# <anything>/upload/[<transformation>/...v<digits>/]<public id>[.<ext>]
# Transformation segments are only skipped when a version segment follows them.
_TRANSFORMATION_SEGMENT = r"[a-z]{1,3}_[^,/]+(?:,[a-z]{1,3}_[^,/]+)*/"
_UPLOAD_PATH_PATTERN = re.compile(
    rf"/upload/(?:(?:{_TRANSFORMATION_SEGMENT})*v\d+/)?(?P<public_id>.+)$"
)
_EXTENSION_PATTERN = re.compile(r"\.[A-Za-z0-9]+$")

# Request field -> (report role, content-type class)
URL_ROLES = {
    "artworkUrl": ("artwork", "image"),
    "audioUrl": ("audio", "video"),
}


def derive_parent_folder(public_id: str) -> Optional[str]:
    """Return the folder holding public_id, or None when it has no separator."""
    if not public_id or "/" not in public_id:
        return None
    folder = public_id[:public_id.rindex("/")]
    return folder or None


def extract_public_id(url: str) -> Optional[str]:
    """Extract the asset public id from a delivery URL.

    https://host/<cloud>/image/upload/v123/user/u1/releases/r1/artwork.png
        -> user/u1/releases/r1/artwork
    """
    if not url or not isinstance(url, str):
        return None
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None

    match = _UPLOAD_PATH_PATTERN.search(parsed.path)
    if not match:
        return None
    public_id = _EXTENSION_PATTERN.sub("", match.group("public_id")).strip("/")
    return public_id or None


def delete_assets(assets, public_ids: Iterable[str], delete_folder: bool = True) -> CleanupReport:
    """Delete ids under every content-type class, then their parent folder.

    Args:
        assets: AssetHostClient-compatible handle
        public_ids: Non-empty list of asset ids
        delete_folder: Attempt to remove the folder of the first id afterwards

    Returns:
        CleanupReport with details keyed by content-type class
    """
    ids = [public_id for public_id in public_ids if public_id]
    if not ids:
        raise ValueError("public_ids must contain at least one id")

    report = CleanupReport(public_ids=ids)
    logger.info(f"Deleting {len(ids)} asset(s) across classes {', '.join(RESOURCE_TYPES)}")
    for resource_type in RESOURCE_TYPES:
        outcome = _attempt(
            f"delete:{resource_type}",
            lambda rt=resource_type: assets.delete_resources(ids, resource_type=rt, invalidate=True),
        )
        report.details[resource_type] = _detail_value(outcome)

    if delete_folder:
        _delete_parent_folder(assets, ids[0], report)
    return report


def delete_assets_by_url(assets, urls: Mapping[str, Optional[str]], delete_folder: bool = True) -> CleanupReport:
    """Delete assets referenced by delivery URLs.

    Recognized fields are artworkUrl and audioUrl. URLs that yield no
    public id are skipped silently.

    Raises:
        ValueError: No URL produced a usable id
    """
    report = CleanupReport()
    for field, (role, resource_type) in URL_ROLES.items():
        public_id = extract_public_id(urls.get(field))
        if public_id is None:
            if urls.get(field):
                logger.info(f"Skipping {field}: no asset id in {urls.get(field)!r}")
            continue
        report.public_ids.append(public_id)
        outcome = _attempt(
            f"delete:{role}",
            lambda pid=public_id, rt=resource_type: assets.delete_resources([pid], resource_type=rt, invalidate=True),
        )
        report.details[role] = _detail_value(outcome)

    if not report.public_ids:
        raise ValueError("No asset ids could be extracted from the supplied URLs")

    if delete_folder:
        _delete_parent_folder(assets, report.public_ids[0], report)
    return report


def delete_folder_tree(assets, folder: str) -> CleanupReport:
    """Delete every asset under folder in every class, then the folder itself.

    Never raises for upstream failures: a missing folder is the common case
    when cleaning up after a user who never uploaded anything.
    """
    folder = (folder or "").strip("/")
    if not folder:
        raise ValueError("folder must not be empty")

    # Trailing separator keeps user/u1 from matching user/u10.
    prefix = f"{folder}/"
    report = CleanupReport(folder=folder)
    for resource_type in RESOURCE_TYPES:
        outcome = _attempt(
            f"prefix:{resource_type}",
            lambda rt=resource_type: assets.delete_resources_by_prefix(prefix, resource_type=rt, invalidate=True),
        )
        report.details[resource_type] = _detail_value(outcome)

    report.folder_outcome = _attempt("folder", lambda: assets.delete_folder(folder))
    return report


def _delete_parent_folder(assets, first_id: str, report: CleanupReport) -> None:
    folder = derive_parent_folder(first_id)
    if folder is None:
        return
    report.folder = folder
    logger.info(f"Attempting to delete parent folder: {folder}")
    report.folder_outcome = _attempt("folder", lambda: assets.delete_folder(folder))


def _attempt(step: str, call) -> StepOutcome:
    """Run one asset host call, capturing any upstream failure as tolerated."""
    try:
        return StepOutcome.ok(step, call())
    except UpstreamError as exc:
        logger.warning(f"Tolerated asset host failure during {step}: {exc}")
        return StepOutcome.tolerated(step, str(exc))


def _detail_value(outcome: StepOutcome):
    if outcome.error is not None:
        return {"error": outcome.error}
    return outcome.detail
