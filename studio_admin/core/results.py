"""Step outcome types shared by the cleanup and deprovisioning workflows."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class StepStatus(str, Enum):
    OK = "ok"
    TOLERATED = "tolerated"
    FATAL = "fatal"


@dataclass(frozen=True)
class StepOutcome:
    """Result of one external-facing step.

    A TOLERATED outcome carries the captured error but never stops the
    surrounding operation. A FATAL outcome aborts the remaining steps.
    """
    step: str
    status: StepStatus
    detail: Any = None
    error: Optional[str] = None
    not_found: bool = False

    @classmethod
    def ok(cls, step: str, detail: Any = None) -> "StepOutcome":
        return cls(step=step, status=StepStatus.OK, detail=detail)

    @classmethod
    def tolerated(cls, step: str, error: str, detail: Any = None) -> "StepOutcome":
        return cls(step=step, status=StepStatus.TOLERATED, detail=detail, error=error)

    @classmethod
    def fatal(cls, step: str, error: str, not_found: bool = False) -> "StepOutcome":
        return cls(step=step, status=StepStatus.FATAL, error=error, not_found=not_found)

    @property
    def is_fatal(self) -> bool:
        return self.status is StepStatus.FATAL

    def to_dict(self) -> dict:
        data = {"step": self.step, "status": self.status.value}
        if self.detail is not None:
            data["detail"] = self.detail
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class DeprovisioningResult:
    uid: str
    success: bool
    message: str
    steps: list[StepOutcome] = field(default_factory=list)
    error: Optional[str] = None
    not_found: bool = False

    def to_dict(self) -> dict:
        data = {
            "success": self.success,
            "message": self.message,
            "steps": [outcome.to_dict() for outcome in self.steps],
        }
        if self.error is not None:
            data["details"] = self.error
        return data


@dataclass
class CleanupReport:
    """Per-class (or per-role) record of a best-effort asset cleanup."""
    public_ids: list[str] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)
    folder: Optional[str] = None
    folder_outcome: Optional[StepOutcome] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"public_ids": self.public_ids, "details": self.details}
        if self.folder is not None:
            data["folder"] = {
                "path": self.folder,
                **(self.folder_outcome.to_dict() if self.folder_outcome else {}),
            }
        return data
