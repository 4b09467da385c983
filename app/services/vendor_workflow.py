"""
Vendor application state machine.

PENDING is the only non-terminal state. Every review, whichever endpoint it
comes from, goes through ``transition`` so the legal moves live in one table.
"""
import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models.vendor import ApplicationStatus
from app.exceptions import ConflictError, ValidationError

ALREADY_REVIEWED = "Application has already been reviewed"


class ReviewAction(str, enum.Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"

    @classmethod
    def from_status(cls, status) -> "ReviewAction":
        """Map the requested target status (APPROVED/REJECTED) to an action."""
        try:
            return _ACTION_BY_TARGET[ApplicationStatus(status)]
        except (KeyError, ValueError):
            raise ValidationError(
                "Status must be APPROVED or REJECTED",
                errors=[{"field": "status", "message": "Status must be APPROVED or REJECTED"}],
            )


_TRANSITIONS = {
    (ApplicationStatus.PENDING, ReviewAction.APPROVE): ApplicationStatus.APPROVED,
    (ApplicationStatus.PENDING, ReviewAction.REJECT): ApplicationStatus.REJECTED,
}

_ACTION_BY_TARGET = {target: action for (_, action), target in _TRANSITIONS.items()}

TERMINAL_STATUSES = frozenset({ApplicationStatus.APPROVED, ApplicationStatus.REJECTED})


def next_status(status, action) -> ApplicationStatus:
    target = _TRANSITIONS.get((ApplicationStatus(status), ReviewAction(action)))
    if target is None:
        raise ConflictError(ALREADY_REVIEWED)
    return target


@dataclass(frozen=True)
class ReviewDecision:
    application_id: int
    expected_version: int
    action: ReviewAction
    target: ApplicationStatus
    reviewer_id: int
    reviewed_at: datetime
    rejection_reason: Optional[str] = None


@dataclass(frozen=True)
class VendorApproved:
    """Raised when an application is approved; applying it makes the user a vendor."""

    application_id: int
    user_id: int
    reviewer_id: int
    occurred_at: datetime


def transition(application, action, reviewer_id, rejection_reason=None, now=None) -> ReviewDecision:
    action = ReviewAction(action)
    target = next_status(application.status, action)
    reason = (rejection_reason or "").strip() or None
    if action is ReviewAction.REJECT and reason is None:
        raise ValidationError(
            "Rejection reason is required",
            errors=[{"field": "rejectionReason", "message": "Rejection reason is required"}],
        )
    return ReviewDecision(
        application_id=application.id,
        expected_version=application.version,
        action=action,
        target=target,
        reviewer_id=reviewer_id,
        reviewed_at=now or datetime.utcnow(),
        rejection_reason=reason if action is ReviewAction.REJECT else None,
    )


def approval_event(application, decision: ReviewDecision) -> Optional[VendorApproved]:
    if decision.target is not ApplicationStatus.APPROVED:
        return None
    return VendorApproved(
        application_id=application.id,
        user_id=application.user_id,
        reviewer_id=decision.reviewer_id,
        occurred_at=decision.reviewed_at,
    )
