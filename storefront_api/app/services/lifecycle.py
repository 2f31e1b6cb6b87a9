"""
Status lifecycles for moderated records.

Each lifecycle is an explicit table of allowed transitions; it is the
single place where status changes are decided.
"""

from enum import Enum
from typing import Dict, FrozenSet, Mapping, Type, TypeVar

from ..core.errors import InvalidTransitionError, ValidationError
from ..schemas.returns import ReturnStatus
from ..schemas.review import ReviewStatus


S = TypeVar("S", bound=Enum)

REVIEW_TRANSITIONS: Dict[ReviewStatus, FrozenSet[ReviewStatus]] = {
    ReviewStatus.PENDING: frozenset({ReviewStatus.APPROVED, ReviewStatus.REJECTED}),
    ReviewStatus.APPROVED: frozenset(),
    ReviewStatus.REJECTED: frozenset(),
}

RETURN_TRANSITIONS: Dict[ReturnStatus, FrozenSet[ReturnStatus]] = {
    ReturnStatus.PENDING: frozenset({ReturnStatus.APPROVED, ReturnStatus.REJECTED}),
    ReturnStatus.APPROVED: frozenset({ReturnStatus.PICKED_UP}),
    ReturnStatus.PICKED_UP: frozenset({ReturnStatus.REFUNDED, ReturnStatus.COMPLETED}),
    ReturnStatus.REFUNDED: frozenset(),
    ReturnStatus.COMPLETED: frozenset(),
    ReturnStatus.REJECTED: frozenset(),
}


def parse_status(enum_cls: Type[S], value: object) -> S:
    """Convert a client-supplied status string to ``enum_cls``."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Unknown status {value!r}; expected one of {allowed}", field="status") from None


def assert_transition(table: Mapping[S, FrozenSet[S]], current: S, requested: S) -> None:
    """Raise :class:`InvalidTransitionError` unless ``current → requested`` is allowed."""
    if requested not in table.get(current, frozenset()):
        raise InvalidTransitionError(current.value, requested.value)
