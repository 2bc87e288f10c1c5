"""
Friend requests and friendship records.

A friendship is stored twice, once on each side, as two
FriendRelationship instances that name their holder as ``member1``.
A FriendRequest is a single object shared by the sender's sent list
and the receiver's received list.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING
from enum import Enum

from ..errors import AlreadyProcessedError, InvalidArgumentError

if TYPE_CHECKING:
    from .member import Member


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RequestStatus(Enum):
    """Lifecycle of a friend request. ACCEPTED and DECLINED are terminal."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


@dataclass(eq=False)
class FriendRequest:
    """
    A directed proposal of friendship from ``sender`` to ``receiver``.

    Requests are kept after they are resolved as a history record;
    only a PENDING one blocks a new request between the same pair.
    """
    id: int
    sender: "Member"
    receiver: "Member"
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    resolved_at: Optional[datetime] = None

    def __post_init__(self):
        if self.sender is None:
            raise InvalidArgumentError("sender")
        if self.receiver is None:
            raise InvalidArgumentError("receiver")

    @property
    def is_pending(self) -> bool:
        return self.status is RequestStatus.PENDING

    def ensure_pending(self) -> None:
        """Raise AlreadyProcessedError unless the request is still PENDING."""
        if not self.is_pending:
            raise AlreadyProcessedError(self.id, self.status.value)

    def _resolve(self, status: RequestStatus) -> None:
        # Callers check ensure_pending() before touching anything else.
        self.ensure_pending()
        self.status = status
        self.resolved_at = _utcnow()

    def __repr__(self) -> str:
        return (
            f"FriendRequest(id={self.id}, sender={self.sender.id}, "
            f"receiver={self.receiver.id}, status={self.status.value})"
        )


@dataclass(eq=False)
class FriendRelationship:
    """One side's record of an accepted friendship."""
    member1: "Member"
    member2: "Member"
    since: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        if self.member1 is None:
            raise InvalidArgumentError("member1")
        if self.member2 is None:
            raise InvalidArgumentError("member2")

    def other(self, member: "Member") -> "Member":
        """The participant opposite to ``member``."""
        return self.member2 if member.id == self.member1.id else self.member1

    def involves(self, member: "Member") -> bool:
        return member.id in (self.member1.id, self.member2.id)

    def __repr__(self) -> str:
        return f"FriendRelationship({self.member1.id} -> {self.member2.id})"
