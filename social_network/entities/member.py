"""
Members and the friend-management capability.

A Member keeps its own copies of every relationship it takes part in.
All operations that touch two members update both sides in the same
call, after every precondition has been checked.
"""

from datetime import datetime, timezone
from typing import List, Optional, Protocol, TYPE_CHECKING, runtime_checkable
import logging

from ..errors import (
    AlreadyFriendsError,
    DuplicateRequestError,
    InvalidArgumentError,
    MemberNotFoundError,
    OwnerCannotLeaveError,
    RelationshipNotFoundError,
    RequestNotFoundError,
)
from .ids import IdSequence, REQUEST_IDS
from .relationships import FriendRelationship, FriendRequest, RequestStatus

if TYPE_CHECKING:
    from .group import Group

logger = logging.getLogger(__name__)


@runtime_checkable
class FriendManager(Protocol):
    """Anything that can keep a symmetric friend list."""

    def add_friend(self, friend: "Member") -> None:
        ...

    def remove_friend(self, friend: "Member") -> None:
        ...

    def get_friends(self) -> List["Member"]:
        ...


class Member:
    """
    A registered participant of the social graph.

    Name and e-mail uniqueness is checked by the network the member is
    added to, not here.
    """

    def __init__(
        self,
        member_id: int,
        name: str,
        email: str,
        request_ids: Optional[IdSequence] = None,
    ):
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("name", "must be a non-empty string")
        if not isinstance(email, str) or not email.strip():
            raise InvalidArgumentError("email", "must be a non-empty string")

        self.id = member_id
        self.name = name
        self.email = email
        self.registered_at = datetime.now(timezone.utc)
        self.is_active = True
        self.request_ids = request_ids if request_ids is not None else REQUEST_IDS

        self._relationships: List[FriendRelationship] = []
        self._sent: List[FriendRequest] = []
        self._received: List[FriendRequest] = []
        # Maintained by Group.add_member / Group.remove_member
        self._groups: List["Group"] = []

    @property
    def friend_relationships(self) -> List[FriendRelationship]:
        return list(self._relationships)

    @property
    def sent_requests(self) -> List[FriendRequest]:
        return list(self._sent)

    @property
    def received_requests(self) -> List[FriendRequest]:
        return list(self._received)

    @property
    def groups(self) -> List["Group"]:
        return list(self._groups)

    # ==================== Friends ====================

    def _find_relationship(self, friend: "Member") -> Optional[FriendRelationship]:
        for relation in self._relationships:
            if relation.involves(friend):
                return relation
        return None

    def _check_other(self, member: "Member", argument: str) -> None:
        if member is None:
            raise InvalidArgumentError(argument)
        if member is self or member.id == self.id:
            raise InvalidArgumentError(argument, "must be a different member")

    def _link(self, friend: "Member") -> None:
        self._relationships.append(FriendRelationship(self, friend))
        friend._relationships.append(FriendRelationship(friend, self))
        logger.debug("Members %s and %s are now friends", self.id, friend.id)

    def is_friend(self, member: "Member") -> bool:
        if member is None or member.id == self.id:
            return False
        return self._find_relationship(member) is not None

    def add_friend(self, friend: "Member") -> None:
        """Create the friendship on both sides."""
        self._check_other(friend, "friend")
        if self.is_friend(friend):
            raise AlreadyFriendsError(self.id, friend.id)
        self._link(friend)

    def remove_friend(self, friend: "Member") -> None:
        """
        Remove the friendship from both sides.

        The reciprocal record may already be gone; only this member's own
        record is required to exist.
        """
        self._check_other(friend, "friend")

        relation = self._find_relationship(friend)
        if relation is None:
            raise RelationshipNotFoundError(self.id, friend.id)

        self._relationships.remove(relation)

        reciprocal = friend._find_relationship(self)
        if reciprocal is not None:
            friend._relationships.remove(reciprocal)

        logger.debug("Friendship between %s and %s removed", self.id, friend.id)

    def get_friends(self) -> List["Member"]:
        """Distinct members on the other side of each relationship."""
        friends: List[Member] = []
        seen = set()
        for relation in self._relationships:
            other = relation.other(self)
            if other.id not in seen:
                seen.add(other.id)
                friends.append(other)
        return friends

    # ==================== Friend requests ====================

    def send_friend_request(self, receiver: "Member") -> FriendRequest:
        """Send a PENDING request to ``receiver`` and return it."""
        self._check_other(receiver, "receiver")

        if self.is_friend(receiver):
            raise AlreadyFriendsError(self.id, receiver.id)

        if any(r.receiver.id == receiver.id and r.is_pending for r in self._sent):
            raise DuplicateRequestError(self.id, receiver.id)

        request = FriendRequest(self.request_ids.next_id(), self, receiver)
        self._sent.append(request)
        receiver._received.append(request)

        logger.debug(
            "Friend request %s sent from %s to %s", request.id, self.id, receiver.id
        )
        return request

    def _check_incoming(self, request: FriendRequest) -> None:
        if request is None:
            raise InvalidArgumentError("request")
        if not any(r is request for r in self._received):
            raise RequestNotFoundError(request.id, self.id)
        request.ensure_pending()

    def accept_friend_request(self, request: FriendRequest) -> None:
        """Accept an incoming request and befriend its sender."""
        self._check_incoming(request)
        if not request.sender.is_active:
            raise MemberNotFoundError(request.sender.id)
        if self.is_friend(request.sender):
            raise AlreadyFriendsError(self.id, request.sender.id)

        request._resolve(RequestStatus.ACCEPTED)
        self._link(request.sender)
        logger.debug("Friend request %s accepted", request.id)

    def decline_friend_request(self, request: FriendRequest) -> None:
        """Decline an incoming request. No friendship is created."""
        self._check_incoming(request)
        request._resolve(RequestStatus.DECLINED)
        logger.debug("Friend request %s declined", request.id)

    def pending_requests(self) -> List[FriendRequest]:
        """Incoming requests still waiting for an answer."""
        return [r for r in self._received if r.is_pending]

    def _withdraw_pending_requests(self) -> int:
        """
        Drop every PENDING request to or from this member from the
        counterpart's list. Returns the number of requests withdrawn.
        """
        withdrawn = 0
        for request in self._sent:
            if request.is_pending and request in request.receiver._received:
                request.receiver._received.remove(request)
                withdrawn += 1
        for request in self._received:
            if request.is_pending and request in request.sender._sent:
                request.sender._sent.remove(request)
                withdrawn += 1
        return withdrawn

    # ==================== Groups ====================

    def join_group(self, group: "Group") -> None:
        if group is None:
            raise InvalidArgumentError("group")
        group.add_member(self)

    def leave_group(self, group: "Group") -> None:
        """Leave a group. The owner has to delete the group instead."""
        if group is None:
            raise InvalidArgumentError("group")
        if group.is_owner(self):
            raise OwnerCannotLeaveError(group.id, self.id)
        group.remove_member(self)

    def __repr__(self) -> str:
        return f"Member(id={self.id}, name={self.name!r})"

    def __str__(self) -> str:
        return f"Member: {self.name}"
