"""
The network aggregate.

Owns the registered members and groups, hands out member and group ids,
and is the only place a member can be removed from, because removal has
to clean up every relationship that points at the member.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import logging

from ..errors import (
    DuplicateEmailError,
    DuplicateIdentifierError,
    DuplicateNameError,
    GroupNotFoundError,
    InvalidArgumentError,
    MemberNotFoundError,
    PermissionDeniedError,
)
from ..entities.ids import IdSequence, REQUEST_IDS
from ..entities.member import Member
from ..entities.group import Group
from .summary import NetworkSummary

logger = logging.getLogger(__name__)


@dataclass
class NetworkConfig:
    """Configuration for a social network."""
    # Reject members whose name or e-mail clashes (case-insensitive)
    enforce_unique_identity: bool = True

    # Withdraw pending requests to/from a member when it is removed
    # (when off, requests from a removed member stay listed but cannot be accepted)
    cascade_pending_requests: bool = True

    # Group owners must be registered in the network
    require_registered_owner: bool = True

    # Id sequences
    first_member_id: int = 1
    first_group_id: int = 1


class SocialNetwork:
    """
    Root aggregate for members and groups.

    Friendship rules live on Member and membership rules on Group; the
    network adds uniqueness checks, id allocation and cascading removal.
    """

    def __init__(
        self,
        config: Optional[NetworkConfig] = None,
        request_ids: Optional[IdSequence] = None,
    ):
        self.config = config or NetworkConfig()
        self.request_ids = request_ids if request_ids is not None else REQUEST_IDS

        self._member_ids = IdSequence(self.config.first_member_id)
        self._group_ids = IdSequence(self.config.first_group_id)

        # Insertion ordered, keyed by id
        self._members: Dict[int, Member] = {}
        self._groups: Dict[int, Group] = {}

    @property
    def members(self) -> List[Member]:
        return list(self._members.values())

    @property
    def groups(self) -> List[Group]:
        return list(self._groups.values())

    # ==================== Lookups ====================

    def has_member(self, member_id: int) -> bool:
        return member_id in self._members

    def get_member(self, member_id: int) -> Optional[Member]:
        return self._members.get(member_id)

    def get_group(self, group_id: int) -> Optional[Group]:
        return self._groups.get(group_id)

    def find_member_by_name(self, name: str) -> Optional[Member]:
        key = name.strip().casefold()
        for member in self._members.values():
            if member.name.strip().casefold() == key:
                return member
        return None

    def find_member_by_email(self, email: str) -> Optional[Member]:
        key = email.strip().casefold()
        for member in self._members.values():
            if member.email.strip().casefold() == key:
                return member
        return None

    def find_group_by_name(self, name: str) -> Optional[Group]:
        key = name.strip().casefold()
        for group in self._groups.values():
            if group.name.strip().casefold() == key:
                return group
        return None

    # ==================== Members ====================

    def add_member(self, member: Member) -> None:
        """Register a member built by the caller."""
        if member is None:
            raise InvalidArgumentError("member")

        if member.id in self._members:
            raise DuplicateIdentifierError(member.id)

        if self.config.enforce_unique_identity:
            if self.find_member_by_name(member.name) is not None:
                raise DuplicateNameError(member.name, kind="member")
            if self.find_member_by_email(member.email) is not None:
                raise DuplicateEmailError(member.email)

        if member.request_ids is not self.request_ids:
            # Requests already issued elsewhere could collide with this
            # network's ids.
            if member._sent or member._received:
                raise InvalidArgumentError(
                    "member", "already holds requests from another id sequence"
                )
            member.request_ids = self.request_ids

        self._members[member.id] = member
        logger.info("Member %s (%s) added", member.id, member.name)

    def register_member(self, name: str, email: str) -> Member:
        """Create a member with the next free id and register it."""
        member_id = self._member_ids.next_id()
        while member_id in self._members:
            member_id = self._member_ids.next_id()

        member = Member(member_id, name, email, request_ids=self.request_ids)
        self.add_member(member)
        return member

    def remove_member(self, member_id: int) -> None:
        """
        Remove a member and everything that references it.

        Groups the member owns are deleted (or disbanded when they are not
        part of this network), other groups lose the member, friendships
        are dropped on both sides and (by default) pending requests to or
        from the member are withdrawn. The member ends up inactive.
        """
        member = self._members.get(member_id)
        if member is None:
            raise MemberNotFoundError(member_id)

        for group in member.groups:
            if not group.is_owner(member):
                continue
            if self._groups.get(group.id) is group:
                self.delete_group(group)
            else:
                group.disband()

        for group in member.groups:
            group.remove_member(member)

        for friend in member.get_friends():
            member.remove_friend(friend)

        if self.config.cascade_pending_requests:
            withdrawn = member._withdraw_pending_requests()
            if withdrawn:
                logger.debug(
                    "Withdrew %d pending requests of member %s", withdrawn, member_id
                )

        del self._members[member_id]
        member.is_active = False
        logger.info("Member %s (%s) removed", member_id, member.name)

    # ==================== Groups ====================

    def create_group(self, name: str, owner: Member) -> Group:
        """Create a group; the owner becomes its first member."""
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("name", "must be a non-empty string")
        if owner is None:
            raise InvalidArgumentError("owner")

        name = name.strip()
        if self.find_group_by_name(name) is not None:
            raise DuplicateNameError(name)

        if (
            self.config.require_registered_owner
            and self._members.get(owner.id) is not owner
        ):
            raise MemberNotFoundError(owner.id)

        group = Group(self._group_ids.next_id(), name, owner)
        self._groups[group.id] = group
        logger.info("Group %s (%s) created by %s", group.id, group.name, owner.id)
        return group

    def delete_group(self, group: Group, requested_by: Optional[Member] = None) -> None:
        """
        Discard a group after removing every member from it.

        When ``requested_by`` is given it must be the group's owner.
        """
        if group is None:
            raise InvalidArgumentError("group")
        if self._groups.get(group.id) is not group:
            raise GroupNotFoundError(group.id)
        if requested_by is not None and not group.is_owner(requested_by):
            raise PermissionDeniedError("delete the group", requested_by.id)

        del self._groups[group.id]
        group.disband()

        logger.info("Group %s (%s) deleted", group.id, group.name)

    def summary(self) -> NetworkSummary:
        return NetworkSummary.from_network(self)

    def __repr__(self) -> str:
        return (
            f"SocialNetwork(members={len(self._members)}, "
            f"groups={len(self._groups)})"
        )
