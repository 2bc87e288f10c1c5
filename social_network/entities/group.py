"""
Groups with symmetric membership.

A member is listed in ``group.members`` exactly when the group is listed
in ``member.groups``. Ownership policy (who may add, remove or leave) is
left to the callers; Group only keeps the two sides in step.
"""

from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING
import logging

from ..errors import (
    AlreadyMemberError,
    GroupNotFoundError,
    InvalidArgumentError,
    NotAMemberError,
)

if TYPE_CHECKING:
    from .member import Member

logger = logging.getLogger(__name__)


class Group:
    """A named set of members with one fixed owner."""

    def __init__(self, group_id: int, name: str, owner: "Member"):
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("name", "must be a non-empty string")
        if owner is None:
            raise InvalidArgumentError("owner")

        self.id = group_id
        self.name = name
        self.owner = owner
        self.created_at = datetime.now(timezone.utc)
        self.disbanded = False

        self._members: List["Member"] = [owner]
        owner._groups.append(self)

    @property
    def members(self) -> List["Member"]:
        return list(self._members)

    @property
    def member_count(self) -> int:
        return len(self._members)

    def _index_of(self, member: "Member") -> Optional[int]:
        for i, m in enumerate(self._members):
            if m.id == member.id:
                return i
        return None

    def has_member(self, member: "Member") -> bool:
        return member is not None and self._index_of(member) is not None

    def is_owner(self, member: "Member") -> bool:
        return member is not None and member.id == self.owner.id

    def add_member(self, member: "Member") -> None:
        if member is None:
            raise InvalidArgumentError("member")
        if self.disbanded:
            raise GroupNotFoundError(self.id)
        if self.has_member(member):
            raise AlreadyMemberError(self.id, member.id)

        self._members.append(member)
        member._groups.append(self)
        logger.debug("Member %s joined group %s", member.id, self.id)

    def remove_member(self, member: "Member") -> None:
        """Remove ``member`` from both sides. The owner is not protected here."""
        if member is None:
            raise InvalidArgumentError("member")

        index = self._index_of(member)
        if index is None:
            raise NotAMemberError(self.id, member.id)

        stored = self._members.pop(index)
        stored._groups.remove(self)
        logger.debug("Member %s left group %s", stored.id, self.id)

    def disband(self) -> None:
        """Remove every member, owner included. The group cannot be reused."""
        for member in list(self._members):
            self.remove_member(member)
        self.disbanded = True
        logger.debug("Group %s disbanded", self.id)

    def __repr__(self) -> str:
        return f"Group(id={self.id}, name={self.name!r}, members={len(self._members)})"

    def __str__(self) -> str:
        return self.name
