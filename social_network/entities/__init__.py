"""Entities module - Members, groups, friend requests and friendships."""

from .ids import IdSequence, REQUEST_IDS
from .relationships import FriendRequest, FriendRelationship, RequestStatus
from .member import Member, FriendManager
from .group import Group

__all__ = [
    "IdSequence",
    "REQUEST_IDS",
    "FriendRequest",
    "FriendRelationship",
    "RequestStatus",
    "Member",
    "FriendManager",
    "Group",
]
