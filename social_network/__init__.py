"""
SocialNetwork

An in-memory relationship engine for a small social graph: members,
friendships negotiated through friend requests, and owned groups.
All relationships are kept symmetric and every member removal cleans
up the references other members and groups hold to it.
"""

__version__ = "0.1.0"

from .errors import SocialNetworkError
from .entities import (
    FriendManager,
    FriendRelationship,
    FriendRequest,
    Group,
    IdSequence,
    Member,
    RequestStatus,
)
from .network import NetworkConfig, NetworkSummary, SocialNetwork

__all__ = [
    "SocialNetworkError",
    "FriendManager",
    "FriendRelationship",
    "FriendRequest",
    "Group",
    "IdSequence",
    "Member",
    "RequestStatus",
    "NetworkConfig",
    "NetworkSummary",
    "SocialNetwork",
]
