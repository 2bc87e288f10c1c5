"""
Error hierarchy for the social network core.

Every failing operation raises exactly one of these and leaves the
graph untouched, so a caller can report the message verbatim.
"""

from typing import Any, Dict, Optional


class SocialNetworkError(Exception):
    """Base error for relationship, group and network operations."""

    code = "SOCIAL_NETWORK_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


class InvalidArgumentError(SocialNetworkError, ValueError):
    """A required reference or value is missing or unusable."""

    code = "INVALID_ARGUMENT"

    def __init__(self, argument: str, reason: str = "is required"):
        super().__init__(f"'{argument}' {reason}.", {"argument": argument})


class DuplicateIdentifierError(SocialNetworkError):
    """A member with this id is already registered."""

    code = "DUPLICATE_IDENTIFIER"

    def __init__(self, member_id: int):
        super().__init__(
            "A member with this identifier already exists.",
            {"member_id": member_id},
        )


class DuplicateNameError(SocialNetworkError):
    """A group or member name is already taken (case-insensitive)."""

    code = "DUPLICATE_NAME"

    def __init__(self, name: str, kind: str = "group"):
        super().__init__(
            f"{kind.capitalize()} name '{name}' is already taken.",
            {"name": name, "kind": kind},
        )


class DuplicateEmailError(SocialNetworkError):
    """An e-mail address is already registered (case-insensitive)."""

    code = "DUPLICATE_EMAIL"

    def __init__(self, email: str):
        super().__init__(
            f"E-mail '{email}' is already registered.",
            {"email": email},
        )


class AlreadyFriendsError(SocialNetworkError):
    code = "ALREADY_FRIENDS"

    def __init__(self, member_id: int, friend_id: int):
        super().__init__(
            "A friendship with this member already exists.",
            {"member_id": member_id, "friend_id": friend_id},
        )


class DuplicateRequestError(SocialNetworkError):
    code = "DUPLICATE_REQUEST"

    def __init__(self, sender_id: int, receiver_id: int):
        super().__init__(
            "A friend request has already been sent.",
            {"sender_id": sender_id, "receiver_id": receiver_id},
        )


class AlreadyProcessedError(SocialNetworkError):
    code = "ALREADY_PROCESSED"

    def __init__(self, request_id: int, status: str):
        super().__init__(
            "The request has already been processed.",
            {"request_id": request_id, "status": status},
        )


class RequestNotFoundError(SocialNetworkError, LookupError):
    code = "REQUEST_NOT_FOUND"

    def __init__(self, request_id: int, member_id: int):
        super().__init__(
            "The request was not found among incoming requests.",
            {"request_id": request_id, "member_id": member_id},
        )


class RelationshipNotFoundError(SocialNetworkError, LookupError):
    code = "RELATIONSHIP_NOT_FOUND"

    def __init__(self, member_id: int, friend_id: int):
        super().__init__(
            "The friendship does not exist.",
            {"member_id": member_id, "friend_id": friend_id},
        )


class AlreadyMemberError(SocialNetworkError):
    code = "ALREADY_MEMBER"

    def __init__(self, group_id: int, member_id: int):
        super().__init__(
            "Member already in the group.",
            {"group_id": group_id, "member_id": member_id},
        )


class NotAMemberError(SocialNetworkError, LookupError):
    code = "NOT_A_MEMBER"

    def __init__(self, group_id: int, member_id: int):
        super().__init__(
            "Member not found in the group.",
            {"group_id": group_id, "member_id": member_id},
        )


class MemberNotFoundError(SocialNetworkError, LookupError):
    code = "MEMBER_NOT_FOUND"

    def __init__(self, member_id: int):
        super().__init__("Member not found.", {"member_id": member_id})


class GroupNotFoundError(SocialNetworkError, LookupError):
    code = "GROUP_NOT_FOUND"

    def __init__(self, group_id: int):
        super().__init__("Group not found.", {"group_id": group_id})


class OwnerCannotLeaveError(SocialNetworkError):
    """The owner must delete the group instead of leaving it."""

    code = "OWNER_CANNOT_LEAVE"

    def __init__(self, group_id: int, member_id: int):
        super().__init__(
            "Owner cannot leave the group. Delete the group instead.",
            {"group_id": group_id, "member_id": member_id},
        )


class PermissionDeniedError(SocialNetworkError):
    code = "PERMISSION_DENIED"

    def __init__(self, action: str, member_id: int):
        super().__init__(
            f"Only the group owner can {action}.",
            {"action": action, "member_id": member_id},
        )
