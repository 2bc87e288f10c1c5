"""
Aggregate counts for a social network.

Used for reporting from the command line; the counts also make the
symmetry invariants easy to eyeball (friendship records come in pairs).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict
import json

from ..entities.relationships import RequestStatus


@dataclass
class NetworkSummary:
    """Snapshot of a network's size and relationship state."""
    taken_at: datetime
    member_count: int
    group_count: int
    friendship_count: int
    group_membership_count: int
    pending_requests: int
    accepted_requests: int
    declined_requests: int

    @classmethod
    def from_network(cls, network) -> "NetworkSummary":
        members = network.members
        statuses = {status: 0 for status in RequestStatus}
        relationship_records = 0

        for member in members:
            relationship_records += len(member.friend_relationships)
            # Each request is counted once, on the receiver's side.
            for request in member.received_requests:
                statuses[request.status] += 1

        return cls(
            taken_at=datetime.now(timezone.utc),
            member_count=len(members),
            group_count=len(network.groups),
            friendship_count=relationship_records // 2,
            group_membership_count=sum(g.member_count for g in network.groups),
            pending_requests=statuses[RequestStatus.PENDING],
            accepted_requests=statuses[RequestStatus.ACCEPTED],
            declined_requests=statuses[RequestStatus.DECLINED],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "taken_at": self.taken_at.isoformat(),
            "member_count": self.member_count,
            "group_count": self.group_count,
            "friendship_count": self.friendship_count,
            "group_membership_count": self.group_membership_count,
            "pending_requests": self.pending_requests,
            "accepted_requests": self.accepted_requests,
            "declined_requests": self.declined_requests,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
