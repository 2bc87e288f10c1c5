"""
Command-line interface for SocialNetwork.

Builds a sample network and walks it through the whole relationship
lifecycle, reporting domain errors the way an interactive front end
would instead of aborting.
"""

import argparse
import logging
import random
import sys
from collections import Counter
from typing import Callable, List, Optional

from .entities.ids import IdSequence
from .entities.member import Member
from .errors import SocialNetworkError
from .network.social_network import SocialNetwork

logger = logging.getLogger(__name__)

SAMPLE_NAMES = [
    "Alice", "Bob", "Carol", "David", "Eve", "Frank", "Grace", "Henry",
    "Ivy", "Jack", "Kate", "Leo", "Mia", "Nick", "Olivia", "Paul",
    "Quinn", "Rose", "Sam", "Tina", "Uma", "Vic", "Wendy", "Xander",
]


def create_sample_members(network: SocialNetwork, n: int) -> List[Member]:
    """Register ``n`` members with unique names and e-mails."""
    members = []
    for i in range(n):
        name = SAMPLE_NAMES[i % len(SAMPLE_NAMES)]
        if i >= len(SAMPLE_NAMES):
            name += str(i // len(SAMPLE_NAMES) + 1)
        members.append(network.register_member(name, f"{name.lower()}@example.com"))
    return members


class ErrorLog:
    """Collects domain errors raised while the demo runs."""

    def __init__(self):
        self.counts: Counter = Counter()

    def attempt(self, action: Callable[[], object]) -> bool:
        try:
            action()
        except SocialNetworkError as exc:
            self.counts[exc.code] += 1
            logger.debug("Rejected: %s", exc.message)
            return False
        return True

    @property
    def total(self) -> int:
        return sum(self.counts.values())


def run_demo(args) -> int:
    """Run a demonstration of the relationship lifecycle."""
    rng = random.Random(args.seed)
    network = SocialNetwork(request_ids=IdSequence())
    errors = ErrorLog()

    if not args.json:
        print("=" * 60)
        print("SocialNetwork - Demo")
        print("=" * 60)
        print()
        print(f"Registering {args.members} members...")

    members = create_sample_members(network, args.members)

    # Friend requests
    sent = 0
    for member in members:
        others = [m for m in members if m is not member]
        for receiver in rng.sample(others, k=min(args.requests, len(others))):
            if errors.attempt(lambda: member.send_friend_request(receiver)):
                sent += 1

    # Answers
    accepted = declined = 0
    for member in members:
        for request in member.pending_requests():
            if rng.random() < args.accept_rate:
                if errors.attempt(lambda: member.accept_friend_request(request)):
                    accepted += 1
            elif errors.attempt(lambda: member.decline_friend_request(request)):
                declined += 1

    # Groups
    group = None
    if members:
        owner = members[0]
        group = network.create_group("Chess Club", owner)
        for member in members[1:]:
            if rng.random() < 0.5:
                errors.attempt(lambda: member.join_group(group))
        errors.attempt(lambda: group.add_member(owner))
        errors.attempt(lambda: owner.leave_group(group))

    # Cascading removal
    removed = None
    if len(members) > 1:
        removed = members[-1]
        network.remove_member(removed.id)

    summary = network.summary()

    if args.json:
        print(summary.to_json())
        return 0

    print(f"  - Friend requests sent: {sent}")
    print(f"  - Accepted: {accepted}, declined: {declined}")
    if group is not None:
        print(f"  - Group '{group.name}' members: {group.member_count}")
    if removed is not None:
        print(f"  - Removed member: {removed.name}")
    print(f"  - Rejected operations: {errors.total}")
    for code, count in sorted(errors.counts.items()):
        print(f"      {code}: {count}")

    print("\nNetwork summary:")
    for key, value in summary.to_dict().items():
        if key != "taken_at":
            print(f"  {key}: {value}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="social-network",
        description="SocialNetwork - in-memory friendships, requests and groups",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "-v", "--version",
        action="store_true",
        help="Show version information",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    demo_parser = subparsers.add_parser(
        "demo",
        help="Run a demonstration of the relationship lifecycle",
    )
    demo_parser.add_argument(
        "-n", "--members",
        type=int,
        default=8,
        help="Number of members to register (default: 8)",
    )
    demo_parser.add_argument(
        "-r", "--requests",
        type=int,
        default=3,
        help="Friend requests sent per member (default: 3)",
    )
    demo_parser.add_argument(
        "-a", "--accept-rate",
        type=float,
        default=0.7,
        help="Probability a pending request is accepted (default: 0.7)",
    )
    demo_parser.add_argument(
        "-s", "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    demo_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final summary as JSON",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.version:
        from . import __version__
        print(f"SocialNetwork v{__version__}")
        return 0

    if args.command == "demo":
        try:
            return run_demo(args)
        except SocialNetworkError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            return 1
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
