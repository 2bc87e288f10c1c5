"""Tests for entity modules."""

import pytest

from social_network.entities.ids import IdSequence
from social_network.entities.member import Member, FriendManager
from social_network.entities.group import Group
from social_network.entities.relationships import (
    FriendRequest,
    FriendRelationship,
    RequestStatus,
)
from social_network.errors import (
    AlreadyFriendsError,
    AlreadyMemberError,
    AlreadyProcessedError,
    DuplicateRequestError,
    GroupNotFoundError,
    InvalidArgumentError,
    NotAMemberError,
    OwnerCannotLeaveError,
    RelationshipNotFoundError,
    RequestNotFoundError,
    SocialNetworkError,
)


@pytest.fixture
def request_ids():
    return IdSequence()


@pytest.fixture
def alice(request_ids):
    return Member(1, "Alice", "a@a.com", request_ids=request_ids)


@pytest.fixture
def bob(request_ids):
    return Member(2, "Bob", "b@b.com", request_ids=request_ids)


@pytest.fixture
def carol(request_ids):
    return Member(3, "Carol", "c@c.com", request_ids=request_ids)


class TestIdSequence:
    """Tests for IdSequence."""

    def test_ids_increase(self):
        ids = IdSequence(start=5)
        assert ids.next_id() == 5
        assert ids.next_id() == 6
        assert ids.peek() == 7

    def test_members_share_request_sequence(self, alice, bob, carol):
        first = alice.send_friend_request(bob)
        second = carol.send_friend_request(bob)

        assert second.id == first.id + 1

    def test_default_sequence_is_process_wide(self):
        a = Member(10, "A", "a@x.com")
        b = Member(11, "B", "b@x.com")
        c = Member(12, "C", "c@x.com")

        first = a.send_friend_request(b)
        second = c.send_friend_request(b)

        assert second.id > first.id


class TestMember:
    """Tests for Member construction."""

    def test_initial_state(self, alice):
        assert alice.id == 1
        assert alice.is_active
        assert alice.registered_at is not None
        assert alice.friend_relationships == []
        assert alice.sent_requests == []
        assert alice.received_requests == []
        assert alice.groups == []

    @pytest.mark.parametrize("name,email", [("", "a@a.com"), ("   ", "a@a.com"), ("A", "")])
    def test_blank_name_or_email_rejected(self, name, email):
        with pytest.raises(InvalidArgumentError):
            Member(1, name, email)

    def test_non_string_name_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Member(1, 42, "a@a.com")
        with pytest.raises(InvalidArgumentError):
            Member(1, "A", None)

    def test_satisfies_friend_manager(self, alice):
        assert isinstance(alice, FriendManager)

    def test_collections_are_copies(self, alice, bob):
        alice.add_friend(bob)
        alice.friend_relationships.clear()
        alice.groups.append("junk")

        assert len(alice.friend_relationships) == 1
        assert alice.groups == []


class TestFriends:
    """Tests for direct friendship management."""

    def test_add_friend_is_symmetric(self, alice, bob):
        alice.add_friend(bob)

        assert alice.get_friends() == [bob]
        assert bob.get_friends() == [alice]
        assert alice.is_friend(bob)
        assert bob.is_friend(alice)

    def test_each_side_holds_its_own_record(self, alice, bob):
        alice.add_friend(bob)

        mine = alice.friend_relationships[0]
        theirs = bob.friend_relationships[0]
        assert mine is not theirs
        assert mine.member1 is alice and mine.member2 is bob
        assert theirs.member1 is bob and theirs.member2 is alice

    def test_add_friend_twice_fails(self, alice, bob):
        alice.add_friend(bob)

        with pytest.raises(AlreadyFriendsError):
            alice.add_friend(bob)
        with pytest.raises(AlreadyFriendsError):
            bob.add_friend(alice)

        assert len(alice.friend_relationships) == 1
        assert len(bob.friend_relationships) == 1

    def test_add_friend_rejects_self_and_none(self, alice):
        with pytest.raises(InvalidArgumentError):
            alice.add_friend(alice)
        with pytest.raises(InvalidArgumentError):
            alice.add_friend(None)

    def test_remove_friend_removes_both_sides(self, alice, bob):
        alice.add_friend(bob)
        alice.remove_friend(bob)

        assert alice.get_friends() == []
        assert bob.get_friends() == []

    def test_remove_friend_from_other_side(self, alice, bob):
        alice.add_friend(bob)
        bob.remove_friend(alice)

        assert alice.get_friends() == []
        assert bob.get_friends() == []

    def test_remove_self_fails(self, alice, bob):
        alice.add_friend(bob)

        with pytest.raises(InvalidArgumentError):
            alice.remove_friend(alice)

        assert alice.get_friends() == [bob]
        assert not alice.is_friend(alice)

    def test_relationship_helpers(self, alice, bob, carol):
        relation = FriendRelationship(alice, bob)

        assert relation.involves(alice)
        assert relation.involves(bob)
        assert not relation.involves(carol)
        assert relation.other(alice) is bob
        assert relation.other(bob) is alice

    def test_remove_missing_friend_fails(self, alice, bob):
        with pytest.raises(RelationshipNotFoundError):
            alice.remove_friend(bob)

    def test_remove_friend_tolerates_missing_reciprocal(self, alice, bob):
        alice.add_friend(bob)
        bob._relationships.clear()

        alice.remove_friend(bob)

        assert alice.get_friends() == []

    def test_get_friends_collapses_duplicates(self, alice, bob):
        alice._relationships.append(FriendRelationship(alice, bob))
        alice._relationships.append(FriendRelationship(alice, bob))

        assert alice.get_friends() == [bob]

    def test_friendships_with_several_members(self, alice, bob, carol):
        alice.add_friend(bob)
        carol.add_friend(alice)

        assert set(m.id for m in alice.get_friends()) == {2, 3}
        assert bob.get_friends() == [alice]
        assert carol.get_friends() == [alice]


class TestFriendRequests:
    """Tests for the friend request workflow."""

    def test_send_creates_pending_request(self, alice, bob):
        request = alice.send_friend_request(bob)

        assert request.status == RequestStatus.PENDING
        assert request.sender is alice
        assert request.receiver is bob
        assert alice.sent_requests == [request]
        assert bob.received_requests == [request]
        assert bob.pending_requests() == [request]

    def test_send_to_self_fails(self, alice):
        with pytest.raises(InvalidArgumentError):
            alice.send_friend_request(alice)

    def test_send_to_friend_fails(self, alice, bob):
        alice.add_friend(bob)

        with pytest.raises(AlreadyFriendsError):
            alice.send_friend_request(bob)

    def test_duplicate_pending_request_fails(self, alice, bob):
        alice.send_friend_request(bob)

        with pytest.raises(DuplicateRequestError):
            alice.send_friend_request(bob)

        assert len(alice.sent_requests) == 1
        assert len(bob.received_requests) == 1

    def test_reverse_request_is_allowed(self, alice, bob):
        alice.send_friend_request(bob)
        bob.send_friend_request(alice)

        assert len(alice.received_requests) == 1
        assert len(bob.received_requests) == 1

    def test_accept_creates_friendship(self, alice, bob):
        alice.send_friend_request(bob)
        request = bob.received_requests[0]

        bob.accept_friend_request(request)

        assert request.status == RequestStatus.ACCEPTED
        assert request.resolved_at is not None
        assert alice.get_friends() == [bob]
        assert alice.get_friends()[0].name == "Bob"
        assert bob.get_friends() == [alice]
        # Kept as history on both sides
        assert alice.sent_requests == [request]
        assert bob.received_requests == [request]
        assert bob.pending_requests() == []

    def test_decline_leaves_no_friendship(self, alice, bob):
        request = alice.send_friend_request(bob)

        bob.decline_friend_request(request)

        assert request.status == RequestStatus.DECLINED
        assert alice.get_friends() == []
        assert bob.get_friends() == []

    def test_new_request_allowed_after_decline(self, alice, bob):
        first = alice.send_friend_request(bob)
        bob.decline_friend_request(first)

        second = alice.send_friend_request(bob)

        assert second.id != first.id
        assert second.status == RequestStatus.PENDING
        assert len(bob.received_requests) == 2

    @pytest.mark.parametrize("first", ["accept", "decline"])
    @pytest.mark.parametrize("second", ["accept", "decline"])
    def test_second_answer_fails(self, alice, bob, first, second):
        request = alice.send_friend_request(bob)
        getattr(bob, f"{first}_friend_request")(request)
        status = request.status

        with pytest.raises(AlreadyProcessedError):
            getattr(bob, f"{second}_friend_request")(request)

        assert request.status == status

    def test_sender_cannot_answer_own_request(self, alice, bob):
        request = alice.send_friend_request(bob)

        with pytest.raises(RequestNotFoundError):
            alice.accept_friend_request(request)
        with pytest.raises(RequestNotFoundError):
            alice.decline_friend_request(request)

        assert request.is_pending

    def test_answer_none_fails(self, bob):
        with pytest.raises(InvalidArgumentError):
            bob.accept_friend_request(None)

    def test_accept_when_already_friends_changes_nothing(self, alice, bob):
        request = alice.send_friend_request(bob)
        reverse = bob.send_friend_request(alice)
        alice.accept_friend_request(reverse)

        with pytest.raises(AlreadyFriendsError):
            bob.accept_friend_request(request)

        assert request.is_pending
        assert len(alice.friend_relationships) == 1
        assert len(bob.friend_relationships) == 1

    def test_request_requires_both_parties(self, alice):
        with pytest.raises(InvalidArgumentError):
            FriendRequest(1, alice, None)

    def test_withdraw_pending_requests(self, alice, bob, carol):
        to_bob = alice.send_friend_request(bob)
        from_carol = carol.send_friend_request(alice)
        answered = alice.send_friend_request(carol)
        carol.decline_friend_request(answered)

        withdrawn = alice._withdraw_pending_requests()

        assert withdrawn == 2
        assert to_bob not in bob.received_requests
        assert from_carol not in carol.sent_requests
        assert answered in carol.received_requests

    def test_errors_share_base_class(self, alice, bob):
        alice.send_friend_request(bob)

        with pytest.raises(SocialNetworkError) as excinfo:
            alice.send_friend_request(bob)

        assert excinfo.value.code == "DUPLICATE_REQUEST"
        assert excinfo.value.to_dict()["details"] == {"sender_id": 1, "receiver_id": 2}


class TestGroup:
    """Tests for Group membership."""

    @pytest.fixture
    def owner(self):
        return Member(1, "Owner", "o@o.com")

    @pytest.fixture
    def club(self, owner):
        return Group(1, "Club", owner)

    def test_owner_is_first_member(self, club, owner):
        assert club.members == [owner]
        assert owner.groups == [club]
        assert club.is_owner(owner)

    def test_constructor_validation(self, owner):
        with pytest.raises(InvalidArgumentError):
            Group(1, "", owner)
        with pytest.raises(InvalidArgumentError):
            Group(1, 7, owner)
        with pytest.raises(InvalidArgumentError):
            Group(1, "Club", None)

    def test_add_member_is_symmetric(self, club, bob):
        club.add_member(bob)

        assert bob in club.members
        assert club in bob.groups
        assert club.has_member(bob)

    def test_add_member_twice_fails(self, club, bob):
        club.add_member(bob)

        with pytest.raises(AlreadyMemberError):
            club.add_member(bob)

        assert club.member_count == 2
        assert bob.groups == [club]

    def test_add_owner_again_fails(self, club, owner):
        with pytest.raises(AlreadyMemberError):
            club.add_member(owner)

    def test_remove_member_is_symmetric(self, club, bob):
        club.add_member(bob)
        club.remove_member(bob)

        assert bob not in club.members
        assert club not in bob.groups

    def test_remove_stranger_fails(self, club):
        stranger = Member(2, "Stranger", "s@s.com")

        with pytest.raises(NotAMemberError):
            club.remove_member(stranger)

    def test_remove_owner_is_not_prevented_here(self, club, owner):
        club.remove_member(owner)

        assert club.members == []
        assert owner.groups == []

    def test_join_and_leave(self, club, bob):
        bob.join_group(club)
        assert club.has_member(bob)

        bob.leave_group(club)
        assert not club.has_member(bob)
        assert bob.groups == []

    def test_owner_cannot_leave(self, club, owner):
        with pytest.raises(OwnerCannotLeaveError):
            owner.leave_group(club)

        assert club.has_member(owner)

    def test_leave_group_not_joined(self, club, bob):
        with pytest.raises(NotAMemberError):
            bob.leave_group(club)

    def test_disband_removes_everyone(self, club, owner, bob):
        club.add_member(bob)

        club.disband()

        assert club.disbanded
        assert club.members == []
        assert owner.groups == []
        assert bob.groups == []

    def test_disbanded_group_rejects_members(self, club, bob):
        club.disband()

        with pytest.raises(GroupNotFoundError):
            club.add_member(bob)

        assert bob.groups == []

    def test_join_none_fails(self, bob):
        with pytest.raises(InvalidArgumentError):
            bob.join_group(None)
