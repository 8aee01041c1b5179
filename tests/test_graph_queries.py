import pytest


def ids(users):
    return sorted(user.id for user in users)


class TestFriendQueries:

    def test_friends_exclude_pending_requests(self, network, users, befriend):
        alice, bob, carol = users[0], users[1], users[2]
        befriend(alice.id, bob.id)
        network.send_friend_request(alice.id, carol.id)

        assert ids(network.get_friends_of_user(alice.id)) == [bob.id]
        assert network.get_friends_of_user(carol.id) == []

    def test_friends_have_no_duplicates(self, network, users, befriend):
        alice = users[0]
        for other in users[1:]:
            befriend(alice.id, other.id)

        friends = network.get_friends_of_user(alice.id)

        assert len(friends) == 3
        assert ids(friends) == ids(users[1:])

    def test_sent_and_received_follow_direction(self, network, users):
        alice, bob, carol = users[0], users[1], users[2]
        network.send_friend_request(alice.id, bob.id)
        network.send_friend_request(carol.id, alice.id)

        assert ids(network.get_sent_requests_of_user(alice.id)) == [bob.id]
        assert ids(network.get_received_requests_of_user(alice.id)) == [carol.id]
        assert ids(network.get_received_requests_of_user(bob.id)) == [alice.id]
        assert network.get_sent_requests_of_user(bob.id) == []

    def test_unknown_user_has_no_relations(self, network, users):
        assert network.get_friends_of_user("nobody") == []
        assert network.get_sent_requests_of_user("nobody") == []
        assert network.get_received_requests_of_user("nobody") == []

    def test_edges_to_removed_users_are_skipped(self, network, users, befriend):
        alice, bob, carol = users[0], users[1], users[2]
        befriend(alice.id, bob.id)
        befriend(alice.id, carol.id)

        # bypass the cascade so the edge is left dangling
        network.user_service.users.delete(bob.id)

        assert ids(network.get_friends_of_user(alice.id)) == [carol.id]
        assert network.get_relations()[alice.id] == [carol.id]


class TestRelations:

    def test_every_user_is_a_key(self, network, users):
        relations = network.get_relations()

        assert sorted(relations) == ids(users)
        assert all(friends == [] for friends in relations.values())

    def test_adjacency_is_symmetric(self, network, users, befriend):
        alice, bob, carol, dave = users
        befriend(alice.id, bob.id)
        befriend(bob.id, carol.id)
        network.send_friend_request(carol.id, dave.id)

        relations = network.get_relations()

        assert sorted(relations[bob.id]) == sorted([alice.id, carol.id])
        assert relations[alice.id] == [bob.id]
        assert relations[carol.id] == [bob.id]
        assert relations[dave.id] == []
        for uid, friends in relations.items():
            for friend_id in friends:
                assert uid in relations[friend_id]

    def test_snapshot_is_not_shared(self, network, users, befriend):
        alice, bob = users[0], users[1]
        befriend(alice.id, bob.id)

        snapshot = network.get_relations()
        snapshot[alice.id].clear()

        assert network.get_relations()[alice.id] == [bob.id]


@pytest.mark.parametrize("sender_index, receiver_index", [(0, 1), (1, 0)])
def test_friend_lists_ignore_who_sent_first(network, users, sender_index, receiver_index):
    sender, receiver = users[sender_index], users[receiver_index]
    network.send_friend_request(sender.id, receiver.id)
    network.send_friend_request(receiver.id, sender.id)

    assert ids(network.get_friends_of_user(users[0].id)) == [users[1].id]
    assert ids(network.get_friends_of_user(users[1].id)) == [users[0].id]
