"""
Community detection over accepted friendships.
"""


def as_sets(communities):
    return sorted((frozenset(c) for c in communities), key=lambda c: sorted(c))


class TestCountCommunities:

    def test_empty_network(self, network):
        assert network.count_communities() == 0
        assert network.get_communities() == []
        assert network.get_most_social_community() == []

    def test_isolated_users_are_each_a_community(self, network, users):
        assert network.count_communities() == len(users)

    def test_fully_connected_users_are_one_community(self, network, users, befriend):
        for i, user in enumerate(users):
            for other in users[i + 1:]:
                befriend(user.id, other.id)

        assert network.count_communities() == 1
        assert len(network.get_most_social_community()) == len(users)

    def test_two_pairs(self, network, users, befriend):
        alice, bob, carol, dave = users
        befriend(alice.id, bob.id)
        befriend(carol.id, dave.id)

        assert network.count_communities() == 2
        assert as_sets(network.get_communities()) == as_sets([[alice.id, bob.id], [carol.id, dave.id]])

    def test_chain_is_one_community(self, network, users, befriend):
        alice, bob, carol, dave = users
        befriend(alice.id, bob.id)
        befriend(bob.id, carol.id)
        befriend(carol.id, dave.id)

        assert network.count_communities() == 1

    def test_pending_requests_do_not_connect(self, network, users, befriend):
        """A pending request leaves both users in separate communities."""
        alice, bob, carol, dave = users
        befriend(alice.id, bob.id)
        network.send_friend_request(bob.id, carol.id)

        assert network.count_communities() == 3
        assert {alice.id, bob.id} in [set(c) for c in network.get_communities()]

    def test_counts_follow_deletion(self, network, users, befriend):
        alice, bob, carol, dave = users
        befriend(alice.id, bob.id)
        befriend(bob.id, carol.id)
        assert network.count_communities() == 2

        network.delete_friend_request(bob.id, carol.id)

        assert network.count_communities() == 3

    def test_every_user_in_exactly_one_community(self, network, users, befriend):
        alice, bob, carol, dave = users
        befriend(alice.id, carol.id)
        befriend(dave.id, carol.id)

        members = [uid for community in network.get_communities() for uid in community]

        assert sorted(members) == sorted(user.id for user in users)


class TestMostSocialCommunity:

    def test_returns_largest(self, network, users, befriend):
        alice, bob, carol, dave = users
        befriend(alice.id, bob.id)
        befriend(bob.id, carol.id)

        largest = network.get_most_social_community()

        assert sorted(u.id for u in largest) == sorted([alice.id, bob.id, carol.id])

    def test_tie_returns_one_of_the_pairs(self, network, users, befriend):
        alice, bob, carol, dave = users
        befriend(alice.id, bob.id)
        befriend(carol.id, dave.id)

        largest = {u.id for u in network.get_most_social_community()}

        assert largest in ({alice.id, bob.id}, {carol.id, dave.id})

    def test_tie_keeps_first_discovered(self, network, users, befriend):
        alice, bob, carol, dave = users
        befriend(carol.id, dave.id)
        befriend(alice.id, bob.id)

        first = set(network.get_communities()[0])

        assert {u.id for u in network.get_most_social_community()} == first

    def test_isolated_users_give_a_single_member(self, network, users):
        assert len(network.get_most_social_community()) == 1


class TestLiveEdgeCheck:

    def test_snapshot_edges_are_rechecked(self, network, users, monkeypatch):
        """An edge present in the relations snapshot but gone from the store is ignored."""
        alice, bob, carol, dave = users
        stale = {alice.id: [bob.id], bob.id: [alice.id], carol.id: [], dave.id: []}
        monkeypatch.setattr(network.graph, "relations", lambda: stale)

        # the snapshot claims alice-bob but no such edge exists
        assert network.count_communities() == 4
