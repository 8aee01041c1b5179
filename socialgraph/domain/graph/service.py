from typing import Callable, Dict, List

from socialgraph.domain.friends.schemas import Friendship, PairKey
from socialgraph.domain.users.schemas import User
from socialgraph.store.repository import Repository


class GraphQueryService:
    """
    Read-only views over the friendship edges.

    Edges whose other end no longer resolves to a user are skipped.
    """

    def __init__(self, friendships: Repository[PairKey, Friendship], users: Repository[str, User]):
        self.friendships = friendships
        self.users = users

    def _resolve(self, uid: str, keep: Callable[[Friendship], bool]) -> List[User]:
        result: Dict[str, User] = {}
        for friendship in self.friendships.find_all():
            if not keep(friendship):
                continue
            friend_id = friendship.friend_id_of(uid)
            if friend_id in result:
                continue
            friend = self.users.find_one(friend_id)
            if friend is not None:
                result[friend_id] = friend
        return list(result.values())

    def friends_of(self, uid: str) -> List[User]:
        return self._resolve(uid, lambda f: f.contains_user(uid) and not f.pending)

    def sent_requests_of(self, uid: str) -> List[User]:
        return self._resolve(uid, lambda f: f.sender_id == uid and f.pending)

    def received_requests_of(self, uid: str) -> List[User]:
        return self._resolve(uid, lambda f: f.receiver_id == uid and f.pending)

    def relations(self) -> Dict[str, List[str]]:
        """
        Adjacency snapshot of accepted friendships: user id -> friend ids.

        Every live user is a key, friendless users map to an empty list.
        Built fresh on each call.
        """
        relations: Dict[str, List[str]] = {user.id: [] for user in self.users.find_all()}
        for friendship in self.friendships.find_all():
            if friendship.pending:
                continue
            uid1, uid2 = friendship.sender_id, friendship.receiver_id
            if uid1 not in relations or uid2 not in relations or uid1 == uid2:
                continue
            if uid2 not in relations[uid1]:
                relations[uid1].append(uid2)
            if uid1 not in relations[uid2]:
                relations[uid2].append(uid1)
        return relations
