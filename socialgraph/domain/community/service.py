import logging
from typing import Dict, List, Set

from socialgraph.domain.friends.service import FriendshipService
from socialgraph.domain.graph.service import GraphQueryService
from socialgraph.domain.users.schemas import User
from socialgraph.store.repository import Repository

logger = logging.getLogger(__name__)


class CommunityService:
    """
    Connected components ("communities") of the accepted-friendship graph.

    Nothing is cached: every call takes a fresh relations snapshot. Pending
    requests never connect two users.
    """

    def __init__(self, graph: GraphQueryService, friendship_service: FriendshipService,
                 users: Repository[str, User]):
        self.graph = graph
        self.friendship_service = friendship_service
        self.users = users

    def _explore(self, root: str, relations: Dict[str, List[str]], seen: Set[str]) -> List[str]:
        members = [root]
        stack = [root]
        while stack:
            uid = stack.pop()
            for friend_id in relations.get(uid, []):
                # Live edge state wins over the snapshot
                if friend_id not in seen and self.friendship_service.is_friendship(uid, friend_id):
                    seen.add(friend_id)
                    members.append(friend_id)
                    stack.append(friend_id)
        return members

    def communities(self) -> List[List[str]]:
        """Every community as a list of user ids, in discovery order."""
        relations = self.graph.relations()
        seen: Set[str] = set()
        found = []
        for uid in relations:
            if uid in seen:
                continue
            seen.add(uid)
            found.append(self._explore(uid, relations, seen))
        return found

    def count_communities(self) -> int:
        return len(self.communities())

    def largest_community(self) -> List[User]:
        largest: List[str] = []
        for members in self.communities():
            # Strictly larger, so the first of equal-sized communities is kept
            if len(members) > len(largest):
                largest = members

        logger.debug(f"Largest community has {len(largest)} members")
        users = []
        for uid in largest:
            user = self.users.find_one(uid)
            if user is not None:
                users.append(user)
        return users
