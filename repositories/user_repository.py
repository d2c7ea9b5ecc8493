"""
User Repository - read access to the ``users`` collection.
"""

from typing import Any, Dict, Iterable, List, Optional

from repositories.base import BaseRepository, to_object_id, public_document


class UserRepository(BaseRepository):
    """Lookups used for authentication and for expanding meal creators."""

    entity_name = "User"

    def _id_candidates(self, user_id: Any) -> List[Any]:
        # users may be keyed by ObjectId or by plain string ids
        candidates: List[Any] = [user_id]
        oid = to_object_id(user_id)
        if oid is not None and oid != user_id:
            candidates.insert(0, oid)
        return candidates

    def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get user by ID

        Args:
            user_id: ObjectId hex string or plain string id

        Returns:
            Public user document or None if not found
        """
        with self.translate_errors("find user"):
            doc = self.collection.find_one({"_id": {"$in": self._id_candidates(user_id)}})
        return public_document(doc) if doc else None

    def get_summaries(self, user_ids: Iterable[Any]) -> Dict[str, Dict[str, Any]]:
        """Map ``str(user_id)`` to ``{id, name, email}`` for every user that exists."""
        candidates: List[Any] = []
        for uid in {str(u) for u in user_ids if u is not None}:
            candidates.extend(self._id_candidates(uid))
        if not candidates:
            return {}

        with self.translate_errors("find users"):
            cursor = self.collection.find(
                {"_id": {"$in": candidates}}, {"name": 1, "email": 1}
            )
            summaries = {}
            for doc in cursor:
                uid = str(doc["_id"])
                summaries[uid] = {
                    "id": uid,
                    "name": doc.get("name"),
                    "email": doc.get("email"),
                }
        return summaries
