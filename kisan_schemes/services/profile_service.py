"""
MongoDB service for saved farmer scheme profiles
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from bson import ObjectId
from bson.errors import BSONError
from pymongo.errors import PyMongoError

from ..config import settings
from ..database import get_database
from ..exceptions import ProfileNotFoundError, ProfileStoreError
from ..models.profile import FarmerSchemeProfile, SavedProfileSummary
from ..models.scheme import EligibilityResultSet
from ..utils.validators import validate_profile_name

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for farmer scheme profile persistence"""

    def __init__(self, collection=None):
        self._collection = collection

    @property
    def collection(self):
        if self._collection is not None:
            return self._collection
        database = get_database()
        if database is None:
            raise ProfileStoreError("Database connection is not initialised")
        return database[settings.profiles_collection]

    async def save(
        self,
        user_id: str,
        profile_name: str,
        farmer_input: Mapping[str, Any],
        result_set: EligibilityResultSet
    ) -> SavedProfileSummary:
        """
        Save answers under a named profile and append the search to its history

        An active profile with the same owner and name is updated in place;
        otherwise a new one is created.

        Raises:
            ProfileStoreError: If the name is invalid or the write fails
        """
        if not validate_profile_name(profile_name):
            raise ProfileStoreError(f"Invalid profile name: {profile_name!r}")

        profile_name = profile_name.strip()
        now = datetime.now(timezone.utc)
        search_document = result_set.to_document()

        try:
            existing = await self.collection.find_one({
                "user_id": user_id,
                "profile_name": profile_name,
                "is_active": True
            })

            if existing:
                await self.collection.update_one(
                    {"_id": existing["_id"]},
                    {
                        "$set": {"profile_data": dict(farmer_input), "updated_at": now},
                        "$push": {"search_results": search_document}
                    }
                )
                doc = await self.collection.find_one({"_id": existing["_id"]})
                logger.info(f"Profile updated: {profile_name} ({user_id})")
            else:
                doc = {
                    "user_id": user_id,
                    "profile_name": profile_name,
                    "profile_data": dict(farmer_input),
                    "search_results": [search_document],
                    "is_active": True,
                    "is_default": False,
                    "created_at": now,
                    "updated_at": now
                }
                result = await self.collection.insert_one(doc)
                doc["_id"] = result.inserted_id
                logger.info(f"Profile created: {profile_name} ({user_id})")
        except (PyMongoError, BSONError) as e:
            logger.error(f"Failed to save profile: {e}")
            raise ProfileStoreError(str(e)) from e

        if doc is None:
            raise ProfileStoreError(f"Profile disappeared while saving: {profile_name}")

        return SavedProfileSummary(
            id=str(doc["_id"]),
            profile_name=doc["profile_name"],
            is_default=doc.get("is_default", False),
            updated_at=doc.get("updated_at", now)
        )

    async def list_profiles(self, user_id: str) -> List[FarmerSchemeProfile]:
        """Get a user's active profiles, default first then most recently updated"""
        try:
            cursor = self.collection.find({"user_id": user_id, "is_active": True})
            cursor = cursor.sort([("is_default", -1), ("updated_at", -1)])
            profiles = []
            async for doc in cursor:
                profiles.append(self._to_profile(doc))
            return profiles
        except PyMongoError as e:
            logger.error(f"Failed to list profiles: {e}")
            raise ProfileStoreError(str(e)) from e

    async def delete_profile(self, profile_id: str) -> bool:
        """
        Deactivate a profile; its history is kept

        Raises:
            ProfileNotFoundError: If no active profile has this id
        """
        object_id = self._to_object_id(profile_id)
        try:
            result = await self.collection.update_one(
                {"_id": object_id, "is_active": True},
                {"$set": {
                    "is_active": False,
                    "is_default": False,
                    "updated_at": datetime.now(timezone.utc)
                }}
            )
        except PyMongoError as e:
            logger.error(f"Failed to delete profile: {e}")
            raise ProfileStoreError(str(e)) from e

        if result.matched_count == 0:
            raise ProfileNotFoundError(f"Profile not found: {profile_id}")

        logger.info(f"Profile deleted: {profile_id}")
        return True

    async def set_default(self, profile_id: str) -> FarmerSchemeProfile:
        """
        Make a profile the owner's only default profile

        Raises:
            ProfileNotFoundError: If no active profile has this id
        """
        object_id = self._to_object_id(profile_id)
        try:
            doc = await self.collection.find_one({"_id": object_id, "is_active": True})
            if not doc:
                raise ProfileNotFoundError(f"Profile not found: {profile_id}")

            now = datetime.now(timezone.utc)
            await self.collection.update_many(
                {"user_id": doc["user_id"], "_id": {"$ne": object_id}},
                {"$set": {"is_default": False}}
            )
            await self.collection.update_one(
                {"_id": object_id},
                {"$set": {"is_default": True, "updated_at": now}}
            )
            doc = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to set default profile: {e}")
            raise ProfileStoreError(str(e)) from e

        logger.info(f"Default profile set: {profile_id}")
        return self._to_profile(doc)

    @staticmethod
    def _to_object_id(profile_id: str) -> ObjectId:
        if not ObjectId.is_valid(profile_id):
            raise ProfileNotFoundError(f"Profile not found: {profile_id}")
        return ObjectId(profile_id)

    @staticmethod
    def _to_profile(doc: Dict[str, Any]) -> FarmerSchemeProfile:
        return FarmerSchemeProfile(
            id=str(doc["_id"]),
            user_id=str(doc["user_id"]),
            profile_name=doc["profile_name"],
            profile_data=doc.get("profile_data", {}),
            search_results=doc.get("search_results", []),
            is_active=doc.get("is_active", True),
            is_default=doc.get("is_default", False),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at")
        )


# Global profile service instance
profile_service = ProfileService()
