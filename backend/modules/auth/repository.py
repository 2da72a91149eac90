"""
User repository for database access.

Encapsulates all queries against the `users` collection. Uniqueness of
email and federatedId is enforced by indexes (see run_migrations.py);
DuplicateKeyError is translated to module exceptions here.
"""

from datetime import datetime, timezone
from typing import Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from shared.repository import BaseRepository
from .exceptions import EmailAlreadyRegisteredError, FederatedIdentityConflictError
from .models import User, UserRole


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    All methods return User models mapped from stored documents.
    """

    collection_name = "users"

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by id. Malformed ids simply find nothing."""
        oid = self.parse_object_id(user_id)
        if oid is None:
            return None
        doc = self._collection.find_one({"_id": oid})
        return User.from_document(doc) if doc else None

    def get_by_email(self, email: str) -> Optional[User]:
        doc = self._collection.find_one({"email": email})
        return User.from_document(doc) if doc else None

    def get_by_federated_id(self, federated_id: str) -> Optional[User]:
        doc = self._collection.find_one({"federatedId": federated_id})
        return User.from_document(doc) if doc else None

    def get_many(self, user_ids: list) -> dict[str, User]:
        """
        Load several users at once.

        Args:
            user_ids: ObjectIds or id strings; malformed entries are skipped.

        Returns:
            Users keyed by id string.
        """
        oids = [oid for oid in (self.parse_object_id(u) for u in user_ids) if oid is not None]
        if not oids:
            return {}
        docs = self._collection.find({"_id": {"$in": list(set(oids))}})
        return {str(doc["_id"]): User.from_document(doc) for doc in docs}

    def create(
        self,
        name: str,
        email: str,
        password_hash: Optional[str] = None,
        federated_id: Optional[str] = None,
        avatar_url: str = "",
    ) -> User:
        """
        Insert a new user.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
            FederatedIdentityConflictError: If the federated id is taken
        """
        now = datetime.now(timezone.utc)
        doc = {
            "name": name,
            "email": email,
            "avatarUrl": avatar_url,
            "role": UserRole.USER.value,
            "createdAt": now,
            "updatedAt": now,
        }
        # Absent rather than null so the sparse unique indexes skip them
        if password_hash:
            doc["passwordHash"] = password_hash
        if federated_id:
            doc["federatedId"] = federated_id

        try:
            result = self._collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise self._translate_duplicate(e, email, federated_id) from e

        doc["_id"] = result.inserted_id
        return User.from_document(doc)

    def link_federated_identity(
        self,
        user_id: str,
        federated_id: str,
        avatar_url: Optional[str] = None,
    ) -> Optional[User]:
        """
        Attach a federated id (and optionally an avatar) to an existing user.

        Returns:
            The updated user, or None if the user vanished.
        """
        update: dict = {
            "federatedId": federated_id,
            "updatedAt": datetime.now(timezone.utc),
        }
        if avatar_url:
            update["avatarUrl"] = avatar_url

        try:
            doc = self._collection.find_one_and_update(
                {"_id": self.parse_object_id(user_id)},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise FederatedIdentityConflictError(federated_id) from e

        return User.from_document(doc) if doc else None

    def ensure_indexes(self) -> list[str]:
        """Create the uniqueness indexes. Returns the index names."""
        return [
            self._collection.create_index([("email", ASCENDING)], unique=True, name="email_unique"),
            self._collection.create_index(
                [("federatedId", ASCENDING)],
                unique=True,
                sparse=True,
                name="federatedId_unique",
            ),
        ]

    @staticmethod
    def _translate_duplicate(
        error: DuplicateKeyError,
        email: str,
        federated_id: Optional[str],
    ):
        key_pattern = (error.details or {}).get("keyPattern", {})
        if "federatedId" in key_pattern and federated_id:
            return FederatedIdentityConflictError(federated_id)
        return EmailAlreadyRegisteredError(email)
