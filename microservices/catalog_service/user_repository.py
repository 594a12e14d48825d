"""
User Repository - Data access layer for registered users

Stores the records the auth collaborator needs (username, password hash,
salt) and owns ownerID allocation. Hashing and verification happen outside
the catalog; this layer only persists what it is given.
"""

import logging
from typing import Optional

from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.config import CatalogCollectionsConfig, get_settings

from .models import SequenceKind, User
from .protocols import (
    DocumentStoreProtocol,
    DuplicateNameError,
    IdAllocatorProtocol,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


class UserRepository:
    """User repository - data access layer for user records"""

    def __init__(
        self,
        store: DocumentStoreProtocol,
        id_allocator: IdAllocatorProtocol,
        collections: Optional[CatalogCollectionsConfig] = None,
    ):
        collections = collections or get_settings().collections
        self.store = store
        self.id_allocator = id_allocator
        self.users_collection = collections.users

    @property
    def _users(self):
        return self.store.collection(self.users_collection)

    async def ensure_indexes(self):
        """Usernames and ownerIDs are unique"""
        try:
            await self._users.create_index([("username", ASCENDING)], unique=True)
            await self._users.create_index([("ownerID", ASCENDING)], unique=True)
        except PyMongoError as e:
            logger.error(f"Error creating user indexes: {e}")
            raise StoreUnavailableError(f"Failed to create user indexes: {e}") from e

    async def get_by_username(self, username: str) -> Optional[User]:
        try:
            doc = await self._users.find_one({"username": username})
        except PyMongoError as e:
            logger.error(f"Error getting user {username!r}: {e}")
            raise StoreUnavailableError(f"Failed to get user: {e}") from e

        return User.model_validate(doc) if doc else None

    async def get_by_owner_id(self, owner_id: int) -> Optional[User]:
        try:
            doc = await self._users.find_one({"ownerID": owner_id})
        except PyMongoError as e:
            logger.error(f"Error getting user by ownerID {owner_id}: {e}")
            raise StoreUnavailableError(f"Failed to get user: {e}") from e

        return User.model_validate(doc) if doc else None

    async def create(
        self,
        username: str,
        password_hash: str,
        salt: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """
        Register a user with a freshly allocated ownerID.

        Raises:
            DuplicateNameError: Username already taken
            StoreUnavailableError: Store failure
        """
        if await self.get_by_username(username):
            raise DuplicateNameError(f"Username already exists: {username}")

        owner_id = await self.id_allocator.next_id(SequenceKind.OWNER_ID.value)
        user = User(
            owner_id=owner_id,
            username=username,
            password_hash=password_hash,
            salt=salt,
            name=name,
            email=email,
        )

        try:
            await self._users.insert_one(user.model_dump(by_alias=True))
        except DuplicateKeyError as e:
            # Lost a registration race; the allocated ownerID is simply skipped
            logger.warning(f"Username {username!r} registered concurrently")
            raise DuplicateNameError(f"Username already exists: {username}") from e
        except PyMongoError as e:
            logger.error(f"Error creating user {username!r}: {e}")
            raise StoreUnavailableError(f"Failed to create user: {e}") from e

        logger.info(f"User registered: {username} (ownerID {owner_id})")
        return user
