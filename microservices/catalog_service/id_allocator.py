"""
ID Allocator - sequential integer IDs for users, albums and photos

One counter document per entity kind lives in the counters collection:
    { "_id": "photoID", "seq": 41 }
where seq is the last issued value.

Every allocation is a single atomic find_one_and_update with $inc, so two
concurrent callers never observe the same value. A counter that does not
exist yet is seeded once from the highest ID already stored for that kind;
racing seeders are resolved by the unique _id (losers see DuplicateKeyError
and fall through to the increment).
"""

import logging
from typing import Dict, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.config import CatalogCollectionsConfig, get_settings

from .models import SequenceCounter, SequenceKind
from .protocols import CatalogValidationError, DocumentStoreProtocol, StoreUnavailableError

logger = logging.getLogger(__name__)


class IdAllocator:
    """Atomic per-kind sequence allocator backed by counter documents"""

    def __init__(
        self,
        store: DocumentStoreProtocol,
        collections: Optional[CatalogCollectionsConfig] = None,
    ):
        collections = collections or get_settings().collections
        self.store = store
        self.counters_collection = collections.counters
        # kind -> (collection holding existing entities, id field)
        self._sources: Dict[str, Tuple[str, str]] = {
            SequenceKind.OWNER_ID.value: (collections.users, "ownerID"),
            SequenceKind.ALBUM_ID.value: (collections.albums, "id"),
            SequenceKind.PHOTO_ID.value: (collections.photos, "id"),
        }

    async def next_id(self, kind: str) -> int:
        """
        Allocate the next ID for an entity kind.

        Args:
            kind: Counter key ("ownerID", "albumID" or "photoID")

        Returns:
            int: Newly issued ID, unique for the kind

        Raises:
            CatalogValidationError: Unknown kind
            StoreUnavailableError: Store failure (no ID was issued)
        """
        kind = getattr(kind, "value", kind)
        if kind not in self._sources:
            raise CatalogValidationError(f"Unknown sequence kind: {kind}")

        try:
            doc = await self._increment(kind)
            if doc is None:
                await self._seed_counter(kind)
                doc = await self._increment(kind)
        except PyMongoError as e:
            logger.error(f"Error allocating {kind}: {e}")
            raise StoreUnavailableError(f"Failed to allocate {kind}: {e}") from e

        if doc is None:
            raise StoreUnavailableError(f"Counter {kind} missing after seeding")

        issued = SequenceCounter.model_validate(doc).seq
        logger.debug(f"Allocated {kind}={issued}")
        return issued

    async def current_value(self, kind: str) -> int:
        """Last issued value for a kind (0 when the counter does not exist yet)"""
        kind = getattr(kind, "value", kind)
        try:
            doc = await self.store.collection(self.counters_collection).find_one({"_id": kind})
        except PyMongoError as e:
            logger.error(f"Error reading counter {kind}: {e}")
            raise StoreUnavailableError(f"Failed to read counter {kind}: {e}") from e
        return SequenceCounter.model_validate(doc).seq if doc else 0

    async def _increment(self, kind: str):
        return await self.store.collection(self.counters_collection).find_one_and_update(
            {"_id": kind},
            {"$inc": {"seq": 1}},
            return_document=ReturnDocument.AFTER,
        )

    async def _seed_counter(self, kind: str):
        collection_name, field = self._sources[kind]
        newest = await self.store.collection(collection_name).find_one(
            {}, sort=[(field, DESCENDING)]
        )
        highest = int(newest[field]) if newest and newest.get(field) is not None else 0

        counter = SequenceCounter(kind=kind, seq=highest)
        try:
            await self.store.collection(self.counters_collection).insert_one(
                counter.model_dump(by_alias=True)
            )
            logger.info(f"Seeded counter {kind} at {highest}")
        except DuplicateKeyError:
            logger.debug(f"Counter {kind} already seeded concurrently")
