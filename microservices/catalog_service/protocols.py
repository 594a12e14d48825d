"""
Catalog Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, List, Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import Album, Comment, Photo, PhotoUploadRequest, User, Visibility


# Custom exceptions - defined here to avoid importing repositories
class CatalogServiceError(Exception):
    """Base exception for catalog service errors"""
    pass


class NotFoundError(CatalogServiceError):
    """Lookup by id/name with no match"""
    pass


class AlbumNotFoundError(NotFoundError):
    """Album not found error"""
    pass


class PhotoNotFoundError(NotFoundError):
    """Photo not found error"""
    pass


class UserNotFoundError(NotFoundError):
    """User not found error"""
    pass


class PhotoPermissionError(CatalogServiceError):
    """Viewer fails the ownership/visibility check on a direct fetch or edit"""
    pass


class DuplicateNameError(CatalogServiceError):
    """Username already taken"""
    pass


class StoreUnavailableError(CatalogServiceError):
    """Document store unreachable or failed the operation"""
    pass


class CatalogValidationError(CatalogServiceError):
    """Invalid input (empty tag, empty comment, ...)"""
    pass


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """Interface for the shared document store handle"""

    def collection(self, name: str) -> Any:
        """Get a collection handle by name"""
        ...

    async def health_check(self) -> Any:
        """Ping the store"""
        ...

    async def close(self) -> None:
        """Release the connection"""
        ...


@runtime_checkable
class IdAllocatorProtocol(Protocol):
    """Interface for sequential ID allocation"""

    async def next_id(self, kind: str) -> int:
        """Allocate the next ID for an entity kind"""
        ...


@runtime_checkable
class UserRepositoryProtocol(Protocol):
    """Interface for User Repository"""

    async def ensure_indexes(self) -> None:
        ...

    async def get_by_username(self, username: str) -> Optional[User]:
        ...

    async def get_by_owner_id(self, owner_id: int) -> Optional[User]:
        ...

    async def create(
        self,
        username: str,
        password_hash: str,
        salt: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        ...


@runtime_checkable
class AlbumRepositoryProtocol(Protocol):
    """
    Interface for Album Repository.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.
    """

    async def ensure_indexes(self) -> None:
        """Create the indexes lookups rely on"""
        ...

    async def get_all(self) -> List[Album]:
        """List every album"""
        ...

    async def get_by_id(self, album_id: int) -> Optional[Album]:
        """Get album by id"""
        ...

    async def get_by_name(self, name: str) -> Optional[Album]:
        """Get the first album with this exact name"""
        ...

    async def create(self, name: str, owner_id: int) -> Album:
        """Allocate an id and insert a new album"""
        ...


@runtime_checkable
class PhotoRepositoryProtocol(Protocol):
    """Interface for Photo Repository"""

    async def ensure_indexes(self) -> None:
        ...

    async def get_by_id(self, photo_id: int) -> Optional[Photo]:
        ...

    async def list_by_album(self, album_id: int) -> List[Photo]:
        ...

    async def list_all(self) -> List[Photo]:
        ...

    async def create(self, photo_data: PhotoUploadRequest, owner_id: int) -> Photo:
        ...

    async def update(
        self,
        photo_id: int,
        title: str,
        description: str,
        visibility: Optional[Visibility] = None,
        tags: Optional[List[str]] = None,
    ) -> bool:
        ...

    async def add_tag(self, photo_id: int, tag: str) -> bool:
        ...

    async def add_to_album(self, photo_id: int, album_id: int) -> bool:
        ...


@runtime_checkable
class CommentRepositoryProtocol(Protocol):
    """Interface for Comment Repository"""

    async def ensure_indexes(self) -> None:
        ...

    async def list_by_photo(self, photo_id: int) -> List[Comment]:
        ...

    async def append(self, photo_id: int, username: str, text: str) -> Comment:
        ...


@runtime_checkable
class EventBusProtocol(Protocol):
    """Interface for Event Bus - no I/O imports"""

    async def publish_event(self, event: Any) -> None:
        """Publish an event"""
        ...
