"""
Catalog Service Business Logic

Photo catalog business logic layer for the microservice.
Handles validation, ownership/visibility rules and event publishing.

Uses dependency injection for testability:
- Repositories and the store handle are injected, not created at import time
- Event publishing is optional (no bus -> no events)
"""

from typing import List, Optional
import logging

# Import protocols (no I/O dependencies) - NOT the concrete repositories!
from .protocols import (
    AlbumNotFoundError,
    AlbumRepositoryProtocol,
    CatalogServiceError,
    CatalogValidationError,
    CommentRepositoryProtocol,
    DocumentStoreProtocol,
    PhotoNotFoundError,
    PhotoRepositoryProtocol,
    StoreUnavailableError,
    UserNotFoundError,
    UserRepositoryProtocol,
)
from .models import (
    Album,
    AlbumCreateRequest,
    Comment,
    Photo,
    PhotoUpdateRequest,
    PhotoUploadRequest,
    User,
    UserRegisterRequest,
    Viewer,
)
from .visibility import ensure_can_view, ensure_owner, filter_searchable, filter_visible
from .events import CatalogEventPublishers

logger = logging.getLogger(__name__)


# ==================== Catalog Service ====================

class CatalogService:
    """
    Photo catalog business logic service

    Handles album, photo, comment and user operations while delegating
    data access to the repository layer. Multi-photo listings are filtered
    for the viewer; single-photo access raises PhotoPermissionError.
    """

    def __init__(
        self,
        album_repo: Optional[AlbumRepositoryProtocol] = None,
        photo_repo: Optional[PhotoRepositoryProtocol] = None,
        comment_repo: Optional[CommentRepositoryProtocol] = None,
        user_repo: Optional[UserRepositoryProtocol] = None,
        store: Optional[DocumentStoreProtocol] = None,
        event_bus=None,
    ):
        """
        Initialize service with injected dependencies.

        Args:
            album_repo: Album repository (inject mock for testing)
            photo_repo: Photo repository
            comment_repo: Comment repository
            user_repo: User repository (optional; enables registration and
                owner details on comment notifications)
            store: Shared document store handle, used for health and shutdown
            event_bus: Event bus for publishing events
        """
        self.album_repo = album_repo
        self.photo_repo = photo_repo
        self.comment_repo = comment_repo
        self.user_repo = user_repo
        self.store = store
        self.event_bus = event_bus
        self.publishers = CatalogEventPublishers(event_bus)

    async def initialize(self):
        """Create the indexes every repository relies on"""
        for repo in (self.user_repo, self.album_repo, self.photo_repo, self.comment_repo):
            if repo is not None:
                await repo.ensure_indexes()
        logger.info("Catalog indexes ensured")

    # ==================== Album Operations ====================

    async def list_albums(self) -> List[Album]:
        """List every album"""
        try:
            return await self.album_repo.get_all()
        except CatalogServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to list albums: {e}")
            raise CatalogServiceError(f"Failed to list albums: {str(e)}")

    async def get_album(self, album_id: int) -> Album:
        """
        Get album by ID

        Raises:
            AlbumNotFoundError: If album not found
        """
        album = await self.album_repo.get_by_id(album_id)
        if not album:
            raise AlbumNotFoundError(f"Album not found: {album_id}")
        return album

    async def get_album_by_name(self, name: str) -> Album:
        """
        Get the first album with this exact (case-sensitive) name

        Raises:
            AlbumNotFoundError: If no album has this name
        """
        album = await self.album_repo.get_by_name(name)
        if not album:
            raise AlbumNotFoundError(f"Album not found: {name}")
        return album

    async def create_album(self, request: AlbumCreateRequest, viewer: Viewer) -> Album:
        """
        Create a new album owned by the viewer

        Raises:
            CatalogValidationError: If the name is blank or too long
        """
        name = self._validate_album_name(request.name)

        try:
            album = await self.album_repo.create(name, viewer.owner_id)
        except CatalogServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to create album: {e}")
            raise CatalogServiceError(f"Failed to create album: {str(e)}")

        if album.id is None:
            raise CatalogServiceError("Album created without an id")

        await self.publishers.publish_album_created(album.id, album.name, album.owner_id)
        logger.info(f"Album created: {album.id} by user {viewer.owner_id}")
        return album

    # ==================== Photo Operations ====================

    async def list_photos(self, album_id: int, viewer: Viewer) -> List[Photo]:
        """
        Photos in an album that the viewer may see.

        An unknown album yields an empty list, not an error.
        """
        photos = await self.photo_repo.list_by_album(album_id)
        visible = filter_visible(photos, viewer)
        logger.debug(f"Album {album_id}: {len(visible)}/{len(photos)} photos visible to {viewer.owner_id}")
        return visible

    async def get_photo(self, photo_id: int, viewer: Viewer) -> Photo:
        """
        Get full photo details

        Raises:
            PhotoNotFoundError: If photo not found
            PhotoPermissionError: If the photo is private and not owned by the viewer
        """
        photo = await self._require_photo(photo_id)
        return ensure_can_view(photo, viewer)

    async def upload_photo(self, request: PhotoUploadRequest, viewer: Viewer) -> Photo:
        """
        Register a new photo (metadata only) in an existing album

        Raises:
            AlbumNotFoundError: If the target album does not exist
        """
        await self.get_album(request.album_id)

        try:
            photo = await self.photo_repo.create(request, viewer.owner_id)
        except CatalogServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to upload photo: {e}")
            raise CatalogServiceError(f"Failed to upload photo: {str(e)}")

        if photo.id is None:
            raise CatalogServiceError("Photo created without an id")

        await self.publishers.publish_photo_uploaded(
            photo_id=photo.id,
            album_id=request.album_id,
            owner_id=photo.owner_id,
            filename=photo.filename,
            visibility=photo.visibility.value,
            tags=photo.tags,
        )
        return photo

    async def update_photo(self, photo_id: int, viewer: Viewer, request: PhotoUpdateRequest) -> bool:
        """
        Update title/description and optionally visibility and tags

        Returns:
            bool: True if the stored photo changed

        Raises:
            PhotoNotFoundError: If photo not found
            PhotoPermissionError: If the viewer does not own the photo
        """
        photo = await self._require_photo(photo_id)
        ensure_owner(photo, viewer)

        updated = await self.photo_repo.update(
            photo_id,
            title=request.title,
            description=request.description,
            visibility=request.visibility,
            tags=request.tags,
        )
        logger.info(f"Photo {photo_id} update by {viewer.owner_id}: {'changed' if updated else 'no change'}")
        return updated

    async def add_tag(self, photo_id: int, tag: str, viewer: Viewer) -> bool:
        """
        Add a tag to a photo (idempotent)

        Returns:
            bool: True if added, False if the tag was already present

        Raises:
            PhotoNotFoundError: If photo not found
            PhotoPermissionError: If the viewer does not own the photo
            CatalogValidationError: If the tag is blank
        """
        photo = await self._require_photo(photo_id)
        ensure_owner(photo, viewer)
        return await self.photo_repo.add_tag(photo_id, tag)

    async def add_photo_to_album(self, photo_id: int, album_id: int, viewer: Viewer) -> bool:
        """
        Attach a photo to another album (idempotent)

        Raises:
            PhotoNotFoundError / AlbumNotFoundError: Unknown photo or album
            PhotoPermissionError: If the viewer does not own the photo
        """
        photo = await self._require_photo(photo_id)
        ensure_owner(photo, viewer)
        await self.get_album(album_id)
        return await self.photo_repo.add_to_album(photo_id, album_id)

    async def search(self, query: str, viewer: Viewer) -> List[Photo]:
        """
        Search public photos by title, description or tag.

        Matching is case-insensitive substring on title/description and exact
        match on tags. Private photos never appear, even to their owner.

        Raises:
            CatalogValidationError: If the query is blank
        """
        needle = (query or "").strip().lower()
        if not needle:
            raise CatalogValidationError("Search query is required")

        photos = await self.photo_repo.list_all()
        matches = [
            photo for photo in photos
            if needle in photo.title.lower()
            or needle in photo.description.lower()
            or needle in photo.tags
        ]
        results = filter_searchable(matches)
        logger.debug(f"Search {needle!r} by {viewer.owner_id}: {len(results)} results")
        return results

    # ==================== Comment Operations ====================

    async def list_comments(self, photo_id: int) -> List[Comment]:
        """Comments for a photo in insertion order"""
        return await self.comment_repo.list_by_photo(photo_id)

    async def add_comment(self, photo_id: int, viewer: Viewer, text: str) -> Comment:
        """
        Append a comment and signal the photo owner when the commenter is someone else

        Raises:
            CatalogValidationError: If the text is blank
        """
        text = (text or "").strip()
        if not text:
            raise CatalogValidationError("Comment text is required")

        photo = await self.photo_repo.get_by_id(photo_id)
        comment = await self.comment_repo.append(photo_id, viewer.username, text)

        if photo and photo.owner_id != viewer.owner_id:
            await self._notify_owner(photo, viewer, text)

        return comment

    async def _notify_owner(self, photo: Photo, commenter: Viewer, text: str):
        owner: Optional[User] = None
        if self.user_repo is not None:
            try:
                owner = await self.user_repo.get_by_owner_id(photo.owner_id)
            except StoreUnavailableError as e:
                logger.warning(f"Could not load owner {photo.owner_id} for notification: {e}")

        await self.publishers.publish_photo_comment_added(
            photo_id=photo.id,
            photo_title=photo.title,
            owner_id=photo.owner_id,
            commenter=commenter.username,
            text=text,
            owner_username=owner.username if owner else None,
            owner_email=owner.email if owner else None,
        )

    # ==================== User Operations ====================

    async def register_user(self, request: UserRegisterRequest) -> User:
        """
        Register a user; the password arrives already hashed

        Raises:
            CatalogValidationError: If the username is blank
            DuplicateNameError: If the username is taken
        """
        username = request.username.strip()
        if not username:
            raise CatalogValidationError("Username is required")

        user = await self.user_repo.create(
            username=username,
            password_hash=request.password_hash,
            salt=request.salt,
            name=request.name,
            email=request.email,
        )
        await self.publishers.publish_user_registered(user.owner_id, user.username)
        return user

    async def get_user(self, username: str) -> User:
        """
        Raises:
            UserNotFoundError: If no user has this username
        """
        user = await self.user_repo.get_by_username(username)
        if not user:
            raise UserNotFoundError(f"User not found: {username}")
        return user

    # ==================== Validation Methods ====================

    def _validate_album_name(self, name: str) -> str:
        """Validate album name, returning the trimmed value"""
        name = (name or "").strip()
        if not name:
            raise CatalogValidationError("Album name is required")

        if len(name) > 255:
            raise CatalogValidationError("Album name too long (max 255 characters)")

        return name

    async def _require_photo(self, photo_id: int) -> Photo:
        photo = await self.photo_repo.get_by_id(photo_id)
        if not photo:
            raise PhotoNotFoundError(f"Photo not found: {photo_id}")
        return photo

    # ==================== Utility Methods ====================

    async def check_connection(self) -> bool:
        """Check database connection"""
        if self.store is None:
            return False
        try:
            await self.store.health_check()
            return True
        except Exception as e:
            logger.error(f"Connection check failed: {e}")
            return False

    async def close(self):
        """Release the shared store connection"""
        if self.store is not None:
            await self.store.close()
            logger.info("Catalog store closed")
