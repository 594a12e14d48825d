"""
Event Publishers for Catalog Service

Centralized event publishing logic for catalog_service.
Publishing never fails the operation that triggered it: a missing bus is
logged as a warning, a failed publish as an error.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from core.nats_client import Event, EventType, ServiceSource
from .models import (
    AlbumCreatedEventData,
    PhotoCommentAddedEventData,
    PhotoUploadedEventData,
    UserRegisteredEventData,
)

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class CatalogEventPublishers:
    """Publishers for catalog service events"""

    def __init__(self, event_bus):
        """
        Initialize event publishers

        Args:
            event_bus: NATS event bus instance (None disables publishing)
        """
        self.event_bus = event_bus

    async def _publish(self, event_type: EventType, data: dict, label: str) -> bool:
        if not self.event_bus:
            logger.warning(f"Event bus not available, skipping {event_type.value} event")
            return False

        try:
            event = Event(
                event_type=event_type,
                source=ServiceSource.CATALOG_SERVICE,
                data=data,
            )
            await self.event_bus.publish_event(event)
            logger.info(f"Published {event_type.value} event for {label}")
            return True
        except Exception as e:
            logger.error(f"Failed to publish {event_type.value} event: {e}")
            return False

    async def publish_album_created(self, album_id: int, album_name: str, owner_id: int) -> bool:
        """Publish album.created event"""
        event_data = AlbumCreatedEventData(
            album_id=album_id,
            album_name=album_name,
            owner_id=owner_id,
            timestamp=_now(),
        )
        return await self._publish(EventType.ALBUM_CREATED, event_data.model_dump(), f"album {album_id}")

    async def publish_photo_uploaded(
        self,
        photo_id: int,
        album_id: int,
        owner_id: int,
        filename: str,
        visibility: str,
        tags: List[str],
    ) -> bool:
        """Publish photo.uploaded event"""
        event_data = PhotoUploadedEventData(
            photo_id=photo_id,
            album_id=album_id,
            owner_id=owner_id,
            filename=filename,
            visibility=visibility,
            tags=tags,
            timestamp=_now(),
        )
        return await self._publish(EventType.PHOTO_UPLOADED, event_data.model_dump(), f"photo {photo_id}")

    async def publish_photo_comment_added(
        self,
        photo_id: int,
        photo_title: str,
        owner_id: int,
        commenter: str,
        text: str,
        owner_username: Optional[str] = None,
        owner_email: Optional[str] = None,
    ) -> bool:
        """
        Publish photo.comment.added event (owner notification signal)

        Args:
            photo_id: Photo ID
            photo_title: Photo title
            owner_id: Photo owner (notification recipient)
            commenter: Commenter username
            text: Comment text
            owner_username: Recipient username, when the user record exists
            owner_email: Recipient email, when the user record exists
        """
        event_data = PhotoCommentAddedEventData(
            photo_id=photo_id,
            photo_title=photo_title,
            owner_id=owner_id,
            owner_username=owner_username,
            owner_email=owner_email,
            commenter=commenter,
            text=text,
            timestamp=_now(),
        )
        return await self._publish(EventType.PHOTO_COMMENT_ADDED, event_data.model_dump(), f"photo {photo_id}")

    async def publish_user_registered(self, owner_id: int, username: str) -> bool:
        """Publish user.registered event"""
        event_data = UserRegisteredEventData(owner_id=owner_id, username=username, timestamp=_now())
        return await self._publish(EventType.USER_REGISTERED, event_data.model_dump(), f"user {owner_id}")
