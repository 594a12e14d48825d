"""
NATS JetStream Client for the Photo Catalog

Provides event-driven signalling (e.g. "new comment on your photo") to
downstream collaborators such as a notification service.

This module wraps nats-py directly; every event is published to a JetStream
stream chosen from the event type prefix.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import nats
from nats.errors import Error as NATSError
from nats.js.errors import Error as JetStreamError

if TYPE_CHECKING:
    from nats.aio.client import Client as NATSConnection
    from nats.js import JetStreamContext

    from core.config import InfraConfig

logger = logging.getLogger(__name__)


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder that serializes datetimes as ISO strings"""
    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


class EventType(Enum):
    """Event types published by the catalog"""

    # Album Events
    ALBUM_CREATED = "album.created"

    # Photo Events
    PHOTO_UPLOADED = "photo.uploaded"
    PHOTO_COMMENT_ADDED = "photo.comment.added"

    # User Events
    USER_REGISTERED = "user.registered"


class ServiceSource(Enum):
    """Event sources"""

    CATALOG_SERVICE = "catalog_service"


class Event:
    """Event model"""

    def __init__(
        self,
        event_type: EventType,
        source: ServiceSource,
        data: Dict[str, Any],
        subject: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ):
        self.id = str(uuid.uuid4())
        self.type = event_type.value
        self.source = source.value
        self.data = data
        self.subject = subject
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.metadata = metadata or {}
        self.version = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "source": self.source,
            "subject": self.subject,
            "timestamp": self.timestamp,
            "data": self.data,
            "metadata": self.metadata,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        event = cls.__new__(cls)
        event.id = data.get("id")
        event.type = data.get("type")
        event.source = data.get("source")
        event.subject = data.get("subject")
        event.timestamp = data.get("timestamp")
        event.data = data.get("data", {})
        event.metadata = data.get("metadata", {})
        event.version = data.get("version", "1.0.0")
        return event


class NATSEventBus:
    """
    NATS JetStream event bus using nats-py.

    Streams are created on demand, one per event type prefix
    (album.* -> album-stream, photo.* -> photo-stream, ...).
    """

    def __init__(
        self,
        service_name: str,
        config: Optional["InfraConfig"] = None,
    ):
        """
        Initialize NATS Event Bus.

        Args:
            service_name: Name of the service (used as the connection name)
            config: Optional InfraConfig (defaults to global settings)
        """
        from core.config import get_settings

        self.service_name = service_name
        infra = config or get_settings().infrastructure
        self.servers = infra.nats_servers

        self._nc: Optional["NATSConnection"] = None
        self._js: Optional["JetStreamContext"] = None
        self._streams: List[str] = []

        logger.info(f"NATS EventBus initialized: {self.servers}")

    async def connect(self):
        """Connect to NATS and open a JetStream context"""
        try:
            self._nc = await nats.connect(servers=self.servers, name=self.service_name)
            self._js = self._nc.jetstream()
            logger.info(f"Connected to NATS as {self.service_name}")
        except (NATSError, OSError) as e:
            logger.error(f"Failed to connect to NATS: {e}")
            raise

    async def publish_event(self, event: Event) -> bool:
        """
        Publish an event to NATS JetStream.

        The event type is used as the subject (e.g. "photo.comment.added").
        """
        if not self.is_connected:
            logger.error("Not connected to NATS")
            return False

        try:
            stream_name = self._get_stream_name_for_event(event.type)
            await self._ensure_stream(stream_name, event.type.split('.')[0])

            data = json.dumps(event.to_dict(), cls=DateTimeEncoder).encode()
            ack = await self._js.publish(event.type, data, stream=stream_name)

            logger.info(f"Published event {event.type} [{event.id}] to stream {ack.stream}, seq={ack.seq}")
            return True

        except NATSError as e:
            logger.error(f"Error publishing event {event.id}: {e}")
            return False

    def _get_stream_name_for_event(self, event_type: str) -> str:
        """Stream name from the first segment of the event type"""
        prefix = event_type.split('.')[0]
        return f"{prefix}-stream"

    async def _ensure_stream(self, stream_name: str, subject_prefix: str):
        if stream_name in self._streams:
            return
        try:
            await self._js.add_stream(name=stream_name, subjects=[f"{subject_prefix}.>"])
        except JetStreamError as e:
            # Existing streams are reported as errors by the server
            logger.debug(f"Stream creation note: {e}")
        self._streams.append(stream_name)

    async def close(self):
        """Drain and close the NATS connection"""
        if self._nc is not None:
            try:
                await self._nc.drain()
            except NATSError as e:
                logger.warning(f"Error draining NATS connection: {e}")
            self._nc = None
            self._js = None

        logger.info("Disconnected from NATS")

    @property
    def is_connected(self) -> bool:
        """Check if connected to NATS"""
        return self._nc is not None and self._nc.is_connected


# Singleton instance
_event_bus: Optional[NATSEventBus] = None


async def get_event_bus(
    service_name: str,
    config: Optional["InfraConfig"] = None,
) -> NATSEventBus:
    """
    Get or create event bus instance.

    Args:
        service_name: Name of the service using the event bus
        config: Optional InfraConfig

    Returns:
        NATSEventBus instance
    """
    global _event_bus

    if _event_bus is None:
        bus = NATSEventBus(service_name=service_name, config=config)
        await bus.connect()
        _event_bus = bus

    return _event_bus


# Convenience function for creating events
def create_event(
    event_type: EventType,
    data: Dict[str, Any],
    source: ServiceSource = ServiceSource.CATALOG_SERVICE,
    subject: Optional[str] = None,
    metadata: Optional[Dict[str, str]] = None,
) -> Event:
    """Create an Event instance"""
    return Event(
        event_type=event_type,
        source=source,
        data=data,
        subject=subject,
        metadata=metadata,
    )
