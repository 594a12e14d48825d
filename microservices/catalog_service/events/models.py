"""
Event Data Models for Catalog Service

Defines Pydantic models for events published by catalog_service
"""

from pydantic import BaseModel, Field
from typing import List, Optional

# ====================
# Outbound Event Models (Published by catalog_service)
# ====================

class AlbumCreatedEventData(BaseModel):
    """Data for album.created event"""
    album_id: int = Field(..., description="Album ID")
    album_name: str = Field(..., description="Album name")
    owner_id: int = Field(..., description="Album owner ownerID")
    timestamp: str = Field(..., description="ISO timestamp of creation")


class PhotoUploadedEventData(BaseModel):
    """Data for photo.uploaded event"""
    photo_id: int = Field(..., description="Photo ID")
    album_id: int = Field(..., description="Album the photo was created in")
    owner_id: int = Field(..., description="Photo owner ownerID")
    filename: str = Field(..., description="Stored file name")
    visibility: str = Field(..., description="public or private")
    tags: List[str] = Field(default_factory=list, description="Normalized tags")
    timestamp: str = Field(..., description="ISO timestamp")


class PhotoCommentAddedEventData(BaseModel):
    """
    Data for photo.comment.added event.

    Published only when the commenter is not the photo owner; a notification
    collaborator turns it into an email or in-app notice for the owner.
    """
    photo_id: int = Field(..., description="Photo ID")
    photo_title: str = Field(..., description="Photo title at comment time")
    owner_id: int = Field(..., description="Photo owner ownerID (recipient)")
    owner_username: Optional[str] = Field(None, description="Recipient username, when known")
    owner_email: Optional[str] = Field(None, description="Recipient email, when known")
    commenter: str = Field(..., description="Commenter username")
    text: str = Field(..., description="Comment text")
    timestamp: str = Field(..., description="ISO timestamp")


class UserRegisteredEventData(BaseModel):
    """Data for user.registered event"""
    owner_id: int = Field(..., description="Allocated ownerID")
    username: str = Field(..., description="Username")
    timestamp: str = Field(..., description="ISO timestamp")
