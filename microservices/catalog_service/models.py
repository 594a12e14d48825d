"""
Catalog Service Models

Independent models for the photo catalog microservice.
Handles users, albums, photos, comments and ID sequence counters.

Persisted documents use camelCase field names (ownerID, photoId, ...);
models expose snake_case attributes with the stored names as aliases.
Dump with ``model_dump(by_alias=True)`` before writing to the store.
"""

from typing import Optional, List
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from enum import Enum


# ==================== Enumerations ====================

class Visibility(str, Enum):
    """Photo visibility"""
    PUBLIC = "public"
    PRIVATE = "private"


class SequenceKind(str, Enum):
    """Counter document keys, one per entity kind"""
    OWNER_ID = "ownerID"
    ALBUM_ID = "albumID"
    PHOTO_ID = "photoID"


# ==================== Normalization ====================

def normalize_tag(tag: str) -> str:
    """Canonical tag form: trimmed, lowercase"""
    return (tag or "").strip().lower()


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Normalize, drop empties and de-duplicate, keeping first-seen order"""
    result: List[str] = []
    for tag in tags or []:
        value = normalize_tag(tag)
        if value and value not in result:
            result.append(value)
    return result


# ==================== Core Models ====================

class User(BaseModel):
    """Registered user; owner_id is the foreign key used everywhere else"""
    owner_id: int = Field(..., alias="ownerID")
    username: str
    password_hash: str = Field("", alias="passwordHash")
    salt: str = ""
    name: Optional[str] = None
    email: Optional[str] = None

    class Config:
        populate_by_name = True
        from_attributes = True


class Album(BaseModel):
    """Album model"""
    id: int
    name: str
    owner_id: int = Field(..., alias="ownerID")

    class Config:
        populate_by_name = True
        from_attributes = True


class Photo(BaseModel):
    """Photo model"""
    id: int
    filename: str = ""
    title: str = ""
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    visibility: Visibility = Visibility.PUBLIC
    owner_id: int = Field(..., alias="ownerID")
    albums: List[int] = Field(default_factory=list)
    date: Optional[datetime] = None
    resolution: Optional[str] = None

    @field_validator('tags', mode='before')
    @classmethod
    def parse_tags(cls, v):
        # Older documents may hold mixed-case or repeated tags
        return normalize_tags(v)

    @field_validator('albums', mode='before')
    @classmethod
    def default_empty_list(cls, v):
        return v if v is not None else []

    @field_validator('visibility', mode='before')
    @classmethod
    def parse_visibility(cls, v):
        # Older documents have no visibility field; they were always shown
        if v is None or v == "":
            return Visibility.PUBLIC
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('filename', 'title', 'description', mode='before')
    @classmethod
    def default_empty_text(cls, v):
        return v if v is not None else ""

    @property
    def is_private(self) -> bool:
        return self.visibility == Visibility.PRIVATE

    class Config:
        populate_by_name = True
        from_attributes = True


class Comment(BaseModel):
    """Comment on a photo; stored order is chronological order"""
    photo_id: int = Field(..., alias="photoId")
    username: str
    text: str
    date: datetime

    class Config:
        populate_by_name = True
        from_attributes = True


class SequenceCounter(BaseModel):
    """Counter document; seq is the last issued value"""
    kind: str = Field(..., alias="_id")
    seq: int = 0

    class Config:
        populate_by_name = True


class Viewer(BaseModel):
    """Acting identity supplied by the auth collaborator (never authenticated here)"""
    owner_id: int
    username: str


# ==================== Request Models ====================

class AlbumCreateRequest(BaseModel):
    """Album creation request"""
    name: str = Field(..., description="Album name", min_length=1, max_length=255)


class PhotoUploadRequest(BaseModel):
    """Photo metadata for a new upload; the file itself is stored elsewhere"""
    album_id: int = Field(..., description="Album the photo is created in")
    filename: str = Field(..., description="Stored file name", min_length=1)
    title: str = Field("", description="Photo title", max_length=255)
    description: str = Field("", description="Photo description", max_length=2000)
    tags: List[str] = Field(default_factory=list, description="Photo tags")
    visibility: Visibility = Field(Visibility.PUBLIC, description="public or private")
    date: Optional[datetime] = Field(None, description="Capture date, defaults to now")
    resolution: Optional[str] = Field(None, description="e.g. 1920x1080")


class PhotoUpdateRequest(BaseModel):
    """Photo update request; tags, when given, replace the list wholesale"""
    title: str = Field(..., description="Photo title", max_length=255)
    description: str = Field("", description="Photo description", max_length=2000)
    visibility: Optional[Visibility] = Field(None, description="public or private")
    tags: Optional[List[str]] = Field(None, description="Replacement tag list")


class TagAddRequest(BaseModel):
    """Add a single tag"""
    tag: str = Field(..., description="Tag text", max_length=100)


class PhotoAttachRequest(BaseModel):
    """Attach a photo to another album"""
    album_id: int = Field(..., description="Album ID")


class CommentCreateRequest(BaseModel):
    """Comment creation request"""
    text: str = Field(..., description="Comment text", max_length=2000)


class UserRegisterRequest(BaseModel):
    """Registration data handed over by the auth collaborator (already hashed)"""
    username: str = Field(..., min_length=1, max_length=100)
    password_hash: str = Field(..., min_length=1)
    salt: str = Field(..., min_length=1)
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)


# ==================== Response Models ====================

class AlbumListResponse(BaseModel):
    """Album list response"""
    albums: List[Album]
    count: int


class PhotoListResponse(BaseModel):
    """Photo list response (album view or search)"""
    photos: List[Photo]
    count: int


class AlbumPhotosResponse(BaseModel):
    """Album with the photos visible to the viewer"""
    album: Album
    photos: List[Photo]
    count: int


class CommentListResponse(BaseModel):
    """Comment list response"""
    photo_id: int
    comments: List[Comment]
    count: int


class MutationResponse(BaseModel):
    """Result of an idempotent or partial write; changed=False means no-op"""
    success: bool = True
    changed: bool
    message: str


class UserResponse(BaseModel):
    """Public user fields (no credentials)"""
    owner_id: int
    username: str
    name: Optional[str]
    email: Optional[str]


# ==================== Service Status Models ====================

class CatalogServiceStatus(BaseModel):
    """Catalog service status response"""
    service: str = "catalog_service"
    status: str = "operational"
    port: int = 8000
    version: str = "1.0.0"
    database_connected: bool
    timestamp: datetime


# ==================== Export Models ====================

__all__ = [
    # Enums
    'Visibility', 'SequenceKind',
    # Helpers
    'normalize_tag', 'normalize_tags',
    # Core Models
    'User', 'Album', 'Photo', 'Comment', 'SequenceCounter', 'Viewer',
    # Request Models
    'AlbumCreateRequest', 'PhotoUploadRequest', 'PhotoUpdateRequest',
    'TagAddRequest', 'PhotoAttachRequest', 'CommentCreateRequest', 'UserRegisterRequest',
    # Response Models
    'AlbumListResponse', 'PhotoListResponse', 'AlbumPhotosResponse',
    'CommentListResponse', 'MutationResponse', 'UserResponse',
    # Service Models
    'CatalogServiceStatus',
]
