"""
Visibility / Ownership Rules

Pure functions, no I/O. Two modes:
- Lists (album view, search) silently omit photos the viewer may not see.
- Single-photo access raises PhotoPermissionError instead of pretending the
  photo does not exist.
"""

from typing import Iterable, List

from .models import Photo, Viewer, Visibility
from .protocols import PhotoPermissionError


def can_view(photo: Photo, viewer: Viewer) -> bool:
    """A photo is visible when it is not private or the viewer owns it"""
    return photo.visibility != Visibility.PRIVATE or photo.owner_id == viewer.owner_id


def filter_visible(photos: Iterable[Photo], viewer: Viewer) -> List[Photo]:
    """Album listing filter"""
    return [photo for photo in photos if can_view(photo, viewer)]


def filter_searchable(photos: Iterable[Photo]) -> List[Photo]:
    """Search filter: public photos only, even for their owner"""
    return [photo for photo in photos if photo.visibility == Visibility.PUBLIC]


def ensure_can_view(photo: Photo, viewer: Viewer) -> Photo:
    """Explicit check for a direct fetch"""
    if not can_view(photo, viewer):
        raise PhotoPermissionError(f"Photo {photo.id} is private")
    return photo


def ensure_owner(photo: Photo, viewer: Viewer) -> Photo:
    """Only the owner may edit, tag or re-file a photo"""
    if photo.owner_id != viewer.owner_id:
        raise PhotoPermissionError(f"User {viewer.owner_id} does not own photo {photo.id}")
    return photo
