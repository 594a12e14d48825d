"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - common.py: Base ID generators, timestamps
    - catalog_fixtures.py: Catalog models, stored documents, requests
"""

# Common utilities
from .common import (
    make_owner_id,
    make_username,
    make_email,
    make_timestamp,
)

# Catalog service fixtures
from .catalog_fixtures import (
    make_viewer,
    make_user,
    make_album,
    make_photo,
    make_comment,
    make_photo_document,
    make_album_create_request,
    make_photo_upload_request,
    make_photo_update_request,
    make_user_register_request,
)

__all__ = [
    # Common
    "make_owner_id",
    "make_username",
    "make_email",
    "make_timestamp",
    # Catalog
    "make_viewer",
    "make_user",
    "make_album",
    "make_photo",
    "make_comment",
    "make_photo_document",
    "make_album_create_request",
    "make_photo_upload_request",
    "make_photo_update_request",
    "make_user_register_request",
]
