"""
Visibility Rules Unit Golden Tests

Pure ownership/visibility functions.

Usage:
    pytest tests/unit/golden/catalog_service -v
"""
import pytest

from microservices.catalog_service.models import Visibility
from microservices.catalog_service.protocols import PhotoPermissionError
from microservices.catalog_service.visibility import (
    can_view,
    ensure_can_view,
    ensure_owner,
    filter_searchable,
    filter_visible,
)
from tests.fixtures import make_photo, make_viewer

pytestmark = [pytest.mark.unit, pytest.mark.golden]

ALICE = make_viewer(owner_id=42, username="alice")
BOB = make_viewer(owner_id=7, username="bob")


@pytest.fixture
def summer_photos():
    return [
        make_photo(photo_id=5, owner_id=42, visibility=Visibility.PRIVATE),
        make_photo(photo_id=6, owner_id=99, visibility=Visibility.PUBLIC),
    ]


class TestCanView:
    """GOLDEN: private photos are visible to their owner only"""

    def test_public_visible_to_anyone(self):
        assert can_view(make_photo(owner_id=99), BOB) is True

    def test_private_visible_to_owner(self):
        assert can_view(make_photo(owner_id=42, visibility=Visibility.PRIVATE), ALICE) is True

    def test_private_hidden_from_others(self):
        assert can_view(make_photo(owner_id=42, visibility=Visibility.PRIVATE), BOB) is False


class TestListFilters:
    """GOLDEN: listings drop what the viewer may not see"""

    def test_owner_listing(self, summer_photos):
        assert [p.id for p in filter_visible(summer_photos, ALICE)] == [5, 6]

    def test_other_viewer_listing(self, summer_photos):
        assert [p.id for p in filter_visible(summer_photos, BOB)] == [6]

    def test_search_ignores_ownership(self, summer_photos):
        assert [p.id for p in filter_searchable(summer_photos)] == [6]


class TestExplicitChecks:
    """GOLDEN: direct access raises instead of hiding"""

    def test_ensure_can_view_raises_for_stranger(self, summer_photos):
        with pytest.raises(PhotoPermissionError):
            ensure_can_view(summer_photos[0], BOB)

    def test_ensure_can_view_returns_photo(self, summer_photos):
        assert ensure_can_view(summer_photos[0], ALICE).id == 5

    def test_ensure_owner_applies_to_public_photos_too(self, summer_photos):
        with pytest.raises(PhotoPermissionError):
            ensure_owner(summer_photos[1], ALICE)
