"""
Catalog Service Events

Publishers for events emitted by the catalog
"""

from .publishers import CatalogEventPublishers
from . import models

__all__ = [
    'CatalogEventPublishers',
    'models'
]
