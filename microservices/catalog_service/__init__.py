"""
Catalog Service

Photo catalog microservice: albums, photos, tags, comments and search.
Every document id comes from an atomic per-kind counter.

Port: 8000
"""

__version__ = "1.0.0"
__service_name__ = "catalog_service"
__service_port__ = 8000
