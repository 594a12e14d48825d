#!/usr/bin/env python3
"""
Core Module for the Photo Catalog

Shared infrastructure used by the catalog microservice.

COMPONENTS:
    - config/: Environment-driven configuration (dotenv + dataclasses)
    - logger.py: Service logger setup
    - mongo_client.py: Shared MongoDB client (pymongo async API)
    - nats_client.py: NATS event bus for event-driven notifications
    - auth_dependencies.py: FastAPI dependencies for forwarded identity

USAGE:
    from core.config import get_settings
    from core.mongo_client import get_mongo_client

    settings = get_settings()
    store = get_mongo_client(settings.service_name)
"""

__version__ = "1.0.0"
