#!/usr/bin/env python3
"""Infrastructure services configuration

Document store and event bus endpoints used by the catalog.
"""
import os
from dataclasses import dataclass
from typing import Optional

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class InfraConfig:
    """Infrastructure service endpoints"""

    # ===========================================
    # MongoDB (native pymongo async - port 27017)
    # ===========================================
    mongodb_host: str = "localhost"
    mongodb_port: int = 27017
    mongodb_url: Optional[str] = None
    mongodb_database: str = "photo_catalog"
    mongodb_timeout_ms: int = 5000

    # ===========================================
    # NATS (native - port 4222)
    # ===========================================
    nats_enabled: bool = True
    nats_host: str = "localhost"
    nats_port: int = 4222
    nats_url: Optional[str] = None

    @property
    def mongodb_uri(self) -> str:
        """Connection string, explicit URL wins over host/port"""
        return self.mongodb_url or f"mongodb://{self.mongodb_host}:{self.mongodb_port}"

    @property
    def nats_servers(self) -> str:
        return self.nats_url or f"nats://{self.nats_host}:{self.nats_port}"

    @classmethod
    def from_env(cls) -> 'InfraConfig':
        """Load infrastructure config from environment"""
        return cls(
            # MongoDB
            mongodb_host=os.getenv("MONGODB_HOST", "localhost"),
            mongodb_port=_int(os.getenv("MONGODB_PORT", "27017"), 27017),
            mongodb_url=os.getenv("MONGODB_URL"),
            mongodb_database=os.getenv("MONGODB_DATABASE", "photo_catalog"),
            mongodb_timeout_ms=_int(os.getenv("MONGODB_TIMEOUT_MS", "5000"), 5000),

            # NATS
            nats_enabled=_bool(os.getenv("NATS_ENABLED", "true")),
            nats_host=os.getenv("NATS_HOST", "localhost"),
            nats_port=_int(os.getenv("NATS_PORT", "4222"), 4222),
            nats_url=os.getenv("NATS_URL"),
        )
