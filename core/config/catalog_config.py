#!/usr/bin/env python3
"""Catalog service main configuration

Combines the infrastructure and logging sub-configs with the catalog's own
settings (listen address, collection names).
"""
import os
from dataclasses import dataclass, field

from .infra_config import InfraConfig
from .logging_config import LoggingConfig


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class CatalogCollectionsConfig:
    """Collection names in the catalog database"""
    users: str = "users"
    albums: str = "albums"
    photos: str = "photos"
    comments: str = "comments"
    counters: str = "counters"

    @classmethod
    def from_env(cls) -> 'CatalogCollectionsConfig':
        prefix = os.getenv("CATALOG_COLLECTION_PREFIX", "")
        return cls(
            users=f"{prefix}users",
            albums=f"{prefix}albums",
            photos=f"{prefix}photos",
            comments=f"{prefix}comments",
            counters=f"{prefix}counters",
        )


@dataclass
class CatalogConfig:
    """Main catalog configuration with all sub-configs"""

    # Environment
    environment: str = "development"
    debug: bool = False

    # Service settings
    service_name: str = "catalog_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8000

    # Sub-configurations
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    infrastructure: InfraConfig = field(default_factory=InfraConfig)
    collections: CatalogCollectionsConfig = field(default_factory=CatalogCollectionsConfig)

    @classmethod
    def from_env(cls) -> 'CatalogConfig':
        """Load complete configuration from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            debug=_bool(os.getenv("DEBUG", "true" if env == "development" else "false")),

            service_name=os.getenv("SERVICE_NAME", "catalog_service"),
            service_host=os.getenv("HOST", "0.0.0.0"),
            service_port=_int(os.getenv("PORT", "8000"), 8000),

            logging=LoggingConfig.from_env(),
            infrastructure=InfraConfig.from_env(),
            collections=CatalogCollectionsConfig.from_env(),
        )
