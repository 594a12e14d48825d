#!/usr/bin/env python3
"""Modular configuration system for the photo catalog

Configuration hierarchy:
- infra_config: MongoDB document store and NATS event bus endpoints
- logging_config: Logging configuration
- catalog_config: Service settings and collection names, combining the above
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .infra_config import InfraConfig
from .catalog_config import CatalogConfig, CatalogCollectionsConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = CatalogConfig.from_env()

def get_settings() -> CatalogConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> CatalogConfig:
    """Reload settings from environment"""
    global settings
    settings = CatalogConfig.from_env()
    return settings

__all__ = [
    # Main config
    'CatalogConfig',
    'get_settings',
    'reload_settings',
    'settings',
    # Sub-configs
    'LoggingConfig',
    'InfraConfig',
    'CatalogCollectionsConfig',
]
