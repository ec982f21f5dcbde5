#!/usr/bin/env python3
"""Modular configuration system for the laundry order engine

Configuration hierarchy:
- logging_config: Logging configuration
- laundry_config: Tracking codes, view timings, persistence stub
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .laundry_config import LaundryConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)


def get_logging_config() -> LoggingConfig:
    """Logging settings for the current environment"""
    return LoggingConfig.from_env()


def get_laundry_config() -> LaundryConfig:
    """Order engine settings for the current environment"""
    return LaundryConfig.from_env()


__all__ = [
    "LoggingConfig",
    "LaundryConfig",
    "get_logging_config",
    "get_laundry_config",
]
