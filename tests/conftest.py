"""Test configuration for the product catalog.

Environment defaults are set before any ``src.catalog`` import so the
module-level configuration picks them up.
"""

import os

os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("PRODUCT_REPOSITORY_BACKEND", "sql")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from tests.fixtures import *  # noqa: E402,F401,F403
