"""Test configuration for fitness_users.

The environment is prepared before the application package is imported so
the module-level configuration resolves to an in-memory test database.
"""

import os

os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from tests.fixtures import *  # noqa: E402,F401,F403
