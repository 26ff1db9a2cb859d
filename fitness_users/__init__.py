"""Fitness Users: a user-management HTTP service."""

__version__ = "0.1.0"
