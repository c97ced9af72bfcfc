"""
Common utilities package for the Life RPG service.

- auth: bcrypt password hashing and session-bound JWT access tokens
- logger: console and rotating file logging
"""

from app.utils.logger import setup_logger

__all__ = ["setup_logger"]
