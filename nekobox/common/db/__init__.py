"""
Database Module

This package provides database connection settings, session management and
pagination helpers shared by the repositories.
"""

from nekobox.common.db.connection import get_database_settings
from nekobox.common.db.cursor import Cursor
from nekobox.common.db.session import (
    create_engine,
    create_session_factory,
    get_session,
)

__all__ = [
    'get_database_settings',
    'Cursor',
    'create_engine',
    'create_session_factory',
    'get_session',
]
