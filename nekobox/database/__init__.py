"""
Database Module

This module provides the declarative base and engine lifecycle helpers.
"""

from nekobox.database.base import Base, ModelBase, metadata

__all__ = ['Base', 'ModelBase', 'metadata']
