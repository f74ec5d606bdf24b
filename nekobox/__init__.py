"""
NekoBox question storage.

Persistence layer for the questions of an anonymous Q&A box: creation,
lookup, cursor pagination, answering, deletion, moderation metadata and
counting.
"""

__version__ = "0.1.0"
