"""Shared infrastructure: configuration-driven logging, exceptions and database helpers."""
