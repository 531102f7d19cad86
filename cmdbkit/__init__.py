"""Domain objects, validation rules and sync helpers for a model-driven configuration management database."""

__version__ = "0.1.0"

__all__ = [
    "models",
    "dictpath",
    "pool",
    "naming",
    "validation",
    "ldapusers",
    "domains",
    "syncing",
]