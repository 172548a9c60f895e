"""Start and stop applications across deployment foundations with lifecycle events."""

__version__ = "0.1.0"

__all__ = ["actions", "controllers", "errors", "events", "managers", "structs"]