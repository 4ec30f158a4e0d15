"""Per-user, per-backend preset storage service."""

__version__ = "1.0.0"
