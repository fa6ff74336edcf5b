"""Upload storage adapters - Transient local files."""

from .local import LocalUploadStore, UploadPolicy

__all__ = ["LocalUploadStore", "UploadPolicy"]
