"""Infrastructure port definitions."""

from .system import IFileSystem, IRunContext

__all__ = ["IFileSystem", "IRunContext"]
