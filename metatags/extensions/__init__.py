"""
Content readers

Public API:
    ContentReader      : abstract base class for all readers
    ExtensionRegistry  : extension name → reader lookup table
    extension_registry : global singleton registry instance
"""

from .base import ContentReader
from .registry import ExtensionRegistry, extension_registry, register_builtin_readers

__all__ = ["ContentReader", "ExtensionRegistry", "extension_registry", "register_builtin_readers"]
