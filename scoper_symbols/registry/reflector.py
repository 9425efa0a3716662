"""Built-in symbol oracle used by the namespace-prefixing rewriter.

The registry is built once per process, on the first Reflector() call, and
shared by every instance afterwards. Callers that need a specific edition
build their own SymbolRegistry and inject it.
"""
import threading
from typing import Optional

from ..config import get_config
from .stubs_map import load_stubs_map
from .symbol_table import SymbolRegistry

_registry: Optional[SymbolRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> SymbolRegistry:
    """Get or build the process-wide SymbolRegistry.

    Concurrent first calls build it exactly once. A failed build caches
    nothing and re-raises.

    Raises:
        StubsMapError: If the configured reference map is missing or malformed
    """
    global _registry
    if _registry is not None:
        return _registry

    with _registry_lock:
        if _registry is None:
            stubs_map = load_stubs_map(get_config().stubs_map_path)
            _registry = SymbolRegistry.build(stubs_map)
    return _registry


class Reflector:
    """Answers whether a class, function or constant is a PHP built-in."""

    def __init__(self, registry: Optional[SymbolRegistry] = None):
        """Initialize the reflector.

        Args:
            registry: Pre-built registry (defaults to the process-wide one)

        Raises:
            StubsMapError: If the process-wide registry cannot be built
        """
        self.registry = registry if registry is not None else get_registry()

    def is_class_internal(self, name: str) -> bool:
        """Check a class, interface or trait name (exact match)."""
        return self.registry.is_class_internal(name)

    def is_function_internal(self, name: str) -> bool:
        """Check a function name (case-insensitive)."""
        return self.registry.is_function_internal(name)

    def is_constant_internal(self, name: str) -> bool:
        """Check a constant name (exact match)."""
        return self.registry.is_constant_internal(name)
