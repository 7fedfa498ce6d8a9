"""Discovery of exposed symbols."""

from exposed_symbols.discovery.context import ExposedSymbolsContext
from exposed_symbols.discovery.driver import DiscoveryDriver, DiscoveryResult

__all__ = ["DiscoveryDriver", "DiscoveryResult", "ExposedSymbolsContext"]
