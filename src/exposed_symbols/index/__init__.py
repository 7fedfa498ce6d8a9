"""Purpose trees and the exposed symbols index container."""

from exposed_symbols.index.exposed import ExposedSymbolsIndex
from exposed_symbols.index.purposes import PurposeIndex, search_tree

__all__ = ["ExposedSymbolsIndex", "PurposeIndex", "search_tree"]
