"""Query layer over the exposed symbols artifact."""

from exposed_symbols.symbols.manager import ExposedSymbolsManager
from exposed_symbols.symbols.models import AbstractSymbol, ClassSymbol, MethodSymbol

__all__ = ["AbstractSymbol", "ClassSymbol", "ExposedSymbolsManager", "MethodSymbol"]
