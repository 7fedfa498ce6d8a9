"""Configuration and classification rules for exposed symbols discovery."""

from exposed_symbols.rules.config import ExposeConfig, ModuleDef, load_config
from exposed_symbols.rules.modules import classify_module

__all__ = ["ExposeConfig", "ModuleDef", "classify_module", "load_config"]
