"""Reflection of exposed classes."""

from exposed_symbols.reflect.reflector import ReflectionResult, Reflector, is_exposed

__all__ = ["ReflectionResult", "Reflector", "is_exposed"]
