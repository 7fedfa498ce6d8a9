from exposed_symbols.contract import MethodFilter

from .abstract_error_handler_service import AbstractErrorHandlerService


class LinearChainErrorHandlerService(AbstractErrorHandlerService):
    """Passes an error along a chain of handlers.

    @display "Linear Chain"
    """

    def __init__(self):
        self._handlers = []

    @classmethod
    def get_purposes(cls):
        return ["ERRORHANDLER"]

    @classmethod
    def get_method_filter_options(cls):
        return MethodFilter.PUBLIC | MethodFilter.EXCLUDE_MAGIC

    def add_handler(self, handler: AbstractErrorHandlerService) -> None:
        """@purpose ERRORHANDLER.CHAIN.ADD"""
        self._handlers.append(handler)

    def handle(self, error: Exception) -> bool:
        return any(handler.handle(error) for handler in self._handlers)

    def _first(self):
        return self._handlers[0] if self._handlers else None
