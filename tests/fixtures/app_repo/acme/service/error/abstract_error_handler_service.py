from abc import abstractmethod

from exposed_symbols.contract import ExposeClass, ExposeClassMethods


class AbstractErrorHandlerService(ExposeClass, ExposeClassMethods):
    """Common contract of the error handlers."""

    @abstractmethod
    def handle(self, error: Exception) -> bool:
        """Return True when ``error`` was handled."""
