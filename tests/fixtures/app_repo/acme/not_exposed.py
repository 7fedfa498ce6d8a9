class NotExposed:
    """A plain class; resolved but never indexed."""
