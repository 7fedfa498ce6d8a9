"""Build-time discovery and purpose index of exposed classes and methods."""
