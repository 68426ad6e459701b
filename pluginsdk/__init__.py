"""Terminal UI primitives, component results, template data and reattach helpers for plugins."""

__version__ = "0.1.0"