"""Code quality dashboard: one status page over many tool reports."""

__version__ = "0.1.0"
