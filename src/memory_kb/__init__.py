"""memory-kb: a personal knowledge base of linked, typed entries."""

__version__ = "0.1.0"
