"""Client de bureau pour publier et lister des posts."""

__version__ = "0.1.0"
