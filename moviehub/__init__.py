"""MovieHub: movie review catalog with TMDB synchronization."""

__version__ = "1.0.0"
