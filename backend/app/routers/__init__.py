"""API routers."""

from . import leads

__all__ = ["leads"]
