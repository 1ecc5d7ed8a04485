"""Command line interface for the coverage path planner."""
from .main import main

__all__ = ["main"]
