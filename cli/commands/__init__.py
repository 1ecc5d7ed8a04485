"""CLI commands."""
from .footprint import footprint
from .plan import plan

__all__ = ["footprint", "plan"]
