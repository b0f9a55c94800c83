"""Helper functions callable from templates of every family."""

from pagewright.helpers.registry import HelperRegistry

__all__ = ["HelperRegistry"]
