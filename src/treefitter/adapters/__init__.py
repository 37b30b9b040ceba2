"""Adapters between external data and node trees."""

from .object_adapter import ObjectAdapter

__all__ = ["ObjectAdapter"]
