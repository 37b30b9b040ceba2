"""Conversion and query engines."""

from .transformation_engine import TransformationEngine
from .format_aware_operations import FormatAwareOperations
from .query import FormatAwareQuery

__all__ = ["TransformationEngine", "FormatAwareOperations", "FormatAwareQuery"]
