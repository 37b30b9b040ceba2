"""Built-in format semantics tables."""

from typing import List
from ..models.format_semantics import FormatSemantics
from .json_format import JSON_SEMANTICS
from .csv_format import CSV_SEMANTICS
from .xml_format import XML_SEMANTICS


def builtin_formats() -> List[FormatSemantics]:
    """Return the JSON, CSV and XML semantics records."""
    return [JSON_SEMANTICS, CSV_SEMANTICS, XML_SEMANTICS]


__all__ = ["JSON_SEMANTICS", "CSV_SEMANTICS", "XML_SEMANTICS", "builtin_formats"]
