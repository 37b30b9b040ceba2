"""Registry of format semantics records."""

import logging
from typing import Dict, FrozenSet, Iterable, Optional
from .models.format_semantics import FormatSemantics
from .types import FormatType, NotRegisteredError


class FormatRegistry:
    """
    Mapping from format identifier to its semantics record.

    A registry is constructed explicitly and handed to the transformation
    engine and the operations layer. It is meant to be populated during setup
    and read-only afterwards; concurrent registration and lookup need an
    external lock.
    """

    def __init__(self, formats: Optional[Iterable[FormatSemantics]] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the registry.

        Args:
            formats: Optional semantics records to register immediately
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._formats: Dict[FormatType, FormatSemantics] = {}
        for semantics in formats or []:
            self.register(semantics)

    @classmethod
    def with_builtin_formats(cls, logger: Optional[logging.Logger] = None) -> 'FormatRegistry':
        """Create a new registry holding the JSON, CSV and XML records."""
        from .formats import builtin_formats
        return cls(builtin_formats(), logger=logger)

    def register(self, semantics: FormatSemantics) -> None:
        """Insert or overwrite the record for ``semantics.format``."""
        if semantics.format in self._formats:
            self.logger.info(f"Replacing semantics for format: {semantics.format.value}")
        else:
            self.logger.info(f"Registered semantics for format: {semantics.format.value}")
        self._formats[semantics.format] = semantics

    def unregister(self, format: FormatType) -> FormatSemantics:
        """
        Remove and return the record for a format.

        Raises:
            NotRegisteredError: If the format is not registered
        """
        if format not in self._formats:
            raise NotRegisteredError(format)
        return self._formats.pop(format)

    def lookup(self, format: FormatType) -> FormatSemantics:
        """
        Look up the semantics record for a format.

        Args:
            format: Format identifier

        Returns:
            The registered FormatSemantics

        Raises:
            NotRegisteredError: If the format is not registered
        """
        semantics = self._formats.get(format)
        if semantics is None:
            raise NotRegisteredError(format)
        return semantics

    def supported_formats(self) -> FrozenSet[FormatType]:
        """Return the registered format identifiers."""
        return frozenset(self._formats)

    def __contains__(self, format: object) -> bool:
        return format in self._formats

    def __len__(self) -> int:
        return len(self._formats)
