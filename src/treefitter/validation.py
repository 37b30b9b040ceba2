"""Optional invariant checks for node trees."""

import logging
from typing import List, Optional
from .models.node import CONTAINER_KINDS, Node
from .types import ErrorType, ValidationError, ValidationResult
from .utils.tree_utils import has_child_cycle, iter_nodes, max_depth

_PRIMITIVE_TYPES = (str, int, float, bool)


class NodeValidator:
    """
    Checks the kind/value shape expectations the node model leaves to callers.

    Conversion and query operations never call the validator; they degrade
    gracefully on malformed trees. Adapters and tests use it at the boundary.
    """

    def __init__(self, max_depth_warning: int = 64, logger: Optional[logging.Logger] = None):
        """
        Initialize the validator.

        Args:
            max_depth_warning: Depth above which a warning is emitted
            logger: Optional logger instance
        """
        self.max_depth_warning = max_depth_warning
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, node: Node) -> ValidationResult:
        """
        Validate a node tree.

        Args:
            node: Root of the tree to validate

        Returns:
            ValidationResult with validation details
        """
        errors: List[ValidationError] = []
        warnings: List[str] = []

        if has_child_cycle(node):
            errors.append(ValidationError(
                type=ErrorType.VALIDATION,
                message="Node is its own descendant through children",
                location=node.name
            ))

        for current in iter_nodes(node):
            value = current.value
            if value is not None and not isinstance(value, _PRIMITIVE_TYPES):
                errors.append(ValidationError(
                    type=ErrorType.VALIDATION,
                    message=f"Value must be a string, number, boolean or None, got {type(value).__name__}",
                    location=current.name
                ))
            elif value is not None and current.kind in CONTAINER_KINDS:
                warnings.append(f"{current.kind.value} node '{current.name}' carries a value")

        depth = max_depth(node)
        if depth > self.max_depth_warning:
            warnings.append(f"Deep nesting detected (depth: {depth}). This may impact performance.")

        if errors:
            self.logger.debug(f"Validation of '{node.name}' failed with {len(errors)} errors")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
