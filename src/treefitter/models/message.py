"""Message envelope and execution context."""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TYPE_CHECKING
from .node import Node

if TYPE_CHECKING:
    from ..config import Configuration


def _copy_metadata(metadata: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Copy each namespace so messages never share a namespace dict."""
    return {namespace: dict(values) for namespace, values in metadata.items()}


@dataclass
class Context:
    """Execution context carried alongside a message and passed through untouched."""
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("treefitter"))
    config: Optional['Configuration'] = None


@dataclass
class Message:
    """
    Envelope wrapping a node payload.

    ``metadata`` is a namespaced mapping (namespace -> key/value pairs).
    Messages are never mutated by this package; every operation returns a
    new message.
    """

    data: Node
    metadata: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    context: Optional[Context] = None

    def with_data(self, data: Node) -> 'Message':
        """Return a copy carrying a different payload."""
        return dataclasses.replace(self, data=data, metadata=_copy_metadata(self.metadata))

    def with_metadata(self, namespace: str, values: Dict[str, Any]) -> 'Message':
        """Return a copy with one metadata namespace set, keeping all others."""
        metadata = _copy_metadata(self.metadata)
        metadata[namespace] = dict(values)
        return dataclasses.replace(self, metadata=metadata)

    def get_metadata(self, namespace: str) -> Dict[str, Any]:
        """Return a metadata namespace, or an empty dict when absent."""
        return self.metadata.get(namespace, {})


def create_message(data: Node, context: Optional[Context] = None,
                   metadata: Optional[Dict[str, Dict[str, Any]]] = None) -> Message:
    """
    Create a message from a node payload.

    Args:
        data: Root node of the payload
        context: Optional execution context
        metadata: Optional initial metadata namespaces

    Returns:
        The new Message
    """
    return Message(
        data=data,
        metadata=_copy_metadata(metadata or {}),
        context=context
    )
