"""Pytest configuration and fixtures."""

import pytest
from treefitter.engines import FormatAwareOperations, TransformationEngine
from treefitter.models import Node, create_message
from treefitter.registry import FormatRegistry
from treefitter.types import NodeKind

USERS = [
    (1, "John Doe", True, "Engineering"),
    (2, "Jane Smith", False, "Marketing"),
    (3, "Bob Wilson", True, "Engineering"),
]


def make_record(name, user):
    """Build a record node holding one user's fields."""
    user_id, user_name, active, department = user
    return Node(kind=NodeKind.RECORD, name=name, children=[
        Node(kind=NodeKind.FIELD, name="id", value=user_id),
        Node(kind=NodeKind.FIELD, name="name", value=user_name),
        Node(kind=NodeKind.FIELD, name="active", value=active),
        Node(kind=NodeKind.FIELD, name="department", value=department),
    ])


@pytest.fixture
def registry():
    """Registry with the built-in formats."""
    return FormatRegistry.with_builtin_formats()


@pytest.fixture
def engine(registry):
    """Transformation engine over the built-in registry."""
    return TransformationEngine(registry)


@pytest.fixture
def operations(engine):
    """Format-aware operations over the built-in registry."""
    return FormatAwareOperations(engine)


@pytest.fixture
def json_users():
    """JSON-convention collection of three user records."""
    return Node(kind=NodeKind.COLLECTION, name="users",
                children=[make_record("user", user) for user in USERS])


@pytest.fixture
def csv_users():
    """CSV-convention dataset of three rows."""
    return Node(kind=NodeKind.COLLECTION, name="dataset",
                children=[make_record("row", user) for user in USERS])


@pytest.fixture
def xml_catalog():
    """XML-convention catalog with attributes, comments and an instruction."""
    def book(book_id, title, year):
        return Node(
            kind=NodeKind.RECORD,
            name="book",
            attributes=[Node(kind=NodeKind.ATTRIBUTES, name="id", value=book_id)],
            children=[
                Node(kind=NodeKind.FIELD, name="title", value=title),
                Node(kind=NodeKind.FIELD, name="year", value=year),
                Node(kind=NodeKind.COMMENT, name="#comment", value="reviewed"),
            ]
        )

    return Node(kind=NodeKind.RECORD, name="catalog", namespace="urn:books", children=[
        Node(kind=NodeKind.INSTRUCTION, name="xml-stylesheet", value="href='style.css'"),
        book(7, "Dune", 1965),
        Node(kind=NodeKind.COMMENT, name="#comment", value="more to come"),
        book(8, "Solaris", 1961),
    ])


@pytest.fixture
def json_message(json_users):
    """Message wrapping the JSON users with existing metadata."""
    return create_message(json_users, metadata={"source": {"type": "fixture"}})


@pytest.fixture
def csv_message(csv_users):
    """Message wrapping the CSV dataset."""
    return create_message(csv_users)
