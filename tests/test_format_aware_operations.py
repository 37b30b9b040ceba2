"""Tests for format-aware operations and the query builder."""

import pytest
from treefitter.engines import FormatAwareQuery
from treefitter.models import Node, create_message
from treefitter.types import FormatType, NodeKind, NotRegisteredError

JSON = FormatType.JSON


def field(item, key):
    child = item.find_child(key)
    return child.value if child is not None else None


def is_active(item):
    return field(item, "active") is True


class TestReadOperations:
    """Tests for operations returning values."""

    def test_find_items(self, operations, json_message):
        """Test locating items by format."""
        assert len(operations.find_items(json_message, JSON)) == 3
        # JSON items are named "user", so CSV sees no rows
        assert operations.find_items(json_message, FormatType.CSV) == []

    def test_find(self, operations, json_message):
        """Test finding all matching items."""
        found = operations.find(json_message, is_active, JSON)

        assert [field(item, "id") for item in found] == [1, 3]

    def test_map(self, operations, json_message):
        """Test mapping items to values."""
        names = operations.map(json_message, lambda item: field(item, "name"), JSON)

        assert names == ["John Doe", "Jane Smith", "Bob Wilson"]

    def test_reduce_passes_index(self, operations, json_message):
        """Test folding with accumulator, item and index."""
        seen = operations.reduce(
            json_message,
            lambda acc, item, index: acc + [(index, field(item, "id"))],
            [],
            JSON
        )

        assert seen == [(0, 1), (1, 2), (2, 3)]

    def test_find_first(self, operations, json_message):
        """Test finding the first match or None."""
        first = operations.find_first(json_message, lambda item: field(item, "department") == "Engineering", JSON)

        assert field(first, "name") == "John Doe"
        assert operations.find_first(json_message, lambda item: False, JSON) is None

    def test_some_and_every(self, operations, json_message):
        """Test existential and universal checks."""
        assert operations.some(json_message, is_active, JSON)
        assert not operations.every(json_message, is_active, JSON)
        assert operations.every(json_message, lambda item: field(item, "id") > 0, JSON)

    def test_every_on_empty_is_true(self, operations):
        """Test that every holds vacuously with no items."""
        message = create_message(Node(kind=NodeKind.COLLECTION, name="empty"))

        assert operations.every(message, lambda item: False, JSON)
        assert not operations.some(message, lambda item: True, JSON)

    def test_count(self, operations, json_message):
        """Test counting with and without a predicate."""
        assert operations.count(json_message, JSON) == 3
        assert operations.count(json_message, JSON, is_active) == 2

    def test_count_agrees_with_filter(self, operations, json_message):
        """Test that counting matches the size of the filtered result."""
        filtered = operations.filter(json_message, is_active, JSON)

        assert operations.count(filtered, JSON) == operations.count(json_message, JSON, is_active)

    def test_group_by(self, operations, json_message):
        """Test grouping keeps first-seen key order and item order."""
        groups = operations.group_by(json_message, lambda item: field(item, "department"), JSON)

        assert list(groups) == ["Engineering", "Marketing"]
        assert [field(item, "id") for item in groups["Engineering"]] == [1, 3]
        assert sum(len(items) for items in groups.values()) == 3

    def test_extract_value_by_format(self, operations, xml_catalog):
        """Test value extraction with format rules."""
        book = xml_catalog.children[1]

        assert operations.extract_value(book, "id", FormatType.XML) == 7
        assert operations.extract_value(book, "id", JSON) is None

    def test_navigate_path_by_format(self, operations, csv_users):
        """Test path navigation with format rules."""
        assert operations.navigate_path(csv_users, ["1", "name"], FormatType.CSV).value == "Jane Smith"
        assert operations.navigate_path(csv_users, ["1", "name"], JSON) is None

    def test_unregistered_format(self, operations, json_message):
        """Test that operations on an unknown format raise."""
        with pytest.raises(NotRegisteredError):
            operations.count(json_message, FormatType.YAML)


class TestStructuralOperations:
    """Tests for operations returning messages."""

    def test_filter(self, operations, json_message):
        """Test filtering items and recording processing metadata."""
        result = operations.filter(json_message, is_active, JSON)

        assert [field(item, "id") for item in result.data.children] == [1, 3]
        processing = result.get_metadata("processing")
        assert processing["operation"] == "filter"
        assert processing["originalCount"] == 3
        assert processing["filteredCount"] == 2
        assert "timestamp" in processing
        assert result.get_metadata("source") == {"type": "fixture"}

    def test_filter_leaves_input_untouched(self, operations, json_message):
        """Test that the input message is not modified."""
        before = json_message.data.to_dict()

        operations.filter(json_message, is_active, JSON)

        assert json_message.data.to_dict() == before
        assert "processing" not in json_message.metadata

    def test_transform(self, operations, json_message):
        """Test replacing items with transformed nodes."""
        def uppercase_name(item):
            children = [child.evolve(value=child.value.upper()) if child.name == "name" else child
                        for child in item.children]
            return item.evolve(children=children)

        result = operations.transform(json_message, uppercase_name, JSON)

        assert operations.map(result, lambda item: field(item, "name"), JSON) == [
            "JOHN DOE", "JANE SMITH", "BOB WILSON"
        ]
        assert result.get_metadata("processing")["itemCount"] == 3

    def test_sort_with_comparator(self, operations, json_message):
        """Test sorting with a comparator."""
        result = operations.sort(
            json_message, lambda a, b: field(b, "id") - field(a, "id"), JSON
        )

        assert operations.map(result, lambda item: field(item, "id"), JSON) == [3, 2, 1]
        assert result.get_metadata("processing")["operation"] == "sort"

    def test_sort_is_stable(self, operations, json_message):
        """Test that equal keys keep their relative order."""
        result = operations.sort(
            json_message,
            lambda a, b: (field(a, "department") > field(b, "department")) - (field(a, "department") < field(b, "department")),
            JSON
        )

        assert operations.map(result, lambda item: field(item, "id"), JSON) == [1, 3, 2]

    def test_sort_by(self, operations, json_message):
        """Test sorting by a key function."""
        result = operations.sort_by(json_message, lambda item: field(item, "name"), JSON)
        reverse = operations.sort_by(json_message, lambda item: field(item, "id"), JSON, reverse=True)

        assert operations.map(result, lambda item: field(item, "name"), JSON) == [
            "Bob Wilson", "Jane Smith", "John Doe"
        ]
        assert operations.map(reverse, lambda item: field(item, "id"), JSON) == [3, 2, 1]

    def test_take(self, operations, json_message):
        """Test keeping a prefix of the items."""
        result = operations.take(json_message, 2, JSON)

        assert operations.count(result, JSON) == 2
        processing = result.get_metadata("processing")
        assert processing["originalCount"] == 3
        assert processing["takenCount"] == 2

    def test_skip(self, operations, json_message):
        """Test dropping a prefix of the items."""
        result = operations.skip(json_message, 2, JSON)

        assert operations.map(result, lambda item: field(item, "id"), JSON) == [3]
        processing = result.get_metadata("processing")
        assert processing["skippedCount"] == 2
        assert processing["remainingCount"] == 1

    @pytest.mark.parametrize("count", [0, 1, 3, 5])
    def test_take_and_skip_partition_items(self, operations, json_message, count):
        """Test that take and skip split the items without overlap."""
        taken = operations.find_items(operations.take(json_message, count, JSON), JSON)
        rest = operations.find_items(operations.skip(json_message, count, JSON), JSON)

        assert taken + rest == operations.find_items(json_message, JSON)

    def test_skip_past_end(self, operations, json_message):
        """Test that skipping more than available reports the requested count."""
        processing = operations.skip(json_message, 5, JSON).get_metadata("processing")

        assert processing["skippedCount"] == 5
        assert processing["remainingCount"] == 0

    def test_negative_counts_raise(self, operations, json_message):
        """Test that negative take and skip counts are rejected."""
        with pytest.raises(ValueError):
            operations.take(json_message, -1, JSON)
        with pytest.raises(ValueError):
            operations.skip(json_message, -1, JSON)

    def test_processing_namespace_is_replaced(self, operations, json_message):
        """Test that each structural operation overwrites processing metadata."""
        result = operations.take(operations.filter(json_message, is_active, JSON), 1, JSON)

        processing = result.get_metadata("processing")
        assert processing["operation"] == "take"
        assert "filteredCount" not in processing

    def test_csv_rebuild_renames_rows(self, operations, csv_message):
        """Test that CSV results stay discoverable as rows."""
        result = operations.transform(csv_message, lambda row: row.evolve(name="record"), FormatType.CSV)

        assert [child.name for child in result.data.children] == ["row"] * 3
        assert operations.count(result, FormatType.CSV) == 3

    def test_xml_filter_keeps_only_items(self, operations, xml_catalog):
        """Test that rebuilding an XML element keeps only the chosen elements."""
        message = create_message(xml_catalog)

        result = operations.filter(
            message, lambda book: operations.extract_value(book, "year", FormatType.XML) > 1962, FormatType.XML
        )

        assert [child.name for child in result.data.children] == ["book"]
        assert result.data.namespace == "urn:books"


class TestFormatAwareQuery:
    """Tests for the chainable query builder."""

    def test_query_returns_builder(self, operations, json_message):
        """Test starting a query."""
        builder = operations.query(json_message, JSON)

        assert isinstance(builder, FormatAwareQuery)
        assert builder.execute() is json_message

    def test_chain(self, operations, json_message):
        """Test chaining structural calls before executing."""
        result = (operations.query(json_message, JSON)
                  .filter(is_active)
                  .sort_by(lambda item: field(item, "name"))
                  .take(1)
                  .execute())

        assert operations.map(result, lambda item: field(item, "name"), JSON) == ["Bob Wilson"]
        assert result.get_metadata("processing")["operation"] == "take"

    def test_chain_matches_individual_calls(self, operations, json_message):
        """Test that a chain equals the same calls made one by one."""
        by_id = lambda a, b: field(b, "id") - field(a, "id")
        chained = operations.query(json_message, JSON).sort(by_id).skip(1).execute()
        manual = operations.skip(operations.sort(json_message, by_id, JSON), 1, JSON)

        assert chained.data.to_dict() == manual.data.to_dict()

    def test_terminal_calls(self, operations, json_message):
        """Test map, count, group_by and find_first on a builder."""
        builder = operations.query(json_message, JSON).filter(is_active)

        assert builder.count() == 2
        assert builder.count(lambda item: field(item, "id") == 3) == 1
        assert builder.map(lambda item: field(item, "id")) == [1, 3]
        assert list(builder.group_by(lambda item: field(item, "department"))) == ["Engineering"]
        assert field(builder.find_first(lambda item: field(item, "id") == 3), "name") == "Bob Wilson"

    def test_transform_in_chain(self, operations, csv_message):
        """Test transforming rows in a CSV query."""
        result = (operations.query(csv_message, FormatType.CSV)
                  .transform(lambda row: row.evolve(children=row.children[:1]))
                  .execute())

        assert all(len(row.children) == 1 for row in result.data.children)
