#!/usr/bin/env python3
"""
Example usage of treefitter.

This script builds the same user list under JSON and CSV conventions, runs
the same queries over both, and converts between JSON, CSV and XML.
"""

import json
from treefitter import (
    FormatAwareOperations,
    FormatType,
    ObjectAdapter,
    OperationProfiler,
    TransformationEngine,
    create_message,
)

USERS = [
    {"id": 1, "name": "John Doe", "email": "john@example.com", "active": True, "department": "Engineering"},
    {"id": 2, "name": "Jane Smith", "email": "jane@example.com", "active": False, "department": "Marketing"},
    {"id": 3, "name": "Bob Wilson", "email": "bob@example.com", "active": True, "department": "Engineering"},
]


def main():
    """Main example function."""
    print("treefitter Example")
    print("=" * 50)

    profiler = OperationProfiler()
    engine = TransformationEngine(profiler=profiler)
    operations = FormatAwareOperations(engine)

    json_message = create_message(
        ObjectAdapter(item_name="user").from_object(USERS, name="users"),
        metadata={"source": {"type": "example"}}
    )
    csv_message = create_message(ObjectAdapter().csv_from_rows(USERS))

    # The same query works for both formats; only the format argument differs
    for message, format in ((json_message, FormatType.JSON), (csv_message, FormatType.CSV)):
        active = (operations.query(message, format)
                  .filter(lambda item: operations.extract_value(item, "active", format) is True)
                  .sort_by(lambda item: operations.extract_value(item, "name", format))
                  .execute())
        names = operations.map(active, lambda item: operations.extract_value(item, "name", format), format)
        print(f"\n{format.value.upper()} active users: {', '.join(names)}")
        processing = active.get_metadata("processing")
        print(f"   last operation: {processing['operation']} ({processing['itemCount']} items)")

        groups = operations.group_by(
            message, lambda item: str(operations.extract_value(item, "department", format)), format
        )
        for department, members in groups.items():
            print(f"   {department}: {len(members)} users")

    print("\nCompatibility:")
    for source in (FormatType.JSON, FormatType.CSV, FormatType.XML):
        for target in (FormatType.JSON, FormatType.CSV, FormatType.XML):
            if source != target:
                status = "✅" if engine.is_compatible(source, target) else "❌"
                print(f"   {status} {source.value} → {target.value}")

    as_xml = engine.convert_envelope(csv_message, FormatType.CSV, FormatType.XML)
    print(f"\nCSV converted to XML: root is a {as_xml.data.kind.value}")
    print(f"   transformation: {json.dumps(as_xml.get_metadata('transformation'))}")
    first_row = operations.navigate_path(as_xml.data, ["row", "email"], FormatType.XML)
    print(f"   first email: {first_row.value if first_row is not None else 'N/A'}")

    print(f"\n{profiler.format_summary()}")


if __name__ == "__main__":
    main()
