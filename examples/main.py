#!/usr/bin/env python3
"""
Example script demonstrating basic usage of the json2zig library.

Run from the project root after installing the package:
    python examples/main.py data/records.json
"""

from json2zig import JsonSource, RenderOptions, TypeBuilder, render_declaration
import sys

def main():
    file_path = "data/records.json"
    if len(sys.argv) > 1:
        file_path = sys.argv[1]

    print(f"Loading {file_path}...")
    source = JsonSource(file_path)

    # Merge every element of the top-level array into one record type
    parsed = TypeBuilder().parse_many(source.items())
    print(f"Merged records with {parsed.merges} unifications")

    # Use std.json's dynamic value for conflicting fields
    options = RenderOptions(string="[]const u8", any="std.json.Value")
    print(render_declaration(parsed.root, "Record", options))


if __name__ == '__main__':
    main()
