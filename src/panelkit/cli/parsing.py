"""Input parsing utilities for CLI commands."""

import json
from pathlib import Path
from typing import Any


def parse_value(raw: str) -> Any:
    """Parse a configuration value given on the command line.

    JSON is decoded; anything else is taken as a plain string.

    Examples:
        '["orders", "invoices"]' → ["orders", "invoices"]
        'Purchases' → "Purchases"
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def read_json_file(path: str) -> Any:
    """Read a JSON document from file.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file contains invalid JSON
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with file_path.open("r") as f:
        return json.load(f)
