"""
Payload Files
=============

Reads saved JSON payloads (e.g. a NOAA product or a DONKI response dumped
to disk) for the command line.
"""

import json
from pathlib import Path


def load_payload(path) -> object:
    """
    Load a JSON payload from disk.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not valid JSON
    """
    path = Path(path)
    with open(path, encoding='utf-8') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: not valid JSON ({e})") from e
