"""
JSON file helpers shared by the lookup builder and the writers.

Files are UTF-8, pretty-printed with a two-space indent, keys in insertion
order so an unchanged input produces byte-identical output.
"""

import json
import logging
from pathlib import Path
from typing import Any

from nvc_bundle.constants import JSON_INDENT

logger = logging.getLogger(__name__)


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=JSON_INDENT, ensure_ascii=False)


def write_json(path: Path, data: Any) -> Path:
    """Write *data* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(data), encoding="utf-8")
    logger.debug("Wrote %s", path)
    return path


def read_json(path: Path) -> Any:
    """Read a JSON document. Raises OSError or json.JSONDecodeError."""
    return json.loads(path.read_text(encoding="utf-8"))
