"""
Snapshot loader for work items.

Reads a JSON export of the work-item store (a list of item records, or an
object with an ``items`` list) and converts it to WorkItem snapshots.
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from focus_planner.core.models import WorkItem, work_items_from_records


logger = logging.getLogger(__name__)


def load_work_items(path: Union[str, Path]) -> List[WorkItem]:
    """
    Load work items from a JSON snapshot file.

    Args:
        path: Path to the snapshot file

    Returns:
        Work items in file order

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not valid JSON or has the wrong shape
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Work item snapshot not found: {path}")

    with open(path, 'r') as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(payload, dict):
        payload = payload.get("items")

    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of work items in {path}")

    items = work_items_from_records(payload)
    logger.debug("Loaded %d work items from %s", len(items), path)
    return items
