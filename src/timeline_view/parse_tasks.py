from __future__ import annotations

import datetime as _dt
import logging
from typing import Any, Iterable

import yaml

from .timeline_models import UNASSIGNED_OWNER, ColumnMapping, GroupedTasks, Task

logger = logging.getLogger(__name__)

UNTITLED_TASK = "Untitled Task"
DEFAULT_DURATION_DAYS = 7

# Sentinel distinguishing "column absent" from "value could not be parsed".
_INVALID = object()


class TaskSourceError(Exception):
    """Raised when a list export cannot be read as a sequence of items."""


def load_items(path: str) -> list[dict[str, Any]]:
    """
    Load exported list items from a YAML or JSON file.

    Accepts a bare list of item mappings, or a mapping holding the list under
    `value` (REST response shape) or `items`.
    """

    with open(path, "r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)

    if isinstance(raw, dict):
        for key in ("value", "items"):
            if key in raw:
                raw = raw[key]
                break
        else:
            raise TaskSourceError(f"{path}: expected a list of items or a mapping with 'value' or 'items'")

    if raw is None:
        return []
    if not isinstance(raw, list):
        raise TaskSourceError(f"{path}: expected a list of items")

    items: list[dict[str, Any]] = []
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            raise TaskSourceError(f"{path}: item[{idx}] is not a mapping")
        items.append(item)
    return items


def items_to_tasks(
    items: Iterable[dict[str, Any]],
    columns: ColumnMapping,
    today: _dt.date | None = None,
    since: _dt.date | None = None,
) -> list[Task]:
    """
    Map raw list items to tasks using the configured column names.

    - Missing title -> "Untitled Task"; missing owner -> "Unassigned".
    - Missing start -> today; missing end -> today plus a week.
    - Unparseable dates leave the task undated so layout skips it.
    - With `since`, tasks starting before that day are dropped.
    """

    today = today or _dt.date.today()
    tasks: list[Task] = []
    for item in items:
        task = _item_to_task(item, columns, today)
        if since is not None and task.is_dated and task.start < since:
            continue
        tasks.append(task)
    return tasks


def group_tasks(tasks: Iterable[Task]) -> GroupedTasks:
    """Group tasks by owner, each group sorted by start date (undated last)."""

    grouped: GroupedTasks = {}
    for task in tasks:
        grouped.setdefault(task.owner, []).append(task)
    for owner_tasks in grouped.values():
        owner_tasks.sort(key=lambda t: (not t.is_dated, t.start if t.is_dated else _dt.date.min))
    return grouped


def load_tasks(
    path: str,
    columns: ColumnMapping,
    today: _dt.date | None = None,
    since: _dt.date | None = None,
) -> GroupedTasks:
    """Read a list export and return tasks grouped by owner."""

    tasks = items_to_tasks(load_items(path), columns, today=today, since=since)
    grouped = group_tasks(tasks)
    logger.info("Loaded %d tasks for %d owners from %s", len(tasks), len(grouped), path)
    return grouped


def _item_to_task(item: dict[str, Any], columns: ColumnMapping, today: _dt.date) -> Task:
    item_id = item.get("ID", item.get("Id"))
    task_id = str(item_id) if item_id is not None else "0"
    name = item.get(columns.title) or UNTITLED_TASK

    start = _read_date(item, columns.start, task_id)
    end = _read_date(item, columns.end, task_id)
    if start is None:
        start = today
    if end is None:
        end = today + _dt.timedelta(days=DEFAULT_DURATION_DAYS)

    return Task(
        id=task_id,
        name=str(name),
        owner=_owner_name(item.get(columns.owner) if columns.owner else None),
        start=None if start is _INVALID else start,
        end=None if end is _INVALID else end,
        progress=0.0,
        custom_class="",
    )


def _owner_name(value: Any) -> str:
    if not value:
        return UNASSIGNED_OWNER
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and value.get("Title"):
        return str(value["Title"])
    return str(value)


def _read_date(item: dict[str, Any], column: str, task_id: str) -> Any:
    """Return a date, None when the column is empty, or _INVALID when unparseable."""

    value = item.get(column)
    if value is None or value == "":
        return None
    parsed = parse_day(value)
    if parsed is None:
        logger.warning("Task %s: could not parse %s value %r", task_id, column, value)
        return _INVALID
    return parsed


def parse_day(value: Any) -> _dt.date | None:
    """
    Normalize a list date value to its local calendar day.

    Timezone-aware timestamps are converted to local time first, so an item
    stored as UTC midnight lands on the day the user's clock showed.
    """

    if isinstance(value, _dt.datetime):
        moment = value
    elif isinstance(value, _dt.date):
        return value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = _dt.datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()
