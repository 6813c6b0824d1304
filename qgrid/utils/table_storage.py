"""Value table persistence."""

from pathlib import Path
from typing import Union

from ..domain.types import ValueTableLoadError
from ..domain.value_table import ValueTable

PathLike = Union[str, Path]


def save_value_table(table: ValueTable, path: PathLike) -> str:
    """Write a value table to ``path`` and return the path written."""
    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.write(table.to_bytes())
    return str(path)


def load_value_table(path: PathLike) -> ValueTable:
    """
    Read a value table from ``path``.

    Raises:
        ValueTableLoadError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ValueTableLoadError(f"Failed to load Q-table from {path}: {e}") from e

    try:
        return ValueTable.from_bytes(data)
    except ValueTableLoadError as e:
        raise ValueTableLoadError(f"Failed to load Q-table from {path}: {e}") from e


def load_value_table_for(path: PathLike, width: int, height: int) -> ValueTable:
    """Load a value table and require it to match a ``width`` x ``height`` grid."""
    table = load_value_table(path)
    table.ensure_matches(width, height)
    return table
