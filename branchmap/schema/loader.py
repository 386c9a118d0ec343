"""YAML loading and parsing for repository snapshots."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import SnapshotLoadError, SnapshotValidationError
from .models import RepositorySnapshot


def load_yaml(path: str | Path) -> dict:
    """Load a YAML (or JSON) file and return the raw data.

    Args:
        path: Path to the file.

    Returns:
        The parsed data as a dictionary.

    Raises:
        SnapshotLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SnapshotLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SnapshotLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SnapshotLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise SnapshotLoadError(f"Cannot read file: {e}", str(path)) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SnapshotLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
        )

    return data


def parse_snapshot(path: str | Path) -> RepositorySnapshot:
    """Load and parse a snapshot file.

    Raises:
        SnapshotLoadError: If the file cannot be read or parsed.
        SnapshotValidationError: If the data fails validation.
    """
    data = load_yaml(path)
    return _parse_snapshot_data(data)


def parse_snapshot_from_string(yaml_string: str) -> RepositorySnapshot:
    """Parse a YAML string into a RepositorySnapshot.

    Raises:
        SnapshotLoadError: If the YAML cannot be parsed.
        SnapshotValidationError: If the data fails validation.
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        raise SnapshotLoadError(f"Invalid YAML: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise SnapshotLoadError(f"Expected YAML mapping at root, got {type(data).__name__}")

    return _parse_snapshot_data(data)


def dump_snapshot(snapshot: RepositorySnapshot) -> str:
    """Serialize a snapshot to YAML that parse_snapshot_from_string reads back."""
    data = snapshot.model_dump(mode="json", by_alias=True, exclude_none=True)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def flatten_validation_errors(error: ValidationError) -> list[dict]:
    """Flatten pydantic errors into {loc, msg, type} dictionaries."""
    return [
        {
            "loc": ".".join(str(x) for x in err["loc"]),
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]


def _parse_snapshot_data(data: dict) -> RepositorySnapshot:
    """Parse raw data into a RepositorySnapshot.

    Raises:
        SnapshotValidationError: If the data fails validation.
    """
    try:
        return RepositorySnapshot.model_validate(data)
    except ValidationError as e:
        errors = flatten_validation_errors(e)
        raise SnapshotValidationError(
            f"Snapshot validation failed with {len(errors)} error(s)", errors
        ) from e
