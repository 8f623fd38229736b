"""Recording intake - load rrweb event logs from files or parsed JSON."""

import json
from pathlib import Path
from typing import Any

from ..utils.logging import get_logger
from .models import RRWebEvent

logger = get_logger(__name__)


class RecordingFormatError(ValueError):
    """Raised when a recording cannot be read as a list of rrweb events."""


def load_recording(source: str | Path | dict | list) -> list[RRWebEvent]:
    """Load rrweb events from a path, JSON text or parsed object.

    Accepted shapes:
        {"data": {"snapshots": [...]}}
        {"snapshots": [...]}
        {"events": [...]}
        [...]

    Args:
        source: File path, JSON string, dict or list

    Returns:
        Ordered list of RRWebEvent

    Raises:
        RecordingFormatError: If the input is not valid JSON or has an unsupported shape
    """
    if isinstance(source, Path):
        payload = _read_json_file(source)
    elif isinstance(source, str):
        payload = _parse_json_text(source)
    else:
        payload = source

    raw_events = _extract_events(payload)

    events = []
    for index, entry in enumerate(raw_events):
        if not isinstance(entry, dict):
            raise RecordingFormatError(
                f"Event {index} is a {type(entry).__name__}, expected an object"
            )
        events.append(RRWebEvent.from_dict(entry))

    logger.debug("Recording loaded", event_count=len(events))
    return events


def _read_json_file(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise RecordingFormatError(f"Cannot read recording {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RecordingFormatError(f"Recording {path} is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise RecordingFormatError(f"Recording {path} is not UTF-8 text: {e}") from e


def _parse_json_text(text: str) -> Any:
    stripped = text.lstrip()
    if stripped.startswith(("{", "[")):
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise RecordingFormatError(f"Recording is not valid JSON: {e}") from e
    # Anything else is treated as a path
    return _read_json_file(Path(text))


def _extract_events(payload: Any) -> list:
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict) and isinstance(data.get("snapshots"), list):
            return data["snapshots"]
        for key in ("snapshots", "events"):
            if isinstance(payload.get(key), list):
                return payload[key]

    raise RecordingFormatError(
        "Unsupported recording shape: expected a list of events or an object "
        "with data.snapshots, snapshots or events"
    )
