"""Load the historical event catalog."""
import json
import logging
from pathlib import Path

from chronoquest.models import Era, Difficulty, HistoricalEvent

logger = logging.getLogger(__name__)

CONTENT_DIR = Path(__file__).parent / "content"
DEFAULT_EVENTS_FILE = CONTENT_DIR / "events.json"


class CatalogError(ValueError):
    """Raised when an event file cannot be turned into a catalog."""


def read_event_records(file_path) -> list[dict]:
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
    elif suffix in (".yaml", ".yml"):
        import yaml
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    else:
        raise CatalogError(f"Unsupported catalog format: {path.name}")
    if isinstance(data, dict):
        data = data.get("events", [])
    if not isinstance(data, list):
        raise CatalogError(f"{path.name} does not contain a list of events")
    return data


def event_from_record(record: dict) -> HistoricalEvent:
    try:
        return HistoricalEvent(
            id=int(record["id"]),
            name=record["name"],
            era=Era(record["era"]),
            year=int(record["year"]),
            location=record.get("location", ""),
            difficulty=Difficulty(record.get("difficulty", "medium")),
            description=record.get("description", ""),
            fun_fact=record.get("fun_fact", ""),
            hints=tuple(record.get("hints") or ()),
            accepted_answers=tuple(record.get("accepted_answers") or ()),
        )
    except KeyError as e:
        raise CatalogError(f"Event record missing field {e}") from e
    except ValueError as e:
        raise CatalogError(f"Invalid event record {record.get('id')!r}: {e}") from e


def load_catalog(file_path=None) -> tuple:
    """Read events from a .json or .yaml file (the bundled catalog by default).

    Event ids must be unique; they are stored in profiles as seen markers.
    """
    path = Path(file_path) if file_path else DEFAULT_EVENTS_FILE
    events = tuple(event_from_record(r) for r in read_event_records(path))
    seen = set()
    for event in events:
        if event.id in seen:
            raise CatalogError(f"Duplicate event id {event.id} in {path.name}")
        seen.add(event.id)
    logger.info("Loaded %d events from %s", len(events), path)
    return events


def events_by_era(catalog, era) -> list:
    era = Era(era)
    return [e for e in catalog if e.era == era]
