import json
import logging
from pathlib import Path
from typing import Any, final, override

from signgrid.models import MultiSeries, StatusCode, ValidatorSeries
from signgrid.source.source_base import SourceError, StatusSource

logger = logging.getLogger(__name__)

STATUS_KEYS = ("Status", "status")


@final
class JsonStateSource(StatusSource):
    """Reads a state document ``{"Status": [{"name": ..., "blocks": [...]}]}``.

    The file is re-read on every fetch so an external poller can keep
    rewriting it.
    """

    def __init__(self, path: Path):
        self.path = path

    @override
    def fetch(self) -> MultiSeries:
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SourceError(f"{self.path}: invalid JSON ({exc})") from exc
        except UnicodeDecodeError as exc:
            raise SourceError(f"{self.path}: not UTF-8 text ({exc.reason})") from exc
        return self.parse_document(document, origin=str(self.path))

    @classmethod
    def parse_document(cls, document: Any, origin: str = "<document>") -> MultiSeries:
        if not isinstance(document, dict):
            raise SourceError(f"{origin}: expected an object at top level")

        entries = None
        for key in STATUS_KEYS:
            if key in document:
                entries = document[key]
                break
        if not isinstance(entries, list):
            raise SourceError(f"{origin}: missing status list")

        series: list[ValidatorSeries] = []
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
                raise SourceError(f"{origin}: status entry {idx} has no name")
            series.append(
                ValidatorSeries(name=entry["name"], blocks=cls._parse_blocks(entry, origin))
            )
        return MultiSeries(status=series)

    @staticmethod
    def _parse_blocks(entry: dict[str, Any], origin: str) -> list[int]:
        raw = entry.get("blocks")
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("%s: blocks of %r is not a list, treated as empty", origin, entry["name"])
            return []

        blocks: list[int] = []
        coerced = 0
        for value in raw:
            if isinstance(value, int) and not isinstance(value, bool):
                blocks.append(value)
            else:
                blocks.append(StatusCode.NO_DATA)
                coerced += 1
        if coerced:
            logger.warning("%s: %d non-integer codes for %r shown as no data", origin, coerced, entry["name"])
        return blocks
