"""Generation record repositories."""

import json
import logging
import threading
from pathlib import Path

from pydantic import ValidationError

from imagestudio.models.records import GenerationRecord

logger = logging.getLogger(__name__)


class JsonFileGenerationRepository:
    """
    Stores generation records as a single JSON array on disk.

    Every append reads the whole array, adds the record and rewrites the
    file. A lock serializes appends made through the same instance; separate
    processes writing the same file can still lose each other's records.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_raw(self) -> list:
        """Read the stored array. Missing, unreadable or non-array files count as empty."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.info(f"📂 [RecordStore] {self.path} not found, starting a new store")
            return []
        except OSError as e:
            logger.error(f"❌ [RecordStore] Could not read {self.path}: {e}")
            return []

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"❌ [RecordStore] {self.path} is not valid JSON, starting a new store: {e}")
            return []

        if not isinstance(data, list):
            logger.error(f"❌ [RecordStore] {self.path} does not contain a JSON array, starting a new store")
            return []
        return data

    def append(self, record: GenerationRecord) -> None:
        """
        Append a record to the store.

        Raises:
            OSError: If the directory or file cannot be written
        """
        with self._lock:
            data = self._read_raw()
            data.append(record.to_json_dict())
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.info(f"📝 [RecordStore] Record saved to {self.path} ({len(data)} total)")

    def list(self) -> list[GenerationRecord]:
        """Return all readable records. Malformed entries are skipped."""
        with self._lock:
            data = self._read_raw()

        records: list[GenerationRecord] = []
        for index, entry in enumerate(data):
            try:
                records.append(GenerationRecord.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"⚠️ [RecordStore] Skipping malformed record #{index}: {e}")
        return records


class InMemoryGenerationRepository:
    """Keeps generation records in memory."""

    def __init__(self):
        self._records: list[GenerationRecord] = []

    def append(self, record: GenerationRecord) -> None:
        self._records.append(record)

    def list(self) -> list[GenerationRecord]:
        return self._records.copy()
