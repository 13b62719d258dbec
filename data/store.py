"""
Log Store Module for LinkedIn Machine

This module persists the two append-only record collections (shared posts and
generated prompts) as pretty-printed JSON arrays under the data directory.
Every access reads or rewrites a whole file.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from data.models import RECORD_TYPES, RecordKind
from data.protocols import Record
from config.settings import POSTS_FILENAME, PROMPTS_FILENAME
from utils.logger import get_logger

logger = get_logger(__name__)


class JsonLogStore:
    """File-backed store for shared posts and generated prompts."""

    def __init__(self, data_dir: Union[str, Path]):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding posts.json and prompts.json.
        """
        self.data_dir = Path(data_dir)
        self.paths: Dict[RecordKind, Path] = {
            RecordKind.POSTS: self.data_dir / POSTS_FILENAME,
            RecordKind.PROMPTS: self.data_dir / PROMPTS_FILENAME,
        }
        # Serializes load-modify-save cycles from concurrent Bolt listener threads
        self._lock = threading.Lock()

    def ensure_data_dir(self) -> bool:
        """
        Create the data directory if it does not exist.

        Returns:
            bool: True if the directory exists afterwards, False otherwise.
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            logger.error(f"Error creating data directory {self.data_dir}: {e}")
            return False

    def _read_raw(self, kind: RecordKind) -> List[Any]:
        """Read a collection file as the JSON array it holds, or [] if unusable."""
        path = self.paths[kind]
        if not path.exists():
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {path}, treating as empty: {e}")
            return []

        if not isinstance(raw, list):
            logger.warning(f"{path} does not hold a JSON array, treating as empty")
            return []
        return raw

    def _write_raw(self, kind: RecordKind, payload: List[Any]) -> bool:
        """Atomically replace a collection file with the given JSON array."""
        path = self.paths[kind]
        tmp_path = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving {path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning(f"Could not remove temporary file {tmp_path}")
            return False

    def load(self, kind: RecordKind) -> List[Record]:
        """
        Load every record of a collection.

        Args:
            kind: Which collection to read.

        Returns:
            List of records in append order. Empty if the file is missing,
            unreadable or malformed.
        """
        record_type = RECORD_TYPES[kind]
        records = []
        for item in self._read_raw(kind):
            if not isinstance(item, dict):
                logger.warning(f"Skipping malformed entry in {self.paths[kind]}: {item!r}")
                continue
            records.append(record_type.from_dict(item))
        return records

    def save(self, kind: RecordKind, records: Sequence[Record]) -> bool:
        """
        Overwrite a collection with the given records.

        The file is written to a temporary sibling and moved into place, so
        readers see either the old or the new contents.

        Args:
            kind: Which collection to write.
            records: The full new contents.

        Returns:
            bool: True if the file was written, False otherwise.
        """
        return self._write_raw(kind, [record.to_dict() for record in records])

    def append(self, kind: RecordKind, records: Sequence[Record]) -> bool:
        """
        Append records to the end of a collection.

        Entries already in the file are written back exactly as they were read.

        Args:
            kind: Which collection to extend.
            records: New records, stored in the given order.

        Returns:
            bool: True if the file was written, False otherwise.
        """
        if not records:
            return True

        with self._lock:
            payload = self._read_raw(kind)
            payload.extend(record.to_dict() for record in records)
            saved = self._write_raw(kind, payload)

        if saved:
            logger.debug(f"Appended {len(records)} record(s) to {kind.value}")
        return saved
