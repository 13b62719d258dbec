"""
Data Layer Protocol Definitions

This module defines typing.Protocol interfaces for data layer operations.
These protocols enable dependency injection for the log store, making
services testable without touching the filesystem.

Protocols defined:
- LogStorage: Interface for loading and appending log records
"""

from typing import List, Protocol, Sequence, Union

from data.models import GeneratedPrompt, RecordKind, SharedPost

Record = Union[SharedPost, GeneratedPrompt]


class LogStorage(Protocol):
    """Protocol defining the interface for the append-only log store.

    Implementations should provide methods for:
    - Loading a whole collection in append order
    - Rewriting a whole collection
    - Appending new records to a collection

    Failures are never raised: loads degrade to an empty list and writes
    report False.
    """

    def load(self, kind: RecordKind) -> List[Record]:
        """Load every record of a collection.

        Args:
            kind: Which collection to read.

        Returns:
            Records in append order, or an empty list if the file is
            missing, unreadable or malformed.
        """
        ...

    def save(self, kind: RecordKind, records: Sequence[Record]) -> bool:
        """Overwrite a collection with the given records.

        Args:
            kind: Which collection to write.
            records: The full new contents.

        Returns:
            True if the file was written, False otherwise.
        """
        ...

    def append(self, kind: RecordKind, records: Sequence[Record]) -> bool:
        """Append records to the end of a collection.

        Args:
            kind: Which collection to extend.
            records: New records, in the order they should be stored.

        Returns:
            True if the file was written, False otherwise.
        """
        ...
