"""Protocol interfaces for imagestudio."""

from typing import Protocol

from typing_extensions import runtime_checkable

from imagestudio.models.records import GenerationRecord


@runtime_checkable
class GenerationRepository(Protocol):
    """Append-only store of generation records."""

    def append(self, record: GenerationRecord) -> None:
        """Persist a record. Raises on storage failure."""
        ...

    def list(self) -> list[GenerationRecord]:
        """Return all stored records, oldest first."""
        ...
