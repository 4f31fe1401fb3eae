"""
Techpack Engine: Document Store

Holds the current document for one editing session. Every mutation goes
through the reducer; the store only swaps in the snapshot it returns.
"""

from __future__ import annotations

from engine.techpack.reducer import reduce
from engine.techpack.seed import seed_document
from engine.techpack.types import (
    Action,
    CollectionKey,
    ReduceResult,
    SetColorCode,
    SetField,
    SetRowField,
    SetRowSize,
    TechpackDocument,
)


class DocumentStore:
    """Owner of the session's techpack snapshot."""

    def __init__(self, document: TechpackDocument | None = None) -> None:
        self._snapshot = document if document is not None else seed_document()
        self._revision = 0

    @property
    def snapshot(self) -> TechpackDocument:
        return self._snapshot

    @property
    def revision(self) -> int:
        """Bumped each time an accepted action produced a new document."""
        return self._revision

    def dispatch(self, action: Action) -> ReduceResult:
        result = reduce(self._snapshot, action)
        if result.accepted and result.document is not self._snapshot:
            self._snapshot = result.document
            self._revision += 1
        return result

    def set_field(self, key: str, value: str | None) -> ReduceResult:
        return self.dispatch(SetField(key=key, value=value))

    def set_row_field(self, collection: CollectionKey, index: int, field: str, value: str) -> ReduceResult:
        return self.dispatch(SetRowField(collection=collection, index=index, field=field, value=value))

    def set_row_size(self, collection: CollectionKey, index: int, size: str, value: str) -> ReduceResult:
        return self.dispatch(SetRowSize(collection=collection, index=index, size=size, value=value))

    def set_color_code(self, index: int, field: str, value: str) -> ReduceResult:
        return self.dispatch(SetColorCode(index=index, field=field, value=value))
