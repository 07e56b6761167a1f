# school_portal/db/memory.py
"""In-memory DocumentStore for local development and tests."""

import copy
from typing import Any, Dict, List, Optional

from bson import ObjectId

from school_portal.db.store import CollectionRef, Document, DocumentRef


class InMemoryDocumentStore:
    def __init__(self) -> None:
        self.docs: Dict[str, Document] = {}

    def seed(self, ref: DocumentRef, data: Dict[str, Any]) -> DocumentRef:
        """Synchronous write used to set up fixtures."""
        self.docs[ref.path] = Document(ref=ref, data=copy.deepcopy(data))
        return ref

    @staticmethod
    def _copy(doc: Document) -> Document:
        return Document(ref=doc.ref, data=copy.deepcopy(doc.data))

    def _in(self, coll: CollectionRef) -> List[Document]:
        found = [d for d in self.docs.values() if d.ref.collection == coll]
        return sorted(found, key=lambda d: d.id)

    async def get(self, ref: DocumentRef) -> Optional[Document]:
        doc = self.docs.get(ref.path)
        return self._copy(doc) if doc else None

    async def list(self, coll: CollectionRef) -> List[Document]:
        return [self._copy(d) for d in self._in(coll)]

    async def where(self, coll: CollectionRef, field_name: str, op: str, value: Any) -> List[Document]:
        if op == "==":
            match = lambda d: field_name in d.data and d.data[field_name] == value
        elif op == "!=":
            match = lambda d: d.data.get(field_name) is not None and d.data[field_name] != value
        else:
            raise ValueError(f"Unsupported operator: {op}")
        return [self._copy(d) for d in self._in(coll) if match(d)]

    async def collection_group(self, name: str, field_name: str, value: Any) -> List[Document]:
        found = [
            d for d in self.docs.values()
            if d.ref.collection.name == name and field_name in d.data and d.data[field_name] == value
        ]
        return [self._copy(d) for d in sorted(found, key=lambda d: d.id)]

    async def count(self, coll: CollectionRef) -> int:
        return len(self._in(coll))

    async def add(self, coll: CollectionRef, data: Dict[str, Any]) -> DocumentRef:
        return self.seed(coll.doc(str(ObjectId())), data)

    async def set(self, ref: DocumentRef, data: Dict[str, Any]) -> None:
        self.seed(ref, data)

    async def update(self, ref: DocumentRef, data: Dict[str, Any]) -> None:
        doc = self.docs.get(ref.path)
        if doc is None:
            raise KeyError(ref.path)
        doc.data.update(copy.deepcopy(data))

    async def delete(self, ref: DocumentRef) -> None:
        self.docs.pop(ref.path, None)

    async def move(self, src: DocumentRef, dst: DocumentRef, data: Dict[str, Any]) -> None:
        # no await between the two writes, so no other task observes a half move
        self.docs.pop(src.path, None)
        self.seed(dst, data)

    def close(self) -> None:
        pass
