# school_portal/db/store.py
"""
Hierarchical document store interface.

Paths follow the "collection/doc/collection/doc" convention, e.g.
``schools/SCH1/school_officials/abc``. A collection-group query searches every
collection with a given name regardless of its parent document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

SCHOOLS = "schools"
SCHOOL_OFFICIALS = "school_officials"
STUDENTS = "students"
OPPORTUNITIES = "opportunities"


class InvalidDocumentId(ValueError):
    pass


def is_valid_id(doc_id: Any) -> bool:
    return isinstance(doc_id, str) and doc_id != "" and "/" not in doc_id


@dataclass(frozen=True)
class CollectionRef:
    name: str
    parent: Optional["DocumentRef"] = None

    @property
    def path(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.path}/{self.name}"

    def doc(self, doc_id: str) -> "DocumentRef":
        # a "/" would make the path address a document in some other collection
        if not is_valid_id(doc_id):
            raise InvalidDocumentId(f"Invalid document id: {doc_id!r}")
        return DocumentRef(self, doc_id)


@dataclass(frozen=True)
class DocumentRef:
    collection: CollectionRef
    id: str

    @property
    def path(self) -> str:
        return f"{self.collection.path}/{self.id}"

    def sub(self, name: str) -> CollectionRef:
        return CollectionRef(name, parent=self)


@dataclass
class Document:
    ref: DocumentRef
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.ref.id


def collection(name: str) -> CollectionRef:
    return CollectionRef(name)


def school_ref(school_code: str) -> DocumentRef:
    return collection(SCHOOLS).doc(school_code)


class DocumentStore(Protocol):
    """Async access to hierarchical collections."""

    async def get(self, ref: DocumentRef) -> Optional[Document]:
        ...

    async def list(self, coll: CollectionRef) -> List[Document]:
        ...

    async def where(self, coll: CollectionRef, field_name: str, op: str, value: Any) -> List[Document]:
        """Filter a single collection. ``op`` is ``"=="`` or ``"!="``."""
        ...

    async def collection_group(self, name: str, field_name: str, value: Any) -> List[Document]:
        """Equality query over every collection called ``name``."""
        ...

    async def count(self, coll: CollectionRef) -> int:
        ...

    async def add(self, coll: CollectionRef, data: Dict[str, Any]) -> DocumentRef:
        ...

    async def set(self, ref: DocumentRef, data: Dict[str, Any]) -> None:
        ...

    async def update(self, ref: DocumentRef, data: Dict[str, Any]) -> None:
        """Merge ``data`` into an existing document. Raises KeyError if missing."""
        ...

    async def delete(self, ref: DocumentRef) -> None:
        ...

    async def move(self, src: DocumentRef, dst: DocumentRef, data: Dict[str, Any]) -> None:
        """Write ``data`` at ``dst`` and delete ``src`` as one atomic step."""
        ...

    def close(self) -> None:
        ...
