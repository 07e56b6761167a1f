# school_portal/db/mongo.py
"""
MongoDB backed DocumentStore.

Every collection *name* maps to one Mongo collection, so all ``school_officials``
of all schools live together. Each stored document carries its full path as
``_id``, the parent document path as ``_parent`` and its own id as ``_key``.
Sub-collection reads filter on ``_parent``; collection-group reads do not.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from school_portal.core.errors import StoreError
from school_portal.db.store import CollectionRef, Document, DocumentRef

logger = logging.getLogger(__name__)

_INTERNAL_KEYS = ("_id", "_parent", "_key")


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        logger.error("mongo %s failed: %s", action, e)
        raise StoreError(f"{action} failed") from e


def _parent_path(coll: CollectionRef) -> str:
    return coll.parent.path if coll.parent is not None else ""


def _ref_from_path(path: str) -> DocumentRef:
    parts = path.split("/")
    ref: Optional[DocumentRef] = None
    for i in range(0, len(parts), 2):
        coll = CollectionRef(parts[i], parent=ref)
        ref = coll.doc(parts[i + 1])
    return ref


def _to_document(raw: Dict[str, Any]) -> Document:
    data = {k: v for k, v in raw.items() if k not in _INTERNAL_KEYS}
    return Document(ref=_ref_from_path(raw["_id"]), data=data)


def _to_raw(ref: DocumentRef, data: Dict[str, Any]) -> Dict[str, Any]:
    raw = {k: v for k, v in data.items() if k not in _INTERNAL_KEYS}
    raw["_id"] = ref.path
    raw["_parent"] = _parent_path(ref.collection)
    raw["_key"] = ref.id
    return raw


class MongoDocumentStore:
    def __init__(self, uri: str, db_name: str, timeout_ms: int = 5000, client: Optional[Any] = None) -> None:
        self.client = client if client is not None else AsyncIOMotorClient(uri, serverSelectionTimeoutMS=timeout_ms)
        self.db = self.client[db_name]

    def _coll(self, name: str):
        return self.db[name]

    async def ping(self) -> None:
        await self.client.admin.command("ping")

    async def get(self, ref: DocumentRef) -> Optional[Document]:
        with _translate_errors("get"):
            raw = await self._coll(ref.collection.name).find_one({"_id": ref.path})
        return _to_document(raw) if raw else None

    async def _find(self, coll_name: str, filt: Dict[str, Any], action: str) -> List[Document]:
        with _translate_errors(action):
            cursor = self._coll(coll_name).find(filt).sort("_key", ASCENDING)
            raws = await cursor.to_list(length=None)
        return [_to_document(r) for r in raws]

    async def list(self, coll: CollectionRef) -> List[Document]:
        return await self._find(coll.name, {"_parent": _parent_path(coll)}, "list")

    async def where(self, coll: CollectionRef, field_name: str, op: str, value: Any) -> List[Document]:
        if op == "==":
            cond: Any = value
        elif op == "!=":
            # missing and null fields never match an inequality
            cond = {"$nin": [value, None]}
        else:
            raise ValueError(f"Unsupported operator: {op}")
        return await self._find(coll.name, {"_parent": _parent_path(coll), field_name: cond}, "query")

    async def collection_group(self, name: str, field_name: str, value: Any) -> List[Document]:
        return await self._find(name, {field_name: value}, "collection group query")

    async def count(self, coll: CollectionRef) -> int:
        with _translate_errors("count"):
            return await self._coll(coll.name).count_documents({"_parent": _parent_path(coll)})

    async def add(self, coll: CollectionRef, data: Dict[str, Any]) -> DocumentRef:
        ref = coll.doc(str(ObjectId()))
        with _translate_errors("add"):
            await self._coll(coll.name).insert_one(_to_raw(ref, data))
        return ref

    async def set(self, ref: DocumentRef, data: Dict[str, Any]) -> None:
        with _translate_errors("set"):
            await self._coll(ref.collection.name).replace_one({"_id": ref.path}, _to_raw(ref, data), upsert=True)

    async def update(self, ref: DocumentRef, data: Dict[str, Any]) -> None:
        fields = {k: v for k, v in data.items() if k not in _INTERNAL_KEYS}
        if not fields:
            return
        with _translate_errors("update"):
            res = await self._coll(ref.collection.name).update_one({"_id": ref.path}, {"$set": fields})
        if res.matched_count == 0:
            raise KeyError(ref.path)

    async def delete(self, ref: DocumentRef) -> None:
        with _translate_errors("delete"):
            await self._coll(ref.collection.name).delete_one({"_id": ref.path})

    async def move(self, src: DocumentRef, dst: DocumentRef, data: Dict[str, Any]) -> None:
        # needs a replica set; standalone servers reject transactions
        with _translate_errors("move"):
            async with await self.client.start_session() as session:
                async with session.start_transaction():
                    await self._coll(dst.collection.name).replace_one(
                        {"_id": dst.path}, _to_raw(dst, data), upsert=True, session=session
                    )
                    if src.path != dst.path:
                        await self._coll(src.collection.name).delete_one({"_id": src.path}, session=session)

    def close(self) -> None:
        self.client.close()
