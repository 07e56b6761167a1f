import asyncio

import pytest

from school_portal.db.store import OPPORTUNITIES, SCHOOL_OFFICIALS, STUDENTS, InvalidDocumentId, collection, school_ref


def test_list_only_returns_direct_children(store):
    schools = asyncio.run(store.list(collection("schools")))
    assert [s.id for s in schools] == ["SCH1", "SCH2", "SCH3"]

    officials = asyncio.run(store.list(school_ref("SCH1").sub(SCHOOL_OFFICIALS)))
    assert [o.id for o in officials] == ["off1"]


def test_not_equal_filter_skips_missing_and_matching_values(store):
    students = asyncio.run(store.where(school_ref("SCH1").sub(STUDENTS), "lastOpportunity", "!=", ""))
    assert sorted(s.data["name"] for s in students) == ["Lina", "Sara"]


def test_collection_group_searches_every_parent(store):
    store.seed(school_ref("SCH3").sub(OPPORTUNITIES).doc("o7"), {"id": "OPP7", "name": "Tree Planting"})

    found = asyncio.run(store.collection_group(OPPORTUNITIES, "id", "OPP9"))
    assert len(found) == 1
    assert found[0].ref.path == "schools/SCH2/opportunities/o1"

    found = asyncio.run(store.collection_group(OPPORTUNITIES, "id", "OPP7"))
    assert found[0].data["name"] == "Tree Planting"


def test_returned_documents_are_copies(store):
    doc = asyncio.run(store.get(school_ref("SCH1")))
    doc.data["name"] = "changed"
    assert asyncio.run(store.get(school_ref("SCH1"))).data["name"] == "School One"


def test_move_leaves_a_single_copy(store):
    src = school_ref("SCH1").sub(SCHOOL_OFFICIALS).doc("off1")
    dst = school_ref("SCH3").sub(SCHOOL_OFFICIALS).doc("off1")
    asyncio.run(store.move(src, dst, {"email": "x@y.z"}))

    assert asyncio.run(store.get(src)) is None
    assert asyncio.run(store.get(dst)).data == {"email": "x@y.z"}


def test_update_missing_document_raises(store):
    ref = school_ref("SCH1").sub(SCHOOL_OFFICIALS).doc("nobody")
    with pytest.raises(KeyError):
        asyncio.run(store.update(ref, {"name": "x"}))


@pytest.mark.parametrize("bad_id", ["", "SCH1/students/s1", None])
def test_document_ids_cannot_span_collections(bad_id):
    with pytest.raises(InvalidDocumentId):
        collection("schools").doc(bad_id)
