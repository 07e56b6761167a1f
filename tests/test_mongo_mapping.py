from school_portal.db.mongo import _parent_path, _ref_from_path, _to_document, _to_raw
from school_portal.db.store import SCHOOL_OFFICIALS, collection, school_ref


def test_raw_document_carries_path_parent_and_key():
    ref = school_ref("SCH1").sub(SCHOOL_OFFICIALS).doc("abc")
    raw = _to_raw(ref, {"email": "a@b.c", "_id": "ignored"})

    assert raw == {
        "email": "a@b.c",
        "_id": "schools/SCH1/school_officials/abc",
        "_parent": "schools/SCH1",
        "_key": "abc",
    }


def test_top_level_collection_has_empty_parent():
    assert _parent_path(collection("schools")) == ""
    assert _to_raw(school_ref("SCH1"), {})["_parent"] == ""


def test_path_round_trips_to_reference():
    ref = school_ref("SCH2").sub("opportunities").doc("o1")
    assert _ref_from_path(ref.path) == ref


def test_internal_keys_are_stripped_on_read():
    raw = {"_id": "schools/SCH1", "_parent": "", "_key": "SCH1", "name": "School One"}
    doc = _to_document(raw)
    assert doc.id == "SCH1"
    assert doc.data == {"name": "School One"}
