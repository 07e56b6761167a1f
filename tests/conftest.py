import pytest
from fastapi.testclient import TestClient

from school_portal.core.errors import StoreError
from school_portal.core.identity import InMemoryIdentityProvider
from school_portal.db.memory import InMemoryDocumentStore
from school_portal.db.store import OPPORTUNITIES, SCHOOL_OFFICIALS, STUDENTS, school_ref
from school_portal.main import create_app

SCH1_OFFICIAL = "official@sch1.edu"
SCH2_OFFICIAL = "official@sch2.edu"


def seed_schools(store: InMemoryDocumentStore) -> InMemoryDocumentStore:
    """
    SCH1 has one official and four students; SCH2 has one official and holds
    the only opportunity; SCH3 is empty.
    """
    sch1, sch2, sch3 = school_ref("SCH1"), school_ref("SCH2"), school_ref("SCH3")
    store.seed(sch1, {"name": "School One"})
    store.seed(sch2, {"name": "School Two"})
    store.seed(sch3, {"name": "School Three"})

    store.seed(
        sch1.sub(SCHOOL_OFFICIALS).doc("off1"),
        {"name": "Official One", "email": SCH1_OFFICIAL, "uid": "uid-1", "schoolCode": "SCH1"},
    )
    store.seed(
        sch2.sub(SCHOOL_OFFICIALS).doc("off2"),
        {"name": "Official Two", "email": SCH2_OFFICIAL, "uid": "uid-2", "schoolCode": "SCH2", "phone": "555"},
    )

    students = sch1.sub(STUDENTS)
    store.seed(students.doc("s1"), {"name": "Sara", "level": "10", "city": "Jeddah", "lastOpportunity": "OPP9"})
    store.seed(students.doc("s2"), {"name": "Omar", "level": "11", "city": "Riyadh", "lastOpportunity": ""})
    store.seed(students.doc("s3"), {"name": "Lina", "level": "12", "city": "Dammam", "lastOpportunity": "GONE"})
    store.seed(students.doc("s4"), {"name": "Noor", "level": "9", "city": "Abha"})

    store.seed(
        sch2.sub(OPPORTUNITIES).doc("o1"),
        {
            "id": "OPP9",
            "name": "Beach Cleanup",
            "hour": 3,
            "date": "2024-05-01",
            "description": "Clean the north beach",
            "organizationName": "Green Coast",
        },
    )
    return store


class UnreachableStore:
    """Fails the test on any store access."""

    def __getattr__(self, name):
        raise AssertionError(f"store.{name} should not be called")


class BrokenStore(InMemoryDocumentStore):
    """Raises StoreError for the named operations, behaves normally otherwise."""

    def __init__(self, failing=(), failing_values=()):
        super().__init__()
        self.failing = set(failing)
        self.failing_values = set(failing_values)

    async def list(self, coll):
        if "list" in self.failing:
            raise StoreError("list failed")
        return await super().list(coll)

    async def where(self, coll, field_name, op, value):
        if "where" in self.failing:
            raise StoreError("query failed")
        return await super().where(coll, field_name, op, value)

    async def collection_group(self, name, field_name, value):
        if value in self.failing_values:
            raise StoreError("collection group query failed")
        return await super().collection_group(name, field_name, value)

    async def move(self, src, dst, data):
        if "move" in self.failing:
            raise StoreError("move failed")
        return await super().move(src, dst, data)


@pytest.fixture
def store():
    return seed_schools(InMemoryDocumentStore())


@pytest.fixture
def identity():
    return InMemoryIdentityProvider({SCH1_OFFICIAL: "uid-1"})


@pytest.fixture
def client(store, identity):
    return TestClient(create_app(store=store, identity=identity))
