"""Unit tests for StateStore: transitions, cascade, edge pairs, load/save."""

import itertools
import json

import pytest

from familyfaces.application import STATE_KEY, StateStore
from familyfaces.domain import AppState, Person, Photo, PhotoTag, RelationshipType
from familyfaces.domain.relationships import inverse
from familyfaces.domain.serialization import state_to_document
from familyfaces.infrastructure import InMemoryBlobStorage, seed_state


def _counter_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


def _store(storage=None, seed=None) -> StateStore:
    return StateStore(
        storage or InMemoryBlobStorage(),
        seed=seed if seed is not None else AppState(),
        id_factory=_counter_ids(),
    )


class FailingStorage:
    def get(self, key):
        raise OSError("disk unavailable")

    def put(self, key, value):
        raise OSError("disk full")


def test_missing_saved_state_uses_seed():
    store = _store(seed=seed_state())
    assert len(store.state.people) == 5
    assert len(store.state.photos) == 5


def test_malformed_saved_state_uses_seed():
    storage = InMemoryBlobStorage({STATE_KEY: "{not json"})
    assert len(_store(storage, seed=seed_state()).state.people) == 5

    storage = InMemoryBlobStorage({STATE_KEY: json.dumps({"people": [{"id": "x"}]})})
    assert len(_store(storage, seed=seed_state()).state.people) == 5

    storage = InMemoryBlobStorage({STATE_KEY: json.dumps([1, 2, 3])})
    assert len(_store(storage, seed=seed_state()).state.people) == 5


@pytest.mark.parametrize(
    "document",
    [
        {"people": [{"id": "x", "name": 123}], "relationships": [], "photos": []},
        {"people": [{"id": 7, "name": "Anjali"}], "relationships": [], "photos": []},
        {"people": [{"id": "x", "name": "Anjali", "notes": ["a"]}], "relationships": [], "photos": []},
        {"people": [], "relationships": [], "photos": [{"id": "ph1", "url": 5, "tags": []}]},
        {"people": [], "relationships": [], "photos": [{"id": "ph1", "url": "u", "event": 3}]},
        {
            "people": [],
            "relationships": [],
            "photos": [{"id": "ph1", "url": "u", "tags": [{"id": 1, "personId": "p", "photoId": "ph1"}]}],
        },
        {
            "people": [],
            "relationships": [{"id": "r1", "person1Id": 1, "person2Id": "b", "relationshipType": "parent"}],
            "photos": [],
        },
        {"people": ["Anjali"], "relationships": [], "photos": []},
        {"people": 5, "relationships": [], "photos": []},
    ],
)
def test_wrongly_typed_saved_state_uses_seed(document):
    storage = InMemoryBlobStorage({STATE_KEY: json.dumps(document)})
    store = _store(storage, seed=seed_state())
    assert store.state == seed_state()


def test_unreadable_storage_uses_seed_and_save_failure_is_silent():
    store = _store(FailingStorage(), seed=seed_state())
    assert len(store.state.people) == 5
    store.add_person(Person(id="p9", name="Nani"))
    assert store.state.get_person("p9") is not None


def test_saved_state_is_restored():
    storage = InMemoryBlobStorage()
    first = _store(storage)
    first.add_person(Person(id="p1", name="Anjali"))
    second = _store(storage, seed=seed_state())
    assert [p.name for p in second.state.people] == ["Anjali"]


def test_every_transition_is_saved():
    storage = InMemoryBlobStorage()
    store = _store(storage)
    store.add_person(Person(id="p1", name="Anjali"))
    saved = json.loads(storage.get(STATE_KEY))
    assert saved == state_to_document(store.state)
    store.add_photo(Photo(id="ph1", url="https://example.com/1.jpg"))
    assert json.loads(storage.get(STATE_KEY))["photos"][0]["id"] == "ph1"


def test_transitions_replace_state_object():
    store = _store()
    before = store.state
    store.add_person(Person(id="p1", name="Anjali"))
    assert before.people == ()
    assert store.state is not before


def test_update_person_with_same_record_changes_nothing():
    store = _store(seed=seed_state())
    before = store.state
    store.update_person(before.get_person("p1"))
    assert store.state == before
    assert len(store.state.people) == len(before.people)


def test_update_person_unknown_id_is_noop():
    store = _store(seed=seed_state())
    before = store.state
    store.update_person(Person(id="nobody", name="Ghost"))
    assert store.state == before


@pytest.mark.parametrize("t", list(RelationshipType))
def test_relationship_pair_is_created_together(t):
    store = _store()
    store.add_person(Person(id="a", name="A"))
    store.add_person(Person(id="b", name="B"))
    forward, backward = store.add_relationship_pair("a", "b", t)
    assert forward.id != backward.id
    assert (backward.person1_id, backward.person2_id) == ("b", "a")
    assert backward.relationship_type == inverse(t)
    assert store.state.relationships == (forward, backward)


def test_delete_person_cascades():
    store = _store(seed=seed_state())
    store.delete_person("p1")
    state = store.state
    assert state.get_person("p1") is None
    assert all("p1" not in (r.person1_id, r.person2_id) for r in state.relationships)
    assert all(t.person_id != "p1" for photo in state.photos for t in photo.tags)
    assert len(state.photos) == 5
    # Bade Papa and Bade Mummy are still married.
    assert {r.id for r in state.relationships} == {"r5", "r6"}


def test_delete_photo_and_tags():
    store = _store(seed=seed_state())
    store.remove_tag("photo1", "t1")
    assert [t.id for t in store.state.get_photo("photo1").tags] == ["t2"]
    store.delete_photo("photo1")
    assert store.state.get_photo("photo1") is None


def test_add_tag_uses_owning_photo_id():
    store = _store()
    store.add_photo(Photo(id="ph1", url="https://example.com/1.jpg"))
    tag = store.add_tag("ph1", "p1")
    assert tag.photo_id == "ph1"
    assert store.state.get_photo("ph1").tags == (tag,)
    assert store.add_tag("missing", "p1") is None


def test_photo_rejects_foreign_tag():
    with pytest.raises(ValueError):
        Photo(
            id="ph1",
            url="https://example.com/1.jpg",
            tags=(PhotoTag(id="t", person_id="p", photo_id="other"),),
        )


def test_update_relationship_type_retypes_partner():
    store = _store(seed=seed_state())
    updated, partner = store.update_relationship_type("r9", RelationshipType.COUSIN)
    assert updated.relationship_type == RelationshipType.COUSIN
    assert partner.id == "r10"
    assert store.state.get_relationship("r10").relationship_type == RelationshipType.COUSIN

    updated, partner = store.update_relationship_type("r1", RelationshipType.GRANDCHILD)
    assert partner.id == "r2"
    assert store.state.get_relationship("r2").relationship_type == RelationshipType.GRANDPARENT
    assert store.update_relationship_type("missing", RelationshipType.OTHER) is None


def test_delete_relationship_removes_pair():
    store = _store(seed=seed_state())
    store.delete_relationship("r7")
    ids = {r.id for r in store.state.relationships}
    assert "r7" not in ids
    assert "r8" not in ids
    assert len(ids) == 8


def test_replace_state():
    store = _store(seed=seed_state())
    store.replace_state(AppState())
    assert store.state == AppState()


@pytest.mark.parametrize(
    "build",
    [
        lambda: Person(id="x", name=123),
        lambda: Person(id="x", name="Anjali", birthdate=1990),
        lambda: Photo(id="ph1", url=5),
        lambda: Photo(id="ph1", url="u", location=["Goa"]),
        lambda: PhotoTag(id="t", person_id=None, photo_id="ph1"),
    ],
)
def test_entities_reject_wrong_field_types(build):
    with pytest.raises(ValueError):
        build()
