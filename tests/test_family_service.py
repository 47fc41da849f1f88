"""Unit tests for FamilyService. In-memory storage only."""

from familyfaces.application import (
    AlreadyRelated,
    Deleted,
    FamilyService,
    Invalid,
    NotFound,
    PersonData,
    PersonSaved,
    PhotoData,
    PhotoSaved,
    RelationshipCreated,
    RelationshipUpdated,
    StateStore,
    TagAdded,
)
from familyfaces.domain import AppState, RelationshipType
from familyfaces.infrastructure import InMemoryBlobStorage, seed_state


def _service(seed: AppState | None = None) -> FamilyService:
    store = StateStore(InMemoryBlobStorage(), seed=seed if seed is not None else AppState())
    return FamilyService(store)


def _add(service: FamilyService, name: str) -> str:
    result = service.add_person(PersonData(name=name))
    assert isinstance(result, PersonSaved)
    return result.person.id


def test_add_person_trims_and_drops_blank_fields():
    service = _service()
    result = service.add_person(
        PersonData(name="  Anjali ", profile_image="  ", birthdate="1990-05-15", notes="")
    )
    assert isinstance(result, PersonSaved)
    person = result.person
    assert person.name == "Anjali"
    assert person.profile_image is None
    assert person.notes is None
    assert person.birthdate == "1990-05-15"
    assert service.list_people() == [person]


def test_add_person_requires_name():
    service = _service()
    result = service.add_person(PersonData(name="   "))
    assert isinstance(result, Invalid)
    assert "name" in result.reason.lower()
    assert service.list_people() == []


def test_update_person():
    service = _service()
    pid = _add(service, "Raj")
    result = service.update_person(pid, PersonData(name="Raj Kumar", notes="Cricket fan"))
    assert isinstance(result, PersonSaved)
    assert service.get_person(pid).name == "Raj Kumar"
    assert service.get_person(pid).notes == "Cricket fan"
    assert isinstance(service.update_person("missing", PersonData(name="X")), NotFound)
    assert isinstance(service.update_person(pid, PersonData(name="")), Invalid)


def test_list_people_name_filter():
    service = _service(seed_state())
    assert [p.name for p in service.list_people("bade")] == ["Bade Papa", "Bade Mummy"]
    assert len(service.list_people("")) == 5
    assert service.list_people("zzz") == []


def test_delete_person_cascades_through_service():
    service = _service(seed_state())
    assert isinstance(service.delete_person("p3"), Deleted)
    assert service.get_person("p3") is None
    assert all("p3" not in (r.person1_id, r.person2_id) for r in service.list_relationships())
    assert service.person_photos("p3") == []
    assert isinstance(service.delete_person("p3"), NotFound)


def test_create_relationship_adds_inverse_pair():
    service = _service()
    parent = _add(service, "Bade Papa")
    child = _add(service, "Anjali")
    result = service.create_relationship(parent, child, "parent")
    assert isinstance(result, RelationshipCreated)
    assert result.relationship.relationship_type == RelationshipType.PARENT
    assert result.inverse.person1_id == child
    assert result.inverse.relationship_type == RelationshipType.CHILD
    assert len(service.list_relationships()) == 2


def test_create_relationship_validation():
    service = _service()
    a = _add(service, "A")
    b = _add(service, "B")
    assert isinstance(service.create_relationship("", b, "sibling"), Invalid)
    assert isinstance(service.create_relationship(a, "", "sibling"), Invalid)
    assert isinstance(service.create_relationship(a, a, "sibling"), Invalid)
    assert isinstance(service.create_relationship(a, b, "best friend"), Invalid)
    assert isinstance(service.create_relationship(a, "missing", "sibling"), NotFound)
    assert isinstance(service.create_relationship(a, b, "sibling"), RelationshipCreated)
    assert isinstance(service.create_relationship(b, a, "cousin"), AlreadyRelated)
    assert len(service.list_relationships()) == 2


def test_relationship_candidates_excludes_self_and_related():
    service = _service(seed_state())
    # Anjali is related to everyone in the demo family.
    assert service.relationship_candidates("p1") == []
    assert [p.id for p in service.relationship_candidates("p2")] == ["p3", "p4", "p5"]


def test_person_relationships_labels():
    service = _service(seed_state())
    views = service.person_relationships("p1")
    labels = {(v.relationship.id, v.other_person.name, v.label) for v in views}
    # r1: Anjali is child of Bade Papa; r2: Bade Papa is parent of Anjali.
    assert ("r1", "Bade Papa", "Child of Bade Papa") in labels
    assert ("r2", "Bade Papa", "Parent of Anjali") in labels
    assert ("r7", "Raj", "Spouse of Raj") in labels
    assert len(views) == 8
    assert service.person_relationships("missing") == []


def test_person_relationships_skip_dangling_edges():
    service = _service(seed_state())
    state = service.store.state
    # Remove Maya without the cascade to simulate inconsistent state.
    service.store.replace_state(
        AppState(
            people=tuple(p for p in state.people if p.id != "p5"),
            relationships=state.relationships,
            photos=state.photos,
        )
    )
    assert all(v.other_person.id != "p5" for v in service.person_relationships("p1"))
    assert [p.id for p in service.tagged_people("photo4")] == ["p1"]


def test_update_and_delete_relationship():
    service = _service(seed_state())
    result = service.update_relationship("r8", "in-law")
    assert isinstance(result, RelationshipUpdated)
    assert result.inverse.id == "r7"
    assert isinstance(service.update_relationship("r8", "stranger"), Invalid)
    assert isinstance(service.update_relationship("missing", "other"), NotFound)
    assert isinstance(service.delete_relationship("r8"), Deleted)
    assert {r.id for r in service.list_relationships()}.isdisjoint({"r7", "r8"})
    assert isinstance(service.delete_relationship("r8"), NotFound)


def test_relationships_by_person():
    service = _service(seed_state())
    groups = service.relationships_by_person()
    assert [r.id for r in groups["p1"]] == ["r1", "r3", "r7", "r9"]
    assert list(groups) == ["p1", "p3", "p4", "p2", "p5"]


def test_add_photo_tags_known_people_once():
    service = _service(seed_state())
    result = service.add_photo(
        PhotoData(
            url=" https://example.com/diwali.jpg ",
            event="Diwali",
            tagged_person_ids=("p1", "p1", "ghost", "p2"),
        )
    )
    assert isinstance(result, PhotoSaved)
    photo = result.photo
    assert photo.url == "https://example.com/diwali.jpg"
    assert [t.person_id for t in photo.tags] == ["p1", "p2"]
    assert all(t.photo_id == photo.id for t in photo.tags)
    assert isinstance(service.add_photo(PhotoData(url="  ")), Invalid)


def test_update_photo_keeps_tags():
    service = _service(seed_state())
    result = service.update_photo(
        "photo1", PhotoData(url="https://example.com/new.jpg", event="Dinner")
    )
    assert isinstance(result, PhotoSaved)
    photo = service.get_photo("photo1")
    assert photo.event == "Dinner"
    assert photo.location is None
    assert [t.id for t in photo.tags] == ["t1", "t2"]
    assert isinstance(service.update_photo("missing", PhotoData(url="u")), NotFound)


def test_tags():
    service = _service(seed_state())
    result = service.add_tag("photo3", "p5")
    assert isinstance(result, TagAdded)
    assert "p5" in service.get_photo("photo3").tagged_person_ids()
    assert isinstance(service.add_tag("photo3", "ghost"), NotFound)
    assert isinstance(service.add_tag("missing", "p5"), NotFound)

    assert isinstance(service.remove_tag("photo3", result.tag.id), Deleted)
    assert "p5" not in service.get_photo("photo3").tagged_person_ids()
    assert isinstance(service.remove_tag("photo3", result.tag.id), NotFound)


def test_delete_photo():
    service = _service(seed_state())
    assert isinstance(service.delete_photo("photo2"), Deleted)
    assert service.get_photo("photo2") is None
    assert isinstance(service.delete_photo("photo2"), NotFound)


def test_search_uses_current_state():
    service = _service(seed_state())
    assert [p.id for p in service.search("Raj").photos] == ["photo1", "photo5"]
    service.delete_person("p2")
    assert [p.id for p in service.search("Raj").photos] == []


def test_gallery_and_stats():
    service = _service(seed_state())
    assert [p.id for p in service.gallery()["all"]] == [
        "photo5", "photo4", "photo2", "photo1", "photo3",
    ]
    assert list(service.gallery("event")) == [
        "Birthday Party", "Christmas", "Family Dinner", "Picnic", "Vacation",
    ]
    assert list(service.gallery("date"))[0] == "2023-04-05"
    assert [p.id for p in service.recent_photos()] == ["photo5", "photo4", "photo2"]

    stats = service.stats()
    assert stats.photo_count == 5
    assert stats.people_count == 5
    assert stats.relationship_count == 5
    assert stats.tagged_people_count == 5
    assert stats.event_count == 5
