"""People, photos, tags and relationships: validation and read-side views over StateStore."""

from typing import Literal

from familyfaces.application.dto import (
    AlreadyRelated,
    Deleted,
    Invalid,
    NotFound,
    PersonData,
    PersonSaved,
    PhotoData,
    PhotoSaved,
    RelationshipCreated,
    RelationshipUpdated,
    RelationshipView,
    TagAdded,
)
from familyfaces.application.state_store import StateStore
from familyfaces.domain import (
    Person,
    Photo,
    PhotoTag,
    Relationship,
    RelationshipType,
    SearchResult,
    TagCoordinates,
)
from familyfaces.domain.gallery import (
    GalleryStats,
    filter_people_by_name,
    gallery_stats,
    group_by_date,
    group_by_event,
    photos_of_person,
    recent_photos,
    sort_by_date_desc,
    tagged_people,
)
from familyfaces.domain.relationships import are_related, label, relationships_of
from familyfaces.domain.search import search_photos

GroupBy = Literal["date", "event"]


def _clean(value: str | None) -> str | None:
    return (value or "").strip() or None


class FamilyService:
    """Use cases over one StateStore. Returns result variants instead of raising."""

    def __init__(self, store: StateStore) -> None:
        self._store = store

    @property
    def store(self) -> StateStore:
        return self._store

    # --- people ---

    def _build_person(self, person_id: str, data: PersonData) -> Person | Invalid:
        name = (data.name or "").strip()
        if not name:
            return Invalid(reason="Name is required.")
        return Person(
            id=person_id,
            name=name,
            profile_image=_clean(data.profile_image),
            birthdate=_clean(data.birthdate),
            notes=_clean(data.notes),
        )

    def add_person(self, data: PersonData) -> PersonSaved | Invalid:
        person = self._build_person(self._store.new_id(), data)
        if isinstance(person, Invalid):
            return person
        self._store.add_person(person)
        return PersonSaved(person=person)

    def update_person(
        self, person_id: str, data: PersonData
    ) -> PersonSaved | Invalid | NotFound:
        if self._store.state.get_person(person_id) is None:
            return NotFound(entity="person", entity_id=person_id)
        person = self._build_person(person_id, data)
        if isinstance(person, Invalid):
            return person
        self._store.update_person(person)
        return PersonSaved(person=person)

    def delete_person(self, person_id: str) -> Deleted | NotFound:
        if self._store.state.get_person(person_id) is None:
            return NotFound(entity="person", entity_id=person_id)
        self._store.delete_person(person_id)
        return Deleted(entity="person", entity_id=person_id)

    def get_person(self, person_id: str) -> Person | None:
        return self._store.state.get_person(person_id)

    def list_people(self, name_filter: str | None = None) -> list[Person]:
        return filter_people_by_name(self._store.state.people, name_filter)

    def person_photos(self, person_id: str) -> list[Photo]:
        return photos_of_person(person_id, self._store.state.photos)

    # --- photos ---

    def add_photo(self, data: PhotoData) -> PhotoSaved | Invalid:
        url = (data.url or "").strip()
        if not url:
            return Invalid(reason="Image URL is required.")
        state = self._store.state
        photo_id = self._store.new_id()
        tags = tuple(
            PhotoTag(id=self._store.new_id(), person_id=pid, photo_id=photo_id)
            for pid in dict.fromkeys(data.tagged_person_ids)
            if state.get_person(pid) is not None
        )
        photo = Photo(
            id=photo_id,
            url=url,
            date=_clean(data.date),
            event=_clean(data.event),
            location=_clean(data.location),
            description=_clean(data.description),
            tags=tags,
        )
        self._store.add_photo(photo)
        return PhotoSaved(photo=photo)

    def update_photo(
        self, photo_id: str, data: PhotoData
    ) -> PhotoSaved | Invalid | NotFound:
        """Replace the photo's details. Existing tags are kept."""
        current = self._store.state.get_photo(photo_id)
        if current is None:
            return NotFound(entity="photo", entity_id=photo_id)
        url = (data.url or "").strip()
        if not url:
            return Invalid(reason="Image URL is required.")
        photo = Photo(
            id=photo_id,
            url=url,
            date=_clean(data.date),
            event=_clean(data.event),
            location=_clean(data.location),
            description=_clean(data.description),
            tags=current.tags,
        )
        self._store.update_photo(photo)
        return PhotoSaved(photo=photo)

    def delete_photo(self, photo_id: str) -> Deleted | NotFound:
        if self._store.state.get_photo(photo_id) is None:
            return NotFound(entity="photo", entity_id=photo_id)
        self._store.delete_photo(photo_id)
        return Deleted(entity="photo", entity_id=photo_id)

    def get_photo(self, photo_id: str) -> Photo | None:
        return self._store.state.get_photo(photo_id)

    def tagged_people(self, photo_id: str) -> list[Person]:
        photo = self._store.state.get_photo(photo_id)
        if photo is None:
            return []
        return tagged_people(photo, self._store.state.people)

    def add_tag(
        self,
        photo_id: str,
        person_id: str,
        coordinates: TagCoordinates | None = None,
    ) -> TagAdded | NotFound:
        state = self._store.state
        if state.get_photo(photo_id) is None:
            return NotFound(entity="photo", entity_id=photo_id)
        if state.get_person(person_id) is None:
            return NotFound(entity="person", entity_id=person_id)
        tag = self._store.add_tag(photo_id, person_id, coordinates)
        if tag is None:
            return NotFound(entity="photo", entity_id=photo_id)
        return TagAdded(tag=tag)

    def remove_tag(self, photo_id: str, tag_id: str) -> Deleted | NotFound:
        photo = self._store.state.get_photo(photo_id)
        if photo is None:
            return NotFound(entity="photo", entity_id=photo_id)
        if not any(t.id == tag_id for t in photo.tags):
            return NotFound(entity="tag", entity_id=tag_id)
        self._store.remove_tag(photo_id, tag_id)
        return Deleted(entity="tag", entity_id=tag_id)

    # --- relationships ---

    def create_relationship(
        self,
        person1_id: str,
        person2_id: str,
        relationship_type: RelationshipType | str,
    ) -> RelationshipCreated | Invalid | NotFound | AlreadyRelated:
        """Record person1 as `relationship_type` of person2, plus the inverse edge."""
        person1_id = (person1_id or "").strip()
        person2_id = (person2_id or "").strip()
        if not person1_id:
            return Invalid(reason="First person is required.")
        if not person2_id:
            return Invalid(reason="Second person is required.")
        if person1_id == person2_id:
            return Invalid(reason="Cannot create a relationship with the same person.")
        try:
            rel_type = RelationshipType(relationship_type)
        except ValueError:
            return Invalid(reason=f"Unknown relationship type: {relationship_type}.")
        state = self._store.state
        for pid in (person1_id, person2_id):
            if state.get_person(pid) is None:
                return NotFound(entity="person", entity_id=pid)
        if are_related(person1_id, person2_id, state.relationships):
            return AlreadyRelated(person1_id=person1_id, person2_id=person2_id)
        forward, backward = self._store.add_relationship_pair(
            person1_id, person2_id, rel_type
        )
        return RelationshipCreated(relationship=forward, inverse=backward)

    def update_relationship(
        self, relationship_id: str, relationship_type: RelationshipType | str
    ) -> RelationshipUpdated | Invalid | NotFound:
        try:
            rel_type = RelationshipType(relationship_type)
        except ValueError:
            return Invalid(reason=f"Unknown relationship type: {relationship_type}.")
        result = self._store.update_relationship_type(relationship_id, rel_type)
        if result is None:
            return NotFound(entity="relationship", entity_id=relationship_id)
        updated, partner = result
        return RelationshipUpdated(relationship=updated, inverse=partner)

    def delete_relationship(self, relationship_id: str) -> Deleted | NotFound:
        if self._store.state.get_relationship(relationship_id) is None:
            return NotFound(entity="relationship", entity_id=relationship_id)
        self._store.delete_relationship(relationship_id)
        return Deleted(entity="relationship", entity_id=relationship_id)

    def list_relationships(self) -> list[Relationship]:
        return list(self._store.state.relationships)

    def relationships_by_person(self) -> dict[str, list[Relationship]]:
        """Edges grouped by their source person, in collection order."""
        groups: dict[str, list[Relationship]] = {}
        for rel in self._store.state.relationships:
            groups.setdefault(rel.person1_id, []).append(rel)
        return groups

    def relationship_candidates(self, person_id: str) -> list[Person]:
        """People who could still be related to person_id (no edge either way)."""
        state = self._store.state
        return [
            p
            for p in state.people
            if p.id != person_id and not are_related(person_id, p.id, state.relationships)
        ]

    def person_relationships(self, person_id: str) -> list[RelationshipView]:
        state = self._store.state
        person = state.get_person(person_id)
        if person is None:
            return []
        views = []
        for rel in relationships_of(person_id, state.relationships):
            is_source = rel.person1_id == person_id
            other = state.get_person(rel.person2_id if is_source else rel.person1_id)
            if other is None:
                continue
            name = other.name if is_source else person.name
            views.append(
                RelationshipView(
                    relationship=rel,
                    other_person=other,
                    label=label(rel.relationship_type, name),
                )
            )
        return views

    # --- search and gallery ---

    def search(self, query: str) -> SearchResult:
        state = self._store.state
        return search_photos(query, state.people, state.relationships, state.photos)

    def gallery(self, group_by: GroupBy | None = None) -> dict[str, list[Photo]]:
        """Photos newest first, optionally grouped. Ungrouped results use the key "all"."""
        photos = sort_by_date_desc(self._store.state.photos)
        if group_by == "date":
            return group_by_date(photos)
        if group_by == "event":
            return group_by_event(photos)
        return {"all": photos}

    def recent_photos(self, limit: int = 3) -> list[Photo]:
        return recent_photos(self._store.state.photos, limit)

    def stats(self) -> GalleryStats:
        return gallery_stats(self._store.state)
