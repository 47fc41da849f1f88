"""State store: the single AppState holder. Every transition replaces the whole
state, keeps the cascade and edge-pair rules, and mirrors the result to storage.
"""

import json
import logging
from dataclasses import replace

from familyfaces.application.ports import BlobStorage, IdFactory, new_id
from familyfaces.domain import (
    AppState,
    Person,
    Photo,
    PhotoTag,
    Relationship,
    RelationshipType,
    TagCoordinates,
)
from familyfaces.domain.relationships import inverse, partner_of
from familyfaces.domain.serialization import state_from_document, state_to_document

logger = logging.getLogger(__name__)

STATE_KEY = "familyFacesAppState"


class StateStore:
    """Holds the current AppState. Loads from storage on creation, saves after each change."""

    def __init__(
        self,
        storage: BlobStorage,
        *,
        seed: AppState | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self._storage = storage
        self._seed = seed if seed is not None else AppState()
        self._new_id = id_factory or new_id
        self._state = self._load()

    @property
    def state(self) -> AppState:
        return self._state

    def new_id(self) -> str:
        return self._new_id()

    # --- persistence ---

    def _load(self) -> AppState:
        try:
            blob = self._storage.get(STATE_KEY)
        except Exception as e:
            logger.warning("Could not read saved state, using seed data: %s", e)
            return self._seed
        if blob is None:
            logger.info("No saved state found, using seed data")
            return self._seed
        try:
            return state_from_document(json.loads(blob))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Saved state is malformed, using seed data: %s", e)
            return self._seed

    def _save(self) -> None:
        try:
            blob = json.dumps(state_to_document(self._state))
            self._storage.put(STATE_KEY, blob)
        except Exception as e:
            logger.warning("Could not save state: %s", e)

    def _commit(self, state: AppState) -> None:
        self._state = state
        self._save()

    def replace_state(self, state: AppState) -> None:
        self._commit(state)

    # --- people ---

    def add_person(self, person: Person) -> None:
        self._commit(replace(self._state, people=self._state.people + (person,)))

    def update_person(self, person: Person) -> None:
        """Replace the person with the same id. Unknown ids leave the state as is."""
        people = tuple(person if p.id == person.id else p for p in self._state.people)
        self._commit(replace(self._state, people=people))

    def delete_person(self, person_id: str) -> None:
        """Remove the person, every edge touching them, and every tag of them."""
        state = self._state
        self._commit(
            AppState(
                people=tuple(p for p in state.people if p.id != person_id),
                relationships=tuple(
                    r
                    for r in state.relationships
                    if r.person1_id != person_id and r.person2_id != person_id
                ),
                photos=tuple(
                    replace(
                        photo,
                        tags=tuple(t for t in photo.tags if t.person_id != person_id),
                    )
                    for photo in state.photos
                ),
            )
        )

    # --- photos ---

    def add_photo(self, photo: Photo) -> None:
        self._commit(replace(self._state, photos=self._state.photos + (photo,)))

    def update_photo(self, photo: Photo) -> None:
        photos = tuple(photo if p.id == photo.id else p for p in self._state.photos)
        self._commit(replace(self._state, photos=photos))

    def delete_photo(self, photo_id: str) -> None:
        photos = tuple(p for p in self._state.photos if p.id != photo_id)
        self._commit(replace(self._state, photos=photos))

    # --- tags ---

    def add_tag(
        self,
        photo_id: str,
        person_id: str,
        coordinates: TagCoordinates | None = None,
    ) -> PhotoTag | None:
        """Tag person_id on the photo. Returns None if the photo does not exist."""
        if self._state.get_photo(photo_id) is None:
            return None
        tag = PhotoTag(
            id=self._new_id(),
            person_id=person_id,
            photo_id=photo_id,
            coordinates=coordinates,
        )
        photos = tuple(
            replace(p, tags=p.tags + (tag,)) if p.id == photo_id else p
            for p in self._state.photos
        )
        self._commit(replace(self._state, photos=photos))
        return tag

    def remove_tag(self, photo_id: str, tag_id: str) -> None:
        photos = tuple(
            replace(p, tags=tuple(t for t in p.tags if t.id != tag_id))
            if p.id == photo_id
            else p
            for p in self._state.photos
        )
        self._commit(replace(self._state, photos=photos))

    # --- relationships ---

    def add_relationship_pair(
        self,
        person1_id: str,
        person2_id: str,
        relationship_type: RelationshipType,
    ) -> tuple[Relationship, Relationship]:
        """Create person1 -> person2 and its inverse edge in one transition."""
        forward = Relationship(
            id=self._new_id(),
            person1_id=person1_id,
            person2_id=person2_id,
            relationship_type=relationship_type,
        )
        backward = Relationship(
            id=self._new_id(),
            person1_id=person2_id,
            person2_id=person1_id,
            relationship_type=inverse(forward.relationship_type),
        )
        self._commit(
            replace(
                self._state,
                relationships=self._state.relationships + (forward, backward),
            )
        )
        return forward, backward

    def update_relationship_type(
        self, relationship_id: str, relationship_type: RelationshipType
    ) -> tuple[Relationship, Relationship | None] | None:
        """Retype an edge and its partner. Returns None if the edge does not exist."""
        current = self._state.get_relationship(relationship_id)
        if current is None:
            return None
        partner = partner_of(current, self._state.relationships)
        updated = replace(current, relationship_type=RelationshipType(relationship_type))
        updated_partner = (
            replace(partner, relationship_type=inverse(updated.relationship_type))
            if partner is not None
            else None
        )
        replacements = {updated.id: updated}
        if updated_partner is not None:
            replacements[updated_partner.id] = updated_partner
        relationships = tuple(
            replacements.get(r.id, r) for r in self._state.relationships
        )
        self._commit(replace(self._state, relationships=relationships))
        return updated, updated_partner

    def delete_relationship(self, relationship_id: str) -> None:
        """Remove the edge and its partner edge."""
        current = self._state.get_relationship(relationship_id)
        if current is None:
            return
        partner = partner_of(current, self._state.relationships)
        doomed = {current.id} | ({partner.id} if partner else set())
        relationships = tuple(r for r in self._state.relationships if r.id not in doomed)
        self._commit(replace(self._state, relationships=relationships))
