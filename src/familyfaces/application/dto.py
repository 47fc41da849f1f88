"""Input records and result variants returned by FamilyService."""

from dataclasses import dataclass

from familyfaces.domain import Person, Photo, PhotoTag, Relationship


@dataclass(frozen=True)
class PersonData:
    """Person fields as entered; id is assigned by the service."""

    name: str
    profile_image: str | None = None
    birthdate: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class PhotoData:
    """Photo fields as entered, plus the people to tag on creation."""

    url: str
    date: str | None = None
    event: str | None = None
    location: str | None = None
    description: str | None = None
    tagged_person_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class PersonSaved:
    person: Person


@dataclass(frozen=True)
class PhotoSaved:
    photo: Photo


@dataclass(frozen=True)
class TagAdded:
    tag: PhotoTag


@dataclass(frozen=True)
class RelationshipCreated:
    relationship: Relationship
    inverse: Relationship


@dataclass(frozen=True)
class RelationshipUpdated:
    relationship: Relationship
    inverse: Relationship | None


@dataclass(frozen=True)
class Deleted:
    entity: str
    entity_id: str


@dataclass(frozen=True)
class Invalid:
    reason: str


@dataclass(frozen=True)
class NotFound:
    entity: str
    entity_id: str


@dataclass(frozen=True)
class AlreadyRelated:
    person1_id: str
    person2_id: str


@dataclass(frozen=True)
class RelationshipView:
    """One edge of a person, resolved for display."""

    relationship: Relationship
    other_person: Person
    label: str
