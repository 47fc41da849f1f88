"""Domain entities: Person, Relationship, Photo, PhotoTag and the AppState aggregate."""

from dataclasses import dataclass, field
from enum import StrEnum


def _is_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _check_optional_text(owner: str, **fields) -> None:
    for name, value in fields.items():
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{owner} {name} must be a string.")


class RelationshipType(StrEnum):
    """Closed set of family relationship kinds. "A is <type> of B"."""

    PARENT = "parent"
    CHILD = "child"
    SIBLING = "sibling"
    SPOUSE = "spouse"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    UNCLE_AUNT = "uncle/aunt"
    NEPHEW_NIECE = "nephew/niece"
    COUSIN = "cousin"
    IN_LAW = "in-law"
    OTHER = "other"


@dataclass(frozen=True)
class Person:
    """
    A family member who can be tagged in photos and related to others.
    Identity is the id; every other field is replaced wholesale on update.
    """

    id: str
    name: str
    profile_image: str | None = None
    birthdate: str | None = None
    notes: str | None = None

    def __post_init__(self):
        if not _is_text(self.id):
            raise ValueError("Person id must be non-empty.")
        if not _is_text(self.name):
            raise ValueError("Person name must be non-empty.")
        _check_optional_text(
            "Person",
            profile_image=self.profile_image,
            birthdate=self.birthdate,
            notes=self.notes,
        )


@dataclass(frozen=True)
class Relationship:
    """
    Directed edge: person1 is `relationship_type` of person2.
    Always stored next to its partner edge (person2, person1, inverse type).
    """

    id: str
    person1_id: str
    person2_id: str
    relationship_type: RelationshipType

    def __post_init__(self):
        if not _is_text(self.id):
            raise ValueError("Relationship id must be non-empty.")
        if not _is_text(self.person1_id) or not _is_text(self.person2_id):
            raise ValueError("Relationship endpoints must be non-empty.")
        object.__setattr__(
            self, "relationship_type", RelationshipType(self.relationship_type)
        )


@dataclass(frozen=True)
class TagCoordinates:
    """Bounding box of a tagged face, relative to the photo."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PhotoTag:
    """Links one person to one photo."""

    id: str
    person_id: str
    photo_id: str
    coordinates: TagCoordinates | None = None

    def __post_init__(self):
        for name in ("id", "person_id", "photo_id"):
            if not _is_text(getattr(self, name)):
                raise ValueError(f"PhotoTag {name} must be non-empty.")


@dataclass(frozen=True)
class Photo:
    """
    A photo referenced by URL. Owns its tags: every tag's photo_id is this photo's id.
    """

    id: str
    url: str
    date: str | None = None
    event: str | None = None
    location: str | None = None
    description: str | None = None
    tags: tuple[PhotoTag, ...] = ()

    def __post_init__(self):
        if not _is_text(self.id):
            raise ValueError("Photo id must be non-empty.")
        if not _is_text(self.url):
            raise ValueError("Photo url must be non-empty.")
        _check_optional_text(
            "Photo",
            date=self.date,
            event=self.event,
            location=self.location,
            description=self.description,
        )
        object.__setattr__(self, "tags", tuple(self.tags))
        for tag in self.tags:
            if tag.photo_id != self.id:
                raise ValueError(
                    f"Tag {tag.id} belongs to photo {tag.photo_id}, not {self.id}."
                )

    def tagged_person_ids(self) -> set[str]:
        return {tag.person_id for tag in self.tags}


@dataclass(frozen=True)
class AppState:
    """Aggregate root. Replaced as a whole on every transition."""

    people: tuple[Person, ...] = field(default_factory=tuple)
    relationships: tuple[Relationship, ...] = field(default_factory=tuple)
    photos: tuple[Photo, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "people", tuple(self.people))
        object.__setattr__(self, "relationships", tuple(self.relationships))
        object.__setattr__(self, "photos", tuple(self.photos))

    def get_person(self, person_id: str) -> Person | None:
        return next((p for p in self.people if p.id == person_id), None)

    def get_photo(self, photo_id: str) -> Photo | None:
        return next((p for p in self.photos if p.id == photo_id), None)

    def get_relationship(self, relationship_id: str) -> Relationship | None:
        return next((r for r in self.relationships if r.id == relationship_id), None)
