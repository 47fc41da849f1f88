"""Conversion between entities and the persisted document shape.

The document mirrors AppState with camelCase keys:
{"people": [...], "relationships": [...], "photos": [{..., "tags": [...]}]}.
Optional fields that are None are left out.
"""

from typing import Any

from familyfaces.domain.entities import (
    AppState,
    Person,
    Photo,
    PhotoTag,
    Relationship,
    TagCoordinates,
)


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def person_to_dict(person: Person) -> dict[str, Any]:
    return _compact(
        {
            "id": person.id,
            "name": person.name,
            "profileImage": person.profile_image,
            "birthdate": person.birthdate,
            "notes": person.notes,
        }
    )


def person_from_dict(data: dict[str, Any]) -> Person:
    return Person(
        id=data["id"],
        name=data["name"],
        profile_image=data.get("profileImage"),
        birthdate=data.get("birthdate"),
        notes=data.get("notes"),
    )


def relationship_to_dict(rel: Relationship) -> dict[str, Any]:
    return {
        "id": rel.id,
        "person1Id": rel.person1_id,
        "person2Id": rel.person2_id,
        "relationshipType": rel.relationship_type.value,
    }


def relationship_from_dict(data: dict[str, Any]) -> Relationship:
    return Relationship(
        id=data["id"],
        person1_id=data["person1Id"],
        person2_id=data["person2Id"],
        relationship_type=data["relationshipType"],
    )


def coordinates_to_dict(coords: TagCoordinates) -> dict[str, float]:
    return {"x": coords.x, "y": coords.y, "width": coords.width, "height": coords.height}


def coordinates_from_dict(data: dict[str, Any] | None) -> TagCoordinates | None:
    if data is None:
        return None
    return TagCoordinates(
        x=float(data["x"]),
        y=float(data["y"]),
        width=float(data["width"]),
        height=float(data["height"]),
    )


def tag_to_dict(tag: PhotoTag) -> dict[str, Any]:
    return _compact(
        {
            "id": tag.id,
            "personId": tag.person_id,
            "photoId": tag.photo_id,
            "coordinates": coordinates_to_dict(tag.coordinates) if tag.coordinates else None,
        }
    )


def tag_from_dict(data: dict[str, Any]) -> PhotoTag:
    return PhotoTag(
        id=data["id"],
        person_id=data["personId"],
        photo_id=data["photoId"],
        coordinates=coordinates_from_dict(data.get("coordinates")),
    )


def photo_to_dict(photo: Photo) -> dict[str, Any]:
    data = _compact(
        {
            "id": photo.id,
            "url": photo.url,
            "date": photo.date,
            "event": photo.event,
            "location": photo.location,
            "description": photo.description,
        }
    )
    data["tags"] = [tag_to_dict(t) for t in photo.tags]
    return data


def photo_from_dict(data: dict[str, Any]) -> Photo:
    return Photo(
        id=data["id"],
        url=data["url"],
        date=data.get("date"),
        event=data.get("event"),
        location=data.get("location"),
        description=data.get("description"),
        tags=tuple(tag_from_dict(t) for t in data.get("tags") or []),
    )


def state_to_document(state: AppState) -> dict[str, Any]:
    return {
        "people": [person_to_dict(p) for p in state.people],
        "relationships": [relationship_to_dict(r) for r in state.relationships],
        "photos": [photo_to_dict(p) for p in state.photos],
    }


def state_from_document(document: Any) -> AppState:
    """Build AppState from a decoded document.

    Raises ValueError, KeyError or TypeError when the document does not have the expected shape.
    """
    if not isinstance(document, dict):
        raise ValueError("State document must be a JSON object.")
    return AppState(
        people=tuple(person_from_dict(p) for p in document["people"]),
        relationships=tuple(relationship_from_dict(r) for r in document["relationships"]),
        photos=tuple(photo_from_dict(p) for p in document["photos"]),
    )
