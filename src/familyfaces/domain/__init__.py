"""Domain layer: entities and pure query engines. No dependencies on outer layers."""

from familyfaces.domain.entities import (
    AppState,
    Person,
    Photo,
    PhotoTag,
    Relationship,
    RelationshipType,
    TagCoordinates,
)
from familyfaces.domain.search import ParsedQuery, SearchResult

__all__ = [
    "AppState",
    "ParsedQuery",
    "Person",
    "Photo",
    "PhotoTag",
    "Relationship",
    "RelationshipType",
    "SearchResult",
    "TagCoordinates",
]
