"""
Family Faces core: clean-architecture layout.

- domain: entities (Person, Relationship, Photo, PhotoTag, AppState) and the
  pure relationship-graph, search and gallery queries. No outer dependencies.
- application: StateStore (integrity-preserving transitions), FamilyService
  (use cases), ports (BlobStorage), DTOs.
- infrastructure: adapters (InMemoryBlobStorage, JsonFileBlobStorage,
  Neo4jBlobStorage) and the seed dataset.
"""

from familyfaces.application import (
    AlreadyRelated,
    BlobStorage,
    Deleted,
    FamilyService,
    Invalid,
    NotFound,
    PersonData,
    PersonSaved,
    PhotoData,
    PhotoSaved,
    RelationshipCreated,
    StateStore,
    TagAdded,
)
from familyfaces.domain import (
    AppState,
    Person,
    Photo,
    PhotoTag,
    Relationship,
    RelationshipType,
    SearchResult,
)
from familyfaces.infrastructure import (
    InMemoryBlobStorage,
    JsonFileBlobStorage,
    Neo4jBlobStorage,
    seed_state,
)

__all__ = [
    "AlreadyRelated",
    "AppState",
    "BlobStorage",
    "Deleted",
    "FamilyService",
    "InMemoryBlobStorage",
    "Invalid",
    "JsonFileBlobStorage",
    "Neo4jBlobStorage",
    "NotFound",
    "Person",
    "PersonData",
    "PersonSaved",
    "Photo",
    "PhotoData",
    "PhotoSaved",
    "PhotoTag",
    "Relationship",
    "RelationshipCreated",
    "RelationshipType",
    "SearchResult",
    "StateStore",
    "TagAdded",
    "seed_state",
]
