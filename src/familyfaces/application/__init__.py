"""Application layer: state store, use cases, ports, and DTOs. Depends only on domain."""

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
from familyfaces.application.family_service import FamilyService
from familyfaces.application.ports import BlobStorage, IdFactory, new_id
from familyfaces.application.state_store import STATE_KEY, StateStore

__all__ = [
    "AlreadyRelated",
    "BlobStorage",
    "Deleted",
    "FamilyService",
    "IdFactory",
    "Invalid",
    "NotFound",
    "PersonData",
    "PersonSaved",
    "PhotoData",
    "PhotoSaved",
    "RelationshipCreated",
    "RelationshipUpdated",
    "RelationshipView",
    "STATE_KEY",
    "StateStore",
    "TagAdded",
    "new_id",
]
