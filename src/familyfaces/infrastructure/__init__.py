"""Infrastructure layer: concrete implementations of application ports."""

from familyfaces.infrastructure.file_storage import JsonFileBlobStorage
from familyfaces.infrastructure.memory_storage import InMemoryBlobStorage
from familyfaces.infrastructure.persistence.neo4j_storage import (
    Neo4jBlobStorage,
    ensure_state_blob_constraint,
)
from familyfaces.infrastructure.seed_data import seed_state

__all__ = [
    "InMemoryBlobStorage",
    "JsonFileBlobStorage",
    "Neo4jBlobStorage",
    "ensure_state_blob_constraint",
    "seed_state",
]
