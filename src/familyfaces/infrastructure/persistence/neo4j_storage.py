"""Neo4j implementation of BlobStorage.
Graph: one (:StateBlob {key, value, updated_at}) node per key; value is the serialized document.
"""

from datetime import datetime, timezone

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT state_blob_key_unique IF NOT EXISTS
FOR (b:StateBlob) REQUIRE b.key IS UNIQUE
"""

_GET_QUERY = """
MATCH (b:StateBlob {key: $key})
RETURN b.value AS value
"""

_PUT_QUERY = """
MERGE (b:StateBlob {key: $key})
SET b.value = $value,
    b.updated_at = $updated_at
RETURN b.key AS key
"""


def ensure_state_blob_constraint(driver) -> None:
    """Create unique constraint on StateBlob(key) if missing."""
    with driver.session() as session:
        session.run(_CONSTRAINT_QUERY)


class Neo4jBlobStorage:
    """Stores blobs as StateBlob nodes, one per key."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def get(self, key: str) -> str | None:
        with self._driver.session() as session:
            record = session.run(_GET_QUERY, key=key).single()
        if not record:
            return None
        return record["value"]

    def put(self, key: str, value: str) -> None:
        with self._driver.session() as session:
            session.run(
                _PUT_QUERY,
                key=key,
                value=value,
                updated_at=datetime.now(timezone.utc).isoformat(),
            )
