#!/usr/bin/env python3
"""One-off copy: move the saved app state from the JSON file store into Neo4j.

Reads the blob under STATE_KEY from FAMILYFACES_DATA_FILE (default
.familyfaces/state.json), checks that it parses as an AppState, and writes it
to a StateBlob node. Run from repo root with .env (NEO4J_URI, NEO4J_USER,
NEO4J_PASSWORD). Idempotent: re-running overwrites the Neo4j copy.
"""
import json
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv  # noqa: E402
from neo4j import GraphDatabase  # noqa: E402

from familyfaces.application import STATE_KEY  # noqa: E402
from familyfaces.domain.serialization import state_from_document  # noqa: E402
from familyfaces.infrastructure import (  # noqa: E402
    JsonFileBlobStorage,
    Neo4jBlobStorage,
    ensure_state_blob_constraint,
)

load_dotenv(REPO_ROOT / ".env")


def main() -> int:
    data_file = os.environ.get("FAMILYFACES_DATA_FILE", "").strip() or (
        REPO_ROOT / ".familyfaces" / "state.json"
    )
    source = JsonFileBlobStorage(data_file)
    blob = source.get(STATE_KEY)
    if blob is None:
        print(f"No saved state in {source.path}. Nothing to copy.")
        return 0

    state = state_from_document(json.loads(blob))
    print(
        f"Found {len(state.people)} people, {len(state.relationships)} relationship "
        f"edges and {len(state.photos)} photos."
    )

    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    driver = GraphDatabase.driver(uri, auth=(user, password))
    try:
        ensure_state_blob_constraint(driver)
        Neo4jBlobStorage(driver).put(STATE_KEY, blob)
        print("Copy complete!")
        return 0
    except Exception as e:
        print(f"Copy failed: {e}", file=sys.stderr)
        return 1
    finally:
        driver.close()


if __name__ == "__main__":
    sys.exit(main())
