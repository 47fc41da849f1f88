"""
FastAPI backend: REST API over the family photo organizer.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent
for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager
from typing import Literal

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from neo4j import GraphDatabase
from pydantic import BaseModel

from familyfaces.application import (
    AlreadyRelated,
    BlobStorage,
    FamilyService,
    Invalid,
    NotFound,
    PersonData,
    PhotoData,
    StateStore,
)
from familyfaces.domain import RelationshipType, TagCoordinates
from familyfaces.domain.serialization import (
    person_to_dict,
    photo_to_dict,
    relationship_to_dict,
    tag_to_dict,
)
from familyfaces.infrastructure import (
    InMemoryBlobStorage,
    JsonFileBlobStorage,
    Neo4jBlobStorage,
    ensure_state_blob_constraint,
    seed_state,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

STORAGE_ENV = "FAMILYFACES_STORAGE"
DATA_FILE_ENV = "FAMILYFACES_DATA_FILE"
DEFAULT_DATA_FILE = _REPO_ROOT / ".familyfaces" / "state.json"


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return GraphDatabase.driver(uri, auth=(user, password))


def _build_storage(app: FastAPI) -> BlobStorage:
    kind = os.environ.get(STORAGE_ENV, "file").strip().lower()
    if kind == "memory":
        return InMemoryBlobStorage()
    if kind == "neo4j":
        if getattr(app.state, "driver", None) is None:
            app.state.driver = _get_driver()
            ensure_state_blob_constraint(app.state.driver)
        return Neo4jBlobStorage(app.state.driver)
    if kind != "file":
        logger.warning("Unknown %s=%r, falling back to file storage", STORAGE_ENV, kind)
    path = os.environ.get(DATA_FILE_ENV, "").strip() or DEFAULT_DATA_FILE
    return JsonFileBlobStorage(path)


def get_service(app: FastAPI) -> FamilyService:
    if getattr(app.state, "service", None) is None:
        store = StateStore(_build_storage(app), seed=seed_state())
        app.state.service = FamilyService(store)
    return app.state.service


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.driver = None
    app.state.service = None
    try:
        get_service(app)
        logger.info("Family Faces API ready (storage: %s)", os.environ.get(STORAGE_ENV, "file"))
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()


app = FastAPI(title="Family Faces API", lifespan=lifespan)


def _raise_for(result) -> None:
    """Map service result variants to HTTP errors."""
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    if isinstance(result, NotFound):
        raise HTTPException(
            status_code=404, detail=f"{result.entity.capitalize()} not found"
        )
    if isinstance(result, AlreadyRelated):
        raise HTTPException(status_code=409, detail="Relationship already exists")


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: people ---


class PersonBody(BaseModel):
    name: str
    profileImage: str | None = None
    birthdate: str | None = None
    notes: str | None = None

    def to_data(self) -> PersonData:
        return PersonData(
            name=self.name,
            profile_image=self.profileImage,
            birthdate=self.birthdate,
            notes=self.notes,
        )


@app.get("/people")
def list_people(request: Request, q: str | None = None):
    service = get_service(request.app)
    return [person_to_dict(p) for p in service.list_people(q)]


@app.post("/people")
def create_person(body: PersonBody, request: Request):
    result = get_service(request.app).add_person(body.to_data())
    _raise_for(result)
    return JSONResponse(content=person_to_dict(result.person), status_code=201)


@app.get("/people/{person_id}")
def get_person(person_id: str, request: Request):
    person = get_service(request.app).get_person(person_id)
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return person_to_dict(person)


@app.put("/people/{person_id}")
def update_person(person_id: str, body: PersonBody, request: Request):
    result = get_service(request.app).update_person(person_id, body.to_data())
    _raise_for(result)
    return person_to_dict(result.person)


@app.delete("/people/{person_id}", status_code=204)
def delete_person(person_id: str, request: Request):
    _raise_for(get_service(request.app).delete_person(person_id))


@app.get("/people/{person_id}/relationships")
def person_relationships(person_id: str, request: Request):
    service = get_service(request.app)
    if service.get_person(person_id) is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return [
        {
            "relationship": relationship_to_dict(view.relationship),
            "otherPerson": person_to_dict(view.other_person),
            "label": view.label,
        }
        for view in service.person_relationships(person_id)
    ]


@app.get("/people/{person_id}/relationship-candidates")
def relationship_candidates(person_id: str, request: Request):
    service = get_service(request.app)
    if service.get_person(person_id) is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return [person_to_dict(p) for p in service.relationship_candidates(person_id)]


@app.get("/people/{person_id}/photos")
def person_photos(person_id: str, request: Request):
    service = get_service(request.app)
    return [photo_to_dict(p) for p in service.person_photos(person_id)]


# --- REST: relationships ---


class CreateRelationshipBody(BaseModel):
    person1Id: str
    person2Id: str
    relationshipType: RelationshipType


class UpdateRelationshipBody(BaseModel):
    relationshipType: RelationshipType


@app.get("/relationships")
def list_relationships(request: Request):
    service = get_service(request.app)
    return [relationship_to_dict(r) for r in service.list_relationships()]


@app.post("/relationships")
def create_relationship(body: CreateRelationshipBody, request: Request):
    result = get_service(request.app).create_relationship(
        body.person1Id, body.person2Id, body.relationshipType
    )
    _raise_for(result)
    return JSONResponse(
        content={
            "relationship": relationship_to_dict(result.relationship),
            "inverse": relationship_to_dict(result.inverse),
        },
        status_code=201,
    )


@app.put("/relationships/{relationship_id}")
def update_relationship(
    relationship_id: str, body: UpdateRelationshipBody, request: Request
):
    result = get_service(request.app).update_relationship(
        relationship_id, body.relationshipType
    )
    _raise_for(result)
    return {
        "relationship": relationship_to_dict(result.relationship),
        "inverse": relationship_to_dict(result.inverse) if result.inverse else None,
    }


@app.delete("/relationships/{relationship_id}", status_code=204)
def delete_relationship(relationship_id: str, request: Request):
    _raise_for(get_service(request.app).delete_relationship(relationship_id))


# --- REST: photos and tags ---


class PhotoBody(BaseModel):
    url: str
    date: str | None = None
    event: str | None = None
    location: str | None = None
    description: str | None = None
    taggedPersonIds: list[str] = []

    def to_data(self) -> PhotoData:
        return PhotoData(
            url=self.url,
            date=self.date,
            event=self.event,
            location=self.location,
            description=self.description,
            tagged_person_ids=tuple(self.taggedPersonIds),
        )


class CoordinatesBody(BaseModel):
    x: float
    y: float
    width: float
    height: float


class TagBody(BaseModel):
    personId: str
    coordinates: CoordinatesBody | None = None


@app.get("/photos")
def list_photos(request: Request, group_by: Literal["date", "event"] | None = None):
    groups = get_service(request.app).gallery(group_by)
    if group_by is None:
        return [photo_to_dict(p) for p in groups["all"]]
    return [
        {"group": key, "photos": [photo_to_dict(p) for p in photos]}
        for key, photos in groups.items()
    ]


@app.post("/photos")
def create_photo(body: PhotoBody, request: Request):
    result = get_service(request.app).add_photo(body.to_data())
    _raise_for(result)
    return JSONResponse(content=photo_to_dict(result.photo), status_code=201)


@app.get("/photos/{photo_id}")
def get_photo(photo_id: str, request: Request):
    service = get_service(request.app)
    photo = service.get_photo(photo_id)
    if photo is None:
        raise HTTPException(status_code=404, detail="Photo not found")
    data = photo_to_dict(photo)
    data["people"] = [person_to_dict(p) for p in service.tagged_people(photo_id)]
    return data


@app.put("/photos/{photo_id}")
def update_photo(photo_id: str, body: PhotoBody, request: Request):
    result = get_service(request.app).update_photo(photo_id, body.to_data())
    _raise_for(result)
    return photo_to_dict(result.photo)


@app.delete("/photos/{photo_id}", status_code=204)
def delete_photo(photo_id: str, request: Request):
    _raise_for(get_service(request.app).delete_photo(photo_id))


@app.post("/photos/{photo_id}/tags")
def add_tag(photo_id: str, body: TagBody, request: Request):
    coordinates = (
        TagCoordinates(**body.coordinates.model_dump()) if body.coordinates else None
    )
    result = get_service(request.app).add_tag(photo_id, body.personId, coordinates)
    _raise_for(result)
    return JSONResponse(content=tag_to_dict(result.tag), status_code=201)


@app.delete("/photos/{photo_id}/tags/{tag_id}", status_code=204)
def remove_tag(photo_id: str, tag_id: str, request: Request):
    _raise_for(get_service(request.app).remove_tag(photo_id, tag_id))


# --- REST: search and overview ---


@app.get("/search")
def search(request: Request, q: str = ""):
    result = get_service(request.app).search(q)
    return {"query": result.query, "photos": [photo_to_dict(p) for p in result.photos]}


@app.get("/stats")
def stats(request: Request):
    s = get_service(request.app).stats()
    return {
        "photos": s.photo_count,
        "people": s.people_count,
        "relationships": s.relationship_count,
        "taggedPeople": s.tagged_people_count,
        "events": s.event_count,
    }


@app.get("/recent")
def recent(request: Request, limit: int = Query(3, ge=0)):
    service = get_service(request.app)
    return [photo_to_dict(p) for p in service.recent_photos(limit)]
