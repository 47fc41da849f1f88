"""Keyword search over photos: names, relationship words, and "together" queries.

Lexical heuristics only. Names and keywords are matched as lower-cased substrings
of the query; the first person whose name appears becomes the primary person.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from familyfaces.domain.entities import Person, Photo, Relationship, RelationshipType
from familyfaces.domain.relationships import connected_people_ids

# Checked in this order; the first type with a matching word wins.
RELATION_SYNONYMS: dict[RelationshipType, tuple[str, ...]] = {
    RelationshipType.PARENT: ("father", "mother", "dad", "mom", "parent"),
    RelationshipType.CHILD: ("son", "daughter", "child"),
    RelationshipType.SIBLING: ("brother", "sister", "sibling"),
    RelationshipType.SPOUSE: ("husband", "wife", "spouse"),
    RelationshipType.GRANDPARENT: ("grandfather", "grandmother", "grandparent"),
    RelationshipType.GRANDCHILD: ("grandson", "granddaughter", "grandchild"),
    RelationshipType.UNCLE_AUNT: ("uncle", "aunt"),
    RelationshipType.NEPHEW_NIECE: ("nephew", "niece"),
    RelationshipType.COUSIN: ("cousin",),
}

# Family titles that name a specific person rather than a relationship.
NAMED_TITLES = ("bade papa", "bade mummy")

CONJUNCTION_WORDS = ("together", "with", "and")

MIN_KEYWORD_LENGTH = 4


@dataclass(frozen=True)
class ParsedQuery:
    person_ids: tuple[str, ...]
    include_with: bool


@dataclass(frozen=True)
class SearchResult:
    photos: tuple[Photo, ...]
    query: str


def find_primary_person(query_lower: str, people: Sequence[Person]) -> Person | None:
    """First person (collection order) whose lower-cased name occurs in the query."""
    for person in people:
        name = (person.name or "").lower()
        if name and name in query_lower:
            return person
    return None


def match_relationship_type(query_lower: str) -> RelationshipType | None:
    """Relationship type named by the query, via RELATION_SYNONYMS."""
    for relationship_type, words in RELATION_SYNONYMS.items():
        if any(word in query_lower for word in words):
            return relationship_type
    return None


def _find_titled_person(query_lower: str, people: Sequence[Person]) -> Person | None:
    title = next((t for t in NAMED_TITLES if t in query_lower), None)
    if title is None:
        return None
    return next(
        (p for p in people if (p.name or "").lower() == title),
        None,
    )


def parse_search_query(
    query: str,
    people: Sequence[Person],
    relationships: Sequence[Relationship],
) -> ParsedQuery:
    """Resolve a query to target person ids and the conjunctive flag."""
    query_lower = (query or "").lower()
    person_ids: list[str] = []

    primary = find_primary_person(query_lower, people)
    if primary is not None:
        person_ids.append(primary.id)
        if any(title in query_lower for title in NAMED_TITLES):
            titled = _find_titled_person(query_lower, people)
            if titled is not None:
                person_ids.append(titled.id)
        else:
            target = match_relationship_type(query_lower)
            if target is not None:
                # Stored type containing the target word counts as a match.
                person_ids.extend(
                    connected_people_ids(
                        primary.id,
                        lambda stored: target.value in stored.value,
                        relationships,
                    )
                )

    include_with = any(word in query_lower for word in CONJUNCTION_WORDS)
    return ParsedQuery(person_ids=tuple(person_ids), include_with=include_with)


def keywords(query: str) -> list[str]:
    """Lower-cased whitespace-separated words of at least MIN_KEYWORD_LENGTH chars."""
    return [
        word for word in (query or "").lower().split() if len(word) >= MIN_KEYWORD_LENGTH
    ]


def _matches_keywords(photo: Photo, words: list[str]) -> bool:
    fields = [
        (value or "").lower()
        for value in (photo.event, photo.description, photo.location)
    ]
    return any(word in text for word in words for text in fields)


def search_photos(
    query: str,
    people: Sequence[Person],
    relationships: Sequence[Relationship],
    photos: Sequence[Photo],
) -> SearchResult:
    """Filter photos for a query. Keeps the input order; never raises."""
    parsed = parse_search_query(query, people, relationships)
    targets = set(parsed.person_ids)

    if parsed.include_with and len(parsed.person_ids) > 1:
        found = [p for p in photos if targets <= p.tagged_person_ids()]
    elif parsed.person_ids:
        found = [p for p in photos if targets & p.tagged_person_ids()]
    else:
        words = keywords(query)
        found = [p for p in photos if _matches_keywords(p, words)]

    return SearchResult(photos=tuple(found), query=query)
