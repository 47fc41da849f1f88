"""Relationship graph queries. Pure functions; nothing here mutates state."""

from collections.abc import Callable, Iterable
from typing import assert_never

from familyfaces.domain.entities import Person, Relationship, RelationshipType


def inverse(relationship_type: RelationshipType) -> RelationshipType:
    """Return the type seen from the other end of the edge."""
    match relationship_type:
        case RelationshipType.PARENT:
            return RelationshipType.CHILD
        case RelationshipType.CHILD:
            return RelationshipType.PARENT
        case RelationshipType.GRANDPARENT:
            return RelationshipType.GRANDCHILD
        case RelationshipType.GRANDCHILD:
            return RelationshipType.GRANDPARENT
        case RelationshipType.UNCLE_AUNT:
            return RelationshipType.NEPHEW_NIECE
        case RelationshipType.NEPHEW_NIECE:
            return RelationshipType.UNCLE_AUNT
        case (
            RelationshipType.SIBLING
            | RelationshipType.SPOUSE
            | RelationshipType.COUSIN
            | RelationshipType.IN_LAW
            | RelationshipType.OTHER
        ):
            return relationship_type
        case _:
            assert_never(relationship_type)


def label(relationship_type: RelationshipType, person_name: str) -> str:
    """Readable phrase, e.g. label(PARENT, "Anjali") == "Parent of Anjali"."""
    match relationship_type:
        case RelationshipType.PARENT:
            return f"Parent of {person_name}"
        case RelationshipType.CHILD:
            return f"Child of {person_name}"
        case RelationshipType.SIBLING:
            return f"Sibling of {person_name}"
        case RelationshipType.SPOUSE:
            return f"Spouse of {person_name}"
        case RelationshipType.GRANDPARENT:
            return f"Grandparent of {person_name}"
        case RelationshipType.GRANDCHILD:
            return f"Grandchild of {person_name}"
        case RelationshipType.UNCLE_AUNT:
            return f"Uncle/Aunt of {person_name}"
        case RelationshipType.NEPHEW_NIECE:
            return f"Nephew/Niece of {person_name}"
        case RelationshipType.COUSIN:
            return f"Cousin of {person_name}"
        case RelationshipType.IN_LAW:
            return f"In-law of {person_name}"
        case RelationshipType.OTHER:
            return f"Related to {person_name}"
        case _:
            assert_never(relationship_type)


def relationships_of(
    person_id: str, relationships: Iterable[Relationship]
) -> list[Relationship]:
    """Every edge where the person is either endpoint, in collection order."""
    return [
        rel
        for rel in relationships
        if rel.person1_id == person_id or rel.person2_id == person_id
    ]


def find_relationship(
    person1_id: str, person2_id: str, relationships: Iterable[Relationship]
) -> Relationship | None:
    """First edge (person1_id -> person2_id). The reverse direction is not searched."""
    for rel in relationships:
        if rel.person1_id == person1_id and rel.person2_id == person2_id:
            return rel
    return None


def partner_of(
    relationship: Relationship, relationships: Iterable[Relationship]
) -> Relationship | None:
    """The matching reverse edge of a pair, or None if the pair is broken."""
    expected = inverse(relationship.relationship_type)
    for rel in relationships:
        if (
            rel.id != relationship.id
            and rel.person1_id == relationship.person2_id
            and rel.person2_id == relationship.person1_id
            and rel.relationship_type == expected
        ):
            return rel
    return None


def related_people(
    person_id: str,
    relationship_type: RelationshipType,
    relationships: Iterable[Relationship],
    people: Iterable[Person],
) -> list[Person]:
    """People to whom person_id is `relationship_type`, read from either end of an edge.

    An edge where person_id is person2 counts when the inverse of its stored type
    matches. Edges that point at unknown people are dropped. Result follows `people` order.
    """
    related_ids = set()
    for rel in relationships:
        if rel.person1_id == person_id and rel.relationship_type == relationship_type:
            related_ids.add(rel.person2_id)
        elif (
            rel.person2_id == person_id
            and inverse(rel.relationship_type) == relationship_type
        ):
            related_ids.add(rel.person1_id)
    return [person for person in people if person.id in related_ids]


def connected_people_ids(
    person_id: str,
    matches: Callable[[RelationshipType], bool],
    relationships: Iterable[Relationship],
) -> list[str]:
    """Ids at the other end of every edge touching person_id whose stored type matches."""
    out = []
    for rel in relationships:
        if not matches(rel.relationship_type):
            continue
        if rel.person1_id == person_id:
            out.append(rel.person2_id)
        elif rel.person2_id == person_id:
            out.append(rel.person1_id)
    return out


def are_related(
    person1_id: str, person2_id: str, relationships: Iterable[Relationship]
) -> bool:
    """True if any edge joins the two people, in either direction."""
    rels = list(relationships)
    return (
        find_relationship(person1_id, person2_id, rels) is not None
        or find_relationship(person2_id, person1_id, rels) is not None
    )
