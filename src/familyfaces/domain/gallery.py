"""Gallery views: date ordering, grouping by date or event, and counts."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from familyfaces.domain.entities import AppState, Person, Photo

NO_DATE = "No Date"
UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class GalleryStats:
    photo_count: int
    people_count: int
    relationship_count: int
    tagged_people_count: int
    event_count: int


def parse_date(value: str | None) -> date | None:
    """Parse the leading YYYY-MM-DD of an ISO date/datetime string."""
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def format_date(value: str | None) -> str:
    """'2023-01-15' -> 'January 15, 2023'."""
    if not value:
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return value
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def sort_by_date_desc(photos: Iterable[Photo]) -> list[Photo]:
    """Newest first; photos without a usable date go last, in their original order."""
    dated = [(parse_date(p.date), p) for p in photos]
    with_date = sorted(
        ((d, p) for d, p in dated if d is not None),
        key=lambda pair: pair[0],
        reverse=True,
    )
    return [p for _, p in with_date] + [p for d, p in dated if d is None]


def recent_photos(photos: Iterable[Photo], limit: int = 3) -> list[Photo]:
    return sort_by_date_desc(photos)[: max(limit, 0)]


def group_by_date(photos: Iterable[Photo]) -> dict[str, list[Photo]]:
    """Group by calendar day (ISO key). Newest day first, NO_DATE last."""
    groups: dict[str, list[Photo]] = {}
    for photo in photos:
        parsed = parse_date(photo.date)
        key = parsed.isoformat() if parsed else NO_DATE
        groups.setdefault(key, []).append(photo)
    ordered = sorted((k for k in groups if k != NO_DATE), reverse=True)
    if NO_DATE in groups:
        ordered.append(NO_DATE)
    return {key: groups[key] for key in ordered}


def group_by_event(photos: Iterable[Photo]) -> dict[str, list[Photo]]:
    """Group by event name, alphabetical, UNCATEGORIZED last."""
    groups: dict[str, list[Photo]] = {}
    for photo in photos:
        groups.setdefault(photo.event or UNCATEGORIZED, []).append(photo)
    ordered = sorted((k for k in groups if k != UNCATEGORIZED), key=str.lower)
    if UNCATEGORIZED in groups:
        ordered.append(UNCATEGORIZED)
    return {key: groups[key] for key in ordered}


def photos_of_person(person_id: str, photos: Iterable[Photo]) -> list[Photo]:
    return [p for p in photos if person_id in p.tagged_person_ids()]


def tagged_people(photo: Photo, people: Sequence[Person]) -> list[Person]:
    """People tagged in the photo, in tag order. Tags for unknown people are skipped."""
    by_id = {p.id: p for p in people}
    return [by_id[t.person_id] for t in photo.tags if t.person_id in by_id]


def filter_people_by_name(people: Iterable[Person], name_filter: str | None) -> list[Person]:
    needle = (name_filter or "").strip().lower()
    return [p for p in people if needle in p.name.lower()]


def gallery_stats(state: AppState) -> GalleryStats:
    tagged = {t.person_id for photo in state.photos for t in photo.tags}
    events = {photo.event for photo in state.photos if photo.event}
    return GalleryStats(
        photo_count=len(state.photos),
        people_count=len(state.people),
        relationship_count=len(state.relationships) // 2,
        tagged_people_count=len(tagged),
        event_count=len(events),
    )
