"""Tests for gallery ordering, grouping and date formatting."""

from familyfaces.domain import Person, Photo, PhotoTag
from familyfaces.domain.gallery import (
    NO_DATE,
    UNCATEGORIZED,
    filter_people_by_name,
    format_date,
    group_by_date,
    group_by_event,
    photos_of_person,
    recent_photos,
    sort_by_date_desc,
    tagged_people,
)


def _photo(photo_id: str, date: str | None = None, event: str | None = None) -> Photo:
    return Photo(id=photo_id, url=f"https://example.com/{photo_id}.jpg", date=date, event=event)


def test_format_date():
    assert format_date("2023-01-15") == "January 15, 2023"
    assert format_date("2023-04-05T10:30:00") == "April 5, 2023"
    assert format_date(None) == ""
    assert format_date("") == ""
    assert format_date("someday") == "someday"


def test_sort_by_date_desc_puts_undated_last():
    photos = [
        _photo("a"),
        _photo("b", "2021-06-01"),
        _photo("c", "bad date"),
        _photo("d", "2023-01-01"),
    ]
    assert [p.id for p in sort_by_date_desc(photos)] == ["d", "b", "a", "c"]
    assert [p.id for p in recent_photos(photos, limit=1)] == ["d"]


def test_group_by_date():
    photos = [
        _photo("a", "2023-01-01"),
        _photo("b"),
        _photo("c", "2023-05-01"),
        _photo("d", "2023-01-01T18:00:00"),
    ]
    groups = group_by_date(photos)
    assert list(groups) == ["2023-05-01", "2023-01-01", NO_DATE]
    assert [p.id for p in groups["2023-01-01"]] == ["a", "d"]


def test_group_by_event():
    photos = [
        _photo("a", event="picnic"),
        _photo("b"),
        _photo("c", event="Birthday"),
        _photo("d", event="picnic"),
    ]
    groups = group_by_event(photos)
    assert list(groups) == ["Birthday", "picnic", UNCATEGORIZED]
    assert [p.id for p in groups["picnic"]] == ["a", "d"]


def test_people_views():
    people = [Person(id="p1", name="Anjali"), Person(id="p2", name="Raj")]
    photo = Photo(
        id="x",
        url="https://example.com/x.jpg",
        tags=(
            PhotoTag(id="t1", person_id="p2", photo_id="x"),
            PhotoTag(id="t2", person_id="gone", photo_id="x"),
            PhotoTag(id="t3", person_id="p1", photo_id="x"),
        ),
    )
    assert [p.name for p in tagged_people(photo, people)] == ["Raj", "Anjali"]
    assert photos_of_person("p1", [photo, _photo("y")]) == [photo]
    assert filter_people_by_name(people, "AN") == [people[0]]
    assert filter_people_by_name(people, None) == people


def test_recent_photos_negative_limit_is_empty():
    photos = [_photo("a", "2023-01-01"), _photo("b", "2023-02-01")]
    assert recent_photos(photos, limit=-1) == []
    assert recent_photos(photos, limit=0) == []
