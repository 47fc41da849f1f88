"""Demo family used when no saved state exists."""

from familyfaces.domain import AppState, Person, Photo, PhotoTag, Relationship

_PEXELS = "https://images.pexels.com/photos/{id}/pexels-photo-{id}.jpeg?auto=compress&cs=tinysrgb&w=1260&h=750&dpr=1"


def _image(pexels_id: int) -> str:
    return _PEXELS.format(id=pexels_id)


def _photo(photo_id, pexels_id, date, event, location, description, tags) -> Photo:
    return Photo(
        id=photo_id,
        url=_image(pexels_id),
        date=date,
        event=event,
        location=location,
        description=description,
        tags=tuple(
            PhotoTag(id=tag_id, person_id=person_id, photo_id=photo_id)
            for tag_id, person_id in tags
        ),
    )


def seed_state() -> AppState:
    people = (
        Person(id="p1", name="Anjali", profile_image=_image(1239291), birthdate="1990-05-15"),
        Person(id="p2", name="Raj", profile_image=_image(220453), birthdate="1988-10-20"),
        Person(id="p3", name="Bade Papa", profile_image=_image(834863), birthdate="1960-03-12"),
        Person(id="p4", name="Bade Mummy", profile_image=_image(3152046), birthdate="1962-07-28"),
        Person(id="p5", name="Maya", profile_image=_image(733872), birthdate="1992-11-30"),
    )
    edges = [
        ("r1", "p1", "p3", "child"),
        ("r2", "p3", "p1", "parent"),
        ("r3", "p1", "p4", "child"),
        ("r4", "p4", "p1", "parent"),
        ("r5", "p3", "p4", "spouse"),
        ("r6", "p4", "p3", "spouse"),
        ("r7", "p1", "p2", "spouse"),
        ("r8", "p2", "p1", "spouse"),
        ("r9", "p1", "p5", "sibling"),
        ("r10", "p5", "p1", "sibling"),
    ]
    relationships = tuple(
        Relationship(id=rid, person1_id=a, person2_id=b, relationship_type=t)
        for rid, a, b, t in edges
    )
    photos = (
        _photo(
            "photo1", 1128318, "2023-01-15", "Family Dinner", "Home",
            "Family dinner celebration",
            [("t1", "p1"), ("t2", "p2")],
        ),
        _photo(
            "photo2", 3767420, "2023-02-20", "Birthday Party", "Garden",
            "Anjali's birthday celebration",
            [("t3", "p1"), ("t4", "p3"), ("t5", "p4")],
        ),
        _photo(
            "photo3", 1416736, "2022-12-25", "Christmas", "Living Room",
            "Christmas family gathering",
            [("t6", "p3"), ("t7", "p4")],
        ),
        _photo(
            "photo4", 1157940, "2023-03-10", "Picnic", "Park",
            "Family picnic at the park",
            [("t8", "p1"), ("t9", "p5")],
        ),
        _photo(
            "photo5", 1471235, "2023-04-05", "Vacation", "Beach",
            "Family vacation at the beach",
            [("t10", "p1"), ("t11", "p2"), ("t12", "p5")],
        ),
    )
    return AppState(people=people, relationships=relationships, photos=photos)
