from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone

import pytest
from sqlmodel import Session

from flipcards.db.session import build_engine, init_db
from flipcards.schemas.flashcard_schemas import FlashcardFilter
from flipcards.services import flashcard_service, folder_service
from flipcards.utils.errors import NotFoundError, ValidationError


def utc_ts(*args):
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


# --- Pastas ---

def test_create_folder_trims_name(session):
    folder = folder_service.create_folder(session, "  Anatomy  ")

    assert folder.id is not None
    assert folder.name == "Anatomy"
    assert folder.created_at > 0


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_folder_rejects_blank_name(session, name):
    with pytest.raises(ValidationError):
        folder_service.create_folder(session, name)


def test_list_folders_newest_first(session):
    first = folder_service.create_folder(session, "first")
    second = folder_service.create_folder(session, "second")

    assert [f.id for f in folder_service.list_folders(session)] == [second.id, first.id]


def test_rename_folder(session):
    folder = folder_service.create_folder(session, "old")

    renamed = folder_service.rename_folder(session, folder.id, " new ")

    assert renamed.name == "new"
    assert folder_service.get_folder(session, folder.id).name == "new"


def test_rename_missing_folder_raises_not_found(session):
    with pytest.raises(NotFoundError):
        folder_service.rename_folder(session, 999, "x")


def test_rename_folder_rejects_blank_name(session):
    folder = folder_service.create_folder(session, "keep")

    with pytest.raises(ValidationError):
        folder_service.rename_folder(session, folder.id, "  ")


def test_delete_folder_unfiles_cards_without_deleting_them(session):
    folder = folder_service.create_folder(session, "doomed")
    other = folder_service.create_folder(session, "other")
    filed = [
        flashcard_service.create_flashcard(session, f"https://x/{i}.png", folder_id=folder.id)
        for i in range(3)
    ]
    kept = flashcard_service.create_flashcard(session, "https://x/kept.png", folder_id=other.id)

    folder_service.delete_folder(session, folder.id)
    session.expire_all()

    assert folder_service.get_folder(session, folder.id) is None
    assert flashcard_service.count_flashcards(session) == 4
    for card in filed:
        assert flashcard_service.get_flashcard(session, card.id).folder_id is None
    assert flashcard_service.get_flashcard(session, kept.id).folder_id == other.id


def test_delete_missing_folder_raises_not_found(session):
    with pytest.raises(NotFoundError):
        folder_service.delete_folder(session, 42)


# --- Cards ---

def test_create_then_get_has_defaults(session):
    card = flashcard_service.create_flashcard(session, "https://x/y.png")

    fetched = flashcard_service.get_flashcard(session, card.id)
    assert fetched.image_url == "https://x/y.png"
    assert fetched.notes == ""
    assert fetched.folder_id is None
    assert fetched.starred is False
    assert fetched.last_visited is None
    assert fetched.thumb_url is None


def test_create_flashcard_requires_image_url(session):
    with pytest.raises(ValidationError):
        flashcard_service.create_flashcard(session, "  ")


def test_create_flashcard_rejects_unknown_folder(session):
    with pytest.raises(ValidationError):
        flashcard_service.create_flashcard(session, "https://x/y.png", folder_id=77)


def test_get_missing_flashcard_returns_none(session):
    assert flashcard_service.get_flashcard(session, 1234) is None


def test_ids_are_not_reused(session):
    first_id = flashcard_service.create_flashcard(session, "https://x/1.png").id
    flashcard_service.delete_flashcard(session, first_id)

    second = flashcard_service.create_flashcard(session, "https://x/2.png")

    assert second.id != first_id


def test_update_flashcard_only_touches_given_fields(session):
    folder = folder_service.create_folder(session, "f")
    card = flashcard_service.create_flashcard(session, "https://x/y.png", notes="keep", folder_id=folder.id)

    updated = flashcard_service.update_flashcard(session, card.id, {"starred": True})

    assert updated.starred is True
    assert updated.notes == "keep"
    assert updated.folder_id == folder.id


def test_update_flashcard_can_clear_folder(session):
    folder = folder_service.create_folder(session, "f")
    card = flashcard_service.create_flashcard(session, "https://x/y.png", folder_id=folder.id)

    updated = flashcard_service.update_flashcard(session, card.id, {"folder_id": None, "notes": "hello"})

    assert updated.folder_id is None
    assert updated.notes == "hello"


def test_update_missing_flashcard_raises_not_found(session):
    with pytest.raises(NotFoundError):
        flashcard_service.update_flashcard(session, 5, {"notes": "x"})


def test_update_rejects_future_visit(session):
    card = flashcard_service.create_flashcard(session, "https://x/y.png")

    with pytest.raises(ValidationError):
        flashcard_service.update_flashcard(session, card.id, {"last_visited": 10**12})


def test_toggle_star_twice_restores_original(session):
    card = flashcard_service.create_flashcard(session, "https://x/y.png")

    assert flashcard_service.toggle_star(session, card.id).starred is True
    assert flashcard_service.toggle_star(session, card.id).starred is False


def test_toggle_star_from_concurrent_sessions_is_atomic(tmp_path):
    # Banco em arquivo: cada thread abre a própria conexão
    engine = build_engine(f"sqlite:///{tmp_path / 'cards.db'}")
    init_db(engine)
    with Session(engine) as session:
        card_id = flashcard_service.create_flashcard(session, "https://x/y.png").id

    def toggle(_):
        with Session(engine) as session:
            flashcard_service.toggle_star(session, card_id)

    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(toggle, range(10)))

    with Session(engine) as session:
        assert flashcard_service.get_flashcard(session, card_id).starred is False
    engine.dispose()


def test_update_rejects_null_starred(session):
    card = flashcard_service.toggle_star(session, flashcard_service.create_flashcard(session, "https://x/y.png").id)

    with pytest.raises(ValidationError):
        flashcard_service.update_flashcard(session, card.id, {"starred": None})

    session.expire_all()
    assert flashcard_service.get_flashcard(session, card.id).starred is True


def test_toggle_star_missing_raises_not_found(session):
    with pytest.raises(NotFoundError):
        flashcard_service.toggle_star(session, 404)


def test_record_visit_sets_timestamp(session):
    card = flashcard_service.create_flashcard(session, "https://x/y.png")

    visited = flashcard_service.record_visit(session, card.id, now=utc_ts(2024, 3, 1, 12, 0))

    assert visited.last_visited == utc_ts(2024, 3, 1, 12, 0)


def test_delete_flashcard(session):
    card_id = flashcard_service.create_flashcard(session, "https://x/y.png").id

    flashcard_service.delete_flashcard(session, card_id)

    assert flashcard_service.get_flashcard(session, card_id) is None
    with pytest.raises(NotFoundError):
        flashcard_service.delete_flashcard(session, card_id)


# --- Listagem e filtros ---

def test_list_without_filters_matches_count_newest_first(session):
    cards = [flashcard_service.create_flashcard(session, f"https://x/{i}.png") for i in range(4)]

    listed = flashcard_service.list_flashcards(session)

    assert len(listed) == flashcard_service.count_flashcards(session) == 4
    assert [c.id for c in listed] == [c.id for c in reversed(cards)]


def test_starred_filter_returns_only_starred(session):
    a = flashcard_service.create_flashcard(session, "https://x/a.png")
    flashcard_service.create_flashcard(session, "https://x/b.png")
    flashcard_service.toggle_star(session, a.id)

    listed = flashcard_service.list_flashcards(session, FlashcardFilter(starred=True))

    assert [c.id for c in listed] == [a.id]
    assert all(c.starred for c in listed)


def test_folder_filter_and_scoped_count(session):
    folder = folder_service.create_folder(session, "f")
    inside = flashcard_service.create_flashcard(session, "https://x/in.png", folder_id=folder.id)
    flashcard_service.create_flashcard(session, "https://x/out.png")

    listed = flashcard_service.list_flashcards(session, FlashcardFilter(folder_id=folder.id))

    assert [c.id for c in listed] == [inside.id]
    assert flashcard_service.count_flashcards(session, folder.id) == 1


def test_date_filter_uses_inclusive_utc_day(session):
    start = flashcard_service.create_flashcard(session, "https://x/start.png")
    end = flashcard_service.create_flashcard(session, "https://x/end.png")
    outside = flashcard_service.create_flashcard(session, "https://x/next.png")
    flashcard_service.record_visit(session, start.id, now=utc_ts(2024, 1, 1, 0, 0, 0))
    flashcard_service.record_visit(session, end.id, now=utc_ts(2024, 1, 1, 23, 59, 59))
    flashcard_service.record_visit(session, outside.id, now=utc_ts(2024, 1, 2, 0, 0, 0))

    listed = flashcard_service.list_flashcards(session, FlashcardFilter(visited_on=date(2024, 1, 1)))

    assert {c.id for c in listed} == {start.id, end.id}


def test_filters_combine_with_and(session):
    folder = folder_service.create_folder(session, "f")
    match = flashcard_service.create_flashcard(session, "https://x/1.png", folder_id=folder.id)
    unstarred = flashcard_service.create_flashcard(session, "https://x/2.png", folder_id=folder.id)
    elsewhere = flashcard_service.create_flashcard(session, "https://x/3.png")
    for card in (match, elsewhere):
        flashcard_service.toggle_star(session, card.id)
    for card in (match, unstarred, elsewhere):
        flashcard_service.record_visit(session, card.id, now=utc_ts(2024, 5, 5, 8, 0))

    listed = flashcard_service.list_flashcards(
        session, FlashcardFilter(folder_id=folder.id, starred=True, visited_on=date(2024, 5, 5))
    )

    assert [c.id for c in listed] == [match.id]


def test_visited_dates_split_on_utc_boundary(session):
    late = flashcard_service.create_flashcard(session, "https://x/late.png")
    early = flashcard_service.create_flashcard(session, "https://x/early.png")
    same_day = flashcard_service.create_flashcard(session, "https://x/same.png")
    flashcard_service.create_flashcard(session, "https://x/never.png")
    flashcard_service.record_visit(session, late.id, now=utc_ts(2024, 1, 1, 23, 59))
    flashcard_service.record_visit(session, early.id, now=utc_ts(2024, 1, 2, 0, 1))
    flashcard_service.record_visit(session, same_day.id, now=utc_ts(2024, 1, 2, 18, 30))

    dates = flashcard_service.list_visited_dates(session)

    assert [d.isoformat() for d in dates] == ["2024-01-02", "2024-01-01"]


def test_visited_dates_empty_when_nothing_visited(session):
    flashcard_service.create_flashcard(session, "https://x/y.png")

    assert flashcard_service.list_visited_dates(session) == []

