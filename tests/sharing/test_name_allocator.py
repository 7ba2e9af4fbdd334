import pytest

from share_agent.core.exceptions import ShareNameGenerationError
from share_agent.models import ShareRecord
from share_agent.services.sharing import MAX_NAME_ATTEMPTS, allocate_share_name, base_name_for_path


def records(*names):
    return [ShareRecord(name=name, path=f"/Home/{i}") for i, name in enumerate(names)]


def test_free_name_is_returned_unchanged():
    assert allocate_share_name("Photos", records("Music", "Videos")) == "Photos"


def test_collision_appends_counter_starting_at_two():
    assert allocate_share_name("Photos", records("Photos")) == "Photos (2)"


def test_taken_counters_are_skipped():
    assert allocate_share_name("Photos", records("Photos", "Photos (2)", "Photos (3)")) == "Photos (4)"


def test_gaps_are_reused():
    assert allocate_share_name("Photos", records("Photos", "Photos (3)")) == "Photos (2)"


def test_exhausted_after_ten_attempts():
    names = ["X"] + [f"X ({i})" for i in range(2, MAX_NAME_ATTEMPTS + 1)]
    assert len(names) == 10

    with pytest.raises(ShareNameGenerationError) as exc_info:
        allocate_share_name("X", records(*names))

    assert "[share-name-generation-failed]" in str(exc_info.value)


def test_last_slot_is_still_usable():
    names = ["X"] + [f"X ({i})" for i in range(2, MAX_NAME_ATTEMPTS)]
    assert allocate_share_name("X", records(*names)) == "X (10)"


def test_base_name_for_path():
    assert base_name_for_path("/Home/Photos") == "Photos"
    assert base_name_for_path("/Home/Photos/") == "Photos"
    assert base_name_for_path("/Home") == "Home"
    assert base_name_for_path("/") == "Share"
