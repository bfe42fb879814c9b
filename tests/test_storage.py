import sys
from pathlib import Path

import pytest

from tiles2048.storage import (
    SUPPORTED_SIZES,
    GameProgress,
    Preferences,
    Storage,
    default_data_dir,
)
from tiles2048.theme import Effect, Theme


@pytest.fixture
def storage(tmp_path):
    return Storage(tmp_path / "data")


def _progress(size, score=128):
    cells = [[2 if (r + c) % 2 else 0 for c in range(size)] for r in range(size)]
    return GameProgress(size, cells, score, False, True, False)


def test_storage_creates_directory(tmp_path):
    s = Storage(tmp_path / "a" / "b")
    assert s.data_dir.is_dir()


def test_missing_preferences_give_defaults_and_file(storage):
    assert storage.load_preferences() == Preferences()
    assert storage.preferences_path.exists()


def test_preferences_round_trip(storage):
    prefs = Preferences([10, 20, 30, 40], 2, Theme.FOREST, Effect.RINGS)
    storage.save_preferences(prefs)
    assert storage.load_preferences() == prefs


def test_preferences_file_holds_seven_ints(storage):
    storage.save_preferences(Preferences())
    assert len(storage.preferences_path.read_bytes()) == 28


def test_short_preferences_file_is_reset(storage, tmp_path):
    storage.preferences_path.write_bytes(b"\x01\x02")
    assert storage.load_preferences() == Preferences()
    reference = Storage(tmp_path / "ref")
    reference.save_preferences(Preferences())
    assert storage.preferences_path.read_bytes() == reference.preferences_path.read_bytes()


def test_invalid_theme_is_reset(storage):
    storage.save_preferences(Preferences(theme=9))
    assert storage.load_preferences() == Preferences()


def test_no_progress_file(storage):
    assert storage.load_progress(0) is None


@pytest.mark.parametrize("index", range(len(SUPPORTED_SIZES)))
def test_progress_round_trip(storage, index):
    progress = _progress(SUPPORTED_SIZES[index])
    storage.save_progress(progress)
    assert storage.load_progress(index) == progress


def test_empty_board_without_score_is_no_progress(storage):
    storage.save_progress(GameProgress(4, [[0] * 4 for _ in range(4)], 0))
    assert storage.load_progress(0) is None


def test_score_alone_counts_as_progress(storage):
    progress = GameProgress(5, [[0] * 5 for _ in range(5)], 12)
    storage.save_progress(progress)
    assert storage.load_progress(1) == progress


def test_save_keeps_other_slots(storage):
    first = _progress(4)
    second = _progress(8, score=512)
    storage.save_progress(first)
    storage.save_progress(second)
    assert storage.load_progress(0) == first
    assert storage.load_progress(3) == second


def test_delete_clears_only_that_size(storage):
    storage.save_progress(_progress(4))
    storage.save_progress(_progress(6))
    storage.delete_progress(4)
    assert storage.load_progress(0) is None
    assert storage.load_progress(2) == _progress(6)


@pytest.mark.parametrize("index", [-1, len(SUPPORTED_SIZES)])
def test_out_of_range_index(storage, index):
    storage.save_progress(_progress(4))
    assert storage.load_progress(index) is None


def test_unsupported_size_is_not_saved(storage):
    storage.save_progress(_progress(7))
    assert not storage.progress_path.exists()


def test_truncated_progress_file(storage):
    storage.progress_path.write_bytes(b"\x00" * 10)
    assert storage.load_progress(0) is None
    storage.save_progress(_progress(4))
    assert storage.load_progress(0) == _progress(4)


def test_wrong_version_is_ignored(storage):
    storage.save_progress(_progress(4))
    data = storage.progress_path.read_bytes()
    storage.progress_path.write_bytes(data[:-4] + b"\x03\x00\x00\x00")
    assert storage.load_progress(0) is None


def test_default_dir_unix(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("HOME", str(tmp_path))
    assert default_data_dir() == tmp_path / ".config" / "my2048"


def test_default_dir_windows(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setenv("APPDATA", str(tmp_path))
    assert default_data_dir() == tmp_path / "My2048"


def test_default_dir_without_home(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("HOME", raising=False)
    assert default_data_dir() == Path(".")