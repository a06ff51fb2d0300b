"""Tests for the reading-position state file."""

import json

import pytest

from cli.context import (
    ReadingPosition,
    _get_position_path,
    load_position,
    save_position,
)


@pytest.fixture
def state_dir(tmp_path, monkeypatch):
    """Point the state directory at a temporary path."""
    path = tmp_path / ".catechism"
    monkeypatch.setattr("cli.context.settings.state_dir", path)
    return path


def test_load_default_position(state_dir):
    """Should return an empty position when no file exists."""
    position = load_position()
    assert isinstance(position, ReadingPosition)
    assert position.paragraph is None


def test_save_and_load_roundtrip(state_dir):
    """Should create the state dir, save, and load the position back."""
    save_position(ReadingPosition(paragraph=484))

    assert _get_position_path() == state_dir / "position.json"
    assert json.loads(_get_position_path().read_text(encoding="utf-8")) == {"paragraph": 484}
    assert load_position().paragraph == 484


def test_load_corrupt_position(state_dir):
    """Should return an empty position if the file is corrupt JSON."""
    state_dir.mkdir()
    (state_dir / "position.json").write_text("{invalid-json", encoding="utf-8")

    assert load_position().paragraph is None


@pytest.mark.parametrize(
    "payload",
    ['{"paragraph": "12"}', '{"paragraph": true}', '{"page": 3}', "[1, 2]"],
)
def test_load_unexpected_shape(state_dir, payload):
    """Wrong types or keys are treated as no saved position."""
    state_dir.mkdir()
    (state_dir / "position.json").write_text(payload, encoding="utf-8")

    assert load_position().paragraph is None
