"""Seeding the video table from YAML."""

import json

import pytest
from sqlmodel import select

from app.db.models.videos import Video
from app.db.seed import load_seed_yaml, seed_all

SEED_YAML = """
videos:
  - file_name: latte.mp4
    title: Latte art
    categories: [Food, Barista]
    likes: 4
  - file_name: dance.mp4
    title: Street battle
    categories: [Dance]
"""


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seed.yaml"
    path.write_text(SEED_YAML, encoding="utf-8")
    return path


def test_seed_inserts_rows(db_session, seed_file):
    assert seed_all(session=db_session, seed_path=seed_file) == {"videos": 2}

    rows = db_session.exec(select(Video).order_by(Video.id)).all()
    assert [r.file_name for r in rows] == ["latte.mp4", "dance.mp4"]
    assert json.loads(rows[0].categories) == ["Food", "Barista"]
    assert rows[0].likes == 4
    assert rows[1].likes == 0
    assert rows[1].description == ""


def test_seed_is_idempotent(db_session, seed_file):
    seed_all(session=db_session, seed_path=seed_file)
    assert seed_all(session=db_session, seed_path=seed_file) == {"videos": 0}


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_seed_yaml(tmp_path / "absent.yaml")


def test_root_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_seed_yaml(path)
