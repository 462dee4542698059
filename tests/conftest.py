"""Shared pytest fixtures for tmxstream tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest
from lxml import etree

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_tmx_path() -> Path:
    return FIXTURES_DIR / "sample.tmx"


@pytest.fixture
def split_tmx_path() -> Path:
    return FIXTURES_DIR / "split.tmx"


@pytest.fixture
def malformed_tmx_path() -> Path:
    return FIXTURES_DIR / "malformed.tmx"


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """A scratch copy of the fixtures, used as the batch working directory."""
    work = tmp_path / "work"
    shutil.copytree(FIXTURES_DIR, work)
    return work


def write_tmx(path: Path, body: str, header: str = '<header srclang="en-US"/>') -> Path:
    """Write a minimal TMX document with the given header and body content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<tmx version="1.4">{header}<body>{body}</body></tmx>',
        encoding="utf-8",
    )
    return path


def tu_ids(path: Path) -> list[str]:
    """``tuid`` of every ``tu`` in *path*, in document order."""
    return [tu.get("tuid") for tu in etree.parse(str(path)).getroot().iter("tu")]


def header_attribs(path: Path) -> dict[str, str]:
    return dict(etree.parse(str(path)).getroot().find("header").attrib)
