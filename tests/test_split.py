"""Tests for splitting files by tu count."""

from __future__ import annotations

from pathlib import Path

import pytest
from lxml import etree

from conftest import header_attribs, tu_ids, write_tmx
from tmxstream.config import SplitOptions
from tmxstream.errors import ConfigurationError
from tmxstream.sink import RotatingFileSink
from tmxstream.split import split_file_by_tu_count


def _split(source: Path, tmp_path: Path, max_tu_count: int) -> list[Path]:
    return split_file_by_tu_count(source, tmp_path / "out" / source.name, SplitOptions(max_tu_count))


class TestSplitting:
    def test_five_units_by_two(self, split_tmx_path: Path, tmp_path: Path):
        paths = _split(split_tmx_path, tmp_path, 2)
        assert [p.name for p in paths] == ["split-1.tmx", "split-2.tmx", "split-3.tmx"]
        assert [tu_ids(p) for p in paths] == [["1", "2"], ["3", "4"], ["5"]]

    def test_below_maximum_gives_single_file(self, split_tmx_path: Path, tmp_path: Path):
        paths = _split(split_tmx_path, tmp_path, 100)
        assert [p.name for p in paths] == ["split-1.tmx"]
        assert tu_ids(paths[0]) == ["1", "2", "3", "4", "5"]
        assert not (tmp_path / "out" / "split-2.tmx").exists()

    def test_exact_multiple_has_no_trailing_file(self, split_tmx_path: Path, tmp_path: Path):
        paths = _split(split_tmx_path, tmp_path, 5)
        assert len(paths) == 1
        assert not (tmp_path / "out" / "split-2.tmx").exists()

    def test_evenly_divisible(self, tmp_path: Path):
        body = "".join(f'<tu tuid="{i}"/>' for i in range(1, 7))
        src = write_tmx(tmp_path / "six.tmx", body)
        paths = _split(src, tmp_path, 3)
        assert [tu_ids(p) for p in paths] == [["1", "2", "3"], ["4", "5", "6"]]

    def test_max_of_one(self, split_tmx_path: Path, tmp_path: Path):
        paths = _split(split_tmx_path, tmp_path, 1)
        assert [tu_ids(p) for p in paths] == [["1"], ["2"], ["3"], ["4"], ["5"]]

    def test_units_concatenate_to_original(self, sample_tmx_path: Path, tmp_path: Path):
        paths = _split(sample_tmx_path, tmp_path, 3)
        combined = [tuid for p in paths for tuid in tu_ids(p)]
        assert combined == tu_ids(sample_tmx_path)

    def test_unit_content_preserved(self, sample_tmx_path: Path, tmp_path: Path):
        paths = _split(sample_tmx_path, tmp_path, 3)
        second = etree.parse(str(paths[1])).getroot()
        seg = second.find("body/tu/tuv/seg")
        assert seg.text == """It's 27°C "outside\""""

    def test_empty_body(self, fixtures_dir: Path, tmp_path: Path):
        paths = _split(fixtures_dir / "empty-body.tmx", tmp_path, 2)
        assert len(paths) == 1
        assert tu_ids(paths[0]) == []


class TestHeaderReplication:
    def test_header_attributes_in_every_file(self, split_tmx_path: Path, tmp_path: Path):
        paths = _split(split_tmx_path, tmp_path, 2)
        for path in paths:
            assert header_attribs(path) == header_attribs(split_tmx_path)

    def test_header_children_in_every_file(self, split_tmx_path: Path, tmp_path: Path):
        paths = _split(split_tmx_path, tmp_path, 2)
        for path in paths:
            header = etree.parse(str(path)).getroot().find("header")
            assert header.findtext("note") == "header note"

    def test_root_attributes_replayed(self, tmp_path: Path):
        src = tmp_path / "ns.tmx"
        src.write_text(
            '<tmx xmlns="http://www.lisa.org/tmx14" version="1.4">'
            '<header srclang="en"/><body><tu tuid="1"/><tu tuid="2"/></body></tmx>',
            encoding="utf-8",
        )
        paths = _split(src, tmp_path, 1)
        assert len(paths) == 2
        root = etree.parse(str(paths[1])).getroot()
        assert root.tag == "{http://www.lisa.org/tmx14}tmx"
        assert root.get("version") == "1.4"

    def test_later_files_start_with_declaration(self, split_tmx_path: Path, tmp_path: Path):
        paths = _split(split_tmx_path, tmp_path, 2)
        text = paths[1].read_text(encoding="utf-8")
        assert text.startswith('<?xml version="1.0" encoding="UTF-8"?><tmx version="1.4"><header ')
        assert text.endswith("</body></tmx>")


class TestOptions:
    @pytest.mark.parametrize("value", [0, -1, True, "2"])
    def test_invalid_max(self, split_tmx_path: Path, tmp_path: Path, value):
        with pytest.raises(ConfigurationError):
            _split(split_tmx_path, tmp_path, value)

    def test_default_max(self):
        assert SplitOptions().max_tu_count == 100000


class TestRotatingSink:
    def test_numbered_paths(self, tmp_path: Path):
        sink = RotatingFileSink(tmp_path / "a" / "file.tmx")
        assert sink.path_for(3) == tmp_path / "a" / "file-3.tmx"

    def test_rotate_and_discard(self, tmp_path: Path):
        with RotatingFileSink(tmp_path / "file.tmx") as sink:
            sink.write("one")
            sink.rotate()
            sink.write("two")
            sink.rotate()
            sink.discard_current()
        assert sink.paths == [tmp_path / "file-1.tmx", tmp_path / "file-2.tmx"]
        assert (tmp_path / "file-1.tmx").read_text() == "one"
        assert (tmp_path / "file-2.tmx").read_text() == "two"
        assert not (tmp_path / "file-3.tmx").exists()
