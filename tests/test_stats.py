"""Tests for header / tu / tuv statistics."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import write_tmx
from tmxstream.errors import FileProcessingError
from tmxstream.stats import collect_file_stats


class TestFileStats:
    def test_header_attributes(self, sample_tmx_path: Path):
        stats = collect_file_stats(sample_tmx_path)
        assert stats.header == {
            "creationtool": "Test Tool",
            "creationtoolversion": "1.0",
            "segtype": "sentence",
            "o-tmf": "tmx",
            "adminlang": "en-US",
            "srclang": "en-US",
            "datatype": "plaintext",
        }

    def test_header_attribute_order(self, sample_tmx_path: Path):
        stats = collect_file_stats(sample_tmx_path)
        assert list(stats.header)[:2] == ["creationtool", "creationtoolversion"]

    def test_counts(self, sample_tmx_path: Path):
        stats = collect_file_stats(sample_tmx_path)
        assert stats.tu_count == 4
        assert stats.tuv_counts == {"en-US": 4, "fr-FR": 4, "es-ES": 4}

    def test_size(self, sample_tmx_path: Path):
        stats = collect_file_stats(sample_tmx_path)
        assert stats.size == sample_tmx_path.stat().st_size

    def test_empty_body(self, fixtures_dir: Path):
        path = fixtures_dir / "empty-body.tmx"
        stats = collect_file_stats(path)
        assert stats.tu_count == 0
        assert stats.tuv_counts == {}
        assert stats.size == path.stat().st_size > 0

    def test_single_language(self, fixtures_dir: Path):
        stats = collect_file_stats(fixtures_dir / "single-language.tmx")
        assert stats.tu_count == 2
        assert stats.tuv_counts == {"en-US": 2}

    def test_mixed_languages(self, fixtures_dir: Path):
        stats = collect_file_stats(fixtures_dir / "mixed-languages.tmx")
        assert stats.tu_count == 2
        assert stats.tuv_counts == {"en-US": 2, "fr-FR": 1, "de-DE": 1, "ja-JP": 1}

    def test_tuv_without_lang_counted_under_empty_key(self, fixtures_dir: Path):
        stats = collect_file_stats(fixtures_dir / "no-lang.tmx")
        assert stats.tuv_counts == {"en-US": 1, "": 1}

    def test_tu_outside_body_not_counted(self, tmp_path: Path):
        path = tmp_path / "stray.tmx"
        path.write_text(
            '<tmx version="1.4"><tu><tuv xml:lang="en"/></tu><body><tu/></body></tmx>',
            encoding="utf-8",
        )
        stats = collect_file_stats(path)
        assert stats.tu_count == 1
        assert stats.tuv_counts == {}

    def test_to_dict_shape(self, fixtures_dir: Path):
        stats = collect_file_stats(fixtures_dir / "single-language.tmx")
        data = stats.to_dict()
        assert data["body"] == {"tu": {"count": 2, "tuv": {"en-US": {"count": 2}}}}
        assert data["header"]["srclang"] == "en-US"
        assert data["size"] == stats.size

    def test_self_closing_header(self, tmp_path: Path):
        path = write_tmx(tmp_path / "h.tmx", "<tu/>", header='<header srclang="de" adminlang=""/>')
        stats = collect_file_stats(path)
        assert stats.header == {"srclang": "de", "adminlang": ""}


class TestErrors:
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileProcessingError) as info:
            collect_file_stats(tmp_path / "missing.tmx")
        assert info.value.stage == "read"
        assert info.value.path == tmp_path / "missing.tmx"

    def test_malformed(self, malformed_tmx_path: Path):
        with pytest.raises(FileProcessingError) as info:
            collect_file_stats(malformed_tmx_path)
        assert info.value.stage == "parse"
        assert info.value.__cause__ is not None
