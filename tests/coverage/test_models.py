"""Tests for coverage/models.py."""

import hashlib
from pathlib import Path

import pytest

from covwire.core.errors import ErrorCode, SourceReadError
from covwire.coverage.models import BranchRecord, SourceFile, count_lines, digest

CONTENT = b"".join(f"line {n}\n".encode() for n in range(1, 11))


@pytest.fixture
def source_path(tmp_path: Path) -> Path:
    path = tmp_path / "src" / "mysource.rs"
    path.parent.mkdir()
    path.write_bytes(CONTENT)
    return path


class TestDigest:
    def test_md5_hex(self) -> None:
        assert digest(b"abc") == hashlib.md5(b"abc").hexdigest()

    def test_empty_content(self) -> None:
        assert digest(b"") == "d41d8cd98f00b204e9800998ecf8427e"


class TestCountLines:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("", 0),
            ("one", 1),
            ("one\n", 1),
            ("one\ntwo", 2),
            ("one\n\n", 2),
            ("a\r\nb\r\n", 2),
            ("a\n\x0c\nb\n", 3),
            ("x\u2028y\n", 1),
            ("a\x85b\x1cc\n", 1),
        ],
    )
    def test_counts(self, text: str, expected: int) -> None:
        assert count_lines(text) == expected


class TestSourceFileBuild:
    def test_given_line_hits_when_built_then_coverage_dense(self, source_path: Path) -> None:
        # Given
        hits = {5: 1, 6: 2, 7: 1}

        # When
        source = SourceFile.build("src/mysource.rs", source_path, hits)

        # Then
        assert source.name == "src/mysource.rs"
        assert source.content_digest == hashlib.md5(CONTENT).hexdigest()
        assert source.coverage == (None, None, None, None, 1, 2, 1, None, None, None)
        assert source.branches is None
        assert source.raw_source is None

    def test_given_branch_records_when_built_then_flattened(self, source_path: Path) -> None:
        records = [BranchRecord(3, 1, 1, 1), BranchRecord(4, 1, 2, 0)]
        source = SourceFile.build("src/mysource.rs", source_path, {3: 1}, records)
        assert source.branches == (3, 1, 1, 1, 4, 1, 2, 0)
        assert len(source.branches) == 4 * len(records)

    def test_given_empty_branch_records_when_built_then_empty_not_none(
        self, source_path: Path
    ) -> None:
        source = SourceFile.build("src/mysource.rs", source_path, {}, [])
        assert source.branches == ()

    def test_given_include_raw_when_built_then_source_kept(self, source_path: Path) -> None:
        source = SourceFile.build("src/mysource.rs", source_path, {}, include_raw=True)
        assert source.raw_source == CONTENT.decode()

    def test_given_path_name_when_built_then_posix_name(self, source_path: Path) -> None:
        source = SourceFile.build(Path("src") / "mysource.rs", source_path, {})
        assert source.name == "src/mysource.rs"

    def test_given_missing_file_when_built_then_source_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError) as exc_info:
            SourceFile.build("gone.py", tmp_path / "gone.py", {1: 1})
        assert exc_info.value.code == ErrorCode.SOURCE_UNREADABLE
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_given_directory_when_built_then_source_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError):
            SourceFile.build("src", tmp_path, {})


class TestSourceFileFromContent:
    def test_digest_over_raw_bytes(self) -> None:
        content = "café\n".encode("latin-1")
        source = SourceFile.from_content("a.txt", content, {1: 1})
        assert source.content_digest == hashlib.md5(content).hexdigest()
        assert source.coverage == (1,)

    def test_line_stats(self) -> None:
        source = SourceFile.from_content("a.py", b"a\nb\nc\nd\n", {1: 0, 2: 3, 4: 1})
        assert source.relevant_lines == 3
        assert source.covered_lines == 2

    def test_given_form_feed_line_when_built_then_hits_stay_aligned(self) -> None:
        source = SourceFile.from_content("m.py", b"a = 1\n\x0c\ndef f():\n", {1: 1, 3: 1})
        assert source.coverage == (1, None, 1)

    def test_given_unicode_line_separator_when_built_then_not_a_line_break(self) -> None:
        content = "s = 'x\u2028y'\nprint(s)\n".encode()
        source = SourceFile.from_content("m.py", content, {1: 1, 2: 1})
        assert source.coverage == (1, 1)
