from pathlib import Path

import pytest

from sqldupfinder.input_sources import SourceFile
from sqldupfinder.scanner import Scanner


def _item(path: Path, size: int = None) -> SourceFile:
    if size is None:
        size = path.stat().st_size
    return SourceFile(path=path, display_name=str(path), size_bytes=size)


class TestScanner:
    @pytest.fixture
    def scanner(self, logger):
        return Scanner(logger=logger)

    def test_extracts_occurrences(self, scanner, php_app):
        path = php_app / "src" / "users.php"
        result = scanner.scan_file(_item(path))
        assert not result.skipped
        assert [occ.line_no for occ in result.occurrences] == [4, 5, 6, 9]
        assert {occ.source for occ in result.occurrences} == {str(path)}
        assert result.occurrences[2].query == "select *\n    from USERS where status='active'\";"
        assert result.occurrences[0].normalized == result.occurrences[2].normalized

    def test_empty_file_yields_nothing(self, scanner, tmp_path):
        path = tmp_path / "empty.php"
        path.write_bytes(b"")
        result = scanner.scan_file(_item(path))
        assert not result.skipped
        assert result.occurrences == []

    def test_large_file_scanned_without_cap(self, scanner, tmp_path):
        path = tmp_path / "big.php"
        path.write_text("SELECT 1;", encoding="utf-8")
        result = scanner.scan_file(_item(path, size=200 * 1024 * 1024))
        assert not result.skipped
        assert [occ.normalized for occ in result.occurrences] == ["select N;"]

    def test_size_cap_is_opt_in(self, logger, tmp_path, log_buffer):
        path = tmp_path / "big.php"
        path.write_text("SELECT 1;", encoding="utf-8")
        result = Scanner(logger=logger, max_file_mb=1).scan_file(_item(path, size=2 * 1024 * 1024))
        assert result.skipped
        assert result.occurrences == []
        assert "size cap" in log_buffer.getvalue()

    def test_unreadable_file_is_skipped(self, scanner, tmp_path, log_buffer):
        result = scanner.scan_file(_item(tmp_path / "gone.php", size=10))
        assert result.skipped
        assert "read failed" in log_buffer.getvalue()

    def test_file_with_nul_bytes_is_still_scanned(self, scanner, tmp_path, log_buffer):
        path = tmp_path / "blob.php"
        path.write_bytes(b"<?php\x00\n$q = 'SELECT a FROM t;';\n$r = 'SELECT a FROM t;';\n")
        result = scanner.scan_file(_item(path))
        assert not result.skipped
        assert [occ.normalized for occ in result.occurrences] == ["select a from t;", "select a from t;"]
        assert [occ.line_no for occ in result.occurrences] == [2, 3]
        assert "Looks binary" in log_buffer.getvalue()

    def test_utf16_file_is_decoded(self, scanner, tmp_path):
        path = tmp_path / "wide.php"
        path.write_bytes("$q = 'DELETE FROM t WHERE id = 5;';".encode("utf-16"))
        result = scanner.scan_file(_item(path))
        assert [occ.normalized for occ in result.occurrences] == ["delete from t where id = N;"]

    def test_file_without_sql(self, scanner, tmp_path):
        path = tmp_path / "plain.php"
        path.write_text("<?php echo 'hello';\n", encoding="utf-8")
        result = scanner.scan_file(_item(path))
        assert not result.skipped
        assert result.occurrences == []
