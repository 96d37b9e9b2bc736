"""Tests for ingestion of access logs into a tally."""
import pytest
from urlhits_core.exceptions import FileProcessingError, RecordParseError
from urlhits_core.ingest import ingest_file, ingest_lines, iter_access_events
from urlhits_core.record_parser import AccessEvent, GmtDate
from urlhits_core.tally import TallyStore


class TestIterAccessEvents:
    """Test lazy line parsing."""

    def test_skips_blank_lines(self):
        """Test that blank and whitespace-only lines are not records."""
        events = list(iter_access_events(['0|/a\n', '\n', '   \n', '1|/b\n']))
        assert events == [AccessEvent(0, '/a'), AccessEvent(1, '/b')]

    def test_parse_error_has_line_number(self):
        """Test line numbers on parse errors."""
        with pytest.raises(RecordParseError) as exc:
            list(iter_access_events(['0|/a', '', 'garbage']))
        assert exc.value.line_number == 3
        assert exc.value.line == 'garbage'
        assert str(exc.value).startswith('line 3:')

    def test_consumes_lines_lazily(self):
        """Test that lines after a failure are never pulled."""
        pulled = []

        def source():
            for line in ['0|/a', 'bad', '1|/b', '2|/c']:
                pulled.append(line)
                yield line

        with pytest.raises(RecordParseError):
            ingest_lines(source(), TallyStore())
        assert pulled == ['0|/a', 'bad']


class TestIngestLines:
    """Test tallying parsed records."""

    def test_counts_by_gmt_date(self):
        """Test grouping across a day boundary."""
        store = TallyStore()
        added = ingest_lines(['86399|/x', '86400|/y', '0|/x'], store)
        assert added == 3
        assert store.count(GmtDate(1970, 1, 1), '/x') == 2
        assert store.count(GmtDate(1970, 1, 2), '/y') == 1

    def test_accumulates_into_existing_store(self):
        """Test that repeated ingestion keeps adding."""
        store = TallyStore()
        ingest_lines(['0|/x'], store)
        ingest_lines(['0|/x'], store)
        assert store.count(GmtDate(1970, 1, 1), '/x') == 2


class TestIngestFile:
    """Test file-based ingestion."""

    def test_ingest_file(self, write_log):
        """Test reading a small log file."""
        path = write_log(['1000000000|/a', '1000000005|/b', '1000000010|/a'])
        store = TallyStore()
        assert ingest_file(path, store) == 3
        assert store.count(GmtDate(2001, 9, 9), '/a') == 2

    def test_accepts_str_path(self, write_log):
        """Test str paths."""
        path = write_log(['0|/a'])
        store = TallyStore()
        assert ingest_file(str(path), store) == 1

    def test_empty_file(self, tmp_path):
        """Test an empty input."""
        path = tmp_path / 'empty.log'
        path.write_text('')
        store = TallyStore()
        assert ingest_file(path, store) == 0
        assert len(store) == 0

    def test_missing_file(self, tmp_path):
        """Test open failure chaining."""
        with pytest.raises(FileProcessingError) as exc:
            ingest_file(tmp_path / 'nope.log', TallyStore())
        assert isinstance(exc.value.__cause__, FileNotFoundError)

    def test_directory_is_not_readable(self, tmp_path):
        """Test a directory in place of a file."""
        with pytest.raises(FileProcessingError):
            ingest_file(tmp_path, TallyStore())

    def test_invalid_utf8(self, tmp_path):
        """Test decode failure chaining."""
        path = tmp_path / 'bad.log'
        path.write_bytes(b'0|/a\n1|/\xff\xfe\n')
        with pytest.raises(FileProcessingError) as exc:
            ingest_file(path, TallyStore())
        assert isinstance(exc.value.__cause__, UnicodeDecodeError)

    def test_utf8_urls(self, write_log):
        """Test non-ASCII URLs survive verbatim."""
        path = write_log(['0|/café', '0|/café'])
        store = TallyStore()
        ingest_file(path, store)
        assert store.count(GmtDate(1970, 1, 1), '/café') == 2

    def test_parse_error_propagates(self, write_log):
        """Test that malformed records are fatal."""
        path = write_log(['0|/a', 'oops'])
        with pytest.raises(RecordParseError) as exc:
            ingest_file(path, TallyStore())
        assert exc.value.line_number == 2
