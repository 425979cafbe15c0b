import io
from pathlib import Path

import pytest
from rich.console import Console

from sqldupfinder.console import RichLogger
from sqldupfinder.models import QueryOccurrence
from sqldupfinder.normalize import canonicalize

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def php_app() -> Path:
    return FIXTURES_DIR / "php_app"


@pytest.fixture
def log_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(log_buffer) -> RichLogger:
    console = Console(file=log_buffer, width=200, color_system=None)
    return RichLogger(console=console, verbose=True)


@pytest.fixture
def make_occurrence():
    def _make(query: str, source: str = "app.php", line_no: int = 1) -> QueryOccurrence:
        return QueryOccurrence(source=source, line_no=line_no, query=query, normalized=canonicalize(query))

    return _make
