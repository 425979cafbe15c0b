"""
Tests for the stderr logger level gating.
"""
import io

from rich.console import Console

from sqldupfinder.console import RichLogger


def _logger(**kwargs):
    buf = io.StringIO()
    return RichLogger(console=Console(file=buf, width=200, color_system=None), **kwargs), buf


class TestRichLogger:
    def test_debug_needs_verbose(self):
        logger, buf = _logger()
        logger.debug("per-file detail")
        logger.info("scanning")
        out = buf.getvalue()
        assert "per-file detail" not in out
        assert "INFO" in out and "scanning" in out

    def test_quiet_keeps_problems_only(self):
        logger, buf = _logger(quiet=True, verbose=True)
        logger.info("scanning")
        logger.done("finished")
        logger.skipped("a.php", "read failed: denied")
        logger.warn("odd input")
        logger.error("walk broke")
        out = buf.getvalue()
        assert "scanning" not in out
        assert "finished" not in out
        assert "SKIP" in out and "a.php: read failed: denied" in out
        assert "odd input" in out
        assert "walk broke" in out

    def test_enabled(self):
        logger, _ = _logger(quiet=True)
        assert not logger.enabled("DEBUG")
        assert not logger.enabled("INFO")
        assert logger.enabled("SKIP")
