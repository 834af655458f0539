"""
Tests for the logging helpers behind Log.
"""
import logging

from petra_designer.utils.message import (
    LOG_FILE_PREFIX,
    ColorFormatter,
    Log,
    get_log_file_path,
    init_logger,
    purge_old_logs,
)


class TestLogFiles:

    def test_log_file_name(self, tmp_path):
        path = get_log_file_path(str(tmp_path))
        assert path.startswith(str(tmp_path))
        assert path.endswith(".log")
        assert LOG_FILE_PREFIX in path

    def test_purge_keeps_newest(self, tmp_path):
        for day in range(1, 13):
            (tmp_path / f"{LOG_FILE_PREFIX}2026-01-{day:02d}_000000.log").write_text("")
        (tmp_path / "unrelated.txt").write_text("")

        purge_old_logs(str(tmp_path), keep=10)
        remaining = sorted(p.name for p in tmp_path.iterdir())
        assert len(remaining) == 11
        assert f"{LOG_FILE_PREFIX}2026-01-01_000000.log" not in remaining
        assert "unrelated.txt" in remaining

    def test_file_logging(self, tmp_path):
        logger = init_logger(name="petra_designer_test_file", log_folder=str(tmp_path),
                             console_logging=False, file_logging=True)
        logger.info("FlowStore: hello")
        for handler in logger.handlers:
            handler.flush()
        log_files = list(tmp_path.glob(f"{LOG_FILE_PREFIX}*.log"))
        assert len(log_files) == 1
        assert "FlowStore: hello" in log_files[0].read_text(encoding="utf-8")
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


class TestFormatting:

    def test_color_formatter_leaves_record_untouched(self):
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
        text = ColorFormatter(fmt="%(levelname)s %(message)s").format(record)
        assert "WARNING" in text and "careful" in text
        assert record.levelname == "WARNING"

    def test_set_level(self):
        logger = logging.getLogger("PetraDesignerLogger")
        previous = logger.level
        Log.set_level("ERROR")
        assert logger.level == logging.ERROR
        Log.set_level("nonsense")
        assert logger.level == logging.INFO
        Log.set_level(previous)
