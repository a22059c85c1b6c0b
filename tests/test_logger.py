import json
import logging
import os
import time

from pinch.config import PinchSettings
from pinch.logger import LOG_FILE_NAME, configure_logging


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def test_configure_logging_writes_json_lines(pinch_home):
    settings = PinchSettings()
    logger = configure_logging(settings)
    logger.getChild("store").info("Stored clip 1")
    _flush(logger)

    lines = (settings.logs_dir / LOG_FILE_NAME).read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert any(
        r["message"] == "Stored clip 1" and r["name"] == "pinch.store" for r in records
    )


def test_stale_log_is_archived(pinch_home):
    settings = PinchSettings()
    log_file = settings.logs_dir / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True)
    log_file.write_text('{"message": "old"}\n', encoding="utf-8")
    two_days_ago = time.time() - 2 * 86400
    os.utime(log_file, (two_days_ago, two_days_ago))

    configure_logging(settings)

    archives = list(settings.logs_dir.glob("pinch_*.jsonl"))
    assert len(archives) == 1
    assert archives[0].read_text(encoding="utf-8") == '{"message": "old"}\n'


def test_old_archives_are_pruned(pinch_home):
    settings = PinchSettings()
    settings.logs_dir.mkdir(parents=True)
    for day in range(15):
        archive = settings.logs_dir / f"pinch_202401{day + 1:02d}_000000.jsonl"
        archive.write_text("{}\n", encoding="utf-8")
        stamp = time.time() - (15 - day) * 86400
        os.utime(archive, (stamp, stamp))

    configure_logging(settings)

    remaining = sorted(p.name for p in settings.logs_dir.glob("pinch_*.jsonl"))
    assert len(remaining) == 10
    assert remaining[0] == "pinch_20240106_000000.jsonl"
