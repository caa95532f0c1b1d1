"""Tests for loguru setup and structured context rendering."""

import json

from loguru import logger

from app.core.logger import render_context, setup_logger


def test_render_context_sorts_keys():
    assert render_context({"user_id": "user-1", "trip_id": 7}) == " | trip_id=7 user_id=user-1"


def test_render_context_empty():
    assert render_context({}) == ""
    assert render_context({"context_text": " | stale"}) == ""


def test_file_sink_receives_structured_context(tmp_path):
    log_file = tmp_path / "logs" / "planner.log"

    setup_logger(level="DEBUG", log_file=str(log_file))
    try:
        logger.info("Trip created", trip_id=7, user_id="user-1")
    finally:
        logger.remove()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any(line.endswith("Trip created | trip_id=7 user_id=user-1") for line in lines)


def test_level_filters_file_sink(tmp_path):
    log_file = tmp_path / "planner.log"

    setup_logger(level="WARNING", log_file=str(log_file))
    try:
        logger.info("quiet")
        logger.warning("loud")
    finally:
        logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "quiet" not in content
    assert "loud" in content


def test_serialized_file_sink_writes_json_lines(tmp_path):
    log_file = tmp_path / "planner.jsonl"

    setup_logger(level="INFO", log_file=str(log_file), serialize=True)
    try:
        logger.info("Regeneration complete", trip_id=3)
    finally:
        logger.remove()

    records = [json.loads(line)["record"] for line in log_file.read_text(encoding="utf-8").splitlines()]
    completed = [r for r in records if r["message"] == "Regeneration complete"]
    assert len(completed) == 1
    assert completed[0]["extra"]["trip_id"] == 3
