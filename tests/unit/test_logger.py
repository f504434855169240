import logging

import pytest

from resume_intake.logging.logger import Log


class TestLog:
    def test_renders_context_as_key_value_pairs(self) -> None:
        assert Log._render("Scored", {"score": 80, "file": "a.pdf"}) == "Scored [score=80 file=a.pdf]"

    def test_renders_plain_message_without_context(self) -> None:
        assert Log._render("Hello", {}) == "Hello"

    def test_info_reaches_named_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="resume_intake"):
            Log.info("Upload complete", score=91)
        assert "Upload complete [score=91]" in caplog.text

    def test_configure_adds_single_handler(self) -> None:
        try:
            Log.configure("warning")
            Log.configure("warning")
            assert len(Log._logger.handlers) == 1
            assert Log._logger.level == logging.WARNING
        finally:
            Log._logger.setLevel(logging.NOTSET)
