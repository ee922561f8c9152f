"""Tests for atviews._logging module."""

import logging

import pytest

import atviews
from atviews._logging import LoggerProtocol, configure_logging, get_logger, log_operation


class TestGetLogger:
    def test_default_is_stdlib(self):
        log = get_logger()
        assert isinstance(log, logging.Logger)
        assert log.name == "atviews"

    def test_satisfies_protocol(self):
        log = get_logger()
        assert isinstance(log, LoggerProtocol)


class TestConfigureLogging:
    def test_custom_logger(self, capture_log):
        log = get_logger()
        assert not isinstance(log, logging.Logger)
        log.info("hello %s", "world")
        assert capture_log[-1] == ("info", "hello world")

    def test_restore_default(self):
        """Ensure default logger is stdlib after fixture cleanup."""
        log = get_logger()
        assert isinstance(log, logging.Logger)


class TestLogOperation:
    def test_logs_start_and_complete_with_context(self, capture_log):
        with log_operation("decode_envelope", items_key="starterPacks"):
            pass
        assert any(
            level == "debug"
            and "decode_envelope: started" in msg
            and "items_key=starterPacks" in msg
            for level, msg in capture_log
        )
        assert any(
            level == "debug" and "decode_envelope: completed in" in msg
            for level, msg in capture_log
        )

    def test_logs_error_on_exception(self, capture_log):
        with pytest.raises(ValueError, match="boom"):
            with log_operation("fail_op"):
                raise ValueError("boom")
        assert any(
            level == "error" and "fail_op: failed after" in msg
            for level, msg in capture_log
        )

    def test_no_context(self, capture_log):
        with log_operation("bare"):
            pass
        start_msgs = [msg for _, msg in capture_log if "bare: started" in msg]
        assert len(start_msgs) == 1
        # No parenthesized context
        assert "(" not in start_msgs[0]

    def test_elapsed_time_is_positive(self, capture_log):
        with log_operation("timed"):
            pass
        completed = [msg for _, msg in capture_log if "timed: completed in" in msg]
        assert len(completed) == 1
        # Extract the float from "completed in X.XXXs"
        elapsed_str = completed[0].split("completed in ")[1].split("s")[0]
        assert float(elapsed_str) >= 0.0

    def test_outcome_appended_to_completion(self, capture_log):
        with log_operation("decode_envelope", items_key="feeds") as outcome:
            outcome["items"] = 3
            outcome["cursor"] = False
        completed = [msg for _, msg in capture_log if "completed in" in msg]
        assert completed[0].endswith("(items_key=feeds, items=3, cursor=False)")

    def test_outcome_starts_empty(self, capture_log):
        with log_operation("bare") as outcome:
            assert outcome == {}
        completed = [msg for _, msg in capture_log if "bare: completed in" in msg]
        assert completed[0].endswith("s")

    def test_failure_names_exception_and_path(self, capture_log):
        with pytest.raises(atviews.StructuralError):
            with log_operation("decode_single", key="starterPack"):
                raise atviews.StructuralError("$.starterPack.cid", "bad")
        failed = [msg for level, msg in capture_log if level == "error"]
        assert failed[0].endswith("(key=starterPack, error=StructuralError, path=$.starterPack.cid)")


class TestDecoderLogging:
    """Log lines emitted by the decoders themselves."""

    def test_envelope_decode_is_logged(self, capture_log, starter_packs_bytes):
        atviews.decode_actor_starter_packs(starter_packs_bytes)
        messages = [msg for _, msg in capture_log]
        assert any("decode_envelope: started (items_key=starterPacks)" in m for m in messages)
        completed = [m for m in messages if "decode_envelope: completed in" in m]
        assert completed[0].endswith("(items_key=starterPacks, items=40, cursor=True)")

    def test_failed_envelope_decode_is_logged_at_error(self, capture_log):
        with pytest.raises(atviews.StructuralError):
            atviews.decode_actor_starter_packs(b"{}")
        assert any(
            level == "error" and "decode_envelope: failed after" in msg
            for level, msg in capture_log
        )


class TestConfigureLoggingViaPublicApi:
    def test_atviews_configure_logging(self):
        """configure_logging is accessible from atviews top-level."""
        assert atviews.configure_logging is configure_logging

    def test_atviews_get_logger(self):
        assert atviews.get_logger is get_logger

    def test_atviews_log_operation(self):
        assert atviews.log_operation is log_operation
