"""Tests for structured logging.

Verifies that:
1. Delegatee credentials and signing material never reach log output
2. JSON output is one parseable object per record
3. configure_logging attaches a single handler to the package logger
"""

from __future__ import annotations

import io
import json
import logging
from decimal import Decimal

import pytest

from hlperps.config import HlPerpsConfig
from hlperps.logging_config import StructuredFormatter, configure_logging, mask_secrets, redact

PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"


def _record(msg: str = "test", level: int = logging.INFO, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="hlperps.test",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


@pytest.fixture(autouse=True)
def _restore_package_logger():
    package_logger = logging.getLogger("hlperps")
    handlers, level = package_logger.handlers[:], package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


class TestRedact:
    """Extra-field filtering."""

    def test_credential_keys_dropped(self) -> None:
        fields = {
            "delegatee_private_key": PRIVATE_KEY,
            "auth_sig": {"sig": "0xabc"},
            "sessionSigs": {"node": "x"},
            "Signature": "0x01",
            "coin": "BTC",
        }
        assert redact(fields) == {"coin": "BTC"}

    def test_nested_dict_filtered(self) -> None:
        assert redact({"order": {"signature": "0x1", "asset": 0}}) == {"order": {"asset": 0}}

    def test_decimal_rendered_as_text(self) -> None:
        assert redact({"withdrawable": Decimal("60.6")}) == {"withdrawable": "60.6"}

    def test_secret_in_value_masked(self) -> None:
        assert redact({"detail": f"bad {PRIVATE_KEY}"}) == {"detail": "bad [HEX_SECRET]"}


class TestMaskSecrets:
    """Free-form text redaction."""

    def test_private_key_masked(self) -> None:
        result = mask_secrets(f"bad key {PRIVATE_KEY}")
        assert PRIVATE_KEY not in result
        assert "[HEX_SECRET]" in result

    def test_address_kept(self) -> None:
        """40-hex account addresses are not secrets."""
        text = "user 0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
        assert mask_secrets(text) == text

    def test_empty_string_unchanged(self) -> None:
        assert mask_secrets("") == ""


class TestStructuredFormatter:
    """JSON and text output."""

    def test_json_fields(self) -> None:
        parsed = json.loads(StructuredFormatter().format(_record("hello", coin="BTC")))
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "hlperps.test"
        assert parsed["msg"] == "hello"
        assert parsed["coin"] == "BTC"
        assert parsed["ts"].endswith("+00:00")

    def test_json_drops_credentials(self) -> None:
        record = _record(delegatee_private_key=PRIVATE_KEY)
        output = StructuredFormatter().format(record)
        assert PRIVATE_KEY not in output

    def test_text_mode(self) -> None:
        output = StructuredFormatter(json_output=False).format(_record("Leverage set", asset=3))
        assert output.startswith("INFO")
        assert output.endswith("Leverage set | asset=3")


class TestConfigureLogging:
    """configure_logging wiring."""

    def test_json_handler(self) -> None:
        stream = io.StringIO()
        configure_logging(HlPerpsConfig(), stream=stream)

        logging.getLogger("hlperps.trading").info("Order submitted", extra={"asset": 0})

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["msg"] == "Order submitted"
        assert parsed["asset"] == 0

    def test_level_applied(self) -> None:
        stream = io.StringIO()
        configure_logging(HlPerpsConfig(log_level="warning", json_logs=False), stream=stream)

        logger = logging.getLogger("hlperps.test_level")
        logger.info("info message")
        logger.warning("warning message")

        output = stream.getvalue()
        assert "info message" not in output
        assert "warning message" in output

    def test_repeated_calls_keep_one_handler(self) -> None:
        configure_logging(HlPerpsConfig(), stream=io.StringIO())
        configure_logging(HlPerpsConfig(), stream=io.StringIO())
        assert len(logging.getLogger("hlperps").handlers) == 1

    def test_exception_text_masked(self) -> None:
        stream = io.StringIO()
        configure_logging(HlPerpsConfig(), stream=stream)

        try:
            raise ValueError(f"bad key {PRIVATE_KEY}")
        except ValueError:
            logging.getLogger("hlperps.test_exc").error("Execute failed", exc_info=True)

        parsed = json.loads(stream.getvalue().strip())
        assert PRIVATE_KEY not in parsed["exc"]
        assert "[HEX_SECRET]" in parsed["exc"]
