import logging

from blazesql import Eq, Settings, configure, for_dialect
from blazesql.config import reset_settings
from blazesql.utils.logging import get_correlation_id, get_logger, set_correlation_id, time_call
from blazesql.utils.redaction import REDACTED_VALUE, describe_args, redact_args


def test_correlation_id_round_trip():
    token = set_correlation_id("test-token")
    assert token == "test-token"
    assert get_correlation_id() == "test-token"


def test_time_call_logs_duration(caplog):
    logger = get_logger("tests.logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("unit-test", logger, threshold_ms=0) as timer:
        timer.statement = "SELECT 1"
    records = [record for record in caplog.records if record.name == logger.name]
    assert any("unit-test took" in record.message for record in records)
    assert records[-1].levelno == logging.WARNING
    assert records[-1].sql == "SELECT 1"


def test_to_sql_logs_rendered_statement(caplog):
    caplog.set_level(logging.DEBUG, logger="blazesql.builder")
    configure(Settings(log_params=False))
    try:
        for_dialect("sqlite").select("a").from_("t").where(Eq(token="abc")).to_sql()
    finally:
        reset_settings()
    rendered = [r for r in caplog.records if r.message.startswith("Rendered select statement")]
    assert rendered
    assert rendered[-1].params == "<1 args>"


def test_to_sql_logs_redacted_params_when_enabled(caplog):
    caplog.set_level(logging.DEBUG, logger="blazesql.builder")
    configure(Settings(log_params=True))
    try:
        for_dialect("sqlite").select("a").from_("t").where(Eq(a=1, b="Bearer xyz")).to_sql()
    finally:
        reset_settings()
    rendered = [r for r in caplog.records if r.message.startswith("Rendered select statement")]
    assert rendered[-1].params == [1, REDACTED_VALUE]


def test_redact_args():
    long_value = "x" * 100
    redacted = redact_args(["plain", "my password", b"\x00\x01", long_value, ("secret-1", 2)])
    assert redacted[0] == "plain"
    assert redacted[1] == REDACTED_VALUE
    assert redacted[2] == "<2 bytes>"
    assert redacted[3].endswith("...") and len(redacted[3]) == 64
    assert redacted[4] == (REDACTED_VALUE, 2)
    assert describe_args([1, 2], include_values=False) == "<2 args>"
