from structlog.testing import capture_logs

from paste_as_text import log


def test_render_kv_pairs_quotes_values_with_spaces() -> None:
    line = log._render_kv_pairs(
        None,
        "info",
        {
            "timestamp": "12:00:00",
            "level": "INF",
            "event": "notification",
            "title": "Text Extracted",
            "backend": "gemini",
            "_internal": "hidden",
        },
    )

    assert line == '12:00:00 INF notification title="Text Extracted" backend=gemini'


def test_level_names_are_three_letters() -> None:
    event = log._level_to_3letter(None, "warning", {"level": "warning"})

    assert event["level"] == "WRN"


def test_configure_debug_flag_forces_debug_level() -> None:
    log.configure(level="WARNING", debug=True)
    assert log.is_debug_enabled() is True

    log.configure(level="INFO")
    assert log.is_debug_enabled() is False


def test_credential_fields_are_masked() -> None:
    event = log._redact_secrets(
        None, "info", {"event": "credential saved", "backend": "gemini", "api_key": "sk-123"}
    )

    assert event["api_key"] == "***"
    assert event["backend"] == "gemini"


def test_list_values_render_comma_separated() -> None:
    line = log._render_kv_pairs(
        None,
        "info",
        {"timestamp": "t", "level": "INF", "event": "loaded", "configured": ["gemini", "openai"]},
    )

    assert line == "t INF loaded configured=gemini,openai"


def test_get_logger_binds_context() -> None:
    with capture_logs() as logs:
        log.get_logger(backend="gemini").warning("backend transport failure", err="timeout")
        log.get_logger("snapshot").warning("clipboard kept changing")

    assert logs[0]["backend"] == "gemini"
    assert logs[0]["err"] == "timeout"
    assert logs[1]["logger"] == "snapshot"
