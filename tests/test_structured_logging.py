"""
Tests for log records and the structured logger backends.
"""
import io
import json

from starter.core.structured_logging import ConsoleLogger, FileLogger, LogParameter, LogRecord
from starter.modules.users.domain import SignUpRequest


def test_record_serializes_parameters_and_omits_empty_exception():
    record = LogRecord("get_user", (LogParameter("username", "jdoe", "str"),))
    assert json.loads(record.to_json()) == {
        "method_name": "get_user",
        "parameters": [{"name": "username", "value": "jdoe", "type": "str"}],
        "user": "?",
    }


def test_passwords_are_masked_in_models_and_dicts():
    request = SignUpRequest(
        username="jdoe", email="jdoe@example.com", first_name="J", last_name="D", password="Secret123"
    )
    record = LogRecord(
        "sign_up",
        (
            LogParameter("request", request, "SignUpRequest"),
            LogParameter("extra", {"new_password": "x", "nested": {"Password": "y"}}, "dict"),
        ),
        user="admin",
        exception_message="boom",
    )
    text = record.to_json()
    assert "Secret123" not in text
    data = json.loads(text)
    assert data["parameters"][0]["value"]["password"] == "***"
    assert data["parameters"][0]["value"]["username"] == "jdoe"
    assert data["parameters"][1]["value"] == {"new_password": "***", "nested": {"Password": "***"}}
    assert data["exception_message"] == "boom"


def test_unserializable_values_fall_back_to_str():
    class Opaque:
        def __str__(self):
            return "opaque"

    record = LogRecord("op", (LogParameter("thing", Opaque(), "Opaque"),))
    assert json.loads(record.to_json())["parameters"][0]["value"] == "opaque"


def test_file_logger_writes_to_a_dated_file(tmp_path):
    file_logger = FileLogger(folder_path=str(tmp_path), size_limit_bytes=1000, retained_file_count=1)
    file_logger.error('{"method_name": "op"}')

    assert file_logger.log_file_path.startswith(str(tmp_path))
    assert file_logger.log_file_path.endswith(".txt")
    with open(file_logger.log_file_path, encoding="utf-8") as f:
        content = f.read()
    assert "[ERROR]" in content
    assert '{"method_name": "op"}' in content


def test_file_logger_does_not_duplicate_handlers(tmp_path):
    first = FileLogger(folder_path=str(tmp_path))
    second = FileLogger(folder_path=str(tmp_path))
    second.warning("once")

    with open(first.log_file_path, encoding="utf-8") as f:
        assert f.read().count("once") == 1


def test_console_logger_writes_one_line_per_message():
    stream = io.StringIO()
    console = ConsoleLogger(stream)
    console.info("first")
    console.critical("second")
    lines = stream.getvalue().splitlines()
    assert lines[-2].endswith("[INFO] first")
    assert lines[-1].endswith("[CRITICAL] second")


def test_password_arguments_are_masked_by_name():
    record = LogRecord(
        "change_password",
        (
            LogParameter("user_id", "u1", "str"),
            LogParameter("new_password", "Secret123", "str"),
            LogParameter("password", None, "str"),
        ),
    )
    text = record.to_json()
    assert "Secret123" not in text
    values = [p["value"] for p in json.loads(text)["parameters"]]
    assert values == ["u1", "***", "***"]
