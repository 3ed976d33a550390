import json
import logging

from pip_intel.core.config import settings
from pip_intel.core.logging import CustomJsonFormatter, request_id_var


def render(message="PIP pip-1 evaluated", level=logging.INFO):
    record = logging.LogRecord("pip_intel.test", level, __file__, 1, message, None, None)
    formatter = CustomJsonFormatter("%(timestamp) %(level) %(name) %(message)")
    return json.loads(formatter.format(record))


def test_log_lines_carry_service_fields():
    line = render(level=logging.WARNING)
    assert line["message"] == "PIP pip-1 evaluated"
    assert line["level"] == "WARNING"
    assert line["name"] == "pip_intel.test"
    assert line["service"] == settings.app_name
    assert line["timestamp"].endswith("+00:00")
    assert "request_id" not in line


def test_log_lines_carry_request_id():
    token = request_id_var.set("req-42")
    try:
        assert render()["request_id"] == "req-42"
    finally:
        request_id_var.reset(token)
