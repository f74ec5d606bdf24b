import json
import logging

from nekobox.common.logger import (
    APP_LOGGER_NAME,
    JsonFormatter,
    app_logger,
    configure_logger,
    get_logger,
)


def test_app_logger_is_configured():
    assert app_logger.name == APP_LOGGER_NAME
    assert app_logger.handlers


def test_get_logger_with_parent():
    child = get_logger("db", parent=app_logger)
    assert child.name == f"{APP_LOGGER_NAME}.db"


def test_json_formatter_includes_extra_data():
    record = logging.LogRecord(
        name="nekobox.questions",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="created question %s",
        args=(5,),
        exc_info=None,
    )
    record.data = {"question_id": 5}

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "created question 5"
    assert payload["level"] == "INFO"
    assert payload["question_id"] == 5


def test_configure_logger_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "nekobox.log"
    logger = configure_logger(
        name="nekobox-file-test",
        level="warning",
        log_file=str(log_file),
        console_output=False,
    )

    logger.warning("disk is fine")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.WARNING
    assert "disk is fine" in log_file.read_text()
