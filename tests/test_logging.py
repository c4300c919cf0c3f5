import logging
from pathlib import Path

from modifier_datagen.foundation.logging_utils import setup_logger


def test_setup_logger_writes_debug_to_file_and_replaces_handlers(tmp_path: Path):
    log_path = tmp_path / "logs" / "datagen.log"

    logger = setup_logger("modifier_datagen.test_logging", log_path=log_path)
    logger = setup_logger("modifier_datagen.test_logging", log_path=log_path)
    logger.debug("Built salvage recipe %s → ok", "tconstruct:haste")
    for handler in logger.handlers:
        handler.flush()

    assert len(logger.handlers) == 2
    assert logger.propagate is False
    content = log_path.read_text(encoding="utf-8")
    assert "| DEBUG | Built salvage recipe tconstruct:haste → ok" in content

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_logger_without_file_only_streams():
    logger = setup_logger("modifier_datagen.test_logging_stream", level=logging.WARNING)
    assert [type(h) for h in logger.handlers] == [logging.StreamHandler]
    assert logger.handlers[0].level == logging.WARNING


def test_setup_logger_routes_kernel_loggers_to_the_same_file(tmp_path: Path):
    log_path = tmp_path / "datagen.log"

    logger = setup_logger("modifier_datagen.test_logging_kernel", log_path=log_path)
    kernel_logger = logging.getLogger("recipekit")
    logging.getLogger("recipekit.sinks").debug("Wrote recipe %s -> %s", "tconstruct:haste", "haste.json")
    for handler in logger.handlers:
        handler.flush()

    assert kernel_logger.handlers == logger.handlers
    assert kernel_logger.propagate is False
    content = log_path.read_text(encoding="utf-8")
    assert "| DEBUG | Wrote recipe tconstruct:haste -> haste.json" in content

    for target in (logger, kernel_logger):
        for handler in list(target.handlers):
            handler.close()
            target.removeHandler(handler)
