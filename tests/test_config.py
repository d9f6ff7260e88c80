import logging

import pytest

from aswbxml.config import Settings, ViewOptions, get_settings
from aswbxml.logging_config import setup_logging


def test_view_options_defaults():
    options = ViewOptions()
    assert options.show_namespaces is True
    assert options.show_doc_refs is False


def test_view_options_from_settings():
    current = Settings()
    current.SHOW_NAMESPACES = False
    current.SHOW_DOC_REFS = True
    assert ViewOptions.from_settings(current) == ViewOptions(show_namespaces=False, show_doc_refs=True)


def test_view_options_default_to_process_settings():
    assert ViewOptions.from_settings() == ViewOptions.from_settings(get_settings())


def test_view_options_are_hashable():
    assert len({ViewOptions(), ViewOptions(), ViewOptions(show_doc_refs=True)}) == 2


@pytest.mark.usefixtures("restore_logging")
def test_setup_logging_console_only():
    logger = setup_logging("debug", log_dir="")
    assert logger.name == "aswbxml"
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)


@pytest.mark.usefixtures("restore_logging")
def test_setup_logging_writes_file(tmp_path):
    log_dir = tmp_path / "logs"
    setup_logging("INFO", log_dir=str(log_dir))
    logging.getLogger("aswbxml.test").info("hello from the codec")

    for handler in logging.getLogger().handlers:
        handler.flush()
    files = list(log_dir.glob("wbxml_*.log"))
    assert len(files) == 1
    assert "hello from the codec" in files[0].read_text()
