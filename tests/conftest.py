import logging

import pytest

from html5_loader.loader import Loader
from html5_loader.parser import HTML5Parser
from html5_loader.utils.config import Config
from html5_loader.utils.logging import LOGGER_NAME


class SpyParserFactory:
    """Parser factory that counts how many engines were created."""

    def __init__(self):
        self.created = []

    def __call__(self):
        parser = HTML5Parser()
        self.created.append(parser)
        return parser


@pytest.fixture
def spy_factory():
    return SpyParserFactory()


@pytest.fixture
def loader():
    return Loader()


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "config.json")


@pytest.fixture
def config(config_path):
    return Config(config_path)


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text("<!DOCTYPE html><title>t</title><p>from file</p>", encoding="utf-8")
    return str(path)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
