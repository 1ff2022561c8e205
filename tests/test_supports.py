import pytest

from html5_loader.loader import Loader, UnsupportedLoaderError


@pytest.mark.parametrize("content_type", ["html5", "text/html5", "html5-fragment", "text/html5-fragment"])
def test_supported_content_types(loader, content_type):
    assert loader.supports(content_type)
    assert content_type in loader.get_supported()


@pytest.mark.parametrize("content_type", ["xml", "text/html", "HTML5", " html5", "html5 ", "", None, 5])
def test_unsupported_content_types(loader, content_type):
    assert not loader.supports(content_type)


def test_get_supported_returns_a_fresh_list(loader):
    supported = loader.get_supported()
    supported.clear()
    assert len(loader.get_supported()) == 4


def test_unsupported_type_is_rejected_before_parsing(spy_factory):
    loader = Loader(parser_factory=spy_factory)

    with pytest.raises(UnsupportedLoaderError) as excinfo:
        loader.load("<p>x</p>", "xml")

    assert excinfo.value.content_type == "xml"
    assert "xml" in str(excinfo.value)
    assert spy_factory.created == []


def test_load_fragment_returns_none_for_unsupported_type(spy_factory):
    loader = Loader(parser_factory=spy_factory)

    assert loader.load_fragment("<p>x</p>", "text/html") is None
    assert spy_factory.created == []
