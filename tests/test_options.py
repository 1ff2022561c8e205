import pytest

from html5_loader.loader import (
    InvalidSourceTypeError, InvalidSourceTypeFile, InvalidSourceTypeString, Options, SourceType,
    starts_with_markup,
)


def test_defaults():
    options = Options()

    assert options.is_fragment is False
    assert options.disable_html_ns is False
    assert options.implicit_namespaces is None
    assert options.allow_file is False
    assert options.allow_string is True
    assert options.encoding is None
    assert options.force_encoding is False


def test_source_type_follows_predicate():
    options = Options(identify_string_source=lambda source: source == "markup")

    assert options.get_source_type("markup") == SourceType.STRING
    assert options.get_source_type("<p>looks like markup</p>") == SourceType.FILE


def test_source_type_without_predicate_is_file():
    assert Options().get_source_type("<p>x</p>") == SourceType.FILE


def test_is_file_takes_precedence():
    options = Options({"is_file": True, "is_string": True}, identify_string_source=lambda source: True)
    assert options.get_source_type("<p>x</p>") == SourceType.FILE


def test_is_string_overrides_predicate():
    options = Options({"is_string": True}, identify_string_source=lambda source: False)
    assert options.get_source_type("plain text") == SourceType.STRING


def test_options_are_read_only():
    options = Options({"allow_file": True})

    with pytest.raises(AttributeError):
        options.allow_file = False
    with pytest.raises(TypeError):
        options["allow_file"] = False

    assert options.allow_file is True


def test_unknown_keys_are_ignored():
    options = Options({"bogus": 1, "allow_file": True})

    assert "bogus" not in options
    assert options.allow_file is True


def test_implicit_namespaces_is_copied():
    bindings = {"foo": "urn:foo"}
    options = Options({"implicit_namespaces": bindings})

    bindings["bar"] = "urn:bar"
    returned = options.implicit_namespaces
    returned["baz"] = "urn:baz"

    assert options.implicit_namespaces == {"foo": "urn:foo"}


def test_implicit_namespaces_requires_mapping():
    assert Options({"implicit_namespaces": "urn:foo"}).implicit_namespaces is None


def test_file_needs_allow_file():
    with pytest.raises(InvalidSourceTypeFile) as excinfo:
        Options().is_allowed(SourceType.FILE)

    assert isinstance(excinfo.value, InvalidSourceTypeError)
    assert excinfo.value.source_type == SourceType.FILE
    assert str(excinfo.value) == "Can not load a file with this loader."
    assert Options({"allow_file": True}).is_allowed(SourceType.FILE)


def test_base_error_without_source_type_has_a_message():
    assert str(InvalidSourceTypeError()) == "Can not load a source with this loader."
    assert str(InvalidSourceTypeError("custom")) == "custom"
    assert str(InvalidSourceTypeString()) == "Can not load a string with this loader."


def test_string_can_be_disallowed():
    options = Options({"allow_string": False})

    with pytest.raises(InvalidSourceTypeString):
        options.is_allowed(SourceType.STRING)
    assert Options().is_allowed(SourceType.STRING)


def test_is_allowed_without_exception():
    assert Options().is_allowed(SourceType.FILE, throw_exception=False) is False


@pytest.mark.parametrize("source, expected", [
    ("<p>x</p>", True),
    ("  \n<!DOCTYPE html>", True),
    (b"<html>", True),
    ("page.html", False),
    ("", False),
    (None, False),
])
def test_starts_with_markup(source, expected):
    assert starts_with_markup(source) is expected
