import io

from html5_loader.parser import HTML5Parser

XHTML = "http://www.w3.org/1999/xhtml"


def test_html_elements_are_namespaced_by_default():
    document = HTML5Parser().load_html("<p>x</p>", {})

    assert document.documentElement.tagName == "html"
    assert document.documentElement.namespaceURI == XHTML


def test_disable_html_namespace():
    document = HTML5Parser().load_html("<p>x</p>", {"disable_html_ns": True})
    assert document.documentElement.namespaceURI is None


def test_prefix_bindings_move_elements_into_namespace():
    document = HTML5Parser().load_html("<foo:bar>x</foo:bar><baz:qux></baz:qux>", {"foo": "urn:foo"})

    bar = document.getElementsByTagName("foo:bar")[0]
    assert bar.namespaceURI == "urn:foo"
    assert bar.prefix == "foo"
    assert bar.localName == "bar"

    qux = document.getElementsByTagName("baz:qux")[0]
    assert qux.namespaceURI == XHTML


def test_parse_errors_are_collected():
    parser = HTML5Parser()
    parser.load_html("<p>no doctype", {})
    assert parser.errors

    parser.load_html("<!DOCTYPE html><html><head><title>t</title></head><body></body></html>", {})
    assert parser.errors == []


def test_load_fragment():
    fragment = HTML5Parser().load_html_fragment("<b>x</b><i>y</i>", {})

    assert [node.tagName for node in fragment.childNodes] == ["b", "i"]


def test_load_fragment_in_table_context():
    fragment = HTML5Parser().load_html_fragment("<td>cell</td>", {}, container="tr")
    assert fragment.childNodes[0].tagName == "td"


def test_load_file_object():
    document = HTML5Parser().load_html_file(io.BytesIO(b"<p>stream</p>"), {})
    assert document.getElementsByTagName("p")[0].firstChild.data == "stream"


def test_load_file_path_with_likely_encoding(tmp_path):
    path = tmp_path / "latin.html"
    path.write_bytes(b"<p>caf\xe9</p>")

    document = HTML5Parser().load_html_file(str(path), {}, encoding="iso-8859-1")
    assert document.getElementsByTagName("p")[0].firstChild.data == "café"
