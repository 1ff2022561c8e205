import pytest
from cssselect import SelectorSyntaxError

from html5_loader.loader import Loader

MARKUP = """
<div id="main" class="box wide">
  <p>one</p>
  <p class="x" lang="en-GB">two</p>
  <span data-role="note"></span>
</div>
<ul><li>a</li><li>b</li></ul>
"""


@pytest.fixture
def document():
    return Loader().load(MARKUP, "html5")


def names(elements):
    return [element.local_name for element in elements]


def test_simple_selectors(document):
    assert len(document.query_selector_all("p")) == 2
    assert len(document.query_selector_all("P")) == 2
    assert document.query_selector("#main").local_name == "div"
    assert names(document.query_selector_all(".x")) == ["p"]


def test_compound_and_combinators(document):
    assert [p.text_content for p in document.query_selector_all("#main > p.x")] == ["two"]
    assert [p.text_content for p in document.query_selector_all("div p:first-child")] == ["one"]
    assert names(document.query_selector_all("p + span")) == ["span"]
    assert names(document.query_selector_all("p ~ span")) == ["span"]
    assert document.query_selector_all("ul > p") == []


def test_attribute_selectors(document):
    assert names(document.query_selector_all("[data-role]")) == ["span"]
    assert names(document.query_selector_all("[data-role=note]")) == ["span"]
    assert names(document.query_selector_all("[class~=wide]")) == ["div"]
    assert names(document.query_selector_all("[lang|=en]")) == ["p"]
    assert names(document.query_selector_all("[id^=ma]")) == ["div"]
    assert names(document.query_selector_all("[id$=in]")) == ["div"]
    assert names(document.query_selector_all("[id*=ai]")) == ["div"]


def test_pseudo_classes(document):
    assert [li.text_content for li in document.query_selector_all("li:last-child")] == ["b"]
    assert names(document.query_selector_all("span:empty")) == ["span"]
    assert names(document.query_selector_all(":root")) == ["html"]
    assert [p.text_content for p in document.query_selector_all("p:not(.x)")] == ["one"]


def test_selector_groups(document):
    assert names(document.query_selector_all("span, ul")) == ["span", "ul"]


def test_element_helpers(document):
    paragraph = document.query_selector("p.x")

    assert paragraph.matches("#main p")
    assert paragraph.closest("div") is document.query_selector("#main")
    assert paragraph.closest("ul") is None
    assert names(document.query_selector("#main").query_selector_all("*")) == ["p", "p", "span"]


def test_fragment_selection():
    fragment = Loader().load_fragment("<b class='k'>x</b><i>y</i>", "html5-fragment")
    assert names(fragment.query_selector_all(".k")) == ["b"]


def test_invalid_selector(document):
    with pytest.raises(SelectorSyntaxError):
        document.query_selector_all("p[")
