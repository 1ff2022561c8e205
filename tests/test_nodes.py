import pytest

from html5_loader.dom import Document, NodeType


@pytest.fixture
def document():
    return Document()


def test_append_and_siblings(document):
    parent = document.create_element("ul")
    first = parent.append_child(document.create_element("li"))
    second = parent.append_child(document.create_element("li"))

    assert parent.first_child is first
    assert parent.last_child is second
    assert first.next_sibling is second
    assert second.previous_sibling is first
    assert parent.child_element_count == 2


def test_append_moves_node_between_parents(document):
    a = document.create_element("a")
    b = document.create_element("b")
    child = a.append_child(document.create_text_node("x"))

    b.append_child(child)

    assert a.child_nodes == []
    assert child.parent_node is b


def test_append_fragment_moves_children(document):
    fragment = document.create_document_fragment()
    fragment.append_child(document.create_element("a"))
    fragment.append_child(document.create_element("b"))
    parent = document.create_element("div")

    parent.append_child(fragment)

    assert [child.tag_name for child in parent.child_nodes] == ["a", "b"]
    assert fragment.child_nodes == []


def test_insert_and_replace(document):
    parent = document.create_element("div")
    last = parent.append_child(document.create_element("c"))
    first = parent.insert_before(document.create_element("a"), last)
    parent.replace_child(document.create_element("b"), last)

    assert [child.tag_name for child in parent.child_nodes] == ["a", "b"]
    assert parent.first_child is first
    assert last.parent_node is None

    with pytest.raises(ValueError):
        parent.remove_child(last)


def test_text_node_operations(document):
    parent = document.create_element("p")
    text = parent.append_child(document.create_text_node("hello world"))

    tail = text.split_text(5)

    assert text.data == "hello"
    assert tail.data == " world"
    assert text.next_sibling is tail
    assert tail.whole_text == "hello world"
    assert parent.text_content == "hello world"


def test_clone_and_equality(document):
    element = document.create_element("p")
    element.set_attribute("class", "a b")
    element.append_child(document.create_text_node("x"))

    shallow = element.clone_node()
    deep = element.clone_node(deep=True)

    assert shallow.child_nodes == []
    assert deep.get_attribute("class") == "a b"
    assert deep.is_equal_node(element)
    assert element.class_list == {"a", "b"}


def test_contains(document):
    outer = document.create_element("div")
    inner = outer.append_child(document.create_element("span"))

    assert outer.contains(inner)
    assert outer.contains(outer)
    assert not inner.contains(outer)


def test_ancestor_can_not_be_appended_to_descendant(document):
    outer = document.append_child(document.create_element("div"))
    middle = outer.append_child(document.create_element("p"))
    inner = middle.append_child(document.create_element("b"))

    with pytest.raises(ValueError):
        inner.append_child(outer)
    with pytest.raises(ValueError):
        inner.append_child(middle)
    with pytest.raises(ValueError):
        middle.insert_before(middle, inner)

    assert outer.parent_node is document
    assert middle.child_nodes == [inner]


def test_fragment_holding_parent_can_not_be_appended(document):
    fragment = document.create_document_fragment()
    holder = fragment.append_child(document.create_element("div"))

    with pytest.raises(ValueError):
        holder.append_child(fragment)
    assert fragment.child_nodes == [holder]


def test_attributes(document):
    element = document.create_element("svg")
    element.set_attribute("xlink:href", "#a")
    element.set_attribute("id", "x")

    href = element.get_attribute_node("xlink:href")
    assert href.namespace_uri == "http://www.w3.org/1999/xlink"
    assert href.local_name == "href"
    assert not hasattr(href, "specified")

    element.remove_attribute("id")
    assert not element.has_attribute("id")
    assert element.get_attribute("id") is None
    assert element.node_type == NodeType.ELEMENT_NODE
