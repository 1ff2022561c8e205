import pytest

from html5_loader.dom import Attr, Document, NodeType, XPathError


@pytest.fixture
def document():
    """
    <root>
      <item type="a">one</item>
      <group><item type="b">two</item><item>three</item></group>
      <!--note-->
      <x:item xmlns:x="urn:x"/>
    </root>
    """
    document = Document()
    root = document.append_child(document.create_element("root"))

    first = root.append_child(document.create_element("item"))
    first.set_attribute("type", "a")
    first.append_child(document.create_text_node("one"))

    group = root.append_child(document.create_element("group"))
    second = group.append_child(document.create_element("item"))
    second.set_attribute("type", "b")
    second.append_child(document.create_text_node("two"))
    third = group.append_child(document.create_element("item"))
    third.append_child(document.create_text_node("three"))

    root.append_child(document.create_comment("note"))
    root.append_child(document.create_element("x:item", "urn:x"))
    return document


@pytest.fixture
def page():
    document = Document()
    document.register_namespace("html", "http://www.w3.org/1999/xhtml")
    html = document.append_child(document.create_element("html", "http://www.w3.org/1999/xhtml"))
    body = html.append_child(document.create_element("body", "http://www.w3.org/1999/xhtml"))
    for name, ident in (("p", "p1"), ("div", "d1"), ("p", "p2")):
        element = body.append_child(document.create_element(name, "http://www.w3.org/1999/xhtml"))
        element.set_attribute("id", ident)
        element.append_child(document.create_text_node(ident))
    return document


def texts(nodes):
    return [node.text_content for node in nodes]


def test_top_level_nodes(document):
    assert document.evaluate("/node()") == [document.document_element]
    assert document.evaluate("node()", document) == [document.document_element]


def test_document_node_is_never_returned(document):
    assert document not in document.evaluate("//node()")


def test_child_paths(document):
    assert texts(document.evaluate("/root/item")) == ["one"]
    assert texts(document.evaluate("/root/group/item")) == ["two", "three"]


def test_descendants_keep_document_order(document):
    assert texts(document.evaluate("//item")) == ["one", "two", "three"]
    assert texts(document.evaluate("descendant::item", document)) == ["one", "two", "three"]


def test_position_predicates(document):
    assert texts(document.evaluate("//item[1]")) == ["one", "two"]
    assert texts(document.evaluate("(//item)[last()]")) == ["three"]
    assert document.evaluate("//item[5]") == []


def test_attribute_predicates(document):
    assert texts(document.evaluate("//item[@type]")) == ["one", "two"]
    assert texts(document.evaluate("//item[@type='b']")) == ["two"]
    assert texts(document.evaluate('//item[@type="a"]')) == ["one"]


def test_text_and_comment_nodes_map_back_to_host_nodes(document):
    selected = document.evaluate("//text()")
    assert [node.data for node in selected] == ["one", "two", "three"]
    assert selected[0] is document.document_element.first_child.first_child

    comments = document.evaluate("/root/comment()")
    assert len(comments) == 1
    assert comments[0].node_type == NodeType.COMMENT_NODE
    assert comments[0].data == "note"


def test_tail_text_maps_to_following_sibling():
    document = Document()
    root = document.append_child(document.create_element("root"))
    root.append_child(document.create_element("b"))
    after = root.append_child(document.create_text_node("after"))

    assert document.evaluate("/root/text()") == [after]


def test_relative_paths_from_context(document):
    group = document.evaluate("/root/group")[0]

    assert texts(document.evaluate("item", group)) == ["two", "three"]
    assert document.evaluate(".", group) == [group]
    assert document.evaluate("..", group) == [document.document_element]
    assert document.evaluate("parent::node()/self::root", group) == [document.document_element]
    assert texts(document.evaluate("/root/item", group)) == ["one"]


def test_text_node_can_not_be_a_context(document):
    text = document.evaluate("//text()")[0]
    with pytest.raises(XPathError):
        document.evaluate(".", text)


def test_wildcard(document):
    names = [node.tag_name for node in document.evaluate("/root/*")]
    assert names == ["item", "group", "x:item"]


def test_unprefixed_names_skip_namespaced_elements(document):
    assert all(node.namespace_uri is None for node in document.evaluate("//item"))


def test_prefixed_names(document):
    with pytest.raises(XPathError):
        document.evaluate("//x:item")

    assert len(document.evaluate("//y:item", namespaces={"y": "urn:x"})) == 1

    document.register_namespace("x", "urn:x")
    assert len(document.evaluate("//x:item")) == 1
    assert len(document.evaluate("//x:*")) == 1


def test_union_keeps_document_order(page):
    selected = page.evaluate("//html:p | //html:div")
    assert [element.id for element in selected] == ["p1", "d1", "p2"]


def test_functions_return_plain_values(page):
    assert page.evaluate("count(//html:p)") == 2.0
    assert page.evaluate("string(//html:div)") == "d1"
    assert type(page.evaluate("string(//html:div)")) is str
    assert page.evaluate("boolean(//html:span)") is False


def test_last_predicate(page):
    assert [element.id for element in page.evaluate("//html:p[last()]")] == ["p2"]


def test_attributes_map_back_to_host_attrs(page):
    ids = page.evaluate("//html:p/@id")

    assert all(isinstance(attr, Attr) for attr in ids)
    assert [attr.value for attr in ids] == ["p1", "p2"]
    assert ids[0] is page.evaluate("//html:p")[0].get_attribute_node("id")


def test_results_follow_tree_changes(page):
    body = page.evaluate("//html:body")[0]
    extra = body.append_child(page.create_element("p", "http://www.w3.org/1999/xhtml"))

    assert page.evaluate("//html:p")[-1] is extra
    assert page.evaluate("count(//html:p)") == 3.0


def test_multiple_top_level_nodes():
    document = Document()
    first = document.append_child(document.create_element("b"))
    text = document.append_child(document.create_text_node("text"))
    second = document.append_child(document.create_element("i"))

    assert document.evaluate("node()", document) == [first, text, second]
    assert document.evaluate("//b | //i") == [first, second]


def test_comments_and_text_with_characters_xml_rejects():
    document = Document()
    root = document.append_child(document.create_element("root"))
    comment = root.append_child(document.create_comment("a--b-"))
    root.append_child(document.create_text_node("form\x0cfeed"))

    assert document.evaluate("//comment()") == [comment]
    assert len(document.evaluate("//text()")) == 1


@pytest.mark.parametrize("expression", [
    "",
    "//",
    "/root/",
    "item[",
    "item[@]",
    "item[@type=]",
    "count(",
    "unknown-function()",
])
def test_malformed_expressions(document, expression):
    with pytest.raises(XPathError):
        document.evaluate(expression)


def test_xpath_error_is_value_error():
    assert issubclass(XPathError, ValueError)
