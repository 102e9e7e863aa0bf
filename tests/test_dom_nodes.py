from domsketch.dom_nodes import (
    append_described_children,
    attribute_description,
    cdata_description,
    comment_description,
    describe,
    describe_attributes,
    describe_list,
    element_description,
    fragment_description,
    materialize,
    processing_instruction_description,
    set_element_attributes,
    text_description,
)
from domsketch.host import new_document, parse_document
from domsketch.types_dom import NodeKind

TEXT_HI = {"kind": NodeKind.TEXT, "name": "#text", "value": "Hi!"}


def _root(markup: str):
    return parse_document(markup).documentElement


def test_describe_element_with_attributes_and_text():
    block = _root('<div class="main">Hi!</div>')

    assert describe(block) == {
        "kind": NodeKind.ELEMENT,
        "name": "div",
        "attributes": {"class": "main"},
        "children": [TEXT_HI],
    }


def test_describe_keeps_empty_attribute_map_but_omits_empty_children():
    block = _root('<div><span click="doSomething()">Click Me</span><br/></div>')

    assert describe(block) == {
        "kind": NodeKind.ELEMENT,
        "name": "div",
        "attributes": {},
        "children": [
            {
                "kind": NodeKind.ELEMENT,
                "name": "span",
                "attributes": {"click": "doSomething()"},
                "children": [
                    {"kind": NodeKind.TEXT, "name": "#text", "value": "Click Me"}
                ],
            },
            {"kind": NodeKind.ELEMENT, "name": "br", "attributes": {}},
        ],
    }


def test_describe_leaf_kinds():
    document = new_document()

    assert describe(document.createComment("note")) == {
        "kind": NodeKind.COMMENT,
        "name": "#comment",
        "value": "note",
    }
    assert describe(document.createProcessingInstruction("xml-stylesheet", "href='a'")) == {
        "kind": NodeKind.PROCESSING_INSTRUCTION,
        "name": "xml-stylesheet",
        "value": "href='a'",
    }
    assert describe(document.createCDATASection("a < b")) == {
        "kind": NodeKind.CDATA_SECTION,
        "name": "#cdata-section",
        "value": "a < b",
    }


def test_describe_attribute_node_has_no_children():
    attribute = new_document().createAttribute("id")
    attribute.value = "me"

    assert describe(attribute) == {"kind": NodeKind.ATTRIBUTE, "name": "id", "value": "me"}


def test_describe_list_preserves_order():
    block = _root("<p>a<b/>c</p>")

    names = [item["name"] for item in describe_list(block.childNodes)]
    assert names == ["#text", "b", "#text"]
    assert describe_list([]) == []


def test_describe_attributes_reads_every_attribute():
    element = _root('<img src="x" alt="y"/>')

    assert describe_attributes(element) == {"src": "x", "alt": "y"}


def test_materialize_element_with_attributes_and_children():
    description = {
        "kind": NodeKind.ELEMENT,
        "name": "DIV",
        "attributes": {"class": "main"},
        "children": [TEXT_HI],
    }

    node = materialize(description)

    assert node is not None
    assert node.nodeName == "DIV"
    assert node.getAttribute("class") == "main"
    assert len(node.childNodes) == 1
    assert node.toxml() == '<DIV class="main">Hi!</DIV>'


def test_materialize_uses_given_document():
    document = new_document()

    node = materialize(text_description("x"), document)

    assert node.ownerDocument is document


def test_materialize_leaf_kinds():
    assert materialize(text_description("t")).data == "t"
    assert materialize({"kind": NodeKind.TEXT}).data == ""
    assert materialize(comment_description("c")).data == "c"
    assert materialize(cdata_description("d")).data == "d"

    instruction = materialize(processing_instruction_description("xml", "stuff"))
    assert instruction.target == "xml"
    assert instruction.data == "stuff"

    attribute = materialize(attribute_description("id", "me"))
    assert attribute.nodeName == "id"
    assert attribute.value == "me"


def test_materialize_requires_names():
    assert materialize({"kind": NodeKind.ELEMENT}) is None
    assert materialize({"kind": NodeKind.ATTRIBUTE, "value": "x"}) is None
    assert materialize({"kind": NodeKind.PROCESSING_INSTRUCTION, "value": "x"}) is None


def test_materialize_unsupported_kinds_yield_nothing():
    assert materialize({"kind": NodeKind.DOCUMENT, "name": "#document"}) is None
    assert materialize({"kind": NodeKind.DOCUMENT_TYPE, "name": "html"}) is None


def test_materialize_fragment_does_not_attach_children():
    fragment = materialize(fragment_description([text_description("a")]))

    assert fragment.nodeType == NodeKind.DOCUMENT_FRAGMENT
    assert len(fragment.childNodes) == 0


def test_append_described_children_skips_unbuildable_entries():
    target = new_document().createElement("p")
    description = element_description(
        "p", children=[text_description("a"), {"kind": NodeKind.ELEMENT}, text_description("b")]
    )

    append_described_children(target, description)

    assert [child.data for child in target.childNodes] == ["a", "b"]


def test_set_element_attributes_only_writes_changes():
    element = _root('<a href="/x" title="t"/>')
    original = element.getAttributeNode("href")

    set_element_attributes(element, {"href": "/x", "title": "new", "rel": ""})

    assert element.getAttributeNode("href") is original
    assert element.getAttribute("title") == "new"
    assert element.hasAttribute("rel")


def test_element_description_copies_attributes():
    attributes = {"class": "main"}
    description = element_description("p", attributes)
    attributes["id"] = "x"

    assert description == {
        "kind": NodeKind.ELEMENT,
        "name": "p",
        "attributes": {"class": "main"},
    }
    assert "attributes" in element_description("p", {})
    assert "children" not in element_description("p")


def test_factories_use_reserved_names():
    assert text_description("a")["name"] == "#text"
    assert comment_description("a")["name"] == "#comment"
    assert cdata_description("a")["name"] == "#cdata-section"
    assert fragment_description() == {
        "kind": NodeKind.DOCUMENT_FRAGMENT,
        "name": "#document-fragment",
    }
    assert attribute_description("checked", None) == {
        "kind": NodeKind.ATTRIBUTE,
        "name": "checked",
        "value": None,
    }


def test_describe_materialize_roundtrip():
    block = _root(
        '<section id="s"><h1>Title</h1><!--note--><p class="lead">Body <em>text</em></p>'
        "<?render fast?><br/></section>"
    )
    description = describe(block)

    rebuilt = materialize(description)

    assert describe(rebuilt) == description
