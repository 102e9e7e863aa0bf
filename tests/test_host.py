from pathlib import Path

from domsketch.host import (
    HostDocument,
    HostElement,
    child_nodes,
    has_attribute_collection,
    load_document,
    new_document,
    owner_document,
    parse_document,
)


def test_minidom_satisfies_host_protocols():
    document = parse_document("<root/>")

    assert isinstance(document, HostDocument)
    assert isinstance(document.documentElement, HostElement)


def test_has_attribute_collection_is_a_capability_check():
    document = parse_document("<root>text<!--c--></root>")
    root = document.documentElement

    assert has_attribute_collection(root)
    assert not has_attribute_collection(root.firstChild)
    assert not has_attribute_collection(root.lastChild)
    assert not has_attribute_collection(document)


def test_child_nodes_treats_attributes_as_leaves():
    attribute = new_document().createAttribute("id")
    attribute.value = "x"
    root = parse_document("<root><a/><b/></root>").documentElement

    assert list(child_nodes(attribute)) == []
    assert [child.nodeName for child in child_nodes(root)] == ["a", "b"]


def test_owner_document():
    document = parse_document("<root/>")

    assert owner_document(document) is document
    assert owner_document(document.documentElement) is document


def test_load_document(tmp_path: Path):
    path = tmp_path / "page.xml"
    path.write_text('<page lang="en"><title>Hi</title></page>', encoding="utf-8")

    root = load_document(path).documentElement

    assert root.nodeName == "page"
    assert root.getAttribute("lang") == "en"
