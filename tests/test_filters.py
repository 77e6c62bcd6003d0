import pytest

from richtext.filters import (
    any_of,
    has_attribute,
    is_blank,
    is_interior,
    is_leaf,
    not_,
)
from richtext.nodes import AttributedNode, TextEntry


@pytest.fixture
def tree():
    return (
        TextEntry(color="red")
        .append("Lorem", bold=True)
        .append(TextEntry())
        .append(TextEntry(italic=True).append("ipsum").append("dolor", bold=True))
    )


def test_any_of(tree):
    result = tree.iterate_nodes(any_of(has_attribute("bold"), has_attribute("italic")))
    assert [(n.text, n.bold) for n in result] == [
        ("Lorem", True),
        (None, False),
        ("dolor", True),
    ]


def test_has_attribute():
    assert has_attribute("bold")(TextEntry(bold=False))
    assert not has_attribute("bold", True)(TextEntry(bold=False))
    assert has_attribute("bold", True)(TextEntry(bold=True))
    assert not has_attribute("bold")(TextEntry())
    assert has_attribute("value", 1)(AttributedNode(1))


def test_has_attribute_with_none():
    assert has_attribute("color", None)(TextEntry(color=None))
    assert not has_attribute("color", None)(TextEntry())


@pytest.mark.parametrize(
    ("node", "expected"),
    (
        (TextEntry(), True),
        (TextEntry(""), True),
        (TextEntry(" "), False),
        (TextEntry("Lorem"), False),
        (TextEntry().append(TextEntry()), False),
        (AttributedNode(), True),
        (AttributedNode(1), True),
    ),
)
def test_is_blank(node, expected):
    assert is_blank(node) is expected


def test_is_interior_and_is_leaf(tree):
    assert [n.text for n in tree.iterate_nodes(is_leaf)] == [
        "Lorem",
        "",
        "ipsum",
        "dolor",
    ]
    assert list(tree.iterate_nodes(is_leaf)) == list(tree.iterate_leaves())
    assert [n.count for n in tree.iterate_nodes(is_interior)] == [3, 2]


def test_not(tree):
    assert [n.text for n in tree.iterate_leaves(not_(is_blank))] == [
        "Lorem",
        "ipsum",
        "dolor",
    ]
    result = tree.iterate_nodes(not_(is_leaf, has_attribute("bold")))
    assert [n.text for n in result] == [None, "", None, "ipsum"]


def test_multiple_filters(tree):
    result = tree.iterate_leaves(has_attribute("bold"), not_(has_attribute("italic")))
    assert [n.text for n in result] == ["Lorem", "dolor"]


def test_filters_as_optimize_predicate(tree):
    tree.optimize(not_(is_blank), not_(has_attribute("bold")))
    assert str(tree) == "ipsum"
    assert tree.italic
    assert tree.color == "red"
