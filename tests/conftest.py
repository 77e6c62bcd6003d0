import pytest

# keep this before imports from richtext!
from tests import plugins  # noqa: F401

from richtext import DefaultRenderOptions
from richtext.nodes import TextEntry


@pytest.fixture(autouse=True)
def _reset_render_options():
    DefaultRenderOptions.reset_defaults()


# Minimal tree:  ◯
# size: 5       / \
#              ◯  'c'
#             / \
#           'a' 'b'
@pytest.fixture
def minimal_tree():
    ab = TextEntry("a")
    ab.append("b")

    root = TextEntry()
    root.append(ab)
    root.append("c")

    return root


# Non-minimal tree:  ◯
# size: 3            |
#                    ◯
#                    |
#                   'a'
@pytest.fixture
def non_minimal_tree():
    child = TextEntry()
    child.append("a")

    root = TextEntry()
    root.append(child)

    return root


@pytest.fixture
def styled_tree():
    return (
        TextEntry(color="red")
        .append(TextEntry(bold=True).append("Lorem "))
        .append(TextEntry(font="Serif").append(TextEntry(italic=True).append("ipsum")))
    )
