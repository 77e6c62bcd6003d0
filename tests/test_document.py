import pytest

from richtext import DefaultRenderOptions, Document
from richtext.exceptions import TypeMismatch
from richtext.html import HTMLDocument
from richtext.nodes import AttributedNode, TextEntry
from richtext.plugins import FormatInterface

from tests.plugins import PlaygroundDocumentExtension
from tests.utils import count_entries


class ShoutingFormat(FormatInterface):
    name = "shouting"

    def render(self, root):
        return root.to_string().upper()


class ShoutingDocument(Document):
    format = ShoutingFormat()
    render_unparsed = True


class WhisperingDocument(Document):
    format = ShoutingFormat()


class MalfunctioningFormat(FormatInterface):
    name = "malfunctioning"

    def parse(self, raw):
        return AttributedNode(raw)


class MalfunctioningDocument(Document):
    format = MalfunctioningFormat()


class OtherDocument(Document):
    pass


def test_config_initialization():
    document = Document("Lorem", playground_property="foo")

    assert isinstance(document, PlaygroundDocumentExtension)
    assert document.config.playground.initialized is True
    assert document.config.playground.property == "foo"
    assert document.playground_method() == "f00"


def test_config_with_unprocessed_arguments():
    with pytest.raises(RuntimeError):
        Document("Lorem", foo="bar")


def test_laziness():
    before = count_entries()

    document = Document("Lorem ipsum")
    assert not document.is_parsed
    assert str(document) == "Lorem ipsum"
    assert not document.is_parsed
    assert count_entries() == before

    root = document.root
    assert document.is_parsed
    assert root.text == "Lorem ipsum"
    assert document.root is root
    assert count_entries() == before + 1
    assert str(document) == "Lorem ipsum"


@pytest.mark.parametrize(
    ("source", "expected"),
    (
        ("", ""),
        ("Lorem", "Lorem"),
        (42, "42"),
        (3.5, "3.5"),
    ),
)
def test_initialization_with_values(source, expected):
    document = Document(source)
    assert not document.is_parsed
    assert str(document) == expected
    assert document.to_plain() == expected


def test_initialization_without_arguments():
    document = Document()
    assert str(document) == ""
    assert document.root.is_leaf


def test_initialization_with_entry():
    entry = TextEntry("Lorem", bold=True)
    document = Document(entry)

    assert document.is_parsed
    assert document.root is entry
    assert str(document) == "Lorem"


def test_initialization_with_unparsed_document_of_same_class():
    original = Document("Lorem")
    before = count_entries()

    document = Document(original)

    assert not document.is_parsed
    assert not original.is_parsed
    assert str(document) == "Lorem"
    assert count_entries() == before
    assert document.root is not original.root


def test_initialization_with_parsed_document_of_same_class():
    original = Document("Lorem")
    original.root

    document = Document(original)

    assert document.is_parsed
    assert document.root is original.root


def test_initialization_with_document_of_other_class():
    original = HTMLDocument("<b>Lorem</b> ipsum")
    assert not original.is_parsed

    document = Document(original)

    assert original.is_parsed
    assert document.is_parsed
    assert document.root is original.root
    assert str(document) == "Lorem ipsum"
    assert str(original) == "<b>Lorem</b> ipsum"


def test_from_document():
    document = OtherDocument.from_document(Document("Lorem"))
    assert type(document) is OtherDocument
    assert document.is_parsed
    assert str(document) == "Lorem"

    with pytest.raises(TypeMismatch):
        Document.from_document("Lorem")


def test_root_alias():
    document = Document("Lorem")
    with pytest.warns(DeprecationWarning):
        root = document.base
    assert root is document.root


def test_add_unparsed_documents_of_same_class():
    a, b = Document("Lorem "), Document("ipsum")
    before = count_entries()

    result = a + b

    assert type(result) is Document
    assert not result.is_parsed
    assert str(result) == "Lorem ipsum"
    assert count_entries() == before
    assert not a.is_parsed
    assert not b.is_parsed


def test_add_document_of_other_class():
    a, b = Document("Lorem "), HTMLDocument("<b>ipsum</b>")
    before = count_entries()

    result = a + b

    assert type(result) is Document
    assert result.is_parsed
    assert count_entries() > before
    assert str(result) == "Lorem ipsum"
    assert result.root.count == 2
    assert result.root[0] is a.root
    assert result.root[1] is b.root


def test_add_parsed_documents_of_same_class():
    a, b = Document("Lorem "), Document("ipsum")
    a.root

    result = a + b

    assert result.is_parsed
    assert b.is_parsed
    assert str(result) == "Lorem ipsum"
    assert result.root.count == 2


def test_add_document_to_itself():
    document = Document("Lorem")
    assert str(document + document) == "LoremLorem"

    document.root
    result = document + document
    assert str(result) == "LoremLorem"
    assert result.root[0] is not result.root[1]


@pytest.mark.parametrize(
    ("value", "expected"),
    (
        ("ipsum", "Lorem ipsum"),
        (1, "Lorem 1"),
        (TextEntry("ipsum"), "Lorem ipsum"),
    ),
)
def test_add_stringifiable_values(value, expected):
    result = Document("Lorem ") + value
    assert type(result) is Document
    assert str(result) == expected


@pytest.mark.parametrize("value", (None, object()))
def test_add_unsupported_values(value):
    document = Document("Lorem")
    with pytest.raises(TypeMismatch):
        document + value
    assert str(document) == "Lorem"


def test_append():
    document = Document("Lorem")

    entry = document.append(" ipsum", bold=True)

    assert isinstance(entry, TextEntry)
    assert entry is document.root.last_child
    assert entry.text == " ipsum"
    assert entry.bold
    assert document.root.count == 2
    assert document.root[0].text == "Lorem"
    assert str(document) == "Lorem ipsum"


def test_append_entry():
    document = Document()
    entry = TextEntry("Lorem", italic=True)

    assert document.append(entry) is entry


def test_shared_root_is_copied_on_write():
    original = Document("Lorem")
    original.root
    document = Document(original)
    assert document.root is original.root

    document.append(" ipsum")

    assert document.root is not original.root
    assert str(document) == "Lorem ipsum"
    assert str(original) == "Lorem"
    assert original.root.is_leaf

    original.append(" dolor")
    assert str(original) == "Lorem dolor"
    assert str(document) == "Lorem ipsum"


def test_root_shared_with_other_class_is_copied_on_write():
    html_document = HTMLDocument("<b>Lorem</b>")
    document = Document(html_document)

    document.append(" ipsum")

    assert str(document) == "Lorem ipsum"
    assert str(html_document) == "<b>Lorem</b>"


def test_combined_roots_are_copied_on_write():
    a, b = Document("Lorem "), HTMLDocument("ipsum")
    result = a + b

    result.append("!")
    a.append("dolor ")

    assert str(result) == "Lorem ipsum!"
    assert str(a) == "Lorem dolor "
    assert str(b) == "ipsum"


def test_optimize():
    root = TextEntry().append(TextEntry().append("Lorem"))
    document = Document(root)
    copy = Document(document)

    assert document.optimize() is document

    assert document.root.is_leaf
    assert document.root.text == "Lorem"
    assert not copy.root.is_minimal


def test_iterate_entries():
    document = Document("Lorem")
    document.append(" ipsum")

    entries = list(document.iterate_entries())

    assert entries[0] is document.root
    assert [e.text for e in entries] == [None, "Lorem", " ipsum"]
    assert list(document.iterate_nodes()) == entries


def test_parse_with_malfunctioning_format():
    document = MalfunctioningDocument("Lorem")
    with pytest.raises(TypeMismatch):
        document.root


def test_render_unparsed():
    document = ShoutingDocument("Lorem")
    assert str(document) == "LOREM"
    assert document.is_parsed

    document = WhisperingDocument("Lorem")
    assert str(document) == "Lorem"
    assert not document.is_parsed
    document.root
    assert str(document) == "LOREM"


def test_render_optimized():
    root = TextEntry().append("Lorem").append(TextEntry())
    rendered_counts = []

    class RecordingFormat(ShoutingFormat):
        name = "recording"

        def render(self, root):
            rendered_counts.append(root.count)
            return super().render(root)

    class RecordingDocument(Document):
        format = RecordingFormat()

    document = RecordingDocument(root)

    assert str(document) == "LOREM"
    DefaultRenderOptions.optimize = True
    assert str(document) == "LOREM"

    assert rendered_counts == [2, 0]
    assert document.root.count == 2


def test_to_plain():
    document = HTMLDocument("<b>Lorem</b> <i>ipsum</i>")
    assert document.to_plain() == "Lorem ipsum"
    assert str(document) == "<b>Lorem</b> <i>ipsum</i>"


def test_to_string_with_callback():
    document = Document("Lorem")
    document.append(" ipsum", bold=True)

    result = document.to_string(
        lambda entry, string: string.upper() if entry.bold else string
    )

    assert result == "Lorem IPSUM"


def test_repr():
    document = Document("Lorem")
    assert repr(document).startswith("<Document (unparsed) [0x")
    document.root
    assert repr(document).startswith("<Document (parsed) [0x")
