# Copyright (C) 2018-'25  Frank Sachsenheim
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import warnings
from collections.abc import Iterator
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any, ClassVar, NamedTuple, Optional

from _richtext.exceptions import TypeMismatch
from _richtext.nodes import AttributedNode, TextEntry
from _richtext.plugins import (
    plugin_manager as _plugin_manager,
    DocumentMixinBase,
    FormatInterface,
)
from _richtext.plugins.plain_format import PlainFormat

if TYPE_CHECKING:
    from _richtext.typing import Filter, NodeSource, RenderCallback, Self


# plugin loading


_plugin_manager.load_plugins()


# api


class DefaultRenderOptions:
    """
    This object's class variables are used to configure the rendering of documents
    with their format's :meth:`render <_richtext.plugins.FormatInterface.render>`
    method. Hence it also applies when documents are fed to the :func:`print` function
    and in other cases where objects are implicitly cast to strings.

    .. attention::

        Use this once to define behaviour on *application level*. Think thrice whether
        you want to use this facility in a library.
    """

    optimize: ClassVar[bool] = False
    """
    Documents' trees are optimized before rendering when :obj:`True`. The documents'
    own trees are left untouched, optimized copies are rendered.
    """

    @classmethod
    def reset_defaults(cls):
        """Restores the factory settings."""
        cls.optimize = False


class _Raw(NamedTuple):
    string: str


def _is_stringifiable(value: Any) -> bool:
    if value is None:
        return False
    cls = value.__class__
    return cls.__str__ is not object.__str__ or cls.__repr__ is not object.__repr__


class DocumentMeta(type):
    def __new__(mcls, name, base_classes, namespace):  # noqa: N804
        extension_classes = tuple(_plugin_manager.document_mixins)

        if not base_classes:  # Document class is being constructed
            extension_docs = sorted(
                (x.__name__, x.__doc__) for x in extension_classes if x.__doc__
            )
            if extension_docs:
                namespace["__doc__"] += "\n\n" + "\n\n".join(
                    (f"{x[0]}:\n\n{x[1]}" for x in extension_docs)
                )

        # adding DocumentMixinBase unconditionally would lead to the registration of
        # the bare Document class as mixin extension
        if extension_classes:
            base_classes += extension_classes + (DocumentMixinBase,)

        return super().__new__(mcls, name, base_classes, namespace)


class Document(metaclass=DocumentMeta):
    """
    This class is the entrypoint to obtain a representation of a rich text. A document
    holds either the raw string it was created with or the tree of
    :class:`_richtext.nodes.TextEntry` instances that the string is parsed into. The
    parsing happens when the tree is needed for the first time:

    >>> document = Document("Lorem ipsum")
    >>> document.is_parsed
    False
    >>> document.root.text
    'Lorem ipsum'
    >>> document.is_parsed
    True

    :param source: Another document, an entry that is used as root or any other object
                   whose string representation is used as raw input.
    :param config: Additional keyword arguments for the configuration of extension
                   classes.

    When a document is created from another one of exactly the same class, the other's
    raw string or tree is taken over. Documents of other classes contribute their
    tree. Trees that are shared between documents are copied before a document alters
    its own, a shared tree must not be altered directly.

    Subclasses use another :class:`_richtext.plugins.FormatInterface` implementation as
    ``format`` attribute to parse and render texts in a specific markup.

    The string coercion of a document yields a rendition in the document's format.
    Unless the document was parsed, this is the raw string that it was initialized
    with.
    """

    format: ClassVar[FormatInterface] = PlainFormat()
    """ The format that is used to parse and render the document's text. """
    render_unparsed: ClassVar[bool] = False
    """
    Whether an unparsed document is parsed and rendered when it's cast to a string.
    """

    __slots__ = ("config", "__content", "__shares_root")

    def __init__(self, source: Any = "", /, **config: Any):
        self.config: SimpleNamespace = SimpleNamespace()
        """
        This property contains the namespaced data that extension classes may have
        stored.
        """
        getattr(self, "_init_config", DocumentMixinBase._init_config)(
            self.config, config
        )

        self.__content: _Raw | TextEntry
        self.__shares_root = False

        match source:
            case Document() if source.__class__ is self.__class__:
                self.__content = source.__content
                if source.is_parsed:
                    self.__shares_root = source.__shares_root = True
            case Document():
                self.__content = source.root
                self.__shares_root = source.__shares_root = True
            case TextEntry():
                self.__content = source
            case _:
                self.__content = _Raw(str(source))

    def __add__(self, other: Any) -> Self:
        if (
            other.__class__ is self.__class__
            and not self.is_parsed
            and not other.is_parsed
        ):
            return self.__class__(self.__content.string + other.__content.string)

        if isinstance(other, Document):
            result = self.__class__(self.root.combine(other.root))
            result.__shares_root = self.__shares_root = other.__shares_root = True
            return result

        if not _is_stringifiable(other):
            raise TypeMismatch(
                f"Cannot add {other.__class__.__name__} to {self.__class__.__name__}."
            )

        return self + self.__class__(other)

    def __repr__(self) -> str:
        state = "parsed" if self.is_parsed else "unparsed"
        return f"<{self.__class__.__name__} ({state}) [{hex(id(self))}]>"

    def __str__(self) -> str:
        return self.to_string()

    def __own_root(self) -> TextEntry:
        root = self.root
        if self.__shares_root:
            root = self.__content = root.clone(deep=True)
            self.__shares_root = False
        return root

    def append(self, value: NodeSource = None, /, **attributes: Any) -> TextEntry:
        """
        Appends an entry to the document's root. A given value isn't parsed but used
        as the new entry's text.

        :param value: The new entry's text or an entry.
        :param attributes: Attributes for the new entry.
        :return: The appended entry.
        """
        root = self.__own_root()
        root.append(value, **attributes)
        result = root.last_child
        assert isinstance(result, TextEntry)
        return result

    @property
    def base(self) -> TextEntry:
        """Deprecated. Use :attr:`root` instead."""
        warnings.warn(
            "The base property is deprecated. Use Document.root instead.",
            category=DeprecationWarning,
        )
        return self.root

    @classmethod
    def from_document(cls, document: Document) -> Self:
        """
        Creates a document from another one. This only makes the intent of a conversion
        explicit, the constructor can be called with a document as well.
        """
        if not isinstance(document, Document):
            raise TypeMismatch(
                f"A {cls.__name__} can only be created from other documents."
            )
        return cls(document)

    @property
    def is_parsed(self) -> bool:
        """Whether the document's raw input was parsed into a tree."""
        return not isinstance(self.__content, _Raw)

    def iterate_nodes(self, *filter: Filter) -> Iterator[AttributedNode]:
        """
        This method proxies to the :meth:`_richtext.nodes.AttributedNode.iterate_nodes`
        method of the document's :attr:`root <Document.root>` node.
        """
        return self.root.iterate_nodes(*filter)

    iterate_entries = iterate_nodes

    def optimize(self, *filter: Filter) -> Self:
        """
        Optimizes the document's tree in place, see
        :meth:`_richtext.nodes.AttributedNode.optimize`.
        """
        self.__own_root().optimize(*filter)
        return self

    @classmethod
    def parse(cls, raw: str) -> TextEntry:
        """
        Parses a string into a tree of entries with the class' :attr:`format`.
        """
        result = cls.format.parse(raw)
        if not isinstance(result, TextEntry):
            raise TypeMismatch(
                f"The {cls.format.name} format's parser returned a "
                f"{result.__class__.__name__} instead of a TextEntry."
            )
        return result

    @classmethod
    def render(cls, root: TextEntry) -> str:
        """
        Renders a tree of entries as string with the class' :attr:`format`.
        """
        if DefaultRenderOptions.optimize:
            root = root.optimized()
        return cls.format.render(root)

    @property
    def root(self) -> TextEntry:
        """
        The root node of the document's tree. The raw input is parsed when this is
        accessed for the first time.
        """
        if isinstance(content := self.__content, _Raw):
            content = self.__content = self.parse(content.string)
        return content

    def to_plain(self) -> str:
        """
        Returns the concatenated texts of the tree's leaves without any formatting.
        """
        return self.root.to_string()

    def to_string(self, callback: Optional[RenderCallback] = None) -> str:
        """
        Renders the document as string.

        :param callback: A callable that is passed to
                         :meth:`_richtext.nodes.TextEntry.to_string` to render the
                         document's tree instead of the format's renderer.
        :return: The rendered tree or, if the document wasn't parsed yet, the raw
                 input.
        """
        if callback is not None:
            return self.root.to_string(callback)
        if self.is_parsed or self.render_unparsed:
            return self.render(self.root)
        assert isinstance(self.__content, _Raw)
        return self.__content.string


__all__ = (
    AttributedNode.__name__,
    DefaultRenderOptions.__name__,
    Document.__name__,
    DocumentMixinBase.__name__,
    FormatInterface.__name__,
    PlainFormat.__name__,
    TextEntry.__name__,
)
