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

from collections.abc import Iterator
from typing import (
    TYPE_CHECKING,
    overload,
    Any,
    ClassVar,
    Final,
    Optional,
)

from _richtext.exceptions import (
    InvalidOperation,
    PreconditionViolation,
    TypeMismatch,
)
from _richtext.filters import is_blank, is_leaf, not_
from _richtext.styles import Styleable

if TYPE_CHECKING:
    from _richtext.typing import (
        AttributeKey,
        Attributes,
        Filter,
        NodeFormatter,
        NodeSource,
        RenderCallback,
        Self,
    )


# constants


TEXT: Final = "text"

INTERIOR_SYMBOL: Final = "◯"
BRANCH_PREFIX: Final = "├─╴"
LAST_BRANCH_PREFIX: Final = "└─╴"
BRANCH_INDENT: Final = "│  "
LAST_BRANCH_INDENT: Final = "   "


# functions


def _format_attributes(attributes: Attributes, exclude: tuple[str, ...] = ()) -> str:
    return "".join(f" {k}={v!r}" for k, v in attributes.items() if k not in exclude)


# nodes


class AttributedNode:
    """
    An ordered tree node that holds a mapping of attributes and a list of child nodes.
    Each child belongs exclusively to its parent, nodes don't refer to their parents.

    :param value: An optional value that is stored as attribute. Its key is defined by
                  the class, it is ``value`` for this one.
    :param attributes: Initial attributes.

    The children are accessible by index, attributes by their key:

    >>> node = AttributedNode(color="red").append(1).append(2)
    >>> node["color"], node[-1]["value"], node.count, node.size
    ('red', 2, 2, 3)

    Attributes that aren't set are :obj:`None` when accessed this way. The
    :attr:`attributes` dictionary is the node's own and may be altered.
    """

    __slots__ = ("_attributes", "_child_nodes")

    _default_optimize_filters: ClassVar[tuple[Filter, ...]] = ()
    _value_key: ClassVar[AttributeKey] = "value"

    def __init__(self, value: Any = None, /, **attributes: Any):
        self._attributes: Attributes = {}
        self._child_nodes: list[AttributedNode] = []
        if value is not None:
            self._attributes[self._value_key] = self._coerce_value(value)
        self._attributes.update(attributes)

    def __add__(self, other: Any) -> AttributedNode:
        if isinstance(other, AttributedNode):
            return self.combine(other)
        return NotImplemented

    def __contains__(self, item: AttributeKey | AttributedNode) -> bool:
        match item:
            case str():
                return item in self._attributes
            case AttributedNode():
                return any(n is item for n in self._child_nodes)
            case _:
                raise TypeMismatch(
                    "Either an attribute key or a node must be tested for membership."
                )

    def __copy__(self) -> Self:
        return self.clone(deep=False)

    def __deepcopy__(self, memo) -> Self:
        return self.clone(deep=True)

    def __delitem__(self, item: AttributeKey | int):
        match item:
            case str():
                del self._attributes[item]
            case int():
                del self._child_nodes[item]
            case _:
                raise TypeMismatch(
                    "Either an attribute key or a child index must be provided."
                )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AttributedNode):
            return NotImplemented
        return self.is_shallow_equal(other) and all(
            a == b for a, b in zip(self._child_nodes, other._child_nodes)
        )

    __hash__ = None  # type: ignore

    @overload
    def __getitem__(self, item: int) -> AttributedNode: ...

    @overload
    def __getitem__(self, item: slice) -> list[AttributedNode]: ...

    @overload
    def __getitem__(self, item: AttributeKey) -> Any: ...

    def __getitem__(self, item):
        match item:
            case str():
                return self._attributes.get(item)
            case int() | slice():
                return self._child_nodes[item]
            case _:
                raise TypeMismatch(
                    "Either an attribute key, a child index or a slice must be "
                    "provided."
                )

    def __iter__(self) -> Iterator[AttributedNode]:
        return self.iterate_nodes()

    def __lshift__(self, child: NodeSource) -> Self:
        return self.append(child)

    def __repr__(self) -> str:
        attributes = ", ".join(f"{k}={v!r}" for k, v in self._attributes.items())
        if self._child_nodes:
            return (
                f"<{self.__class__.__name__}({attributes}) with "
                f"{len(self._child_nodes)} children [{hex(id(self))}]>"
            )
        return f"<{self.__class__.__name__}({attributes}) [{hex(id(self))}]>"

    def __setitem__(self, key: AttributeKey, value: Any):
        if not isinstance(key, str):
            raise TypeMismatch("Attribute keys must be strings.")
        self._attributes[key] = value

    def _absorb(self, child: AttributedNode):
        self._attributes.update(child._attributes)
        self._child_nodes[:] = child._child_nodes

    def _accepts_child(self, node: AttributedNode) -> bool:
        return True

    def _append_node(self, node: AttributedNode):
        self._child_nodes.append(node)

    @staticmethod
    def _coerce_value(value: Any) -> Any:
        return value

    @staticmethod
    def _default_tree_formatter(node: AttributedNode) -> str:
        return INTERIOR_SYMBOL + _format_attributes(node._attributes)

    def _new_child(self, child: NodeSource, attributes: Attributes) -> AttributedNode:
        match child:
            case AttributedNode():
                if attributes:
                    raise TypeMismatch(
                        "Attributes can only be passed along with a value, not with "
                        "a node."
                    )
                if not self._accepts_child(child):
                    raise TypeMismatch(
                        f"A {child.__class__.__name__} can't be added as child to a "
                        f"{self.__class__.__name__}."
                    )
                if any(n is self for n in child._iterate_nodes()):
                    raise InvalidOperation(
                        "A node can't be added to a subtree of itself."
                    )
                if self._shares_nodes_with(child):
                    raise InvalidOperation(
                        "The node or one of its descendants is already part of the "
                        "tree it shall be added to."
                    )
                return child
            case None:
                return self.__class__(**attributes)
            case _:
                return self.__class__(child, **attributes)

    def _iterate_nodes(self) -> Iterator[AttributedNode]:
        yield self
        stack = [iter(self._child_nodes)]

        while stack:
            for node in stack[-1]:
                yield node
                if node._child_nodes:
                    stack.append(iter(node._child_nodes))
                    break
            else:
                stack.pop()

    def _optimize(self, filter: tuple[Filter, ...]):
        if not self._child_nodes:
            return

        retained = []
        for child in self._child_nodes:
            child._optimize(filter)
            if all(f(child) for f in filter):
                retained.append(child)
        self._child_nodes[:] = retained

        if len(self._child_nodes) == 1:
            self._absorb(self._child_nodes[0])

    def _prepend_child(self, child: NodeSource = None, /, **attributes: Any) -> Self:
        self._child_nodes.insert(0, self._new_child(child, attributes))
        return self

    def _shares_nodes_with(self, other: AttributedNode) -> bool:
        nodes = {id(n) for n in self._iterate_nodes()}
        return any(id(n) in nodes for n in other._iterate_nodes())

    def append(self, child: NodeSource = None, /, **attributes: Any) -> Self:
        """
        Appends a child node. Anything else than a node instance is used as value for
        a new leaf node of the same class with the given attributes.

        :param child: The node or value to add.
        :param attributes: Attributes for a newly created node.
        :return: The node itself to allow chaining.
        """
        self._append_node(self._new_child(child, attributes))
        return self

    @property
    def attributes(self) -> Attributes:
        """The node's attributes."""
        return self._attributes

    def child(self, index: Optional[int] = None) -> AttributedNode:
        """
        Returns the child at the given index. Without an index *the* only child of a
        node is returned and a :exc:`PreconditionViolation` is raised if the node
        hasn't exactly one child.
        """
        if index is None:
            if len(self._child_nodes) != 1:
                raise PreconditionViolation(
                    f"The node has {len(self._child_nodes)} children, not exactly one."
                )
            return self._child_nodes[0]
        return self._child_nodes[index]

    def clone(self, deep: bool = False) -> Self:
        """
        Creates a new node of the same type with copied attributes.

        :param deep: Clones the whole subtree if :obj:`True`.
        :return: A copy of the node.
        """
        result = self.__class__.__new__(self.__class__)
        result._attributes = dict(self._attributes)
        if deep:
            result._child_nodes = [n.clone(deep=True) for n in self._child_nodes]
        else:
            result._child_nodes = []
        return result

    def combine(self, other: AttributedNode) -> AttributedNode:
        """
        Creates a new root node without attributes that has this and the other node
        as children. Neither of them is altered.
        """
        if self._shares_nodes_with(other):
            other = other.clone(deep=True)
        return self.__class__().append(self).append(other)

    @property
    def count(self) -> int:
        """The number of the node's children."""
        return len(self._child_nodes)

    @property
    def first_child(self) -> Optional[AttributedNode]:
        return self._child_nodes[0] if self._child_nodes else None

    def format_tree(self, formatter: Optional[NodeFormatter] = None) -> str:
        """
        Represents the subtree as hierarchy with one node per line.

        :param formatter: A callable that returns a one-line representation of a node.
                          The default shows a node's attributes.
        """
        if formatter is None:
            formatter = self._default_tree_formatter

        lines = [formatter(self)]
        for index, child in enumerate(self._child_nodes, start=1):
            is_last = index == len(self._child_nodes)
            head, *tail = child.format_tree(formatter).split("\n")
            lines.append((LAST_BRANCH_PREFIX if is_last else BRANCH_PREFIX) + head)
            indent = LAST_BRANCH_INDENT if is_last else BRANCH_INDENT
            lines.extend(indent + line for line in tail)
        return "\n".join(lines)

    def is_shallow_equal(self, other: AttributedNode) -> bool:
        """
        Compares only the attributes and the number of children of two nodes.
        """
        return (
            self._attributes == other._attributes
            and len(self._child_nodes) == len(other._child_nodes)
        )

    @property
    def is_leaf(self) -> bool:
        return not self._child_nodes

    @property
    def is_minimal(self) -> bool:
        """
        Whether no node in the subtree, including this one, has exactly one child.
        """
        return not any(len(n._child_nodes) == 1 for n in self._iterate_nodes())

    def iterate_children(self, *filter: Filter) -> Iterator[AttributedNode]:
        """
        A :term:`generator iterator` that yields the node's children from left to
        right that match all given filters.
        """
        for node in tuple(self._child_nodes):
            if all(f(node) for f in filter):
                yield node

    def iterate_leaves(self, *filter: Filter) -> Iterator[AttributedNode]:
        """
        A :term:`generator iterator` that yields the subtree's leaf nodes from left to
        right that match all given filters.
        """
        yield from self.iterate_nodes(is_leaf, *filter)

    def iterate_nodes(self, *filter: Filter) -> Iterator[AttributedNode]:
        """
        A :term:`generator iterator` that yields the node itself and all its
        descendants in preorder that match all given filters.
        """
        for node in self._iterate_nodes():
            if all(f(node) for f in filter):
                yield node

    @property
    def last_child(self) -> Optional[AttributedNode]:
        return self._child_nodes[-1] if self._child_nodes else None

    def optimize(self, *filter: Filter) -> Self:
        """
        Minimizes the subtree in place. Children are optimized first and then only
        retained when they match all given filters, or the class' default filters if
        none are given. Subsequently a node with exactly one child takes over the
        child's children and attributes, those of the child take precedence.

        :param filter: Filters that a child must match to be retained.
        :return: The node itself.
        """
        self._optimize(filter or self._default_optimize_filters)
        return self

    def optimized(self, *filter: Filter) -> Self:
        """
        Returns an optimized copy of the subtree and leaves this one untouched. See
        :meth:`optimize`.
        """
        return self.clone(deep=True).optimize(*filter)

    @property
    def size(self) -> int:
        """The number of nodes in the subtree, including this one."""
        return sum(1 for _ in self._iterate_nodes())


class TextEntry(AttributedNode, Styleable):
    """
    Entries are the nodes of a :class:`richtext.Document`'s tree. The ``text``
    attribute has a special status, it is only exposed by leaf nodes. When a child is
    added to a leaf that has text, the text is moved into a new leaf that is added
    beforehand:

    >>> entry = TextEntry("Lorem ", bold=True)
    >>> entry.append("ipsum") is entry
    True
    >>> entry.text is None, entry[0].text, entry[0].bold, entry[1].bold
    (True, 'Lorem ', True, False)
    >>> str(entry)
    'Lorem ipsum'

    :param text: The entry's initial text, anything other than a string is converted
                 to one.
    :param attributes: Initial attributes.
    """

    __slots__ = ()

    _default_optimize_filters = (not_(is_blank),)
    _value_key = TEXT

    def __setitem__(self, key: AttributeKey, value: Any):
        if key == TEXT:
            self.text = value
        else:
            super().__setitem__(key, value)

    def __str__(self) -> str:
        return self.to_string()

    def _absorb(self, child: AttributedNode):
        residual_text = TEXT in self._attributes and TEXT not in child._attributes
        super()._absorb(child)
        if residual_text:
            del self._attributes[TEXT]

    def _accepts_child(self, node: AttributedNode) -> bool:
        return isinstance(node, TextEntry)

    def _append_node(self, node: AttributedNode):
        if not self._child_nodes and self._attributes.get(TEXT):
            promoted = self.__class__.__new__(self.__class__)
            promoted._attributes = dict(self._attributes)
            promoted._child_nodes = []
            self._child_nodes.append(promoted)
        self._attributes.pop(TEXT, None)
        super()._append_node(node)

    @staticmethod
    def _coerce_value(value: Any) -> str:
        return value if isinstance(value, str) else str(value)

    @staticmethod
    def _default_tree_formatter(node: AttributedNode) -> str:
        assert isinstance(node, TextEntry)
        if node._child_nodes:
            return INTERIOR_SYMBOL + _format_attributes(node._attributes, (TEXT,))
        return repr(node.text) + _format_attributes(node._attributes, (TEXT,))

    def _prepend_child(self, child: NodeSource = None, /, **attributes: Any) -> Self:
        """
        Entries can't be prepended as that would circumvent the relocation of a
        leaf's text. This raises an :exc:`InvalidOperation` therefore.
        """
        raise InvalidOperation("Children can only be appended to a text entry.")

    @property
    def text(self) -> Optional[str]:
        """
        The entry's text if it is a leaf, otherwise :obj:`None`. Setting it on an
        entry with children raises an :exc:`InvalidOperation`.
        """
        if self._child_nodes:
            return None
        text = self._attributes.get(TEXT)
        return "" if text is None else text

    @text.setter
    def text(self, value: str):
        if self._child_nodes:
            raise InvalidOperation("Only leaf entries can have a text.")
        if not isinstance(value, str):
            raise TypeMismatch("The text of an entry must be a string.")
        self._attributes[TEXT] = value

    def to_string(self, callback: Optional[RenderCallback] = None) -> str:
        """
        Concatenates the text of all leaves from left to right.

        :param callback: A callable that is called for each entry, starting at the
                         leaves, with the entry and the string that was determined
                         for it, which is the text of a leaf or the concatenated
                         results for its children. Its return value is used as the
                         entry's string representation.
        """
        if self._child_nodes:
            string = "".join(
                n.to_string(callback)  # type: ignore
                for n in self._child_nodes
            )
        else:
            string = self.text  # type: ignore
        return string if callback is None else callback(self, string)


#


__all__ = (
    AttributedNode.__name__,
    TextEntry.__name__,
)
