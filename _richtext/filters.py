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

"""
Node filters are callables that take a node as only argument and return a boolean.
They can be passed to the iteration methods of nodes to narrow their results and to
:meth:`_richtext.nodes.AttributedNode.optimize` to decide which children are retained.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from _richtext.nodes import AttributedNode
    from _richtext.typing import AttributeKey, Filter


_ANY: Final = object()


# contributed node filters and filter wrappers


def any_of(*filter: Filter) -> Filter:
    """
    A node filter wrapper that matches when any of the given filters is matching, like a
    boolean ``or``.
    """

    def any_of_wrapper(node: AttributedNode) -> bool:
        return any(x(node) for x in filter)

    return any_of_wrapper


def has_attribute(key: AttributeKey, value: Any = _ANY) -> Filter:
    """
    Returns a node filter that matches nodes that carry an attribute with the given
    key and, if provided, the given value.

    >>> from _richtext.nodes import TextEntry
    >>> is_bold = has_attribute("bold", True)
    >>> is_bold(TextEntry("x", bold=True)), is_bold(TextEntry("x"))
    (True, False)
    """

    def has_attribute_wrapper(node: AttributedNode) -> bool:
        if key not in node.attributes:
            return False
        return value is _ANY or node.attributes[key] == value

    return has_attribute_wrapper


def is_blank(node: AttributedNode) -> bool:
    """
    A node filter that matches leaf nodes without text content.
    """
    return node.is_leaf and not getattr(node, "text", None)


def is_interior(node: AttributedNode) -> bool:
    """
    A node filter that matches nodes with children.
    """
    return not node.is_leaf


def is_leaf(node: AttributedNode) -> bool:
    """
    A node filter that matches nodes without children.
    """
    return node.is_leaf


def not_(*filter: Filter) -> Filter:
    """
    A node filter wrapper that matches when the given filter is not matching,
    like a boolean ``not``.
    """

    def not_wrapper(node: AttributedNode) -> bool:
        return not all(f(node) for f in filter)

    return not_wrapper


#


__all__ = (
    any_of.__name__,
    has_attribute.__name__,
    is_blank.__name__,
    is_interior.__name__,
    is_leaf.__name__,
    not_.__name__,
)
