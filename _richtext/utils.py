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

import enum
from itertools import zip_longest
from typing import TYPE_CHECKING, Optional

from _richtext.exceptions import InvalidCodePath

if TYPE_CHECKING:
    from _richtext.nodes import AttributedNode


class TreeDifferenceKind(enum.Enum):
    None_ = enum.auto()
    Attributes = enum.auto()
    ChildrenSize = enum.auto()
    NodeType = enum.auto()


class TreesComparisonResult:
    """
    Instances of this class describe one or no difference between two trees.
    Casting an instance to :class:`bool` will yield :obj:`True` when it describes no
    difference, thus the compared trees were equal.
    Casted to strings they're intended to support debugging.
    """

    def __init__(
        self,
        difference_kind: TreeDifferenceKind,
        lhn: Optional[AttributedNode],
        rhn: Optional[AttributedNode],
        path: tuple[int, ...] = (),
    ):
        self.difference_kind = difference_kind
        self.lhn = lhn
        self.rhn = rhn
        self.path = path
        """ The child indexes that lead from the compared roots to the nodes. """

    def __bool__(self):
        return self.difference_kind is TreeDifferenceKind.None_

    def __str__(self):
        if self.difference_kind is TreeDifferenceKind.None_:
            return "Trees are equal."

        assert self.lhn is not None
        assert self.rhn is not None
        location = "/".join(str(i) for i in self.path) or "the root"

        if self.difference_kind is TreeDifferenceKind.NodeType:
            return (
                f"Nodes at {location} are of different type: "
                f"{self.lhn.__class__} != {self.rhn.__class__}"
            )
        elif self.difference_kind is TreeDifferenceKind.Attributes:
            return (
                f"Attributes of nodes at {location} differ:\n"
                f"{self.lhn.attributes}\n{self.rhn.attributes}"
            )
        elif self.difference_kind is TreeDifferenceKind.ChildrenSize:
            result = f"Child nodes of nodes at {location} differ:"
            for a, b in zip_longest(
                self.lhn.iterate_children(),
                self.rhn.iterate_children(),
                fillvalue=None,
            ):
                result += f"\n\n{a!r}\n{b!r}"
            return result

        raise InvalidCodePath()


def compare_trees(
    lhr: AttributedNode, rhr: AttributedNode, _path: tuple[int, ...] = ()
) -> TreesComparisonResult:
    """
    Compares two node trees for equality. Upon the first detection of a difference of
    nodes that are located at the same position within the compared (sub-)trees a
    mismatch is reported.

    :param lhr: The node that is considered as root of the left hand operand.
    :param rhr: The node that is considered as root of the right hand operand.
    :return: An object that contains information about the first or no difference.

    In contrast to the ``==`` operator the node types are considered as well.
    """
    if not isinstance(rhr, lhr.__class__):
        return TreesComparisonResult(TreeDifferenceKind.NodeType, lhr, rhr, _path)
    if lhr.attributes != rhr.attributes:
        return TreesComparisonResult(TreeDifferenceKind.Attributes, lhr, rhr, _path)
    if lhr.count != rhr.count:
        return TreesComparisonResult(
            TreeDifferenceKind.ChildrenSize, lhr, rhr, _path
        )

    for index, (lhn, rhn) in enumerate(
        zip(lhr.iterate_children(), rhr.iterate_children())
    ):
        result = compare_trees(lhn, rhn, _path + (index,))
        if not result:
            return result

    return TreesComparisonResult(TreeDifferenceKind.None_, None, None)


__all__ = (
    compare_trees.__name__,
    TreeDifferenceKind.__name__,
    TreesComparisonResult.__name__,
)
