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

from typing import TYPE_CHECKING, Any, Optional


class Styleable:
    """
    A mixin for classes whose instances support item access to attributes. It exposes
    common text styles as properties that read and write plain attributes:

    >>> from _richtext.nodes import TextEntry
    >>> entry = TextEntry("Lorem")
    >>> entry.bold = "yes"
    >>> entry.attributes
    {'text': 'Lorem', 'bold': True}

    Boolean styles are :obj:`False` when the attribute isn't set, the others are
    :obj:`None` then.
    """

    __slots__ = ()

    if TYPE_CHECKING:

        def __getitem__(self, key: str) -> Any: ...

        def __setitem__(self, key: str, value: Any): ...

    def _get_flag(self, key: str) -> bool:
        return bool(self[key])

    @property
    def bold(self) -> bool:
        """Whether the text is rendered with a bold font weight."""
        return self._get_flag("bold")

    @bold.setter
    def bold(self, value: Any):
        self["bold"] = bool(value)

    @property
    def color(self) -> Optional[str]:
        """The text color in a notation that the applied format understands."""
        return self["color"]

    @color.setter
    def color(self, value: Optional[str]):
        self["color"] = value

    @property
    def font(self) -> Optional[str]:
        """The name of a font family."""
        return self["font"]

    @font.setter
    def font(self, value: Optional[str]):
        self["font"] = value

    @property
    def italic(self) -> bool:
        return self._get_flag("italic")

    @italic.setter
    def italic(self, value: Any):
        self["italic"] = bool(value)

    @property
    def underline(self) -> bool:
        return self._get_flag("underline")

    @underline.setter
    def underline(self, value: Any):
        self["underline"] = bool(value)


__all__ = (Styleable.__name__,)
