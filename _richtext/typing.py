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

import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias


if TYPE_CHECKING:
    from _richtext.nodes import AttributedNode, TextEntry


if sys.version_info < (3, 11):  # DROPWITH Python 3.10
    from typing_extensions import Self
else:
    from typing import Self


AttributeKey: TypeAlias = str
Attributes: TypeAlias = "dict[AttributeKey, Any]"
Filter: TypeAlias = "Callable[[AttributedNode], bool]"
NodeFormatter: TypeAlias = "Callable[[AttributedNode], str]"
NodeSource: TypeAlias = "AttributedNode | str | Any"
RenderCallback: TypeAlias = "Callable[[TextEntry, str], str]"


__all__ = (
    "AttributeKey",
    "Attributes",
    "Filter",
    "NodeFormatter",
    "NodeSource",
    "RenderCallback",
    "Self",
)
