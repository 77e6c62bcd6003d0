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

from _richtext.plugins.html_format import HTMLFormat
from richtext import Document


class HTMLDocument(Document):
    """
    A document whose raw input and string representation are fragments of inline HTML
    markup. See :mod:`_richtext.plugins.html_format` for the supported elements.

    >>> document = HTMLDocument("<b>Lorem</b> ipsum")
    >>> document.root[0].bold
    True
    >>> document.append("!", italic=True).italic
    True
    >>> str(document)
    '<b>Lorem</b> ipsum<i>!</i>'

    A plain :class:`richtext.Document` can be converted to render its text with
    escaped markup characters:

    >>> str(HTMLDocument(Document("1 < 2")))
    '1 &lt; 2'
    """

    format = HTMLFormat()


__all__ = (HTMLDocument.__name__,)
