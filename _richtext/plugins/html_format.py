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
The HTML format handles fragments of inline markup as they are common in the text
fields of web applications. These markup elements are mapped to attributes of
:class:`_richtext.nodes.TextEntry` nodes:

======================  ======================================================
element                 attributes
======================  ======================================================
``b``, ``strong``       ``bold``
``i``, ``em``           ``italic``
``u``, ``ins``          ``underline``
``span``                ``color``, ``font`` and the aforementioned from its
                        ``style`` attribute
``font``                ``color``, ``font`` from its ``color`` and ``face``
                        attributes
``a``                   ``href``
``br``                  a leaf with a newline as text
======================  ======================================================

Other elements are treated as plain containers of their contents, a
:class:`UserWarning` is issued for these.
"""

from __future__ import annotations

import warnings
from html import escape
from typing import TYPE_CHECKING, Any, Final

from lxml import etree
from lxml import html as lxml_html

from _richtext.exceptions import ParsingError
from _richtext.nodes import TextEntry
from _richtext.plugins import FormatInterface

if TYPE_CHECKING:
    from _richtext.typing import Attributes


TAG_ATTRIBUTES: Final = {
    "b": {"bold": True},
    "em": {"italic": True},
    "i": {"italic": True},
    "ins": {"underline": True},
    "strong": {"bold": True},
    "u": {"underline": True},
}
CONTAINER_TAGS: Final = ("a", "br", "div", "font", "span")
STYLE_PROPERTIES: Final = {
    ("color", None): ("color", None),
    ("font-family", None): ("font", None),
    ("font-style", "italic"): ("italic", True),
    ("font-weight", "bold"): ("bold", True),
    ("text-decoration", "underline"): ("underline", True),
}


def _parse_style(style: str) -> Attributes:
    result: Attributes = {}
    for declaration in style.split(";"):
        name, colon, value = declaration.partition(":")
        if not colon:
            continue
        name, value = name.strip().lower(), value.strip()
        if (target := STYLE_PROPERTIES.get((name, None))) is not None:
            result[target[0]] = value
        elif (target := STYLE_PROPERTIES.get((name, value.lower()))) is not None:
            result[target[0]] = target[1]
    return result


class HTMLFormat(FormatInterface):
    """
    Parses and renders fragments of inline HTML markup.

    >>> html_format = HTMLFormat()
    >>> root = html_format.parse("Lorem <b>ipsum</b>")
    >>> [(e.text, e.bold) for e in root.iterate_leaves()]
    [('Lorem ', False), ('ipsum', True)]
    >>> html_format.render(root)
    'Lorem <b>ipsum</b>'
    """

    name = "html"

    def _attributes_from_element(self, element: Any) -> Attributes:
        tag = element.tag.lower()
        result: Attributes = dict(TAG_ATTRIBUTES.get(tag, {}))

        if tag not in TAG_ATTRIBUTES and tag not in CONTAINER_TAGS:
            warnings.warn(
                f"The HTML element <{tag}> isn't supported and its contents are "
                "handled as plain text.",
                category=UserWarning,
            )

        if tag == "a" and (href := element.get("href")) is not None:
            result["href"] = href
        elif tag == "font":
            if (color := element.get("color")) is not None:
                result["color"] = color
            if (face := element.get("face")) is not None:
                result["font"] = face

        if style := element.get("style"):
            result.update(_parse_style(style))

        return result

    def _entry_from_element(self, element: Any, attributes: Attributes) -> TextEntry:
        entry = TextEntry(**attributes)

        if element.tag.lower() == "br":
            entry.append("\n")
        if element.text:
            entry.append(element.text)

        for child in element:
            # comments and processing instructions have no string as tag
            if isinstance(child.tag, str):
                entry.append(
                    self._entry_from_element(
                        child, self._attributes_from_element(child)
                    )
                )
            if child.tail:
                entry.append(child.tail)

        return entry

    def _render_entry(self, entry: TextEntry, string: str) -> str:
        if entry.is_leaf:
            string = escape(string, quote=False).replace("\n", "<br>")

        styles = []
        if entry.color is not None:
            styles.append(f"color: {entry.color}")
        if entry.font is not None:
            styles.append(f"font-family: {entry.font}")
        if styles:
            string = f'<span style="{escape("; ".join(styles))}">{string}</span>'

        if entry.underline:
            string = f"<u>{string}</u>"
        if entry.italic:
            string = f"<i>{string}</i>"
        if entry.bold:
            string = f"<b>{string}</b>"
        if (href := entry["href"]) is not None:
            string = f'<a href="{escape(href)}">{string}</a>'

        return string

    def parse(self, raw: str) -> TextEntry:
        markup = raw.lstrip()
        if not markup:
            return TextEntry(raw)

        try:
            container = lxml_html.fragment_fromstring(markup, create_parent="div")
        except etree.ParserError as e:
            raise ParsingError(self.name, str(e)) from e

        root = self._entry_from_element(container, {})
        # lxml discards leading text that consists only of whitespace
        if leading_whitespace := raw[: len(raw) - len(markup)]:
            root = TextEntry().append(leading_whitespace).append(root)
        return root.optimize()

    def render(self, root: TextEntry) -> str:
        return root.to_string(self._render_entry)


__all__ = (HTMLFormat.__name__,)
