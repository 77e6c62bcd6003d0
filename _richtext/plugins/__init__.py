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

from collections.abc import Sequence
from importlib.metadata import entry_points
from importlib.util import find_spec
from typing import TYPE_CHECKING, Any

from _richtext.nodes import TextEntry


if TYPE_CHECKING:
    from types import SimpleNamespace
    from richtext import Document


class DocumentMixinBase:
    """
    By deriving a subclass from this one, a document extension class is registered as
    plugin. These are supposed to add additional attributes to a document, e.g. derived
    data or methods that interpret the tree of entries. All attributes of an extension
    should share a common prefix that terminates with an underscore, e.g.
    `statistics_words`, `statistics_sentences`, etc.

    This base class also acts as termination for methods that can be implemented by
    mixin classes. Any implementation of a method must call a base class' one, e.g.:

    .. code-block::

        from types import SimpleNamespace

        from _richtext.plugins import DocumentMixinBase


        class StatisticsExtension(DocumentMixinBase):

            # this method can be implemented by any extension class
            @classmethod
            def _init_config(cls, config, kwargs):
                config.statistics = SimpleNamespace(
                    separator=kwargs.pop("statistics_separator", " ")
                )
                super()._init_config(config, kwargs)

            # this method is specific to this extension
            def statistics_words(self):
                return len(self.to_plain().split(self.config.statistics.separator))
    """

    def __init_subclass__(cls):
        # ensure it is a direct subclass
        if cls.__mro__[1] is DocumentMixinBase:
            plugin_manager.document_mixins.append(cls)

    @classmethod
    def _init_config(cls, config: SimpleNamespace, kwargs: dict[str, Any]):
        """
        The ``kwargs`` argument contains the additional keyword arguments that a
        :class:`richtext.Document` instance is called with. Extension classes that
        expect configuration data *must* process their specific arguments by clearing
        them from the ``kwargs`` dictionary, e.g. with :meth:`dict.pop`, and preferably
        storing the final configuration data in a :class:`types.SimpleNamespace` and
        adding it to the :class:`types.SimpleNamespace` passed as ``config`` with the
        extension's name. The initially mentioned keyword arguments *should* be prefixed
        with that name as well. This method is called before a document's source is
        processed.
        """
        if kwargs:
            raise RuntimeError(
                "Not all configuration arguments have been processed. You either "
                "passed invalid arguments or an extension doesn't handle them "
                f"properly: {kwargs}"
            )


class FormatInterface:
    """
    This is the base class for formats. A format defines how a string is parsed into a
    tree of :class:`_richtext.nodes.TextEntry` instances and how such tree is rendered
    as string. A :class:`richtext.Document` subclass uses an instance of a format as
    its ``format`` class attribute:

    .. code-block::

        from richtext import Document
        from _richtext.plugins import FormatInterface


        class ShoutingFormat(FormatInterface):
            name = "shouting"

            def render(self, root):
                return root.to_string().upper()


        class ShoutingDocument(Document):
            format = ShoutingFormat()

    Formats shall not keep any state between invocations of their methods, a single
    instance is shared by all documents of a class.
    """

    name: str
    """
    The format can be selected by this class attribute's value with
    :meth:`PluginManager.get_format`.
    """

    def __init_subclass__(cls):
        plugin_manager.formats[cls.name] = cls

    def parse(self, raw: str) -> TextEntry:
        """
        Returns the root of a tree whose leaves' texts resemble the content of the
        given string. The default implementation wraps the whole string in one entry.
        """
        return TextEntry(raw)

    def render(self, root: TextEntry) -> str:
        """
        Returns the string representation of an entry tree in the format. This must be
        a left to right function of the leaves' texts and the entries' attributes. The
        default implementation concatenates the leaves' texts.
        """
        return root.to_string()


class PluginManager:
    __slots__ = (
        "document_mixins",
        "formats",
    )

    def __init__(self):
        self.document_mixins: list[type[DocumentMixinBase]] = []
        self.formats: dict[str, type[FormatInterface]] = {}

    def get_format(self, preferences: str | Sequence[str]) -> type[FormatInterface]:
        """
        Returns the first available format class whose name is among the given ones.
        """
        if isinstance(preferences, str):
            preferences = (preferences,)

        for name in preferences:
            if (format_class := self.formats.get(name)) is not None:
                return format_class

        raise KeyError(f"None of these formats is available: {', '.join(preferences)}")

    @staticmethod
    def load_plugins():
        """
        Loads all modules that are registered as entrypoint in the ``richtext`` group
        and imports contributed formats whose dependencies are available.
        """
        import _richtext.plugins.plain_format  # noqa: F401

        if find_spec("lxml") is not None:
            import _richtext.plugins.html_format  # noqa: F401

        for entrypoint in entry_points().select(group="richtext"):
            entrypoint.load()


plugin_manager = PluginManager()


__all__ = (
    DocumentMixinBase.__name__,
    FormatInterface.__name__,
    PluginManager.__name__,
    "plugin_manager",
)
