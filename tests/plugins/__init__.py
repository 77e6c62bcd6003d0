from __future__ import annotations

from types import SimpleNamespace

from _richtext.nodes import TextEntry
from _richtext.plugins import DocumentMixinBase, FormatInterface


class PlaygroundDocumentExtension(DocumentMixinBase):
    @classmethod
    def _init_config(cls, config, kwargs):
        config.playground = SimpleNamespace(
            initialized=True, property=kwargs.pop("playground_property", None)
        )
        super()._init_config(config, kwargs)

    def playground_method(self):
        return self.config.playground.property.replace("o", "0")


class BracketFormat(FormatInterface):
    """Words in brackets are bold, e.g. ``[Lorem] ipsum``."""

    name = "brackets"

    def parse(self, raw):
        root = TextEntry()
        for index, part in enumerate(raw.replace("]", "[").split("[")):
            if part:
                root.append(part, bold=bool(index % 2))
        return root

    def render(self, root):
        return root.to_string(
            lambda entry, string: f"[{string}]" if entry.bold else string
        )
