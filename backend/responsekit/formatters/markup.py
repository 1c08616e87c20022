"""XML formatter built on :mod:`xml.etree.ElementTree`."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any

from responsekit.core.errors import SerializationError
from responsekit.support.content_type import ContentType
from responsekit.support.data import to_plain

_VALID_START = re.compile(r"^[a-z_]", re.IGNORECASE)
_INVALID_CHARS = re.compile(r"[^a-z0-9_\-.]", re.IGNORECASE)
# Characters outside the XML 1.0 Char production.
_ILLEGAL_TEXT = re.compile(r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def sanitize_element_name(name: str) -> str:
    """Coerce ``name`` into a valid XML element name."""

    if not _VALID_START.match(name):
        name = f"item_{name}"
    return _INVALID_CHARS.sub("_", name)


def singular(word: str) -> str:
    """Very small singularizer used to name repeated list elements."""

    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("s") and len(word) > 1:
        return word[:-1]
    return word


class XmlFormatter:
    """Render nested mappings and lists as an XML document.

    Parameters
    ----------
    root:
        Name of the document element.
    encoding:
        Encoding announced in the XML declaration.

    Notes
    -----
    - Mappings become child elements, one per key.
    - Lists repeat their items under the singular of the parent key
      (``items`` -> ``item``); a top-level list uses ``item``.
    - ``None`` renders as an empty element, booleans as ``true``/``false``.
    - Text holding characters XML 1.0 forbids (most C0 controls, lone
      surrogates) raises :class:`SerializationError`.
    """

    content_type = ContentType.XML

    def __init__(self, root: str = "response", encoding: str = "UTF-8") -> None:
        self.root = root
        self.encoding = encoding

    def format(self, payload: Any) -> str:
        document = ET.Element(sanitize_element_name(self.root))
        self._append(document, to_plain(payload))
        ET.indent(document, space="  ")
        body = ET.tostring(document, encoding="unicode")
        return f'<?xml version="1.0" encoding="{self.encoding}"?>\n{body}\n'

    def _append(self, parent: ET.Element, data: Any, key: str | None = None) -> None:
        if isinstance(data, Mapping):
            target = parent if key is None else ET.SubElement(parent, sanitize_element_name(key))
            for child_key, child_value in data.items():
                self._append(target, child_value, str(child_key))
        elif isinstance(data, list):
            item_name = "item" if key is None else singular(key)
            for item in data:
                self._append(parent, item, item_name)
        elif key is None:
            parent.text = self._text(data)
        else:
            element = ET.SubElement(parent, sanitize_element_name(key))
            if data is not None:
                element.text = self._text(data)

    @staticmethod
    def _text(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        text = str(value)
        illegal = _ILLEGAL_TEXT.search(text)
        if illegal:
            raise SerializationError(f"XML cannot represent character U+{ord(illegal.group()):04X}")
        return text


__all__ = ["XmlFormatter", "sanitize_element_name", "singular"]
