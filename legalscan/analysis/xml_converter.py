"""Attribute-free XML tree serialization of a StructuredAnalysis.

Each field becomes one element, in the order of the JSON shape. Lists are
wrapped in a container element holding one child per item, and absent
fields are omitted rather than written empty.

XML 1.0 cannot carry most control characters, not even as character
references. A value holding one is written as mixed content: the plain text
runs stay in place and each control character becomes a ``<ctrl>`` child
holding its code point, e.g. ``page one<ctrl>12</ctrl>page two``.
"""

import re
import xml.etree.ElementTree as ET
from typing import Any

from legalscan.analysis.exceptions import FormatConversionError
from legalscan.analysis.models import StructuredAnalysis

ROOT_TAG = "document"
CONTROL_TAG = "ctrl"

LIST_ITEM_TAGS: dict[str, str] = {
    "scores": "labelScore",
    "amounts": "amount",
    "failedPages": "page",
}

# Characters XML 1.0 cannot carry at all.
_ILLEGAL_XML_CHARS = re.compile(r"([\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff])")


class XmlConverter:
    """Converts analyses to XML text and back."""

    def to_xml(self, analysis: StructuredAnalysis) -> str:
        root = ET.Element(ROOT_TAG)
        mixed: list[tuple[ET.Element, str]] = []
        for key, value in analysis.to_dict().items():
            self._append(root, key, value, mixed)
        ET.indent(root)
        # control characters go in after indent() so it cannot pad the mixed content
        for element, text in mixed:
            self._write_mixed(element, text)
        # a literal CR would be normalized to LF by any parser
        return ET.tostring(root, encoding="unicode").replace("\r", "&#13;")

    def from_xml(self, xml_text: str) -> StructuredAnalysis:
        """Rebuild an analysis from ``to_xml`` output.

        Raises:
            FormatConversionError: if the text is not well-formed or lacks
                required elements.
        """
        try:
            root = ET.fromstring(xml_text)
        except ET.ParseError as exc:
            raise FormatConversionError(f"Malformed analysis XML: {exc}") from exc
        if root.tag != ROOT_TAG:
            raise FormatConversionError(f"Expected <{ROOT_TAG}> root, got <{root.tag}>")

        try:
            data = {child.tag: self._read(child) for child in root}
            return StructuredAnalysis.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise FormatConversionError(f"Incomplete analysis XML: {exc}") from exc

    def _append(
        self,
        parent: ET.Element,
        tag: str,
        value: Any,
        mixed: list[tuple[ET.Element, str]],
    ) -> None:
        if value is None:
            return
        element = ET.SubElement(parent, tag)
        if isinstance(value, dict):
            for key, item in value.items():
                self._append(element, key, item, mixed)
        elif isinstance(value, (list, tuple)):
            item_tag = LIST_ITEM_TAGS[tag]
            for item in value:
                self._append(element, item_tag, item, mixed)
        else:
            text = self._scalar(value)
            if _ILLEGAL_XML_CHARS.search(text):
                mixed.append((element, text))
            else:
                element.text = text

    @staticmethod
    def _write_mixed(element: ET.Element, text: str) -> None:
        # split() with a capture group alternates plain runs and single control chars
        parts = _ILLEGAL_XML_CHARS.split(text)
        element.text = parts[0]
        for char, tail in zip(parts[1::2], parts[2::2]):
            control = ET.SubElement(element, CONTROL_TAG)
            control.text = str(ord(char))
            control.tail = tail

    def _read(self, element: ET.Element) -> Any:
        if element.tag in LIST_ITEM_TAGS:
            return [self._read(child) for child in element]
        children = list(element)
        if children and all(child.tag == CONTROL_TAG for child in children):
            return self._read_mixed(element)
        if children:
            return {child.tag: self._read(child) for child in children}
        return element.text or ""

    @staticmethod
    def _read_mixed(element: ET.Element) -> str:
        pieces = [element.text or ""]
        for control in element:
            pieces.append(chr(int(control.text or "")))
            pieces.append(control.tail or "")
        return "".join(pieces)

    @staticmethod
    def _scalar(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            return repr(value)
        return str(value)
