"""
XML to object tree conversion for OggDude data files.

The conversion follows the conventions the OggDude data is usually read
with: attributes are merged into the element's object, text is trimmed,
an element with only text becomes a bare string, an element with both
text and attributes keeps its text under ``"_"``, and a child element that
appears once becomes a bare value while repeated siblings become a list.

Because of that last rule a repeatable child (``<Source>``, ``<Mod>``...)
can arrive either as a dict or as a list; ``as_list`` is the one place
that shape is normalized.
"""

from __future__ import annotations

from typing import Any

import lxml.etree as LET

TEXT_KEY = "_"

_parser = LET.XMLParser(remove_comments=True, remove_pis=True, resolve_entities=False)


def _element_to_value(elem: LET._Element) -> Any:
    attributes = {LET.QName(k).localname: v.strip() for k, v in elem.attrib.items()}
    children = [ch for ch in elem if isinstance(ch.tag, str)]
    text = "".join(elem.itertext()) if not children else (elem.text or "")
    text = text.strip()

    if not children and not attributes:
        return text

    result: dict[str, Any] = {}
    if text:
        result[TEXT_KEY] = text
    result.update(attributes)
    for ch in children:
        key = LET.QName(ch).localname
        val = _element_to_value(ch)
        if key in result:
            if not isinstance(result[key], list):
                result[key] = [result[key]]
            result[key].append(val)
        else:
            result[key] = val
    return result


def parse_xml_to_json(data: str | bytes) -> dict[str, Any]:
    """Parse an XML document into a plain object tree.

    Args:
        data: The XML document. Bytes are decoded by lxml following the
            XML declaration (UTF-8 when none is given); text is assumed
            already decoded.

    Returns:
        ``{root_tag: value}`` where value follows the module conventions.

    Raises:
        ValueError: If the document is not well-formed XML.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else data
    try:
        root = LET.fromstring(raw, parser=_parser)
    except LET.XMLSyntaxError as e:
        raise ValueError(f"Invalid XML: {e}") from e
    return {LET.QName(root).localname: _element_to_value(root)}


def get_path(tree: Any, path: str | list[str], default: Any = None) -> Any:
    """Walk a parsed tree along dotted ``path``.

    Returns ``default`` as soon as a segment is missing or a non-dict value
    is met before the end of the path.
    """
    segments = path.split(".") if isinstance(path, str) else path
    current = tree
    for segment in segments:
        if not isinstance(current, dict) or segment not in current:
            return default
        current = current[segment]
    return current


def as_node(value: Any) -> dict[str, Any]:
    """Return ``value`` if it is an element object, else an empty one.

    Empty or text-only elements parse to strings; mappers reading named
    children treat them as elements with no children.
    """
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list[Any]:
    """Normalize a repeatable child: list as is, single value wrapped, None empty."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
