"""
Small accessor toolkit for schema-tolerant XML reading.

Every heuristic lookup in the GNO reader is phrased as an ordered tuple of
accessors evaluated lazily by ``first_match``; the first one that yields a
non-empty value wins. Accessors are plain callables ``(Element) -> value``.

    NAME = (attr("Name"), child("Name"), child("DisplayName"))
    first_match(node, NAME)
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence
from xml.etree import ElementTree as ET

Accessor = Callable[[ET.Element], Any]

# Attributes that carry a reference to another record.
REF_ATTRS: tuple[str, ...] = ("Ref", "ref", "hlink", "IDREF", "idref", "ID", "Id", "id")


def strip_ns(name: str) -> str:
    if "}" in name:
        return name.split("}", 1)[1]
    return name


def strip_namespaces(root: ET.Element) -> ET.Element:
    """Drop ``{uri}`` prefixes from every tag and attribute name, in place."""
    for el in root.iter():
        if isinstance(el.tag, str):
            el.tag = strip_ns(el.tag)
        if any("}" in key for key in el.attrib):
            el.attrib = {strip_ns(k): v for k, v in el.attrib.items()}
    return root


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, list):
        return bool(value)
    return True


def as_list(value: Any) -> List[Any]:
    """Absent -> [], single node -> [node], list -> list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def first_match(node: Optional[ET.Element], accessors: Sequence[Accessor], default: Any = None) -> Any:
    """Evaluate ``accessors`` in order; return the first non-empty result."""
    if node is None:
        return default
    for accessor in accessors:
        value = accessor(node)
        if _present(value):
            return value.strip() if isinstance(value, str) else value
    return default


def element_text(el: Optional[ET.Element]) -> Optional[str]:
    """Direct text of ``el`` (not descendants), stripped; None when blank."""
    if el is None or el.text is None:
        return None
    text = el.text.strip()
    return text or None


# -----------------------------------------------------------------------------
# Accessor factories
# -----------------------------------------------------------------------------

def attr(name: str) -> Accessor:
    return lambda node: node.get(name)


def child(path: str) -> Accessor:
    return lambda node: node.find(path)


def child_text(path: str) -> Accessor:
    return lambda node: element_text(node.find(path))


def child_attr(path: str, name: str) -> Accessor:
    def _get(node: ET.Element) -> Optional[str]:
        el = node.find(path)
        return el.get(name) if el is not None else None
    return _get


def ref_value(el: Optional[ET.Element]) -> Optional[str]:
    """The id an element points at: a reference attribute, else its text."""
    if el is None:
        return None
    value = first_match(el, [attr(name) for name in REF_ATTRS])
    return value if value is not None else element_text(el)


def child_ref(path: str) -> Accessor:
    return lambda node: ref_value(node.find(path))


def self_text() -> Accessor:
    return element_text


def items(*names: str) -> Accessor:
    """All direct children named like the first name that has any."""
    def _get(node: ET.Element) -> List[ET.Element]:
        for name in names:
            found = node.findall(name)
            if found:
                return found
        return []
    return _get

