"""Wire encoders for problem detail members.

Both encoders take the same ordered (name, value) list and keep its order:
a JSON object with keys in that order, or an XML `problem` element in the
RFC 7807 namespace with one child per member.
"""

import json
import re
import xml.etree.ElementTree as ET
from typing import Any

from pydantic_core import to_jsonable_python

XML_NAMESPACE = "urn:ietf:rfc:7807"

Members = list[tuple[str, Any]]

# Characters XML 1.0 cannot carry, even escaped
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")
_INVALID_NAME_CHARS = re.compile(r"[^\w.\-]")


def encode_json(members: Members) -> bytes:
    """Single-line JSON object, UTF-8, no trailing newline."""
    return json.dumps(
        dict(members),
        separators=(",", ":"),
        ensure_ascii=False,
        default=to_jsonable_python,
    ).encode("utf-8")


def _qualified(name: str) -> str:
    return f"{{{XML_NAMESPACE}}}{name}"


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return _INVALID_XML_CHARS.sub("\ufffd", str(value))


def _element_name(key: Any) -> str:
    """Mapping key as an XML element name; disallowed characters become `_`."""
    name = _INVALID_NAME_CHARS.sub("_", str(key))
    if not name or not (name[0].isalpha() or name[0] == "_"):
        name = f"_{name}"
    return name


def _append(parent: ET.Element, name: str, value: Any) -> None:
    """Append `value` under `parent` as element(s) named `name`.

    None is omitted, sequences repeat the element once per item, and
    mappings become nested elements named after their keys.
    """
    if value is None:
        return

    if isinstance(value, (list, tuple)):
        for item in value:
            _append(parent, name, item)
        return

    element = ET.SubElement(parent, _qualified(name))
    if isinstance(value, dict):
        for key, item in value.items():
            _append(element, _element_name(key), item)
    else:
        element.text = _scalar_text(value)


def encode_xml(members: Members) -> bytes:
    """`<problem xmlns="urn:ietf:rfc:7807">` document, no XML declaration."""
    root = ET.Element(_qualified("problem"))
    for name, value in members:
        _append(root, _element_name(name), to_jsonable_python(value))

    return ET.tostring(
        root,
        encoding="unicode",
        default_namespace=XML_NAMESPACE,
        short_empty_elements=False,
    ).encode("utf-8")
