"""Selector-driven HTML queries on top of selectolax."""
import logging
from typing import Any, Callable, Optional, TypedDict, Union

from selectolax.parser import HTMLParser, Node

logger = logging.getLogger(__name__)

Root = Union[HTMLParser, Node]

# Controls that never contribute to a submitted form payload
SKIPPED_INPUT_TYPES = {"submit", "button", "image", "file", "reset"}


class FieldSpec(TypedDict, total=False):
    """How to read one field out of a repeated block."""

    sel: str
    attr: str
    parse: Callable[[Any], Any]


def query_all(root: Root, selector: str) -> list[Node]:
    """Return every node under root matching selector, in document order."""
    return list(root.css(selector))


def node_text(node: Node) -> str:
    """Return the stripped text content of a node."""
    return node.text(deep=True, strip=False).strip()


def node_attr(node: Node, name: str) -> Optional[str]:
    """Return an attribute value, or None when the attribute is absent."""
    return node.attributes.get(name)


def extract_text_by_selector(root: Root, selector: str, default: str = "") -> str:
    """Extract concatenated text from all matching elements."""
    nodes = query_all(root, selector)
    if not nodes:
        return default
    return "".join(node.text(deep=True, strip=False) for node in nodes).strip()


def scrape(root: Root, fields: dict[str, FieldSpec], item_selector: str) -> list[dict[str, Any]]:
    """
    Read one dict per item_selector match.
    Each field spec may give:
    - sel: sub-selector inside the item (the item itself when omitted)
    - attr: attribute of the first match instead of the text of all matches
    - parse: callable applied to the raw value
    """
    items = []
    for item in query_all(root, item_selector):
        record: dict[str, Any] = {}
        for name, spec in fields.items():
            sel = spec.get("sel")
            matches = query_all(item, sel) if sel else [item]
            attr = spec.get("attr")
            if attr:
                value = node_attr(matches[0], attr) if matches else None
            else:
                value = "".join(node.text(deep=True, strip=False) for node in matches).strip()
            parse = spec.get("parse")
            if parse is not None:
                value = parse(value)
            record[name] = value
        items.append(record)
    return items


def serialize_form(form: Node) -> dict[str, str]:
    """Collect the values a browser would submit for a form, hidden tokens included."""
    data: dict[str, str] = {}
    for control in form.css("input, select, textarea"):
        name = control.attributes.get("name")
        if not name or "disabled" in control.attributes:
            continue

        if control.tag == "input":
            input_type = (control.attributes.get("type") or "text").lower()
            if input_type in SKIPPED_INPUT_TYPES:
                continue
            if input_type in ("checkbox", "radio"):
                if "checked" not in control.attributes:
                    continue
                data[name] = control.attributes.get("value") or "on"
                continue
            data[name] = control.attributes.get("value") or ""
        elif control.tag == "textarea":
            data[name] = control.text(deep=True, strip=False)
        else:
            options = control.css("option")
            selected = [o for o in options if "selected" in o.attributes] or options[:1]
            if selected:
                option = selected[0]
                value = option.attributes.get("value")
                data[name] = value if value is not None else node_text(option)

    logger.debug(f"Serialized form fields: {sorted(data)}")
    return data
