"""Human-readable description of the element an input targeted."""

from ..models import Element

CONTENT_MAX_LENGTH = 400

_CONTENT_ATTRIBUTES = ("aria-label", "alt", "title", "placeholder")
_VOID_ELEMENTS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
}


def get_element_as_string(element: Element) -> str:
    """Outer HTML of the element without its children ("..." stands for them)."""
    tag = element.tag_name.lower()
    attributes = "".join(
        f' {name}="{_escape_attribute(value)}"'
        for name, value in element.attributes.items()
    )
    if element.has_child_nodes:
        return f"<{tag}{attributes}>...</{tag}>"
    if tag in _VOID_ELEMENTS:
        return f"<{tag}{attributes}>"
    return f"<{tag}{attributes}></{tag}>"


def get_element_content(element: Element) -> str | None:
    """First non-blank content of the element, falling back to its ancestors."""
    current: Element | None = element
    while current is not None:
        for candidate in _content_candidates(current):
            if not isinstance(candidate, str):
                continue
            trimmed = candidate.strip()
            if trimmed:
                return _limit_length(trimmed)
        current = current.parent
    return None


def _content_candidates(element: Element) -> list[str | None]:
    candidates = [element.text_content]
    if element.tag_name.upper() == "INPUT" and element.attributes.get("type") in (
        "button",
        "submit",
    ):
        candidates.append(element.value)
    candidates.extend(element.attributes.get(name) for name in _CONTENT_ATTRIBUTES)
    return candidates


def _limit_length(text: str) -> str:
    if len(text) > CONTENT_MAX_LENGTH:
        return f"{text[:CONTENT_MAX_LENGTH]} [...]"
    return text


def _escape_attribute(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")
