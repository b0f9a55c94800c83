"""Text helpers available to every template."""

from typing import Any

from markupsafe import Markup, escape


def h(value: Any) -> Markup:
    """HTML-escape a value."""
    return escape(value)


def truncate(text: str, length: int = 30, omission: str = "...") -> str:
    """Shorten text to at most `length` characters, ending with `omission`."""
    if len(text) <= length:
        return text
    keep = max(length - len(omission), 0)
    return text[:keep] + omission


def pluralize(number: int, singular: str, plural: str | None = None) -> str:
    """Return "1 item" / "2 items" style text."""
    if number == 1:
        return f"{number} {singular}"
    return f"{number} {plural or singular + 's'}"


def simple_format(text: str) -> Markup:
    """Escape text and wrap blank-line separated blocks in <p> elements.

    Single newlines inside a block become <br />.
    """
    blocks = [block.strip() for block in text.replace("\r\n", "\n").split("\n\n")]
    paragraphs = [
        "<p>" + "<br />\n".join(escape(line) for line in block.split("\n")) + "</p>"
        for block in blocks
        if block
    ]
    return Markup("\n\n".join(paragraphs))


HELPERS = {
    "h": h,
    "truncate": truncate,
    "pluralize": pluralize,
    "simple_format": simple_format,
}
