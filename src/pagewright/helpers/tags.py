"""Tag helpers for building HTML elements from templates."""

from typing import Any

from markupsafe import Markup, escape


def _attributes(options: dict[str, Any]) -> str:
    parts: list[str] = []
    for key in sorted(options):
        value = options[key]
        if value is None or value is False:
            continue
        name = key.rstrip("_").replace("_", "-")
        if value is True:
            parts.append(f' {name}="{name}"')
        else:
            parts.append(f' {name}="{escape(value)}"')
    return "".join(parts)


def tag(name: str, open: bool = False, **options: Any) -> Markup:
    """Return an empty element such as <br /> or <input type="text" />.

    Trailing underscores are dropped from option names (class_ -> class) and
    inner underscores become dashes (data_role -> data-role).

    Args:
        name: Element name
        open: Leave the element open (<br>) instead of self-closing
        **options: Element attributes
    """
    closing = ">" if open else " />"
    return Markup(f"<{name}{_attributes(options)}{closing}")


def content_tag(name: str, content: Any = "", **options: Any) -> Markup:
    """Return an element wrapping escaped content.

    Args:
        name: Element name
        content: Element body (Markup is inserted as is)
        **options: Element attributes
    """
    return Markup(f"<{name}{_attributes(options)}>{escape(content)}</{name}>")


HELPERS = {
    "tag": tag,
    "content_tag": content_tag,
}
