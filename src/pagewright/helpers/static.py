"""Static resource helpers.

URLs are derived from the variables of the template being rendered, so the
same helper yields bundle- and language-specific paths in every fragment.
"""

from jinja2 import pass_context
from jinja2.runtime import Context

DEFAULT_STATIC_URL = "/static"


@pass_context
def static_url(context: Context, path: str, bundle: str | None = None) -> str:
    """Return the URL of a static resource of the current (or named) bundle.

    Format: <static_url>/<bundle>/<language>/<path>
    """
    prefix = str(context.get("static_url_prefix") or DEFAULT_STATIC_URL).rstrip("/")
    bundle_name = bundle or context.get("bundle_name")
    parts = [prefix, bundle_name, context.get("language"), path.lstrip("/")]
    return "/".join(str(part) for part in parts if part)


HELPERS = {
    "static_url": static_url,
}
