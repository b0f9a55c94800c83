"""Helper registry composing helper sets for template rendering.

Global sets (tags, text, static) are available to every build. Bundles can
register extra helpers; a build loads those of every bundle in its
dependency closure, later bundles overriding earlier ones on name clashes.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from pagewright.helpers import static, tags, text

logger = logging.getLogger(__name__)

DEFAULT_SETS: dict[str, dict[str, Callable[..., Any]]] = {
    "tags": tags.HELPERS,
    "text": text.HELPERS,
    "static": static.HELPERS,
}


def render(*_args: Any, **_kwargs: Any) -> str:
    """Compatibility no-op: output placement is handled by the builder."""
    return ""


class HelperRegistry:
    """Registry of helper functions by set and by bundle."""

    def __init__(self, include_defaults: bool = True) -> None:
        """Initialize the registry.

        Args:
            include_defaults: Register the built-in helper sets
        """
        self._sets: dict[str, dict[str, Callable[..., Any]]] = {}
        self._bundle_helpers: dict[str, dict[str, Callable[..., Any]]] = {}
        if include_defaults:
            for name, helpers in DEFAULT_SETS.items():
                self.register_set(name, helpers)

    def register_set(self, name: str, helpers: dict[str, Callable[..., Any]]) -> None:
        """Register (or replace) a global helper set."""
        self._sets[name] = dict(helpers)

    def register(
        self,
        name: str,
        func: Callable[..., Any],
        bundle: str | None = None,
    ) -> None:
        """Register a single helper, globally or for one bundle.

        Args:
            name: Name the template calls
            func: Helper function
            bundle: Bundle name; None makes it part of the "custom" global set
        """
        if bundle is None:
            self._sets.setdefault("custom", {})[name] = func
        else:
            self._bundle_helpers.setdefault(bundle, {})[name] = func

    @property
    def set_names(self) -> list[str]:
        """Names of registered global helper sets."""
        return list(self._sets)

    def helpers_for(self, bundle_names: Iterable[str]) -> dict[str, Callable[..., Any]]:
        """Compose the helpers visible to a build.

        Args:
            bundle_names: Bundles of the build, in dependency-closure order

        Returns:
            Mapping of helper name to function
        """
        helpers: dict[str, Callable[..., Any]] = {"render": render}
        for helper_set in self._sets.values():
            helpers.update(helper_set)
        for bundle_name in bundle_names:
            bundle_helpers = self._bundle_helpers.get(bundle_name)
            if bundle_helpers:
                logger.debug("Loaded %d helpers from bundle %s", len(bundle_helpers), bundle_name)
                helpers.update(bundle_helpers)
        return helpers
