"""Template dispatch by file suffix.

Two template families are supported, both backed by Jinja2:
- ERB: interpolated templates (.rhtml, .html.erb) using <% %> / <%= %> tags
- HAML: indentation-markup templates (.haml, .html.haml) via Hamlish-Jinja

Both render against the same variables, so a template can call the same
helpers whatever its syntax. Adding a family means adding a TemplateKind,
its suffixes in TEMPLATE_SUFFIXES, and an environment factory.
"""

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, FunctionLoader, StrictUndefined, Undefined

from pagewright.builder.errors import UnsupportedTemplateError
from pagewright.config import TemplateConfig

logger = logging.getLogger(__name__)


class TemplateKind(Enum):
    """Supported template families."""

    ERB = "erb"
    HAML = "haml"


# Checked in order, case-sensitive.
TEMPLATE_SUFFIXES: list[tuple[str, TemplateKind]] = [
    (".rhtml", TemplateKind.ERB),
    (".html.erb", TemplateKind.ERB),
    (".haml", TemplateKind.HAML),
    (".html.haml", TemplateKind.HAML),
]


def match_template_kind(path: Path | str) -> TemplateKind | None:
    """Return the template family for a path, or None if unrecognized."""
    name = Path(path).name
    for suffix, kind in TEMPLATE_SUFFIXES:
        if name.endswith(suffix):
            return kind
    return None


def template_kind_for(path: Path | str) -> TemplateKind:
    """Return the template family for a path.

    Raises:
        UnsupportedTemplateError: If no suffix matches
    """
    kind = match_template_kind(path)
    if kind is None:
        raise UnsupportedTemplateError(path)
    return kind


def _base_options(config: TemplateConfig) -> dict[str, Any]:
    return {
        "autoescape": config.autoescape,
        "undefined": StrictUndefined if config.strict_undefined else Undefined,
        "trim_blocks": config.trim_blocks,
        "keep_trailing_newline": True,
        # Sources are handed over per render; nothing to cache across calls.
        "cache_size": 0,
    }


def create_erb_environment(config: TemplateConfig, loader: FunctionLoader) -> Environment:
    """Create the environment for interpolated (.rhtml/.html.erb) templates."""
    return Environment(
        loader=loader,
        block_start_string="<%",
        block_end_string="%>",
        variable_start_string="<%=",
        variable_end_string="%>",
        comment_start_string="<%#",
        comment_end_string="%>",
        **_base_options(config),
    )


def create_haml_environment(config: TemplateConfig, loader: FunctionLoader) -> Environment:
    """Create the environment for indentation-markup (.haml) templates."""
    env = Environment(
        loader=loader,
        extensions=["hamlish_jinja.HamlishExtension"],
        **_base_options(config),
    )
    env.hamlish_mode = config.haml_mode  # type: ignore[attr-defined]
    env.hamlish_file_extensions = (".haml",)  # type: ignore[attr-defined]
    env.hamlish_enable_div_shortcut = True  # type: ignore[attr-defined]
    return env


ENVIRONMENT_FACTORIES: dict[
    TemplateKind, Callable[[TemplateConfig, FunctionLoader], Environment]
] = {
    TemplateKind.ERB: create_erb_environment,
    TemplateKind.HAML: create_haml_environment,
}


class TemplateDispatcher:
    """Renders template source text with the engine its path selects.

    Usage:
        dispatcher = TemplateDispatcher(config.templates)
        html = dispatcher.render(path, source_text, variables)
    """

    def __init__(self, config: TemplateConfig | None = None) -> None:
        """Initialize one Jinja2 environment per template family.

        Args:
            config: Template engine settings
        """
        self.config = config or TemplateConfig()
        self._sources: dict[str, str] = {}
        loader = FunctionLoader(self._load_source)
        self._environments = {
            kind: factory(self.config, loader) for kind, factory in ENVIRONMENT_FACTORIES.items()
        }

    def _load_source(self, name: str) -> tuple[str, str, Callable[[], bool]] | None:
        source = self._sources.get(name)
        if source is None:
            return None
        return source, name, lambda: False

    def environment(self, kind: TemplateKind) -> Environment:
        """Return the Jinja2 environment used for a template family."""
        return self._environments[kind]

    def render(
        self,
        source_path: Path | str,
        source_text: str,
        variables: Mapping[str, Any],
    ) -> str:
        """Render template source text.

        The source path only selects the family and names the template in
        engine errors; the text itself is supplied by the caller.

        Args:
            source_path: Path of the template source
            source_text: Template source
            variables: Names visible to the template

        Returns:
            Rendered text

        Raises:
            UnsupportedTemplateError: If the path has no recognized suffix
            jinja2.TemplateError: If the engine fails
        """
        kind = template_kind_for(source_path)
        name = str(source_path)
        logger.debug("Rendering %s as %s", name, kind.value)

        self._sources[name] = source_text
        try:
            template = self._environments[kind].get_template(name)
        finally:
            del self._sources[name]

        return template.render(dict(variables))
