"""HTML assembly: fragment resolution, template dispatch and page building."""

from pagewright.builder.context import HtmlContext, RenderBuffer
from pagewright.builder.dispatcher import TemplateDispatcher, TemplateKind, template_kind_for
from pagewright.builder.errors import BuildError, TemplateRenderError, UnsupportedTemplateError
from pagewright.builder.pipeline import HtmlBuilder, build_html, build_test
from pagewright.builder.resolver import resolve_fragments

__all__ = [
    "BuildError",
    "HtmlBuilder",
    "HtmlContext",
    "RenderBuffer",
    "TemplateDispatcher",
    "TemplateKind",
    "TemplateRenderError",
    "UnsupportedTemplateError",
    "build_html",
    "build_test",
    "resolve_fragments",
    "template_kind_for",
]
