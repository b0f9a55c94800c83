"""HTML build pipeline.

Renders every resolved fragment into the context's buffer, then renders the
bundle layout with that buffer available as `content_for_resources`. The
layout render is the built document.

Usage:
    builder = HtmlBuilder(config)
    html = builder.build(entry, bundle)
    builder.build_to_file(entry, bundle)
"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import TemplateError

from pagewright.builder.context import HtmlContext, RenderBuffer
from pagewright.builder.dispatcher import TemplateDispatcher, template_kind_for
from pagewright.builder.errors import BuildError, TemplateRenderError
from pagewright.config import PagewrightConfig
from pagewright.helpers import HelperRegistry
from pagewright.models.bundle import Bundle
from pagewright.models.entry import Entry
from pagewright.utils.files import FileStore
from pagewright.utils.logging import get_logger

logger = get_logger(__name__)


class HtmlBuilder:
    """Builds HTML documents for bundle entries.

    Attributes:
        dispatcher: Renders template sources by suffix
        files: Reads sources and writes built documents
        helpers: Helper registry overriding the bundle library's
    """

    def __init__(
        self,
        config: PagewrightConfig | None = None,
        dispatcher: TemplateDispatcher | None = None,
        files: FileStore | None = None,
        helpers: HelperRegistry | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            config: pagewright configuration
            dispatcher: Template dispatcher (built from config if omitted)
            files: File store (local disk if omitted)
            helpers: Helper registry (bundle library's or built-ins if omitted)
        """
        self.config = config or PagewrightConfig()
        self.dispatcher = dispatcher or TemplateDispatcher(self.config.templates)
        self.files = files or FileStore(encoding=self.config.templates.encoding)
        self.helpers = helpers

    def context(self, entry: Entry, bundle: Bundle, deep: bool = True) -> HtmlContext:
        """Create the rendering context for one build."""
        return HtmlContext(entry, bundle, deep=deep, helpers=self.helpers)

    def build(self, entry: Entry, bundle: Bundle, deep: bool = True) -> str:
        """Build the document for an entry without writing it.

        Args:
            entry: Entry being built
            bundle: Bundle that owns the entry
            deep: Include HTML entries of every required bundle

        Returns:
            The built document

        Raises:
            UnsupportedTemplateError: If a fragment or the layout has an unknown suffix
            TemplateRenderError: If a template fails to render
            OSError: If a source or the layout cannot be read
        """
        return self.render(self.context(entry, bundle, deep))

    def render(self, context: HtmlContext) -> str:
        """Render a prepared context's fragments and layout."""
        layout_path = Path(context.bundle.layout_path)
        template_kind_for(layout_path)

        for fragment in context.fragments:
            self._render_fragment(context, fragment, layout_path, context.buffer)

        layout = self.files.read_text(layout_path)
        document = self._render_source(context, layout_path, layout, filename=None)
        logger.structured(
            logging.INFO,
            f"Built {context.target.filename} for {context.bundle_name}",
            bundle=context.bundle_name,
            entry=context.target.filename,
            language=context.language,
            fragments=len(context.fragments),
            characters=len(document),
        )
        return document

    def _render_fragment(
        self,
        context: HtmlContext,
        fragment: Entry,
        layout_path: Path,
        buffer: RenderBuffer,
    ) -> None:
        with context.rendering(fragment):
            if fragment.source_path == layout_path:
                logger.debug("Skipping layout listed as fragment: %s", layout_path)
                return
            source = self.files.read_text(fragment.source_path)
            buffer.append(
                self._render_source(context, fragment.source_path, source, fragment.filename)
            )

    def _render_source(
        self,
        context: HtmlContext,
        source_path: Path,
        source: str,
        filename: str | None,
    ) -> str:
        variables = context.variables(static_url_prefix=self.config.project.static_url)
        try:
            return self.dispatcher.render(source_path, source, variables)
        except TemplateError as e:
            logger.error("Template rendering failed for %s: %s", source_path, e)
            raise TemplateRenderError(source_path, str(e), filename=filename) from e
        except (BuildError, OSError):
            raise
        except Exception as e:
            # Raised by a helper or expression while the template evaluated.
            logger.error("Template evaluation failed for %s: %r", source_path, e)
            raise TemplateRenderError(
                source_path, f"{type(e).__name__}: {e}", filename=filename
            ) from e

    def build_to_file(self, entry: Entry, bundle: Bundle, deep: bool = True) -> Path:
        """Build an entry and write it to its build path.

        Nothing is written if the build fails.

        Returns:
            Path of the written document
        """
        document = self.build(entry, bundle, deep)
        path = self.files.write_text(entry.build_path, document)
        logger.structured(
            logging.INFO,
            f"Wrote {path}",
            bundle=bundle.bundle_name,
            entry=entry.filename,
            path=str(path),
        )
        return path

    def build_test(self, entry: Entry, bundle: Bundle) -> Path:
        """Build a standalone test page: the entry's own fragments only."""
        return self.build_to_file(entry, bundle, deep=False)


def build_html(
    entry: Entry,
    bundle: Bundle,
    deep: bool = True,
    **builder_options: Any,
) -> Path:
    """Build an entry and write it to its build path.

    With deep=True the HTML entries of every required bundle are included.

    Args:
        entry: Entry being built
        bundle: Bundle that owns the entry
        deep: Include HTML entries of every required bundle
        **builder_options: Passed to HtmlBuilder (config, dispatcher, files, helpers)

    Returns:
        Path of the written document
    """
    return HtmlBuilder(**builder_options).build_to_file(entry, bundle, deep)


def build_test(entry: Entry, bundle: Bundle, **builder_options: Any) -> Path:
    """Build a test page: like build_html without other bundles' templates."""
    return build_html(entry, bundle, False, **builder_options)
