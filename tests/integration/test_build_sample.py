"""End-to-end builds of the sample project through the public API."""

from pathlib import Path

import pytest

from pagewright.builder import HtmlBuilder, build_html, build_test
from pagewright.config import load_config
from pagewright.models import Project


@pytest.fixture
def project(sample_project: Path) -> Project:
    """Load the writable copy of the sample project."""
    return Project(load_config(sample_project / "pagewright.yaml"))


class TestSampleBuild:
    """Tests building the sample project's pages."""

    def test_index_document(self, project: Project) -> None:
        """Test the full page: layout around every fragment in order."""
        app = project.bundle("app")
        index = app.entry_named("index.html", "en")

        path = build_html(index, app)

        assert path == project.build_dir / "app" / "en" / "index.html"
        assert path.read_text(encoding="utf-8") == (
            "<!DOCTYPE html>\n"
            "<html>\n"
            "<head>\n"
            "  <title>app</title>\n"
            '  <script src="/static/app/en/app.js"></script>\n'
            "</head>\n"
            "<body>\n"
            '<div class="panel">en.lproj/_panel.rhtml</div>\n'
            '<div id="app-body"><h1>Welcome</h1></div>\n'
            '<div id="loading"></div>\n'
            '<div id="core">app</div>\n'
            "\n"
            "</body>\n"
            "</html>\n"
        )

    def test_partials_never_rendered(self, project: Project) -> None:
        """Test non-localized templates stay out of the page."""
        app = project.bundle("app")

        html = HtmlBuilder(project.config).build(app.entry_named("index.html", "en"), app)

        assert "partial" not in html

    def test_core_page_does_not_include_app(self, project: Project) -> None:
        """Test requirements only flow one way."""
        core = project.bundle("core")

        html = HtmlBuilder(project.config).build(core.entry_named("index.html", "en"), core)

        assert '<div id="core">core</div>' in html
        assert "app-body" not in html

    def test_test_page(self, project: Project) -> None:
        """Test build_test renders only the bundle's own composite members."""
        app = project.bundle("app")
        index = app.entry_named("index.html", "en")

        path = build_test(index, app)
        html = path.read_text(encoding="utf-8")

        assert "Welcome" in html
        assert "panel" in html
        assert 'id="loading"' not in html
