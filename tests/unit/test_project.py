"""Unit tests for the project-backed bundle model."""

from pathlib import Path

import pytest

from pagewright.builder import resolve_fragments
from pagewright.config import load_config, load_config_from_dict
from pagewright.models import EntryKind, HiddenMode, Project, ProjectError


@pytest.fixture
def project(sample_project_dir: Path) -> Project:
    """Load the sample project."""
    return Project(load_config(sample_project_dir / "pagewright.yaml"))


def _names(entries) -> list[str]:
    return [e.filename for e in entries]


class TestProject:
    """Tests for Project."""

    def test_root_from_config_path(self, project: Project, sample_project_dir: Path) -> None:
        """Test the project root is the directory of the config file."""
        assert project.root == sample_project_dir.resolve()
        assert project.build_dir == sample_project_dir.resolve() / "build"

    def test_bundles_in_config_order(self, project: Project) -> None:
        """Test bundles are listed as configured."""
        assert [b.bundle_name for b in project.bundles] == ["app", "core"]

    def test_unknown_bundle(self, project: Project) -> None:
        """Test unknown bundle names raise ProjectError."""
        with pytest.raises(ProjectError, match="Unknown bundle: shop"):
            project.bundle("shop")

    def test_bundle_library_is_project(self, project: Project) -> None:
        """Test bundles share the project as their library."""
        assert project.bundle("app").library is project
        assert project.bundle("core").library is project


class TestRequiredBundles:
    """Tests for ProjectBundle.all_required_bundles."""

    def test_self_first_then_requirements(self, project: Project) -> None:
        """Test the closure starts with the bundle itself."""
        names = [b.bundle_name for b in project.bundle("app").all_required_bundles()]

        assert names == ["app", "core"]

    def test_depth_first_each_once(self, tmp_path: Path) -> None:
        """Test shared and cyclic requirements appear once."""
        config = load_config_from_dict(
            {
                "project": {
                    "bundles": {
                        "app": {"root": "app", "requires": ["ui", "core"]},
                        "ui": {"root": "ui", "requires": ["core"]},
                        "core": {"root": "core", "requires": ["app"]},
                    }
                }
            }
        )
        project = Project(config, root=tmp_path)

        names = [b.bundle_name for b in project.bundle("app").all_required_bundles()]

        assert names == ["app", "ui", "core"]

    def test_single_string_requirement(self, tmp_path: Path) -> None:
        """Test `requires: core` in YAML names one bundle."""
        config = load_config_from_dict(
            {"project": {"bundles": {"app": {"root": "app", "requires": "core"}, "core": "core"}}}
        )
        project = Project(config, root=tmp_path)

        names = [b.bundle_name for b in project.bundle("app").all_required_bundles()]

        assert config.project.bundles["app"].requires == ["core"]
        assert names == ["app", "core"]

    def test_missing_requirement(self, tmp_path: Path) -> None:
        """Test requiring an unconfigured bundle raises ProjectError."""
        config = load_config_from_dict(
            {"project": {"bundles": {"app": {"root": "app", "requires": ["nope"]}}}}
        )

        with pytest.raises(ProjectError):
            Project(config, root=tmp_path).bundle("app").all_required_bundles()


class TestEntries:
    """Tests for entry discovery."""

    def test_localized_entries(self, project: Project) -> None:
        """Test files in <lang>.lproj are localized for that language."""
        entries = {(e.filename, e.language): e for e in project.bundle("app").entries}

        body = entries[("en.lproj/body.rhtml", "en")]
        assert body.localized
        assert body.type == EntryKind.HTML
        assert not body.hidden

        shared = entries[("partials/shared.rhtml", None)]
        assert not shared.localized

    def test_hidden_and_resource_entries(self, project: Project) -> None:
        """Test underscore files are hidden and resources get their kinds."""
        app = project.bundle("app")
        core = project.bundle("core")

        panel = app.entry_named("en.lproj/_panel.rhtml", "en")
        assert panel.hidden
        assert _names(app.entries_for(EntryKind.JAVASCRIPT)) == ["app.js"]
        assert _names(core.entries_for(EntryKind.STYLESHEET)) == ["core.css"]

    def test_index_composites_per_language(self, project: Project) -> None:
        """Test each language gets an index.html composite of its templates."""
        app = project.bundle("app")

        en = app.entry_named("index.html", "en")
        fr = app.entry_named("index.html", "fr")

        assert en.is_composite
        assert _names(en.composite) == ["en.lproj/_panel.rhtml", "en.lproj/body.rhtml"]
        assert _names(fr.composite) == ["fr.lproj/body.rhtml"]
        assert en.build_path == app.build_root / "en" / "index.html"
        assert app.languages == ["en", "fr"]

    def test_entries_for_filters(self, project: Project) -> None:
        """Test language and hidden filtering of HTML entries."""
        core = project.bundle("core")

        visible = _names(core.entries_for(EntryKind.HTML, language="en"))
        everything = _names(
            core.entries_for(EntryKind.HTML, language="en", hidden=HiddenMode.INCLUDE)
        )

        assert visible == ["en.lproj/core.html.erb", "shared.rhtml", "index.html"]
        assert everything == [
            "en.lproj/_loading.rhtml",
            "en.lproj/core.html.erb",
            "shared.rhtml",
            "index.html",
        ]

    def test_entry_named_missing(self, project: Project) -> None:
        """Test missing entries raise ProjectError."""
        with pytest.raises(ProjectError, match="No entry"):
            project.bundle("app").entry_named("missing.rhtml")

    def test_missing_root_has_only_index(self, tmp_path: Path) -> None:
        """Test a bundle without a directory still has an empty index."""
        config = load_config_from_dict({"project": {"bundles": {"ghost": "ghost"}}})
        bundle = Project(config, root=tmp_path).bundle("ghost")

        index = bundle.entry_named("index.html")

        assert _names(bundle.entries) == ["index.html"]
        assert index.composite == []


class TestResolution:
    """Tests for resolving sample project pages."""

    def test_deep_index(self, project: Project) -> None:
        """Test the app page pulls in core's localized templates."""
        app = project.bundle("app")

        fragments = resolve_fragments(app.entry_named("index.html", "en"), app)

        assert _names(fragments) == [
            "en.lproj/_panel.rhtml",
            "en.lproj/body.rhtml",
            "en.lproj/_loading.rhtml",
            "en.lproj/core.html.erb",
        ]

    def test_french_index(self, project: Project) -> None:
        """Test another language selects that language's templates."""
        app = project.bundle("app")

        fragments = resolve_fragments(app.entry_named("index.html", "fr"), app)

        assert [(e.filename, e.language) for e in fragments] == [
            ("fr.lproj/body.rhtml", "fr"),
            ("fr.lproj/core.rhtml", "fr"),
        ]

    def test_shallow_index(self, project: Project) -> None:
        """Test a test page only includes the bundle's own composite members."""
        app = project.bundle("app")

        fragments = resolve_fragments(app.entry_named("index.html", "en"), app, deep=False)

        assert _names(fragments) == ["en.lproj/_panel.rhtml", "en.lproj/body.rhtml"]
