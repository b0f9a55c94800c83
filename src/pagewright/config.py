"""pagewright configuration system.

Configuration is YAML-based with a handful of CLI overrides (--language,
--entry, --shallow). Supports environment variable substitution (${VAR}).

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.pagewright/config.yaml
3. ./pagewright.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

HAML_MODES = {"compact", "indented", "debug"}

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class TemplateConfig:
    """Template engine settings shared by every template family.

    Attributes:
        encoding: Encoding of template sources and built documents
        haml_mode: Output style of indentation-markup templates
        autoescape: Escape interpolated values by default
        strict_undefined: Raise on undefined variables instead of rendering ""
        trim_blocks: Drop the first newline after a block tag
    """

    encoding: str = "utf-8"
    haml_mode: str = "indented"
    autoescape: bool = False
    strict_undefined: bool = True
    trim_blocks: bool = False

    def __post_init__(self) -> None:
        """Validate template configuration."""
        if self.haml_mode not in HAML_MODES:
            raise ValueError(f"Invalid haml mode: {self.haml_mode}. Valid: {sorted(HAML_MODES)}")


@dataclass
class OutputConfig:
    """Output configuration.

    Attributes:
        build_dir: Directory built documents are written under
    """

    build_dir: str = "build"


@dataclass
class BundleConfig:
    """A single bundle of the project.

    Attributes:
        root: Bundle directory, relative to the project root
        requires: Names of bundles this bundle depends on, in order
        layout: Layout template override, relative to the project root
    """

    root: str
    requires: list[str] = field(default_factory=list)
    layout: str | None = None

    def __post_init__(self) -> None:
        """Validate bundle configuration."""
        if not self.root:
            raise ValueError("Bundle root must not be empty")
        if isinstance(self.requires, str):
            self.requires = [self.requires]


@dataclass
class ProjectConfig:
    """Project layout: bundles, languages and the default layout.

    Attributes:
        default_language: Language built when none is requested
        layout: Default layout template, relative to the project root
        static_url: URL prefix used by the static_url helper
        bundles: Bundle definitions by name
    """

    default_language: str = "en"
    layout: str = "lib/index.rhtml"
    static_url: str = "/static"
    bundles: dict[str, BundleConfig] = field(default_factory=dict)


@dataclass
class PagewrightConfig:
    """Top-level pagewright configuration.

    Attributes:
        templates: Template engine settings
        output: Output settings
        project: Bundle definitions
    """

    templates: TemplateConfig = field(default_factory=TemplateConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    project: ProjectConfig = field(default_factory=ProjectConfig)

    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path

    @property
    def project_root(self) -> Path:
        """Directory bundle roots are resolved against.

        A config in ./.pagewright/ belongs to the directory above it.
        """
        if self._config_path is None:
            return Path.cwd()
        parent = self._config_path.resolve().parent
        if parent.name == ".pagewright":
            return parent.parent
        return parent


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax, e.g. build_dir: "${BUILD_ROOT}/html".

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_VAR_PATTERN.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".pagewright" / "config.yaml",
        start_path / "pagewright.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _load_bundles(data: dict[str, Any]) -> dict[str, BundleConfig]:
    bundles: dict[str, BundleConfig] = {}
    for name, bundle_data in data.items():
        if isinstance(bundle_data, str):
            bundles[name] = BundleConfig(root=bundle_data)
        elif isinstance(bundle_data, dict):
            bundles[name] = BundleConfig(
                root=bundle_data.get("root", name),
                requires=bundle_data.get("requires") or [],
                layout=bundle_data.get("layout"),
            )
        else:
            raise ValueError(f"Invalid definition for bundle {name!r}")
    return bundles


def load_config_from_dict(data: dict[str, Any]) -> PagewrightConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        PagewrightConfig instance
    """
    data = substitute_env_vars(data)

    config = PagewrightConfig()

    if "templates" in data:
        templates_data = data["templates"] or {}
        config.templates = TemplateConfig(
            encoding=templates_data.get("encoding", config.templates.encoding),
            haml_mode=templates_data.get("haml_mode", config.templates.haml_mode),
            autoescape=templates_data.get("autoescape", config.templates.autoescape),
            strict_undefined=templates_data.get(
                "strict_undefined", config.templates.strict_undefined
            ),
            trim_blocks=templates_data.get("trim_blocks", config.templates.trim_blocks),
        )

    if "output" in data:
        output_data = data["output"] or {}
        config.output = OutputConfig(
            build_dir=output_data.get("build_dir", config.output.build_dir),
        )

    if "project" in data:
        project_data = data["project"] or {}
        config.project = ProjectConfig(
            default_language=project_data.get(
                "default_language", config.project.default_language
            ),
            layout=project_data.get("layout", config.project.layout),
            static_url=project_data.get("static_url", config.project.static_url),
            bundles=_load_bundles(project_data.get("bundles") or {}),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> PagewrightConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        PagewrightConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = PagewrightConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# pagewright configuration

# Template engine settings
templates:
  encoding: "utf-8"
  haml_mode: "indented"    # compact, indented, debug
  autoescape: false
  strict_undefined: true   # undefined variables fail the build
  trim_blocks: false

# Output settings
output:
  build_dir: "build"

# Bundles and their dependencies
project:
  default_language: "en"
  layout: "lib/index.rhtml"
  static_url: "/static"
  bundles:
    app:
      root: "apps/app"
      requires: ["core"]
    core:
      root: "frameworks/core"
'''
