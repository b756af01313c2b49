"""Components file loading.

A components file declares the components to register:

    template_dirs: [templates]
    components:
      - name: card
        template: '<div class="card">{{ children }}</div>'
      - name: alert
        path: alert.html
        description: Coloured alert box

``path`` is resolved by a FileSystemLoader rooted at the directory of the
components file, followed by any ``template_dirs`` (relative to the same
directory).
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from jinja2 import FileSystemLoader, TemplateError
from pydantic import BaseModel, Field, ValidationError, model_validator

from templ_components.component import component
from templ_components.engine import create_environment
from templ_components.exceptions import ConfigError
from templ_components.registry import Registry

log = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "components.yaml"


class ComponentConfig(BaseModel):
    """A single component declaration."""

    name: str = Field(description="Tag name the component answers to")
    template: str | None = Field(default=None, description="Inline template source")
    path: str | None = Field(default=None, description="Template file name")
    description: str | None = None

    @model_validator(mode="after")
    def check_template_source(self) -> "ComponentConfig":
        """Exactly one of template or path must be given."""
        if self.template is None and self.path is None:
            raise ValueError(f"Component '{self.name}' must have either 'template' or 'path'")
        if self.template is not None and self.path is not None:
            raise ValueError(f"Component '{self.name}' cannot have both 'template' and 'path'")
        return self


class ComponentsConfig(BaseModel):
    """Top-level components file."""

    template_dirs: list[str] = Field(
        default_factory=list, description="Extra template search directories"
    )
    components: list[ComponentConfig] = Field(default_factory=list)


def find_config(start: Path | None = None) -> Path | None:
    """Find components.yaml in a directory or its parents."""
    cwd = start or Path.cwd()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / DEFAULT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def load_config(path: Path) -> ComponentsConfig:
    """Load a components file.

    Raises:
        FileNotFoundError: The file does not exist.
        ConfigError: The file is not valid YAML or does not match the schema.
    """
    if not path.exists():
        raise FileNotFoundError(f"Components file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Components file must be a mapping: {path}")

    try:
        return ComponentsConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid components file {path}: {e}") from e


def build_registry(config: ComponentsConfig, base_dir: Path) -> Registry:
    """Compile every declared component into a new registry.

    Raises:
        ConfigError: A template is missing or does not compile.
    """
    search_path = [str(base_dir)] + [str(base_dir / d) for d in config.template_dirs]
    env = create_environment(loader=FileSystemLoader(search_path))
    registry = Registry(env=env)

    for decl in config.components:
        try:
            comp = component(decl.name, decl.template, path=decl.path, env=env)
        except TemplateError as e:
            raise ConfigError(f"Cannot load template for component '{decl.name}': {e}") from e
        registry.add(comp)

    log.info("Loaded %d components", len(registry))
    return registry


def load_registry(path: Path) -> Registry:
    """Load a components file and build its registry."""
    return build_registry(load_config(path), path.parent)
