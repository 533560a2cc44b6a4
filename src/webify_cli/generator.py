"""React application generator.

Scaffolds a TypeScript React app with create-react-app, installs the UI
packages the templates rely on, and renders ``src/App.jsx`` from the
template matching the repository's application type. The scaffold's own
``App`` module is removed so ``index`` resolves to the rendered one.
"""

from __future__ import annotations

import json
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from .classifier import AUTOMATION, CLI_TOOL, DATA_PROCESSOR, LIBRARY, Features, LanguageInfo
from .errors import GenerationError
from .extractor import RepositoryMetadata
from .logs import get_logger
from .templates import (
    DEFAULT_THEME,
    THEMES,
    automation_template,
    cli_tool_template,
    component_template,
    data_processor_template,
    generic_template,
    library_docs_template,
    theme_stylesheet,
)

logger = get_logger("generator")

EXTRA_PACKAGES = [
    "@tailwindcss/forms",
    "framer-motion",
    "lucide-react",
    "react-router-dom",
    "zustand",
]

SCAFFOLD_TIMEOUT = 900  # create-react-app downloads the whole toolchain
INSTALL_TIMEOUT = 600
BUILD_TIMEOUT = 600

DATA_INPUT_TYPES = ["CSV", "JSON", "XML"]
DATA_OUTPUT_TYPES = ["CSV", "JSON", "PDF"]

# create-react-app resolves .tsx before .jsx
SHADOWING_APP_MODULES = ("App.tsx", "App.ts", "App.js")
APP_CONFIG_FILE = "webify.json"


@dataclass
class AppConfig:
    """Everything the generator needs to know about the app to build."""

    name: str
    template: str
    language: LanguageInfo
    features: Features
    repository: RepositoryMetadata

    @property
    def description(self) -> str:
        return self.repository.description

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "template": self.template,
            "language": self.language.to_dict(),
            "features": self.features.to_dict(),
            "repository": self.repository.to_dict(),
        }


def _run(cmd: list[str], cwd: Path | None, timeout: int, action: str) -> subprocess.CompletedProcess:
    """Run an external command, raising GenerationError on failure."""
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        raise GenerationError(f"{action}: {cmd[0]} is not installed") from e
    except subprocess.TimeoutExpired as e:
        raise GenerationError(f"{action}: {cmd[0]} timed out after {timeout}s") from e
    if result.returncode != 0:
        raise GenerationError(f"{action}: {result.stderr[:200]}")
    return result


def code_examples(config: AppConfig) -> list[dict[str, str]]:
    """Install and usage snippets for the library docs page."""
    name = config.name
    lang = config.language.primary
    if lang == "javascript":
        return [
            {"title": "Install", "code": f"npm install {name}"},
            {"title": "Usage", "code": f"import {_identifier(name, lower_first=True)} from '{name}';"},
        ]
    if lang == "rust":
        return [
            {"title": "Install", "code": f"cargo add {name}"},
            {"title": "Usage", "code": f"use {name.replace('-', '_')}::*;"},
        ]
    if lang == "python":
        return [
            {"title": "Install", "code": f"pip install {name}"},
            {"title": "Usage", "code": f"import {name.replace('-', '_')}"},
        ]
    return [{"title": "Get the source", "code": f"gh repo clone {name}"}]


def _components(config: AppConfig) -> list[str]:
    return list(dict.fromkeys(_identifier(label) for label in config.features.items))


def _render_cli_tool(config: AppConfig) -> str:
    return cli_tool_template(
        config.name, config.description, config.features.items, _components(config)
    )


def _render_library(config: AppConfig) -> str:
    return library_docs_template(
        config.name,
        config.description,
        config.language.primary,
        code_examples(config),
        _components(config),
    )


def _render_data_processor(config: AppConfig) -> str:
    return data_processor_template(
        config.name, config.description, DATA_INPUT_TYPES, DATA_OUTPUT_TYPES, _components(config)
    )


def _render_automation(config: AppConfig) -> str:
    workflows = sorted(config.repository.scripts) or ["Run"]
    return automation_template(config.name, config.description, workflows, _components(config))


def _render_generic(config: AppConfig) -> str:
    return generic_template(
        config.name, config.description, config.features.items, _components(config)
    )


TEMPLATE_BUILDERS: dict[str, Callable[[AppConfig], str]] = {
    CLI_TOOL: _render_cli_tool,
    LIBRARY: _render_library,
    DATA_PROCESSOR: _render_data_processor,
    AUTOMATION: _render_automation,
}


def render_app(config: AppConfig) -> str:
    """Render App.jsx for the config's application type."""
    builder = TEMPLATE_BUILDERS.get(config.features.type, _render_generic)
    return builder(config)


def _identifier(label: str, lower_first: bool = False) -> str:
    words = re.findall(r"[A-Za-z0-9]+", label)
    ident = "".join(w[:1].upper() + w[1:] for w in words) or "Feature"
    if ident[0].isdigit():
        ident = "F" + ident
    if lower_first:
        ident = ident[0].lower() + ident[1:]
    return ident


def generate_react_app(config: AppConfig, output_root: str | Path) -> Path:
    """Scaffold the app under ``<output_root>/<name>-webapp``. Returns the app path.

    Writes ``src/App.jsx`` in place of the scaffold's ``App.tsx`` and records
    the analysis the app was generated from in ``webify.json``.
    """
    app_path = Path(output_root).resolve() / f"{config.name}-webapp"
    app_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Creating React app %s", app_path.name)

    action = "Failed to generate React app"
    _run(
        ["npx", "create-react-app", str(app_path), "--template", "typescript"],
        cwd=None,
        timeout=SCAFFOLD_TIMEOUT,
        action=action,
    )
    _run(["npm", "install", *EXTRA_PACKAGES], cwd=app_path, timeout=INSTALL_TIMEOUT, action=action)

    src = app_path / "src"
    src.mkdir(parents=True, exist_ok=True)
    (src / "App.jsx").write_text(render_app(config))
    for name in SHADOWING_APP_MODULES:
        (src / name).unlink(missing_ok=True)
    (app_path / APP_CONFIG_FILE).write_text(json.dumps(config.to_dict(), indent=2))
    return app_path


def generate_components(app_path: str | Path, config: AppConfig) -> list[Path]:
    """Write one component per feature and the theme stylesheet."""
    src = Path(app_path) / "src"
    components_dir = src / "components"
    components_dir.mkdir(parents=True, exist_ok=True)

    theme = config.template
    if theme not in THEMES:
        logger.warning("Unknown template %r, using %s", theme, DEFAULT_THEME)
        theme = DEFAULT_THEME
    (src / "theme.css").write_text(theme_stylesheet(theme))

    written = []
    for label in config.features.items:
        component = _identifier(label)
        path = components_dir / f"{component}.jsx"
        path.write_text(component_template(component, label))
        written.append(path)
    return written


def build_app(app_path: str | Path) -> None:
    """Install dependencies and produce a production build with pnpm."""
    app_path = Path(app_path)
    action = "Failed to build application"
    _run(["pnpm", "install"], cwd=app_path, timeout=INSTALL_TIMEOUT, action=action)
    _run(["pnpm", "run", "build"], cwd=app_path, timeout=BUILD_TIMEOUT, action=action)
