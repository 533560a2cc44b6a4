"""Repository metadata extractor.

Probes a working copy for well-known manifest files (``package.json``,
``Cargo.toml``) and the README, and folds what each source provides into a
single ``RepositoryMetadata`` record. Sources are applied in a fixed order;
a later source overwrites any field it provides.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Optional

from .errors import ExtractionError, ManifestParseError
from .logs import get_logger

logger = get_logger("extractor")

PACKAGE_JSON = "package.json"
CARGO_TOML = "Cargo.toml"
README = "README.md"

JAVASCRIPT = "javascript"
RUST = "rust"
UNKNOWN = "unknown"

README_DESCRIPTION_MIN_LENGTH = 20
README_DESCRIPTION_MAX_LENGTH = 200

# With several manifests present, the one applied last decides the language
# (and with it the dependency and script sets). package.json is applied
# before Cargo.toml, so a repository carrying both is tagged ``rust``.
LANGUAGE_PRECEDENCE = "last-manifest-wins"

_CARGO_KEY_LINE = re.compile(r"^\s*[A-Za-z0-9_.-]+\s*=", re.MULTILINE)


def _cargo_value(key: str, content: str) -> str | None:
    match = re.search(rf'^\s*{key}\s*=\s*"([^"]+)"', content, re.MULTILINE)
    return match.group(1) if match else None


@dataclass(frozen=True)
class RepositoryMetadata:
    """Normalized metadata for one working copy."""

    path: str
    name: str
    description: str = ""
    language: str = UNKNOWN
    dependencies: frozenset[str] = field(default_factory=frozenset)
    scripts: frozenset[str] = field(default_factory=frozenset)
    has_readme: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "description": self.description,
            "language": self.language,
            "dependencies": sorted(self.dependencies),
            "scripts": sorted(self.scripts),
            "has_readme": self.has_readme,
        }


@dataclass(frozen=True)
class MetadataPatch:
    """Fields contributed by one extraction source. ``None`` means not provided.

    ``language`` travels with ``dependencies`` and ``scripts``: a patch that
    sets the language replaces both sets, empty when it does not provide them.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None
    dependencies: Optional[frozenset[str]] = None
    scripts: Optional[frozenset[str]] = None

    def apply(self, metadata: RepositoryMetadata) -> RepositoryMetadata:
        changes: dict[str, Any] = {}
        if self.name is not None:
            changes["name"] = self.name
        if self.description is not None:
            changes["description"] = self.description
        if self.language is not None:
            changes["language"] = self.language
            changes["dependencies"] = self.dependencies or frozenset()
            changes["scripts"] = self.scripts or frozenset()
        return replace(metadata, **changes)


Strategy = Callable[[Path, RepositoryMetadata], Optional[MetadataPatch]]


def _read_text(path: Path, errors: str = "strict") -> str:
    # utf-8-sig drops a leading byte order mark
    try:
        return path.read_text(encoding="utf-8-sig", errors=errors)
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestParseError(path.name, str(e)) from e


def _object_keys(pkg: dict, key: str) -> frozenset[str]:
    value = pkg.get(key)
    if value is None:
        return frozenset()
    if not isinstance(value, dict):
        raise ManifestParseError(PACKAGE_JSON, f'"{key}" must be an object')
    return frozenset(value.keys())


def package_json_strategy(root: Path, current: RepositoryMetadata) -> MetadataPatch | None:
    """Node.js projects: description, dependencies and scripts from package.json."""
    manifest = root / PACKAGE_JSON
    if not manifest.is_file():
        return None

    try:
        pkg = json.loads(_read_text(manifest))
    except json.JSONDecodeError as e:
        raise ManifestParseError(PACKAGE_JSON, str(e)) from e
    if not isinstance(pkg, dict):
        raise ManifestParseError(PACKAGE_JSON, "top level must be an object")

    description = pkg.get("description") or ""
    return MetadataPatch(
        description=str(description),
        language=JAVASCRIPT,
        dependencies=_object_keys(pkg, "dependencies"),
        scripts=_object_keys(pkg, "scripts"),
    )


def cargo_toml_strategy(root: Path, current: RepositoryMetadata) -> MetadataPatch | None:
    """Rust projects: name and description from ``key = "value"`` lines."""
    manifest = root / CARGO_TOML
    if not manifest.is_file():
        return None

    content = _read_text(manifest)
    if not _CARGO_KEY_LINE.search(content):
        raise ManifestParseError(CARGO_TOML, "no key = value entries found")

    return MetadataPatch(
        name=_cargo_value("name", content),
        description=_cargo_value("description", content),
        language=RUST,
    )


def readme_strategy(root: Path, current: RepositoryMetadata) -> MetadataPatch | None:
    """Fall back to the first prose line of the README as the description."""
    if current.description or not current.has_readme:
        return None

    content = _read_text(root / README, errors="replace")
    lines = [line for line in content.splitlines() if line.strip()]
    for line in lines:
        text = line.strip()
        if text.startswith("#") or len(text) <= README_DESCRIPTION_MIN_LENGTH:
            continue
        return MetadataPatch(description=text[:README_DESCRIPTION_MAX_LENGTH])
    return None


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    package_json_strategy,
    cargo_toml_strategy,
    readme_strategy,
)


def extract(
    repo_path: str | Path,
    strategies: tuple[Strategy, ...] = DEFAULT_STRATEGIES,
) -> RepositoryMetadata:
    """Extract metadata from a local working copy.

    Raises ``ManifestParseError`` when a manifest exists but cannot be read
    or parsed; no partial record is returned in that case.
    """
    root = Path(repo_path).resolve()
    if not root.is_dir():
        raise ExtractionError(f"failed to analyze repository: not a directory: {root}")

    metadata = RepositoryMetadata(
        path=str(root),
        name=root.name,
        has_readme=(root / README).is_file(),
    )

    for strategy in strategies:
        patch = strategy(root, metadata)
        if patch is None:
            continue
        logger.debug("%s contributed %s", strategy.__name__, patch)
        metadata = patch.apply(metadata)

    return metadata
