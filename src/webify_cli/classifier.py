"""Language detection and application-type classification.

Combines extracted metadata with the extension histogram to pick the
primary language and the kind of web front-end to generate.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from .extractor import UNKNOWN, RepositoryMetadata
from .walker import RepositoryStats

CLI_TOOL = "cli-tool"
LIBRARY = "library"
DATA_PROCESSOR = "data-processor"
AUTOMATION = "automation"
GENERIC = "generic"

# Extension -> Language mapping
EXTENSION_LANGUAGES = {
    ".js": "JavaScript", ".mjs": "JavaScript", ".cjs": "JavaScript", ".jsx": "JavaScript",
    ".ts": "TypeScript", ".tsx": "TypeScript", ".mts": "TypeScript",
    ".rs": "Rust",
    ".py": "Python", ".pyi": "Python",
    ".go": "Go",
    ".java": "Java", ".kt": "Kotlin", ".kts": "Kotlin",
    ".rb": "Ruby",
    ".php": "PHP",
    ".swift": "Swift",
    ".c": "C", ".h": "C",
    ".cpp": "C++", ".cc": "C++", ".cxx": "C++", ".hpp": "C++",
    ".cs": "C#",
    ".scala": "Scala",
    ".ex": "Elixir", ".exs": "Elixir",
    ".hs": "Haskell",
    ".lua": "Lua",
    ".dart": "Dart",
    ".vue": "Vue",
    ".svelte": "Svelte",
    ".sh": "Shell", ".bash": "Shell", ".zsh": "Shell",
    ".zig": "Zig",
}


@dataclass(frozen=True)
class TypeRule:
    """Matches an application type by dependency names or description patterns."""

    app_type: str
    dependencies: frozenset[str] = frozenset()
    patterns: tuple[str, ...] = ()

    def matches(self, metadata: RepositoryMetadata) -> bool:
        if self.dependencies & metadata.dependencies:
            return True
        text = metadata.description.lower()
        return any(re.search(rf"\b{p}", text) for p in self.patterns)


# First match wins
TYPE_RULES: tuple[TypeRule, ...] = (
    TypeRule(
        CLI_TOOL,
        frozenset({"commander", "yargs", "meow", "oclif", "@oclif/core", "inquirer", "cac", "clipanion"}),
        (r"cli\b", r"command[- ]line", r"terminal"),
    ),
    TypeRule(
        AUTOMATION,
        frozenset({"puppeteer", "playwright", "node-cron", "cron", "bull", "bullmq", "agenda"}),
        (r"automat", r"workflows?\b", r"bots?\b", r"schedul"),
    ),
    TypeRule(
        DATA_PROCESSOR,
        frozenset({"papaparse", "csv-parse", "csv-parser", "xlsx", "d3", "danfojs", "arquero"}),
        (r"data\b", r"csv", r"etl\b", r"pipelines?\b", r"convert"),
    ),
    TypeRule(
        LIBRARY,
        frozenset(),
        (r"librar(?:y|ies)", r"sdk\b", r"framework", r"crate\b", r"bindings"),
    ),
)

FRAMEWORK_LABELS = {
    "react": "React", "next": "Next.js", "vue": "Vue.js", "svelte": "Svelte",
    "express": "Express", "fastify": "Fastify", "koa": "Koa",
    "electron": "Electron", "tailwindcss": "Tailwind CSS", "prisma": "Prisma",
    "commander": "Commander", "yargs": "Yargs", "inquirer": "Interactive prompts",
    "puppeteer": "Browser automation", "playwright": "Browser automation",
    "axios": "HTTP client", "socket.io": "Realtime messaging",
}

SCRIPT_LABELS = (
    ("test", "Test suite"),
    ("build", "Build pipeline"),
    ("dev", "Development server"),
    ("start", "Development server"),
    ("lint", "Linting"),
    ("deploy", "Deployment script"),
)


@dataclass
class LanguageInfo:
    primary: str
    breakdown: dict[str, float] = field(default_factory=dict)  # lang -> percentage

    def to_dict(self) -> dict[str, Any]:
        return {"primary": self.primary, "breakdown": self.breakdown}


@dataclass
class Features:
    type: str
    items: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "list": self.items}


def _language_counts(stats: RepositoryStats) -> Counter:
    counts: Counter = Counter()
    for ext, count in stats.languages.items():
        lang = EXTENSION_LANGUAGES.get(ext)
        if lang:
            counts[lang] += count
    return counts


def detect_language(metadata: RepositoryMetadata, stats: RepositoryStats) -> LanguageInfo:
    """Pick the primary language: manifest tag first, extension histogram otherwise."""
    counts = _language_counts(stats)
    total = sum(counts.values())
    breakdown = {}
    if total:
        breakdown = {
            lang: round(count / total * 100, 1)
            for lang, count in sorted(counts.items(), key=lambda x: (-x[1], x[0]))
        }

    if metadata.language != UNKNOWN:
        return LanguageInfo(primary=metadata.language, breakdown=breakdown)
    if breakdown:
        return LanguageInfo(primary=next(iter(breakdown)).lower(), breakdown=breakdown)
    return LanguageInfo(primary=UNKNOWN)


def classify(metadata: RepositoryMetadata) -> str:
    for rule in TYPE_RULES:
        if rule.matches(metadata):
            return rule.app_type
    return GENERIC


def extract_features(
    metadata: RepositoryMetadata,
    stats: RepositoryStats,
    language: LanguageInfo,
) -> Features:
    """Classify the repository and list the features the generated app shows."""
    app_type = classify(metadata)
    items: list[str] = []

    def add(label: str) -> None:
        if label not in items:
            items.append(label)

    if app_type == CLI_TOOL:
        add("Command-line interface")
    for dep in sorted(metadata.dependencies):
        if dep in FRAMEWORK_LABELS:
            add(FRAMEWORK_LABELS[dep])
    for script, label in SCRIPT_LABELS:
        if script in metadata.scripts:
            add(label)
    if "TypeScript" in language.breakdown:
        add("TypeScript")
    if metadata.has_readme:
        add("Documentation")
    if not items:
        add("Repository overview")

    return Features(type=app_type, items=items)
