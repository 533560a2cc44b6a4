"""Webify CLI - turn a GitHub repository into a React web application.

Usage:
    webify convert <owner/repo> [options]
    webify convert my-repo --template minimal --deploy
    webify analyze ./local-checkout --json-only
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .classifier import Features, LanguageInfo, detect_language, extract_features
from .deployer import DEPLOYERS, deploy, verify_deployment
from .errors import WebifyError
from .extractor import RepositoryMetadata, extract
from .generator import AppConfig, build_app, generate_components, generate_react_app
from .logs import configure_logging
from .repo import resolve_repository
from .templates import DEFAULT_THEME, THEMES
from .walker import RepositoryStats, walk

console = Console()


def _analyze(repo_path: Path) -> tuple[RepositoryMetadata, RepositoryStats, LanguageInfo, Features]:
    metadata = extract(repo_path)
    stats = walk(repo_path)
    language = detect_language(metadata, stats)
    features = extract_features(metadata, stats, language)
    return metadata, stats, language, features


def _spinner() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Webify - turn GitHub repositories into web applications.

    Analyzes a repository, generates a React front-end for it, builds it
    and optionally deploys it.
    """
    configure_logging(verbose=verbose)


@cli.command()
@click.argument("repository")
@click.option("--template", "-t", default=DEFAULT_THEME, envvar="WEBIFY_TEMPLATE", show_default=True,
              help=f"UI template to use ({', '.join(THEMES)})")
@click.option("--deploy", "-d", "do_deploy", is_flag=True, help="Deploy after conversion")
@click.option("--platform", "-p", default="vercel", envvar="WEBIFY_PLATFORM", show_default=True,
              help="Deployment platform")
@click.option("--workdir", default="temp", envvar="WEBIFY_WORKDIR", show_default=True,
              help="Directory repositories are cloned into")
@click.option("--output", "-O", default="generated", envvar="WEBIFY_OUTPUT", show_default=True,
              help="Directory generated apps are written to")
@click.option("--skip-build", is_flag=True, help="Generate the app without installing or building it")
def convert(repository: str, template: str, do_deploy: bool, platform: str, workdir: str,
            output: str, skip_build: bool):
    """Convert a repository into a React web application.

    REPOSITORY can be owner/repo, a repo of the authenticated gh user,
    a GitHub URL, or a local directory.

    Examples:

        webify convert octocat/hello-world

        webify convert my-tool --template minimal --deploy
    """
    console.print()
    console.print(Panel.fit(
        f"[bold blue]Webify v{__version__}[/] - Repository to Web App Converter",
        border_style="blue",
    ))

    try:
        with _spinner() as progress:
            progress.add_task("Analyzing repository...", total=None)
            _, repo_path = resolve_repository(repository, workdir)
            metadata, stats, language, features = _analyze(repo_path)
        console.print("[green]Repository analyzed successfully[/]")
        _print_analysis_summary(metadata, stats, language, features)

        config = AppConfig(
            name=metadata.name,
            template=template,
            language=language,
            features=features,
            repository=metadata,
        )

        with _spinner() as progress:
            progress.add_task("Generating React web application...", total=None)
            app_path = generate_react_app(config, output)
            components = generate_components(app_path, config)
        console.print("[green]React application generated[/]")
        console.print(f"  Path: {app_path}")
        console.print(f"  Template: {template}")
        console.print(f"  Components: {len(components)} generated")

        if not skip_build:
            with _spinner() as progress:
                progress.add_task("Building application for production...", total=None)
                build_app(app_path)
            console.print("[green]Application built successfully[/]")

        if do_deploy:
            with _spinner() as progress:
                progress.add_task(f"Deploying to {platform}...", total=None)
                url = deploy(app_path, platform)
            console.print("[green]Application deployed successfully[/]")
            console.print(f"  [underline]{url}[/]")
            if not verify_deployment(url):
                console.print("[yellow]Deployment URL is not answering yet[/]")

    except WebifyError as e:
        console.print("[bold red]Conversion failed[/]")
        raise click.ClickException(str(e))

    console.print()
    console.print("[bold green]Conversion completed successfully![/]")
    if not do_deploy:
        console.print()
        console.print("[yellow]Next steps:[/]")
        console.print(f"  cd {app_path}")
        console.print("  pnpm run dev    # Start development server")
        console.print("  pnpm run deploy # Deploy to hosting platform")


@cli.command()
@click.argument("target", default=".")
@click.option("--workdir", default="temp", envvar="WEBIFY_WORKDIR", show_default=True,
              help="Directory repositories are cloned into")
@click.option("--json-only", is_flag=True, help="Output raw JSON to stdout (for piping)")
def analyze(target: str, workdir: str, json_only: bool):
    """Analyze a repository without generating anything.

    TARGET can be a local path, owner/repo, or a GitHub URL.
    """
    try:
        _, repo_path = resolve_repository(target, workdir)
        metadata, stats, language, features = _analyze(repo_path)
    except WebifyError as e:
        raise click.ClickException(str(e))

    if json_only:
        click.echo(json.dumps({
            "repository": metadata.to_dict(),
            "stats": stats.to_dict(),
            "language": language.to_dict(),
            "features": features.to_dict(),
        }, indent=2))
        return

    _print_analysis_summary(metadata, stats, language, features)


@cli.command()
def platforms():
    """List supported deployment platforms."""
    table = Table(show_header=True)
    table.add_column("Platform", style="bold")
    table.add_column("Command")
    for name in sorted(DEPLOYERS):
        table.add_row(name, f"webify convert <repo> --deploy --platform {name}")
    console.print(table)


@cli.command()
def version():
    """Show version information."""
    console.print(f"webify-cli v{__version__}")
    console.print("Repository to web application converter")


def _print_analysis_summary(metadata: RepositoryMetadata, stats: RepositoryStats,
                            language: LanguageInfo, features: Features) -> None:
    """Print a compact summary of the analysis."""
    table = Table(title="Analysis Results", show_header=False, border_style="dim")
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Repository", metadata.name)
    if metadata.description:
        table.add_row("Description", metadata.description[:80])
    table.add_row("Language", language.primary)
    table.add_row("Type", features.type)
    table.add_row("Features", ", ".join(features.items))
    table.add_row("Files / Size", f"{stats.files:,} / {stats.size:,} bytes")

    if stats.languages:
        top = sorted(stats.languages.items(), key=lambda x: (-x[1], x[0]))[:5]
        table.add_row("Extensions", ", ".join(f"{ext} ({count})" for ext, count in top))

    if metadata.dependencies:
        deps = sorted(metadata.dependencies)
        more = f" (+{len(deps) - 8} more)" if len(deps) > 8 else ""
        table.add_row("Dependencies", ", ".join(deps[:8]) + more)

    console.print(table)


if __name__ == "__main__":
    cli()
