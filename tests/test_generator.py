"""Tests for the React app generator."""

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from webify_cli.classifier import (
    AUTOMATION,
    CLI_TOOL,
    DATA_PROCESSOR,
    GENERIC,
    LIBRARY,
    Features,
    LanguageInfo,
)
from webify_cli.errors import GenerationError
from webify_cli.extractor import RepositoryMetadata
from webify_cli.generator import (
    APP_CONFIG_FILE,
    EXTRA_PACKAGES,
    AppConfig,
    build_app,
    code_examples,
    generate_components,
    generate_react_app,
    render_app,
)


def make_config(app_type=GENERIC, language="javascript", items=None, template="futuristic", scripts=()):
    metadata = RepositoryMetadata(
        path="/repo/my-tool",
        name="my-tool",
        description='Does "quoted" things',
        language=language,
        scripts=frozenset(scripts),
    )
    return AppConfig(
        name=metadata.name,
        template=template,
        language=LanguageInfo(primary=language),
        features=Features(type=app_type, items=items or ["Test suite", "Documentation"]),
        repository=metadata,
    )


def ok(*args, **kwargs):
    return subprocess.CompletedProcess(args=args, returncode=0, stdout="", stderr="")


def fake_create_react_app(cmd, cwd=None, **kwargs):
    """Stand-in for create-react-app: leaves the TypeScript entry points behind."""
    if cmd[:2] == ["npx", "create-react-app"]:
        src = Path(cmd[2]) / "src"
        src.mkdir(parents=True)
        (src / "App.tsx").write_text("export default function App() { return null; }\n")
        (src / "index.tsx").write_text("import App from './App';\n")
    return ok(cmd)


def resolve_module(directory, name):
    """The file a bundler picks for an extensionless import."""
    for ext in (".tsx", ".ts", ".jsx", ".js"):
        candidate = directory / f"{name}{ext}"
        if candidate.is_file():
            return candidate
    return None


def app_data(source):
    """Parse the JSON constant embedded at the top of App.jsx."""
    start = source.index("const APP = ") + len("const APP = ")
    end = source.index(";\n", start)
    return json.loads(source[start:end])


class TestRenderApp:
    def test_cli_tool(self):
        source = render_app(make_config(CLI_TOOL))
        assert "terminal" in source
        data = app_data(source)
        assert data["name"] == "my-tool"
        assert data["description"] == 'Does "quoted" things'
        assert data["features"] == ["Test suite", "Documentation"]

    def test_library_docs(self):
        data = app_data(render_app(make_config(LIBRARY, language="rust")))
        assert data["language"] == "rust"
        assert data["examples"][0] == {"title": "Install", "code": "cargo add my-tool"}

    def test_data_processor(self):
        data = app_data(render_app(make_config(DATA_PROCESSOR)))
        assert data["inputTypes"] == ["CSV", "JSON", "XML"]
        assert data["outputTypes"] == ["CSV", "JSON", "PDF"]

    def test_automation_uses_scripts(self):
        data = app_data(render_app(make_config(AUTOMATION, scripts={"sync", "backup"})))
        assert data["workflows"] == ["backup", "sync"]

    def test_automation_without_scripts(self):
        data = app_data(render_app(make_config(AUTOMATION)))
        assert data["workflows"] == ["Run"]

    def test_feature_components_imported(self):
        source = render_app(make_config(items=["Test suite", "HTTP client", "Test-suite"]))
        assert "import TestSuite from './components/TestSuite';" in source
        assert "import HTTPClient from './components/HTTPClient';" in source
        assert source.count("import TestSuite ") == 1
        assert "const COMPONENTS = [TestSuite, HTTPClient];" in source
        assert "<FeatureCards />" in source

    def test_generic_fallback(self):
        source = render_app(make_config("something-else"))
        assert app_data(source)["features"] == ["Test suite", "Documentation"]
        assert "export default function App()" in source


class TestCodeExamples:
    @pytest.mark.parametrize("language,install", [
        ("javascript", "npm install my-tool"),
        ("rust", "cargo add my-tool"),
        ("python", "pip install my-tool"),
        ("unknown", "gh repo clone my-tool"),
    ])
    def test_install_command(self, language, install):
        assert code_examples(make_config(language=language))[0]["code"] == install

    def test_javascript_import_identifier(self):
        examples = code_examples(make_config())
        assert examples[1]["code"] == "import myTool from 'my-tool';"


class TestGenerateReactApp:
    @patch("webify_cli.generator.subprocess.run", side_effect=ok)
    def test_commands_and_output(self, mock_run, tmp_path):
        app_path = generate_react_app(make_config(CLI_TOOL), tmp_path)
        assert app_path == tmp_path.resolve() / "my-tool-webapp"

        scaffold, install = [c.args[0] for c in mock_run.call_args_list]
        assert scaffold == ["npx", "create-react-app", str(app_path), "--template", "typescript"]
        assert install == ["npm", "install", *EXTRA_PACKAGES]
        assert mock_run.call_args_list[1].kwargs["cwd"] == app_path

        assert "terminal" in (app_path / "src" / "App.jsx").read_text()

    @patch("webify_cli.generator.subprocess.run", side_effect=fake_create_react_app)
    def test_index_resolves_rendered_app(self, mock_run, tmp_path):
        app_path = generate_react_app(make_config(CLI_TOOL), tmp_path)
        src = app_path / "src"
        assert "from './App'" in (src / "index.tsx").read_text()
        resolved = resolve_module(src, "App")
        assert resolved == src / "App.jsx"
        assert "import TestSuite from './components/TestSuite';" in resolved.read_text()

    @patch("webify_cli.generator.subprocess.run", side_effect=ok)
    def test_writes_app_config(self, mock_run, tmp_path):
        app_path = generate_react_app(make_config(CLI_TOOL), tmp_path)
        recorded = json.loads((app_path / APP_CONFIG_FILE).read_text())
        assert recorded == make_config(CLI_TOOL).to_dict()
        assert recorded["features"]["type"] == CLI_TOOL

    @patch("webify_cli.generator.subprocess.run")
    def test_command_failure(self, mock_run, tmp_path):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=1, stdout="", stderr="npm ERR! network"
        )
        with pytest.raises(GenerationError, match="Failed to generate React app: npm ERR! network"):
            generate_react_app(make_config(), tmp_path)

    @patch("webify_cli.generator.subprocess.run", side_effect=FileNotFoundError("npx"))
    def test_missing_tool(self, mock_run, tmp_path):
        with pytest.raises(GenerationError, match="npx is not installed"):
            generate_react_app(make_config(), tmp_path)


class TestGenerateComponents:
    def test_one_component_per_feature(self, tmp_path):
        config = make_config(items=["Test suite", "HTTP client", "3D rendering"])
        written = generate_components(tmp_path, config)
        assert [p.name for p in written] == ["TestSuite.jsx", "HTTPClient.jsx", "F3DRendering.jsx"]
        assert "export default function TestSuite()" in written[0].read_text()
        assert '"Test suite"' in written[0].read_text()

    def test_theme_selected(self, tmp_path):
        generate_components(tmp_path, make_config(template="minimal"))
        assert "system-ui" in (tmp_path / "src" / "theme.css").read_text()

    def test_unknown_theme_falls_back(self, tmp_path, caplog):
        with caplog.at_level("WARNING", logger="webify"):
            generate_components(tmp_path, make_config(template="neon"))
        assert "linear-gradient" in (tmp_path / "src" / "theme.css").read_text()
        assert "Unknown template" in caplog.text


class TestBuildApp:
    @patch("webify_cli.generator.subprocess.run", side_effect=ok)
    def test_build_commands(self, mock_run, tmp_path):
        build_app(tmp_path)
        assert [c.args[0] for c in mock_run.call_args_list] == [
            ["pnpm", "install"],
            ["pnpm", "run", "build"],
        ]

    @patch("webify_cli.generator.subprocess.run", side_effect=subprocess.TimeoutExpired("pnpm", 600))
    def test_build_timeout(self, mock_run, tmp_path):
        with pytest.raises(GenerationError, match="timed out"):
            build_app(tmp_path)


def test_config_to_dict():
    d = make_config(CLI_TOOL).to_dict()
    assert d["features"]["type"] == CLI_TOOL
    assert d["repository"]["name"] == "my-tool"
