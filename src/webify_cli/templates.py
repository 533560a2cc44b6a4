"""JSX templates for the generated application.

Each builder takes the values of one application type and returns the
source of ``src/App.jsx``. Feature components are imported by name
and rendered as a row of cards. Values are embedded once as a JSON constant at
the top of the file so the static component body needs no escaping.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

THEMES = ("futuristic", "minimal")
DEFAULT_THEME = "futuristic"

FEATURE_CARDS = """
function FeatureCards() {
  return (
    <section className="feature-cards">
      {COMPONENTS.map((Component, i) => <Component key={i} />)}
    </section>
  );
}
"""


def _with_data(data: dict[str, Any], body: str, components: Sequence[str] = ()) -> str:
    imports = "".join(f"import {c} from './components/{c}';\n" for c in components)
    header = (
        "import React, { useState } from 'react';\n"
        "import { motion } from 'framer-motion';\n"
        f"{imports}"
        "import './theme.css';\n\n"
        f"const APP = {json.dumps(data, indent=2)};\n"
        f"const COMPONENTS = [{', '.join(components)}];\n"
        + FEATURE_CARDS
    )
    return header + body


CLI_TOOL_BODY = """
export default function App() {
  const [command, setCommand] = useState('');
  const [history, setHistory] = useState([]);

  const run = (e) => {
    e.preventDefault();
    if (!command.trim()) return;
    setHistory([...history, { input: command, output: `${APP.name}: queued "${command}"` }]);
    setCommand('');
  };

  return (
    <main className="app">
      <motion.header initial={{ opacity: 0 }} animate={{ opacity: 1 }}>
        <h1>{APP.name}</h1>
        <p>{APP.description}</p>
      </motion.header>
      <section className="terminal">
        {history.map((entry, i) => (
          <div key={i}>
            <div className="prompt">$ {entry.input}</div>
            <div className="output">{entry.output}</div>
          </div>
        ))}
        <form onSubmit={run}>
          <span className="prompt">$</span>
          <input value={command} onChange={(e) => setCommand(e.target.value)} />
        </form>
      </section>
      <ul className="features">
        {APP.features.map((f) => <li key={f}>{f}</li>)}
      </ul>
      <FeatureCards />
    </main>
  );
}
"""

LIBRARY_DOCS_BODY = """
export default function App() {
  const [active, setActive] = useState(0);
  const example = APP.examples[active];

  return (
    <main className="app">
      <motion.header initial={{ opacity: 0 }} animate={{ opacity: 1 }}>
        <h1>{APP.name}</h1>
        <p>{APP.description}</p>
        <span className="badge">{APP.language}</span>
      </motion.header>
      <nav>
        {APP.examples.map((ex, i) => (
          <button key={ex.title} onClick={() => setActive(i)} className={i === active ? 'active' : ''}>
            {ex.title}
          </button>
        ))}
      </nav>
      <pre className="code"><code>{example.code}</code></pre>
      <FeatureCards />
    </main>
  );
}
"""

DATA_PROCESSOR_BODY = """
export default function App() {
  const [input, setInput] = useState(APP.inputTypes[0]);
  const [output, setOutput] = useState(APP.outputTypes[0]);
  const [file, setFile] = useState(null);

  return (
    <main className="app">
      <motion.header initial={{ opacity: 0 }} animate={{ opacity: 1 }}>
        <h1>{APP.name}</h1>
        <p>{APP.description}</p>
      </motion.header>
      <section className="panel">
        <label>
          Input format
          <select value={input} onChange={(e) => setInput(e.target.value)}>
            {APP.inputTypes.map((t) => <option key={t}>{t}</option>)}
          </select>
        </label>
        <input type="file" onChange={(e) => setFile(e.target.files[0])} />
        <label>
          Output format
          <select value={output} onChange={(e) => setOutput(e.target.value)}>
            {APP.outputTypes.map((t) => <option key={t}>{t}</option>)}
          </select>
        </label>
        <button disabled={!file}>Process {file ? file.name : ''}</button>
      </section>
      <FeatureCards />
    </main>
  );
}
"""

AUTOMATION_BODY = """
export default function App() {
  const [runs, setRuns] = useState([]);

  const trigger = (workflow) => {
    setRuns([{ workflow, started: new Date().toLocaleTimeString() }, ...runs]);
  };

  return (
    <main className="app">
      <motion.header initial={{ opacity: 0 }} animate={{ opacity: 1 }}>
        <h1>{APP.name}</h1>
        <p>{APP.description}</p>
      </motion.header>
      <section className="workflows">
        {APP.workflows.map((w) => (
          <div key={w} className="card">
            <h3>{w}</h3>
            <button onClick={() => trigger(w)}>Run</button>
          </div>
        ))}
      </section>
      <ul className="runs">
        {runs.map((r, i) => <li key={i}>{r.started} - {r.workflow}</li>)}
      </ul>
      <FeatureCards />
    </main>
  );
}
"""

GENERIC_BODY = """
export default function App() {
  return (
    <main className="app">
      <motion.header initial={{ opacity: 0 }} animate={{ opacity: 1 }}>
        <h1>{APP.name}</h1>
        <p>{APP.description}</p>
      </motion.header>
      <section className="features">
        {APP.features.map((f) => (
          <div key={f} className="card">{f}</div>
        ))}
      </section>
      <FeatureCards />
    </main>
  );
}
"""


def cli_tool_template(name: str, description: str, features: list[str], components: Sequence[str] = ()) -> str:
    return _with_data(
        {"name": name, "description": description, "features": features},
        CLI_TOOL_BODY,
        components,
    )


def library_docs_template(
    name: str,
    description: str,
    language: str,
    examples: list[dict[str, str]],
    components: Sequence[str] = (),
) -> str:
    return _with_data(
        {"name": name, "description": description, "language": language, "examples": examples},
        LIBRARY_DOCS_BODY,
        components,
    )


def data_processor_template(
    name: str,
    description: str,
    input_types: list[str],
    output_types: list[str],
    components: Sequence[str] = (),
) -> str:
    return _with_data(
        {
            "name": name,
            "description": description,
            "inputTypes": input_types,
            "outputTypes": output_types,
        },
        DATA_PROCESSOR_BODY,
        components,
    )


def automation_template(name: str, description: str, workflows: list[str], components: Sequence[str] = ()) -> str:
    return _with_data(
        {"name": name, "description": description, "workflows": workflows},
        AUTOMATION_BODY,
        components,
    )


def generic_template(name: str, description: str, features: list[str], components: Sequence[str] = ()) -> str:
    return _with_data(
        {"name": name, "description": description, "features": features},
        GENERIC_BODY,
        components,
    )


def component_template(component: str, label: str) -> str:
    """A small card component for one detected feature."""
    return (
        "import React from 'react';\n\n"
        f"export default function {component}() {{\n"
        "  return (\n"
        f"    <div className=\"card feature\">{{{json.dumps(label)}}}</div>\n"
        "  );\n"
        "}\n"
    )


def theme_stylesheet(theme: str) -> str:
    """CSS for the chosen visual theme."""
    if theme == "minimal":
        return """body { margin: 0; font-family: system-ui, sans-serif; background: #fff; color: #222; }
.app { max-width: 960px; margin: 0 auto; padding: 2rem; }
.card { border: 1px solid #ddd; border-radius: 4px; padding: 1rem; margin: 0.5rem 0; }
.terminal, .code { background: #f6f6f6; padding: 1rem; font-family: monospace; }
button { border: 1px solid #222; background: none; padding: 0.4rem 1rem; cursor: pointer; }
"""
    return """body { margin: 0; font-family: 'Inter', sans-serif; background: #0b0f1a; color: #e0e6ff; }
.app { max-width: 1080px; margin: 0 auto; padding: 3rem 2rem; }
h1 { background: linear-gradient(90deg, #7f5af0, #2cb67d); -webkit-background-clip: text; color: transparent; }
.card { background: rgba(127, 90, 240, 0.08); border: 1px solid rgba(127, 90, 240, 0.4); border-radius: 12px; padding: 1.25rem; margin: 0.75rem 0; }
.terminal, .code { background: #05070d; border-radius: 8px; padding: 1rem; font-family: 'Fira Code', monospace; color: #2cb67d; }
button { background: #7f5af0; color: #fff; border: none; border-radius: 8px; padding: 0.5rem 1.25rem; cursor: pointer; }
.badge { background: #2cb67d; color: #05070d; border-radius: 999px; padding: 0.2rem 0.75rem; }
"""
