import sys
from pathlib import Path

import pytest
from loguru import logger

from sitebuild.config import BuildConfig
from sitebuild.runner import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """Records commands instead of running them; hooks emulate the tools' side effects."""

    def __init__(self, default_cwd, returncodes=None, hooks=None):
        super().__init__(default_cwd)
        self.calls = []
        self.returncodes = returncodes or {}
        self.hooks = hooks or {}

    def run(self, command, cwd=None):
        workdir = Path(cwd) if cwd else self.default_cwd
        self.calls.append((command, workdir))
        code = next((c for fragment, c in self.returncodes.items() if fragment in command), 0)
        if code == 0:
            for fragment, hook in self.hooks.items():
                if fragment in command:
                    hook(command, workdir)
        return CommandResult(command, workdir, code)

    @property
    def commands(self):
        return [command for command, _ in self.calls]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SITEBUILD_ROOT", "SITEBUILD_OUTPUT_DIR", "SITEBUILD_MARKDOWN_CMD", "SITEBUILD_NPM"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def project(tmp_path):
    """A project root with static assets, a README and both sub-projects."""
    root = tmp_path / "site"
    (root / "static" / "style").mkdir(parents=True)
    (root / "static" / "style" / "marked-styles.css").write_text("body { margin: 0; }")
    (root / "static" / "favicon.ico").write_bytes(b"\x00\x01\x02")
    (root / "README.md").write_text("# Games\n\n<b>fun</b> & games\n")

    hidden_word = root / "projects" / "hidden-word"
    hidden_word.mkdir(parents=True)
    (hidden_word / "package.json").write_text('{"name": "hidden-word"}')
    (hidden_word / "package-lock.json").write_text("{}")

    pixel = root / "projects" / "PixelJihad"
    (pixel / "js").mkdir(parents=True)
    (pixel / "index.html").write_text("<html></html>")
    (pixel / "js" / "app.js").write_text("console.log(1);")
    (pixel / "README.md").write_text("not copied")
    return root


@pytest.fixture
def config(project):
    return BuildConfig.from_root(project)


def emulate_npm_build(output_name="dist"):
    """Hook for 'run build' that leaves an output directory behind, like a bundler."""

    def hook(command, cwd):
        out = cwd / output_name
        (out / "static").mkdir(parents=True, exist_ok=True)
        (out / "index.html").write_text("<div id=root></div>")
        (out / "static" / "main.js").write_text("render();")

    return hook


def emulate_marked(output):
    def hook(command, cwd):
        Path(output).write_text("<h1>Games</h1>")

    return hook


@pytest.fixture
def fake_runner(project, config):
    return FakeRunner(
        project,
        hooks={"run build": emulate_npm_build(), "marked": emulate_marked(config.index_file)},
    )
