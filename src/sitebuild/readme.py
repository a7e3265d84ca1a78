"""
Render the project README into the site's index page.
"""

import html
from pathlib import Path
from typing import Optional

from loguru import logger

from sitebuild.config import BuildConfig
from sitebuild.errors import SiteBuildError
from sitebuild.runner import CommandRunner
from sitebuild.steps import StepSkipped

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="zh-CN">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>README</title>
    <link rel="stylesheet" href="style/marked-styles.css">
</head>
<body>
    {body}
</body>
</html>"""


def find_readme(config: BuildConfig) -> Optional[Path]:
    """Return the first README candidate present in the project root."""
    for name in config.readme_candidates:
        path = config.root / name
        if path.is_file():
            return path
    return None


def plaintext_body(text: str) -> str:
    """Escape &, < and > and keep the text preformatted."""
    escaped = html.escape(text, quote=False)
    return f'<pre style="white-space:pre-wrap">{escaped}</pre>'


def wrap_page(body: str) -> str:
    return PAGE_TEMPLATE.format(body=body)


def render_markdown(readme: Path, output: Path, runner: CommandRunner, command_template: str) -> str:
    """
    Render ``readme`` to HTML with the external renderer, or fall back to plain text.
    Returns:
        The HTML body to place in the page
    """
    try:
        command = command_template.format(source=readme, output=output)
    except (KeyError, IndexError, ValueError) as e:
        logger.warning(f"Invalid markdown renderer command '{command_template}' ({e!r}), falling back to plaintext wrapper.")
        return plaintext_body(readme.read_text(encoding="utf-8", errors="replace"))

    try:
        result = runner.run(command)
        if result.ok:
            return output.read_text(encoding="utf-8", errors="replace")
        logger.warning(f"Markdown renderer exited with code {result.returncode}, falling back to plaintext wrapper.")
    except (SiteBuildError, OSError) as e:
        logger.warning(f"Markdown renderer failed ({e}), falling back to plaintext wrapper.")
    return plaintext_body(readme.read_text(encoding="utf-8", errors="replace"))


def build_index(config: BuildConfig, runner: CommandRunner) -> Path:
    """
    Convert the root README into <output>/index.html.
    Raises:
        StepSkipped: if the project root has no README
    """
    readme = find_readme(config)
    if readme is None:
        logger.warning("No README found in project root, skipping README -> HTML conversion.")
        raise StepSkipped("no README found")

    out_path = config.index_file
    logger.info(f"Converting {readme.name} -> {out_path}")
    out_path.parent.mkdir(parents=True, exist_ok=True)

    body = render_markdown(readme, out_path, runner, config.render_command)
    out_path.write_text(wrap_page(body), encoding="utf-8")
    return out_path
