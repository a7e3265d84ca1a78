"""
Build configuration: directory layout, external commands and sub-projects.
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

README_CANDIDATES = ("README.md", "README.MD", "README")
OUTPUT_CANDIDATES = ("build", "dist")
STATIC_EXTENSIONS = frozenset({".html", ".css", ".js", ".png", ".jpg", ".jpeg", ".svg", ".gif", ".ico", ".json"})
RENDER_COMMAND = 'marked "{source}" -o "{output}"'


@dataclass(frozen=True)
class SubProject:
    """A unit under the sub-projects root that ends up in the output tree."""

    name: str
    dest_name: str
    mode: str = "build"  # "build" or "static"

    def __post_init__(self):
        if self.mode not in ("build", "static"):
            raise ValueError(f"Unknown sub-project mode '{self.mode}' for '{self.name}'")


DEFAULT_SUBPROJECTS = (
    SubProject("hidden-word", "hidden-word", mode="build"),
    SubProject("PixelJihad", "pixeljihad", mode="static"),
)


@dataclass(frozen=True)
class BuildConfig:
    root: Path
    projects_root: Path
    output_root: Path
    static_dir: Path
    readme_candidates: Tuple[str, ...] = README_CANDIDATES
    render_command: str = RENDER_COMMAND
    install_command: str = "npm ci"
    build_command: str = "npm run build"
    output_candidates: Tuple[str, ...] = OUTPUT_CANDIDATES
    static_extensions: frozenset = STATIC_EXTENSIONS
    subprojects: Tuple[SubProject, ...] = field(default=DEFAULT_SUBPROJECTS)

    @classmethod
    def from_root(cls, root: Path, output_root: Optional[Path] = None, **overrides) -> "BuildConfig":
        """
        Derive every path from the project root.
        Args:
            root: Project root holding static/, projects/ and the README
            output_root: Where the site is assembled (defaults to <root>/build)
        """
        root = Path(root).resolve()
        return cls(
            root=root,
            projects_root=root / "projects",
            output_root=Path(output_root).resolve() if output_root else root / "build",
            static_dir=root / "static",
            **overrides,
        )

    @classmethod
    def from_env(cls, default_root: Path, root: Optional[Path] = None) -> "BuildConfig":
        """
        Build the config from SITEBUILD_* environment variables.
        An explicit ``root`` wins over SITEBUILD_ROOT, which wins over ``default_root``.
        """
        root_env = os.environ.get("SITEBUILD_ROOT")
        output_env = os.environ.get("SITEBUILD_OUTPUT_DIR")
        render_env = os.environ.get("SITEBUILD_MARKDOWN_CMD")
        npm = os.environ.get("SITEBUILD_NPM", "npm")

        if root is None:
            root = Path(root_env) if root_env else Path(default_root)
        output_root = None
        if output_env:
            output_root = Path(output_env)
            if not output_root.is_absolute():
                output_root = Path(root).resolve() / output_root
        config = cls.from_root(root, output_root=output_root)
        config = replace(config, install_command=f"{npm} ci", build_command=f"{npm} run build")
        if render_env:
            config = replace(config, render_command=render_env)
        return config

    def project_dir(self, name: str) -> Path:
        return self.projects_root / name

    def destination(self, subproject: SubProject) -> Path:
        return self.output_root / subproject.dest_name

    @property
    def index_file(self) -> Path:
        return self.output_root / "index.html"
