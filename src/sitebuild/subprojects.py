from pathlib import Path
from typing import Optional

from loguru import logger

from sitebuild.config import BuildConfig
from sitebuild.errors import BuildOutputNotFoundError
from sitebuild.fs import copy_filtered, copy_tree
from sitebuild.runner import CommandRunner


def find_output_dir(project_dir: Path, candidates) -> Optional[Path]:
    """Return the first existing build output directory of a sub-project."""
    for name in candidates:
        path = project_dir / name
        if path.exists():
            return path
    return None


def build_subproject(config: BuildConfig, runner: CommandRunner, name: str, dest: Path) -> Path:
    """
    Install, build and copy a sub-project's output into ``dest``.
    Args:
        config: Build configuration
        runner: Runs the package-manager commands
        name: Directory name under the sub-projects root
        dest: Destination directory in the output tree
    Returns:
        The output directory that was copied
    Raises:
        CommandFailedError: if install or build exits non-zero
        BuildOutputNotFoundError: if no output directory was produced
    """
    project_dir = config.project_dir(name)

    logger.info(f"Installing {name} dependencies...")
    runner.check(config.install_command, project_dir)
    logger.info(f"Building {name}...")
    runner.check(config.build_command, project_dir)

    out_dir = find_output_dir(project_dir, config.output_candidates)
    if out_dir is None:
        raise BuildOutputNotFoundError(name, config.output_candidates)

    logger.info(f"Copying {name} build from {out_dir} -> {dest}")
    copy_tree(out_dir, dest)
    return out_dir


def copy_static_subproject(config: BuildConfig, name: str, dest: Path) -> int:
    """Copy the web-servable files of a sub-project verbatim."""
    logger.info(f"Copying {name} static files...")
    count = copy_filtered(config.project_dir(name), dest, config.static_extensions)
    logger.info(f"Copied {count} file(s) from {name} -> {dest}")
    return count
