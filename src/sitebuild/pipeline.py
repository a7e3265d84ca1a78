"""
Top-level build pipeline: static assets, README, then every sub-project.
"""

import time
from functools import partial
from typing import List, Optional

from loguru import logger

from sitebuild.config import BuildConfig
from sitebuild.errors import StepFailedError
from sitebuild.fs import copy_tree
from sitebuild.readme import build_index
from sitebuild.runner import CommandRunner
from sitebuild.steps import Step, StepResult, StepStatus
from sitebuild.subprojects import build_subproject, copy_static_subproject


class BuildPipeline:
    """Runs the build steps strictly in order against one BuildConfig."""

    def __init__(self, config: BuildConfig, runner: Optional[CommandRunner] = None):
        self.config = config
        self.runner = runner or CommandRunner(config.root)
        self.results: List[StepResult] = []

    def steps(self) -> List[Step]:
        config = self.config
        steps = [
            Step(
                name="static-assets",
                action=partial(copy_tree, config.static_dir, config.output_root),
                fatal=False,
                source=config.static_dir,
                destination=config.output_root,
                description="copy static assets",
            ),
            Step(
                name="readme",
                action=partial(build_index, config, self.runner),
                fatal=False,
                destination=config.index_file,
                description="convert README to HTML",
            ),
        ]
        for subproject in config.subprojects:
            dest = config.destination(subproject)
            if subproject.mode == "build":
                action = partial(build_subproject, config, self.runner, subproject.name, dest)
                description = f"build {subproject.name}"
            else:
                action = partial(copy_static_subproject, config, subproject.name, dest)
                description = f"copy {subproject.name} static files"
            steps.append(
                Step(
                    name=subproject.name,
                    action=action,
                    fatal=True,
                    source=config.project_dir(subproject.name),
                    destination=dest,
                    description=description,
                )
            )
        return steps

    def run(self) -> List[StepResult]:
        """
        Execute every step once, in order.
        Returns:
            One StepResult per step
        Raises:
            StepFailedError: when a fatal step fails; later steps are not run
        """
        self.results = []
        steps = self.steps()
        for index, step in enumerate(steps, start=1):
            logger.info(f"Step {index}/{len(steps)}: {step.description or step.name}...")
            started = time.monotonic()
            try:
                result = step.execute()
            except Exception as e:
                result = step.failure(e, started)
                self.results.append(result)
                if step.fatal:
                    logger.error(f"Failed to {step.description or step.name}: {e}")
                    raise StepFailedError(step.name, e, self.results) from e
                logger.warning(f"Failed to {step.description or step.name}: {e}")
                continue
            self.results.append(result)

        logger.success("Build finished.")
        return self.results

    @property
    def recovered(self) -> List[StepResult]:
        return [r for r in self.results if r.status is StepStatus.RECOVERED]
