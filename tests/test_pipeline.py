import shutil

import pytest
from conftest import FakeRunner, emulate_marked

from sitebuild.errors import BuildOutputNotFoundError, CommandFailedError, StepFailedError
from sitebuild.pipeline import BuildPipeline
from sitebuild.steps import StepStatus


def statuses(results):
    return [(r.name, r.status) for r in results]


def test_full_build_assembles_output(config, fake_runner):
    results = BuildPipeline(config, runner=fake_runner).run()

    out = config.output_root
    assert statuses(results) == [
        ("static-assets", StepStatus.SUCCESS),
        ("readme", StepStatus.SUCCESS),
        ("hidden-word", StepStatus.SUCCESS),
        ("PixelJihad", StepStatus.SUCCESS),
    ]
    assert (out / "style" / "marked-styles.css").exists()
    assert (out / "favicon.ico").read_bytes() == b"\x00\x01\x02"
    assert "<h1>Games</h1>" in (out / "index.html").read_text()
    assert (out / "hidden-word" / "index.html").exists()
    assert (out / "pixeljihad" / "js" / "app.js").exists()


def test_commands_run_in_order(config, fake_runner):
    BuildPipeline(config, runner=fake_runner).run()
    assert [c.split()[0] for c in fake_runner.commands] == ["marked", "npm", "npm"]


def test_stale_output_is_removed(config, fake_runner):
    config.output_root.mkdir()
    (config.output_root / "old.html").write_text("stale")

    BuildPipeline(config, runner=fake_runner).run()

    assert not (config.output_root / "old.html").exists()


def test_missing_static_dir_is_recoverable(project, config, fake_runner):
    shutil.rmtree(project / "static")

    pipeline = BuildPipeline(config, runner=fake_runner)
    results = pipeline.run()

    assert results[0].status is StepStatus.RECOVERED
    assert [r.status for r in results[1:]] == [StepStatus.SUCCESS] * 3
    assert [r.name for r in pipeline.recovered] == ["static-assets"]
    assert (config.output_root / "pixeljihad" / "index.html").exists()


def test_no_readme_skips_index(project, config, fake_runner):
    (project / "README.md").unlink()

    results = BuildPipeline(config, runner=fake_runner).run()

    assert results[1].status is StepStatus.SKIPPED
    assert not config.index_file.exists()
    assert results[-1].status is StepStatus.SUCCESS


def test_renderer_unavailable_still_writes_index(project, config):
    runner = FakeRunner(project, returncodes={"marked": 127}, hooks={"run build": lambda c, cwd: (cwd / "build").mkdir()})

    results = BuildPipeline(config, runner=runner).run()

    assert results[1].status is StepStatus.SUCCESS
    assert "&lt;b&gt;fun&lt;/b&gt; &amp; games" in config.index_file.read_text()


def test_readme_error_is_recoverable(project, config, fake_runner, monkeypatch):
    def broken(*args, **kwargs):
        raise PermissionError("read-only output")

    monkeypatch.setattr("sitebuild.readme.render_markdown", broken)

    results = BuildPipeline(config, runner=fake_runner).run()

    assert results[1].status is StepStatus.RECOVERED
    assert results[1].error == "read-only output"
    assert results[-1].status is StepStatus.SUCCESS


def test_missing_build_output_aborts(project, config):
    runner = FakeRunner(project, hooks={"marked": emulate_marked(config.index_file)})

    with pytest.raises(StepFailedError) as exc_info:
        BuildPipeline(config, runner=runner).run()

    error = exc_info.value
    assert error.step_name == "hidden-word"
    assert isinstance(error.__cause__, BuildOutputNotFoundError)
    assert statuses(error.results)[-1] == ("hidden-word", StepStatus.FAILED)
    assert not (config.output_root / "hidden-word").exists()
    assert not (config.output_root / "pixeljihad").exists()


def test_build_failure_aborts(project, config):
    runner = FakeRunner(project, returncodes={"run build": 1})

    with pytest.raises(StepFailedError) as exc_info:
        BuildPipeline(config, runner=runner).run()

    assert isinstance(exc_info.value.error, CommandFailedError)
    assert len(exc_info.value.results) == 3


def test_missing_static_subproject_is_fatal(project, config, fake_runner):
    shutil.rmtree(project / "projects" / "PixelJihad")

    with pytest.raises(StepFailedError) as exc_info:
        BuildPipeline(config, runner=fake_runner).run()

    assert exc_info.value.step_name == "PixelJihad"
    assert isinstance(exc_info.value.error, FileNotFoundError)


def test_steps_fatality(config):
    steps = BuildPipeline(config).steps()
    assert [(s.name, s.fatal) for s in steps] == [
        ("static-assets", False),
        ("readme", False),
        ("hidden-word", True),
        ("PixelJihad", True),
    ]
