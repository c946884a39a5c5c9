from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from helpers import write_file

from stubgen.core.context import RunContext
from stubgen.core.errors import CompilerError, ConfigurationError
from stubgen.stubs.command_compiler import CommandStubCompiler
from stubgen.stubs.compiler import DryRunStubCompiler, Keys

FAKE_STUBC = """\
import pathlib
import sys

target = pathlib.Path(sys.argv[1])
target.mkdir(parents=True, exist_ok=True)
for source in sys.argv[2:]:
    name = pathlib.Path(source).name.replace(".groovy", ".java")
    (target / name).write_text("// stub\\n", encoding="utf-8")
"""


def _request_compiler(command: list[str], tmp_path: Path) -> CommandStubCompiler:
    compiler = CommandStubCompiler(command, tmp_path)
    compiler.set_target_directory(tmp_path / "out")
    return compiler


def test_placeholders_are_substituted(tmp_path: Path) -> None:
    compiler = _request_compiler(["stubc", "-d", "{target}", "-cp", "{classpath}", "-encoding", "{encoding}"], tmp_path)
    compiler.set_class_path(["a.jar", "b.jar"])
    compiler.config.set(Keys.SOURCE_ENCODING, "UTF-8")
    compiler.add(tmp_path / "A.groovy")

    cmd = compiler.render_command(compiler.request())

    assert cmd == [
        "stubc",
        "-d",
        str(tmp_path / "out"),
        "-cp",
        os.pathsep.join(["a.jar", "b.jar"]),
        "-encoding",
        "UTF-8",
        str(tmp_path / "A.groovy"),
    ]


def test_unset_values_drop_their_option(tmp_path: Path) -> None:
    compiler = _request_compiler(["stubc", "-cp", "{classpath}", "--encoding={encoding}", "-d", "{target}"], tmp_path)

    assert compiler.render_command(compiler.request()) == ["stubc", "-d", str(tmp_path / "out")]


def test_unknown_option_key_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        DryRunStubCompiler().config.set("targetBytecode", "1.8")


def test_compile_runs_only_once(tmp_path: Path) -> None:
    compiler = DryRunStubCompiler()
    compiler.set_target_directory(tmp_path)
    compiler.add(tmp_path / "A.groovy")

    assert compiler.compile() == 0
    assert compiler.last_request is not None
    assert compiler.last_request.files == (tmp_path / "A.groovy",)
    with pytest.raises(CompilerError):
        compiler.compile()
    with pytest.raises(CompilerError):
        compiler.add(tmp_path / "B.groovy")


def test_compile_requires_target_directory() -> None:
    with pytest.raises(CompilerError, match="target directory"):
        DryRunStubCompiler().compile()


def test_empty_command_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(CompilerError):
        CommandStubCompiler([], tmp_path)


@pytest.mark.integration
def test_generated_count_comes_from_new_or_changed_stubs(tmp_path: Path, ctx: RunContext) -> None:
    script = write_file(tmp_path / "stubc.py", FAKE_STUBC)
    sources = [write_file(tmp_path / "src" / name, "") for name in ("A.groovy", "B.groovy")]
    out = tmp_path / "out"
    write_file(out / "Stale.java", "")
    compiler = CommandStubCompiler([sys.executable, str(script), "{target}"], tmp_path, ctx=ctx)
    compiler.set_target_directory(out)
    for source in sources:
        compiler.add(source)

    assert compiler.compile() == 2
    assert sorted(p.name for p in out.iterdir()) == ["A.java", "B.java", "Stale.java"]


@pytest.mark.integration
def test_failing_command_is_a_compiler_error(tmp_path: Path) -> None:
    compiler = _request_compiler([sys.executable, "-c", "import sys; sys.stderr.write('bad groovy'); sys.exit(3)"], tmp_path)
    compiler.add(write_file(tmp_path / "A.groovy", ""))

    with pytest.raises(CompilerError, match="exited with code 3: bad groovy"):
        compiler.compile()


@pytest.mark.integration
def test_missing_executable_is_a_compiler_error(tmp_path: Path) -> None:
    compiler = _request_compiler([str(tmp_path / "no-such-stubc")], tmp_path)
    compiler.add(write_file(tmp_path / "A.groovy", ""))

    with pytest.raises(CompilerError, match="failed to start") as excinfo:
        compiler.compile()

    assert isinstance(excinfo.value.__cause__, OSError)


@pytest.mark.integration
def test_timeout_is_a_compiler_error(tmp_path: Path) -> None:
    compiler = CommandStubCompiler([sys.executable, "-c", "import time; time.sleep(5)"], tmp_path, timeout_seconds=1)
    compiler.set_target_directory(tmp_path / "out")
    compiler.add(write_file(tmp_path / "A.groovy", ""))

    with pytest.raises(CompilerError, match="timed out"):
        compiler.compile()


@pytest.mark.integration
def test_command_is_skipped_without_sources(tmp_path: Path, ctx: RunContext) -> None:
    script = write_file(
        tmp_path / "stubc.py",
        "import sys\nif len(sys.argv) < 3:\n    sys.exit('error: no source files')\n",
    )
    out = tmp_path / "out"
    compiler = CommandStubCompiler([sys.executable, str(script), "{target}"], tmp_path, ctx=ctx)
    compiler.set_target_directory(out)

    assert compiler.compile() == 0
    assert not out.exists()
    with pytest.raises(CompilerError):
        compiler.compile()
