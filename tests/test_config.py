from __future__ import annotations

from pathlib import Path

import pytest
from helpers import write_file

from stubgen.config import StubgenConfig, load_config, parse_config, validate_config
from stubgen.config.model import default_source_set, intermediate_root_for
from stubgen.core.errors import ConfigurationError

STUBGEN_TOML = """\
source-encoding = "ISO-8859-1"
classpath = ["lib/api.jar", "/opt/jenkins/core.jar"]

[compiler]
command = ["stubc", "-d", "{target}"]
timeout-seconds = 30

[[sources]]
directory = "src/main/groovy"
excludes = ["**/experimental/**"]

[[sources]]
directory = "vars"
mode = "global-vars"
line-ending = "unix"
model-encoding = "UTF-8"

[[test-sources]]
directory = "src/test/groovy"
"""


def test_defaults_without_any_file(project_root: Path) -> None:
    config = load_config(project_root)
    assert config == StubgenConfig()
    assert config.origin == "<defaults>"
    assert config.sources is None
    assert config.output_directory_for("main", project_root) == project_root / "target/generated-sources/groovy-stubs/main"
    assert config.output_directory_for("test", project_root) == project_root / "target/generated-sources/groovy-stubs/test"


def test_stubgen_toml_is_parsed(project_root: Path) -> None:
    write_file(project_root / "stubgen.toml", STUBGEN_TOML)

    config = load_config(project_root)

    assert config.source_encoding == "ISO-8859-1"
    assert config.compiler.command == ("stubc", "-d", "{target}")
    assert config.compiler.timeout_seconds == 30
    assert config.class_path_for(project_root) == (str(project_root / "lib/api.jar"), "/opt/jenkins/core.jar")
    assert config.sources is not None
    main, global_vars = config.sources
    assert main.directory == Path("src/main/groovy")
    assert main.includes == ("**/*.groovy",)
    assert main.excludes == ("**/experimental/**",)
    assert main.mode == "auto"
    assert global_vars.mode == "global-vars"
    assert global_vars.line_ending == "unix"
    assert global_vars.model_encoding == "UTF-8"
    assert config.sources_for("test") == config.test_sources
    assert config.origin == str(project_root / "stubgen.toml")


def test_pyproject_tool_table_is_used(project_root: Path) -> None:
    write_file(
        project_root / "pyproject.toml",
        '[project]\nname = "x"\n\n[tool.stubgen]\nproject-encoding = "UTF-8"\noutput-directory = "build/stubs"\n',
    )

    config = load_config(project_root)

    assert config.effective_encoding == "UTF-8"
    assert config.output_directory_for("main", project_root) == project_root / "build/stubs"


def test_pyproject_without_tool_table_means_defaults(project_root: Path) -> None:
    write_file(project_root / "pyproject.toml", '[project]\nname = "x"\n')

    config = load_config(project_root)

    assert config.sources is None
    assert config.origin == str(project_root / "pyproject.toml")


def test_stubgen_toml_wins_over_pyproject(project_root: Path) -> None:
    write_file(project_root / "pyproject.toml", '[tool.stubgen]\nsource-encoding = "UTF-16"\n')
    write_file(project_root / "stubgen.toml", 'source-encoding = "UTF-8"\n')

    assert load_config(project_root).source_encoding == "UTF-8"


def test_explicit_config_path(project_root: Path) -> None:
    write_file(project_root / "conf/stubs.toml", '[tool.stubgen]\nclasspath = ["x.jar"]\n')

    assert load_config(project_root, "conf/stubs.toml").classpath == ("x.jar",)


def test_missing_explicit_config_is_an_error(project_root: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(project_root, "nope.toml")


def test_malformed_toml_is_a_configuration_error(project_root: Path) -> None:
    write_file(project_root / "stubgen.toml", "source-encoding = \n")

    with pytest.raises(ConfigurationError, match="malformed TOML"):
        load_config(project_root)


@pytest.mark.parametrize(
    ("payload", "location"),
    [
        ({"unknown": 1}, "<root>"),
        ({"sources": [{"includes": ["**/*.groovy"]}]}, "sources/0"),
        ({"sources": [{"directory": "vars", "mode": "magic"}]}, "sources/0/mode"),
        ({"compiler": {"command": []}}, "compiler/command"),
        ({"compiler": {"timeout-seconds": -1}}, "compiler/timeout-seconds"),
        ({"classpath": "lib/a.jar"}, "classpath"),
    ],
)
def test_schema_violations_name_the_location(payload: dict[str, object], location: str) -> None:
    with pytest.raises(ConfigurationError, match=f"at {location}"):
        validate_config(payload, "test.toml")


def test_encoding_precedence_and_overrides() -> None:
    config = parse_config({"project-encoding": "UTF-8"})
    assert config.effective_encoding == "UTF-8"
    assert parse_config({"project-encoding": "UTF-8", "source-encoding": "Cp1252"}).effective_encoding == "Cp1252"
    assert config.with_overrides(source_encoding="UTF-16").effective_encoding == "UTF-16"
    assert StubgenConfig().effective_encoding is None
    assert StubgenConfig().read_encoding == "utf-8"


def test_output_override_targets_the_selected_scope(project_root: Path) -> None:
    config = StubgenConfig().with_overrides(output_directory="out/test-stubs", scope="test")
    assert config.output_directory_for("test", project_root) == project_root / "out/test-stubs"
    assert config.output_directory_for("main", project_root) == project_root / "target/generated-sources/groovy-stubs/main"


def test_scope_layout_defaults(project_root: Path) -> None:
    assert default_source_set("main", project_root).directory == project_root / "src/main/groovy"
    assert default_source_set("test", project_root).directory == project_root / "src/test/groovy"
    assert intermediate_root_for("main", project_root) == project_root / "target/generated-sources/globalVarsTmp"
    assert intermediate_root_for("test", project_root) == project_root / "target/generated-test-sources/globalVarsTmp"
