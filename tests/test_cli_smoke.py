import json
from pathlib import Path

import pytest

from modifier_datagen import cli

DEFINITIONS = "\n".join(
    [
        "recipes:",
        "  - modifier: sharpness",
        "    level: 3",
        "    inputs:",
        "      - item: minecraft:flint",
        "    max_level: 3",
        "",
    ]
)


@pytest.fixture()
def config_path(tmp_path, monkeypatch) -> Path:
    monkeypatch.delenv("MODIFIER_DATAGEN_CONFIG", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(["datagen:", "  namespace: tconstruct", "  output_path: out", ""]),
        encoding="utf-8",
    )
    return path


def test_cli_show_prints_documents(tmp_path, config_path, capsys):
    definitions = tmp_path / "defs.yaml"
    definitions.write_text(DEFINITIONS, encoding="utf-8")

    rc = cli.main(["--config", str(config_path), "show", str(definitions)])
    assert rc == 0

    payload = json.loads(capsys.readouterr().out)
    assert list(payload) == [
        "tconstruct:tools/modifiers/sharpness",
        "tconstruct:tools/modifiers/salvage/sharpness",
    ]
    assert payload["tconstruct:tools/modifiers/sharpness"]["result"] == {
        "modifier": "tconstruct:sharpness",
        "level": 3,
    }


def test_cli_generate_writes_files_relative_to_config(tmp_path, config_path):
    definitions = tmp_path / "defs.yaml"
    definitions.write_text(DEFINITIONS, encoding="utf-8")

    rc = cli.main(["--config", str(config_path), "generate", str(definitions)])
    assert rc == 0

    recipes_dir = tmp_path / "out" / "tconstruct" / "recipes" / "tools" / "modifiers"
    recipe = json.loads((recipes_dir / "sharpness.json").read_text(encoding="utf-8"))
    salvage = json.loads((recipes_dir / "salvage" / "sharpness.json").read_text(encoding="utf-8"))
    assert recipe["type"] == "tconstruct:modifier"
    assert recipe["max_level"] == 3
    assert salvage == {
        "type": "tconstruct:modifier_salvage",
        "tools": {"tag": "tconstruct:modifiable"},
        "modifier": "tconstruct:sharpness",
        "min_level": 1,
    }


def test_cli_generate_output_flag_overrides_config(tmp_path, config_path):
    definitions = tmp_path / "defs.yaml"
    definitions.write_text(DEFINITIONS, encoding="utf-8")
    output = tmp_path / "elsewhere"

    rc = cli.main(["--config", str(config_path), "generate", str(definitions), "--output", str(output)])
    assert rc == 0
    assert (output / "tconstruct" / "recipes" / "tools" / "modifiers" / "sharpness.json").exists()


def test_cli_reports_builder_errors_with_exit_code(tmp_path, config_path):
    definitions = tmp_path / "defs.yaml"
    definitions.write_text(DEFINITIONS.replace("max_level: 3", "max_level: 0"), encoding="utf-8")

    rc = cli.main(["--config", str(config_path), "generate", str(definitions)])
    assert rc == cli.EXIT_CONFIG_ERROR
    assert not (tmp_path / "out").exists()
