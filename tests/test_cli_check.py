"""Tests for the swivl-sniffs CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from swivl_sniffs import __version__
from swivl_sniffs.cli import main

if TYPE_CHECKING:
    from pathlib import Path


def _php_available() -> bool:
    try:
        import tree_sitter_php  # noqa: F401

        return True
    except ImportError:
        return False


BAD_ENTITY = """<?php

class Post
{
    /**
     * @ORM\\Column(type="integer")
     */
    private int $views;
}
"""


@pytest.fixture()
def entity_dir(tmp_path: Path) -> Path:
    (tmp_path / "Post.php").write_text(BAD_ENTITY)
    return tmp_path


def test_version() -> None:
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_missing_path_is_usage_error(tmp_path: Path) -> None:
    result = CliRunner().invoke(main, ["check", str(tmp_path / "missing")])
    assert result.exit_code == 2


def test_invalid_config_exits_2(entity_dir: Path) -> None:
    config = entity_dir / "bad.yml"
    config.write_text("doctrine_entity: {}\n")
    result = CliRunner().invoke(main, ["check", str(entity_dir), "--config", str(config)])
    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


@pytest.mark.skipif(not _php_available(), reason="tree-sitter-php not installed")
class TestCheck:
    def test_json_output(self, entity_dir: Path) -> None:
        result = CliRunner().invoke(main, ["check", str(entity_dir), "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        codes = [d["code"].rsplit(".", 1)[-1] for d in data["diagnostics"]]
        assert codes == ["ColumnGetterRequired", "ColumnSetterRequired"]
        assert data["summary"]["files_scanned"] == 1

    def test_strict_exits_1(self, entity_dir: Path) -> None:
        result = CliRunner().invoke(
            main, ["check", str(entity_dir), "--format", "porcelain", "--strict"]
        )
        assert result.exit_code == 1
        assert "Post.php:6:8:Swivl.Commenting.DoctrineEntity.ColumnGetterRequired:" in result.output

    def test_clean_strict_exits_0(self, tmp_path: Path) -> None:
        (tmp_path / "Plain.php").write_text("<?php\nclass Plain\n{\n    private $x;\n}\n")
        result = CliRunner().invoke(main, ["check", str(tmp_path), "--format", "rich", "--strict"])
        assert result.exit_code == 0
        assert "No violations found" in result.output

    def test_quiet_hides_clean_summary(self, tmp_path: Path) -> None:
        (tmp_path / "Plain.php").write_text("<?php\nclass Plain\n{\n}\n")
        result = CliRunner().invoke(main, ["-q", "check", str(tmp_path), "--format", "rich"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_default_format_when_piped(self, entity_dir: Path) -> None:
        result = CliRunner().invoke(main, ["check", str(entity_dir)])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 2
        assert all(":Swivl.Commenting.DoctrineEntity." in line for line in lines)


class TestRules:
    def test_json(self) -> None:
        result = CliRunner().invoke(main, ["rules", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["Column"]["required"] == ["type"]
        assert data["Column"]["attributes"]["enumType"] == "class"
        assert data["JoinColumn"]["requires"] == [["ManyToOne", "OneToOne"]]
        assert data["Id"]["attributes"] is None

    def test_table(self) -> None:
        result = CliRunner().invoke(main, ["rules"], env={"COLUMNS": "240"})
        assert result.exit_code == 0
        assert "ORM annotations" in result.output
        assert "SequenceGenerator" in result.output
