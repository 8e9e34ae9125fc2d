"""
tests/test_cli.py
Tests for scaffoldgen.cli (argument handling, exit codes, file output).
"""

from __future__ import annotations

import pathlib
from typing import List

import pytest

from scaffoldgen.cli import (
    EXIT_EXPORT_ERROR,
    EXIT_GENERATION_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    cli_main,
)

from tests.conftest import SCAFFOLD_EXAMPLE_PATH


def _run(argv: List[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        cli_main(argv)
    return exc_info.value.code


class TestScaffoldCommand:
    """``scaffoldgen scaffold``."""

    def test_dry_run_prints_every_role(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run(["scaffold", "Post", "title:string", "content:text", "--dry-run"])
        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        for path in ("posts/index.tsx", "posts/show.tsx", "posts/form.tsx"):
            assert f"# --- {path} ---" in out
        assert "export default function PostIndex" in out

    def test_writes_files(self, tmp_path: pathlib.Path) -> None:
        code = _run(["scaffold", "BlogPost", "title:string", "-o", str(tmp_path), "-q"])
        assert code == EXIT_SUCCESS
        for name in ("index.tsx", "show.tsx", "form.tsx"):
            assert (tmp_path / "blog-posts" / name).is_file()

    def test_validated_orbita_stack(self, tmp_path: pathlib.Path) -> None:
        code = _run(
            [
                "scaffold", "Task", "status:boolean",
                "--stack", "orbita", "--validated",
                "-o", str(tmp_path),
            ]
        )
        assert code == EXIT_SUCCESS
        schema = (tmp_path / "tasks" / "schema.ts").read_text(encoding="utf-8")
        assert "status: z.boolean()," in schema
        index = (tmp_path / "tasks" / "index.tsx").read_text(encoding="utf-8")
        assert "<th>Created At</th>" in index

    def test_definition_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run(["scaffold", "-d", str(SCAFFOLD_EXAMPLE_PATH), "--dry-run"])
        assert code == EXIT_SUCCESS
        assert "# --- blog-posts/schema.ts ---" in capsys.readouterr().out

    def test_definition_with_stack_override(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run(["scaffold", "-d", str(SCAFFOLD_EXAMPLE_PATH), "--stack", "react", "--dry-run"])
        assert code == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "# --- blog-posts/index.tsx ---" in out
        assert "schema.ts" not in out

    def test_validate_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run(["scaffold", "Post", "title:string", "--validate-only"])
        assert code == EXIT_SUCCESS
        assert "Validation: 0 error(s), 0 warning(s)." in capsys.readouterr().out

    def test_template_dir(self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
        override = tmp_path / "react_router"
        override.mkdir()
        (override / "show.tsx").write_text(
            "// {{class_name}}\n{{interface_fields}}\n{{detail_fields}}\n", encoding="utf-8"
        )
        code = _run(["scaffold", "Post", "title:string", "--template-dir", str(tmp_path), "--dry-run"])
        assert code == EXIT_SUCCESS
        assert "// Post\n" in capsys.readouterr().out


class TestExitCodes:
    """Failures map onto the documented exit codes."""

    @pytest.mark.parametrize("token", ["title", "price:money", "a:b:c", "9lives:string"])
    def test_bad_tokens_are_input_errors(self, token: str, tmp_path: pathlib.Path) -> None:
        assert _run(["scaffold", "Post", token, "-o", str(tmp_path)]) == EXIT_INPUT_ERROR
        assert list(tmp_path.iterdir()) == []

    def test_missing_name(self) -> None:
        assert _run(["scaffold"]) == EXIT_INPUT_ERROR

    def test_name_and_definition(self) -> None:
        assert _run(["scaffold", "Post", "-d", str(SCAFFOLD_EXAMPLE_PATH)]) == EXIT_INPUT_ERROR

    def test_missing_definition_file(self, tmp_path: pathlib.Path) -> None:
        assert _run(["scaffold", "-d", str(tmp_path / "missing.yaml")]) == EXIT_INPUT_ERROR

    def test_unsupported_stack(self) -> None:
        assert _run(["scaffold", "Post", "title:string", "--stack", "react", "--validated"]) == EXIT_INPUT_ERROR

    @pytest.mark.parametrize(
        "argv",
        [
            ["scaffold", "post", "title:string"],
            ["scaffold", "Post", "title:string", "title:text"],
            ["scaffold", "Post", "id:string"],
            ["scaffold", "Post", "id:integer", "title:string"],
        ],
    )
    def test_validation_errors(self, argv: List[str], capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(argv) == EXIT_VALIDATION_ERROR
        assert "error(s)" in capsys.readouterr().out

    def test_generation_error_writes_nothing(self, tmp_path: pathlib.Path) -> None:
        code = _run(["scaffold", "Category", "--stack", "orbita", "--validated", "-o", str(tmp_path)])
        assert code == EXIT_GENERATION_ERROR
        assert list(tmp_path.iterdir()) == []

    def test_export_error(self, tmp_path: pathlib.Path) -> None:
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        assert _run(["scaffold", "Post", "title:string", "-o", str(blocker)]) == EXIT_EXPORT_ERROR

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["--version"]) == 0
        assert "Scaffoldgen v" in capsys.readouterr().out


class TestAppCommand:
    """``scaffoldgen app``."""

    def test_writes_application_shell(self, tmp_path: pathlib.Path) -> None:
        assert _run(["app", "Demo", "-o", str(tmp_path)]) == EXIT_SUCCESS
        home = (tmp_path / "app" / "views" / "home" / "index.tsx").read_text(encoding="utf-8")
        assert "Welcome to Demo!" in home
        assert (tmp_path / "app" / "main.tsx").is_file()
        assert (tmp_path / "vite.config.js").is_file()
