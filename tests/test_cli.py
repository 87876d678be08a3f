"""Tests for the command-line entry point (precast.cli)."""

from __future__ import annotations

import pytest

from precast.cli import _build_parser, _run


pytestmark = pytest.mark.unit


async def _invoke(*argv: str) -> int:
    return await _run(_build_parser().parse_args(list(argv)))


class TestParser:
    def test_init_defaults(self):
        args = _build_parser().parse_args(["init", "my-app"])
        assert args.command == "init"
        assert args.framework == "react"
        assert args.backend == "none"
        assert args.no_typescript is False

    def test_unknown_framework_rejected(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["init", "x", "--framework", "ember"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args([])


class TestRun:
    async def test_list(self, template_root, make_bundle, capsys):
        make_bundle("frameworks/react", {"x": ""})
        make_bundle("frameworks/vue", {"x": ""})

        assert await _invoke("--template-root", str(template_root), "list", "frameworks") == 0

        out = capsys.readouterr().out
        assert "react" in out
        assert "vue" in out

    async def test_init(self, template_root, make_bundle, tmp_path):
        make_bundle("frameworks/vue/base", {"index.html.hbs": "<title>{{ name }}</title>\n"})
        out_dir = tmp_path / "projects"

        code = await _invoke(
            "--template-root", str(template_root),
            "init", "cli-app", "--framework", "vue", "--no-typescript", "--output", str(out_dir),
        )

        assert code == 0
        assert (out_dir / "cli-app" / "index.html").read_text(encoding="utf-8") == "<title>cli-app</title>\n"
        assert (out_dir / "cli-app" / "precast.jsonc").exists()

    async def test_init_failure_returns_1(self, template_root, tmp_path):
        code = await _invoke(
            "--template-root", str(template_root), "init", "nothing", "--output", str(tmp_path),
        )

        assert code == 1
        assert not (tmp_path / "nothing").exists()

    async def test_invalid_stack_returns_1(self, template_root, tmp_path):
        code = await _invoke(
            "--template-root", str(template_root),
            "init", "ng", "--framework", "angular", "--no-typescript", "--output", str(tmp_path),
        )

        assert code == 1
        assert not (tmp_path / "ng").exists()

    async def test_add_to_existing_project(self, template_root, make_bundle, tmp_path):
        make_bundle("frameworks/vue/base", {"index.html.hbs": "<title>{{ name }}</title>\n"})
        make_bundle("addons/biome", {"biome.json": "{}\n"})
        await _invoke(
            "--template-root", str(template_root),
            "init", "grow", "--framework", "vue", "--no-typescript", "--output", str(tmp_path),
        )

        code = await _invoke(
            "--template-root", str(template_root), "add", "biome", "--project", str(tmp_path / "grow"),
        )

        assert code == 0
        assert (tmp_path / "grow" / "biome.json").exists()

    async def test_add_outside_project_returns_1(self, template_root, tmp_path):
        code = await _invoke("--template-root", str(template_root), "add", "biome", "--project", str(tmp_path))
        assert code == 1
