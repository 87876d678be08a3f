"""Tests for destination naming and the per-file conflict policy.

Covers:
- Template suffix stripping and render/copy marking
- Dotfile prefix un-mangling on the final path segment
- Collision detection across a bundle plan
- skip_if_exists / overwrite / default conflict handling
- Blank rendered output being dropped
"""

from __future__ import annotations

import pytest

from precast.scaffolder.errors import DestinationCollisionError, DestinationConflictError
from precast.scaffolder.materializer import (
    TemplateOptions,
    copy_file,
    plan_bundle,
    plan_destination,
    should_write,
    write_rendered,
)
from precast.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# plan_destination
# ---------------------------------------------------------------------------


class TestPlanDestination:
    @pytest.mark.parametrize(
        "source, destination, render",
        [
            ("package.json.hbs", "package.json", True),
            ("src/index.js.hbs", "src/index.js", True),
            ("logo.png", "logo.png", False),
            ("_gitignore", ".gitignore", False),
            ("_env.hbs", ".env", True),
            ("_name.ext.hbs", ".name.ext", True),
            ("config/_eslintrc.json", "config/.eslintrc.json", False),
            ("_github/workflows/ci.yml", "_github/workflows/ci.yml", False),
            ("a_b.hbs", "a_b", True),
        ],
    )
    def test_naming_rules(self, source, destination, render):
        plan = plan_destination(source)
        assert plan.source == source
        assert plan.destination == destination
        assert plan.render is render

    def test_suffix_stripped_once(self):
        assert plan_destination("notes.hbs.hbs").destination == "notes.hbs"

    def test_suffix_only_at_end(self):
        plan = plan_destination("layout.hbs.txt")
        assert plan.destination == "layout.hbs.txt"
        assert plan.render is False

    def test_only_leading_prefix_replaced(self):
        assert plan_destination("__init__.py").destination == "._init__.py"

    def test_custom_suffix_and_prefix(self):
        plan = plan_destination("dot-env.j2", suffix=".j2", dotfile_prefix="d")
        assert plan.destination == ".ot-env"
        assert plan.render is True


# ---------------------------------------------------------------------------
# plan_bundle
# ---------------------------------------------------------------------------


class TestPlanBundle:
    def test_keeps_order(self):
        plans = plan_bundle(["b.txt", "a.txt.hbs", "_c"])
        assert [p.destination for p in plans] == ["b.txt", "a.txt", ".c"]

    def test_template_and_plain_collision(self):
        with pytest.raises(DestinationCollisionError) as exc_info:
            plan_bundle(["a_b", "a_b.hbs"])
        assert exc_info.value.destination == "a_b"
        assert exc_info.value.sources == ["a_b", "a_b.hbs"]

    def test_prefix_collision(self):
        with pytest.raises(DestinationCollisionError):
            plan_bundle([".env", "_env.hbs"])


# ---------------------------------------------------------------------------
# Conflict policy
# ---------------------------------------------------------------------------


class TestShouldWrite:
    async def test_missing_destination(self, tmp_path, logger):
        assert await should_write(tmp_path / "new.txt", TemplateOptions(), logger) is True

    async def test_existing_default_raises(self, tmp_path, logger):
        dest = tmp_path / "exists.txt"
        dest.write_text("keep", encoding="utf-8")
        with pytest.raises(DestinationConflictError) as exc_info:
            await should_write(dest, TemplateOptions(), logger)
        assert exc_info.value.path == dest

    async def test_existing_skip(self, tmp_path, logger, log_text):
        dest = tmp_path / "exists.txt"
        dest.write_text("keep", encoding="utf-8")
        assert await should_write(dest, TemplateOptions(skip_if_exists=True), logger) is False
        assert "Skipping existing file" in log_text()

    async def test_skip_wins_over_overwrite(self, tmp_path, logger):
        dest = tmp_path / "exists.txt"
        dest.write_text("keep", encoding="utf-8")
        options = TemplateOptions(skip_if_exists=True, overwrite=True)
        assert await should_write(dest, options, logger) is False

    async def test_existing_overwrite(self, tmp_path, logger):
        dest = tmp_path / "exists.txt"
        dest.write_text("replace", encoding="utf-8")
        assert await should_write(dest, TemplateOptions(overwrite=True), logger) is True


class TestWrites:
    async def test_render_creates_parents(self, tmp_path, template_root, logger):
        source = tmp_path / "hello.txt.hbs"
        source.write_text("Hello {{ name }}!", encoding="utf-8")
        dest = tmp_path / "deep" / "er" / "hello.txt"

        written = await write_rendered(
            TemplateRenderer(template_root), source, dest, {"name": "World"},
            TemplateOptions(), logger,
        )

        assert written == dest
        assert dest.read_text(encoding="utf-8") == "Hello World!"

    async def test_blank_render_not_written(self, tmp_path, template_root, logger, log_text):
        source = tmp_path / "maybe.txt.hbs"
        source.write_text("{% if enabled %}content{% endif %}\n", encoding="utf-8")
        dest = tmp_path / "maybe.txt"

        written = await write_rendered(
            TemplateRenderer(template_root), source, dest, {"enabled": False},
            TemplateOptions(), logger,
        )

        assert written is None
        assert not dest.exists()
        assert "Skipping empty file" in log_text()

    async def test_blank_render_written_when_not_skipping(self, tmp_path, template_root, logger):
        source = tmp_path / "empty.txt.hbs"
        source.write_text("", encoding="utf-8")
        dest = tmp_path / "empty.txt"

        await write_rendered(
            TemplateRenderer(template_root), source, dest, {},
            TemplateOptions(skip_empty=False), logger,
        )

        assert dest.exists()
        assert dest.read_text(encoding="utf-8") == ""

    async def test_copy_is_byte_exact(self, tmp_path, logger):
        payload = bytes(range(256)) + b"{{ not_rendered }}"
        source = tmp_path / "blob.bin"
        source.write_bytes(payload)
        dest = tmp_path / "out" / "blob.bin"

        written = await copy_file(source, dest, TemplateOptions(), logger)

        assert written == dest
        assert dest.read_bytes() == payload

    async def test_copy_conflict_leaves_file(self, tmp_path, logger):
        source = tmp_path / "new.txt"
        source.write_text("new", encoding="utf-8")
        dest = tmp_path / "old.txt"
        dest.write_text("old", encoding="utf-8")

        with pytest.raises(DestinationConflictError):
            await copy_file(source, dest, TemplateOptions(), logger)
        assert dest.read_text(encoding="utf-8") == "old"
