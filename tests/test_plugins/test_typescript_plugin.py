"""Tests for the built-in TypeScript plugin."""

from __future__ import annotations

import pytest

from precast.config import ProjectConfig
from precast.plugins import Hook, PluginContext, create_typescript_plugin


pytestmark = pytest.mark.unit


@pytest.fixture
def ts_bundles(make_bundle):
    make_bundle("features/typescript/base", {"tsconfig.json.hbs": '{"name": "{{ name }}"}\n'})
    make_bundle("features/typescript/react", {"src/vite-env.d.ts": "/// <reference types=\"vite/client\" />\n"})
    make_bundle("features/typescript/vue", {"src/shims-vue.d.ts": "declare module '*.vue';\n"})


def _context(config, engine, logger, root):
    return PluginContext(config=config, project_path=root, template_engine=engine, logger=logger)


class TestTypescriptPlugin:
    def test_capabilities(self):
        plugin = create_typescript_plugin()
        assert plugin.name == "typescript"
        assert Hook.GENERATE in plugin.capabilities
        assert Hook.BEFORE_INSTALL not in plugin.capabilities

    def test_fresh_instances(self):
        assert create_typescript_plugin() is not create_typescript_plugin()

    def test_angular_requires_typescript(self):
        plugin = create_typescript_plugin()
        result = plugin.validate_config(ProjectConfig(name="ng", framework="angular", typescript=False))
        assert result.valid is False
        assert result.errors == ["Angular projects require TypeScript"]

    def test_other_frameworks_valid_without_typescript(self):
        plugin = create_typescript_plugin()
        assert plugin.validate_config(ProjectConfig(name="x", typescript=False)).valid

    def test_angular_forced_to_typescript(self):
        plugin = create_typescript_plugin()
        config = ProjectConfig(name="ng", framework="angular", typescript=False, language="javascript")
        result = plugin.transform_config(config)
        assert result.typescript is True
        assert result.language == "typescript"
        assert config.typescript is False

    async def test_generate_react(self, ts_bundles, engine, logger, dest_dir):
        plugin = create_typescript_plugin()
        config = ProjectConfig(name="ts-app", framework="react")

        await plugin.generate(_context(config, engine, logger, dest_dir))

        assert (dest_dir / "tsconfig.json").read_text(encoding="utf-8") == '{"name": "ts-app"}\n'
        assert (dest_dir / "src" / "vite-env.d.ts").exists()
        assert not (dest_dir / "src" / "shims-vue.d.ts").exists()

    async def test_generate_vue(self, ts_bundles, engine, logger, dest_dir):
        plugin = create_typescript_plugin()
        config = ProjectConfig(name="ts-app", framework="vue")

        await plugin.generate(_context(config, engine, logger, dest_dir))

        assert (dest_dir / "src" / "shims-vue.d.ts").exists()
        assert not (dest_dir / "src" / "vite-env.d.ts").exists()

    async def test_generate_skipped_for_javascript(self, ts_bundles, engine, logger, dest_dir):
        plugin = create_typescript_plugin()
        config = ProjectConfig(name="js-app", typescript=False)

        await plugin.generate(_context(config, engine, logger, dest_dir))

        assert not dest_dir.exists()

    async def test_post_generate_logs(self, engine, logger, log_text, dest_dir):
        plugin = create_typescript_plugin()
        await plugin.post_generate(_context(ProjectConfig(name="a"), engine, logger, dest_dir))
        assert "TypeScript configuration added successfully" in log_text()
