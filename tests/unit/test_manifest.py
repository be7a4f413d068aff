"""Tests for tokensmith.toml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from tokensmith.core.errors import ConfigError
from tokensmith.core.manifest import (
    DEFAULT_BREAKPOINT_ORDER,
    default_manifest,
    find_manifest,
    load_manifest,
)


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "tokensmith.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestLoadManifest:
    def test_fixture_manifest(self, manifest_file: Path, preset_file: Path) -> None:
        manifest = load_manifest(manifest_file)

        assert manifest.project_root == manifest_file.parent.resolve()
        assert manifest.source.path == manifest.project_root / "config" / "tokens.json"
        assert manifest.source.path.exists()
        assert manifest.cache.backend == "file"
        assert manifest.cache.directory == manifest.project_root / ".tokensmith" / "cache"
        assert [bp.slug for bp in manifest.breakpoints] == ["md"]
        assert manifest.spacing[0].size == "0.5rem"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        manifest = load_manifest(_write(tmp_path, ""))

        assert manifest.source.path is None
        assert manifest.source.container == ("modules", "typographyPresets")
        assert manifest.cache.backend == "memory"
        assert manifest.cache.ttl == 86400
        assert manifest.output.annotate is False
        assert manifest.output.breakpoint_order == DEFAULT_BREAKPOINT_ORDER
        assert manifest.logging.directory is None

    def test_output_and_logging_sections(self, tmp_path: Path) -> None:
        manifest = load_manifest(
            _write(
                tmp_path,
                """
[output]
style_id = "site-presets"
annotate = true
breakpoint_order = ["base", "tablet", "desktop"]

[logging]
level = "debug"
directory = "logs"
""",
            )
        )
        assert manifest.output.style_id == "site-presets"
        assert manifest.output.annotate is True
        assert manifest.output.breakpoint_order == ["base", "tablet", "desktop"]
        assert manifest.logging.level == "DEBUG"
        assert manifest.logging.directory == manifest.project_root / "logs"
        assert manifest.settings_flags() == {"annotate": True, "preset_css": True}

    def test_container_forms(self, tmp_path: Path) -> None:
        dotted = load_manifest(_write(tmp_path, '[source]\ncontainer = "theme.presets"\n'))
        assert dotted.source.container == ("theme", "presets")

        listed = load_manifest(_write(tmp_path, '[source]\ncontainer = ["theme", "presets"]\n'))
        assert listed.source.container == ("theme", "presets")

    def test_redis_url_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("TOKENSMITH_REDIS_URL", raising=False)
        monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")
        manifest = load_manifest(_write(tmp_path, '[cache]\nbackend = "redis"\n'))
        assert manifest.cache.redis_url == "redis://cache:6379/1"


class TestManifestErrors:
    def test_invalid_toml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_manifest(_write(tmp_path, "[source\n"))

    def test_unknown_backend(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_manifest(_write(tmp_path, '[cache]\nbackend = "memcached"\n'))
        assert "cache.backend" in str(exc_info.value)

    @pytest.mark.parametrize("ttl", ["-1", '"soon"', "true"])
    def test_bad_ttl(self, tmp_path: Path, ttl: str) -> None:
        with pytest.raises(ConfigError, match="TTL"):
            load_manifest(_write(tmp_path, f"[cache]\nttl = {ttl}\n"))

    def test_breakpoint_without_slug(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="breakpoints\\[0\\]"):
            load_manifest(_write(tmp_path, '[[breakpoints]]\nvalue = "768px"\n'))

    def test_spacing_without_size(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="spacing"):
            load_manifest(_write(tmp_path, '[[spacing]]\nslug = "2"\n'))

    def test_bad_container(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Container"):
            load_manifest(_write(tmp_path, "[source]\ncontainer = 3\n"))

    @pytest.mark.parametrize(
        ("content", "key"),
        [
            ('source = "config/tokens.json"\n', "source"),
            ("cache = 3\n", "cache"),
            ("output = [1, 2]\n", "output"),
            ("logging = true\n", "logging"),
        ],
    )
    def test_section_must_be_a_table(self, tmp_path: Path, content: str, key: str) -> None:
        with pytest.raises(ConfigError, match="must be a table") as exc_info:
            load_manifest(_write(tmp_path, content))
        assert exc_info.value.context.key == key

    @pytest.mark.parametrize("content", ['breakpoints = "md"\n', "spacing = 4\n"])
    def test_entry_lists_must_be_arrays(self, tmp_path: Path, content: str) -> None:
        with pytest.raises(ConfigError, match="array of tables"):
            load_manifest(_write(tmp_path, content))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read manifest"):
            load_manifest(tmp_path / "tokensmith.toml")


class TestDiscovery:
    def test_find_walks_up(self, manifest_file: Path) -> None:
        nested = manifest_file.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_manifest(nested) == manifest_file.parent.resolve() / "tokensmith.toml"

    def test_default_manifest(self, tmp_path: Path) -> None:
        manifest = default_manifest(tmp_path)
        assert manifest.cache.directory == tmp_path / ".tokensmith" / "cache"
        assert manifest.source.path is None
