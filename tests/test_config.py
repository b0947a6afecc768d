from __future__ import annotations

from zoneinfo import ZoneInfo

import pytest

from livesports_feed.config import (
    DEFAULT_FALLBACK_URL,
    DEFAULT_PRIMARY_URL,
    AppConfig,
    load_config,
)


class TestDefaults:

    def test_defaults(self):
        config = AppConfig()
        assert config.feed.primary_url == DEFAULT_PRIMARY_URL
        assert config.feed.fallback_url == DEFAULT_FALLBACK_URL
        assert tuple(config.feed.sections) == ("today",)
        assert config.refresh.status_interval == 60
        assert config.refresh.feed_interval == 300
        assert config.featured_limit == 10
        assert config.related_limit == 12
        assert config.tzinfo == ZoneInfo("UTC")


class TestLoadConfig:

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "\n".join(
                [
                    "feed:",
                    "  primary_url: https://primary.example/",
                    "  fallback_url: https://fallback.example/feed.json",
                    "  sections: [yesterday, today, upcoming]",
                    "  timeout: 5",
                    "refresh:",
                    "  status_interval: 30",
                    "  feed_interval: 120",
                    "timezone: Europe/Berlin",
                    "featured_limit: 6",
                ]
            ),
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.feed.primary_url == "https://primary.example/"
        assert config.feed.fallback_url == "https://fallback.example/feed.json"
        assert config.feed.sections == ("yesterday", "today", "upcoming")
        assert config.feed.timeout == 5.0
        assert config.refresh.status_interval == 30
        assert config.refresh.feed_interval == 120
        assert config.tzinfo == ZoneInfo("Europe/Berlin")
        assert config.featured_limit == 6
        assert config.related_limit == 12

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == AppConfig()

    def test_invalid_numbers_fall_back(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "refresh:\n  status_interval: soon\n  feed_interval: -5\nfeatured_limit: lots\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.refresh.status_interval == 60
        assert config.refresh.feed_interval == 300
        assert config.featured_limit == 10

    def test_fallback_can_be_disabled(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("feed:\n  fallback_url: null\n", encoding="utf-8")
        assert load_config(path).feed.fallback_url is None

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_unknown_timezone(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("timezone: Mars/Olympus_Mons\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Unknown timezone"):
            load_config(path)
