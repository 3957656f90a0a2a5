"""
Tests for the command-line interface
"""
import json

import httpx
import pytest

import main as cli
from aggregator import TrendService
from storage import MemoryCache


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "config.json")


@pytest.fixture
def install_service(monkeypatch, fake_fetcher_cls):
    """用 FakeFetcher 替换真实网络抓取，返回 fetcher 以便断言"""

    def install(**fetcher_kwargs):
        fetcher = fake_fetcher_cls(**fetcher_kwargs)
        created = []

        def factory(settings, use_cache=True):
            created.append(use_cache)
            return TrendService(
                fetcher=fetcher,
                repo_cache=MemoryCache(enabled=use_cache),
                metadata_cache=MemoryCache(enabled=use_cache),
                trending_url=settings.github.trending_url,
            )

        monkeypatch.setattr(cli, "create_trend_service", factory)
        fetcher.created = created
        return fetcher

    return install


@pytest.mark.parametrize(
    "argv, expected",
    [
        ([], ["trending"]),
        (["-l", "python"], ["trending", "-l", "python"]),
        (["t", "-n", "5"], ["t", "-n", "5"]),
        (["url", "https://a.io"], ["url", "https://a.io"]),
        (["--help"], ["--help"]),
        (["config", "help"], ["config", "help"]),
    ],
)
def test_default_command_is_trending(argv, expected):
    assert cli._with_default_command(argv) == expected


class TestTrendingCommand:
    """trending 子命令"""

    def test_json_output(self, install_service, trending_html, config_path, capsys):
        fetcher = install_service(default=trending_html)

        code = cli.main(["-l", "javascript", "-s", "weekly", "-f", "json", "--config", config_path])

        assert code == 0
        assert fetcher.calls == ["https://github.com/trending/javascript?since=weekly"]
        assert fetcher.closed
        data = json.loads(capsys.readouterr().out)
        assert [item["name"] for item in data] == ["mock-repo", "tool"]

    def test_topics_use_text_matching_and_limit(self, install_service, trending_html, config_path, capsys):
        install_service(default=trending_html)

        code = cli.main(["trending", "-t", "javascript", "-n", "1", "-f", "json", "--config", config_path])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert [item["name"] for item in data] == ["mock-repo"]

    def test_markdown_to_file(self, install_service, trending_html, config_path, tmp_path):
        install_service(default=trending_html)
        target = tmp_path / "out" / "trending"

        code = cli.main(["t", "-f", "markdown", "-o", str(target), "--config", config_path])

        assert code == 0
        content = (tmp_path / "out" / "trending.md").read_text(encoding="utf-8")
        assert content.startswith("# GitHub Trending Repositories - Today")

    def test_no_cache_flag(self, install_service, trending_html, config_path):
        fetcher = install_service(default=trending_html)

        assert cli.main(["--no-cache", "-f", "json", "--config", config_path]) == 0
        assert fetcher.created == [False]

    @pytest.mark.parametrize(
        "args",
        [["-n", "0"], ["-n", "101"], ["-s", "yearly"], ["-f", "xml"], ["--summary-length", "huge"]],
    )
    def test_invalid_options_exit_1(self, install_service, config_path, args):
        fetcher = install_service(default="")

        assert cli.main(["trending", *args, "--config", config_path]) == 1
        assert fetcher.calls == []

    def test_fetch_failure_exits_1(self, install_service, config_path, capsys):
        install_service(default=httpx.ConnectError("offline"))

        assert cli.main(["trending", "--config", config_path]) == 1
        assert capsys.readouterr().out == ""

    def test_ai_without_key_exits_1(self, install_service, config_path):
        fetcher = install_service(default="")

        assert cli.main(["trending", "--ai", "--config", config_path]) == 1
        assert fetcher.calls == []


class TestUrlCommand:
    """url 子命令"""

    def test_json_output(self, install_service, page_html, config_path, capsys):
        fetcher = install_service(pages={"https://example.com/post": page_html})

        code = cli.main(["url", "https://example.com/post", "-f", "json", "-d", "deep", "--config", config_path])

        assert code == 0
        assert fetcher.calls == ["https://example.com/post"]
        data = json.loads(capsys.readouterr().out)
        assert data["title"] == "Understanding Async Python"
        assert data["tags"] == ["python", "async"]
        assert "content_preview" not in data

    def test_basic_depth_skips_images(self, install_service, page_html, config_path, capsys):
        install_service(pages={"https://example.com/post": page_html})

        assert cli.main(["url", "https://example.com/post", "-d", "basic", "-f", "json",
                         "--config", config_path]) == 0
        data = json.loads(capsys.readouterr().out)
        assert "image" not in data
        assert "icon" not in data

    def test_invalid_url_exits_1(self, install_service, config_path):
        fetcher = install_service(default="")

        assert cli.main(["url", "ftp://example.com", "--config", config_path]) == 1
        assert fetcher.calls == []

    def test_malformed_url_exits_1(self, install_service, config_path):
        fetcher = install_service(default="")

        assert cli.main(["url", "http://[::1", "--config", config_path]) == 1
        assert fetcher.calls == []

    def test_invalid_depth_exits_1(self, install_service, config_path):
        install_service(default="")
        assert cli.main(["url", "https://a.io", "-d", "max", "--config", config_path]) == 1


class TestConfigCommand:
    """config 子命令"""

    def test_set_then_get(self, config_path, capsys):
        assert cli.main(["config", "--config", config_path, "set", "ai.apiKey", "sk-abcdef"]) == 0
        assert cli.main(["config", "--config", config_path, "set", "github.default_limit", "10"]) == 0
        capsys.readouterr()

        assert cli.main(["config", "--config", config_path, "get", "ai.apiKey"]) == 0
        assert capsys.readouterr().out.strip() == 'ai.apiKey: "sk-a..."'

        assert cli.main(["config", "--config", config_path, "get", "github.default_limit"]) == 0
        assert capsys.readouterr().out.strip() == "github.default_limit: 10"

    def test_get_all_masks_key(self, config_path, capsys):
        cli.main(["config", "--config", config_path, "set", "ai.api_key", "sk-abcdef"])
        capsys.readouterr()

        assert cli.main(["config", "--config", config_path, "get"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["ai"]["api_key"] == "sk-a..."

    def test_unknown_key_exits_1(self, config_path):
        assert cli.main(["config", "--config", config_path, "set", "nope.key", "1"]) == 1

    def test_help(self, config_path):
        assert cli.main(["config", "--config", config_path, "help"]) == 0
