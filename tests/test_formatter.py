"""
Tests for output rendering and file persistence
"""
from datetime import datetime, timezone
import json

import pytest

from models import OutputFormat, PageMetadata, Repository
from render import format_metadata, format_number, format_repositories, trending_title, truncate
from storage import save_to_file
from utils import OutputError


@pytest.fixture
def repositories():
    plain = Repository(
        rank=1,
        owner="octo",
        name="demo",
        url="https://github.com/octo/demo",
        description="A [bold] demo " + "d" * 80,
        language="Python",
        star_count=15300,
        fork_count=999,
        stars_gained=100,
    )
    enriched = Repository(
        rank=3,
        owner="acme",
        name="tool",
        url="https://github.com/acme/tool",
        summary="A tool.",
        key_features=["fast"],
        use_cases=["ops"],
    )
    return [plain, enriched]


@pytest.fixture
def metadata():
    return PageMetadata(
        url="https://example.com/post",
        title="Async Python",
        description="About asyncio",
        author="Jane",
        keywords=["python", "asyncio"],
        published_at=datetime(2024, 1, 15, 10, tzinfo=timezone.utc),
        content_preview="full body text",
        summary="Summary here",
        key_points=["one", "two"],
        category=["Tutorial"],
        reading_time_minutes=5,
        icon="https://example.com/favicon.ico",
    )


def test_format_number_and_truncate():
    assert format_number(999) == "999"
    assert format_number(1000) == "1.0k"
    assert format_number(15300) == "15.3k"
    assert format_number(None) == "0"
    assert truncate("short", 10) == "short"
    assert truncate("abcdefghijkl", 10) == "abcdefg..."


def test_trending_title():
    assert trending_title("daily") == "GitHub Trending Repositories - Today"
    assert trending_title("weekly", "rust") == "GitHub Trending Repositories (rust) - This Week"
    assert trending_title("monthly") == "GitHub Trending Repositories - This Month"


class TestRepositories:
    """仓库列表渲染"""

    def test_json_omits_absent_fields(self, repositories):
        data = json.loads(format_repositories(repositories, OutputFormat.JSON))

        assert data[0]["owner"] == "octo"
        assert data[0]["stars_gained"] == 100
        assert "summary" not in data[0]
        assert data[1]["key_features"] == ["fast"]

    def test_json_empty_list(self):
        assert json.loads(format_repositories([], "json")) == []

    def test_table_without_color(self, repositories):
        output = format_repositories(repositories, "table", color_enabled=False, language="python")

        assert "\x1b[" not in output
        assert "GitHub Trending Repositories (python) - Today" in output
        assert "octo/demo" in output
        assert "15.3k" in output
        assert "+100" in output
        assert "[bold]" in output  # 描述按原文显示，不解析为样式

    def test_table_with_color_emits_ansi(self, repositories):
        assert "\x1b[" in format_repositories(repositories, "table", color_enabled=True)

    def test_markdown(self, repositories):
        output = format_repositories(repositories, "markdown", period="weekly")

        assert output.startswith("# GitHub Trending Repositories - This Week")
        assert "## 1. [octo/demo](https://github.com/octo/demo)" in output
        assert "- **Stars:** 15.3k (New: +100)" in output
        assert "- **Language:** Not Specified" in output
        assert "### AI Analysis Summary\n\nA tool." in output
        assert "### Key Features\n\n- fast" in output
        assert "### Use Cases\n\n- ops" in output


class TestMetadata:
    """网页元数据渲染"""

    def test_json_excludes_content_preview(self, metadata):
        data = json.loads(format_metadata(metadata, "json"))

        assert "content_preview" not in data
        assert data["published_at"].startswith("2024-01-15T10:00:00")
        assert data["category"] == ["Tutorial"]
        assert "image" not in data

    def test_table(self, metadata):
        output = format_metadata(metadata, "table", color_enabled=False)

        assert "Async Python" in output
        assert "2024-01-15" in output
        assert "5 minutes" in output
        assert "1. one" in output

    def test_markdown(self, metadata):
        output = format_metadata(metadata, OutputFormat.MARKDOWN)

        assert "- **Title:** Async Python" in output
        assert "- **Published Date:** 2024-01-15" in output
        assert "## Keywords\n\npython, asyncio" in output
        assert "### Summary\n\nSummary here" in output
        assert "**Category:** Tutorial" in output
        assert "**Estimated Reading Time:** About 5 minutes" in output
        assert "1. one\n2. two" in output
        assert "- **Icon:** https://example.com/favicon.ico" in output

    def test_markdown_minimal(self):
        output = format_metadata(PageMetadata(url="https://a.io"), "markdown")

        assert "- **Title:** No Title" in output
        assert "## AI Analysis" not in output
        assert "## Images" not in output


class TestSaveToFile:
    """文件保存"""

    def test_extension_added_and_parents_created(self, tmp_path):
        path = save_to_file("# hi", tmp_path / "reports" / "daily", "markdown")

        assert path == tmp_path / "reports" / "daily.md"
        assert path.read_text(encoding="utf-8") == "# hi"

    def test_existing_extension_kept(self, tmp_path):
        path = save_to_file("{}", tmp_path / "out.data", OutputFormat.JSON)
        assert path.name == "out.data"

    @pytest.mark.parametrize("fmt, suffix", [("json", ".json"), ("table", ".txt")])
    def test_extensions(self, tmp_path, fmt, suffix):
        assert save_to_file("x", tmp_path / "result", fmt).suffix == suffix

    def test_write_failure_raises_output_error(self, tmp_path):
        blocker = tmp_path / "file.txt"
        blocker.write_text("not a directory")

        with pytest.raises(OutputError, match="Failed to save file"):
            save_to_file("x", blocker / "out.json", "json")
