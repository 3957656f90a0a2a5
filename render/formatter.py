"""
Output Formatter
将仓库列表 / 网页元数据渲染为 json、终端表格或 Markdown 文本
"""
from io import StringIO
from typing import List, Optional, Union
import json
import logging

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from models import OutputFormat, PageMetadata, Repository, TrendPeriod


logger = logging.getLogger(__name__)

TABLE_WIDTH = 160
DESCRIPTION_WIDTH = 60
METADATA_DESCRIPTION_WIDTH = 100

PERIOD_LABELS = {
    TrendPeriod.DAILY: "Today",
    TrendPeriod.WEEKLY: "This Week",
    TrendPeriod.MONTHLY: "This Month",
}


def format_number(value: Optional[int]) -> str:
    """1000 及以上显示为 1.2k"""
    value = value or 0
    if value >= 1000:
        return f"{value / 1000:.1f}k"
    return str(value)


def truncate(text: str, max_length: int) -> str:
    """超长文本截断并以 ... 结尾"""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def period_label(period: Union[str, TrendPeriod]) -> str:
    try:
        return PERIOD_LABELS[TrendPeriod(period)]
    except ValueError:
        return str(period)


def trending_title(period: Union[str, TrendPeriod], language: Optional[str] = None) -> str:
    """GitHub Trending Repositories (python) - Today"""
    suffix = f" ({language})" if language else ""
    return f"GitHub Trending Repositories{suffix} - {period_label(period)}"


def _render_table(table: Table, color_enabled: bool) -> str:
    buffer = StringIO()
    console = Console(
        file=buffer,
        width=TABLE_WIDTH,
        force_terminal=color_enabled,
        color_system="standard" if color_enabled else None,
        no_color=not color_enabled,
    )
    console.print(table)
    return buffer.getvalue()


# ============ Repositories ============

def _repositories_json(repositories: List[Repository]) -> str:
    payload = [repo.model_dump(mode="json", exclude_none=True) for repo in repositories]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _repositories_table(
    repositories: List[Repository],
    color_enabled: bool,
    period: Union[str, TrendPeriod],
    language: Optional[str],
) -> str:
    table = Table(
        title=trending_title(period, language),
        show_header=True,
        box=box.SQUARE,
        title_style="bold yellow" if color_enabled else "",
        header_style="bold" if color_enabled else "",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Repository", style="blue")
    table.add_column("Description", max_width=DESCRIPTION_WIDTH)
    table.add_column("Language")
    table.add_column("Stars", justify="right")
    table.add_column("New Stars", justify="right", style="green")
    table.add_column("Forks", justify="right")

    for repo in repositories:
        table.add_row(
            str(repo.rank),
            Text(repo.full_name),
            Text(truncate(repo.description, DESCRIPTION_WIDTH)),
            Text(repo.language or "-"),
            format_number(repo.star_count),
            f"+{format_number(repo.stars_gained)}",
            format_number(repo.fork_count),
        )

    return _render_table(table, color_enabled)


def _repositories_markdown(
    repositories: List[Repository],
    period: Union[str, TrendPeriod],
    language: Optional[str],
) -> str:
    lines = [f"# {trending_title(period, language)}", ""]

    for repo in repositories:
        lines += [f"## {repo.rank}. [{repo.full_name}]({repo.url})", ""]
        if repo.description:
            lines += [repo.description, ""]

        lines += [
            f"- **Language:** {repo.language or 'Not Specified'}",
            f"- **Stars:** {format_number(repo.star_count)} (New: +{format_number(repo.stars_gained)})",
            f"- **Forks:** {format_number(repo.fork_count)}",
        ]

        if repo.summary:
            lines += ["", "### AI Analysis Summary", "", repo.summary]
        if repo.key_features:
            lines += ["", "### Key Features", ""] + [f"- {item}" for item in repo.key_features]
        if repo.use_cases:
            lines += ["", "### Use Cases", ""] + [f"- {item}" for item in repo.use_cases]

        lines += ["", "---", ""]

    return "\n".join(lines)


def format_repositories(
    repositories: List[Repository],
    fmt: Union[str, OutputFormat] = OutputFormat.TABLE,
    *,
    color_enabled: bool = True,
    period: Union[str, TrendPeriod] = TrendPeriod.DAILY,
    language: Optional[str] = None,
) -> str:
    """
    渲染仓库列表

    Args:
        repositories: 仓库列表 (可为空)
        fmt: 输出格式 json / table / markdown
        color_enabled: 表格是否带 ANSI 颜色
        period: 时间周期 (用于标题)
        language: 编程语言 (用于标题)

    Returns:
        渲染后的文本
    """
    fmt = OutputFormat(fmt)
    if fmt == OutputFormat.JSON:
        return _repositories_json(repositories)
    if fmt == OutputFormat.MARKDOWN:
        return _repositories_markdown(repositories, period, language)
    return _repositories_table(repositories, color_enabled, period, language)


# ============ Page metadata ============

def _date(value) -> str:
    return value.date().isoformat()


def _metadata_json(metadata: PageMetadata) -> str:
    payload = metadata.model_dump(mode="json", exclude_none=True, exclude={"content_preview"})
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _metadata_rows(metadata: PageMetadata) -> List[tuple]:
    rows = [
        ("URL", metadata.url),
        ("Title", metadata.title or "No Title"),
        ("Description", truncate(metadata.description or "No Description", METADATA_DESCRIPTION_WIDTH)),
    ]
    optional = [
        ("Author", metadata.author),
        ("Publisher", metadata.publisher),
        ("Language", metadata.language),
        ("Type", metadata.document_type),
        ("Published", _date(metadata.published_at) if metadata.published_at else None),
        ("Modified", _date(metadata.modified_at) if metadata.modified_at else None),
        ("Keywords", ", ".join(metadata.keywords) if metadata.keywords else None),
        ("Tags", ", ".join(metadata.tags) if metadata.tags else None),
        ("AI Summary", metadata.summary),
        ("Category", ", ".join(metadata.category) if metadata.category else None),
        (
            "Reading Time",
            f"{metadata.reading_time_minutes} minutes" if metadata.reading_time_minutes else None,
        ),
        (
            "Key Points",
            "\n".join(f"{i}. {point}" for i, point in enumerate(metadata.key_points, 1))
            if metadata.key_points else None,
        ),
    ]
    rows += [(label, value) for label, value in optional if value]
    return rows


def _metadata_table(metadata: PageMetadata, color_enabled: bool) -> str:
    table = Table(
        title="URL Metadata Analysis",
        show_header=False,
        box=box.SQUARE,
        title_style="bold yellow" if color_enabled else "",
    )
    table.add_column("Field", style="bold")
    table.add_column("Value")

    for label, value in _metadata_rows(metadata):
        table.add_row(label, Text(value))

    return _render_table(table, color_enabled)


def _metadata_markdown(metadata: PageMetadata) -> str:
    lines = [
        "# URL Metadata Analysis",
        "",
        "## Basic Information",
        "",
        f"- **URL:** {metadata.url}",
        f"- **Title:** {metadata.title or 'No Title'}",
        f"- **Description:** {metadata.description or 'No Description'}",
    ]
    if metadata.author:
        lines.append(f"- **Author:** {metadata.author}")
    if metadata.publisher:
        lines.append(f"- **Publisher:** {metadata.publisher}")
    if metadata.language:
        lines.append(f"- **Language:** {metadata.language}")
    if metadata.document_type:
        lines.append(f"- **Type:** {metadata.document_type}")
    if metadata.published_at:
        lines.append(f"- **Published Date:** {_date(metadata.published_at)}")
    if metadata.modified_at:
        lines.append(f"- **Modified Date:** {_date(metadata.modified_at)}")

    if metadata.keywords:
        lines += ["", "## Keywords", "", ", ".join(metadata.keywords)]
    if metadata.tags:
        lines += ["", "## Tags", "", ", ".join(metadata.tags)]

    if metadata.summary or metadata.key_points:
        lines += ["", "## AI Analysis", ""]
        if metadata.summary:
            lines += ["### Summary", "", metadata.summary, ""]
        if metadata.category:
            lines += [f"**Category:** {', '.join(metadata.category)}", ""]
        if metadata.reading_time_minutes:
            lines += [f"**Estimated Reading Time:** About {metadata.reading_time_minutes} minutes", ""]
        if metadata.key_points:
            lines += ["### Key Points", ""]
            lines += [f"{i}. {point}" for i, point in enumerate(metadata.key_points, 1)]

    if metadata.image or metadata.icon:
        lines += ["", "## Images", ""]
        if metadata.image:
            lines.append(f"- **Main Image:** {metadata.image}")
        if metadata.icon:
            lines.append(f"- **Icon:** {metadata.icon}")

    return "\n".join(lines) + "\n"


def format_metadata(
    metadata: PageMetadata,
    fmt: Union[str, OutputFormat] = OutputFormat.TABLE,
    *,
    color_enabled: bool = True,
) -> str:
    """
    渲染网页元数据 (JSON 输出不含 content_preview)

    Args:
        metadata: 网页元数据
        fmt: 输出格式
        color_enabled: 表格是否带 ANSI 颜色

    Returns:
        渲染后的文本
    """
    fmt = OutputFormat(fmt)
    if fmt == OutputFormat.JSON:
        return _metadata_json(metadata)
    if fmt == OutputFormat.MARKDOWN:
        return _metadata_markdown(metadata)
    return _metadata_table(metadata, color_enabled)
