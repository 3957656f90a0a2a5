"""
Tests for the GitHub trending page parser
"""
from scrapers import parse_trending_html


def test_parses_full_entry(trending_html):
    repos = parse_trending_html(trending_html)
    repo = repos[0]

    assert repo.rank == 1
    assert repo.owner == "mock-author"
    assert repo.name == "mock-repo"
    assert repo.full_name == "mock-author/mock-repo"
    assert repo.url == "https://github.com/mock-author/mock-repo"
    assert repo.description == "A mock repository for testing"
    assert repo.language == "JavaScript"
    assert repo.language_color == "#f1e05a"
    assert repo.star_count == 1200
    assert repo.fork_count == 300
    assert repo.stars_gained == 100
    assert repo.avatar_url == "https://avatars.example.com/u/1"


def test_invalid_entries_are_skipped_but_keep_rank_gaps(trending_html):
    repos = parse_trending_html(trending_html)

    assert [r.rank for r in repos] == [1, 3]
    assert repos[1].full_name == "octo/tool"


def test_missing_fields_fall_back_to_defaults(trending_html):
    repo = parse_trending_html(trending_html)[1]

    assert repo.description == ""
    assert repo.language == ""
    assert repo.language_color is None
    assert repo.avatar_url is None
    assert repo.fork_count == 0
    assert repo.star_count == 1234
    assert repo.stars_gained == 1001


def test_title_link_fallback_to_plain_h2():
    html = '<article class="Box-row"><h2><a href="/a/b">a / b</a></h2></article>'
    repos = parse_trending_html(html)
    assert repos[0].full_name == "a/b"


def test_color_prefix_is_stripped():
    html = """
    <article class="Box-row">
      <h2 class="h3"><a href="/a/b">b</a></h2>
      <span class="repo-language-color" style="color: #3572A5"></span>
    </article>
    """
    assert parse_trending_html(html)[0].language_color == "#3572A5"


def test_href_without_name_is_dropped():
    html = '<article class="Box-row"><h2 class="h3"><a href="/only-owner">x</a></h2></article>'
    assert parse_trending_html(html) == []


def test_arbitrary_input_never_raises():
    assert parse_trending_html("") == []
    assert parse_trending_html("<<<not html>>>") == []
    assert parse_trending_html("<article class='Box-row'></article>") == []
