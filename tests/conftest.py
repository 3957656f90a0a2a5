"""Shared fixtures: trending / page HTML samples and a scripted fetcher."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Union

import pytest


TRENDING_HTML = """
<html>
  <body>
    <div class="Box">
      <article class="Box-row">
        <h2 class="h3 lh-condensed">
          <a href="/mock-author/mock-repo">
            <span class="text-normal">mock-author /</span> mock-repo
          </a>
        </h2>
        <p class="col-9 color-fg-muted my-1 pr-4">
          A mock    repository
          for testing
        </p>
        <div class="f6 color-fg-muted mt-2">
          <span class="d-inline-block ml-0 mr-3">
            <span class="repo-language-color" style="background-color:#f1e05a;"></span>
            <span itemprop="programmingLanguage">JavaScript</span>
          </span>
          <a class="Link--muted d-inline-block mr-3" href="/mock-author/mock-repo/stargazers">
            <svg class="octicon octicon-star"><path d="M8 .25"></path></svg>
            1.2k
          </a>
          <a class="Link--muted d-inline-block mr-3" href="/mock-author/mock-repo/forks">
            <svg class="octicon octicon-repo-forked"><path d="M5 5.372"></path></svg>
            300
          </a>
          <span class="d-inline-block mr-3">
            Built by
            <img class="avatar mb-1" src="https://avatars.example.com/u/1" alt="@mock-author">
          </span>
          <span class="d-inline-block float-sm-right">100 stars today</span>
        </div>
      </article>
      <article class="Box-row">
        <h2 class="h3 lh-condensed"><span>sponsored slot</span></h2>
        <p>Entry without a repository link</p>
      </article>
      <article class="Box-row">
        <h2 class="h3 lh-condensed"><a href="/octo/tool">octo / tool</a></h2>
        <div class="f6">
          <a href="/octo/tool/stargazers">1,234</a>
          <span class="d-inline-block float-sm-right">1,001 stars this week</span>
        </div>
      </article>
    </div>
  </body>
</html>
"""


PAGE_HTML = """
<!DOCTYPE html>
<html lang="en">
  <head>
    <title>  Understanding   Async Python </title>
    <meta name="description" content="A deep dive into asyncio.">
    <meta property="og:description" content="OG description">
    <meta name="author" content="Jane Doe">
    <meta property="og:site_name" content="Example Blog">
    <meta property="og:type" content="article">
    <meta property="og:image" content="https://example.com/cover.png">
    <meta name="keywords" content="python, asyncio, , concurrency ">
    <meta property="article:published_time" content="2024-01-15T10:00:00Z">
    <meta property="article:modified_time" content="not-a-date">
    <link rel="icon" href="/favicon.ico">
  </head>
  <body>
    <header><p>Site navigation that is long enough to pass the paragraph filter.</p></header>
    <article>
      <h1>Understanding Async Python</h1>
      <p>Event loops schedule coroutines.</p>
      <section><p>Tasks wrap coroutines.</p></section>
      <div class="tags"><a href="/t/python">python</a><a href="/t/async">async</a></div>
    </article>
  </body>
</html>
"""


class FakeFetcher:
    """按 URL 返回预设 HTML 或抛出预设异常，并记录调用"""

    def __init__(
        self,
        pages: Optional[Dict[str, Union[str, Exception]]] = None,
        default: Optional[Union[str, Exception]] = None,
        delay: float = 0.0,
    ):
        self.pages = pages or {}
        self.default = default
        self.delay = delay
        self.calls: List[str] = []
        self.timeouts: List[Optional[int]] = []
        self.closed = False

    async def fetch_text(self, url: str, timeout_ms: Optional[int] = None, headers=None) -> str:
        self.calls.append(url)
        self.timeouts.append(timeout_ms)
        if self.delay:
            await asyncio.sleep(self.delay)
        result = self.pages.get(url, self.default)
        if result is None:
            raise AssertionError(f"unexpected url: {url}")
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def trending_html() -> str:
    return TRENDING_HTML


@pytest.fixture
def page_html() -> str:
    return PAGE_HTML


@pytest.fixture
def fake_fetcher_cls():
    return FakeFetcher
