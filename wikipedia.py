from __future__ import annotations

from dataclasses import dataclass
import re
import requests


WIKI_RANDOM_SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/random/summary"


@dataclass
class Article:
    title: str
    url: str
    words: list[str]

    @property
    def word_count(self) -> int:
        return len(self.words)


def _clean_text(text: str) -> str:
    text = re.sub(r"\[\d+\]", "", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text


def _is_ascii(text: str) -> bool:
    try:
        text.encode("ascii")
        return True
    except UnicodeEncodeError:
        return False


def fetch_random_article(min_words: int = 60, tries: int = 5, timeout: float = 8) -> Article:
    """Fetch random summaries until one has at least ``min_words`` ASCII words.

    Returns the longest usable summary seen when none is long enough, or an
    article with no words when every attempt was empty or non-ASCII.
    Network and HTTP errors propagate as ``requests.RequestException``.
    """
    best: Article | None = None
    for _ in range(tries):
        response = requests.get(
            WIKI_RANDOM_SUMMARY_URL,
            timeout=timeout,
            allow_redirects=True,
            headers={
                "User-Agent": "tigertype/0.1 (terminal typing trainer; python requests)",
                "Accept": "application/json",
            },
        )
        response.raise_for_status()
        data = response.json()
        text = _clean_text(data.get("extract") or "")
        if not text or not _is_ascii(text):
            continue

        article = Article(
            title=data.get("title") or "Unknown Title",
            url=(
                data.get("content_urls", {})
                .get("desktop", {})
                .get("page", "https://en.wikipedia.org")
            ),
            words=text.split(),
        )
        if article.word_count >= min_words:
            return article
        if best is None or article.word_count > best.word_count:
            best = article

    if best is None:
        return Article(title="Wikipedia", url="https://en.wikipedia.org", words=[])
    return best
