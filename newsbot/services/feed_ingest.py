from __future__ import annotations

import logging
import re

import requests

from newsbot.config.settings import get_settings
from newsbot.models.schemas import CandidateItem, SNIPPET_MAX_CHARS

logger = logging.getLogger(__name__)

ENTRY_MARKER = "<entry>"

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.DOTALL)
_LINK_RE = re.compile(r"<link[^>]*href=[\"']([^\"']+)[\"']")
_ID_RE = re.compile(r"<id[^>]*>(.*?)</id>", re.DOTALL)
_CONTENT_RE = re.compile(r"<content[^>]*>([\s\S]*?)</content>")
_TAG_RE = re.compile(r"<[^>]*>")

# order matters: &amp; must come after &lt;/&gt; so "&amp;lt;" decodes once
_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def decode_entities(text: str) -> str:
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def strip_tags(text: str) -> str:
    return _TAG_RE.sub("", text)


def clean_text(text: str) -> str:
    """
    Markup to plain text. Atom content arrives as escaped HTML, so tags
    only become visible after decoding; strip both before and after.
    """
    return strip_tags(decode_entities(strip_tags(text)))


def clean_title(text: str) -> str:
    # titles are plain text; escaped brackets are part of the headline
    return decode_entities(strip_tags(text)).strip()


def fetch_feed(url: str | None = None) -> str:
    s = get_settings()
    url = url or s.feed_url
    r = requests.get(
        url,
        headers={"User-Agent": s.user_agent},
        timeout=s.http_timeout_seconds,
    )
    r.raise_for_status()
    logger.info("Fetched %d characters of feed data", len(r.text))
    return r.text


def parse_entry(fragment: str) -> CandidateItem | None:
    title_m = _TITLE_RE.search(fragment)
    link_m = _LINK_RE.search(fragment)
    id_m = _ID_RE.search(fragment)
    if not (title_m and link_m and id_m):
        return None

    content_m = _CONTENT_RE.search(fragment)
    snippet = clean_text(content_m.group(1)) if content_m else ""

    return CandidateItem(
        title=clean_title(title_m.group(1)),
        url=link_m.group(1),
        id=id_m.group(1).strip(),
        snippet=snippet[:SNIPPET_MAX_CHARS],
    )


def parse_feed(document: str) -> list[CandidateItem]:
    """
    Split an Atom document on <entry> and pull out the fields we need.

    Returns items in feed order (newest first for Reddit). Entries without
    a title, link or id are dropped.
    """
    fragments = document.split(ENTRY_MARKER)[1:]
    logger.info("Found %d entries in feed", len(fragments))

    items: list[CandidateItem] = []
    dropped = 0
    for i, fragment in enumerate(fragments, start=1):
        item = parse_entry(fragment)
        if item is None:
            dropped += 1
            logger.debug("Failed to parse entry %d", i)
            continue
        logger.debug("Parsed entry %d: %s", i, item.title[:50])
        items.append(item)

    logger.info("Parsed %d valid news items (%d dropped)", len(items), dropped)
    return items


def ingest_feed(url: str | None = None) -> list[CandidateItem]:
    return parse_feed(fetch_feed(url))
