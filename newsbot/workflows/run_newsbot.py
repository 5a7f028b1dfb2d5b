from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from newsbot.config.settings import Settings, get_settings
from newsbot.models.schemas import CandidateItem, Relevance
from newsbot.services.feed_ingest import fetch_feed, parse_feed
from newsbot.services.marker_store import MarkerStore
from newsbot.services.reddit_publisher import RedditPublisher, build_post_body
from newsbot.services.relevance import RelevanceFilter

logger = logging.getLogger(__name__)

MARKER_VALUE = "true"


@dataclass
class PipelineContext:
    """
    Everything a run touches outside this module.

    Tests swap in fakes with the same methods: relevance.evaluate(item),
    publisher.submit_post(title, body), markers.get/set/expiry_after.
    """
    settings: Settings
    fetch_feed: Callable[[str], str]
    relevance: RelevanceFilter
    publisher: RedditPublisher
    markers: MarkerStore
    parse_feed: Callable[[str], list[CandidateItem]] = parse_feed


@dataclass
class RunResult:
    items_parsed: int = 0
    already_marked: int = 0
    not_relevant: int = 0
    unavailable: int = 0
    published: int = 0
    post_urls: list[str] = field(default_factory=list)
    error: str | None = None


def build_default_context() -> PipelineContext:
    s = get_settings()
    return PipelineContext(
        settings=s,
        fetch_feed=fetch_feed,
        relevance=RelevanceFilter(),
        publisher=RedditPublisher(s),
        markers=MarkerStore(),
    )


def _mark(ctx: PipelineContext, item: CandidateItem) -> None:
    expires = ctx.markers.expiry_after(ctx.settings.marker_ttl_days)
    ctx.markers.set(item.marker_key, MARKER_VALUE, expires)


def publish_new_items(ctx: PipelineContext, items: list[CandidateItem], result: RunResult) -> None:
    """
    Walk items oldest-first and publish up to max_posts_per_run of them.

    Items already marked are skipped. Irrelevant items get a marker and do
    not count against the cap. An unavailable relevance check ends the run
    without a marker so the same item is retried next time.
    """
    cap = ctx.settings.max_posts_per_run

    for item in reversed(items):
        if result.published >= cap:
            logger.info("Reached limit of %d post(s) per run", cap)
            break

        if ctx.markers.get(item.marker_key):
            result.already_marked += 1
            continue

        logger.info("Processing: %s", item.title)
        verdict = ctx.relevance.evaluate(item)

        if verdict.outcome is Relevance.UNAVAILABLE:
            result.unavailable += 1
            logger.warning(
                "Relevance check unavailable (%s); leaving %s for the next run",
                verdict.text, item.id,
            )
            break

        if verdict.outcome is Relevance.NOT_RELEVANT:
            logger.info("Article not relevant to LLM security, skipping: %s", item.title)
            _mark(ctx, item)
            result.not_relevant += 1
            continue

        body = build_post_body(item.url, verdict.text)
        post_url = ctx.publisher.submit_post(item.title, body)
        _mark(ctx, item)

        result.published += 1
        result.post_urls.append(post_url)
        logger.info("Successfully posted: %s", item.title)


def run_pipeline(ctx: PipelineContext) -> RunResult:
    result = RunResult()
    logger.info("Fetching security news from %s", ctx.settings.feed_url)

    try:
        document = ctx.fetch_feed(ctx.settings.feed_url)
        items = ctx.parse_feed(document)
    except Exception as e:
        logger.exception("Error fetching news")
        result.error = f"fetch failed: {e}"
        return result

    result.items_parsed = len(items)

    try:
        publish_new_items(ctx, items, result)
    except Exception as e:
        logger.exception("Error publishing news")
        result.error = f"publish failed: {e}"
        return result

    if result.published == 0:
        logger.info("No new articles found or all already posted.")
    else:
        logger.info("Posted %d article(s) this run.", result.published)
    return result


def run_newsbot() -> RunResult:
    return run_pipeline(build_default_context())
