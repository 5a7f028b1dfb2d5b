"""
Shared fixtures: a throwaway SQLite marker store, fake collaborators for
the pipeline, and a small Reddit-style Atom document builder.
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine

from newsbot.config.settings import Settings
from newsbot.db.database import init_db
from newsbot.models.schemas import Relevance, RelevanceVerdict
from newsbot.services.marker_store import MarkerStore
from newsbot.workflows.run_newsbot import PipelineContext


FEED_HEADER = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:media="http://search.yahoo.com/mrss/">
<category term="netsec" label="r/netsec"/>
<updated>2026-10-19T09:00:00+00:00</updated>
<id>/r/netsec+cybersecurity+ArtificialIntelligence/.rss?limit=25</id>
<link rel="self" href="https://www.reddit.com/r/netsec+cybersecurity/.rss" type="application/atom+xml" />
<title>netsec+cybersecurity+ArtificialIntelligence</title>
"""


def atom_entry(entry_id: str, title: str, url: str | None = None, content: str | None = None) -> str:
    url = url or f"https://www.reddit.com/r/netsec/comments/{entry_id}/post/"
    parts = [
        "<entry>",
        '<author><name>/u/someone</name><uri>https://www.reddit.com/user/someone</uri></author>',
        '<category term="netsec" label="r/netsec"/>',
    ]
    if content is not None:
        parts.append(f'<content type="html">{content}</content>')
    parts += [
        f"<id>{entry_id}</id>",
        f'<link href="{url}" />',
        "<updated>2026-10-19T08:00:00+00:00</updated>",
        f"<title>{title}</title>",
        "</entry>",
    ]
    return "\n".join(parts)


def atom_feed(*entries: str) -> str:
    return FEED_HEADER + "\n".join(entries) + "\n</feed>"


@pytest.fixture
def settings():
    return Settings(
        openai_key="sk-test",
        reddit_client_id="cid",
        reddit_client_secret="csecret",
        reddit_username="bot",
        reddit_password="pw",
    )


class FakeClock:
    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 19, 12, 0, 0))


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(f"sqlite:///{tmp_path / 'markers.db'}", future=True)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def marker_store(engine, clock):
    return MarkerStore(engine, now=clock)


class FakeRelevance:
    """Scripted relevance service keyed by item id; unknown ids are relevant."""

    def __init__(self, verdicts: dict | None = None):
        self.verdicts = verdicts or {}
        self.calls: list[str] = []

    def evaluate(self, item):
        self.calls.append(item.id)
        outcome = self.verdicts.get(item.id, Relevance.RELEVANT)
        if outcome is Relevance.RELEVANT:
            return RelevanceVerdict(outcome=outcome, text=f"- summary of {item.title}")
        return RelevanceVerdict(outcome=outcome, text="service down" if outcome is Relevance.UNAVAILABLE else "")


class FakePublisher:
    def __init__(self, fail: bool = False):
        self.posts: list[tuple[str, str]] = []
        self.fail = fail

    def submit_post(self, title: str, body: str) -> str:
        if self.fail:
            raise RuntimeError("reddit is down")
        self.posts.append((title, body))
        return f"https://www.reddit.com/r/llmsecurity/comments/{len(self.posts)}/"


@pytest.fixture
def make_context(settings, marker_store):
    def _make(document: str, relevance=None, publisher=None, fetch=None) -> PipelineContext:
        return PipelineContext(
            settings=settings,
            fetch_feed=fetch or (lambda url: document),
            relevance=relevance or FakeRelevance(),
            publisher=publisher or FakePublisher(),
            markers=marker_store,
        )

    return _make
