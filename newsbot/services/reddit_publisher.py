from __future__ import annotations

import logging

import requests

from newsbot.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

TOKEN_URL = "https://www.reddit.com/api/v1/access_token"
SUBMIT_URL = "https://oauth.reddit.com/api/submit"

# Reddit rejects longer titles
MAX_TITLE_CHARS = 300

DISCLAIMER = (
    "*Disclaimer: This post was automated by an LLM Security Bot. "
    "Content sourced from Reddit security communities.*"
)


class RedditAPIError(RuntimeError):
    pass


# ---------------------------
# Post rendering
# ---------------------------

def build_post_body(url: str, summary: str) -> str:
    return "\n\n".join([
        f"[Link to Original Post]({url})",
        f"**AI Summary:**\n{summary}",
        "---",
    ]) + f"\n{DISCLAIMER}"


def fit_title(title: str) -> str:
    title = title.strip()
    if len(title) <= MAX_TITLE_CHARS:
        return title
    return title[: MAX_TITLE_CHARS - 3].rstrip() + "..."


# ---------------------------
# Sender
# ---------------------------

class RedditPublisher:
    def __init__(self, settings: Settings | None = None) -> None:
        self.s = settings or get_settings()
        self._token: str | None = None

    def _headers(self) -> dict:
        return {"User-Agent": self.s.user_agent}

    def _access_token(self) -> str:
        if self._token:
            return self._token
        if not self.s.reddit_configured:
            raise RedditAPIError("Reddit credentials are not configured")

        r = requests.post(
            TOKEN_URL,
            auth=(self.s.reddit_client_id, self.s.reddit_client_secret),
            data={
                "grant_type": "password",
                "username": self.s.reddit_username,
                "password": self.s.reddit_password,
            },
            headers=self._headers(),
            timeout=self.s.http_timeout_seconds,
        )
        r.raise_for_status()
        data = r.json()
        token = data.get("access_token")
        if not token:
            raise RedditAPIError(f"Reddit token request failed: {data.get('error', data)}")
        self._token = token
        return token

    def submit_post(self, title: str, body: str) -> str:
        """
        Create a self post in the configured subreddit. Returns the post URL.
        """
        headers = self._headers()
        headers["Authorization"] = f"bearer {self._access_token()}"

        r = requests.post(
            SUBMIT_URL,
            data={
                "sr": self.s.subreddit_name,
                "kind": "self",
                "title": fit_title(title),
                "text": body,
                "api_type": "json",
            },
            headers=headers,
            timeout=self.s.http_timeout_seconds,
        )
        if not r.ok:
            logger.error("Reddit error: %s", r.text[:500])
        r.raise_for_status()

        result = r.json().get("json", {})
        errors = result.get("errors") or []
        if errors:
            raise RedditAPIError(f"Reddit rejected submission: {errors}")

        return result.get("data", {}).get("url", "")
