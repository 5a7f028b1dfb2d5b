from unittest.mock import MagicMock, patch

import pytest

from newsbot.config.settings import Settings
from newsbot.services.reddit_publisher import (
    DISCLAIMER,
    MAX_TITLE_CHARS,
    SUBMIT_URL,
    TOKEN_URL,
    RedditAPIError,
    RedditPublisher,
    build_post_body,
    fit_title,
)


def _resp(payload, ok=True):
    r = MagicMock(ok=ok, text=str(payload))
    r.json.return_value = payload
    return r


def test_post_body_layout():
    body = build_post_body("https://www.reddit.com/r/netsec/comments/abc/", "- point one\n- point two")
    assert body == (
        "[Link to Original Post](https://www.reddit.com/r/netsec/comments/abc/)\n\n"
        "**AI Summary:**\n- point one\n- point two\n\n"
        "---\n"
        "*Disclaimer: This post was automated by an LLM Security Bot. "
        "Content sourced from Reddit security communities.*"
    )
    assert body.endswith(DISCLAIMER)


def test_fit_title():
    assert fit_title("  short  ") == "short"
    long_title = "x" * 400
    assert len(fit_title(long_title)) == MAX_TITLE_CHARS
    assert fit_title(long_title).endswith("...")


def test_submit_post_fetches_token_then_submits(settings):
    token = _resp({"access_token": "tok", "token_type": "bearer"})
    submitted = _resp({"json": {"errors": [], "data": {"url": "https://www.reddit.com/r/llmsecurity/comments/x1/"}}})

    with patch("newsbot.services.reddit_publisher.requests.post", side_effect=[token, submitted]) as post:
        url = RedditPublisher(settings).submit_post("A title", "A body")

    assert url == "https://www.reddit.com/r/llmsecurity/comments/x1/"
    (token_call, submit_call) = post.call_args_list
    assert token_call.args[0] == TOKEN_URL
    assert token_call.kwargs["auth"] == ("cid", "csecret")
    assert token_call.kwargs["data"]["grant_type"] == "password"

    assert submit_call.args[0] == SUBMIT_URL
    assert submit_call.kwargs["headers"]["Authorization"] == "bearer tok"
    assert submit_call.kwargs["data"] == {
        "sr": "llmsecurity",
        "kind": "self",
        "title": "A title",
        "text": "A body",
        "api_type": "json",
    }


def test_token_is_reused(settings):
    ok = {"json": {"errors": [], "data": {"url": "u"}}}
    responses = [_resp({"access_token": "tok"}), _resp(ok), _resp(ok)]
    with patch("newsbot.services.reddit_publisher.requests.post", side_effect=responses) as post:
        pub = RedditPublisher(settings)
        pub.submit_post("one", "b")
        pub.submit_post("two", "b")
    assert post.call_count == 3


def test_reddit_errors_raise(settings):
    token = _resp({"access_token": "tok"})
    rejected = _resp({"json": {"errors": [["SUBREDDIT_NOEXIST", "that subreddit doesn't exist", "sr"]]}})
    with patch("newsbot.services.reddit_publisher.requests.post", side_effect=[token, rejected]):
        with pytest.raises(RedditAPIError):
            RedditPublisher(settings).submit_post("t", "b")


def test_bad_credentials_raise(settings):
    with patch("newsbot.services.reddit_publisher.requests.post", return_value=_resp({"error": "invalid_grant"})):
        with pytest.raises(RedditAPIError, match="invalid_grant"):
            RedditPublisher(settings).submit_post("t", "b")


def test_missing_credentials_raise_before_any_request():
    with patch("newsbot.services.reddit_publisher.requests.post") as post:
        with pytest.raises(RedditAPIError):
            RedditPublisher(Settings()).submit_post("t", "b")
    post.assert_not_called()
