from dotenv import load_dotenv
from pydantic import BaseModel, Field
import os

load_dotenv()

DEFAULT_FEED_URL = "https://www.reddit.com/r/netsec+cybersecurity+ArtificialIntelligence/.rss?limit=25"


def _to_int(v: str | None, default: int) -> int:
    if v is None or not v.strip():
        return default
    return int(v.strip())


def _to_float(v: str | None, default: float) -> float:
    if v is None or not v.strip():
        return default
    return float(v.strip())


def _to_str(v: str | None, default: str = "") -> str:
    if v is None:
        return default
    return v.strip()


class Settings(BaseModel):
    feed_url: str = Field(default=DEFAULT_FEED_URL)
    user_agent: str = Field(default="python:llmsec-newsbot:0.1.0")
    http_timeout_seconds: int = Field(default=30, ge=1)

    openai_key: str = Field(default="")
    openai_url: str = Field(default="https://api.openai.com/v1/chat/completions")
    openai_model: str = Field(default="gpt-3.5-turbo")
    openai_max_tokens: int = Field(default=200, ge=1)
    openai_temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    subreddit_name: str = Field(default="llmsecurity")
    reddit_client_id: str = Field(default="")
    reddit_client_secret: str = Field(default="")
    reddit_username: str = Field(default="")
    reddit_password: str = Field(default="")

    max_posts_per_run: int = Field(default=1, ge=1)
    marker_ttl_days: int = Field(default=30, ge=1)
    schedule_interval_hours: int = Field(default=3, ge=1)

    database_url: str = Field(default="sqlite:///data/newsbot.db")
    lock_path: str = Field(default="data/run.lock")
    lock_timeout_seconds: int = Field(default=60 * 60)

    log_level: str = Field(default="INFO")
    log_file: str = Field(default="logs/run.log")

    @property
    def reddit_configured(self) -> bool:
        return all([
            self.reddit_client_id,
            self.reddit_client_secret,
            self.reddit_username,
            self.reddit_password,
        ])


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is not None:
        return _settings

    _settings = Settings(
        feed_url=_to_str(os.getenv("FEED_URL"), DEFAULT_FEED_URL),
        user_agent=_to_str(os.getenv("USER_AGENT"), "python:llmsec-newsbot:0.1.0"),
        http_timeout_seconds=_to_int(os.getenv("HTTP_TIMEOUT_SECONDS"), 30),

        openai_key=_to_str(os.getenv("OPENAI_KEY") or os.getenv("OPENAI_API_KEY")),
        openai_url=_to_str(os.getenv("OPENAI_URL"), "https://api.openai.com/v1/chat/completions"),
        openai_model=_to_str(os.getenv("OPENAI_MODEL"), "gpt-3.5-turbo"),
        openai_max_tokens=_to_int(os.getenv("OPENAI_MAX_TOKENS"), 200),
        openai_temperature=_to_float(os.getenv("OPENAI_TEMPERATURE"), 0.3),

        subreddit_name=_to_str(os.getenv("SUBREDDIT_NAME"), "llmsecurity"),
        reddit_client_id=_to_str(os.getenv("REDDIT_CLIENT_ID")),
        reddit_client_secret=_to_str(os.getenv("REDDIT_CLIENT_SECRET")),
        reddit_username=_to_str(os.getenv("REDDIT_USERNAME")),
        reddit_password=_to_str(os.getenv("REDDIT_PASSWORD")),

        max_posts_per_run=_to_int(os.getenv("MAX_POSTS_PER_RUN"), 1),
        marker_ttl_days=_to_int(os.getenv("MARKER_TTL_DAYS"), 30),
        schedule_interval_hours=_to_int(os.getenv("SCHEDULE_INTERVAL_HOURS"), 3),

        database_url=os.getenv("DATABASE_URL", "sqlite:///data/newsbot.db"),
        lock_path=os.getenv("LOCK_PATH", "data/run.lock"),
        lock_timeout_seconds=_to_int(os.getenv("LOCK_TIMEOUT_SECONDS"), 60 * 60),

        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE", "logs/run.log"),
    )
    return _settings
