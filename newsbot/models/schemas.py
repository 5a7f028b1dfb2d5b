from enum import Enum

from pydantic import BaseModel, Field

SNIPPET_MAX_CHARS = 500


class CandidateItem(BaseModel):
    title: str
    url: str
    id: str
    snippet: str = Field(default="", max_length=SNIPPET_MAX_CHARS)

    @property
    def marker_key(self) -> str:
        return f"posted_news:{self.id}"

    @property
    def relevance_text(self) -> str:
        return f"{self.title}\n{self.snippet}"


class Relevance(str, Enum):
    RELEVANT = "relevant"
    NOT_RELEVANT = "not_relevant"
    UNAVAILABLE = "unavailable"


class RelevanceVerdict(BaseModel):
    outcome: Relevance
    # bullet summary when relevant, failure reason when unavailable
    text: str = ""
