from __future__ import annotations

import logging

import requests

from newsbot.models.schemas import CandidateItem, Relevance, RelevanceVerdict
from newsbot.services.openai_client import OpenAIClient

logger = logging.getLogger(__name__)

NOT_RELEVANT_SENTINEL = "NOT_RELEVANT"

RELEVANCE_PROMPT = (
    "Analyze if this is SPECIFICALLY about LLM security, prompt injection, AI jailbreaking, "
    "or AI model security. Must be directly related to large language models or AI systems. "
    "If yes, summarize in 2-3 bullet points. If not directly LLM/AI security related, "
    f'respond ONLY with "{NOT_RELEVANT_SENTINEL}". Text: '
)


def build_prompt(item: CandidateItem) -> str:
    return RELEVANCE_PROMPT + item.relevance_text


class RelevanceFilter:
    def __init__(self, client: OpenAIClient | None = None) -> None:
        self.client = client or OpenAIClient()

    def evaluate(self, item: CandidateItem) -> RelevanceVerdict:
        if not self.client.configured:
            return RelevanceVerdict(outcome=Relevance.UNAVAILABLE, text="API key missing")

        try:
            reply = self.client.chat(build_prompt(item))
        except (requests.RequestException, ValueError) as e:
            logger.error("Relevance check failed for %s: %s", item.id, e)
            return RelevanceVerdict(outcome=Relevance.UNAVAILABLE, text=str(e))

        if NOT_RELEVANT_SENTINEL in reply:
            return RelevanceVerdict(outcome=Relevance.NOT_RELEVANT)

        return RelevanceVerdict(outcome=Relevance.RELEVANT, text=reply.strip())
