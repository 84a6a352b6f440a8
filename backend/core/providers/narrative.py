"""Narrative summaries of a daily risk index."""
from __future__ import annotations

import logging

from backend.core.abstractions import DailyRiskIndex, RiskLevel
from backend.core.exceptions import NarrativeError
from backend.core.providers.llm import ChatCompletionClient, LLMError

logger = logging.getLogger(__name__)

ADVICE = {
    RiskLevel.SEVERE: "Use repellents, avoid outdoor exposure in early morning and evening, and eliminate standing water.",
    RiskLevel.VERY_HIGH: "Use repellents outdoors, cover up at dusk and empty any containers holding water.",
    RiskLevel.HIGH: "Limit evening exposure and ensure window screens are intact.",
    RiskLevel.MEDIUM: "Stay alert and monitor conditions, especially after rain.",
    RiskLevel.LOW: "Risk is minimal, but stay aware during dusk and dawn.",
}

SYSTEM_PROMPT = (
    "You are an AI chatbot that specializes in weather analysis and the "
    "Mosquito Activity Index (MAI). You act as both a weather expert and a "
    "public health advisor. Communicate clearly and professionally in a "
    "friendly, reassuring tone suitable for a customer service chat."
)


def build_prompt(region_name: str, index: DailyRiskIndex) -> str:
    lines = [f"Region: {region_name}", "", "MAI risk levels for the coming days:"]
    for number, level in enumerate(index.values(), start=1):
        lines.append(f"- Day {number}: {level.label} (advice: {ADVICE[level]})")
    lines += [
        "",
        "Write a day-by-day MAI forecast for this region using Markdown.",
        "- Refer to days as Day 1, Day 2 and so on, never by calendar date.",
        "- For each day give the **MAI risk level** in bold and a short explanation.",
        "- Include the health advice that matches each risk level.",
        "- Do not use tables. Use '-' for bullet points and '#' headers only if necessary.",
        "- Do not change the risk levels given above.",
    ]
    return "\n".join(lines)


class LLMNarrativeGenerator:
    def __init__(self, client: ChatCompletionClient) -> None:
        self.client = client

    def summarize(self, region_name: str, index: DailyRiskIndex) -> str:
        try:
            summary = self.client.complete(SYSTEM_PROMPT, build_prompt(region_name, index))
        except LLMError as exc:
            logger.warning("Narrative generation failed for %s: %s", region_name, exc)
            raise NarrativeError("could not generate the MAI summary") from exc
        if not summary:
            raise NarrativeError("language model returned an empty summary")
        return summary


__all__ = ["ADVICE", "LLMNarrativeGenerator", "build_prompt"]
