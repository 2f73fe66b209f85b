"""Turn a line of shell input into an AiAction via the LLM."""

import logging
from typing import Optional

from pydantic import ValidationError

from meow.models import AiAction
from meow.utils.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

INTENT_PROMPT = """You are an AI that converts natural language into command actions.
User input: "{text}"

Extract:
- intent (one of: search, open, read, summarize, delete)
- query (keywords to search for)
- file_type (optional)
- time_filter (optional, e.g. "today" or "yesterday")
- folder_hint (optional, e.g. "downloads", "pictures", "documents", "desktop")

Respond in JSON ONLY. Example:
{{
  "intent": "search",
  "query": "hostel fees",
  "file_type": "pdf",
  "time_filter": "yesterday",
  "folder_hint": "downloads"
}}"""


def interpret_command(
    text: str,
    provider: LLMProvider,
    model: str | None = None,
) -> Optional[AiAction]:
    """Ask the model for a structured command.

    Returns:
        The parsed AiAction, or None if the backend is unavailable or its
        answer does not fit the schema.
    """
    data = provider.generate_json(INTENT_PROMPT.format(text=text), model=model)
    if data is None:
        logger.info("Intent backend gave no JSON for %r", text)
        return None
    # Absent fields come back as "" or null; drop them so defaults apply
    cleaned = {k: v for k, v in data.items() if v is not None and v != ""}
    try:
        action = AiAction.model_validate(cleaned)
    except ValidationError as e:
        logger.info("Unusable intent %s: %s", data, e)
        return None
    action.intent = action.intent.strip().lower()
    return action
