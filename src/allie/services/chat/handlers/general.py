"""General intent handler - free-form chat with the language model."""
from typing import Dict, List, Optional

from allie.core.errors import ErrorKind, LLMServiceError
from allie.core.logging import logger
from allie.services.chat.handlers.base import IntentHandler, ChatContext, ChatResponse
from allie.services.intent.router import IntentKind
from allie.services.llm import LLMService

DEFAULT_PERSONALITY = "friendly"

PERSONALITY_PROMPTS: Dict[str, str] = {
    "friendly": "You are Allie, a warm and kind assistant who speaks in a friendly, encouraging tone.",
    "sassy": (
        "You are Allie, a sarcastic, witty assistant who doesn't hold back "
        "and loves throwing playful shade."
    ),
    "motivational": (
        "You are Allie, a high-energy motivational coach who inspires users "
        "like a personal hype squad."
    ),
    "humorous": "You are Allie, a clever, funny assistant who always responds with a comedic twist.",
}

CHAT_FAILURE_MESSAGE = "Smart AI failed"


def personality_prompt(key: Optional[str]) -> str:
    """System prompt for a personality key; unknown or missing keys get the friendly one."""
    return PERSONALITY_PROMPTS.get((key or DEFAULT_PERSONALITY).lower(), PERSONALITY_PROMPTS[DEFAULT_PERSONALITY])


def build_messages(prompt: str, history: List[Dict[str, str]], personality: Optional[str]) -> List[Dict[str, str]]:
    """System prompt, then the caller's history in order, then the new prompt."""
    messages = [{"role": "system", "content": personality_prompt(personality)}]
    messages.extend({"role": turn["role"], "content": turn["content"]} for turn in history)
    messages.append({"role": "user", "content": prompt})
    return messages


class GeneralHandler(IntentHandler):
    """Handle chat intent - anything no rule recognised goes to the LLM."""

    intents = [IntentKind.CHAT]

    def __init__(self, llm: LLMService):
        self.llm = llm

    def handle(self, context: ChatContext) -> ChatResponse:
        messages = build_messages(context.message, context.history, context.personality)
        try:
            answer = self.llm.complete(messages)
        except LLMServiceError as e:
            logger.error(f"General handler error: {e}", exc_info=True)
            return self._error_response(context, CHAT_FAILURE_MESSAGE, kind=ErrorKind.UPSTREAM)
        return self._success_response(context, answer)
