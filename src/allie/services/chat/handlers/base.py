"""Base classes for chat intent handlers."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from allie.core.errors import ErrorKind
from allie.services.intent.router import Intent, IntentKind


@dataclass
class ChatContext:
    """Context passed to intent handlers."""
    message: str
    intent: Intent
    history: List[Dict[str, str]] = field(default_factory=list)
    personality: Optional[str] = None

    @property
    def kind(self) -> IntentKind:
        return self.intent.kind

    @property
    def params(self) -> Dict[str, Any]:
        return self.intent.params


@dataclass
class ChatResponse:
    """Outcome of a handler: either ``ok`` with an answer, or a failure of some ``error_kind``."""
    ok: bool
    answer: str = ""
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None
    intent: Optional[IntentKind] = None

    @classmethod
    def success(cls, answer: str, intent: Optional[IntentKind] = None) -> "ChatResponse":
        return cls(ok=True, answer=answer, intent=intent)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, intent: Optional[IntentKind] = None) -> "ChatResponse":
        return cls(ok=False, error_kind=kind, error=message, intent=intent)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON envelope returned by the API."""
        if self.ok:
            return {"result": self.answer}
        return {"error": self.error}


class IntentHandler(ABC):
    """Abstract base class for intent handlers.

    Each handler is responsible for processing one intent kind
    and returning a ChatResponse. Provider failures are turned into
    friendly text here rather than propagated.
    """

    intents: List[IntentKind] = []

    @abstractmethod
    def handle(self, context: ChatContext) -> ChatResponse:
        """
        Handle the intent and return a response.

        Args:
            context: ChatContext with message, intent, and caller history

        Returns:
            ChatResponse with the result
        """
        pass

    def can_handle(self, kind: IntentKind) -> bool:
        """Check if this handler can process the given intent."""
        return kind in self.intents

    def _success_response(self, context: ChatContext, answer: str) -> ChatResponse:
        return ChatResponse.success(answer, intent=context.kind)

    def _error_response(
        self,
        context: ChatContext,
        error_message: str,
        kind: ErrorKind = ErrorKind.INTERNAL,
    ) -> ChatResponse:
        return ChatResponse.failure(kind, error_message, intent=context.kind)
