"""Chat Orchestrator - Coordinates intent routing and handler dispatch.

This is the main entry point for the /api/smart flow. It:
1. Routes the prompt through the IntentRouter
2. Dispatches to the IntentHandler registered for that intent
3. Falls back to the chat handler when nothing else is registered
4. Returns the handler's ChatResponse unchanged for the API to render

The server keeps no conversation state; callers send their history each time.
"""
from typing import Dict, List, Optional

from allie.core.errors import ErrorKind
from allie.core.logging import logger
from allie.services.chat.handlers.base import IntentHandler, ChatContext, ChatResponse
from allie.services.chat.handlers.general import CHAT_FAILURE_MESSAGE
from allie.services.intent.router import IntentKind, IntentRouter


class HandlerRegistry:
    """Registry for intent handlers.

    Handlers are registered as instances so their providers can be injected.
    The orchestrator looks up handlers by intent kind.
    """

    def __init__(self):
        self._handlers: Dict[IntentKind, IntentHandler] = {}

    def register(self, handler: IntentHandler) -> None:
        """Register a handler instance for its declared intents."""
        for kind in handler.intents:
            if kind in self._handlers:
                logger.warning(
                    f"Intent '{kind.value}' already registered to {self._handlers[kind].__class__.__name__}, "
                    f"overwriting with {handler.__class__.__name__}"
                )
            self._handlers[kind] = handler
            logger.debug(f"Registered handler {handler.__class__.__name__} for intent '{kind.value}'")

    def get_handler(self, kind: IntentKind) -> Optional[IntentHandler]:
        """Get the handler for a given intent."""
        return self._handlers.get(kind)

    def list_handlers(self) -> Dict[str, str]:
        """List all registered handlers and their intents."""
        return {kind.value: handler.__class__.__name__ for kind, handler in self._handlers.items()}


class ChatOrchestrator:
    """Orchestrates the chat flow: intent routing -> handler dispatch -> response."""

    def __init__(self, router: IntentRouter, registry: HandlerRegistry):
        self.router = router
        self.registry = registry

    def chat(
        self,
        message: str,
        history: Optional[List[Dict[str, str]]] = None,
        personality: Optional[str] = None,
    ) -> ChatResponse:
        """
        Handle one prompt.

        Args:
            message: The user's prompt
            history: Prior turns supplied by the caller, oldest first
            personality: Personality key for the chat fallback

        Returns:
            ChatResponse; ``ok`` is False only when no safe canned text exists
        """
        intent = self.router.route(message)
        logger.info(f"[Orchestrator] Intent: {intent.kind.value}")

        context = ChatContext(
            message=message,
            intent=intent,
            history=list(history or []),
            personality=personality,
        )

        handler = self.registry.get_handler(intent.kind) or self.registry.get_handler(IntentKind.CHAT)
        if handler is None:
            logger.error(f"[Orchestrator] No handler registered for '{intent.kind.value}'")
            return ChatResponse.failure(ErrorKind.INTERNAL, CHAT_FAILURE_MESSAGE, intent=intent.kind)

        logger.info(f"[Orchestrator] Dispatching to handler: {handler.__class__.__name__}")
        try:
            return handler.handle(context)
        except Exception as e:
            logger.error(f"[Orchestrator] Handler {handler.__class__.__name__} failed: {e}", exc_info=True)
            return ChatResponse.failure(ErrorKind.INTERNAL, CHAT_FAILURE_MESSAGE, intent=intent.kind)
