"""Chat service package.

The ChatOrchestrator coordinates:
1. Intent routing (via IntentRouter)
2. Handler dispatch (via HandlerRegistry)
3. Chat fallback for unrecognised prompts
"""
from allie.services.chat.orchestrator import ChatOrchestrator, HandlerRegistry
from allie.services.chat.handlers.base import IntentHandler, ChatContext, ChatResponse

__all__ = [
    'ChatOrchestrator',
    'HandlerRegistry',
    'IntentHandler',
    'ChatContext',
    'ChatResponse',
]
