"""Pydantic schemas."""
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class ConversationTurn(BaseModel):
    """One prior message supplied by the client."""
    role: Literal["user", "assistant", "system"]
    content: str


class SmartRequest(BaseModel):
    """Smart prompt request schema."""
    prompt: Optional[str] = None
    conversationHistory: List[ConversationTurn] = Field(default_factory=list)
    personality: Optional[str] = None
    mode: Optional[str] = None  # older clients send the personality as "mode"


class SmartResponse(BaseModel):
    result: str


class GenerateRequest(BaseModel):
    prompt: Optional[str] = None


class TranscriptionResponse(BaseModel):
    text: str


class ScheduleRequest(BaseModel):
    prompt: Optional[str] = None


class ScheduleDeleteRequest(BaseModel):
    prompt: Optional[str] = None
    id: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
