"""Data model of a saved transcript."""

from pydantic import BaseModel, Field

from ..llm.models import ChatMessage


class Transcript(BaseModel):
    """JSON transcript document.

    Field order is the on-disk key order.
    """

    timestamp: str = Field(description="ISO-8601 UTC time the transcript was saved")
    model: str = Field(description="Model configured at save time")
    provider: str = Field(description="Provider configured at save time")
    messages: list[ChatMessage] = Field(default_factory=list)
