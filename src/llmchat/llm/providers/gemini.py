"""Google Gemini provider client.

Uses the official Google GenAI SDK for async chat completions.
Reference: https://github.com/googleapis/python-genai

Gemini can return an empty response when its safety filters trigger. That
is returned as an empty reply; the caller decides what to show.
"""

from typing import Any

from google import genai
from google.genai import types

from ..models import ChatMessage

# Relaxed so that code-heavy conversations are not blocked outright
DEFAULT_SAFETY_SETTINGS = [
    types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_ONLY_HIGH"),
]


def convert_messages(messages: list[ChatMessage]) -> tuple[str | None, list[types.Content]]:
    """Convert chat messages to Gemini format.

    Returns:
        Tuple of (system_instruction, contents)
    """
    system_parts = []
    contents = []

    for msg in messages:
        if msg.role == "system":
            system_parts.append(msg.content)
        elif msg.role == "user":
            contents.append(types.Content(
                role="user",
                parts=[types.Part(text=msg.content)]
            ))
        elif msg.role == "assistant":
            contents.append(types.Content(
                role="model",
                parts=[types.Part(text=msg.content)]
            ))

    system_instruction = "\n\n".join(system_parts) if system_parts else None
    return system_instruction, contents


def extract_text(response: Any) -> str:
    """Join the text parts of the first candidate, or return an empty string."""
    if response.candidates:
        candidate = response.candidates[0]
        if candidate.content and candidate.content.parts:
            texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
            if texts:
                return "".join(texts)

    # response.text may raise when the candidate was blocked
    try:
        return response.text or ""
    except (ValueError, AttributeError):
        return ""


class GeminiClient:
    """Google Gemini provider client.

    Hidden design decisions:
    - Google GenAI client initialization
    - Message format conversion (assistant turns use the 'model' role)
    - Relaxed safety settings and disabled automatic function calling
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **client_kwargs: Any
    ):
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, messages: list[ChatMessage]) -> str:
        system_instruction, contents = convert_messages(messages)

        # mode=NONE stops UNEXPECTED_TOOL_CALL on prompts that look like function calls
        tool_config = types.ToolConfig(
            function_calling_config=types.FunctionCallingConfig(mode="NONE")
        )
        config = types.GenerateContentConfig(
            temperature=self._temperature,
            system_instruction=system_instruction,
            safety_settings=DEFAULT_SAFETY_SETTINGS,
            tool_config=tool_config,
        )
        if self._max_tokens is not None:
            config.max_output_tokens = self._max_tokens

        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=contents,
            config=config
        )
        return extract_text(response)

    async def close(self) -> None:
        """The GenAI client holds no connection that needs explicit closing."""
