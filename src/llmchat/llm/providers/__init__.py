from .anthropic import AnthropicClient
from .deepseek import DeepSeekClient
from .gemini import GeminiClient
from .openai import OpenAIClient

__all__ = ["AnthropicClient", "DeepSeekClient", "GeminiClient", "OpenAIClient"]
