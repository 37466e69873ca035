"""
Gemini model boundary: embedding provider and chat client.
"""

from sitechat.boundary.llm.gemini_chat import GeminiChatClient
from sitechat.boundary.llm.gemini_embedder import GeminiEmbedder

__all__ = ["GeminiChatClient", "GeminiEmbedder"]
