"""
sitechat: retrieval-augmented chat assistant for a scraped marketing website.

Hybrid retrieval (dense vector similarity fused with lexical text search)
feeding a Gemini answer generator with retry and extractive fallback.
"""

__version__ = "0.1.0"
