"""
Answer generation: prompt assembly, retrying model calls and extractive fallback.
"""

from sitechat.core.generation.answer_generator import AnswerGenerator

__all__ = ["AnswerGenerator"]
