"""
Answer prompt.

Grounding prompt for the site assistant. Citations are delivered through the
structured sources list, so the model is told not to cite inline.

Dependencies: langchain_core.prompts
System role: Prompt template for answer generation
"""

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate

from sitechat.configs.site import SiteSettings
from sitechat.models.chunk import SearchResult

SYSTEM_PROMPT = """You are a helpful assistant that answers questions about {topic} using {site_name}'s information.

## Instructions
1. Answer the question using the provided context
2. Be accurate and helpful
3. If the context doesn't contain enough information, say so
4. Keep the answer conversational but informative

## Formatting
- Write short paragraphs that read well on a phone screen
- Separate paragraphs with a blank line
- Do not include citations, source numbers or URLs in the answer text"""

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """Context from {site_name}'s website:
{context}

Question: {question}

Answer:"""),
])

EMPTY_CONTEXT = "(no relevant content was found)"


def format_context(results: list[SearchResult]) -> str:
    """Numbered context entries: '[i] content\\nSource: url', blank-line separated."""
    if not results:
        return EMPTY_CONTEXT
    return "\n\n".join(
        f"[{index}] {result.chunk.content}\nSource: {result.chunk.url}"
        for index, result in enumerate(results, start=1)
    )


def build_messages(question: str, results: list[SearchResult], site: SiteSettings) -> list[BaseMessage]:
    return ANSWER_PROMPT.format_messages(
        site_name=site.name,
        topic=site.topic,
        context=format_context(results),
        question=question,
    )
