"""
Source excerpt helpers.

Dependencies: beautifulsoup4
System role: Citation excerpts for answer sources
"""

from bs4 import BeautifulSoup

SOURCE_EXCERPT_LENGTH = 200
FALLBACK_EXCERPT_LENGTH = 300


def extract_meta_description(html: str) -> str | None:
    """
    Page description from <meta name="description">, then og:description.

    Returns:
        str | None: Stripped description, or None if absent or blank
    """
    soup = BeautifulSoup(html, "html.parser")
    candidates = (
        soup.find("meta", attrs={"name": lambda value: value and value.lower() == "description"}),
        soup.find("meta", attrs={"property": "og:description"}),
    )
    for tag in candidates:
        if tag is None:
            continue
        content = (tag.get("content") or "").strip()
        if content:
            return content
    return None


def truncate_excerpt(content: str, length: int = SOURCE_EXCERPT_LENGTH) -> str:
    return content[:length] + "..."
