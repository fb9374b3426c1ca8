import re
from typing import Optional

# llm settings
TAGS_TEMPERATURE = 0.5
# maximum number of words kept by the local fallback
MAX_FALLBACK_TAGS = 10
# words of this length or shorter never become tags
MIN_WORD_LENGTH = 3
TAG_SEPARATOR = ", "

STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "is", "are", "was", "were", "be", "been", "have", "has", "had",
    "do", "does", "did", "will", "would", "should", "could", "may", "might",
    "must", "can",
})

_SURROUNDING_QUOTES = re.compile(r"^[\"']|[\"']$")
_LINE_BREAKS = re.compile(r"\r\n|\r|\n")
_COMMA_RUNS = re.compile(r"\s*(?:,\s*)+")
_WHITESPACE_RUNS = re.compile(r"\s+")


TAGS_SYSTEM_MESSAGE = (
    "You are a website categorization assistant. Analyze the website summary and generate "
    "relevant keywords/tags that describe what the website is about. Return ONLY a "
    "comma-separated list of keywords (5-10 keywords). Focus on the main topics, industry, "
    "content type, and purpose of the website."
)


def build_tags_prompt(title: Optional[str], summary: str) -> str:
    return (
        "Generate relevant meta tags (keywords) for this website:\n\n"
        f"Title: {title or 'N/A'}\n\n"
        f"Summary: {summary}\n\n"
        "Return ONLY a comma-separated list of keywords, nothing else. "
        "Example: \"technology, programming, web development, tutorials, education\""
    )


def normalize_tags(raw_tags: str) -> str:
    """
    Cleans up a comma separated keyword list returned by the model.

    Surrounding whitespace and one pair of surrounding quotes are removed, line
    breaks become commas, runs of commas collapse into a single ``", "`` and
    runs of whitespace into a single space. Applying the function to its own
    output returns the same string.

    :param raw_tags: The raw model reply.
    :return: A normalized ``", "`` separated keyword string.
    :rtype: str
    """
    tags = raw_tags.strip()
    tags = _SURROUNDING_QUOTES.sub("", tags)
    tags = _LINE_BREAKS.sub(",", tags)
    tags = _COMMA_RUNS.sub(TAG_SEPARATOR, tags)
    tags = _WHITESPACE_RUNS.sub(" ", tags)
    return tags.strip()


def fallback_tags(title: Optional[str], summary: str) -> str:
    """
    Builds keywords locally from the title and summary when the model can not be used.

    Words are lowercased, split on whitespace, filtered by length and against
    the stopword set and deduplicated in order of first appearance.

    :param title: Page title, may be None.
    :param summary: Page summary.
    :return: Up to ten ``", "`` separated words.
    :rtype: str
    """
    words = f"{title or ''} {summary}".lower().split()
    unique_words = []
    for word in words:
        if len(word) <= MIN_WORD_LENGTH or word in STOPWORDS or word in unique_words:
            continue
        unique_words.append(word)
        if len(unique_words) == MAX_FALLBACK_TAGS:
            break
    return TAG_SEPARATOR.join(unique_words)
