"""
Token budget helpers for the context window.

Token counts are estimated at ~4 characters per token; exact counts depend
on the model tokenizer and are not needed to keep a prompt under budget.
"""

import logging
import math
from typing import List, Sequence, TypeVar

from .models import SearchResult

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4

ResultT = TypeVar("ResultT", bound=SearchResult)


def estimate_token_count(text: str) -> int:
    """
    Estimate tokens in text.

    Example:
        >>> estimate_token_count("React hooks")
        3
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def limit_tokens(text: str, max_tokens: int) -> str:
    """
    Truncate text to roughly max_tokens, cutting at a word boundary.

    Truncated text ends with "...".
    """
    max_length = max(max_tokens, 0) * CHARS_PER_TOKEN
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")
    if last_space == -1:
        return truncated

    return truncated[:last_space] + "..."


def fit_to_token_budget(results: Sequence[ResultT], max_tokens: int) -> List[ResultT]:
    """
    Keep results in order while their chunk content fits in max_tokens.

    Stops at the first result that would exceed the budget, so the kept
    list is always a prefix of the input.
    """
    kept = []
    used = 0
    for result in results:
        tokens = estimate_token_count(result.chunk_content)
        if used + tokens > max_tokens:
            break
        kept.append(result)
        used += tokens

    if len(kept) < len(results):
        logger.debug(f"Token budget {max_tokens}: kept {len(kept)} of {len(results)} chunks ({used} tokens)")
    return kept
