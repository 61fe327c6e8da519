import re

# Characters dropped before comparing sentences. The Bengali danda is the
# sentence-final period of the script.
_STRIP_PATTERN = re.compile(r'[",.।]')
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_sentence(text: str) -> str:
    """
    Build the lookup key for a sentence.

    Quotes, commas and periods are removed, whitespace runs collapse to a
    single space, the result is trimmed and lower-cased. Applying the
    function to its own output returns it unchanged.

    Args:
        text (str): Raw sentence text.

    Returns:
        str: The normalized key.
    """
    text = _STRIP_PATTERN.sub("", text)
    text = _WHITESPACE_PATTERN.sub(" ", text)
    return text.strip().lower()


def truncate_for_log(text: str, limit: int = 30) -> str:
    """Shorten text for log lines, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
