"""Strip conversational filler from a query before it is embedded."""

STOPWORDS: frozenset[str] = frozenset(
    {
        "find", "the", "file", "that", "i", "downloaded", "download",
        "yesterday", "today", "please", "can", "you", "my", "a", "an",
        "is", "was", "me",
    }
)


def normalize(query: str) -> str:
    """Drop stopwords (case-insensitive) and rejoin with single spaces.

    Falls back to the raw query when nothing meaningful survives, so a
    non-empty query never reaches the embedder as an empty string.

    Example: "please find the hostel fees yesterday" -> "hostel fees"
    """
    kept = [w for w in query.split() if w.lower() not in STOPWORDS]
    cleaned = " ".join(kept)
    return cleaned if cleaned.strip() else query
