def clip(text: str, limit: int) -> str:
    """Collapse whitespace and cut ``text`` to ``limit`` chars for log lines."""
    normalized = " ".join(text.split()).strip()
    if len(normalized) <= limit:
        return normalized
    return f"{normalized[:limit]}...(truncated)"
