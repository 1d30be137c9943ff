def normalize_text(text: str) -> str:
    return text.lower()


def is_blank(text: str) -> bool:
    return not text or not text.strip()
