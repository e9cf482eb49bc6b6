"""Field normalisers shared by the request schemas."""


def normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


def require_text(value: str, label: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(f'{label} is required.')
    return normalized


def optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    return normalized or None


def parse_id(value: str) -> int | None:
    """Path ids arrive as text; anything that is not a plain integer matches nothing."""
    normalized = value.strip()
    if not normalized.isascii() or not normalized.isdigit():
        return None
    return int(normalized)
