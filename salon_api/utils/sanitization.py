import html
import re
from typing import Optional


def validate_and_sanitize_input(value: Optional[str], max_length: int = 2000) -> Optional[str]:
    """
    Validate and sanitize free-text user input (review comments, salon replies, notes).

    Raises:
        ValueError: If input exceeds max_length
    """
    if value is None:
        return None

    value = str(value).strip()

    if len(value) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    value = html.escape(value, quote=True)

    # Strip control characters except tab/newline/carriage return
    value = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", value)

    return value
