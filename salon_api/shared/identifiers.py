"""Human-readable identifiers: booking references, transaction ids, share tokens and slugs"""

import re
import secrets
import time
import unicodedata

BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lowercase base 36"""
    if number < 0:
        raise ValueError("Only non-negative integers can be encoded")
    if number == 0:
        return "0"

    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def random_base36(length: int) -> str:
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_booking_reference() -> str:
    """BK-<base36 timestamp>-<4 random chars>, upper case"""
    return f"BK-{to_base36(_now_ms())}-{random_base36(4)}".upper()


def generate_transaction_id() -> str:
    """TXN-<ms timestamp>-<7 random chars>, upper case"""
    return f"TXN-{_now_ms()}-{random_base36(7).upper()}"


def generate_share_token() -> str:
    return random_base36(26)


def slugify(text: str) -> str:
    """Lowercase, ascii-only, hyphen-separated slug"""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug or "salon"


def generate_salon_slug(business_name: str) -> str:
    return f"{slugify(business_name)}-{random_base36(6)}"
