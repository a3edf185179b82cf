"""
Shared parsing helpers for addresses and SOL amounts.
"""
import math
from decimal import Decimal
from typing import Any, Optional

from solders.pubkey import Pubkey

from .errors import InvalidAddress, MissingAmount


LAMPORTS_PER_SOL = 1_000_000_000
MAX_LAMPORTS = 2**64 - 1


def parse_pubkey(address: str, name: str) -> Pubkey:
    """Parse a base58 address, reporting failures against `name`."""
    try:
        return Pubkey.from_string(address)
    except (ValueError, TypeError) as e:
        raise InvalidAddress(name, str(e)) from e


def _usable(amount: float) -> Optional[float]:
    if math.isfinite(amount) and amount >= 0:
        return amount
    return None


def parse_amount(raw: Optional[str]) -> Optional[float]:
    """
    Parse a query-string amount; None when absent or unusable.

    Surrounding whitespace and digit separators ("1_000") are rejected even
    though float() accepts them.
    """
    if raw is None or raw != raw.strip() or "_" in raw:
        return None
    try:
        return _usable(float(raw))
    except ValueError:
        return None


def coerce_amount(value: Any) -> Optional[float]:
    """Read a numeric amount out of a stored config value."""
    # JSON booleans are ints in Python but never amounts
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return _usable(float(value))


def sol_to_lamports(amount: float) -> int:
    """
    Convert whole SOL to lamports, truncating toward zero.

    The multiplication runs on the shortest decimal form of the float, so
    0.29 SOL is 290_000_000 lamports on every platform.
    """
    lamports = int(Decimal(repr(float(amount))) * LAMPORTS_PER_SOL)
    if lamports < 0 or lamports > MAX_LAMPORTS:
        raise MissingAmount()
    return lamports


def format_amount(amount: float) -> str:
    """Render an amount the way it should appear in URLs and messages."""
    # Positional notation: 0.00005, never 5e-05
    text = format(Decimal(repr(float(amount))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
