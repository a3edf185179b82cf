"""
Typed views over a blink's open `config` document.

Stored configs are never checked at creation time. `decode_config` is the
single place where a config is matched against its blink type; both the
metadata resolver and the transaction builder go through it.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .errors import InvalidConfiguration
from .schemas import ActionType
from .validation import coerce_amount


DEFAULT_DONATION_AMOUNT = 0.1
UNKNOWN_OPTION = "Unknown"


@dataclass(frozen=True)
class DonationConfig:
    amount: Optional[float] = None

    @property
    def display_amount(self) -> float:
        return DEFAULT_DONATION_AMOUNT if self.amount is None else self.amount


@dataclass(frozen=True)
class PaymentConfig:
    amount: Optional[float] = None


@dataclass(frozen=True)
class VoteConfig:
    options: Tuple[str, ...] = ()


BlinkConfig = Union[DonationConfig, PaymentConfig, VoteConfig]


def _decode_vote(config: Dict[str, Any]) -> VoteConfig:
    options = config.get("options")
    if not isinstance(options, list):
        raise InvalidConfiguration()
    return VoteConfig(
        options=tuple(opt if isinstance(opt, str) else UNKNOWN_OPTION for opt in options)
    )


def decode_config(action_type: ActionType, config: Optional[Dict[str, Any]]) -> BlinkConfig:
    """Decode `config` into the variant matching `action_type`."""
    config = config if isinstance(config, dict) else {}

    if action_type == ActionType.DONATION:
        return DonationConfig(amount=coerce_amount(config.get("amount")))
    if action_type == ActionType.PAYMENT:
        return PaymentConfig(amount=coerce_amount(config.get("amount")))
    if action_type == ActionType.VOTE:
        return _decode_vote(config)

    raise InvalidConfiguration(f"Unsupported blink type: {action_type}")
