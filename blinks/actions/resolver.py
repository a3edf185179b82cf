"""
Metadata resolution for blinks.

Turns a stored blink into the Solana Actions GET document: display fields
plus the list of linked actions a client renders as buttons or forms.
"""
import logging
from typing import List
from urllib.parse import quote

from .schemas import (
    ActionLinks,
    ActionMetadata,
    ActionParameter,
    Blink,
    LinkedAction,
)
from .validation import format_amount
from .variants import DonationConfig, PaymentConfig, VoteConfig, decode_config


logger = logging.getLogger(__name__)

PAYMENT_LABEL = "Send SOL"
PAYMENT_AMOUNT_LABEL = "Enter SOL amount"


def action_url(base_url: str, blink_id: str) -> str:
    """Absolute URL of the action endpoint for a blink."""
    return f"{base_url.rstrip('/')}/api/actions/{blink_id}"


def _donation_actions(blink: Blink, config: DonationConfig, base_url: str) -> List[LinkedAction]:
    amount = format_amount(config.display_amount)
    return [
        LinkedAction(
            label=blink.label,
            href=f"{action_url(base_url, blink.id)}?amount={amount}",
        )
    ]


def _payment_actions(blink: Blink, config: PaymentConfig, base_url: str) -> List[LinkedAction]:
    # {amount} is filled in by the client from the declared parameter
    return [
        LinkedAction(
            label=PAYMENT_LABEL,
            href=f"{action_url(base_url, blink.id)}?amount={{amount}}",
            parameters=[
                ActionParameter(
                    name="amount",
                    type="number",
                    label=PAYMENT_AMOUNT_LABEL,
                    required=True,
                )
            ],
        )
    ]


def _vote_actions(blink: Blink, config: VoteConfig, base_url: str) -> List[LinkedAction]:
    return [
        LinkedAction(
            label=f"Vote {option}",
            href=f"{action_url(base_url, blink.id)}?selection={quote(option, safe='')}",
        )
        for option in config.options
    ]


def resolve_metadata(blink: Blink, base_url: str) -> ActionMetadata:
    """
    Build the metadata document for `blink`.

    Raises:
        InvalidConfiguration: the stored config does not fit the blink type
    """
    config = decode_config(blink.type, blink.config)

    if isinstance(config, DonationConfig):
        actions = _donation_actions(blink, config, base_url)
    elif isinstance(config, PaymentConfig):
        actions = _payment_actions(blink, config, base_url)
    elif isinstance(config, VoteConfig):
        actions = _vote_actions(blink, config, base_url)
    else:
        raise TypeError(f"Unhandled blink config: {config!r}")

    logger.debug(f"Resolved {len(actions)} linked action(s) for blink {blink.id}")

    return ActionMetadata(
        icon=blink.icon_url,
        title=blink.title,
        description=blink.description,
        label=blink.label,
        links=ActionLinks(actions=actions),
    )
