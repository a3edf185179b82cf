"""
Unit tests for individual system components

Covers metadata resolution, lazy config decoding, amount/address parsing and
settings validation. None of these touch the network or the database.
"""

import os
import sys
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from solders.pubkey import Pubkey

# Add project root to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from blinks.actions.errors import InvalidAddress, InvalidConfiguration, MissingAmount
from blinks.actions.resolver import resolve_metadata
from blinks.actions.schemas import ActionType, Blink, CreateBlinkRequest
from blinks.actions.validation import (
    coerce_amount,
    format_amount,
    parse_amount,
    parse_pubkey,
    sol_to_lamports,
)
from blinks.actions.variants import (
    DonationConfig,
    PaymentConfig,
    VoteConfig,
    decode_config,
)
from blinks.config import Settings, validate_backend_url


BASE_URL = "https://blinks.example.com"
BLINK_ID = "6f1c2d3e-4b5a-4978-8c9d-0e1f2a3b4c5d"


def make_blink(action_type: str, config=None, **overrides) -> Blink:
    fields = {
        "id": BLINK_ID,
        "created_at": datetime.now(timezone.utc),
        "title": "Save the Rainforest",
        "icon_url": "https://example.com/image.png",
        "description": "Donate to help save trees",
        "label": "Donate",
        "wallet_address": str(Pubkey.new_unique()),
        "type": action_type,
        "config": config if config is not None else {},
    }
    fields.update(overrides)
    return Blink(**fields)


# Metadata resolution

@pytest.mark.unit
def test_donation_metadata_embeds_configured_amount():
    blink = make_blink("donation", {"amount": 0.5})

    metadata = resolve_metadata(blink, BASE_URL)

    assert metadata.icon == "https://example.com/image.png"
    assert metadata.title == "Save the Rainforest"
    assert metadata.label == "Donate"
    actions = metadata.links.actions
    assert len(actions) == 1
    assert actions[0].label == "Donate"
    assert actions[0].href == f"{BASE_URL}/api/actions/{BLINK_ID}?amount=0.5"
    assert actions[0].parameters is None


@pytest.mark.unit
def test_donation_metadata_defaults_to_point_one():
    blink = make_blink("donation", {})

    actions = resolve_metadata(blink, BASE_URL).links.actions

    assert actions[0].href.endswith("?amount=0.1")


@pytest.mark.unit
def test_donation_metadata_renders_whole_amounts_without_decimal_point():
    blink = make_blink("donation", {"amount": 2})

    actions = resolve_metadata(blink, BASE_URL).links.actions

    assert actions[0].href.endswith("?amount=2")


@pytest.mark.unit
def test_donation_metadata_renders_small_amounts_positionally():
    blink = make_blink("donation", {"amount": 0.00005})

    actions = resolve_metadata(blink, BASE_URL).links.actions

    assert actions[0].href == f"{BASE_URL}/api/actions/{BLINK_ID}?amount=0.00005"


@pytest.mark.unit
def test_payment_metadata_declares_amount_parameter():
    blink = make_blink("payment", {})

    actions = resolve_metadata(blink, BASE_URL).links.actions

    assert len(actions) == 1
    assert actions[0].label == "Send SOL"
    assert actions[0].href == f"{BASE_URL}/api/actions/{BLINK_ID}?amount={{amount}}"
    assert len(actions[0].parameters) == 1
    parameter = actions[0].parameters[0]
    assert parameter.name == "amount"
    assert parameter.type == "number"
    assert parameter.label == "Enter SOL amount"
    assert parameter.required is True


@pytest.mark.unit
def test_vote_metadata_has_one_action_per_option_in_order():
    blink = make_blink("vote", {"options": ["A", "B"]})

    actions = resolve_metadata(blink, BASE_URL).links.actions

    assert [a.label for a in actions] == ["Vote A", "Vote B"]
    assert actions[0].href == f"{BASE_URL}/api/actions/{BLINK_ID}?selection=A"
    assert actions[1].href == f"{BASE_URL}/api/actions/{BLINK_ID}?selection=B"
    assert actions[0].href != actions[1].href


@pytest.mark.unit
def test_vote_metadata_falls_back_to_unknown_for_non_string_options():
    blink = make_blink("vote", {"options": ["Pizza", 42, None]})

    actions = resolve_metadata(blink, BASE_URL).links.actions

    assert [a.label for a in actions] == ["Vote Pizza", "Vote Unknown", "Vote Unknown"]


@pytest.mark.unit
def test_vote_metadata_quotes_selection_in_href():
    blink = make_blink("vote", {"options": ["Veggie Burger"]})

    actions = resolve_metadata(blink, BASE_URL).links.actions

    assert actions[0].label == "Vote Veggie Burger"
    assert actions[0].href.endswith("?selection=Veggie%20Burger")


@pytest.mark.unit
@pytest.mark.parametrize("config", [{}, {"options": "A,B"}, {"amount": 1}])
def test_vote_metadata_rejects_malformed_options(config):
    blink = make_blink("vote", config)

    with pytest.raises(InvalidConfiguration):
        resolve_metadata(blink, BASE_URL)


@pytest.mark.unit
def test_unknown_config_variant_is_not_treated_as_vote():
    blink = make_blink("vote", {"options": ["A"]})

    with patch("blinks.actions.resolver.decode_config", return_value=object()):
        with pytest.raises(TypeError):
            resolve_metadata(blink, BASE_URL)


@pytest.mark.unit
def test_base_url_trailing_slash_is_ignored():
    blink = make_blink("donation", {"amount": 1.5})

    actions = resolve_metadata(blink, BASE_URL + "/").links.actions

    assert actions[0].href == f"{BASE_URL}/api/actions/{BLINK_ID}?amount=1.5"


# Config decoding

@pytest.mark.unit
def test_decode_config_picks_variant_by_type():
    assert decode_config(ActionType.DONATION, {"amount": 0.5}) == DonationConfig(amount=0.5)
    assert decode_config(ActionType.PAYMENT, {}) == PaymentConfig(amount=None)
    assert decode_config(ActionType.VOTE, {"options": ["A"]}) == VoteConfig(options=("A",))


@pytest.mark.unit
def test_decode_config_ignores_non_numeric_amounts():
    assert decode_config(ActionType.DONATION, {"amount": "lots"}).amount is None
    assert decode_config(ActionType.PAYMENT, {"amount": True}).amount is None


@pytest.mark.unit
def test_mismatched_config_is_accepted_at_creation():
    request = CreateBlinkRequest(
        title="Lunch poll",
        icon_url="https://example.com/lunch.png",
        description="What should we order?",
        label="Vote",
        wallet_address="not-a-wallet",
        type="Vote",
        config={"amount": 1},
    )

    assert request.type == ActionType.VOTE
    assert request.config == {"amount": 1}


# Amounts and addresses

@pytest.mark.unit
def test_parse_amount():
    assert parse_amount("1.25") == 1.25
    assert parse_amount("3") == 3.0
    assert parse_amount(None) is None
    assert parse_amount(" 3 ") is None
    assert parse_amount("3\n") is None
    assert parse_amount("1_000") is None
    assert parse_amount("abc") is None
    assert parse_amount("{amount}") is None
    assert parse_amount("nan") is None
    assert parse_amount("inf") is None
    assert parse_amount("-1") is None


@pytest.mark.unit
def test_coerce_amount():
    assert coerce_amount(0.5) == 0.5
    assert coerce_amount(2) == 2.0
    assert coerce_amount(False) is None
    assert coerce_amount("0.5") is None
    assert coerce_amount(None) is None


@pytest.mark.unit
def test_sol_to_lamports_truncates():
    assert sol_to_lamports(0.5) == 500_000_000
    assert sol_to_lamports(1.25) == 1_250_000_000
    assert sol_to_lamports(0.1) == 100_000_000
    assert sol_to_lamports(0.29) == 290_000_000
    assert sol_to_lamports(0.0000000019) == 1
    assert sol_to_lamports(0) == 0


@pytest.mark.unit
def test_sol_to_lamports_rejects_overflow():
    with pytest.raises(MissingAmount):
        sol_to_lamports(1e12)


@pytest.mark.unit
def test_format_amount():
    assert format_amount(0.1) == "0.1"
    assert format_amount(1.0) == "1"
    assert format_amount(1.25) == "1.25"
    assert format_amount(0.00005) == "0.00005"
    assert format_amount(0.0000000019) == "0.0000000019"
    assert format_amount(1e16) == "10000000000000000"


@pytest.mark.unit
def test_parse_pubkey():
    key = Pubkey.new_unique()

    assert parse_pubkey(str(key), "user wallet") == key

    with pytest.raises(InvalidAddress) as exc_info:
        parse_pubkey("AbC2...WalletAddress", "destination wallet")

    assert str(exc_info.value).startswith("Invalid destination wallet")
    assert exc_info.value.status_code == 400


# Settings

@pytest.mark.unit
def test_settings_strip_backend_url_slash():
    settings = Settings(backend_url="https://blinks.example.com/")

    assert settings.backend_url == "https://blinks.example.com"


@pytest.mark.unit
def test_validate_backend_url():
    assert validate_backend_url("http://localhost:8000") == "http://localhost:8000"

    with pytest.raises(ValueError):
        validate_backend_url("localhost:8000")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
