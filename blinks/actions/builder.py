"""
Transaction building for blinks.

Given a stored blink, the requesting wallet and the query parameters of a
POST, compose the instructions for the chosen action and wrap them in an
unsigned legacy transaction paid for by the requester.

Instruction order is fixed: the compute-unit price directive always comes
first, followed by the value transfer or the vote memo.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from solders.compute_budget import set_compute_unit_price
from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from .errors import MissingAmount, MissingSelection
from .schemas import Blink
from .validation import format_amount, parse_amount, parse_pubkey, sol_to_lamports
from .variants import DonationConfig, PaymentConfig, VoteConfig, decode_config


logger = logging.getLogger(__name__)

MEMO_PROGRAM_ID = Pubkey.from_string("MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr")
PRIORITY_FEE_MICRO_LAMPORTS = 50_000


class BlockhashSource(Protocol):
    async def latest_blockhash(self) -> Hash:
        ...


@dataclass
class BuiltTransaction:
    """An unsigned transaction plus what went into it."""
    transaction: Transaction
    message: str
    blockhash: Hash
    instructions: List[Instruction] = field(default_factory=list)


def priority_fee_instruction() -> Instruction:
    return set_compute_unit_price(PRIORITY_FEE_MICRO_LAMPORTS)


def transfer_instructions(sender: Pubkey, recipient: Pubkey, lamports: int) -> List[Instruction]:
    return [
        priority_fee_instruction(),
        transfer(TransferParams(from_pubkey=sender, to_pubkey=recipient, lamports=lamports)),
    ]


def vote_memo(blink_id: str, selection: str) -> bytes:
    return f"vote:{blink_id}:{selection}".encode("utf-8")


def vote_instructions(voter: Pubkey, blink_id: str, selection: str) -> List[Instruction]:
    memo = Instruction(
        program_id=MEMO_PROGRAM_ID,
        data=vote_memo(blink_id, selection),
        accounts=[AccountMeta(pubkey=voter, is_signer=True, is_writable=False)],
    )
    return [priority_fee_instruction(), memo]


def unsigned_transaction(instructions: List[Instruction], payer: Pubkey, blockhash: Hash) -> Transaction:
    message = Message.new_with_blockhash(instructions, payer, blockhash)
    return Transaction.new_unsigned(message)


def resolve_amount(query_amount: Optional[str], config_amount: Optional[float]) -> float:
    """A parseable query amount wins over the stored one."""
    amount = parse_amount(query_amount)
    if amount is None:
        amount = config_amount
    if amount is None:
        raise MissingAmount()
    return amount


class TransactionBuilder:
    """Builds unsigned transactions for POSTs to an action endpoint."""

    def __init__(self, blockhash_source: BlockhashSource):
        self.blockhash_source = blockhash_source

    async def build(
        self,
        blink: Blink,
        account: str,
        amount: Optional[str] = None,
        selection: Optional[str] = None,
    ) -> BuiltTransaction:
        """
        Build the transaction for `blink` on behalf of `account`.

        Args:
            blink: The stored blink
            account: Requester wallet address (base58), also the fee payer
            amount: Raw `amount` query parameter, if any
            selection: Raw `selection` query parameter, if any

        Raises:
            InvalidAddress, MissingAmount, MissingSelection,
            InvalidConfiguration, FreshnessTokenUnavailable
        """
        requester = parse_pubkey(account, "user wallet")
        blockhash = await self.blockhash_source.latest_blockhash()

        config = decode_config(blink.type, blink.config)

        if isinstance(config, (DonationConfig, PaymentConfig)):
            destination = parse_pubkey(blink.wallet_address, "destination wallet")
            sol = resolve_amount(amount, config.amount)
            lamports = sol_to_lamports(sol)
            instructions = transfer_instructions(requester, destination, lamports)
            description = f"Send {format_amount(sol)} SOL to {blink.title}"
            logger.info(f"Built transfer of {lamports} lamports for blink {blink.id}")
        elif isinstance(config, VoteConfig):
            if selection is None:
                raise MissingSelection()
            instructions = vote_instructions(requester, blink.id, selection)
            description = f"Vote for: {selection}"
            logger.info(f"Built vote memo for blink {blink.id}")
        else:
            raise TypeError(f"Unhandled blink config: {config!r}")

        return BuiltTransaction(
            transaction=unsigned_transaction(instructions, requester, blockhash),
            message=description,
            blockhash=blockhash,
            instructions=instructions,
        )
