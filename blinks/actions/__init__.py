# Action resolution and transaction building
from .builder import BuiltTransaction, TransactionBuilder
from .encoder import decode_transaction, encode_transaction
from .errors import (
    BlinkError,
    BlinkNotFound,
    EncodingFailure,
    FreshnessTokenUnavailable,
    InvalidAddress,
    InvalidConfiguration,
    MissingAmount,
    MissingSelection,
)
from .resolver import resolve_metadata
from .schemas import ActionMetadata, ActionType, Blink, CreateBlinkRequest

__all__ = [
    "ActionMetadata",
    "ActionType",
    "Blink",
    "BlinkError",
    "BlinkNotFound",
    "BuiltTransaction",
    "CreateBlinkRequest",
    "EncodingFailure",
    "FreshnessTokenUnavailable",
    "InvalidAddress",
    "InvalidConfiguration",
    "MissingAmount",
    "MissingSelection",
    "TransactionBuilder",
    "decode_transaction",
    "encode_transaction",
    "resolve_metadata",
]
