"""
Wire encoding for unsigned transactions.

Transactions are serialized in the Solana legacy wire format and carried as
standard base64 text in the POST response.
"""
import base64

from solders.transaction import Transaction

from .errors import EncodingFailure


def encode_transaction(transaction: Transaction) -> str:
    """Serialize `transaction` and base64-encode the bytes."""
    try:
        raw = bytes(transaction)
    except Exception as e:
        raise EncodingFailure(str(e)) from e
    return base64.b64encode(raw).decode("ascii")


def decode_transaction(encoded: str) -> Transaction:
    """Inverse of `encode_transaction`."""
    try:
        raw = base64.b64decode(encoded, validate=True)
        return Transaction.from_bytes(raw)
    except Exception as e:
        # binascii.Error for bad base64, solders errors for bad bincode
        raise EncodingFailure(str(e)) from e
