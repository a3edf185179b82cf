"""
Blink Actions server: Solana Actions metadata and unsigned transactions
for stored action configurations.
"""

__version__ = "1.0.0"
