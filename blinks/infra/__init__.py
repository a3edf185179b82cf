# Storage and Solana RPC collaborators
