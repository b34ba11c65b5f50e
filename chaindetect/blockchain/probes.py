"""Per-chain detection probes.

Every probe performs bounded remote calls through ``with_timeout`` and
answers with a plain boolean. Errors, timeouts and malformed responses all
count as a negative answer for that probe only.
"""

import logging

from chaindetect.blockchain.base import EVMClientInterface, SolanaClientInterface
from chaindetect.blockchain.solana import TOKEN_PROGRAM_IDS
from chaindetect.utils.timeout import with_timeout

logger = logging.getLogger(__name__)


async def probe_solana_token(
    client: SolanaClientInterface,
    address: str,
    timeout: float,
) -> bool:
    """Check whether a Solana account is owned by an SPL token program."""
    try:
        owner = await with_timeout(client.get_account_owner(address), timeout)
    except Exception as e:
        logger.debug(f"Solana token probe failed on {client.endpoint} for {address}: {e}")
        return False

    if owner is None:
        return False
    return owner in TOKEN_PROGRAM_IDS


async def probe_evm_token(
    client: EVMClientInterface,
    address: str,
    timeout: float,
) -> bool:
    """Check whether an EVM address is an ERC-20 shaped contract.

    Wallets have no code. Contracts count as tokens only if
    ``totalSupply()`` answers.
    """
    try:
        code = await with_timeout(client.get_code(address), timeout)
    except Exception as e:
        logger.debug(f"getCode failed on {client.endpoint} for {address}: {e}")
        return False

    if not code:
        return False

    try:
        await with_timeout(client.total_supply(address), timeout)
    except Exception as e:
        logger.debug(f"totalSupply failed on {client.endpoint} for {address}: {e}")
        return False
    return True


async def probe_evm_nonce(
    client: EVMClientInterface,
    address: str,
    timeout: float,
) -> bool:
    """Check whether an EVM address has sent at least one transaction."""
    try:
        nonce = await with_timeout(client.get_transaction_count(address), timeout)
    except Exception as e:
        logger.debug(f"Nonce probe failed on {client.endpoint} for {address}: {e}")
        return False
    return isinstance(nonce, int) and nonce > 0


async def probe_transaction(
    client: EVMClientInterface,
    tx_hash: str,
    timeout: float,
) -> bool:
    """Check whether an endpoint knows a transaction hash."""
    try:
        tx = await with_timeout(client.get_transaction(tx_hash), timeout)
    except Exception as e:
        logger.debug(f"Transaction probe failed on {client.endpoint} for {tx_hash}: {e}")
        return False
    return bool(tx)
