"""
Submit a transaction, wait a bounded number of blocks for its receipt and
optionally unstick it with a zero-value replacement at the same nonce.
"""
import json
import logging
import time

from dataclasses import asdict, dataclass

from .errors import SubmissionRejected
from .rpcconnection import RpcConnection
from .transaction import TransactionRequest, TxType

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.5
REPLACEMENT_TIP_BUMP = 1000
REPLACEMENT_GAS = 21000


@dataclass
class SendResult:
    success: bool
    replaced: bool
    error: str | None = None

    def to_json(self) -> str:
        return json.dumps(asdict(self))


def wait_until_block(connection: RpcConnection, block_number: int):
    current = connection.get_block_number()
    while current < block_number:
        time.sleep(POLL_INTERVAL)
        current = connection.get_block_number()


def wait_for_receipt_within_blocks(connection: RpcConnection, tx_hash, start_block: int, wait_blocks: int):
    """
    Poll for the receipt of tx_hash until it shows up or wait_blocks blocks
    past start_block have been produced. Returns None if it never shows up.

    Each round waits for one more block past start_block rather than always
    for start_block + 1, so the bound really spans wait_blocks new blocks.
    """
    receipt = connection.get_receipt(tx_hash)
    for i in range(1, wait_blocks + 1):
        if receipt is not None:
            break
        wait_until_block(connection, start_block + i)
        receipt = connection.get_receipt(tx_hash)
    return receipt


def replace_transaction(connection: RpcConnection, request: TransactionRequest):
    """
    Resend a zero-value self transfer at the nonce of a stuck request with a
    bumped tip, then wait for it to be mined.
    """
    replacement = TransactionRequest(
        sender=request.sender,
        to=request.sender.address,
        value=0,
        gas=REPLACEMENT_GAS,
        nonce=request.nonce,
        max_fee_per_gas=request.max_fee_per_gas,
        max_priority_fee_per_gas=request.max_priority_fee_per_gas + REPLACEMENT_TIP_BUMP,
        tx_type=TxType.EIP1559,
        chain_id=request.chain_id,
    )
    prepared = connection.prepare_request(replacement)
    tx_hash = connection.submit_raw(connection.sign(prepared))
    logger.info('replacing nonce %s with %s', request.nonce, tx_hash.to_0x_hex())
    # No bound, a chain that stops producing blocks keeps us here
    return connection.wait_for_transaction_receipt(tx_hash, timeout=None, poll_latency=POLL_INTERVAL)


def submit_and_confirm(
    connection: RpcConnection,
    request: TransactionRequest,
    wait_blocks: int,
    replace_after_wait: bool = False,
):
    """
    Returns (SendResult, receipt). The receipt is the replacement's when the
    original was replaced, and None when nothing was mined.
    """
    prepared = connection.prepare_request(request)
    signed = connection.sign(prepared)

    start_block = connection.get_block_number()
    try:
        tx_hash = connection.submit_raw(signed)
    except SubmissionRejected as e:
        return SendResult(success=False, replaced=False, error=e.message), None

    receipt = wait_for_receipt_within_blocks(connection, tx_hash, start_block, wait_blocks)
    if receipt is not None:
        return SendResult(success=True, replaced=False), receipt

    logger.info('no receipt for %s after %d blocks', tx_hash.to_0x_hex(), wait_blocks)
    if not replace_after_wait:
        return SendResult(success=False, replaced=False), None
    receipt = replace_transaction(connection, prepared)
    return SendResult(success=False, replaced=True), receipt
