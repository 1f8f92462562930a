#!/usr/bin/python3
"""
Send a single transfer to the dead address and report the outcome as one
JSON line on stdout, e.g. {"success": true, "replaced": false, "error": null}.

    python -m celo_e2e.send_tx <chainId> <privateKey> <feeCurrency> <waitBlocks> <replaceTxAfterWait> [celoValue]

NETWORK=alfajores targets the public testnet, otherwise the local dev chain.
The exit code is 0 whatever happened to the transaction.
"""
import argparse

from .confirm import submit_and_confirm
from .logging_config import setup_logging
from .network import connect, select_chain
from .transaction import DEAD_ADDRESS, TransactionRequest

DEFAULT_VALUE = 2
GAS = 90000
MAX_FEE_PER_GAS = 25000000000
# should be >= 1wei even after conversion to native tokens
MAX_PRIORITY_FEE_PER_GAS = 100


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="send_tx", description="Send a transaction and wait for its receipt"
    )
    parser.add_argument("chain_id", type=int, help="chain id of the local dev chain")
    parser.add_argument("private_key", type=str, help="sender private key")
    parser.add_argument("fee_currency", type=str, help="fee currency address, empty for native")
    parser.add_argument("wait_blocks", type=int, help="blocks to wait for the receipt")
    parser.add_argument("replace_tx_after_wait", type=str,
                        help="'true' to replace the transaction if no receipt arrives")
    parser.add_argument("celo_value", type=str, nargs="?", default="",
                        help="value to send, defaults to 2")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    setup_logging()
    args = parse_args(argv)

    chain = select_chain(chain_id=args.chain_id)
    connection = connect(chain)
    account = connection.create_account(args.private_key)

    value = int(args.celo_value) if args.celo_value != "" else DEFAULT_VALUE
    request = TransactionRequest(
        sender=account,
        to=DEAD_ADDRESS,
        value=value,
        gas=GAS,
        fee_currency=args.fee_currency or None,
        max_fee_per_gas=MAX_FEE_PER_GAS,
        max_priority_fee_per_gas=MAX_PRIORITY_FEE_PER_GAS,
    )

    result, _ = submit_and_confirm(
        connection, request, args.wait_blocks, args.replace_tx_after_wait == "true"
    )
    # print for bash script wrapper return value
    print(result.to_json(), flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
