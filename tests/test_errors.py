from web3.exceptions import Web3RPCError

from celo_e2e.errors import (
    SubmissionRejected,
    is_underpriced,
    is_unregistered_fee_currency,
    rpc_error_message,
)


def _rpc_error(message):
    return Web3RPCError(
        f"{{'code': -32000, 'message': '{message}'}}",
        rpc_response={"jsonrpc": "2.0", "id": 0, "error": {"code": -32000, "message": message}},
    )


def test_message_from_rpc_response():
    assert rpc_error_message(_rpc_error("nonce too low")) == "nonce too low"


def test_message_falls_back_to_str():
    assert rpc_error_message(RuntimeError("boom")) == "boom"


def test_rejection_keeps_node_message():
    rejected = SubmissionRejected.from_rpc_error(_rpc_error("unregistered fee-currency address: 0xbadc310"))
    assert rejected.message == "unregistered fee-currency address: 0xbadc310"
    assert is_unregistered_fee_currency(rejected)
    assert not is_underpriced(rejected)


def test_underpriced():
    assert is_underpriced(_rpc_error("replacement transaction underpriced"))
    assert not is_underpriced(_rpc_error("transaction underpriced: tip needed 1, tip permitted 0"))
