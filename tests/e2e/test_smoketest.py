import json

import pytest

from celo_e2e.rpcconnection import to_int
from celo_e2e.transaction import DEAD_ADDRESS, TransactionRequest, TxType

pytestmark = pytest.mark.e2e

TX_TYPES = [TxType.LEGACY, TxType.EIP2930, TxType.EIP1559, TxType.CIP64]

ERC20_TRANSFER_ABI = [
    {
        "type": "function",
        "name": "transfer",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "to", "type": "address"}, {"name": "value", "type": "uint256"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
]


@pytest.fixture
def fee_currency(tx_type, require):
    if tx_type != TxType.CIP64:
        return None
    return require("fee_currency").lower()


def typed_request(account, tx_type, fee_currency, **kwargs):
    # legacy and access list txs are priced with gasPrice, so the type has to be forced
    return TransactionRequest(
        sender=account,
        tx_type=tx_type,
        fee_currency=fee_currency,
        access_list=[],
        **kwargs,
    )


def check(connection, chain, tx_hash, tx_type, fee_currency):
    receipt = connection.wait_for_transaction_receipt(tx_hash, timeout=30)
    assert receipt["status"] == 1, "receipt status 'failure'"

    transaction = connection.get_transaction(tx_hash)
    assert to_int(transaction["type"]) == tx_type.type_id, "transaction type does not match"
    tx_fee_currency = transaction.get("feeCurrency")
    assert (tx_fee_currency.lower() if tx_fee_currency else None) == fee_currency, \
        "transaction feeCurrency does not match"

    if chain.has_l1_fee:
        assert to_int(receipt["l1Fee"]) == 0, "receipt l1Fee does not match"
    else:
        # the local dev chain does not run as a rollup
        assert "l1Fee" not in receipt, "receipt l1Fee does not match"
    return receipt


@pytest.mark.parametrize("tx_type", TX_TYPES, ids=lambda t: t.value)
def test_send_tx(connection, chain, account, tx_type, fee_currency):
    tx_hash = connection.send_transaction(
        typed_request(account, tx_type, fee_currency, to=DEAD_ADDRESS, value=1)
    )
    check(connection, chain, tx_hash, tx_type, fee_currency)


@pytest.mark.parametrize("tx_type", TX_TYPES, ids=lambda t: t.value)
def test_send_create_tx(connection, chain, account, tx_type, fee_currency, require):
    with open(require("compiled_test_contract")) as f:
        compiled = json.load(f)
    # constructor args of the debug fee currency test contract
    data = connection.encode_deploy(compiled["abi"], compiled["bytecode"]["object"], [1, True, True, True])

    tx_hash = connection.send_transaction(typed_request(account, tx_type, fee_currency, to=None, data=data))

    receipt = check(connection, chain, tx_hash, tx_type, fee_currency)
    assert receipt["contractAddress"] is not None


@pytest.mark.parametrize("tx_type", TX_TYPES, ids=lambda t: t.value)
def test_send_contract_interaction_tx(connection, chain, account, tx_type, fee_currency, require):
    data = connection.encode_call(ERC20_TRANSFER_ABI, "transfer", [DEAD_ADDRESS, 1])

    tx_hash = connection.send_transaction(
        typed_request(account, tx_type, fee_currency, to=require("token_address"), data=data)
    )
    check(connection, chain, tx_hash, tx_type, fee_currency)
