"""
Fixtures for tests that talk to a live node.

The node and funded account come from the environment:

    ETH_RPC_URL                  dev chain endpoint (ignored when NETWORK is set)
    ACC_PRIVKEY                  funded sender key
    NETWORK                      'alfajores' for the public testnet
    FEE_CURRENCY, FEE_CURRENCY2  registered fee currencies
    FEE_CURRENCY_DIRECTORY_ADDR  exchange rate directory
    TOKEN_ADDR                   ERC20 used for contract interaction txs
    COMPILED_TEST_CONTRACT       solc json output of the contract to deploy

Tests whose settings are missing are skipped.
"""
import pytest

from celo_e2e.config import E2EConfig
from celo_e2e.exchange import get_rate
from celo_e2e.logging_config import setup_logging
from celo_e2e.network import connect


@pytest.fixture(scope="session")
def config():
    setup_logging()
    config = E2EConfig.from_env()
    missing = config.missing("private_key") + ([] if config.network else config.missing("rpc_url"))
    if missing:
        pytest.skip(f"no node configured, missing {', '.join(missing)}")
    return config


@pytest.fixture
def require(config):
    def require(*names):
        missing = config.missing(*names)
        if missing:
            pytest.skip(f"missing {', '.join(missing)}")
        values = [getattr(config, name) for name in names]
        return values[0] if len(values) == 1 else values
    return require


@pytest.fixture(scope="session")
def chain(config):
    return config.chain


@pytest.fixture(scope="session")
def connection(chain):
    return connect(chain)


@pytest.fixture(scope="session")
def account(config, connection):
    return connection.create_account(config.private_key)


@pytest.fixture
def rate_for(connection, require):
    directory = require("fee_currency_directory")

    def rate_for(fee_currency):
        return get_rate(connection, directory, fee_currency)
    return rate_for
