import os

from dataclasses import dataclass

from .rpcconnection import RpcConnection

DEV_RPC_URL = 'http://127.0.0.1:8545'
DEV_CHAIN_ID = 1337


@dataclass(frozen=True)
class ChainConfig:
    name: str
    chain_id: int
    rpc_url: str
    # Only rollup deployments charge an L1 data fee
    has_l1_fee: bool = False


ALFAJORES = ChainConfig(
    name='alfajores',
    chain_id=44787,
    rpc_url='https://alfajores-forno.celo-testnet.org',
    has_l1_fee=True,
)

NAMED_CHAINS = {
    ALFAJORES.name: ALFAJORES,
}


def dev_chain(chain_id: int = DEV_CHAIN_ID, rpc_url: str = DEV_RPC_URL) -> ChainConfig:
    return ChainConfig(name='dev', chain_id=chain_id, rpc_url=rpc_url)


def select_chain(network: str | None = None, chain_id: int = DEV_CHAIN_ID, rpc_url: str = DEV_RPC_URL) -> ChainConfig:
    """
    Named public network when NETWORK (or network) names one, otherwise a
    local dev chain at rpc_url.
    """
    if network is None:
        network = os.environ.get('NETWORK')
    if not network:
        return dev_chain(chain_id, rpc_url)
    if network not in NAMED_CHAINS:
        raise ValueError(f'unknown network {network!r}, expected one of {sorted(NAMED_CHAINS)}')
    return NAMED_CHAINS[network]


def connect(chain: ChainConfig) -> RpcConnection:
    return RpcConnection(chain.rpc_url, chain.chain_id)
