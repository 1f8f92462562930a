import os

from dataclasses import dataclass

from .network import DEV_RPC_URL, ChainConfig, dev_chain, select_chain


@dataclass(frozen=True)
class E2EConfig:
    """Settings the test suite reads from the environment."""
    rpc_url: str | None
    private_key: str | None
    fee_currency: str | None
    fee_currency2: str | None
    fee_currency_directory: str | None
    token_address: str | None
    compiled_test_contract: str | None
    network: str | None

    @classmethod
    def from_env(cls, environ=None) -> 'E2EConfig':
        environ = os.environ if environ is None else environ
        return cls(
            rpc_url=environ.get('ETH_RPC_URL') or None,
            private_key=environ.get('ACC_PRIVKEY') or None,
            fee_currency=environ.get('FEE_CURRENCY') or None,
            fee_currency2=environ.get('FEE_CURRENCY2') or None,
            fee_currency_directory=environ.get('FEE_CURRENCY_DIRECTORY_ADDR') or None,
            token_address=environ.get('TOKEN_ADDR') or None,
            compiled_test_contract=environ.get('COMPILED_TEST_CONTRACT') or None,
            network=environ.get('NETWORK') or None,
        )

    @property
    def chain(self) -> ChainConfig:
        if self.network:
            return select_chain(self.network)
        return dev_chain(rpc_url=self.rpc_url or DEV_RPC_URL)

    def missing(self, *names: str) -> list[str]:
        return [name for name in names if getattr(self, name) is None]
