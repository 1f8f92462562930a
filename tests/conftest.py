import eth_account
import pytest

# Well known dev key, never funded anywhere that matters
TEST_PRIVKEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
FEE_CURRENCY = "0x765DE816845861e75A25fCA122bb6898B8B1282a"


def pytest_configure(config):
    config.addinivalue_line("markers", "e2e: needs a running node, see tests/e2e/conftest.py")


@pytest.fixture
def account():
    return eth_account.Account.from_key(TEST_PRIVKEY)
