from dataclasses import dataclass

FEE_CURRENCY_DIRECTORY_ABI = [
    {
        'type': 'function',
        'name': 'getExchangeRate',
        'stateMutability': 'view',
        'inputs': [{'name': 'token', 'type': 'address'}],
        'outputs': [
            {'name': 'numerator', 'type': 'uint256'},
            {'name': 'denominator', 'type': 'uint256'},
        ],
    },
]


@dataclass(frozen=True)
class ExchangeRate:
    """Price of one fee-currency unit as numerator/denominator native units."""
    numerator: int
    denominator: int

    def to_fee_currency(self, native_amount: int) -> int:
        return native_amount * self.numerator // self.denominator

    def to_native(self, fee_currency_amount: int) -> int:
        return fee_currency_amount * self.denominator // self.numerator


def get_rate(connection, directory_address: str, fee_currency: str) -> ExchangeRate:
    # Read fresh on every call, rates move between blocks
    numerator, denominator = connection.read_contract(
        directory_address, FEE_CURRENCY_DIRECTORY_ABI, 'getExchangeRate', [fee_currency]
    )
    return ExchangeRate(numerator, denominator)
