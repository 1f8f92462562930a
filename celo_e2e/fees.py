from .exchange import ExchangeRate
from .rpcconnection import RpcConnection


def gas_fees(connection: RpcConnection, rate: ExchangeRate, tip: int) -> tuple[int, int]:
    """
    (max_fee_per_gas, max_priority_fee_per_gas) in fee currency for the
    current base fee plus a native tip.
    """
    base_fee = connection.get_base_fee()
    tip_in_fee_currency = rate.to_fee_currency(tip)
    return rate.to_fee_currency(base_fee) + tip_in_fee_currency, tip_in_fee_currency


def bumped_cap(cap: int, price_bump: float) -> int:
    # Pools require a replacement to pay at least price_bump times the original
    return round(cap * price_bump)
