import enum

from dataclasses import dataclass, field, replace

from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from hexbytes import HexBytes

DEAD_ADDRESS = to_checksum_address('0x00000000000000000000000000000000deadbeef')


class TxType(enum.Enum):
    LEGACY = 'legacy'
    EIP2930 = 'eip2930'
    EIP1559 = 'eip1559'
    CIP64 = 'cip64'
    # Deprecated since the Cel2 fork, only used to check the node rejects them
    CIP42 = 'cip42'
    CELO_LEGACY = 'celo-legacy'

    @property
    def type_id(self) -> int:
        return _TYPE_IDS[self]

    @property
    def uses_gas_price(self) -> bool:
        return self in (TxType.LEGACY, TxType.EIP2930, TxType.CELO_LEGACY)


_TYPE_IDS = {
    TxType.LEGACY: 0x00,
    TxType.EIP2930: 0x01,
    TxType.EIP1559: 0x02,
    TxType.CIP64: 0x7b,
    TxType.CIP42: 0x7c,
    TxType.CELO_LEGACY: 0x00,
}


@dataclass
class TransactionRequest:
    sender: LocalAccount
    to: str | None
    value: int = 0
    gas: int | None = None
    fee_currency: str | None = None
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None
    gas_price: int | None = None
    nonce: int | None = None
    data: bytes = b''
    access_list: list = field(default_factory=list)
    tx_type: TxType | None = None
    chain_id: int | None = None

    @property
    def resolved_type(self) -> TxType:
        if self.tx_type is not None:
            return self.tx_type
        if self.fee_currency:
            return TxType.CIP64
        if self.gas_price is not None:
            return TxType.EIP2930 if self.access_list else TxType.LEGACY
        return TxType.EIP1559

    def with_fields(self, **changes) -> 'TransactionRequest':
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Transaction dict in the shape eth_account signs."""
        tx_type = self.resolved_type
        tx = {
            'to': to_checksum_address(self.to) if self.to is not None else None,
            'value': self.value,
            'gas': self.gas,
            'nonce': self.nonce,
            'chainId': self.chain_id,
            'data': HexBytes(self.data),
        }
        if self.to is None:
            del tx['to']
        if tx_type == TxType.LEGACY:
            tx['gasPrice'] = self.gas_price
        elif tx_type == TxType.EIP2930:
            tx['type'] = tx_type.type_id
            tx['gasPrice'] = self.gas_price
            tx['accessList'] = self.access_list
        elif tx_type == TxType.EIP1559:
            tx['type'] = tx_type.type_id
            tx['maxFeePerGas'] = self.max_fee_per_gas
            tx['maxPriorityFeePerGas'] = self.max_priority_fee_per_gas
            tx['accessList'] = self.access_list
        else:
            raise ValueError(f'{tx_type.value} transactions are not signed by eth_account')
        return tx


@dataclass(frozen=True)
class SignedTransaction:
    raw_transaction: HexBytes
    hash: HexBytes
    request: TransactionRequest
