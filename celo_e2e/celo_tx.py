"""
Encoding and signing of the Celo-specific transaction types.

eth_account only knows the Ethereum envelopes, so the fee-currency types are
built here as plain RLP lists and signed over their keccak hash.
"""
from dataclasses import dataclass
from typing import List, Optional

import rlp

from eth_keys import keys
from eth_utils import keccak, to_canonical_address
from hexbytes import HexBytes

from .errors import ValidationError
from .transaction import SignedTransaction, TransactionRequest, TxType


def validate_length(value: bytes, expected_length: int, field_name: str):
    if len(value) != expected_length:
        raise ValidationError(f"{field_name} must be {expected_length} bytes, got {len(value)}")


def validate_non_negative(**values: Optional[int]):
    for name, value in values.items():
        if value is None:
            raise ValidationError(f"{name} must be set before signing")
        if value < 0:
            raise ValidationError(f"{name} must be non-negative, got {value}")


def encode_address(address: Optional[str]) -> bytes:
    if address is None:
        return b''
    try:
        return to_canonical_address(address)
    except ValueError as e:
        raise ValidationError(f"invalid address {address!r}: {e}")


def encode_access_list(access_list) -> list:
    encoded = []
    for entry in access_list:
        storage_keys = [bytes(HexBytes(k)) for k in entry['storageKeys']]
        for key in storage_keys:
            validate_length(key, 32, "storage key")
        encoded.append([encode_address(entry['address']), storage_keys])
    return encoded


@dataclass
class CeloDynamicFeeTxV2:
    """CIP-64 transaction, type 0x7b."""
    chain_id: int
    nonce: int
    max_priority_fee_per_gas: int
    max_fee_per_gas: int
    gas: int
    to: bytes
    value: int
    data: bytes
    access_list: list
    fee_currency: bytes

    tx_type = TxType.CIP64

    def validate(self):
        validate_non_negative(
            chain_id=self.chain_id,
            nonce=self.nonce,
            max_priority_fee_per_gas=self.max_priority_fee_per_gas,
            max_fee_per_gas=self.max_fee_per_gas,
            gas=self.gas,
            value=self.value,
        )
        if self.to:
            validate_length(self.to, 20, "to")
        validate_length(self.fee_currency, 20, "fee_currency")

    def to_list(self) -> List:
        return [
            self.chain_id,
            self.nonce,
            self.max_priority_fee_per_gas,
            self.max_fee_per_gas,
            self.gas,
            self.to,
            self.value,
            self.data,
            self.access_list,
            self.fee_currency,
        ]

    def signing_hash(self) -> bytes:
        return keccak(bytes([self.tx_type.type_id]) + rlp.encode(self.to_list()))

    def encode(self, v: int, r: int, s: int) -> bytes:
        return bytes([self.tx_type.type_id]) + rlp.encode(self.to_list() + [v, r, s])

    @classmethod
    def from_request(cls, request: TransactionRequest):
        return cls(
            chain_id=request.chain_id,
            nonce=request.nonce,
            max_priority_fee_per_gas=request.max_priority_fee_per_gas,
            max_fee_per_gas=request.max_fee_per_gas,
            gas=request.gas,
            to=encode_address(request.to),
            value=request.value,
            data=bytes(request.data),
            access_list=encode_access_list(request.access_list),
            fee_currency=encode_address(request.fee_currency),
        )


@dataclass
class CeloDynamicFeeTx:
    """CIP-42 transaction, type 0x7c. Gateway fees are always left empty."""
    chain_id: int
    nonce: int
    max_priority_fee_per_gas: int
    max_fee_per_gas: int
    gas: int
    fee_currency: bytes
    gateway_fee_recipient: bytes
    gateway_fee: int
    to: bytes
    value: int
    data: bytes
    access_list: list

    tx_type = TxType.CIP42

    def validate(self):
        validate_non_negative(
            chain_id=self.chain_id,
            nonce=self.nonce,
            max_priority_fee_per_gas=self.max_priority_fee_per_gas,
            max_fee_per_gas=self.max_fee_per_gas,
            gas=self.gas,
            gateway_fee=self.gateway_fee,
            value=self.value,
        )
        if self.fee_currency:
            validate_length(self.fee_currency, 20, "fee_currency")

    def to_list(self) -> List:
        return [
            self.chain_id,
            self.nonce,
            self.max_priority_fee_per_gas,
            self.max_fee_per_gas,
            self.gas,
            self.fee_currency,
            self.gateway_fee_recipient,
            self.gateway_fee,
            self.to,
            self.value,
            self.data,
            self.access_list,
        ]

    def signing_hash(self) -> bytes:
        return keccak(bytes([self.tx_type.type_id]) + rlp.encode(self.to_list()))

    def encode(self, v: int, r: int, s: int) -> bytes:
        return bytes([self.tx_type.type_id]) + rlp.encode(self.to_list() + [v, r, s])

    @classmethod
    def from_request(cls, request: TransactionRequest):
        return cls(
            chain_id=request.chain_id,
            nonce=request.nonce,
            max_priority_fee_per_gas=request.max_priority_fee_per_gas,
            max_fee_per_gas=request.max_fee_per_gas,
            gas=request.gas,
            fee_currency=encode_address(request.fee_currency),
            gateway_fee_recipient=b'',
            gateway_fee=0,
            to=encode_address(request.to),
            value=request.value,
            data=bytes(request.data),
            access_list=encode_access_list(request.access_list),
        )


@dataclass
class CeloLegacyTx:
    """Pre-Cel2 legacy transaction carrying fee currency and gateway fields, EIP-155 signed."""
    chain_id: int
    nonce: int
    gas_price: int
    gas: int
    fee_currency: bytes
    gateway_fee_recipient: bytes
    gateway_fee: int
    to: bytes
    value: int
    data: bytes

    tx_type = TxType.CELO_LEGACY

    def validate(self):
        validate_non_negative(
            chain_id=self.chain_id,
            nonce=self.nonce,
            gas_price=self.gas_price,
            gas=self.gas,
            gateway_fee=self.gateway_fee,
            value=self.value,
        )
        if self.fee_currency:
            validate_length(self.fee_currency, 20, "fee_currency")

    def to_list(self) -> List:
        return [
            self.nonce,
            self.gas_price,
            self.gas,
            self.fee_currency,
            self.gateway_fee_recipient,
            self.gateway_fee,
            self.to,
            self.value,
            self.data,
        ]

    def signing_hash(self) -> bytes:
        return keccak(rlp.encode(self.to_list() + [self.chain_id, 0, 0]))

    def encode(self, v: int, r: int, s: int) -> bytes:
        # EIP-155 recovery id
        return rlp.encode(self.to_list() + [self.chain_id * 2 + 35 + v, r, s])

    @classmethod
    def from_request(cls, request: TransactionRequest):
        return cls(
            chain_id=request.chain_id,
            nonce=request.nonce,
            gas_price=request.gas_price,
            gas=request.gas,
            fee_currency=encode_address(request.fee_currency),
            gateway_fee_recipient=b'',
            gateway_fee=0,
            to=encode_address(request.to),
            value=request.value,
            data=bytes(request.data),
        )


CELO_TX_CLASSES = {
    TxType.CIP64: CeloDynamicFeeTxV2,
    TxType.CIP42: CeloDynamicFeeTx,
    TxType.CELO_LEGACY: CeloLegacyTx,
}


def sign_celo_transaction(request: TransactionRequest) -> SignedTransaction:
    tx_class = CELO_TX_CLASSES.get(request.resolved_type)
    if tx_class is None:
        raise ValidationError(f"{request.resolved_type.value} is not a Celo transaction type")

    tx = tx_class.from_request(request)
    tx.validate()

    private_key = keys.PrivateKey(bytes(request.sender.key))
    signature = private_key.sign_msg_hash(tx.signing_hash())
    raw = tx.encode(signature.v, signature.r, signature.s)
    return SignedTransaction(raw_transaction=HexBytes(raw), hash=HexBytes(keccak(raw)), request=request)
