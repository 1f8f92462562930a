import logging

import eth_account
import requests
import urllib3

from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import TransactionNotFound, Web3RPCError

from .celo_tx import CELO_TX_CLASSES, sign_celo_transaction
from .errors import SubmissionRejected
from .transaction import SignedTransaction, TransactionRequest

logger = logging.getLogger(__name__)

# Fee suggestions pad the base fee by 20% to survive a base fee increase next block
BASE_FEE_MULTIPLIER = (12, 10)


def to_int(value) -> int:
    if isinstance(value, int):
        return value
    return int(value, 16)


def _multiply_base_fee(value: int) -> int:
    numerator, denominator = BASE_FEE_MULTIPLIER
    return value * numerator // denominator


class RpcConnection:
    def __init__(self, rpc_server: str, chain_id: int | None = None):
        self.rpc_server = rpc_server
        self._chain_id = chain_id

        adapter = requests.adapters.HTTPAdapter(max_retries=urllib3.util.retry.Retry(connect=3, backoff_factor=1))
        session = requests.Session()
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        self.w3 = Web3(Web3.HTTPProvider(rpc_server, session=session))

    def create_account(self, key: str | None = None) -> LocalAccount:
        if key is not None:
            return eth_account.Account.from_key(key)
        return eth_account.Account.create()

    def _request(self, method: str, params: list):
        return self.w3.manager.request_blocking(method, params)

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self.w3.eth.chain_id
        return self._chain_id

    def get_block_number(self) -> int:
        # Raw request so no caching layer can hand back a stale height
        return to_int(self._request('eth_blockNumber', []))

    def get_block(self, block_identifier='latest'):
        return self.w3.eth.get_block(block_identifier)

    def get_base_fee(self) -> int:
        return self.get_block('latest')['baseFeePerGas']

    def get_gas_price(self, fee_currency: str | None = None) -> int:
        params = [fee_currency] if fee_currency else []
        return to_int(self._request('eth_gasPrice', params))

    def get_max_priority_fee(self, fee_currency: str | None = None) -> int:
        params = [fee_currency] if fee_currency else []
        return to_int(self._request('eth_maxPriorityFeePerGas', params))

    def estimate_fees_per_gas(self, fee_currency: str | None = None) -> tuple[int, int]:
        """
        Suggested (max_fee_per_gas, max_priority_fee_per_gas).

        For a fee currency the node quotes both values already converted, so
        the padded gas price is used in place of the native base fee.
        """
        max_priority_fee = self.get_max_priority_fee(fee_currency)
        if fee_currency:
            base = self.get_gas_price(fee_currency)
        else:
            base = self.get_base_fee()
        return _multiply_base_fee(base) + max_priority_fee, max_priority_fee

    def estimate_gas(self, request: TransactionRequest) -> int:
        call = {
            'from': request.sender.address,
            'value': Web3.to_hex(request.value),
            'data': Web3.to_hex(request.data),
        }
        if request.to is not None:
            call['to'] = request.to
        if request.fee_currency:
            call['feeCurrency'] = request.fee_currency
        return to_int(self._request('eth_estimateGas', [call]))

    def get_transaction_count(self, address: str, block_identifier='pending') -> int:
        return self.w3.eth.get_transaction_count(address, block_identifier)

    def prepare_request(self, request: TransactionRequest) -> TransactionRequest:
        """Fill in chain id, nonce, gas and fee fields the caller left unset."""
        changes = {}
        if request.chain_id is None:
            changes['chain_id'] = self.chain_id
        if request.nonce is None:
            changes['nonce'] = self.get_transaction_count(request.sender.address)
        if request.gas is None:
            changes['gas'] = self.estimate_gas(request)

        tx_type = request.resolved_type
        if tx_type.uses_gas_price:
            if request.gas_price is None:
                changes['gas_price'] = _multiply_base_fee(self.get_gas_price(request.fee_currency))
        elif request.max_fee_per_gas is None or request.max_priority_fee_per_gas is None:
            max_fee, max_priority_fee = self.estimate_fees_per_gas(request.fee_currency)
            if request.max_fee_per_gas is None:
                changes['max_fee_per_gas'] = max_fee
            if request.max_priority_fee_per_gas is None:
                changes['max_priority_fee_per_gas'] = max_priority_fee

        prepared = request.with_fields(tx_type=tx_type, **changes)
        logger.debug('prepared %s transaction nonce=%s gas=%s', tx_type.value, prepared.nonce, prepared.gas)
        return prepared

    def sign(self, request: TransactionRequest) -> SignedTransaction:
        if request.resolved_type in CELO_TX_CLASSES:
            return sign_celo_transaction(request)
        signed = request.sender.sign_transaction(request.to_dict())
        return SignedTransaction(
            raw_transaction=HexBytes(signed.raw_transaction),
            hash=HexBytes(signed.hash),
            request=request,
        )

    def submit_raw(self, signed: SignedTransaction) -> HexBytes:
        try:
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        except Web3RPCError as e:
            rejected = SubmissionRejected.from_rpc_error(e, signed.hash)
            logger.info('transaction %s rejected: %s', signed.hash.to_0x_hex(), rejected.message)
            raise rejected from e
        if tx_hash != signed.hash:
            logger.warning('expected txn hash: %s, got %s', signed.hash.to_0x_hex(), tx_hash.to_0x_hex())
        logger.info('submitted tx %s nonce %s', tx_hash.to_0x_hex(), signed.request.nonce)
        return tx_hash

    def send_transaction(self, request: TransactionRequest) -> HexBytes:
        return self.submit_raw(self.sign(self.prepare_request(request)))

    def send_and_wait_for_transaction(self, request: TransactionRequest, timeout: float = 10):
        tx_hash = self.send_transaction(request)
        return self.wait_for_transaction_receipt(tx_hash, timeout)

    def get_receipt(self, tx_hash):
        """Receipt for tx_hash, or None while the transaction is pending."""
        try:
            return self.w3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None

    def wait_for_transaction_receipt(self, tx_hash, timeout: float | None = 120, poll_latency: float = 0.5):
        return self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout, poll_latency)

    def get_transaction(self, tx_hash):
        return self.w3.eth.get_transaction(tx_hash)

    def read_contract(self, address: str, abi: list, function_name: str, args: list):
        contract = self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
        return getattr(contract.functions, function_name)(*args).call()

    def encode_call(self, abi: list, function_name: str, args: list) -> HexBytes:
        contract = self.w3.eth.contract(abi=abi)
        return HexBytes(contract.encode_abi(function_name, args=args))

    def encode_deploy(self, abi: list, bytecode: str, args: list) -> HexBytes:
        contract = self.w3.eth.contract(abi=abi, bytecode=bytecode)
        return HexBytes(contract.constructor(*args).data_in_transaction)
