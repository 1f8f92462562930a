from .confirm import SendResult, replace_transaction, submit_and_confirm, wait_for_receipt_within_blocks
from .config import E2EConfig
from .errors import SubmissionRejected, ValidationError, is_underpriced, is_unregistered_fee_currency
from .exchange import ExchangeRate, get_rate
from .network import ALFAJORES, ChainConfig, connect, dev_chain, select_chain
from .rpcconnection import RpcConnection
from .transaction import DEAD_ADDRESS, SignedTransaction, TransactionRequest, TxType
