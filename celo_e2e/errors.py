from web3.exceptions import Web3RPCError

UNDERPRICED = 'replacement transaction underpriced'
UNREGISTERED_FEE_CURRENCY = 'unregistered fee-currency address'


class ValidationError(Exception):
    pass


class SubmissionRejected(Exception):
    """The node refused a raw transaction before accepting it into the pool."""

    def __init__(self, message: str, tx_hash: bytes | None = None):
        super().__init__(message)
        self.message = message
        self.tx_hash = tx_hash

    @classmethod
    def from_rpc_error(cls, err: Web3RPCError, tx_hash: bytes | None = None) -> 'SubmissionRejected':
        return cls(rpc_error_message(err), tx_hash)


def rpc_error_message(err: Exception) -> str:
    # Web3RPCError keeps the raw JSON-RPC response; prefer the node's own text
    rpc_response = getattr(err, 'rpc_response', None)
    if isinstance(rpc_response, dict):
        error = rpc_response.get('error')
        if isinstance(error, dict) and error.get('message'):
            return error['message']
    if isinstance(err, SubmissionRejected):
        return err.message
    return str(err)


def is_underpriced(err: Exception) -> bool:
    return UNDERPRICED in rpc_error_message(err)


def is_unregistered_fee_currency(err: Exception) -> bool:
    return UNREGISTERED_FEE_CURRENCY in rpc_error_message(err)
