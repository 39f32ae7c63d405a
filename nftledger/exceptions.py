class LedgerError(Exception):
    """
    The base exception for the ledger. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class PermissionDenied(LedgerError):
    """
    The caller holds none of the rights the mutation needs:
    ownership, a per token approval, an operator approval
    or a controller seat.

    :ivar caller: The account that made the call
    :ivar action: The operation that was refused
    """
    fmt = "Account '{caller}' is not allowed to {action}"


class InvalidApproval(LedgerError):
    """
    An account attempted to approve itself, either as the
    spender of its own token or as its own operator.

    :ivar account: The account on both sides of the approval
    """
    fmt = "Account '{account}' cannot approve itself"


class ForbiddenDestination(LedgerError):
    """
    A token was sent to the ledger's own address, where
    nobody could ever move it again.

    :ivar to: The rejected destination
    """
    fmt = "Tokens cannot be sent to the ledger address '{to}'"


class InsufficientBalance(LedgerError):
    fmt = "Account '{account}' holds {balance} tokens, cannot remove token {token_id}"


class InvalidAccount(LedgerError):
    fmt = "'{account}' is not a valid account"


class InvalidTokenId(LedgerError):
    fmt = "'{token_id}' is not a valid token ID"


class InvalidName(LedgerError):
    fmt = "'{name}' is not a valid collection name"


class TokenExists(LedgerError):
    fmt = "Token {token_id} has already been minted"


class UIntOverflow(LedgerError):
    """
    Unsigned integer arithmetic produced a value outside
    of [0, UINT_MAX].

    :ivar value: The out of range result
    """
    fmt = 'Unsigned integer overflow, result {value} is out of range'


class DatabaseDriverNotFound(LedgerError):
    """
    Could not find the specified database driver when
    looking for it

    :ivar driver: The name of the database driver the
                  the user attempted to load
    :ivar known_drivers: The list of known drivers
                         currently supported
    """
    fmt = "Unknown database driver '{driver}', known drivers '{known_drivers}'"
