from nftledger.db.driver import LedgerDriver
from nftledger.db.orm import Variable, Hash
from nftledger.events import TransferEvent, ApprovalEvent, LogSink
from nftledger.execution.access import Transaction, export, view
from nftledger.execution.runtime import make_context
from nftledger.exceptions import PermissionDenied, InvalidApproval, ForbiddenDestination, InsufficientBalance, \
    InvalidAccount, InvalidTokenId, InvalidName, TokenExists
from nftledger.logger import get_logger
from nftledger.stdlib.uint import UInt
from nftledger import config


def is_valid_account(account):
    return isinstance(account, str) and \
           0 < len(account) <= config.MAX_ACCOUNT_SIZE and \
           config.DELIMITER not in account and \
           config.INDEX_SEPARATOR not in account


def is_valid_token_id(token_id):
    return type(token_id) == int and 0 <= token_id <= config.UINT_MAX


class Ledger:
    """
    Ownership and approval state for one collection of non-fungible tokens.

    Every token is either nonexistent or owned by exactly one account, with at
    most one approved spender. Owners can additionally name operators who may
    move all of their tokens. All state lives in Hashes under the ledger's
    contract name; nothing outside this class writes to them.

    Mutating methods are exported: each one is a single transaction that
    either commits its writes and events together or has no effect at all.
    """
    def __init__(self, name, driver: LedgerDriver=None, context=None, sink=None,
                 contract=config.LEDGER_CONTRACT, controllers=()):
        self.contract = contract

        self._driver = driver if driver is not None else LedgerDriver()
        self._sink = sink if sink is not None else LogSink()
        self.ctx = context if context is not None else make_context(this=contract)

        self._pending_events = []
        self._depth = 0
        self.receipt = None

        self.log = get_logger('Ledger')

        self._name = Variable(contract, config.NAME_VARIABLE, driver=self._driver, t=str)
        self._supply = Variable(contract, config.SUPPLY_VARIABLE, driver=self._driver, default_value=UInt(0))

        self._owners = Hash(contract, config.OWNERS_HASH, driver=self._driver)
        self._balances = Hash(contract, config.BALANCES_HASH, driver=self._driver, default_value=UInt(0))
        self._approvals = Hash(contract, config.APPROVALS_HASH, driver=self._driver)
        self._operators = Hash(contract, config.OPERATORS_HASH, driver=self._driver, default_value=False)
        self._controllers = Hash(contract, config.CONTROLLERS_HASH, driver=self._driver, default_value=False)

        with Transaction(self):
            self._initialize(name, controllers)

    @property
    def address(self):
        return self.contract

    def _initialize(self, name, controllers):
        stored = self._name.get()

        if stored is None:
            if not isinstance(name, str) or name == '':
                raise InvalidName(name=name)
            self._name.set(name)
        elif name is not None and name != stored:
            self.log.warning('Ledger {} is already named {}, ignoring {}'.format(self.contract, stored, name))

        for account in controllers:
            self._require_account(account)
            self._controllers[account] = True

    # Queries

    @view
    def name(self):
        return self._name.get()

    @view
    def balance_of(self, owner):
        if not is_valid_account(owner):
            return 0
        return int(self._balances[owner])

    @view
    def owner_of(self, token_id):
        return self._owners[self._require_token_id(token_id)]

    @view
    def get_approved(self, token_id):
        return self._approvals[self._require_token_id(token_id)]

    @view
    def is_approved_for_all(self, owner, operator):
        if not is_valid_account(owner) or not is_valid_account(operator):
            return False
        return self._operators[owner, operator] is True

    @view
    def is_approved_or_owner(self, spender, token_id):
        owner = self.owner_of(token_id)

        if owner is None or not is_valid_account(spender):
            return False

        return spender == owner or \
               spender == self.get_approved(token_id) or \
               self.is_approved_for_all(owner, spender)

    @view
    def total_supply(self):
        return int(self._supply.get())

    @view
    def tokens_of(self, owner):
        if not is_valid_account(owner):
            return []

        owned = self._owners.items()
        return sorted(int(token_id) for token_id, account in owned.items() if account == owner)

    @view
    def is_controller(self, account):
        if not is_valid_account(account):
            return False
        return self._controllers[account] is True

    # Approvals

    @export
    def approve(self, caller, to, token_id):
        token_id = self._require_token_id(token_id)

        # An empty spender revokes the current approval
        to = to or None
        if to is not None:
            self._require_account(to)

        owner = self.owner_of(token_id)

        if owner is None:
            raise PermissionDenied(caller=caller, action='approve spenders for unminted token {}'.format(token_id))

        if to == owner:
            raise InvalidApproval(account=to)

        if caller != owner and not self.is_approved_for_all(owner, caller):
            raise PermissionDenied(caller=caller, action='approve spenders for token {}'.format(token_id))

        if to is None:
            del self._approvals[token_id]
        else:
            self._approvals[token_id] = to

        self.log.debug('{} approved {} for token {}'.format(caller, to, token_id))
        self._emit(ApprovalEvent(True, owner, to, token_id))

    @export
    def set_approval_for_all(self, caller, operator, approved):
        if operator == caller:
            raise InvalidApproval(account=caller)

        if not is_valid_account(caller):
            raise PermissionDenied(caller=caller, action='name operators')

        self._require_account(operator)

        self._operators[caller, operator] = bool(approved)
        self.log.debug('{} set operator {} to {}'.format(caller, operator, bool(approved)))

    # Transfers

    @export
    def transfer_from(self, caller, sender, to, token_id):
        token_id = self._require_token_id(token_id)

        if to == self.ctx.this:
            raise ForbiddenDestination(to=to)

        self._require_account(to)

        if not self.is_approved_or_owner(caller, token_id):
            raise PermissionDenied(caller=caller, action='transfer token {}'.format(token_id))

        self._clear_approval(sender, token_id)
        self._remove_token_from(sender, token_id)
        self._add_token_to(to, token_id)

        self.log.debug('{} moved token {} from {} to {}'.format(caller, token_id, sender, to))
        self._emit(TransferEvent(True, sender, to, token_id))

    @export
    def mint(self, to, token_id):
        token_id = self._require_token_id(token_id)

        if to == self.ctx.this:
            raise ForbiddenDestination(to=to)

        self._require_account(to)

        if self.owner_of(token_id) is not None:
            raise TokenExists(token_id=token_id)

        del self._approvals[token_id]
        self._add_token_to(to, token_id)
        self._supply.set(self._supply.get() + 1)

        self.log.debug('Minted token {} to {}'.format(token_id, to))
        self._emit(TransferEvent(True, None, to, token_id))

    @export
    def burn(self, owner, token_id):
        token_id = self._require_token_id(token_id)

        self._clear_approval(owner, token_id)
        self._remove_token_from(owner, token_id)

        del self._owners[token_id]
        self._supply.set(self._supply.get() - 1)

        self.log.debug('Burned token {} of {}'.format(token_id, owner))
        self._emit(TransferEvent(True, owner, None, token_id))

    # Controllers

    @export
    def add_controller(self, caller, account):
        if not self.is_controller(caller):
            raise PermissionDenied(caller=caller, action='add controllers')

        self._require_account(account)
        self._controllers[account] = True

    @export
    def revoke_controller(self, caller, account):
        if not self.is_controller(caller):
            raise PermissionDenied(caller=caller, action='revoke controllers')

        if account == caller:
            raise InvalidApproval(account=caller)

        self._require_account(account)
        self._controllers[account] = False

    # State transitions, only reached from exported methods

    def _clear_approval(self, owner, token_id):
        if owner is None or owner != self.owner_of(token_id):
            raise PermissionDenied(caller=owner, action='release token {}'.format(token_id))

        del self._approvals[token_id]

    def _remove_token_from(self, owner, token_id):
        if owner is None or owner != self.owner_of(token_id):
            raise PermissionDenied(caller=owner, action='release token {}'.format(token_id))

        balance = self._balances[owner]
        if balance < 1:
            raise InsufficientBalance(account=owner, balance=int(balance), token_id=token_id)

        self._balances[owner] = balance - 1

    def _add_token_to(self, to, token_id):
        self._owners[token_id] = to
        self._balances[to] = self._balances[to] + 1

    def _emit(self, event):
        self._pending_events.append(event)

    def _require_account(self, account):
        if not is_valid_account(account):
            raise InvalidAccount(account=account)
        return account

    def _require_token_id(self, token_id):
        if not is_valid_token_id(token_id):
            raise InvalidTokenId(token_id=token_id)
        return token_id
