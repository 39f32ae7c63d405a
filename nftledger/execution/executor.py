from nftledger.execution.access import is_exported, is_view
from nftledger.exceptions import PermissionDenied
from nftledger.logger import get_logger
from nftledger import config
from copy import deepcopy
import inspect
import traceback


class Executor:
    def __init__(self, ledger, bypass_privates=False):
        self.ledger = ledger
        self.bypass_privates = bypass_privates
        self.log = get_logger('Executor')

    def get_function(self, signer, function_name):
        if not self.bypass_privates and function_name.startswith(config.PRIVATE_METHOD_PREFIX):
            raise PermissionDenied(caller=signer, action='call private method {}'.format(function_name))

        func = getattr(self.ledger, function_name, None)

        if func is None:
            raise AttributeError('Ledger has no function {}'.format(function_name))

        if not (is_exported(func) or is_view(func) or self.bypass_privates):
            raise PermissionDenied(caller=signer, action='call {}'.format(function_name))

        return func

    def check_privileges(self, signer, function_name, kwargs):
        if function_name not in config.PRIVILEGED_FUNCTIONS:
            return

        if self.ledger.is_controller(signer):
            return

        # Holders can always burn what they are allowed to move
        if function_name == 'burn' and self.ledger.is_approved_or_owner(signer, kwargs.get('token_id')):
            return

        raise PermissionDenied(caller=signer, action=function_name)

    def execute(self, signer, function_name, kwargs=None) -> dict:
        kwargs = dict(kwargs or {})
        context = self.ledger.ctx

        context._add_state({
            'caller': signer,
            'this': self.ledger.address
        })

        self.ledger.receipt = None

        try:
            func = self.get_function(signer, function_name)

            # The caller always comes from the context, never from the arguments
            if 'caller' in inspect.signature(func).parameters:
                kwargs['caller'] = context.caller

            self.check_privileges(signer, function_name, kwargs)

            result = func(**kwargs)
            status_code = 0
        except Exception as e:
            result = e
            status_code = 1
            self.log.error(str(e))
            self.log.error(traceback.format_exc())
        finally:
            context._pop_state()

        receipt = self.ledger.receipt or {}

        return {
            'status_code': status_code,
            'result': result,
            'writes': deepcopy(receipt.get('writes', {})),
            'events': list(receipt.get('events', []))
        }
