from nftledger.db.driver import LedgerDriver, get_driver
from nftledger.events import MemorySink
from nftledger.execution.access import is_exported, is_view
from nftledger.execution.executor import Executor
from nftledger.ledger import Ledger
from nftledger import config
from functools import partial
import inspect


class AbstractLedger:
    def __init__(self, contract, signer, executor: Executor, funcs):
        self.contract = contract
        self.signer = signer
        self.executor = executor
        self.functions = funcs

        # each function is a partial that allows the signer to be overridden per call
        for func in funcs:
            setattr(self, func, partial(self._abstract_function_call,
                                        signer=self.signer,
                                        executor=self.executor,
                                        func=func))

    def keys(self):
        return self.executor.ledger._driver.get_contract_keys(self.contract)

    def quick_read(self, variable, key=None, args=None):
        a = []

        if key is not None:
            a.append(key)

        if args is not None and isinstance(args, list):
            a.extend(args)

        k = self.executor.ledger._driver.make_key(contract=self.contract, variable=variable, args=a)
        return self.executor.ledger._driver.get(k)

    def _abstract_function_call(self, signer, executor, func, **kwargs):
        output = executor.execute(signer=signer,
                                  function_name=func,
                                  kwargs=kwargs)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']


class LedgerClient:
    def __init__(self, signer=config.DEFAULT_SIGNER,
                 name='Collection',
                 driver: LedgerDriver=None,
                 sink=None,
                 contract=config.LEDGER_CONTRACT,
                 controllers=None):

        self.raw_driver = driver if driver is not None else get_driver()
        self.sink = sink if sink is not None else MemorySink()
        self.signer = signer
        self.name = name
        self.contract = contract

        # The signer that creates the collection controls it unless told otherwise
        self.controllers = list(controllers) if controllers is not None else [signer]

        self._seed()

    def _seed(self):
        self.ledger = Ledger(name=self.name,
                             driver=self.raw_driver,
                             sink=self.sink,
                             contract=self.contract,
                             controllers=self.controllers)

        self.executor = Executor(ledger=self.ledger)

    def flush(self):
        # flushes db and seeds a fresh collection
        self.raw_driver.flush()

        if isinstance(self.sink, MemorySink):
            self.sink.clear()

        self._seed()

    def get_functions(self):
        funcs = []
        for name, member in inspect.getmembers(self.ledger, predicate=inspect.ismethod):
            if name.startswith(config.PRIVATE_METHOD_PREFIX):
                continue
            if is_exported(member) or is_view(member):
                funcs.append(name)
        return funcs

    # Returns abstract ledger which has partial methods mapped to each exported function.
    def get_ledger(self, signer=None):
        return AbstractLedger(contract=self.contract,
                              signer=signer or self.signer,
                              executor=self.executor,
                              funcs=self.get_functions())

    def execute(self, function_name, signer=None, **kwargs):
        return self.executor.execute(signer=signer or self.signer,
                                     function_name=function_name,
                                     kwargs=kwargs)
