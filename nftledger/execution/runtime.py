from nftledger import config

RECURSION_LIMIT = 1024


class Context:
    """
    Who is making the current call. The base state describes the host, and
    every call the executor runs pushes its own state on top of it.

    caller is the account the ledger authorizes against, this is the address
    of the ledger itself.
    """
    def __init__(self, base_state, maxlen=RECURSION_LIMIT):
        self._state = []
        self._base_state = base_state
        self._maxlen = maxlen

    def _get_state(self):
        if len(self._state) == 0:
            return self._base_state
        return self._state[-1]

    def _add_state(self, state: dict):
        assert len(self._state) < self._maxlen, 'Call depth exceeded {}.'.format(self._maxlen)
        self._state.append(state)

    def _pop_state(self):
        if len(self._state) > 0:
            self._state.pop(-1)

    @property
    def this(self):
        return self._get_state()['this']

    @property
    def caller(self):
        return self._get_state()['caller']

    def current_caller(self):
        return self.caller

    def self_address(self):
        return self.this


def make_context(this=config.LEDGER_CONTRACT, caller=None):
    return Context({
        'this': this,
        'caller': caller
    })
