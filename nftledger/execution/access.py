from contextlib import ContextDecorator
from functools import wraps


class Transaction(ContextDecorator):
    """
    Wraps one mutating ledger call. Writes stay in the driver's pending layer
    and events stay on the ledger until the call returns; then both are
    committed together. Any exception, including one raised by the commit
    itself, rolls both back and propagates.

    Calls made while a transaction is open join it, only the outermost one
    commits.
    """
    def __init__(self, ledger):
        self.ledger = ledger

    def __enter__(self, *args, **kwargs):
        # The outermost call reads through to storage, other writers may have committed since
        if self.ledger._depth == 0:
            self.ledger._driver.reset_cache()

        self.ledger._depth += 1
        return self

    def __exit__(self, exc_type, exc, tb):
        self.ledger._depth -= 1

        if self.ledger._depth > 0:
            return False

        if exc_type is not None:
            self.ledger._driver.rollback()
            self.ledger._pending_events = []
            return False

        try:
            writes = self.ledger._driver.commit()
        except Exception:
            self.ledger._driver.rollback()
            self.ledger._pending_events = []
            raise

        events, self.ledger._pending_events = self.ledger._pending_events, []

        for event in events:
            self.ledger._sink.emit(event)

        self.ledger.receipt = {
            'writes': writes,
            'events': events
        }

        return False


def export(func):
    @wraps(func)
    def _export(self, *args, **kwargs):
        with Transaction(self):
            return func(self, *args, **kwargs)

    _export.__exported__ = True
    return _export


def view(func):
    @wraps(func)
    def _view(self, *args, **kwargs):
        # Queries made outside of a call read through to storage
        if self._depth == 0:
            self._driver.reset_cache()
        return func(self, *args, **kwargs)

    _view.__view__ = True
    return _view


def is_exported(func):
    return getattr(func, '__exported__', False)


def is_view(func):
    return getattr(func, '__view__', False)
