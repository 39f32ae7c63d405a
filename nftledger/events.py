from dataclasses import dataclass, asdict
from typing import Optional

from nftledger.logger import get_logger


@dataclass(frozen=True)
class TransferEvent:
    """A token moved. sender is None for a mint, to is None for a burn."""
    status: bool
    sender: Optional[str]
    to: Optional[str]
    token_id: int

    def to_dict(self):
        return {
            'status': self.status,
            'from': self.sender,
            'to': self.to,
            'token_id': self.token_id
        }


@dataclass(frozen=True)
class ApprovalEvent:
    status: bool
    owner: Optional[str]
    spender: Optional[str]
    token_id: int

    def to_dict(self):
        return asdict(self)


class EventSink:
    def emit(self, event):
        raise NotImplementedError


class MemorySink(EventSink):
    def __init__(self):
        self.events = []

    def emit(self, event):
        self.events.append(event)

    def clear(self):
        self.events = []

    def __len__(self):
        return len(self.events)


class LogSink(EventSink):
    def __init__(self, name='Events'):
        self.log = get_logger(name)

    def emit(self, event):
        self.log.info('{} {}'.format(type(event).__name__, event.to_dict()))
