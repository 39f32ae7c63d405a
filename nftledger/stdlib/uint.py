from nftledger.config import UINT_MAX
from nftledger.exceptions import UIntOverflow


def check_range(x: int):
    if x < 0 or x > UINT_MAX:
        raise UIntOverflow(value=x)
    return x


class UInt:
    """
    Unsigned, overflow checked integer used for balances and
    supply counters. Results of arithmetic that leave [0, UINT_MAX]
    raise UIntOverflow instead of wrapping around. Floats are refused
    outright so that no fractional value ever reaches a balance.
    """
    def _get_other(self, other):
        if type(other) == UInt:
            return other._i
        elif type(other) == int:
            return other
        raise TypeError('Unsupported operand type for UInt: {}'.format(type(other)))

    def __init__(self, a=0):
        if type(a) == UInt:
            self._i = a._i
        elif type(a) == int:
            self._i = check_range(a)
        elif type(a) == str:
            self._i = check_range(int(a))
        else:
            raise TypeError('Cannot build a UInt from {}'.format(type(a)))

    def __bool__(self):
        return self._i > 0

    def __eq__(self, other):
        try:
            return self._i == self._get_other(other)
        except TypeError:
            return NotImplemented

    def __hash__(self):
        return hash(self._i)

    def __lt__(self, other):
        return self._i < self._get_other(other)

    def __le__(self, other):
        return self._i <= self._get_other(other)

    def __gt__(self, other):
        return self._i > self._get_other(other)

    def __ge__(self, other):
        return self._i >= self._get_other(other)

    def __add__(self, other):
        return UInt(check_range(self._i + self._get_other(other)))

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        return UInt(check_range(self._i - self._get_other(other)))

    def __int__(self):
        return self._i

    def __index__(self):
        return self._i

    def __str__(self):
        return str(self._i)

    def __repr__(self):
        return 'UInt({})'.format(self._i)
