'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

transient value types exchanged with the device each cycle

    UpdateCommand   clear/add/delete/replace one context
    QueryCommand    read the entry at some rank of one context
    QueryResponse   answer to a query, one cycle later
    NotifyResponse  the head of a context changed, four cycles after the update

the default-constructed object of each type is the invalid one; the other fields
are then meaningless and are neither driven nor compared
'''

import enum
from dataclasses import dataclass, fields

from .common import to_string


class Cmd(enum.Enum):
    Clr = 0
    Add = 1
    Del = 2
    Rep = 3


class Transaction:
    'shared printing; all subclasses are frozen dataclasses with a valid flag'

    def __str__(self):
        if not self.valid:
            return f'{type(self).__name__}(invalid)'
        attributes = (f'{f.name}={self._field_str(f.name)}' for f in fields(self) if f.name != 'valid')
        return f'{type(self).__name__}({", ".join(attributes)})'

    def _field_str(self, name):
        value = getattr(self, name)
        if isinstance(value, bool):
            return to_string(value)
        if isinstance(value, enum.Enum):
            return value.name
        return str(value)


@dataclass(frozen = True)
class UpdateCommand(Transaction):
    valid: bool = False
    context_id: int = 0
    cmd: Cmd = Cmd.Clr
    key: int = 0
    volume: int = 0

    @classmethod
    def clear(cls, context_id):
        return cls(True, context_id, Cmd.Clr)

    @classmethod
    def add(cls, context_id, key, volume):
        return cls(True, context_id, Cmd.Add, key, volume)

    @classmethod
    def delete(cls, context_id, key):
        return cls(True, context_id, Cmd.Del, key)

    @classmethod
    def replace(cls, context_id, key, volume):
        return cls(True, context_id, Cmd.Rep, key, volume)


@dataclass(frozen = True)
class QueryCommand(Transaction):
    valid: bool = False
    context_id: int = 0
    rank: int = 0

    @classmethod
    def make(cls, context_id, rank):
        return cls(True, context_id, rank)


@dataclass(frozen = True)
class QueryResponse(Transaction):
    valid: bool = False
    key: int = 0
    volume: int = 0
    error: bool = False
    list_size: int = 0

    @classmethod
    def make(cls, key, volume, error, list_size):
        return cls(True, key, volume, error, list_size)


@dataclass(frozen = True)
class NotifyResponse(Transaction):
    valid: bool = False
    context_id: int = 0
    key: int = 0
    volume: int = 0

    @classmethod
    def make(cls, context_id, key, volume):
        return cls(True, context_id, key, volume)


@dataclass
class Entry:
    'one (key, volume) pair held in a context; ordered by key alone'
    key: int
    volume: int

    def __lt__(self, other):
        return self.key < other.key

    def __str__(self):
        return f'({self.key},{self.volume})'
