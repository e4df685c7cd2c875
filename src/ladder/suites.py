'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

directed tests shipped with the testbench, registered in the default registry

    SmokeCmds           each command once, back to back, with queries
    Reset               reset in the middle of traffic, then check the device is empty
    ContextIsolation    identical keys in every context, cleared one at a time
    Overflow            fill one context past capacity
'''

from .directed import Directed
from .registry import register
from .transaction import QueryCommand, UpdateCommand


@register
class SmokeCmds(Directed):
    def program(self):
        self.note('Add to empty context')
        self.push_back(UpdateCommand.add(0, 5, 10))
        self.push_back(UpdateCommand.add(0, 2, 20), QueryCommand.make(0, 0))
        self.push_back(UpdateCommand.add(0, 9, 30), QueryCommand.make(0, 1))
        self.wait_cycles(2)

        self.note('Replace head then non-head')
        self.push_back(UpdateCommand.replace(0, 2, 21))
        self.push_back(UpdateCommand.replace(0, 9, 31), QueryCommand.make(0, 2))

        self.note('Delete non-head, head, absent key')
        self.push_back(UpdateCommand.delete(0, 5))
        self.push_back(UpdateCommand.delete(0, 2))
        self.push_back(UpdateCommand.delete(0, 100), QueryCommand.make(0, 3))

        self.note('Clear')
        self.push_back(UpdateCommand.clear(0))
        self.push_back(UpdateCommand.clear(0), QueryCommand.make(0, 0))


@register
class Reset(Directed):
    def program(self):
        for context_id in range(min(4, self.config.context_n)):
            self.push_back(UpdateCommand.add(context_id, 10 + context_id, context_id))
        # reset while notifications are still in flight through the device
        self.apply_reset()
        self.wait_until_not_busy()
        for context_id in range(min(4, self.config.context_n)):
            self.push_back(QueryCommand.make(context_id, 0))
            self.push_back(UpdateCommand.clear(context_id))
        self.push_back(UpdateCommand.add(0, 1, 1))


@register
class ContextIsolation(Directed):
    def program(self):
        for context_id in range(self.config.context_n):
            self.push_back(UpdateCommand.add(context_id, 7, context_id))
        for context_id in range(self.config.context_n):
            self.push_back(UpdateCommand.add(context_id, 3, 100 + context_id), QueryCommand.make(context_id, 1))
        for context_id in reversed(range(self.config.context_n)):
            self.push_back(UpdateCommand.clear(context_id), QueryCommand.make(context_id, 0))


@register
class Overflow(Directed):
    def program(self):
        n = self.config.entries_n
        for i in range(n):
            self.push_back(UpdateCommand.add(0, 2 * (i + 1), i))

        self.note('Add beyond the largest key is dropped')
        self.push_back(UpdateCommand.add(0, 2 * n + 10, 99), QueryCommand.make(0, n - 1))

        self.note('Add below the largest key evicts the largest')
        self.push_back(UpdateCommand.add(0, 1, 98), QueryCommand.make(0, n - 1))
        self.push_back(QueryCommand.make(0, 0))
        self.push_back(QueryCommand.make(0, n))
