'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

scoreboard

runs the reference model in lock-step with the device; once per cycle the kernel
applies the commands it drove and the responses it sampled, then calls step()

order within step() is fixed
    1. advance both delay pipes
    2. apply the update command, push the predicted notification
    3. apply the query command, push the predicted query response
    4. compare the query response (only when check_query_responses is set)
    5. compare the notification predicted update_pipe_delay cycles ago with the sampled one

a mismatch is recorded and logged, it never unwinds; the caller decides what a
non-empty mismatch list means
'''

from dataclasses import dataclass

from .config import Config
from .model import ContextTable
from .pipe import DelayPipe
from .transaction import NotifyResponse, QueryCommand, QueryResponse, UpdateCommand


@dataclass(frozen = True)
class Mismatch:
    cycle: int
    channel: str
    expected: object
    actual: object
    fields: tuple

    def __str__(self):
        return (f'{self.channel} mismatch on {", ".join(self.fields)}: '
            f'expected {self.expected}, actual {self.actual}')


class Scoreboard:
    def __init__(self, harness, scope, config = Config):
        self.harness = harness
        self.scope = scope
        self.config = config
        self.table = ContextTable(config, on_overflow = self.on_overflow)

        self.notify_pipe = DelayPipe[NotifyResponse, config.update_pipe_delay]()
        self.queries_pipe = DelayPipe[QueryResponse, config.query_pipe_delay]()

        self.uc = UpdateCommand()
        self.qc = QueryCommand()
        self.qr = QueryResponse()
        self.nr = NotifyResponse()

        self.mismatches = []
        self.checks = 0
        self.num_steps = 0

    @property
    def passed(self):
        return not self.mismatches

    def reset(self):
        'empty the table and discard every prediction still in flight'
        self.table.reset()
        self.notify_pipe.clear()
        self.queries_pipe.clear()

    def apply(self, value):
        if isinstance(value, UpdateCommand):
            self.uc = value
        elif isinstance(value, QueryCommand):
            self.qc = value
        elif isinstance(value, QueryResponse):
            self.qr = value
        elif isinstance(value, NotifyResponse):
            self.nr = value
        else:
            raise TypeError(f'cannot apply {type(value).__name__} to the scoreboard')

    def step(self):
        self.notify_pipe.step()
        self.queries_pipe.step()

        self.handle_uc()
        self.handle_qc()
        self.handle_qr()
        self.handle_nr()
        self.num_steps += 1

    def handle_uc(self):
        # no command means no notification is owed update_pipe_delay cycles from now
        self.notify_pipe.push_back(self.table.update(self.uc))

    def handle_qc(self):
        self.queries_pipe.push_back(self.table.query(self.qc))

    def handle_qr(self):
        if not self.config.check_query_responses:
            return

        predicted = self.queries_pipe.head()
        if not predicted.valid:
            return
        actual = self.qr
        names = ['error', 'list_size']
        if not predicted.error:
            names += ['key', 'volume']
        self.compare('query', predicted, actual, names)

    def handle_nr(self):
        predicted = self.notify_pipe.head()
        actual = self.nr
        if predicted.valid != actual.valid:
            self.record('notify', predicted, actual, ('valid',))
        elif predicted.valid:
            self.compare('notify', predicted, actual, ['context_id', 'key', 'volume'])
        else:
            self.checks += 1

    def compare(self, channel, predicted, actual, names):
        differing = tuple(n for n in names if getattr(predicted, n) != getattr(actual, n))
        if differing:
            self.record(channel, predicted, actual, differing)
        else:
            self.checks += 1

    def record(self, channel, predicted, actual, differing):
        self.checks += 1
        mismatch = Mismatch(self.harness.tb_cycle(), channel, predicted, actual, differing)
        self.mismatches.append(mismatch)
        self.scope.error(str(mismatch))
        return mismatch

    def on_overflow(self, context_id, dropped):
        self.scope.debug(f'context {context_id} full, dropped {dropped}')
