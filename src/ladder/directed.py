'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

directed tests

a directed test writes its stimulus up front into an instruction queue, then the
kernel pops from the queue once per cycle

    class AddThenClear(Directed):
        def program(self):
            self.push_back(UpdateCommand.add(0, key = 5, volume = 10))
            self.wait_cycles(2)
            self.push_back(UpdateCommand.clear(0), QueryCommand.make(0, 0))

prologue() defaults to a reset and a wait for the device to finish initialising,
epilogue() to enough idle cycles for every notification to drain out of the device
'''

import collections
import enum
from dataclasses import dataclass, field

from .config import Config
from .kernel import Kernel, Status
from .log import Log
from .transaction import QueryCommand, UpdateCommand


class Opcode(enum.Enum):
    WaitUntilNotBusy = enum.auto()
    WaitCycles = enum.auto()
    Emit = enum.auto()
    ApplyReset = enum.auto()
    Note = enum.auto()
    EndSimulation = enum.auto()


@dataclass
class Instruction:
    op: Opcode = Opcode.EndSimulation
    n: int = 0
    uc: UpdateCommand = field(default_factory = UpdateCommand)
    qc: QueryCommand = field(default_factory = QueryCommand)
    text: str = ''
    started: bool = False


IDLE = (UpdateCommand(), QueryCommand(), Status.Continue)


class Directed:
    def __init__(self, config = Config, log = None):
        self.config = config
        self.log = log or Log()
        self.instructions = collections.deque()
        self.scope = None
        self.scoreboard = None

    @property
    def name(self):
        return type(self).__name__

    def prologue(self):
        self.apply_reset()
        self.wait_until_not_busy()

    def program(self):
        assert False, 'abstract base method called; a directed test must define program()'

    def epilogue(self):
        self.wait_cycles(self.config.update_pipe_delay + 1)

    def build(self, harness):
        'fill the instruction queue and attach to the harness cycle counter'
        self.log.bind_cycle(harness.tb_cycle)
        self.scope = self.log.create_scope().create_child(self.name)

        self.instructions.clear()
        self.prologue()
        self.program()
        self.epilogue()
        self.instructions.append(Instruction(Opcode.EndSimulation))

    def run(self, harness):
        'run the test through a kernel, return True if nothing mismatched'
        self.build(harness)
        kernel = Kernel(harness, self.config, self.scope.create_child('kernel'))
        self.scoreboard = kernel.run(self)
        return self.report()

    def report(self):
        if not self.scoreboard.passed:
            self.scope.error(f'{len(self.scoreboard.mismatches)} mismatch(es) in {self.scoreboard.checks} checks')
        return self.scoreboard.passed

    # stimulus

    def push_back(self, *commands):
        'emit one update and/or one query command, in either order, on the same cycle'
        i = Instruction(Opcode.Emit)
        for c in commands:
            if isinstance(c, UpdateCommand):
                i.uc = c
            elif isinstance(c, QueryCommand):
                i.qc = c
            else:
                raise TypeError(f'cannot emit {type(c).__name__}')
        self.instructions.append(i)

    def wait_cycles(self, n = 1):
        if n > 0:
            self.instructions.append(Instruction(Opcode.WaitCycles, n))

    def wait_until_not_busy(self):
        self.instructions.append(Instruction(Opcode.WaitUntilNotBusy))

    def apply_reset(self, cycles = None):
        '''hold the device in reset for this many rising edges of clk

        reset is asserted on one negedge and rescinded `cycles` negedges later, so
        the instruction takes cycles + 1 negedges and the device samples rst high
        on exactly `cycles` rising edges
        '''
        n =self.config.reset_cycles if cycles is None else cycles
        self.instructions.append(Instruction(Opcode.ApplyReset, max(1, n)))

    def note(self, text):
        self.instructions.append(Instruction(Opcode.Note, text = text))

    # kernel callback

    def on_negedge_clk(self, harness):
        d = self.instructions
        while d:
            i = d[0]
            if i.op is Opcode.Note:
                self.scope.info(i.text)
                d.popleft()
                continue

            if i.op is Opcode.WaitUntilNotBusy:
                if not harness.busy():
                    self.scope.info('Initialization complete!')
                    d.popleft()
                return IDLE

            if i.op is Opcode.WaitCycles:
                i.n -= 1
                if i.n <= 0:
                    d.popleft()
                return IDLE

            if i.op is Opcode.Emit:
                d.popleft()
                return (i.uc, i.qc, Status.Continue)

            if i.op is Opcode.ApplyReset:
                if not i.started:
                    i.started = True
                    return (UpdateCommand(), QueryCommand(), Status.ApplyReset)
                i.n -= 1
                if i.n <= 0:
                    d.popleft()
                    return (UpdateCommand(), QueryCommand(), Status.RescindReset)
                return IDLE

            if i.op is Opcode.EndSimulation:
                self.scope.info('Simulation complete!')
                d.popleft()
                return (UpdateCommand(), QueryCommand(), Status.Terminate)

        return (UpdateCommand(), QueryCommand(), Status.Terminate)
