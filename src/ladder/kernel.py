'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

clocked test kernel

one kernel owns one harness and one scoreboard for the duration of a run; nothing
is shared between kernels so several can run in one process

each sub-tick the kernel evaluates the device; the clock line toggles every
ticks_per_half_period ticks, and immediately before each falling edge
    - the command slots are cleared
    - the test is asked for (update, query, status)
    - both commands are driven into the device, both responses are sampled
    - all four are applied to the scoreboard, which steps
    - the status is acted on: ApplyReset, RescindReset, Terminate or Continue

after every eval on the high phase, if the device reset line is asserted the
scoreboard is reset too, whatever the test asked for
'''

import enum

from .clock import Clock
from .config import Config
from .log import Log
from .scoreboard import Scoreboard
from .transaction import QueryCommand, UpdateCommand


class Status(enum.Enum):
    Continue = enum.auto()
    ApplyReset = enum.auto()
    RescindReset = enum.auto()
    Terminate = enum.auto()


class Kernel:
    def __init__(self, harness, config = Config, scope = None):
        self.harness = harness
        self.config = config
        if scope is None:
            log = Log(cycle_source = harness.tb_cycle)
            scope = log.create_scope().create_child('kernel')
        self.scope = scope
        self.scoreboard = None
        self.clock = None

    def run(self, test):
        'run the test to completion, return the scoreboard holding any mismatches'
        harness = self.harness
        self.clock = clock = Clock(self.config.ticks_per_half_period)
        scoreboard = self.new_scoreboard()

        harness.clk = clock.level
        harness.rst = 0
        harness.eval()

        do_stepping = True
        while do_stepping:
            if clock.tick():
                if clock.about_to_fall():
                    do_stepping = self.on_negedge(test)
                harness.clk = clock.event()

            harness.eval()
            if harness.clk and harness.in_reset():
                # device in reset on a rising edge: the model follows
                scoreboard.reset()

        self.scope.debug(f'run ended after {clock.num_cycles} cycles')
        return scoreboard

    def new_scoreboard(self):
        self.scoreboard = Scoreboard(self.harness, self.scope.create_child('scoreboard'), self.config)
        return self.scoreboard

    def on_negedge(self, test):
        'one cycle of stimulus and checking, returns False to stop the run'
        harness = self.harness
        scoreboard = self.scoreboard

        up = UpdateCommand()
        qc = QueryCommand()
        stimulus = test.on_negedge_clk(harness)
        status = Status.Continue
        if stimulus is not None:
            up, qc, status = stimulus
            up = up or UpdateCommand()
            qc = qc or QueryCommand()

        harness.drive(up)
        harness.drive(qc)
        nr = harness.sample_notify()
        qr = harness.sample_query()

        scoreboard.apply(up)
        scoreboard.apply(qc)
        scoreboard.apply(nr)
        scoreboard.apply(qr)
        scoreboard.step()

        if status is Status.ApplyReset:
            scoreboard.reset()
            harness.rst = 1
        elif status is Status.RescindReset:
            harness.rst = 0
        elif status is Status.Terminate:
            return False

        max_cycles = self.config.max_cycles
        if max_cycles is not None and scoreboard.num_steps >= max_cycles:
            self.scope.warning(f'stopping after {max_cycles} cycles, test did not terminate')
            return False
        return True
