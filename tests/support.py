"""
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder Tests
======================

commonly available test infrastructure

* FakeHarness: only a cycle counter, for driving a scoreboard by hand
* Script: a kernel test body played from a list of per-cycle items
* run_script: a kernel run against the behavioural device
* faulty_device: device factory for the driver's --device option
"""

import collections

from ladder import (
    BehaviouralDevice, Config, Kernel, Log, PortHarness, Scoreboard, Status,
    QueryCommand, UpdateCommand,
)


class FakeHarness:
    def __init__(self):
        self.cycle = 0

    def tb_cycle(self):
        return self.cycle


def make_scoreboard(config = Config):
    harness = FakeHarness()
    scope = Log(cycle_source = harness.tb_cycle).create_scope()
    return Scoreboard(harness, scope, config)


WAIT_NOT_BUSY = object()


def emit(uc = None, qc = None, status = Status.Continue):
    return (uc or UpdateCommand(), qc or QueryCommand(), status)


def idle(n = 1):
    return [emit() for _ in range(n)]


def reset_sequence(cycles = 2):
    return [emit(status = Status.ApplyReset), *idle(cycles - 1), emit(status = Status.RescindReset), WAIT_NOT_BUSY]


class Script:
    '''items are (uc, qc, status) tuples, WAIT_NOT_BUSY, or callables taking the
    harness (run for their side effect, no cycle consumed)
    '''
    def __init__(self, *items):
        self.items = collections.deque()
        for item in items:
            if isinstance(item, list):
                self.items.extend(item)
            else:
                self.items.append(item)
        self.calls = 0

    def on_negedge_clk(self, harness):
        self.calls += 1
        while self.items:
            item = self.items[0]
            if item is WAIT_NOT_BUSY:
                if harness.busy():
                    return None
                self.items.popleft()
                continue
            self.items.popleft()
            if callable(item):
                item(harness)
                continue
            return item
        return emit(status = Status.Terminate)


def run_script(*items, config = Config, device = None):
    device = device or BehaviouralDevice(config)
    harness = PortHarness(device, config)
    kernel = Kernel(harness, config)
    scoreboard = kernel.run(Script(*items, idle(config.update_pipe_delay + 1)))
    return scoreboard, device


def corrupt_volume(valid, context_id, key, volume):
    return (valid, context_id, key, volume + 1 if valid else volume)


def faulty_device(config):
    return BehaviouralDevice(config, corrupt_notify = corrupt_volume)

