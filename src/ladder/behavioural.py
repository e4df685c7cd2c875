'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

behavioural device

a cycle-level stand-in for the verilated top, with the same port names, so the
kernel and scoreboard can be run without an HDL simulator (used by the driver by
default and by the test-suite)

written independently of the reference model: sorted insertion rather than
append-and-sort, registers rather than delay pipes

on each rising edge of clk (detected in eval)
    o_tb_cycle counts the edge
    rst high: every context emptied, output registers flushed, busy reloaded
    busy: inputs ignored while the context storage is initialised
    otherwise: the update is applied, then the query, and the results enter the
        notify register chain (update_pipe_delay deep) and the lookup register
        chain (query_pipe_delay deep)

corrupt_notify, if set, is called with (valid, context_id, key, volume) for every
notification entering the chain and returns the tuple to use instead; it exists
for negative tests of the scoreboard
'''

import bisect

from .config import Config
from .transaction import Cmd

INVALID_NOTIFY = (False, 0, 0, 0)
IDLE_LOOKUP = (0, 0, 0, 0)


class BehaviouralDevice:
    def __init__(self, config = Config, corrupt_notify = None):
        self.config = config
        self.corrupt_notify = corrupt_notify

        self.clk = 0
        self.rst = 0
        self.last_clk = 0

        self.i_upd_vld = 0
        self.i_upd_prod_id = 0
        self.i_upd_cmd = 0
        self.i_upd_key = 0
        self.i_upd_size = 0
        self.i_lut_vld = 0
        self.i_lut_prod_id = 0
        self.i_lut_level = 0

        self.o_tb_cycle = 0
        self.o_busy_r = 0

        # per context: parallel sorted key list and volume list
        self.keys = [[] for _ in range(config.context_n)]
        self.volumes = [[] for _ in range(config.context_n)]
        self.busy_count = 0
        self.notify_regs = [INVALID_NOTIFY] * config.update_pipe_delay
        self.lookup_regs = [IDLE_LOOKUP] * config.query_pipe_delay
        self.drive_outputs()

    def eval(self):
        if self.clk and not self.last_clk:
            self.on_posedge()
        self.last_clk = self.clk

    def final(self):
        pass

    def on_posedge(self):
        self.o_tb_cycle += 1

        if self.rst:
            for ctxt in self.keys + self.volumes:
                ctxt.clear()
            self.notify_regs = [INVALID_NOTIFY] * len(self.notify_regs)
            self.lookup_regs = [IDLE_LOOKUP] * len(self.lookup_regs)
            self.busy_count = self.config.context_n
            self.o_busy_r = 1
            self.drive_outputs()
            return

        if self.busy_count:
            # initialising context storage, one context per cycle
            self.busy_count -= 1
            notify = INVALID_NOTIFY
            lookup = IDLE_LOOKUP
        else:
            notify = self.update() if self.i_upd_vld else INVALID_NOTIFY
            lookup = self.lookup() if self.i_lut_vld else IDLE_LOOKUP

        if self.corrupt_notify is not None:
            notify = self.corrupt_notify(*notify)

        self.notify_regs = [notify] + self.notify_regs[:-1]
        self.lookup_regs = [lookup] + self.lookup_regs[:-1]
        self.o_busy_r = int(self.busy_count != 0)
        self.drive_outputs()

    def drive_outputs(self):
        vld, prod_id, key, size = self.notify_regs[-1]
        self.o_lv0_vld_r = int(vld)
        self.o_lv0_prod_id_r = prod_id
        self.o_lv0_key_r = key
        self.o_lv0_size_r = size
        self.o_lut_key, self.o_lut_size, self.o_lut_error, self.o_lut_listsize = self.lookup_regs[-1]

    def update(self):
        prod_id = self.i_upd_prod_id
        keys = self.keys[prod_id]
        volumes = self.volumes[prod_id]
        cmd = Cmd(self.i_upd_cmd)
        key = self.i_upd_key
        size = self.i_upd_size

        if cmd is Cmd.Clr:
            notify = (True, prod_id, keys[0], volumes[0]) if keys else INVALID_NOTIFY
            keys.clear()
            volumes.clear()
            return notify

        if cmd is Cmd.Add:
            notify = INVALID_NOTIFY if keys else (True, prod_id, key, size)
            # after any existing entries with the same key
            position = bisect.bisect_right(keys, key)
            keys.insert(position, key)
            volumes.insert(position, size)
            if len(keys) > self.config.entries_n:
                keys.pop()
                volumes.pop()
            return notify

        # delete or replace
        try:
            position = keys.index(key)
        except ValueError:
            return INVALID_NOTIFY
        notify = (True, prod_id, keys[0], volumes[0]) if position == 0 else INVALID_NOTIFY
        if cmd is Cmd.Rep:
            volumes[position] = size
        else:
            del keys[position]
            del volumes[position]
        return notify

    def lookup(self):
        keys = self.keys[self.i_lut_prod_id]
        volumes = self.volumes[self.i_lut_prod_id]
        level = self.i_lut_level
        if level >= len(keys):
            return (0, 0, 1, len(keys))
        return (keys[level], volumes[level], 0, len(keys))
