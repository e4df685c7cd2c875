'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

cocotb adapter

runs the same scoreboard against the RTL in an HDL simulator; cocotb owns time, so
instead of the sub-tick loop of the kernel the per-cycle sequence runs on every
falling edge of dut.clk, and the reset observation on every rising edge

    @cocotb.test()
    async def smoke(dut):
        passed = await run_directed(dut, SmokeCmds())
        assert passed

the port names are those of the verilated top (see harness.PortHarness)
'''

from cocotb.clock import Clock
from cocotb.triggers import FallingEdge, ReadOnly, RisingEdge

from .config import Config
from .harness import Harness, check_command_fields
from .kernel import Kernel
from .transaction import NotifyResponse, QueryResponse


class CocotbHarness(Harness):
    def __init__(self, dut, config = Config):
        self.dut = dut
        self.config = config

    @property
    def clk(self):
        return int(self.dut.clk.value)

    @clk.setter
    def clk(self, value):
        # the clock is driven by a cocotb Clock coroutine
        pass

    @property
    def rst(self):
        return int(self.dut.rst.value)

    @rst.setter
    def rst(self, value):
        self.dut.rst.value = int(value)

    def drive_update(self, uc):
        dut = self.dut
        dut.i_upd_vld.value = int(uc.valid)
        if uc.valid:
            check_command_fields(self.config, uc.context_id, uc.key, uc.volume)
            dut.i_upd_prod_id.value = uc.context_id
            dut.i_upd_cmd.value = uc.cmd.value
            dut.i_upd_key.value = uc.key
            dut.i_upd_size.value = uc.volume

    def drive_query(self, qc):
        dut = self.dut
        dut.i_lut_vld.value = int(qc.valid)
        if qc.valid:
            check_command_fields(self.config, qc.context_id)
            dut.i_lut_prod_id.value = qc.context_id
            dut.i_lut_level.value = qc.rank

    def sample_notify(self):
        dut = self.dut
        if int(dut.o_lv0_vld_r.value):
            return NotifyResponse.make(
                int(dut.o_lv0_prod_id_r.value), int(dut.o_lv0_key_r.value), int(dut.o_lv0_size_r.value))
        return NotifyResponse()

    def sample_query(self):
        dut = self.dut
        return QueryResponse.make(
            int(dut.o_lut_key.value),
            int(dut.o_lut_size.value),
            int(dut.o_lut_error.value) != 0,
            int(dut.o_lut_listsize.value),
        )

    def busy(self):
        return int(self.dut.o_busy_r.value) != 0

    def in_reset(self):
        return self.rst == 1

    def tb_cycle(self):
        return int(self.dut.o_tb_cycle.value)


async def run_cocotb(harness, test, kernel, period_ns = 10):
    'clock the dut and step the scoreboard until the test terminates, return the scoreboard'
    dut = harness.dut
    scoreboard = kernel.new_scoreboard()
    Clock(dut.clk, period_ns, unit = 'ns').start()
    harness.rst = 0

    do_stepping = True
    while do_stepping:
        await FallingEdge(dut.clk)
        do_stepping = kernel.on_negedge(test)

        await RisingEdge(dut.clk)
        await ReadOnly()
        if harness.in_reset():
            scoreboard.reset()

    return scoreboard


async def run_directed(dut, test, period_ns = 10):
    harness = CocotbHarness(dut, test.config)
    test.build(harness)
    kernel = Kernel(harness, test.config, test.scope.create_child('kernel'))
    test.scoreboard = await run_cocotb(harness, test, kernel, period_ns)
    return test.report()
