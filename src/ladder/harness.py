'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

the device as seen by the kernel and the scoreboard

Harness is the narrow boundary: drive commands, sample responses, a few status
queries, and the device lifecycle (clk, rst, eval, close)

PortHarness maps the boundary onto a verilated-style top whose ports are plain
integer attributes
    update command  i_upd_vld i_upd_prod_id i_upd_cmd i_upd_key i_upd_size
    query command   i_lut_vld i_lut_prod_id i_lut_level
    notify response o_lv0_vld_r o_lv0_prod_id_r o_lv0_key_r o_lv0_size_r
    query response  o_lut_key o_lut_size o_lut_error o_lut_listsize
    status          o_busy_r o_tb_cycle clk rst
'''

from .common import StimulusFault
from .config import Config
from .transaction import NotifyResponse, QueryCommand, QueryResponse, UpdateCommand


class Harness:
    def drive(self, command):
        if isinstance(command, UpdateCommand):
            self.drive_update(command)
        elif isinstance(command, QueryCommand):
            self.drive_query(command)
        else:
            raise TypeError(f'cannot drive {type(command).__name__} into the device')

    def drive_update(self, uc):
        assert False, 'abstract base method called'

    def drive_query(self, qc):
        assert False, 'abstract base method called'

    def sample_notify(self):
        assert False, 'abstract base method called'

    def sample_query(self):
        assert False, 'abstract base method called'

    def busy(self):
        assert False, 'abstract base method called'

    def in_reset(self):
        assert False, 'abstract base method called'

    def tb_cycle(self):
        assert False, 'abstract base method called'

    def eval(self):
        pass

    def close(self):
        pass


def check_command_fields(config, context_id, key = 0, volume = 0):
    'values that cannot be represented on the device ports are a testbench bug'
    StimulusFault.insist(0 <= context_id < config.context_n, f'context id {context_id} out of range')
    StimulusFault.insist(0 <= key <= config.key_mask(), f'key {key} does not fit in {config.key_bits} bits')
    StimulusFault.insist(
        0 <= volume <= config.volume_mask(), f'volume {volume} does not fit in {config.volume_bits} bits')


class PortHarness(Harness):
    def __init__(self, top, config = Config):
        self.top = top
        self.config = config

    @property
    def clk(self):
        return self.top.clk

    @clk.setter
    def clk(self, value):
        self.top.clk = int(value)

    @property
    def rst(self):
        return self.top.rst

    @rst.setter
    def rst(self, value):
        self.top.rst = int(value)

    def drive_update(self, uc):
        top = self.top
        top.i_upd_vld = int(uc.valid)
        if uc.valid:
            check_command_fields(self.config, uc.context_id, uc.key, uc.volume)
            top.i_upd_prod_id = uc.context_id
            top.i_upd_cmd = uc.cmd.value
            top.i_upd_key = uc.key
            top.i_upd_size = uc.volume

    def drive_query(self, qc):
        top = self.top
        top.i_lut_vld = int(qc.valid)
        if qc.valid:
            check_command_fields(self.config, qc.context_id)
            top.i_lut_prod_id = qc.context_id
            top.i_lut_level = qc.rank

    def sample_notify(self):
        top = self.top
        if top.o_lv0_vld_r:
            return NotifyResponse.make(top.o_lv0_prod_id_r, top.o_lv0_key_r, top.o_lv0_size_r)
        return NotifyResponse()

    def sample_query(self):
        # there is no valid output on the lookup interface, the response is always sampled
        top = self.top
        return QueryResponse.make(top.o_lut_key, top.o_lut_size, top.o_lut_error != 0, top.o_lut_listsize)

    def busy(self):
        return self.top.o_busy_r != 0

    def in_reset(self):
        return self.top.rst == 1

    def tb_cycle(self):
        return self.top.o_tb_cycle

    def eval(self):
        self.top.eval()

    def close(self):
        close = getattr(self.top, 'final', None)
        if close is not None:
            close()
