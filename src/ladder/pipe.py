'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

fixed-latency delay pipe

DelayPipe[T, D] models the D cycles between a command reaching the device and the
device's response to it becoming visible

a circular buffer of D + 1 slots with independent read and write cursors, D apart,
so a step moves two cursors rather than every slot
    push_back(v)    stage v at the write cursor
    step()          advance both cursors
    head()          the value pushed D steps ago, or T() before the pipe has filled
    clear()         refill with T() and resynchronise the cursors
'''

from .parameterise import Generic


@Generic
def DelayPipe(value_type, delay):
    assert isinstance(delay, int) and delay > 0, f'delay must be a positive integer, not {delay}'

    class DelayPipe_param:
        param_value_type = value_type
        param_delay = delay
        num_slots = delay + 1

        def __init__(self):
            self.slots = [None] * self.num_slots
            self.clear()

        def push_back(self, value):
            self.slots[self.wr_ptr] = value

        def head(self):
            return self.slots[self.rd_ptr]

        def step(self):
            self.wr_ptr = (self.wr_ptr + 1) % self.num_slots
            self.rd_ptr = (self.rd_ptr + 1) % self.num_slots

        def clear(self):
            for i in range(self.num_slots):
                self.slots[i] = self.param_value_type()
            self.wr_ptr = self.param_delay
            self.rd_ptr = 0

        def __len__(self):
            return self.param_delay

        def __repr__(self):
            return f'{type(self).__name__}({", ".join(str(s) for s in self.slots)}; wr={self.wr_ptr}, rd={self.rd_ptr})'

    DelayPipe_param.__name__ = f'DelayPipe_{value_type.__name__}_{delay}'
    DelayPipe_param.__qualname__ = DelayPipe_param.__name__
    return DelayPipe_param
