'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

Ladder Clock type

counts kernel sub-ticks and says when the clock line is due to toggle
the period is two half-periods of ticks_per_half_period ticks each; the tick unit
is arbitrary, only the even split between the phases matters
'''


class Clock:
    def __init__(self, ticks_per_half_period, level = 0):
        assert ticks_per_half_period > 0, 'clock half-period must be at least one tick'
        self.half_period = ticks_per_half_period
        self.level = level
        self.time = 0
        self.next_event_time = ticks_per_half_period
        self.num_events = 0

    @property
    def num_cycles(self):
        return self.num_events // 2

    def tick(self):
        'advance time by one tick, return whether the clock toggles at this tick'
        self.time += 1
        return self.time >= self.next_event_time

    def about_to_fall(self):
        return bool(self.level) and self.time >= self.next_event_time

    def event(self):
        '''toggle the clock line

        update next-event time of clock object
        '''
        self.level = 0 if self.level else 1
        self.next_event_time += self.half_period
        self.num_events += 1
        return self.level
