'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

testbench configuration

parameters are class attributes; override them by subclassing
    class Config(Config):
        context_n = 4

or from the driver command line
    --args 'context_n=4,check_query_responses=true'

the two pipe delays must match the device pipeline depth exactly, otherwise every
comparison desynchronises
'''

from .common import StimulusFault


class Config:
    context_n = 16
    entries_n = 16
    key_bits = 16
    volume_bits = 16

    query_pipe_delay = 1
    update_pipe_delay = 4

    ticks_per_half_period = 5
    reset_cycles = 4
    check_query_responses = False
    max_cycles = None

    @classmethod
    def parameters(cls):
        return {n:getattr(cls, n) for n in dir(cls) if not n.startswith('_') and not callable(getattr(cls, n))}

    @classmethod
    def derive(cls, **overrides):
        'new configuration class with the given parameters replaced'
        known = cls.parameters()
        for name in overrides:
            StimulusFault.insist(name in known, f'unknown configuration parameter: {name}')
        return type(cls.__name__, (cls,), overrides)

    @classmethod
    def parse_args(cls, text):
        ''' parse driver arguments of the form 'name=value,name=value'

        values are converted to int or bool where they look like one
        '''
        overrides = {}
        for item in filter(None, (x.strip() for x in (text or '').split(','))):
            StimulusFault.insist('=' in item, f'malformed argument (expected name=value): {item}')
            name,value = (x.strip() for x in item.split('=', 1))
            overrides[name] = convert_value(value)
        return cls.derive(**overrides)

    @classmethod
    def key_mask(cls):
        return (1 << cls.key_bits) - 1

    @classmethod
    def volume_mask(cls):
        return (1 << cls.volume_bits) - 1


def convert_value(value):
    lowered = value.lower()
    if lowered in ('true', 'yes', 'on'):
        return True
    if lowered in ('false', 'no', 'off'):
        return False
    if lowered == 'none':
        return None
    try:
        return int(value, 0)
    except ValueError:
        return value
