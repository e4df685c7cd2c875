'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

exception classes

severity tags and the outcome record returned when a message is written
    only a fatal outcome unwinds the stack, everything else is returned to the caller
'''

import enum
from dataclasses import dataclass


class LadderException(Exception):
    @classmethod
    def insist(cls, condition, *args):
        if not condition:
            raise cls(*args)

    @classmethod
    def subclass(cls, class_name):
        return type(cls)(class_name, (cls,), {})

# the testbench itself is malformed (bad context id, bad configuration)
StimulusFault = LadderException.subclass('StimulusFault')

# a fatal message was written to a log scope
KernelAbort = LadderException.subclass('KernelAbort')


class Severity(enum.IntEnum):
    Debug = 10
    Info = 20
    Warning = 30
    Error = 40
    Fatal = 50

    @property
    def is_fatal(self):
        return self is Severity.Fatal


@dataclass(frozen = True)
class Outcome:
    'what happened when a message was written to a scope'
    severity: Severity
    message: str
    cycle: int = 0

    @property
    def failed(self):
        return self.severity >= Severity.Error


def to_string(b):
    return 'true' if b else 'false'
