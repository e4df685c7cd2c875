'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

hierarchical logging scopes

a Log owns the top-level logger ("tb") and knows where to read the current device
cycle; Scopes are named children of it (tb.kernel, tb.kernel.scoreboard) and every
message they write is prefixed with that cycle

several Logs may share the logger names; each record carries the Log it was written
through, and a verbose Log echoes only its own records

writing returns an Outcome; only a Fatal message raises (KernelAbort), an Error is
recorded and the run continues
'''

import logging
import sys

from .common import KernelAbort, Outcome, Severity


SEP = '.'


class Log:
    def __init__(self, name = 'tb', cycle_source = None):
        self.name = name
        self.logger = logging.getLogger(name)
        self.cycle_source = cycle_source
        self.handler = None
        self.saved_level = None

    def cycle(self):
        return 0 if self.cycle_source is None else int(self.cycle_source())

    def bind_cycle(self, cycle_source):
        self.cycle_source = cycle_source

    def set_verbose(self, stream = None, level = logging.DEBUG):
        'echo everything written through this log to a stream (stdout by default)'
        if self.handler is None:
            self.handler = logging.StreamHandler(stream or sys.stdout)
            self.handler.setFormatter(logging.Formatter('%(message)s'))
            self.handler.addFilter(self.owns)
            self.logger.addHandler(self.handler)
            self.saved_level = self.logger.level
        self.logger.setLevel(level)

    def owns(self, record):
        return getattr(record, 'ladder_log', None) is self

    def close(self):
        'stop echoing and put the logger level back as set_verbose found it'
        if self.handler is not None:
            self.logger.removeHandler(self.handler)
            self.logger.setLevel(self.saved_level)
            self.handler = None
            self.saved_level = None

    def create_scope(self):
        return Scope(self)


class Scope:
    def __init__(self, log, parent = None, name = None):
        self.log = log
        self.parent = parent
        if parent is None:
            self.name = log.name
        else:
            self.name = parent.name + SEP + name
        self.logger = logging.getLogger(self.name)

    def create_child(self, name):
        return Scope(self.log, self, name)

    def write(self, severity, message):
        cycle = self.log.cycle()
        self.logger.log(int(severity), '%d: %s', cycle, message, extra = {'ladder_log': self.log})
        outcome = Outcome(severity, message, cycle)
        if severity.is_fatal:
            raise KernelAbort(f'Fatal raised: {message}', outcome)
        return outcome

    def debug(self, message):
        return self.write(Severity.Debug, message)

    def info(self, message):
        return self.write(Severity.Info, message)

    def warning(self, message):
        return self.write(Severity.Warning, message)

    def error(self, message):
        return self.write(Severity.Error, message)

    def fatal(self, message):
        return self.write(Severity.Fatal, message)
