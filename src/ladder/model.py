'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

reference model of the context table

one bounded list of entries per context, kept sorted by key
one update command per cycle mutates at most one context and may produce a notification
that the head (smallest key) of that context has changed

notification convention
    a clear or an eviction of the head reports the value the head was
    an add to an empty context reports the value the head becomes

FIXME
    an add that overflows a full context drops the largest entry without raising any
    notification; the device behaviour for this case is not checked anywhere so it is
    not modelled beyond the drop (on_overflow exists for diagnostics only)
'''

from .common import StimulusFault
from .config import Config
from .transaction import Cmd, Entry, NotifyResponse, QueryResponse


class ContextTable:
    def __init__(self, config = Config, on_overflow = None):
        self.config = config
        self.on_overflow = on_overflow
        self.contexts = [[] for _ in range(config.context_n)]

    def reset(self):
        for entries in self.contexts:
            entries.clear()

    def __len__(self):
        return len(self.contexts)

    def context(self, context_id):
        StimulusFault.insist(
            0 <= context_id < self.config.context_n,
            f'context id {context_id} out of range [0, {self.config.context_n})')
        return self.contexts[context_id]

    def entries(self, context_id):
        return tuple(Entry(e.key, e.volume) for e in self.context(context_id))

    def head(self, context_id):
        ctxt = self.context(context_id)
        return Entry(ctxt[0].key, ctxt[0].volume) if ctxt else None

    def update(self, uc):
        'apply one update command, return the predicted notification'
        if not uc.valid:
            return NotifyResponse()

        ctxt = self.context(uc.context_id)
        nr = NotifyResponse()

        if uc.cmd is Cmd.Clr:
            if ctxt:
                nr = NotifyResponse.make(uc.context_id, ctxt[0].key, ctxt[0].volume)
            ctxt.clear()

        elif uc.cmd is Cmd.Add:
            if not ctxt:
                # by convention, the incoming key/volume is reported as the new head
                nr = NotifyResponse.make(uc.context_id, uc.key, uc.volume)
            ctxt.append(Entry(uc.key, uc.volume))
            ctxt.sort(key = lambda e: e.key)
            if len(ctxt) > self.config.entries_n:
                dropped = ctxt.pop()
                if self.on_overflow is not None:
                    self.on_overflow(uc.context_id, dropped)

        elif uc.cmd in (Cmd.Del, Cmd.Rep):
            index = next((i for i,e in enumerate(ctxt) if e.key == uc.key), None)
            if index is None:
                # context empty or key absent: the command is a nop
                return nr

            if index == 0:
                nr = NotifyResponse.make(uc.context_id, ctxt[0].key, ctxt[0].volume)

            if uc.cmd is Cmd.Rep:
                ctxt[index].volume = uc.volume
            else:
                del ctxt[index]

        return nr

    def query(self, qc):
        'answer one query command as the device would'
        if not qc.valid:
            return QueryResponse()

        ctxt = self.context(qc.context_id)
        StimulusFault.insist(qc.rank >= 0, f'negative query rank {qc.rank}')
        if qc.rank >= len(ctxt):
            # key and volume of an errored response are don't-care
            return QueryResponse.make(0, 0, True, len(ctxt))

        e = ctxt[qc.rank]
        return QueryResponse.make(e.key, e.volume, False, len(ctxt))

    def __str__(self):
        lines = []
        for i,ctxt in enumerate(self.contexts):
            if ctxt:
                lines.append(f'{i}: [{", ".join(str(e) for e in ctxt)}]')
        return '\n'.join(lines) or '(empty)'
