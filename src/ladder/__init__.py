'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

golden reference model and scoreboard for the context table block

the block keeps a small sorted list of (key, volume) entries per context, takes one
update and one query per cycle, answers queries one cycle later and notifies changes
of the head of a list four cycles later

    ContextTable    the reference model
    DelayPipe       fixed-latency pipe holding predictions until the device answers
    Scoreboard      lock-step prediction and comparison
    Kernel          clock, reset and per-cycle sequencing around a Harness
    Directed        instruction-queue tests, registered for the ladder-tb driver

the cocotb adapter (ladder.cocotb_tb) is not imported here; it needs cocotb installed

FIXME
    query responses are only compared when check_query_responses is set; the
    lookup interface has no valid output so in-flight updates are not accounted for
    overflow on add drops an entry silently, the device behaviour there is unchecked
'''

from .__about__ import __version__

from .common import LadderException, StimulusFault, KernelAbort, Severity, Outcome
from .config import Config
from .transaction import Cmd, Entry, UpdateCommand, QueryCommand, QueryResponse, NotifyResponse
from .parameterise import Generic
from .pipe import DelayPipe
from .model import ContextTable
from .log import Log, Scope
from .scoreboard import Scoreboard, Mismatch
from .clock import Clock
from .harness import Harness, PortHarness
from .behavioural import BehaviouralDevice
from .kernel import Kernel, Status
from .directed import Directed
from .registry import TestRegistry, TestBuilder, register, default_registry
