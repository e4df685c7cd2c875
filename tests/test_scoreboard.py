"""
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder Tests
======================

Scoreboard test, driven by hand one step at a time

* predicted notification surfaces exactly update_pipe_delay steps after the command
* validity mismatch, field mismatch, silent cycles
* mismatches are recorded with the device cycle and do not stop stepping
* query comparison is off by default, on when configured
* reset discards in-flight predictions
"""

import pytest

from ladder import Config, NotifyResponse, QueryCommand, QueryResponse, UpdateCommand

from support import make_scoreboard


def step(sb, uc = None, qc = None, nr = None, qr = None):
    sb.harness.cycle += 1
    sb.apply(uc or UpdateCommand())
    sb.apply(qc or QueryCommand())
    sb.apply(nr or NotifyResponse())
    sb.apply(qr or QueryResponse())
    sb.step()


def test_notify_latency():
    sb = make_scoreboard()
    step(sb, uc = UpdateCommand.add(0, 5, 10))

    heads = []
    for t in range(4):
        nr = NotifyResponse.make(0, 5, 10) if t == 3 else None
        step(sb, nr = nr)
        heads.append(sb.notify_pipe.head())

    assert heads[:3] == [NotifyResponse()] * 3
    assert heads[3] == NotifyResponse.make(0, 5, 10)
    assert sb.passed, [str(m) for m in sb.mismatches]
    assert sb.checks == 5


def test_early_notification_is_a_mismatch():
    sb = make_scoreboard()
    step(sb, uc = UpdateCommand.add(0, 5, 10))
    step(sb)
    step(sb)
    step(sb, nr = NotifyResponse.make(0, 5, 10))
    step(sb)

    assert len(sb.mismatches) == 2
    early, missing = sb.mismatches
    assert early.cycle == 4 and early.fields == ('valid',)
    assert not early.expected.valid and early.actual.valid
    assert missing.cycle == 5 and missing.fields == ('valid',)
    assert missing.expected == NotifyResponse.make(0, 5, 10)


def test_field_mismatch():
    sb = make_scoreboard()
    step(sb, uc = UpdateCommand.add(2, 5, 10))
    for _ in range(3):
        step(sb)
    step(sb, nr = NotifyResponse.make(2, 5, 11))

    assert not sb.passed
    (m,) = sb.mismatches
    assert m.channel == 'notify'
    assert m.fields == ('volume',)
    assert 'volume' in str(m) and 'expected' in str(m)

    # the run goes on and later cycles are still checked
    step(sb, uc = UpdateCommand.clear(2))
    for _ in range(3):
        step(sb)
    step(sb, nr = NotifyResponse.make(2, 5, 10))
    assert len(sb.mismatches) == 1


def test_mismatch_is_logged(caplog):
    sb = make_scoreboard()
    with caplog.at_level('ERROR', logger = 'tb'):
        step(sb, nr = NotifyResponse.make(1, 1, 1))
    assert any('notify mismatch' in r.getMessage() for r in caplog.records)
    assert caplog.records[-1].getMessage().startswith('1: ')


def test_query_responses_not_checked_by_default():
    sb = make_scoreboard()
    step(sb, qc = QueryCommand.make(0, 0))
    step(sb, qr = QueryResponse.make(1, 2, False, 7))
    assert sb.passed


@pytest.mark.parametrize('actual, passed', [
    (QueryResponse.make(0, 0, True, 1), False),
    (QueryResponse.make(3, 30, False, 1), True),
    (QueryResponse.make(3, 31, False, 1), False),
])
def test_query_responses_checked(actual, passed):
    sb = make_scoreboard(Config.derive(check_query_responses = True))
    step(sb, uc = UpdateCommand.add(0, 3, 30), qc = QueryCommand.make(0, 0))
    step(sb, qr = actual)
    mismatches = [m for m in sb.mismatches if m.channel == 'query']
    assert (not mismatches) == passed


def test_errored_query_ignores_payload():
    sb = make_scoreboard(Config.derive(check_query_responses = True))
    step(sb, qc = QueryCommand.make(0, 3))
    step(sb, qr = QueryResponse.make(123, 456, True, 0))
    assert sb.passed


def test_reset_discards_predictions():
    sb = make_scoreboard()
    step(sb, uc = UpdateCommand.add(0, 5, 10))
    sb.reset()
    for _ in range(6):
        step(sb)
    assert sb.passed
    assert sb.table.entries(0) == ()


def test_apply_rejects_other_types():
    sb = make_scoreboard()
    with pytest.raises(TypeError):
        sb.apply(42)
