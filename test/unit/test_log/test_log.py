import logging

import pytest

from cgsclient.errors import ProtocolError
from cgsclient.log import TRACE, PlayerLogAdapter, level_for


@pytest.mark.parametrize(
    "debug, level",
    [(-1, logging.WARNING), (0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (3, TRACE), (9, TRACE)],
)
def test_level_for(debug, level):
    assert level_for(debug) == level


def test_trace_level_name():
    assert logging.getLevelName(TRACE) == "TRACE"


def test_adapter_prefix_and_extras(caplog):
    caplog.set_level(TRACE, logger="cgsclient")
    log = PlayerLogAdapter(logging.getLogger("cgsclient.test"), "bot")

    log.info("hello %s", "there", fct="send_move")
    log.trace("details")

    first, second = caplog.records
    assert first.getMessage() == "[bot] (send_move) hello there"
    assert first.player == "bot"
    assert first.operation == "send_move"
    assert second.levelno == TRACE
    assert second.getMessage() == "[bot] (-) details"


def test_quiet_by_default(caplog):
    caplog.set_level(logging.WARNING, logger="cgsclient")
    log = PlayerLogAdapter(logging.getLogger("cgsclient.test"), "bot")
    log.debug("hidden", fct="op")
    assert caplog.records == []


def test_fatal_failure_is_logged(caplog, sock, conn):
    caplog.set_level(logging.INFO, logger="cgsclient")
    sock.feed("NOK")

    with pytest.raises(ProtocolError):
        conn.send("get_move", "GET_MOVE")

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].player == "tester"
    assert errors[0].operation == "get_move"
    assert "does not acknowledge" in errors[0].getMessage()
