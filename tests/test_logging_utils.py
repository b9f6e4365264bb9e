import logging

import pytest

from visionboard import BoardFormatError, Card, connect, settle
from visionboard.logging_utils import safe_repr


def _card(card_id):
    return Card(id=card_id, kind="state", label=card_id.upper(), x=100.0, y=200.0)


def test_card_collections_are_summarised():
    rendered = safe_repr([_card(str(idx)) for idx in range(6)])

    assert rendered.startswith("[6 card(s): Card('0', state, x=100.0, y=200.0")
    assert rendered.endswith(", ... (+2)]")
    assert "Card('4'" not in rendered


def test_long_values_are_truncated():
    rendered = safe_repr({str(idx): "x" * 100 for idx in range(6)}, max_length=50)

    assert len(rendered) == 50 + len("... (truncated)")
    assert rendered.endswith("... (truncated)")


def test_failed_calls_are_logged_and_reraised(caplog):
    cards = [_card("a"), _card("b")]

    with caplog.at_level(logging.DEBUG, logger="visionboard.board"):
        with pytest.raises(BoardFormatError):
            connect(cards, "a", "a")

    failures = [record for record in caplog.records if record.getMessage() == "Exception in connect"]
    assert len(failures) == 1
    assert failures[0].exc_info[0] is BoardFormatError


def test_settle_trace_omits_the_result(caplog):
    with caplog.at_level(logging.DEBUG, logger="visionboard.physics"):
        settle([_card("a")], 1000.0, 800.0, max_steps=3)

    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Entering settle (args=[[1 card(s): Card('a'") for message in messages)
    assert "Exiting settle" in messages
