from budget_game.events import CHECKOUT_COMMITTED, EventBus
from budget_game.functional import (
    EMPTY_CART, Left, Right, error_code, failure,
)


def test_publish_runs_handlers_in_order():
    bus = EventBus()
    bus.subscribe(CHECKOUT_COMMITTED, lambda event, payload: payload["leftover"])
    bus.subscribe(CHECKOUT_COMMITTED, lambda event, payload: event.name)

    results = bus.publish(CHECKOUT_COMMITTED, {"leftover": 7000})

    assert results == [7000, CHECKOUT_COMMITTED]


def test_publish_without_subscribers():
    assert EventBus().publish("NOTHING", {}) == []


def test_unsubscribe():
    bus = EventBus()
    calls = []

    def handler(event, payload):
        calls.append(payload)

    bus.subscribe(CHECKOUT_COMMITTED, handler)
    bus.unsubscribe(CHECKOUT_COMMITTED, handler)
    bus.unsubscribe(CHECKOUT_COMMITTED, handler)
    bus.publish(CHECKOUT_COMMITTED, {"x": 1})

    assert calls == []
    assert bus.subscribers(CHECKOUT_COMMITTED) == 0


def test_either_results():
    assert Right(5).map(lambda x: x * 2) == Right(10)
    assert Left("e").map(lambda x: x * 2) == Left("e")
    assert Right(2).bind(lambda x: Left("bad")).get_error() == "bad"
    assert Left("e").get_or_else(0) == 0


def test_failure_payload():
    result = failure(EMPTY_CART, "nothing to buy", month=4)
    assert result.is_left()
    assert result.get_error() == {"error": EMPTY_CART, "message": "nothing to buy", "month": 4}
    assert error_code(result) == EMPTY_CART
    assert error_code(Right(1)) == ""
