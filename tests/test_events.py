from txtlint.ast import TxtNode
from txtlint.lint import EventDispatcher, exit_key
from txtlint.parser import parse_text


def _node() -> TxtNode:
    return parse_text("x")


def test_publish_calls_handlers_in_subscription_order() -> None:
    dispatcher = EventDispatcher()
    calls: list[str] = []
    dispatcher.subscribe("Str", lambda node: calls.append("first"))
    dispatcher.subscribe("Str", lambda node: calls.append("second"))
    dispatcher.subscribe("Paragraph", lambda node: calls.append("paragraph"))

    dispatcher.publish("Str", _node())

    assert calls == ["first", "second"]


def test_publish_without_subscribers_is_a_no_op() -> None:
    dispatcher = EventDispatcher()

    dispatcher.publish("Str", _node())

    assert dispatcher.keys() == ()


def test_exit_keys_are_separate_events() -> None:
    dispatcher = EventDispatcher()
    calls: list[str] = []
    dispatcher.subscribe(exit_key("Str"), lambda node: calls.append("exit"))

    dispatcher.publish("Str", _node())
    dispatcher.publish("Str:exit", _node())

    assert exit_key("Str") == "Str:exit"
    assert calls == ["exit"]


def test_unsubscribe_removes_the_latest_identical_handler() -> None:
    dispatcher = EventDispatcher()
    calls: list[str] = []

    def handler(node: TxtNode) -> None:
        calls.append("handler")

    dispatcher.subscribe("Str", handler)
    dispatcher.subscribe("Str", handler)
    dispatcher.unsubscribe("Str", handler)

    assert dispatcher.subscriber_count("Str") == 1
    dispatcher.unsubscribe("Str", handler)
    assert dispatcher.subscriber_count("Str") == 0
    assert "Str" not in dispatcher.keys()
    dispatcher.unsubscribe("Str", handler)


def test_handler_subscribed_during_publish_waits_for_next_event() -> None:
    dispatcher = EventDispatcher()
    calls: list[str] = []

    def late(node: TxtNode) -> None:
        calls.append("late")

    def subscribing(node: TxtNode) -> None:
        calls.append("subscribing")
        dispatcher.subscribe("Str", late)

    dispatcher.subscribe("Str", subscribing)
    dispatcher.publish("Str", _node())
    assert calls == ["subscribing"]

    dispatcher.unsubscribe("Str", subscribing)
    dispatcher.publish("Str", _node())
    assert calls == ["subscribing", "late"]


def test_handler_exceptions_propagate() -> None:
    dispatcher = EventDispatcher()

    def failing(node: TxtNode) -> None:
        raise KeyError("boom")

    dispatcher.subscribe("Str", failing)

    try:
        dispatcher.publish("Str", _node())
    except KeyError:
        pass
    else:
        raise AssertionError("Expected handler KeyError to propagate")


def test_unsubscribe_all_clears_every_key() -> None:
    dispatcher = EventDispatcher()
    dispatcher.subscribe("Str", lambda node: None)
    dispatcher.subscribe("Document:exit", lambda node: None)

    dispatcher.unsubscribe_all()

    assert dispatcher.keys() == ()
