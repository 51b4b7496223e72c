import logging

import pytest

from txtlint.ast import TxtNode
from txtlint.config import TextLintConfig
from txtlint.errors import RuleConfigurationError
from txtlint.lint import EventDispatcher, RuleContext, RuleEntry, RuleRegistry, TextLintEngine


def _noop(node: TxtNode) -> None:
    return None


def _str_rule(context: RuleContext, options: object) -> dict[str, object]:
    return {"Str": _noop}


def _setup(
    registry: RuleRegistry,
    rules: dict[str, object],
    rules_config: dict[str, object] | None = None,
    config: TextLintConfig | None = None,
) -> tuple[RuleEntry, ...]:
    return registry.setup_rules(
        rules,
        rules_config,
        config,
        context_factory=lambda rule_id, cfg: RuleContext(rule_id, TextLintEngine(), cfg),
    )


def test_rules_are_registered_in_mapping_order() -> None:
    registry = RuleRegistry(EventDispatcher())

    entries = _setup(registry, {"b": _str_rule, "a": _str_rule})

    assert [entry.rule_id for entry in entries] == ["b", "a"]
    assert registry.rule_ids == ("b", "a")
    assert "a" in registry
    assert len(registry) == 2


def test_factory_receives_options_and_missing_entry_is_none() -> None:
    seen: dict[str, object] = {}

    def recording(context: RuleContext, options: object) -> dict[str, object]:
        seen[context.rule_id] = options
        return {}

    registry = RuleRegistry(EventDispatcher())
    _setup(registry, {"with": recording, "without": recording}, {"with": {"max": 3}})

    assert seen == {"with": {"max": 3}, "without": None}


def test_disabled_rule_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    called: list[str] = []

    def factory(context: RuleContext, options: object) -> dict[str, object]:
        called.append(context.rule_id)
        return {"Str": _noop}

    dispatcher = EventDispatcher()
    registry = RuleRegistry(dispatcher)
    with caplog.at_level(logging.DEBUG, logger="txtlint.lint.registry"):
        entries = _setup(registry, {"off": factory, "on": factory}, {"off": False})

    assert called == ["on"]
    assert [entry.rule_id for entry in entries] == ["on"]
    assert dispatcher.subscriber_count("Str") == 1
    assert "skip disabled rule 'off'" in caplog.text


def test_config_rules_config_is_overridden_by_explicit_options() -> None:
    seen: dict[str, object] = {}

    def recording(context: RuleContext, options: object) -> dict[str, object]:
        seen[context.rule_id] = options
        return {}

    config = TextLintConfig(rules_config={"a": {"max": 1}, "b": False})
    registry = RuleRegistry(EventDispatcher())
    _setup(registry, {"a": recording, "b": recording}, {"a": {"max": 2}}, config)

    assert seen == {"a": {"max": 2}}


def test_non_callable_definition_is_rejected() -> None:
    registry = RuleRegistry(EventDispatcher())

    with pytest.raises(RuleConfigurationError) as excinfo:
        _setup(registry, {"missing": None})

    assert excinfo.value.rule_id == "missing"
    assert "Definition for rule 'missing' was not found." in str(excinfo.value)


def test_factory_error_is_wrapped_with_rule_id() -> None:
    def failing(context: RuleContext, options: object) -> dict[str, object]:
        raise TypeError("bad options")

    registry = RuleRegistry(EventDispatcher())

    try:
        _setup(registry, {"failing": failing})
    except RuleConfigurationError as exc:
        assert exc.rule_id == "failing"
        assert "bad options" in str(exc)
        assert isinstance(exc.__cause__, TypeError)
    else:
        raise AssertionError("Expected RuleConfigurationError for failing factory")


@pytest.mark.parametrize(
    "handlers",
    [
        ["Str"],
        {"": _noop},
        {":exit": _noop},
        {"Str:exit:more": _noop},
        {"Str": "not callable"},
    ],
)
def test_invalid_handlers_are_rejected(handlers: object) -> None:
    registry = RuleRegistry(EventDispatcher())

    with pytest.raises(RuleConfigurationError):
        _setup(registry, {"bad": lambda context, options: handlers})

    assert len(registry) == 0


def test_failed_setup_rolls_back_the_whole_call() -> None:
    dispatcher = EventDispatcher()
    registry = RuleRegistry(dispatcher)
    _setup(registry, {"kept": _str_rule})

    def failing(context: RuleContext, options: object) -> dict[str, object]:
        raise RuntimeError("boom")

    with pytest.raises(RuleConfigurationError):
        _setup(registry, {"added": _str_rule, "failing": failing})

    assert registry.rule_ids == ("kept",)
    assert dispatcher.subscriber_count("Str") == 1


def test_duplicate_rule_id_is_rejected() -> None:
    registry = RuleRegistry(EventDispatcher())
    _setup(registry, {"a": _str_rule})

    with pytest.raises(RuleConfigurationError, match="already registered"):
        _setup(registry, {"a": _str_rule})

    assert len(registry) == 1


def test_reset_is_idempotent() -> None:
    dispatcher = EventDispatcher()
    registry = RuleRegistry(dispatcher)
    _setup(registry, {"a": _str_rule})

    registry.reset()
    registry.reset()

    assert len(registry) == 0
    assert dispatcher.keys() == ()
    _setup(registry, {"a": _str_rule})
    assert registry.rule_ids == ("a",)
