"""
Tests for rule sets and ValidationInterceptor.
"""
import pytest

from starter.core.aspects import (
    Argument,
    AspectConfigurationError,
    LoggingInterceptor,
    Pipeline,
    RuleSet,
    RuleSetRegistry,
    TransactionInterceptor,
    ValidationFailure,
    ValidationInterceptor,
)
from starter.modules.users.domain import SignUpRequest
from starter.modules.users.validation_rules import SIGN_UP, build_rule_registry


def make_request(**overrides):
    data = dict(username="jdoe", email="jdoe@example.com", first_name="John", last_name="Doe", password="Secret123")
    data.update(overrides)
    return SignUpRequest(**data)


def test_rule_set_collects_every_failing_message():
    rules = RuleSet("thing", dict)
    rules.rule_for("name", bool, "name required")
    rules.rule_for("size", lambda v: v > 0, "size must be positive")
    rules.must(lambda d: d.get("name") != "root", "root is reserved")

    assert rules.validate({"name": "x", "size": 1}).is_valid
    result = rules.validate({"name": "root"})
    assert result.errors == ["size must be positive", "root is reserved"]


def test_registry_only_validates_arguments_of_the_target_type():
    registry = build_rule_registry()
    ok = registry.evaluate(SIGN_UP, ())
    assert ok.is_valid

    bad = registry.evaluate(SIGN_UP, (Argument("request", make_request(password="short"), "SignUpRequest"),))
    assert not bad.is_valid
    assert "Password must be at least 8 characters" in bad.errors


def test_sign_up_rules():
    rules = build_rule_registry().get(SIGN_UP)
    assert rules.validate(make_request()).is_valid
    errors = rules.validate(make_request(username="ab", first_name=" ", password="alllowercase")).errors
    assert errors == [
        "Username must be between 3 and 50 characters",
        "First name is required",
        "Password must contain a digit",
        "Password must contain an upper-case letter",
    ]


@pytest.mark.asyncio
async def test_validation_failure_stops_before_the_operation(unit_of_work, recording_logger):
    calls = []

    async def sign_up(request: SignUpRequest):
        calls.append(request)

    wrapped = Pipeline([
        TransactionInterceptor(unit_of_work),
        ValidationInterceptor(build_rule_registry(), SIGN_UP),
        LoggingInterceptor(recording_logger),
    ]).wrap(sign_up)

    with pytest.raises(ValidationFailure) as excinfo:
        await wrapped(make_request(password="weak"))

    assert calls == []
    assert excinfo.value.rule_set == SIGN_UP
    assert "Password must be at least 8 characters" in excinfo.value.errors
    assert unit_of_work.count("commit") == 0
    assert unit_of_work.events == ["begin", "rollback"]


@pytest.mark.asyncio
async def test_valid_arguments_reach_the_operation():
    async def sign_up(request: SignUpRequest):
        return request.username

    wrapped = Pipeline([ValidationInterceptor(build_rule_registry(), SIGN_UP)]).wrap(sign_up)
    assert await wrapped(make_request()) == "jdoe"


def test_unknown_rule_sets_are_configuration_errors():
    registry = RuleSetRegistry()
    with pytest.raises(AspectConfigurationError):
        ValidationInterceptor(registry, "missing")
    registry.register(RuleSet("a", dict))
    with pytest.raises(AspectConfigurationError):
        registry.register(RuleSet("a", dict))
