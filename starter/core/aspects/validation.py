"""
Validation

Named rule sets checked against a call's arguments before it runs. A rule set
targets one entity type (usually a request model); every argument of that
type is validated. When a rule fails, ValidationInterceptor raises
ValidationFailure and the wrapped operation never executes.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

from starter.core.aspects.errors import AspectConfigurationError, ValidationFailure
from starter.core.aspects.interceptor import Interceptor
from starter.core.aspects.invocation import Argument, Invocation

logger = logging.getLogger("starter.aspects.validation")

Check = Callable[[Any], bool]


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def _read(entity: Any, name: str) -> Any:
    if isinstance(entity, dict):
        return entity.get(name)
    return getattr(entity, name, None)


class RuleSet:
    """
    An ordered list of rules for one entity type.

        rules = RuleSet("sign_up", SignUpRequest)
        rules.rule_for("username", not_empty, "Username is required")
        rules.must(lambda r: r.password != r.username, "Password must differ from username")
    """

    def __init__(self, name: str, entity_type: Type):
        self.name = name
        self.entity_type = entity_type
        self._rules: List[Tuple[Optional[str], Check, str]] = []

    def rule_for(self, field_name: str, check: Check, message: str) -> "RuleSet":
        self._rules.append((field_name, check, message))
        return self

    def must(self, check: Check, message: str) -> "RuleSet":
        self._rules.append((None, check, message))
        return self

    def validate(self, entity: Any) -> ValidationResult:
        errors: List[str] = []
        for field_name, check, message in self._rules:
            value = entity if field_name is None else _read(entity, field_name)
            try:
                passed = bool(check(value))
            except (TypeError, ValueError, AttributeError):
                passed = False
            if not passed:
                errors.append(message)
        return ValidationResult(is_valid=not errors, errors=errors)

    def __len__(self) -> int:
        return len(self._rules)


class RuleSetRegistry:
    """Evaluates named rule sets against invocation arguments."""

    def __init__(self):
        self._rule_sets: Dict[str, RuleSet] = {}

    def register(self, rule_set: RuleSet) -> RuleSet:
        if rule_set.name in self._rule_sets:
            raise AspectConfigurationError(f"Rule set '{rule_set.name}' is already registered")
        self._rule_sets[rule_set.name] = rule_set
        return rule_set

    def get(self, name: str) -> RuleSet:
        if name not in self._rule_sets:
            raise AspectConfigurationError(f"Unknown rule set '{name}'")
        return self._rule_sets[name]

    def __contains__(self, name: str) -> bool:
        return name in self._rule_sets

    def evaluate(self, name: str, arguments: Sequence[Argument]) -> ValidationResult:
        rule_set = self.get(name)
        errors: List[str] = []
        for arg in arguments:
            if isinstance(arg.value, rule_set.entity_type):
                errors.extend(rule_set.validate(arg.value).errors)
        return ValidationResult(is_valid=not errors, errors=errors)


class ValidationInterceptor(Interceptor):

    def __init__(self, evaluator: RuleSetRegistry, rule_set: str):
        if rule_set not in evaluator:
            raise AspectConfigurationError(f"Unknown rule set '{rule_set}'")
        self.evaluator = evaluator
        self.rule_set = rule_set

    async def on_before(self, invocation: Invocation) -> None:
        result = self.evaluator.evaluate(self.rule_set, invocation.arguments)
        if not result.is_valid:
            logger.info(f"[ValidationInterceptor.on_before] {invocation.full_name} rejected by '{self.rule_set}': {result.errors}")
            raise ValidationFailure(result.errors, rule_set=self.rule_set)
