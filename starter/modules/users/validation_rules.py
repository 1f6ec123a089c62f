"""
Validation Rule Sets for the user module.
"""
import re

from starter.core.aspects import RuleSet, RuleSetRegistry
from starter.modules.users.domain.models import ConfirmEmailRequest, SignUpRequest

SIGN_UP = "sign_up"
CONFIRM_EMAIL = "confirm_email"

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _not_blank(value) -> bool:
    return bool(value and str(value).strip())


def sign_up_rules() -> RuleSet:
    rules = RuleSet(SIGN_UP, SignUpRequest)
    rules.rule_for("username", _not_blank, "Username is required")
    rules.rule_for("username", lambda v: 3 <= len(v) <= 50, "Username must be between 3 and 50 characters")
    rules.rule_for("email", lambda v: bool(EMAIL_PATTERN.match(str(v))), "Email is not valid")
    rules.rule_for("first_name", _not_blank, "First name is required")
    rules.rule_for("last_name", _not_blank, "Last name is required")
    rules.rule_for("password", lambda v: len(v) >= 8, "Password must be at least 8 characters")
    rules.rule_for("password", lambda v: any(c.isdigit() for c in v), "Password must contain a digit")
    rules.rule_for("password", lambda v: any(c.isupper() for c in v), "Password must contain an upper-case letter")
    return rules


def confirm_email_rules() -> RuleSet:
    rules = RuleSet(CONFIRM_EMAIL, ConfirmEmailRequest)
    rules.rule_for("user_id", _not_blank, "User id is required")
    rules.rule_for("verification_token", _not_blank, "Verification token is required")
    return rules


def build_rule_registry() -> RuleSetRegistry:
    registry = RuleSetRegistry()
    registry.register(sign_up_rules())
    registry.register(confirm_email_rules())
    return registry
