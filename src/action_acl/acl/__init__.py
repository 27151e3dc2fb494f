"""ACL – declarative access policies and the access decision evaluator."""
from action_acl.acl.errors import (
    AclConfigurationError,
    FallbackCycleError,
    InvalidPolicyError,
    MissingFallbackError,
    NoAccessCriteriaError,
    UnknownActionError,
    UnresolvableValidatorError,
)
from action_acl.acl.policy import (
    AccessPolicy,
    PolicyBuilder,
    ValidatorRef,
    build_policy,
    load_policy_table,
)
from action_acl.acl.validators import Validator, ValidatorRegistry
from action_acl.acl.evaluator import (
    AccessDecision,
    DecisionReason,
    EvaluationContext,
    can_visit,
    evaluate,
)

__all__ = [
    "AccessDecision",
    "AccessPolicy",
    "AclConfigurationError",
    "FallbackCycleError",
    "DecisionReason",
    "EvaluationContext",
    "InvalidPolicyError",
    "MissingFallbackError",
    "NoAccessCriteriaError",
    "PolicyBuilder",
    "UnknownActionError",
    "UnresolvableValidatorError",
    "Validator",
    "ValidatorRef",
    "ValidatorRegistry",
    "build_policy",
    "can_visit",
    "evaluate",
    "load_policy_table",
]
