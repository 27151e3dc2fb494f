"""Unit tests for kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from action_acl.acl import (
    AclConfigurationError,
    FallbackCycleError,
    InvalidPolicyError,
    MissingFallbackError,
    NoAccessCriteriaError,
    UnknownActionError,
    UnresolvableValidatorError,
)
from action_acl.config import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from action_acl.kernel.errors import (
    ApplicationError,
    BaseError,
    ForbiddenError,
    UnauthorizedError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"

    def test_default_code(self) -> None:
        assert BaseError("m").code == "base_error"

    def test_custom_code(self) -> None:
        assert BaseError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_to_dict_includes_cause_repr(self) -> None:
        err = BaseError("wrapper", cause=ValueError("original"))
        assert "original" in err.to_dict()["cause"]

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        assert BaseError("wrap", cause=cause).__cause__ is cause

    def test_str_is_valid_json(self) -> None:
        parsed = json.loads(str(BaseError("oops", code="oops", detail={"x": 1})))
        assert parsed["code"] == "oops"
        assert parsed["detail"] == {"x": 1}

    def test_repr_contains_code_and_message(self) -> None:
        r = repr(BaseError("hello", code="hi"))
        assert "hi" in r
        assert "hello" in r
        assert "action" not in r

    def test_action_recorded_in_detail(self) -> None:
        err = BaseError("m", action="edit", detail={"k": 1})
        assert err.action == "edit"
        assert err.detail == {"k": 1, "action": "edit"}
        assert "edit" in repr(err)

    def test_detail_is_copied(self) -> None:
        detail = {"k": 1}
        BaseError("m", action="edit", detail=detail)
        assert detail == {"k": 1}


class TestApplicationErrors:
    def test_unauthorized(self) -> None:
        err = UnauthorizedError("no principal")
        assert err.code == "unauthorized"
        assert isinstance(err, ApplicationError)

    def test_forbidden_defaults(self) -> None:
        err = ForbiddenError()
        assert err.message == "Access denied"
        assert err.action is None

    def test_forbidden_carries_action(self) -> None:
        assert ForbiddenError("private", action="denied").action == "denied"


class TestAclConfigurationErrors:
    @pytest.mark.parametrize(
        "err",
        [
            MissingFallbackError("edit"),
            NoAccessCriteriaError("edit"),
            UnresolvableValidatorError("check", action="edit"),
            InvalidPolicyError("bad", action="edit"),
            UnknownActionError("denied", referenced_by="edit"),
            FallbackCycleError(["edit", "denied", "edit"]),
        ],
    )
    def test_are_config_errors_with_action(self, err: AclConfigurationError) -> None:
        assert isinstance(err, ConfigError)
        assert isinstance(err, ApplicationError)
        assert err.action == "edit"
        assert err.detail["action"] == "edit"

    def test_codes(self) -> None:
        assert MissingFallbackError("a").code == "missing_fallback"
        assert NoAccessCriteriaError("a").code == "no_access_criteria"
        assert UnresolvableValidatorError("v").code == "unresolvable_validator"
        assert UnknownActionError("x").code == "unknown_action"

    def test_unresolvable_without_action(self) -> None:
        err = UnresolvableValidatorError("check")
        assert err.action is None
        assert err.detail == {"validator": "check"}

    def test_unknown_action_message_names_referrer(self) -> None:
        err = UnknownActionError("denied", referenced_by="edit")
        assert "fallback of action 'edit'" in err.message
        assert err.detail["target"] == "denied"

    def test_fallback_cycle_path(self) -> None:
        err = FallbackCycleError(["a", "b", "a"])
        assert err.code == "fallback_cycle"
        assert err.path == ("a", "b", "a")
        assert err.detail["path"] == ["a", "b", "a"]
        assert "a -> b -> a" in err.message


class TestSettingErrors:
    def test_missing_setting_detail(self) -> None:
        err = MissingRequiredSettingError("ACL_SERVICE_NAME")
        assert err.code == "missing_required_setting"
        assert err.detail == {"setting": "ACL_SERVICE_NAME"}

    def test_invalid_setting_detail(self) -> None:
        err = InvalidSettingValueError("log_level", "loud", "unknown logging level")
        assert err.detail["value"] == "loud"
        assert err.reason == "unknown logging level"
        assert isinstance(err, ConfigError)
