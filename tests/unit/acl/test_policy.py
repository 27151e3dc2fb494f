"""Unit tests for policy construction and validation."""

from __future__ import annotations

import dataclasses

import pytest

from action_acl.acl import (
    AccessPolicy,
    AclConfigurationError,
    InvalidPolicyError,
    MissingFallbackError,
    NoAccessCriteriaError,
    PolicyBuilder,
    ValidatorRef,
    build_policy,
    load_policy_table,
)
from action_acl.config import ConfigError


# ---------------------------------------------------------------------------
# AccessPolicy
# ---------------------------------------------------------------------------


class TestAccessPolicy:
    def test_frozen(self) -> None:
        p = AccessPolicy(fallback="denied", required_roles=frozenset({"admin"}))
        with pytest.raises((AttributeError, TypeError)):
            p.fallback = "other"  # type: ignore[misc]

    def test_roles_coerced_to_frozenset(self) -> None:
        p = AccessPolicy(fallback="denied", allowed_roles={"a", "b"})  # type: ignore[arg-type]
        assert isinstance(p.allowed_roles, frozenset)
        assert p.allowed_roles == {"a", "b"}

    def test_missing_fallback(self) -> None:
        with pytest.raises(MissingFallbackError):
            AccessPolicy(fallback="", required_roles=frozenset({"admin"}))

    def test_blank_fallback(self) -> None:
        with pytest.raises(MissingFallbackError):
            AccessPolicy(fallback="   ", required_roles=frozenset({"admin"}))

    def test_non_string_fallback(self) -> None:
        with pytest.raises(InvalidPolicyError):
            AccessPolicy(fallback=["denied"], required_roles=frozenset({"admin"}))  # type: ignore[arg-type]

    def test_single_role_string_not_split(self) -> None:
        p = AccessPolicy(fallback="denied", allowed_roles="admin", required_roles="user")  # type: ignore[arg-type]
        assert p.allowed_roles == frozenset({"admin"})
        assert p.required_roles == frozenset({"user"})

    @pytest.mark.parametrize("roles", [frozenset({""}), frozenset({"  "}), ("admin", 7)])
    def test_invalid_role_entries(self, roles: object) -> None:
        with pytest.raises(InvalidPolicyError):
            AccessPolicy(fallback="denied", required_roles=roles)  # type: ignore[arg-type]

    def test_no_criteria(self) -> None:
        with pytest.raises(NoAccessCriteriaError):
            AccessPolicy(fallback="denied")

    def test_validator_alone_is_enough(self) -> None:
        p = AccessPolicy(fallback="denied", validator=ValidatorRef("check"))
        assert p.has_validator
        assert not p.uses_roles

    def test_replace_revalidates(self) -> None:
        p = AccessPolicy(fallback="denied", required_roles=frozenset({"admin"}))
        with pytest.raises(NoAccessCriteriaError):
            dataclasses.replace(p, required_roles=frozenset())

    def test_hashable_and_comparable(self) -> None:
        a = AccessPolicy(fallback="denied", required_roles=frozenset({"admin"}))
        b = AccessPolicy(fallback="denied", required_roles=frozenset({"admin"}))
        assert a == b
        assert hash(a) == hash(b)


# ---------------------------------------------------------------------------
# build_policy
# ---------------------------------------------------------------------------


class TestBuildPolicy:
    def test_requires_role_string(self) -> None:
        p = build_policy({"requires_role": "admin", "detach_to": "denied"}, action="foo")
        assert p.required_roles == {"admin"}
        assert p.allowed_roles == frozenset()
        assert p.fallback == "denied"
        assert p.action == "foo"

    def test_role_lists(self) -> None:
        p = build_policy(
            {"requires_role": ["admin"], "allowed_role": ["editor", "writer"], "detach_to": "denied"}
        )
        assert p.required_roles == {"admin"}
        assert p.allowed_roles == {"editor", "writer"}

    def test_duplicate_roles_collapse(self) -> None:
        p = build_policy({"allowed_role": ["admin", "admin", "user"], "detach_to": "denied"})
        assert p.allowed_roles == {"admin", "user"}

    def test_validator_with_args_keeps_order(self) -> None:
        p = build_policy(
            {"validate_method": "name_length", "validate_args": ["5", "11"], "detach_to": "denied"}
        )
        assert p.validator == ValidatorRef("name_length", ("5", "11"))

    def test_single_validator_arg(self) -> None:
        p = build_policy({"validate_method": "m", "validate_args": "hello", "detach_to": "d"})
        assert p.validator is not None
        assert p.validator.args == ("hello",)

    def test_validator_without_args(self) -> None:
        p = build_policy({"validate_method": "even_name", "detach_to": "denied"})
        assert p.validator == ValidatorRef("even_name", ())

    def test_missing_fallback(self) -> None:
        with pytest.raises(MissingFallbackError) as exc_info:
            build_policy({"requires_role": "admin"}, action="broken")
        assert exc_info.value.action == "broken"
        assert exc_info.value.detail["action"] == "broken"

    def test_empty_fallback(self) -> None:
        with pytest.raises(MissingFallbackError):
            build_policy({"requires_role": "admin", "detach_to": ""})

    def test_blank_fallback(self) -> None:
        with pytest.raises(MissingFallbackError):
            build_policy({"requires_role": "admin", "detach_to": "   "})

    def test_no_criteria(self) -> None:
        with pytest.raises(NoAccessCriteriaError):
            build_policy({"detach_to": "denied"})

    def test_empty_criteria_count_as_absent(self) -> None:
        with pytest.raises(NoAccessCriteriaError):
            build_policy({"requires_role": [], "allowed_role": (), "detach_to": "denied"})

    def test_fallback_checked_before_criteria(self) -> None:
        with pytest.raises(MissingFallbackError):
            build_policy({})

    def test_unknown_attribute(self) -> None:
        with pytest.raises(InvalidPolicyError, match="requires_roles"):
            build_policy({"requires_role": "a", "requires_roles": "b", "detach_to": "d"})

    def test_non_string_role(self) -> None:
        with pytest.raises(InvalidPolicyError):
            build_policy({"requires_role": ["admin", 5], "detach_to": "d"})

    def test_blank_role(self) -> None:
        with pytest.raises(InvalidPolicyError):
            build_policy({"allowed_role": ["  "], "detach_to": "d"})

    def test_non_iterable_role(self) -> None:
        with pytest.raises(InvalidPolicyError):
            build_policy({"allowed_role": 42, "detach_to": "d"})

    def test_non_string_fallback(self) -> None:
        with pytest.raises(InvalidPolicyError):
            build_policy({"allowed_role": "a", "detach_to": ["denied"]})

    def test_non_string_validator_name(self) -> None:
        with pytest.raises(InvalidPolicyError):
            build_policy({"validate_method": object(), "detach_to": "d"})

    def test_args_without_validator(self) -> None:
        with pytest.raises(InvalidPolicyError):
            build_policy({"allowed_role": "a", "validate_args": ["x"], "detach_to": "d"})

    def test_errors_are_config_errors(self) -> None:
        for attrs in ({}, {"detach_to": "d"}, {"allowed_role": 1, "detach_to": "d"}):
            with pytest.raises(ConfigError):
                build_policy(attrs)
        assert issubclass(MissingFallbackError, AclConfigurationError)

    def test_error_serialises(self) -> None:
        with pytest.raises(NoAccessCriteriaError) as exc_info:
            build_policy({"detach_to": "denied"}, action="index")
        payload = exc_info.value.to_dict()
        assert payload["code"] == "no_access_criteria"
        assert payload["detail"] == {"action": "index"}


# ---------------------------------------------------------------------------
# PolicyBuilder
# ---------------------------------------------------------------------------


class TestPolicyBuilder:
    def test_fluent_build(self) -> None:
        p = (
            PolicyBuilder("articles.edit")
            .requires("admin")
            .allows("editor", "writer")
            .detach_to("denied")
            .build()
        )
        assert p == build_policy(
            {"requires_role": ["admin"], "allowed_role": ["editor", "writer"], "detach_to": "denied"},
            action="articles.edit",
        )

    def test_validated_by(self) -> None:
        p = PolicyBuilder().validated_by("name_length", "5", "11").detach_to("denied").build()
        assert p.validator == ValidatorRef("name_length", ("5", "11"))

    def test_attributes_omit_unset(self) -> None:
        assert PolicyBuilder().allows("a").attributes() == {"allowed_role": ["a"]}

    def test_missing_fallback(self) -> None:
        with pytest.raises(MissingFallbackError):
            PolicyBuilder("x").requires("admin").build()

    def test_no_criteria(self) -> None:
        with pytest.raises(NoAccessCriteriaError):
            PolicyBuilder("x").detach_to("denied").build()


# ---------------------------------------------------------------------------
# load_policy_table
# ---------------------------------------------------------------------------


class TestLoadPolicyTable:
    def test_builds_each_entry(self) -> None:
        table = load_policy_table(
            {
                "edit": {"allowed_role": ["admin", "editor"], "detach_to": "denied"},
                "read": {"requires_role": "user", "detach_to": "denied"},
            }
        )
        assert set(table) == {"edit", "read"}
        assert table["edit"].action == "edit"
        assert table["read"].required_roles == {"user"}

    def test_first_invalid_entry_fails(self) -> None:
        with pytest.raises(MissingFallbackError) as exc_info:
            load_policy_table(
                {
                    "ok": {"allowed_role": "a", "detach_to": "d"},
                    "broken": {"allowed_role": "a"},
                }
            )
        assert exc_info.value.action == "broken"
