"""Tests for per-class callback registration and inheritance."""

from __future__ import annotations

import pytest

from hubapi import API, after_request, before_request
from hubapi.hooks import AFTER, BEFORE, CallbackDescriptor, CallbackRegistry


class TestRegistration:
    def test_classmethod_registration(self) -> None:
        class Issues(API):
            pass

        descriptor = Issues.before_request("authorize")
        assert descriptor == CallbackDescriptor("authorize", None)
        assert Issues.before_callbacks() == [descriptor]
        assert Issues.after_callbacks() == []

    def test_only_string_is_normalised(self) -> None:
        class Issues(API):
            pass

        descriptor = Issues.after_request("audit", only="create")
        assert descriptor.only == frozenset({"create"})

    def test_only_list_is_normalised(self) -> None:
        class Issues(API):
            pass

        descriptor = Issues.before_request("audit", only=["create", "edit"])
        assert descriptor.only == frozenset({"create", "edit"})

    def test_registration_order_is_kept(self) -> None:
        class Issues(API):
            pass

        Issues.before_request("first")
        Issues.before_request("second")
        assert [d.callback for d in Issues.before_callbacks()] == ["first", "second"]

    def test_callable_callback(self) -> None:
        class Issues(API):
            pass

        def audit(api):
            return api

        descriptor = Issues.after_request(audit)
        assert descriptor.callback is audit
        assert descriptor.label.endswith("audit")

    def test_root_class_has_its_own_registry(self) -> None:
        class Issues(API):
            pass

        Issues.before_request("authorize")
        assert API.before_callbacks() == []


class TestDecorators:
    def test_marked_methods_are_registered(self) -> None:
        class Issues(API):
            @before_request(only=["create"])
            def check_token(self):
                pass

            @after_request()
            def record(self):
                pass

        assert Issues.before_callbacks() == [
            CallbackDescriptor("check_token", frozenset({"create"}))
        ]
        assert Issues.after_callbacks() == [CallbackDescriptor("record", None)]

    def test_marked_methods_are_not_request_methods(self) -> None:
        class Issues(API):
            @before_request()
            def check_token(self):
                pass

            def list(self):
                pass

        assert Issues.request_methods() == frozenset({"list"})

    def test_stacked_decorators_register_both_kinds(self) -> None:
        class Issues(API):
            @before_request()
            @after_request()
            def trace(self):
                pass

        assert [d.callback for d in Issues.before_callbacks()] == ["trace"]
        assert [d.callback for d in Issues.after_callbacks()] == ["trace"]

    def test_marked_method_attached_later(self) -> None:
        class Issues(API):
            pass

        @before_request()
        def check_token(self):
            pass

        Issues.check_token = check_token
        assert [d.callback for d in Issues.before_callbacks()] == ["check_token"]


class TestInheritance:
    def test_subclass_copies_parent_callbacks(self) -> None:
        class Base(API):
            pass

        Base.before_request("authorize")

        class Child(Base):
            pass

        assert Child.before_callbacks() == Base.before_callbacks()
        assert Child.before_callbacks() is not Base.before_callbacks()

    def test_child_registration_does_not_leak_to_parent(self) -> None:
        class Base(API):
            pass

        class Child(Base):
            pass

        Child.after_request("log")
        assert Base.after_callbacks() == []
        assert [d.callback for d in Child.after_callbacks()] == ["log"]

    def test_parent_registration_after_derivation_is_not_seen(self) -> None:
        class Base(API):
            pass

        Base.before_request("early")

        class Child(Base):
            pass

        Base.before_request("late")
        assert [d.callback for d in Base.before_callbacks()] == ["early", "late"]
        assert [d.callback for d in Child.before_callbacks()] == ["early"]

    def test_siblings_are_independent(self) -> None:
        class Base(API):
            pass

        class Left(Base):
            pass

        class Right(Base):
            pass

        Left.before_request("left_only")
        assert Right.before_callbacks() == []

    def test_decorated_hooks_are_inherited(self) -> None:
        class Base(API):
            @before_request()
            def authorize(self):
                pass

        class Child(Base):
            @before_request()
            def validate(self):
                pass

        assert [d.callback for d in Child.before_callbacks()] == ["authorize", "validate"]
        assert [d.callback for d in Base.before_callbacks()] == ["authorize"]

    def test_multiple_bases_are_merged_in_order(self) -> None:
        class Shared(API):
            pass

        Shared.before_request("shared")

        class Left(Shared):
            pass

        Left.before_request("left")

        class Right(Shared):
            pass

        Right.before_request("right")

        class Both(Left, Right):
            pass

        assert [d.callback for d in Both.before_callbacks()] == ["shared", "left", "right"]


class TestFilter:
    def test_filter_by_action(self) -> None:
        class Issues(API):
            def list(self):
                pass

            def create(self):
                pass

        Issues.before_request("everywhere")
        Issues.before_request("on_create", only=["create"])
        api = Issues()

        assert [d.callback for d in api.filter_callbacks(BEFORE, "list")] == ["everywhere"]
        assert [d.callback for d in api.filter_callbacks(BEFORE, "create")] == [
            "everywhere",
            "on_create",
        ]
        assert api.filter_callbacks(AFTER, "create") == []

    def test_unknown_kind_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown callback kind"):
            CallbackRegistry().entries("around")


class TestCallbackRegistry:
    def test_derive_copies_lists(self) -> None:
        registry = CallbackRegistry()
        registry.register(BEFORE, "a")
        derived = registry.derive()
        registry.register(BEFORE, "b")
        assert [d.callback for d in derived.before] == ["a"]

    def test_merge_skips_duplicates(self) -> None:
        left = CallbackRegistry()
        left.register(BEFORE, "a")
        right = CallbackRegistry()
        right.register(BEFORE, "a")
        right.register(AFTER, "b")
        left.merge(right)
        assert [d.callback for d in left.before] == ["a"]
        assert [d.callback for d in left.after] == ["b"]

    def test_descriptor_applies_to(self) -> None:
        assert CallbackDescriptor.build("x").applies_to("anything")
        scoped = CallbackDescriptor.build("x", only=["list"])
        assert scoped.applies_to("list")
        assert not scoped.applies_to("get")
