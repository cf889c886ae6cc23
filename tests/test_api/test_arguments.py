"""Tests for request argument parsing."""

from __future__ import annotations

import pytest

from hubapi import API, Arguments
from hubapi.exceptions import InvalidArgumentError, RequiredParamsError


class Issues(API):
    def list(self, *args, **params):
        return self.arguments(args, params, required=["user", "repo"])

    def get(self, *args, **params):
        return self.arguments(args, params, required=["user", "repo"], optional=["number"])

    def create(self, *args, **params):
        def validate(arguments):
            arguments.permit(["title", "body", "labels"])
            arguments.assert_required(["title"])

        return self.arguments(args, params, required=["user", "repo"], configure=validate)


class TestPositionals:
    def test_positionals_fill_required_slots(self) -> None:
        arguments = Issues().list("octocat", "hello-world")
        assert arguments.user == "octocat"
        assert arguments.repo == "hello-world"

    def test_positionals_are_written_to_client(self) -> None:
        api = Issues()
        api.list("octocat", "hello-world")
        assert api.user == "octocat"
        assert api.current_options["repo"] == "hello-world"

    def test_missing_positionals_fall_back_to_options(self) -> None:
        arguments = Issues(user="octocat", repo="hello-world").list()
        assert (arguments.user, arguments.repo) == ("octocat", "hello-world")

    def test_partial_positionals(self) -> None:
        arguments = Issues(repo="hello-world").list("octocat")
        assert (arguments.user, arguments.repo) == ("octocat", "hello-world")

    def test_optional_slot(self) -> None:
        api = Issues()
        arguments = api.get("octocat", "hello-world", 42)
        assert arguments.number == 42
        assert api.number == 42

    def test_unfilled_optional_is_none(self) -> None:
        arguments = Issues().get("octocat", "hello-world")
        assert arguments.number is None

    def test_too_many_positionals_raise(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Wrong number of arguments"):
            Issues().list("a", "b", "c")


class TestRequirements:
    def test_missing_required_raise(self) -> None:
        with pytest.raises(RequiredParamsError) as exc_info:
            Issues().list()
        assert exc_info.value.missing == ["user", "repo"]
        assert "user, repo" in str(exc_info.value)

    def test_required_params_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Issues(user="octocat").list()


class TestParams:
    def test_keywords_become_params(self) -> None:
        arguments = Issues().list("octocat", "hello-world", state="open", sort="created")
        assert arguments.params == {"state": "open", "sort": "created"}

    def test_none_params_are_dropped(self) -> None:
        arguments = Issues().list("octocat", "hello-world", state=None, sort="created")
        assert arguments.params == {"sort": "created"}

    def test_remaining_excludes_slot_names(self) -> None:
        arguments = Arguments(Issues(), required=["user"]).parse(
            "octocat", params={"user": "shadow", "state": "open"}
        )
        assert arguments.remaining == {"state": "open"}

    def test_non_mapping_params_raise(self) -> None:
        with pytest.raises(InvalidArgumentError, match="mapping"):
            Arguments(Issues()).parse(params=["state"])

    def test_unknown_value_raises_attribute_error(self) -> None:
        arguments = Issues().list("octocat", "hello-world")
        with pytest.raises(AttributeError):
            arguments.number


class TestConfigure:
    def test_permit_drops_unknown_keys(self) -> None:
        arguments = Issues().create("octocat", "hello-world", title="Bug", assignee="x")
        assert arguments.params == {"title": "Bug"}

    def test_assert_required_raises(self) -> None:
        with pytest.raises(RequiredParamsError) as exc_info:
            Issues().create("octocat", "hello-world", body="text")
        assert exc_info.value.missing == ["title"]

    def test_permit_nested(self) -> None:
        arguments = Arguments(Issues()).parse(
            params={"config": {"url": "http://x", "secret": "s", "extra": 1}, "other": 2}
        )
        arguments.permit(["url", "secret"], key="config")
        assert arguments.params == {"config": {"url": "http://x", "secret": "s"}, "other": 2}

    def test_assert_values(self) -> None:
        arguments = Arguments(Issues()).parse(params={"state": "closed"})
        assert arguments.assert_values(["open", "closed"], "state") is arguments
        with pytest.raises(InvalidArgumentError, match="Wrong value of 'closed'"):
            arguments.assert_values(["open", "all"], "state")

    def test_assert_values_ignores_absent_key(self) -> None:
        arguments = Arguments(Issues()).parse(params={})
        arguments.assert_values(["open"], "state")


class TestArgumentsAccessor:
    def test_getter_returns_last_parsed(self) -> None:
        api = Issues()
        assert api.arguments() is None
        parsed = api.list("octocat", "hello-world")
        assert api.arguments() is parsed

    def test_single_value_is_wrapped(self) -> None:
        api = Issues(repo="hello-world")
        arguments = api.arguments("octocat", required=["user", "repo"])
        assert arguments.user == "octocat"
