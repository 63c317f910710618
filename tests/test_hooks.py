"""
Tests for BuilderHooks.
"""

from unittest.mock import MagicMock

import pytest

from seedgraph import BuilderHooks


class TestBuilderHooks:
    """Tests for firing and merging hooks."""

    def test_fire_calls_registered_callback(self):
        callback = MagicMock()
        builder = object()

        BuilderHooks(after_insert=callback).fire("after_insert", builder)

        callback.assert_called_once_with(builder)

    def test_fire_without_callback_is_noop(self):
        BuilderHooks().fire("before_build", object())

    def test_fire_unknown_point_raises(self):
        with pytest.raises(ValueError, match="Unknown hook point"):
            BuilderHooks().fire("on_delete", object())

    def test_merged_runs_both_in_order(self):
        """At a shared point the receiver's callback runs first."""
        calls = []
        first = BuilderHooks(before_build=lambda b: calls.append("first"))
        second = BuilderHooks(
            before_build=lambda b: calls.append("second"),
            after_build=lambda b: calls.append("after"),
        )

        merged = first.merged(second)
        merged.fire("before_build", None)
        merged.fire("after_build", None)

        assert calls == ["first", "second", "after"]

    def test_merged_keeps_single_callbacks(self):
        callback = MagicMock()
        merged = BuilderHooks(before_insert=callback).merged(BuilderHooks())

        assert merged.before_insert is callback
        assert merged.after_insert is None
