"""Tests for user feedback modes."""

import pytest

from project_pull_mover.core.user_feedback import (
    InteractiveFeedback,
    QuietFeedback,
    create_feedback,
)


def test_interactive_feedback_prints_every_kind_to_stderr(
    capsys: pytest.CaptureFixture[str],
) -> None:
    feedback = InteractiveFeedback()

    feedback.loading("Looking up items")
    feedback.info("Found 2 items")
    feedback.success("Done")
    feedback.error("Broken")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "⏳ Looking up items" in captured.err
    assert "ℹ️ Found 2 items" in captured.err
    assert "✅ Done" in captured.err
    assert "❌ Broken" in captured.err


def test_quiet_feedback_prints_only_errors(capsys: pytest.CaptureFixture[str]) -> None:
    feedback = QuietFeedback()

    feedback.loading("Looking up items")
    feedback.info("Found 2 items")
    feedback.success("Done")
    feedback.error("Broken")

    captured = capsys.readouterr()
    assert "Looking up items" not in captured.err
    assert "Done" not in captured.err
    assert "❌ Broken" in captured.err


def test_create_feedback_selects_mode() -> None:
    assert isinstance(create_feedback(quiet=True), QuietFeedback)
    assert isinstance(create_feedback(quiet=False), InteractiveFeedback)
