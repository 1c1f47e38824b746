"""Tests for schedule expression conversion."""

import pytest
from apscheduler.triggers.cron import CronTrigger

from offline_schedule.runtime.scheduling.expressions import (
    convert_expression_to_cron,
    convert_rate_to_cron,
)


class TestRateConversion:
    """Tests for rate(N unit) expressions."""

    @pytest.mark.parametrize("unit", ["minute", "minutes", "MINUTES", "Minute"])
    def test_minutes(self, unit: str) -> None:
        """Minute rates fire every N minutes."""
        assert convert_expression_to_cron(f"rate(5 {unit})") == "*/5 * * * *"

    @pytest.mark.parametrize("unit", ["hour", "hours", "Hours"])
    def test_hours(self, unit: str) -> None:
        """Hour rates fire on the hour every N hours."""
        assert convert_expression_to_cron(f"rate(2 {unit})") == "0 */2 * * *"

    @pytest.mark.parametrize("unit", ["day", "days", "DAYS"])
    def test_days_fire_at_midnight(self, unit: str) -> None:
        """Day rates fire at 00:00 every N days."""
        assert convert_expression_to_cron(f"rate(3 {unit})") == "0 0 */3 * *"

    def test_single_unit(self) -> None:
        """rate(1 minute) fires every minute."""
        assert convert_expression_to_cron("rate(1 minute)") == "*/1 * * * *"

    def test_whitespace_tolerated(self) -> None:
        """Extra whitespace inside the expression is accepted."""
        assert convert_expression_to_cron("  rate( 10   minutes )") == "*/10 * * * *"

    def test_deterministic(self) -> None:
        """The same rate always yields the same cron string."""
        results = {convert_expression_to_cron("rate(15 minutes)") for _ in range(5)}
        assert results == {"*/15 * * * *"}

    @pytest.mark.parametrize("rate", ["rate(5 minutes)", "rate(2 hours)", "rate(7 days)"])
    def test_output_is_valid_crontab(self, rate: str) -> None:
        """Converted rates parse as standard 5-field crontab expressions."""
        CronTrigger.from_crontab(convert_expression_to_cron(rate))

    def test_convert_rate_to_cron_rejects_unknown_unit(self) -> None:
        """Unsupported units raise when building cron directly."""
        with pytest.raises(ValueError, match="weeks"):
            convert_rate_to_cron(1, "weeks")


class TestCronConversion:
    """Tests for cron(...) expressions."""

    def test_six_field_cron_drops_year(self) -> None:
        """The year field is removed and '?' becomes '*'."""
        assert convert_expression_to_cron("cron(0 10 * * ? *)") == "0 10 * * *"

    def test_question_mark_in_day_of_month(self) -> None:
        """'?' in day-of-month is replaced as well."""
        assert convert_expression_to_cron("cron(15 12 ? * MON-FRI *)") == "15 12 * * MON-FRI"

    def test_five_field_body_is_unwrapped(self) -> None:
        """A 5-field body is returned without the wrapper."""
        assert convert_expression_to_cron("cron(*/5 * * * *)") == "*/5 * * * *"

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("cron(0 10 ? * 2-6 *)", "0 10 * * 1-5"),
            ("cron(0 8 ? * 1 *)", "0 8 * * 0"),
            ("cron(0 8 ? * 1,7 *)", "0 8 * * 0,6"),
            ("cron(0 8 ? * 2/2 *)", "0 8 * * 1/2"),
        ],
    )
    def test_numeric_day_of_week_renumbered(self, expression: str, expected: str) -> None:
        """Provider day numbers (SUN=1) are renumbered to crontab (SUN=0)."""
        assert convert_expression_to_cron(expression) == expected


class TestPassThrough:
    """Tests for strings outside the rate/cron grammar."""

    @pytest.mark.parametrize(
        "expression",
        ["*/5 * * * *", "0 9 * * MON", "rate(5 weeks)", "rate(0 minutes)", "not a schedule", ""],
    )
    def test_unrecognized_returned_unchanged(self, expression: str) -> None:
        """Unrecognized input is returned as-is."""
        assert convert_expression_to_cron(expression) == expression

    @pytest.mark.parametrize(
        "expression", ["*/5 * * * *", "rate(5 minutes)", "cron(0 10 * * ? *)", "rate(1 day)"]
    )
    def test_idempotent(self, expression: str) -> None:
        """Converting a converted expression changes nothing."""
        once = convert_expression_to_cron(expression)
        assert convert_expression_to_cron(once) == once
