"""Tests for CLI prompts module."""

from unittest.mock import patch

from stackguard.cli.prompts import (
    CUSTOM_STYLE,
    ask_advanced_options,
    select_security_level,
    select_team_size,
)


class TestAskAdvancedOptions:
    """Test advanced options confirmation."""

    def test_confirm_yes(self) -> None:
        """Test accepting advanced options."""
        with patch("questionary.confirm") as mock_confirm:
            mock_confirm.return_value.ask.return_value = True
            assert ask_advanced_options() is True

    def test_confirm_default_no(self) -> None:
        """Test the prompt defaults to no."""
        with patch("questionary.confirm") as mock_confirm:
            mock_confirm.return_value.ask.return_value = False
            assert ask_advanced_options() is False
            assert mock_confirm.call_args.kwargs["default"] is False
            assert mock_confirm.call_args.kwargs["style"] is CUSTOM_STYLE

    def test_cancel(self) -> None:
        """Test cancelling the prompt."""
        with patch("questionary.confirm") as mock_confirm:
            mock_confirm.return_value.ask.return_value = None
            assert ask_advanced_options() is None


class TestSelectTeamSize:
    """Test team size selection."""

    def test_select(self) -> None:
        """Test selecting a team size."""
        with patch("questionary.select") as mock_select:
            mock_select.return_value.ask.return_value = "medium"
            assert select_team_size() == "medium"

    def test_choices(self) -> None:
        """Test the three team size tiers are offered."""
        with patch("questionary.select") as mock_select:
            mock_select.return_value.ask.return_value = "small"
            select_team_size()
            values = [choice.value for choice in mock_select.call_args.kwargs["choices"]]
            assert values == ["small", "medium", "large"]


class TestSelectSecurityLevel:
    """Test security level selection."""

    def test_select(self) -> None:
        """Test selecting a level."""
        with patch("questionary.select") as mock_select:
            mock_select.return_value.ask.return_value = 2
            assert select_security_level() == 2

    def test_default_choice(self) -> None:
        """Test the default level is preselected."""
        with patch("questionary.select") as mock_select:
            mock_select.return_value.ask.return_value = 1
            select_security_level(default=1)
            kwargs = mock_select.call_args.kwargs
            assert [choice.value for choice in kwargs["choices"]] == [1, 2, 3]
            assert kwargs["default"].value == 1

    def test_cancel(self) -> None:
        """Test cancelling the selection."""
        with patch("questionary.select") as mock_select:
            mock_select.return_value.ask.return_value = None
            assert select_security_level() is None
