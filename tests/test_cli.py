"""
Tests for the command-line entry point.
"""

from unittest.mock import MagicMock, patch

import pytest

from configurator.cli import (
    NOT_SAVED_MESSAGE,
    SAVED_MESSAGE,
    main,
    parse_args,
    wait_for_exit,
)
from configurator.errors import NoGuildsError


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Tests that -config defaults to the configured path."""
        with patch("configurator.cli.DEFAULT_CONFIG_PATH", "config.json"):
            args = parse_args([])
        assert args.config == "config.json"

    def test_single_dash_config_flag(self):
        """Tests the single-dash -config flag."""
        assert parse_args(["-config", "bot.json"]).config == "bot.json"

    def test_double_dash_config_flag(self):
        """Tests the double-dash --config flag."""
        assert parse_args(["--config", "bot.json"]).config == "bot.json"

    def test_exit_delay(self):
        """Tests that -exit-delay is parsed as seconds."""
        assert parse_args(["-exit-delay", "2.5"]).exit_delay == 2.5


class TestWaitForExit:
    """Tests for wait_for_exit."""

    def test_sleeps_for_delay(self):
        """Tests that a delay sleeps instead of waiting for a signal."""
        with patch("configurator.cli.time.sleep") as mock_sleep:
            wait_for_exit(3)
        mock_sleep.assert_called_once_with(3)

    def test_waits_for_sigint(self):
        """The installed handler ends the wait and the old handler is restored."""
        installed = {}

        def fake_signal(sig, handler):
            previous = installed.get(sig, "original")
            installed[sig] = handler
            return previous

        with patch("configurator.cli.signal.signal", side_effect=fake_signal), \
             patch("configurator.cli.threading.Event") as mock_event:
            event = mock_event.return_value
            event.wait.side_effect = [False, True]
            wait_for_exit(None)

        assert event.wait.call_count == 2
        assert list(installed.values()) == ["original"]


class TestMain:
    """Tests for main."""

    @pytest.mark.parametrize("saved,message", [(True, SAVED_MESSAGE), (False, NOT_SAVED_MESSAGE)])
    def test_reports_outcome(self, saved, message):
        """Tests that main prints the saved/not-saved message, waits, and returns 0."""
        with patch("configurator.cli.Wizard") as mock_wizard, \
             patch("configurator.cli.Console") as mock_console, \
             patch("configurator.cli.wait_for_exit") as mock_wait:
            mock_wizard.return_value.run.return_value = saved
            status = main(["-config", "bot.json", "-exit-delay", "0"])

        assert status == 0
        assert mock_wizard.call_args.args[0] == "bot.json"
        mock_console.return_value.print.assert_called_with(message, highlight=False)
        mock_wait.assert_called_once_with(0.0)

    def test_fatal_error_exits_nonzero(self):
        """Tests that a fatal error exits with status 1 and skips the wait."""
        with patch("configurator.cli.Wizard") as mock_wizard, \
             patch("configurator.cli.Console", MagicMock()), \
             patch("configurator.cli.wait_for_exit") as mock_wait:
            mock_wizard.return_value.run.side_effect = NoGuildsError("No servers found!")
            with pytest.raises(SystemExit) as exc_info:
                main([])

        assert exc_info.value.code == 1
        mock_wait.assert_not_called()
