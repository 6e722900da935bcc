import tempfile
import unittest
from io import StringIO
from pathlib import Path
from unittest.mock import patch

import httpx

from unspoken import main
from unspoken.errors import ChatError, ConfigError, format_error
from .test_base import StubEndpoint, make_console


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        home = Path(self._tmp.name)

        self.stdout = StringIO()
        self.stderr = StringIO()
        self.patchers = [
            patch("unspoken.cli.home_dir", return_value=home),
            patch("unspoken.cli.console", make_console(self.stdout)),
            patch("unspoken.cli.err_console", make_console(self.stderr)),
        ]
        for patcher in self.patchers:
            patcher.start()

        self.endpoint = StubEndpoint()
        self.http_client = httpx.Client(transport=httpx.MockTransport(self.endpoint))

    def tearDown(self):
        for patcher in self.patchers:
            patcher.stop()
        self.http_client.close()
        self._tmp.cleanup()

    @patch("builtins.input")
    def test_end_to_end(self, mock_input):
        """Hello then end of input exits with status 0"""
        mock_input.side_effect = ["Hello", EOFError()]

        code = main(
            ["--url", "https://stub.example/v1/", "--model", "gpt-4o-mini"],
            environ={"OPENAI_API_KEY": "sk-test"},
            http_client=self.http_client,
        )

        self.assertEqual(code, 0)
        self.assertIn("Hi there!", self.stdout.getvalue())
        self.assertEqual(self.stdout.getvalue().count("You:"), 2)
        self.assertEqual(self.endpoint.bodies()[0]["model"], "gpt-4o-mini")

    @patch("builtins.input")
    def test_system_flag_seeds_history(self, mock_input):
        mock_input.side_effect = ["Hello", EOFError()]

        main(
            ["--system", "You are terse."],
            environ={"OPENAI_API_KEY": "sk-test"},
            http_client=self.http_client,
        )

        messages = self.endpoint.bodies()[0]["messages"]
        self.assertEqual(messages[0], {"role": "system", "content": "You are terse."})

    @patch("builtins.input")
    def test_missing_api_key_never_starts_loop(self, mock_input):
        code = main([], environ={}, http_client=self.http_client)

        self.assertEqual(code, 1)
        mock_input.assert_not_called()
        self.assertIn("OPENAI_API_KEY", self.stderr.getvalue())
        self.assertEqual(self.endpoint.requests, [])

    @patch("builtins.input")
    def test_explicit_missing_config_is_fatal(self, mock_input):
        code = main(
            ["--config", str(Path(self._tmp.name) / "missing.toml")],
            environ={"OPENAI_API_KEY": "sk-test"},
            http_client=self.http_client,
        )

        self.assertEqual(code, 1)
        mock_input.assert_not_called()
        errors = self.stderr.getvalue()
        self.assertIn("Failed to read config file", errors)
        self.assertIn("Caused by:", errors)

    @patch("builtins.input")
    def test_interrupt_during_request(self, mock_input):
        """Ctrl-C while waiting for a reply ends the process with 130"""
        mock_input.side_effect = ["Hello"]
        self.endpoint.queue.append(KeyboardInterrupt())

        code = main([], environ={"OPENAI_API_KEY": "sk-test"}, http_client=self.http_client)

        self.assertEqual(code, 130)

    def test_version(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            with self.assertRaises(SystemExit) as ctx:
                main(["--version"])

        self.assertEqual(ctx.exception.code, 0)
        self.assertIn("unspoken", out.getvalue())


class TestFormatError(unittest.TestCase):
    def test_cause_chain(self):
        try:
            try:
                raise FileNotFoundError("No such file or directory")
            except FileNotFoundError as exc:
                raise ConfigError("Failed to read config file x.toml") from exc
        except ConfigError as exc:
            text = format_error(exc)

        self.assertEqual(
            text,
            "Failed to read config file x.toml\n\nCaused by:\n    No such file or directory",
        )

    def test_no_cause(self):
        self.assertEqual(format_error(ChatError("boom")), "boom")
