"""
Tests for the console renderer.
"""

import json

from karei.core.errors import UsageError
from karei.ui.cli.output import Output


class TestModes:
    def test_flags(self):
        assert Output().is_human
        assert Output("json").is_json
        assert Output("plain").is_plain
        assert not Output("plain").is_human


class TestStderrLines:
    """Conversational output never reaches stdout."""

    def test_progress_only_verbose_human(self, capsys):
        Output("human").progress("quiet")
        Output("json", verbose=True).progress("json")
        Output("human", verbose=True).progress("shown")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "shown\n"

    def test_success_human_only(self, capsys):
        Output("plain").success("nope")
        Output("json").success("nope")
        Output("human").success("done")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "✓ done\n"

    def test_error_decoration(self, capsys):
        Output("human").error("bad")
        Output("plain").error("bad")
        assert capsys.readouterr().err == "✗ bad\nerror: bad\n"

    def test_warning_decoration(self, capsys):
        Output("json").warning("hmm")
        Output("plain").warning("hmm")
        assert capsys.readouterr().err == "⚠ hmm\nwarning: hmm\n"


class TestStdoutLines:
    def test_json_result_status_first(self, capsys):
        """`status` is the first key of every JSON result."""
        Output("json").json_result("success", {"type": "theme", "current": "nord"})
        out = capsys.readouterr().out
        assert out.startswith('{"status": "success"')
        assert json.loads(out) == {"status": "success", "type": "theme", "current": "nord"}

    def test_plain_lines(self, capsys):
        out = Output("plain")
        out.plain_key_value("http_proxy", "unset")
        out.plain_status("nord", "current")
        out.plain_value("nord")
        assert capsys.readouterr().out == "http_proxy:unset\nnord:current\nnord\n"

    def test_error_result_json(self, capsys):
        """Errors in JSON mode carry the exit code."""
        Output("json").error_result(UsageError("stdin is not a terminal"), 2)
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {
            "status": "error",
            "error": "stdin is not a terminal",
            "code": 2,
        }
        assert "stdin is not a terminal" in captured.err

    def test_error_result_human(self, capsys):
        Output("human").error_result(RuntimeError("boom"), 1)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "✗ boom\n"

    def test_marker(self):
        assert Output.marker(True) == "▶ "
        assert Output.marker(False) == "  "
