"""
Tests for lexical diagnostics, the error reporter and the convenience API.
"""

import logging
import tempfile
import unittest
from unittest import mock
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lox.lexer import (
    Diagnostic, ErrorReporter, LexerError, TokenType, tokenize_string, tokenize_file
)
from lox.lexer.errors import ERROR_CODES, UNEXPECTED_CHARACTER, UNTERMINATED_STRING
from lox.utils.log import (
    DEFAULT_LEVEL, LOG_LEVEL_ENV, configure_logging, env_log_level, get_logger
)


class TestErrorReporter(unittest.TestCase):

    def test_records_diagnostics_with_codes(self):
        reporter = ErrorReporter()
        reporter(3, UNEXPECTED_CHARACTER)
        reporter(4, UNTERMINATED_STRING)

        self.assertTrue(reporter.had_error)
        self.assertEqual(reporter.diagnostics, [
            Diagnostic(UNEXPECTED_CHARACTER, 3, "error", "L001"),
            Diagnostic(UNTERMINATED_STRING, 4, "error", "L002"),
        ])

    def test_unknown_message_has_no_code(self):
        reporter = ErrorReporter()
        reporter(1, "Something else.")
        self.assertIsNone(reporter.diagnostics[0].code)

    def test_diagnostic_rendering(self):
        self.assertEqual(str(Diagnostic(UNEXPECTED_CHARACTER, 3)),
                         "[line 3] Error: Unexpected character.")

    def test_sink_receives_rendered_diagnostic(self):
        lines = []
        reporter = ErrorReporter(sink=lines.append)
        reporter(2, UNTERMINATED_STRING)
        self.assertEqual(lines, ["[line 2] Error: Unterminated string."])

    def test_reset(self):
        reporter = ErrorReporter()
        reporter(1, UNEXPECTED_CHARACTER)
        reporter.reset()
        self.assertFalse(reporter.had_error)
        self.assertEqual(reporter.diagnostics, [])

    def test_reports_are_logged_at_debug(self):
        """The sink is the user-facing channel; the log only traces at DEBUG."""
        with self.assertLogs("lox.lexer.errors", level="DEBUG") as captured:
            ErrorReporter()(5, UNEXPECTED_CHARACTER)
        self.assertEqual(len(captured.records), 1)
        self.assertEqual(captured.records[0].levelno, logging.DEBUG)
        self.assertIn("[line 5] Error: Unexpected character.", captured.output[0])

    def test_error_codes(self):
        self.assertEqual(ERROR_CODES, {"L001": UNEXPECTED_CHARACTER, "L002": UNTERMINATED_STRING})


class TestLexerError(unittest.TestCase):

    def test_wraps_diagnostic(self):
        error = LexerError(Diagnostic(UNTERMINATED_STRING, 9, code="L002"))
        self.assertEqual(error.line, 9)
        self.assertEqual(error.args, (UNTERMINATED_STRING,))
        self.assertEqual(str(error), "[line 9] Error: Unterminated string.")


class TestTokenizeString(unittest.TestCase):

    def test_clean_source(self):
        result = tokenize_string("print 1;")
        self.assertFalse(result.had_error)
        self.assertEqual([t.type for t in result.tokens], [
            TokenType.PRINT, TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF,
        ])
        result.raise_for_errors()

    def test_errors_are_returned(self):
        result = tokenize_string("1 @")
        self.assertTrue(result.had_error)
        self.assertEqual(result.diagnostics[0].code, "L001")
        self.assertEqual(result.tokens[-1].type, TokenType.EOF)

    def test_raise_for_errors(self):
        result = tokenize_string('"open')
        with self.assertRaises(LexerError) as ctx:
            result.raise_for_errors()
        self.assertEqual(ctx.exception.diagnostic.code, "L002")

    def test_strict_raises_first_error(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string("@\n#", strict=True)
        self.assertEqual(ctx.exception.line, 1)

    def test_shared_reporter_accumulates(self):
        """The result only holds this scan's diagnostics; the reporter keeps all."""
        reporter = ErrorReporter()
        tokenize_string("@", reporter=reporter)
        second = tokenize_string("1 #", reporter=reporter)

        self.assertEqual(len(second.diagnostics), 1)
        self.assertEqual(len(reporter.diagnostics), 2)

    def test_custom_keywords(self):
        result = tokenize_string("fn", keywords={"fn": TokenType.FUN})
        self.assertEqual(result.tokens[0].type, TokenType.FUN)


class TestTokenizeFile(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _write(self, name: str, text: str) -> str:
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_reads_and_scans(self):
        path = self._write("ok.lox", 'var s = "hi";\nprint s;\n')
        result = tokenize_file(path)
        self.assertFalse(result.had_error)
        self.assertEqual(result.tokens[3].literal, "hi")
        self.assertEqual(result.tokens[-1].line, 3)

    def _write_bytes(self, name: str, data: bytes) -> str:
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def test_crlf_kept_inside_string(self):
        path = self._write_bytes("crlf.lox", b'"a\r\nb";\r\nx')
        result = tokenize_file(path)
        self.assertEqual(result.tokens[0].lexeme, '"a\r\nb"')
        self.assertEqual(result.tokens[0].literal, "a\r\nb")
        self.assertEqual(result.tokens[0].line, 2)
        self.assertEqual(result.tokens[2].line, 3)

    def test_invalid_utf8(self):
        path = self._write_bytes("bad.lox", b"var x = \xff;")
        with self.assertRaises(UnicodeDecodeError):
            tokenize_file(path)

    def test_missing_file(self):
        with self.assertRaises(OSError):
            tokenize_file(os.path.join(self.tmpdir.name, "missing.lox"))


class TestLogging(unittest.TestCase):

    def test_loggers_are_namespaced(self):
        self.assertEqual(get_logger("driver").name, "lox.driver")
        self.assertEqual(get_logger("lox.lexer").name, "lox.lexer")
        self.assertEqual(get_logger().name, "lox")

    def test_configure_level(self):
        root = logging.getLogger("lox")
        previous = root.level
        self.addCleanup(root.setLevel, previous)

        configure_logging("debug")
        self.assertEqual(root.level, logging.DEBUG)

    def test_unknown_env_level_falls_back(self):
        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: "verbose"}):
            self.assertEqual(env_log_level(), DEFAULT_LEVEL)
        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: " info "}):
            self.assertEqual(env_log_level(), "INFO")

    def test_configure_from_unknown_env_level(self):
        root = logging.getLogger("lox")
        previous = root.level
        self.addCleanup(root.setLevel, previous)

        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: "verbose"}):
            configure_logging()
        self.assertEqual(root.level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
