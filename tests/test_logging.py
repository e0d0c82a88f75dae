"""
Tests for the colored console formatter and the log helpers.
"""

import logging
from unittest import TestCase
from unittest.mock import Mock, patch

from binding_generator.colored_logging import (
    ColoredFormatter,
    count_noun,
    log_section,
    log_success,
)


def _record(message: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("binding_generator", level, __file__, 1, message, None, None)


class TestCountNoun(TestCase):

    def test_singular_and_plural(self):
        """Test count phrases use the right noun form"""
        self.assertEqual(count_noun(1, "output"), "1 output")
        self.assertEqual(count_noun(3, "file"), "3 files")
        self.assertEqual(count_noun(2, "translation unit"), "2 translation units")


class TestColoredFormatter(TestCase):

    def test_plain_output_without_colors(self):
        """Test plain formatting when colors are off"""
        formatter = ColoredFormatter(use_colors=False)
        self.assertEqual(formatter.format(_record("hello")), "INFO: hello")

    def test_colors_are_disabled_when_stderr_is_not_a_tty(self):
        """Test colors turn off when stderr is not a terminal"""
        with patch("binding_generator.colored_logging.sys.stderr", Mock(isatty=Mock(return_value=False))):
            formatter = ColoredFormatter(use_colors=True)
        self.assertFalse(formatter.use_colors)

    def test_success_and_warning_are_colored(self):
        """Test success and warning messages are colored"""
        with patch("binding_generator.colored_logging.sys.stderr", Mock(isatty=Mock(return_value=True))):
            formatter = ColoredFormatter(use_colors=True)

        success = formatter.format(_record(f"{ColoredFormatter.SUCCESS_MARK} done"))
        warning = formatter.format(_record("careful", logging.WARNING))

        self.assertTrue(success.startswith(ColoredFormatter.SPECIAL_COLORS['success']))
        self.assertTrue(warning.startswith(ColoredFormatter.COLORS['WARNING']))
        self.assertTrue(warning.endswith(ColoredFormatter.RESET))


class TestLogHelpers(TestCase):

    def test_log_success_prefixes_mark(self):
        """Test log_success prefixes the success mark"""
        logger = Mock()
        log_success(logger, "Generated 2 outputs")
        logger.info.assert_called_once_with(f"{ColoredFormatter.SUCCESS_MARK} Generated 2 outputs")

    def test_log_section_upper_cases_name(self):
        """Test log_section writes an upper-cased header"""
        logger = Mock()
        log_section(logger, "Binding Generation")
        self.assertEqual(logger.info.call_count, 3)
        self.assertIn("BINDING GENERATION", logger.info.call_args_list[1].args[0])
