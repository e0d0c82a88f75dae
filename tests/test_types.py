"""
Tests for type nodes, type spelling parsing and the type-printer registry.
"""

from unittest import TestCase
from unittest.mock import Mock

import pytest

from binding_generator.domain.types import (
    ArrayType,
    BuiltinType,
    PointerType,
    PrimitiveType,
    TagType,
    TypePrinterRegistry,
    parse_type,
)


class TestParseType(TestCase):
    """Test cases for parse_type"""

    def test_builtin(self):
        """Test parsing builtin type spellings"""
        self.assertEqual(parse_type("int"), BuiltinType(PrimitiveType.INT))
        self.assertEqual(parse_type("unsigned   long long"), BuiltinType(PrimitiveType.ULONGLONG))

    def test_unknown_name_is_tag(self):
        """Test unknown names parse as tag types"""
        self.assertEqual(parse_type("Circle"), TagType("Circle"))

    def test_const_char_pointer(self):
        """Test parsing a const char pointer"""
        result = parse_type("const char*")
        self.assertEqual(result, PointerType(BuiltinType(PrimitiveType.CHAR), is_const=True))

    def test_reference(self):
        """Test parsing a reference"""
        result = parse_type("Circle &")
        self.assertTrue(result.is_reference)
        self.assertEqual(result.pointee, TagType("Circle"))

    def test_pointer_to_pointer(self):
        """Test parsing nested pointers"""
        result = parse_type("int**")
        self.assertEqual(result, PointerType(PointerType(BuiltinType(PrimitiveType.INT))))

    def test_arrays(self):
        """Test parsing sized and unsized arrays"""
        self.assertEqual(parse_type("float[4]"), ArrayType(BuiltinType(PrimitiveType.FLOAT), 4))
        self.assertEqual(parse_type("Circle[]"), ArrayType(TagType("Circle"), None))

    def test_empty_spelling_is_rejected(self):
        """Test a blank spelling raises ValueError"""
        with self.assertRaises(ValueError):
            parse_type("  ")

    def test_spelling_round_trips_common_forms(self):
        """Test spelling() reproduces common type spellings"""
        for spelling in ["int", "const char*", "Circle&", "double[3]"]:
            self.assertEqual(parse_type(spelling).spelling(), spelling)


class TestTypePrinterRegistry(TestCase):
    """Test cases for TypePrinterRegistry"""

    def setUp(self):
        self.registry = TypePrinterRegistry()
        self.int_type = BuiltinType(PrimitiveType.INT)

    def test_falls_back_to_spelling_without_delegate(self):
        """Test the C spelling is used without a delegate"""
        self.assertIsNone(self.registry.current)
        self.assertEqual(self.registry.print_type(self.int_type), "int")

    def test_most_recent_subscription_wins(self):
        """Test the most recent delegate prints types"""
        first = Mock(return_value="first")
        second = Mock(return_value="second")
        self.registry.subscribe(first)
        self.registry.subscribe(second)

        self.assertEqual(self.registry.print_type(self.int_type), "second")
        second.assert_called_once_with(self.int_type)
        first.assert_not_called()

    def test_unsubscribe_restores_previous_delegate(self):
        """Test unsubscribing restores the previous delegate"""
        first = Mock(return_value="first")
        second = Mock(return_value="second")
        self.registry.subscribe(first)
        self.registry.subscribe(second)

        self.assertTrue(self.registry.unsubscribe(second))
        self.assertEqual(self.registry.print_type(self.int_type), "first")

    def test_unsubscribe_unknown_delegate_is_noop(self):
        """Test unsubscribing an unknown delegate does nothing"""
        self.assertFalse(self.registry.unsubscribe(Mock()))
        self.assertEqual(self.registry.delegates, ())

    def test_installed_releases_on_error(self):
        """Test installed() releases the delegate when the block raises"""
        delegate = Mock(return_value="x")
        with self.assertRaises(RuntimeError):
            with self.registry.installed(delegate):
                self.assertEqual(self.registry.current, delegate)
                raise RuntimeError("boom")
        self.assertEqual(self.registry.delegates, ())


@pytest.mark.parametrize("type_", [
    BuiltinType(PrimitiveType.DOUBLE),
    TagType("Circle"),
    PointerType(TagType("Circle")),
    ArrayType(BuiltinType(PrimitiveType.INT), 2),
])
def test_types_are_hashable_values(type_):
    """Test equal types hash alike"""
    assert hash(type_) == hash(parse_type(type_.spelling()))
