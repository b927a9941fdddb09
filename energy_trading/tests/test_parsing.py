from django.test import SimpleTestCase, override_settings

from energy_trading.application.parsing import (
    check_arity,
    parse_code_or_label,
    parse_float,
    parse_int,
    parse_label,
    sanitize_arguments,
)
from energy_trading.domain.enums import Action, BidStatus, EnergySource
from energy_trading.domain.exceptions import ArityError, ParseError, UnknownDomainValue
from energy_trading.identifiers import MonotonicIdSource


class ArityTest(SimpleTestCase):

    def test_exact_count_passes(self):
        check_arity(["a", "b"], 2)

    def test_mismatch_names_expected_count(self):
        with self.assertRaises(ArityError) as ctx:
            check_arity(["a"], 5)
        self.assertEqual(ctx.exception.expected, 5)
        self.assertEqual(ctx.exception.received, 1)
        self.assertIn("Incorrect number of arguments. Expecting 5", str(ctx.exception))


class SanitizeTest(SimpleTestCase):

    def test_empty_argument_is_rejected(self):
        with self.assertRaises(ParseError) as ctx:
            sanitize_arguments(["1", ""])
        self.assertEqual(ctx.exception.field, "argument 1")

    def test_default_length_limit_is_256(self):
        sanitize_arguments(["x" * 256])
        with self.assertRaises(ParseError):
            sanitize_arguments(["x" * 257])

    @override_settings(ENERGY_TRADING={"MAX_ARGUMENT_LENGTH": 8})
    def test_length_limit_is_configurable(self):
        sanitize_arguments(["12345678"])
        with self.assertRaises(ParseError):
            sanitize_arguments(["123456789"])


class ScalarParsingTest(SimpleTestCase):

    def test_integers(self):
        self.assertEqual(parse_int("id", "42"), 42)
        self.assertEqual(parse_int("id", "+5"), 5)
        self.assertEqual(parse_int("id", "-7"), -7)
        self.assertEqual(parse_int("id", "9223372036854775807"), 2 ** 63 - 1)

    def test_integers_are_strict(self):
        for value in ("InvalidID", "1.0", " 1", "1 ", "1_000", "0x10", "٣", "9223372036854775808", "+"):
            with self.subTest(value=value):
                with self.assertRaises(ParseError) as ctx:
                    parse_int("User ID", value)
                self.assertEqual(ctx.exception.field, "User ID")

    def test_floats(self):
        self.assertEqual(parse_float("cost", "3.5"), 3.5)
        self.assertEqual(parse_float("cost", "200"), 200.0)
        self.assertEqual(parse_float("cost", ".5"), 0.5)
        self.assertEqual(parse_float("cost", "1e3"), 1000.0)
        self.assertEqual(parse_float("cost", "-2.5E-1"), -0.25)

    def test_floats_are_strict(self):
        for value in ("nan", "inf", "-Infinity", "1e400", "1,5", "abc", "1.2.3", "0x1p3", ""):
            with self.subTest(value=value):
                with self.assertRaises(ParseError):
                    parse_float("UnitCost", value)


class EnumParsingTest(SimpleTestCase):

    def test_label(self):
        self.assertIs(parse_label(EnergySource, "energy source", "DG Set"), EnergySource.DG_SET)

    def test_unknown_label_is_a_parse_error_naming_the_field(self):
        with self.assertRaises(UnknownDomainValue) as ctx:
            parse_label(EnergySource, "energy source", "InvalidSource")
        self.assertIsInstance(ctx.exception, ParseError)
        self.assertEqual(ctx.exception.field, "energy source")
        self.assertEqual(ctx.exception.domain, "EnergySource")

    def test_code_or_label(self):
        self.assertIs(parse_code_or_label(BidStatus, "BidStatus", "2"), BidStatus.REJECTED)
        self.assertIs(parse_code_or_label(BidStatus, "BidStatus", "BidRejected"), BidStatus.REJECTED)
        self.assertIs(parse_code_or_label(Action, "action", "Sell"), Action.SELL)
        self.assertIs(parse_code_or_label(Action, "action", "0"), Action.BUY)

    def test_code_outside_table(self):
        for value in ("5", "-1", "bidcreated"):
            with self.subTest(value=value):
                with self.assertRaises(UnknownDomainValue):
                    parse_code_or_label(BidStatus, "BidStatus", value)


class MonotonicIdSourceTest(SimpleTestCase):

    def test_ids_increase_on_the_same_clock_tick(self):
        source = MonotonicIdSource(now_ns=lambda: 1_000)
        self.assertEqual([source(), source(), source()], [1_000, 1_001, 1_002])

    def test_ids_follow_the_clock_when_it_moves_forward(self):
        ticks = iter([10, 50, 40])
        source = MonotonicIdSource(now_ns=lambda: next(ticks))
        self.assertEqual([source(), source(), source()], [10, 50, 51])
