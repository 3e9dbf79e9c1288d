"""
Unit tests for the formula parser and the substitution expander.
"""

import unittest

from satisfier.parser import parse_formula, parse_pre_assignments, tokenize
from satisfier.storage.memory import MemoryFormulaRepository
from satisfier.utils.exceptions import ConfigurationError, CyclicReferenceError, ParseError
from satisfier.variables import VariableRegistry


class TestTokenize(unittest.TestCase):
    """Test cases for tokenize()."""

    def test_kinds(self):
        kinds = [t.kind for t in tokenize('(NOT "a" OR "b") AND ("c")')]
        self.assertEqual(
            kinds,
            ["lparen", "not", "name", "or", "name", "rparen", "and", "lparen", "name", "rparen"],
        )

    def test_name_value_and_position(self):
        tokens = tokenize('  ("my var")')
        self.assertEqual(tokens[1].value, "my var")
        self.assertEqual(tokens[1].position, 3)

    def test_unexpected_character(self):
        with self.assertRaises(ParseError) as ctx:
            tokenize("(a)")
        self.assertEqual(ctx.exception.position, 1)

    def test_unterminated_name(self):
        with self.assertRaises(ParseError) as ctx:
            tokenize('("a" OR "b)')
        self.assertIn("Unterminated", str(ctx.exception))
        self.assertEqual(ctx.exception.position, 8)

    def test_empty_name(self):
        with self.assertRaises(ParseError):
            tokenize('("")')


class TestParseFormula(unittest.TestCase):
    """Test cases for parse_formula() without references."""

    def test_basic(self):
        parsed = parse_formula('("a" OR NOT "b") AND ("c")')
        self.assertEqual(parsed.formula, [[1, -2], [3]])
        self.assertEqual(parsed.names, {1: "a", 2: "b", 3: "c"})

    def test_symbolic_operators(self):
        parsed = parse_formula('("a" \\/ !"b") /\\ ("c" \\/ ~"a")')
        self.assertEqual(parsed.formula, [[1, -2], [3, -1]])

    def test_keywords_are_case_insensitive(self):
        parsed = parse_formula('("a" or not "b") and ("c")')
        self.assertEqual(parsed.formula, [[1, -2], [3]])

    def test_whitespace_is_insignificant(self):
        parsed = parse_formula('(  "a"OR"b"  )AND(\n"c")')
        self.assertEqual(parsed.formula, [[1, 2], [3]])

    def test_repeated_name_shares_id(self):
        parsed = parse_formula('("a") AND (NOT "a" OR "b")')
        self.assertEqual(parsed.formula, [[1], [-1, 2]])

    def test_blank_text_is_empty_formula(self):
        self.assertEqual(parse_formula("").formula, [])
        self.assertEqual(parse_formula("   ").formula, [])

    def test_external_registry_is_extended(self):
        registry = VariableRegistry()
        registry.intern("z")
        parsed = parse_formula('("a" OR "z")', registry=registry)
        self.assertIs(parsed.registry, registry)
        self.assertEqual(parsed.formula, [[2, 1]])

    def test_malformed_input(self):
        cases = [
            '("a" OR)',
            '"a"',
            '("a"',
            "()",
            '("a") ("b")',
            '("a" AND "b")',
            '(NOT NOT "a")',
            '("a") AND',
            '("a"))',
        ]
        for text in cases:
            with self.subTest(text=text):
                with self.assertRaises(ParseError):
                    parse_formula(text)

    def test_error_position(self):
        with self.assertRaises(ParseError) as ctx:
            parse_formula('("a") AND ()')
        self.assertEqual(ctx.exception.position, 11)
        self.assertIn("Empty clause", str(ctx.exception))

    def test_unknown_negation_policy(self):
        with self.assertRaises(ConfigurationError):
            parse_formula('("a")', negation_policy="nnf")


class TestExpansion(unittest.TestCase):
    """Test cases for expanding references to stored formulas."""

    def test_single_clause_reference_joins_enclosing_clause(self):
        repo = MemoryFormulaRepository({"R": '(NOT "j" OR NOT "y")'})
        parsed = parse_formula('("R" OR "j") AND ("j" OR "y")', repo)
        self.assertEqual(parsed.formula, [[-1, -2, 1], [1, 2]])
        self.assertEqual(parsed.names, {1: "j", 2: "y"})

    def test_multi_clause_reference_is_conjoined(self):
        repo = MemoryFormulaRepository({"R": '("a") AND ("b" OR "c")'})
        parsed = parse_formula('("R" OR "d")', repo)
        self.assertEqual(parsed.formula, [[1], [2, 3], [4]])

    def test_negated_reference_flips_every_clause(self):
        repo = MemoryFormulaRepository({"R": '("a") AND ("b" OR NOT "c")'})
        parsed = parse_formula('(NOT "R" OR "d")', repo)
        self.assertEqual(parsed.formula, [[-1], [-2, 3], [4]])

    def test_negated_single_clause_reference(self):
        repo = MemoryFormulaRepository({"R": '("a" OR "b")'})
        parsed = parse_formula('(NOT "R")', repo)
        self.assertEqual(parsed.formula, [[-1, -2]])

    def test_reference_only_clause_is_dropped(self):
        repo = MemoryFormulaRepository({"R": '("a") AND ("b")'})
        parsed = parse_formula('("R")', repo)
        self.assertEqual(parsed.formula, [[1], [2]])

    def test_registry_shared_through_nested_expansion(self):
        repo = MemoryFormulaRepository({"A": '("x" OR "B")', "B": '("x" OR "z")'})
        parsed = parse_formula('("A") AND ("z")', repo)
        self.assertEqual(parsed.formula, [[1, 1, 2], [2]])
        self.assertEqual(len(parsed.registry), 2)

    def test_diamond_is_not_a_cycle(self):
        repo = MemoryFormulaRepository(
            {"A": '("B") AND ("C")', "B": '("x")', "C": '("B" OR "y")'}
        )
        parsed = parse_formula('("A")', repo)
        self.assertEqual(parsed.formula, [[1], [1, 2]])

    def test_direct_cycle(self):
        repo = MemoryFormulaRepository({"X": '("X" OR "a")'})
        with self.assertRaises(CyclicReferenceError) as ctx:
            parse_formula('("X")', repo)
        self.assertEqual(ctx.exception.name, "X")
        self.assertEqual(ctx.exception.chain, ["X"])

    def test_mutual_cycle(self):
        repo = MemoryFormulaRepository({"A": '("B")', "B": '("c" OR NOT "A")'})
        with self.assertRaises(CyclicReferenceError) as ctx:
            parse_formula('("A")', repo)
        self.assertEqual(ctx.exception.chain, ["A", "B"])
        self.assertIn("A -> B -> A", str(ctx.exception))

    def test_definition_name_may_not_refer_to_itself(self):
        repo = MemoryFormulaRepository({"X": '("a")'})
        with self.assertRaises(CyclicReferenceError):
            parse_formula('("X" OR "b")', repo, name="X")
        self.assertEqual(parse_formula('("X" OR "b")', repo).formula, [[1, 2]])

    def test_unstored_definition_name_is_a_variable(self):
        parsed = parse_formula('("X" OR "b")', MemoryFormulaRepository(), name="X")
        self.assertEqual(parsed.names, {1: "X", 2: "b"})

    def test_error_in_stored_formula(self):
        repo = MemoryFormulaRepository({"R": '("a" OR'})
        with self.assertRaises(ParseError) as ctx:
            parse_formula('("R")', repo)
        self.assertIn("In stored formula 'R'", str(ctx.exception))


class TestTseitinPolicy(unittest.TestCase):
    """Test cases for the auxiliary-variable negation policy."""

    def test_negated_reference_structure(self):
        repo = MemoryFormulaRepository({"R": '("a") AND ("b")'})
        parsed = parse_formula('(NOT "R") AND ("a")', repo, negation_policy="tseitin")
        # 3 is the reference literal, 4 and 5 select the falsified clause of R
        self.assertEqual(parsed.formula, [[-4, -1], [-5, -2], [-3, 4, 5], [3], [1]])
        self.assertEqual(parsed.registry.names(), ["a", "b"])

    def test_unnegated_reference_structure(self):
        repo = MemoryFormulaRepository({"R": '("a") AND ("b" OR "c")'})
        parsed = parse_formula('("R" OR "d")', repo, negation_policy="tseitin")
        self.assertEqual(parsed.formula, [[-4, 1], [-4, 2, 3], [4, 5]])
        self.assertTrue(parsed.registry.is_auxiliary(4))


class TestParsePreAssignments(unittest.TestCase):
    """Test cases for parse_pre_assignments()."""

    def test_pairs(self):
        self.assertEqual(
            parse_pre_assignments('R := true, "S" := FALSE, T:=1, U := 0'),
            [("R", True), ("S", False), ("T", True), ("U", False)],
        )

    def test_blank(self):
        self.assertEqual(parse_pre_assignments(""), [])
        self.assertEqual(parse_pre_assignments("  "), [])

    def test_malformed(self):
        for text in ["R = true", "R := maybe", ":= true", "R := true,"]:
            with self.subTest(text=text):
                with self.assertRaises(ParseError):
                    parse_pre_assignments(text)


if __name__ == "__main__":
    unittest.main()
