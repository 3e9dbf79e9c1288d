"""
Unit tests for logging and error handling components.

Tests the SearchTraceLogger, configure_logging and exception classes to
ensure they work as expected.
"""

import json
import logging
import os
import shutil
import tempfile
import unittest

import numpy as np

from satisfier.solvers.dpll import StackDPLLSolver
from satisfier.utils.exceptions import (
    ConfigurationError,
    CyclicReferenceError,
    ParseError,
    RepositoryError,
    SatisfierError,
    UnknownVariableWarning,
)
from satisfier.utils.logging_utils import NumpyJSONEncoder, SearchTraceLogger, configure_logging


class TestExceptions(unittest.TestCase):
    """Test cases for custom exception classes."""

    def test_parse_error(self):
        error = ParseError()
        self.assertEqual(str(error), "Malformed formula")

        error = ParseError("Expected ')'", '("a"', 4)
        self.assertEqual(str(error), "Expected ')' at position 4")
        self.assertEqual(error.position, 4)
        self.assertEqual(error.text, '("a"')

    def test_cyclic_reference_error(self):
        error = CyclicReferenceError("A", ["A", "B"])
        self.assertEqual(error.name, "A")
        self.assertEqual(error.chain, ["A", "B"])
        self.assertEqual(str(error), "Cyclic reference to formula 'A' (A -> B -> A)")

    def test_repository_error(self):
        error = RepositoryError("Cannot read formula repository", "/tmp/f.json")
        self.assertEqual(str(error), "Cannot read formula repository: /tmp/f.json")
        self.assertEqual(error.path, "/tmp/f.json")

    def test_configuration_error(self):
        error = ConfigurationError("Unknown solver: x", "solver.strategy")
        self.assertEqual(str(error), "Unknown solver: x (solver.strategy)")

    def test_inheritance(self):
        for error_class in (ParseError, CyclicReferenceError, RepositoryError, ConfigurationError):
            self.assertTrue(issubclass(error_class, SatisfierError))
        self.assertTrue(issubclass(UnknownVariableWarning, UserWarning))


class TestSearchTraceLogger(unittest.TestCase):
    """Test cases for the SearchTraceLogger class."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def read_events(self, path):
        with open(path) as f:
            return [json.loads(line) for line in f]

    def test_events_are_written(self):
        with SearchTraceLogger(self.test_dir, "run") as tracer:
            tracer.log_decision(1, 3, True)
            tracer.log_conflict(2, 4)
            tracer.log_result("unsatisfiable", 0.5, {"decisions": np.int64(1)})
            self.assertEqual(tracer.write_count, 3)

        events = self.read_events(os.path.join(self.test_dir, "run_trace.jsonl"))
        self.assertEqual([e["event"] for e in events], ["decision", "conflict", "result"])
        self.assertEqual(events[0]["variable"], 3)
        self.assertTrue(events[0]["value"])
        self.assertEqual(events[1]["assigned"], 4)
        self.assertEqual(events[2]["statistics"], {"decisions": 1})
        self.assertIn("timestamp", events[0])

    def test_solver_trace(self):
        tracer = SearchTraceLogger(os.path.join(self.test_dir, "nested"), "solve")
        result = StackDPLLSolver(tracer=tracer).solve([[1, 2], [-1, -2], [1, -2]])
        tracer.close()

        events = self.read_events(tracer.path)
        self.assertTrue(result.is_sat)
        self.assertEqual(events[0]["event"], "decision")
        self.assertEqual((events[0]["variable"], events[0]["value"]), (1, True))
        self.assertEqual(events[-1]["event"], "result")
        self.assertEqual(events[-1]["status"], "satisfiable")


class TestConfigureLogging(unittest.TestCase):
    """Test cases for configure_logging."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        logger = logging.getLogger("satisfier")
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        shutil.rmtree(self.test_dir)

    def test_file_handler(self):
        log_file = os.path.join(self.test_dir, "logs", "satisfier.log")
        logger = configure_logging("DEBUG", "%(levelname)s %(message)s", log_file)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 2)

        logging.getLogger("satisfier.parser").debug("hello")
        for handler in logger.handlers:
            handler.flush()
        with open(log_file) as f:
            self.assertIn("DEBUG hello", f.read())

    def test_handlers_are_replaced(self):
        configure_logging("INFO")
        logger = configure_logging("WARNING")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.WARNING)

    def test_unknown_level_falls_back_to_info(self):
        logger = configure_logging("CHATTY")
        self.assertEqual(logger.level, logging.INFO)


class TestNumpyJSONEncoder(unittest.TestCase):
    """Test cases for NumpyJSONEncoder."""

    def test_numpy_values(self):
        data = {"a": np.int32(2), "b": np.float64(0.5), "c": np.bool_(True), "d": np.array([1, 2])}
        self.assertEqual(
            json.loads(json.dumps(data, cls=NumpyJSONEncoder)),
            {"a": 2, "b": 0.5, "c": True, "d": [1, 2]},
        )


if __name__ == "__main__":
    unittest.main()
