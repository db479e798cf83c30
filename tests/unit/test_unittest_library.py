# tests/unit/test_unittest_library.py

"""Runs real unittest modules through the unittest-backed library."""

import io
from pathlib import Path

import pytest
from conftest import RecordingListener

from seatbelt.exceptions import LoadError, UnsupportedLibraryError
from seatbelt.runtime import ConsoleInterface
from seatbelt.testing import ListenerChain, ModuleRef, ModuleRegistry, RunSummary, UnittestLibrary, get_test_library

SAMPLE_MODULE = '''
import unittest


class SampleTests(unittest.TestCase):
    def test_ok(self):
        self.assertTrue(True)

    def test_bad(self):
        self.assertEqual(1, 2)

    def test_boom(self):
        raise RuntimeError("kaboom")

    @unittest.skip("not today")
    def test_skipped(self):
        pass

    @unittest.expectedFailure
    def test_expected(self):
        self.assertEqual(1, 2)

    def test_sub(self):
        for i in range(3):
            with self.subTest(i=i):
                self.assertNotEqual(i, 1)
'''

PASSING_MODULE = '''
import unittest


class Passing(unittest.TestCase):
    def test_one(self):
        """First passing test."""

    def test_two(self):
        pass
'''


@pytest.fixture
def registry(source_root: Path) -> ModuleRegistry:
    (source_root / "test_sbut_sample.py").write_text(SAMPLE_MODULE)
    (source_root / "test_sbut_passing.py").write_text(PASSING_MODULE)
    return ModuleRegistry(source_root)


def test_passing_module_emits_events_in_order(registry: ModuleRegistry):
    listener = RecordingListener()

    UnittestLibrary(registry).run_tests([ModuleRef("test-sbut-passing")], listener)

    assert [name for name, _ in listener.events] == [
        "begin_unit",
        "pass",
        "end_unit",
        "begin_unit",
        "pass",
        "end_unit",
        "end_run",
    ]
    assert listener.names("pass") == [
        "test_sbut_passing.Passing.test_one",
        "test_sbut_passing.Passing.test_two",
    ]
    assert listener.names("end_run") == [RunSummary(tests_run=2)]


def test_mixed_module_maps_outcomes(registry: ModuleRegistry):
    listener = RecordingListener()

    UnittestLibrary(registry).run_tests([ModuleRef("test-sbut-sample")], listener)

    prefix = "test_sbut_sample.SampleTests."
    assert listener.names("pass") == [prefix + "test_expected", prefix + "test_ok"]
    assert listener.names("error") == [prefix + "test_boom"]
    fails = listener.names("fail")
    assert fails[0] == prefix + "test_bad"
    assert fails[1].startswith(prefix + "test_sub")
    assert "i=1" in fails[1]
    assert len(fails) == 2
    assert len(listener.names("begin_unit")) == 6
    assert listener.events[-1] == ("end_run", RunSummary(tests_run=6, failures=2, errors=1, skipped=1))


def test_modules_run_as_one_batch(registry: ModuleRegistry):
    listener = RecordingListener()

    UnittestLibrary(registry).run_tests(
        [ModuleRef("test-sbut-passing"), ModuleRef("test-sbut-sample")],
        listener,
    )

    assert len(listener.names("end_run")) == 1
    assert listener.names("end_run")[0].tests_run == 8


def test_default_listener_reports_failures(registry: ModuleRegistry, console: ConsoleInterface, output: io.StringIO):
    library = UnittestLibrary(registry)
    chain = ListenerChain([library.default_listener(console)])

    library.run_tests([ModuleRef("test-sbut-sample")], chain)

    text = output.getvalue()
    assert "FAIL in test_sbut_sample.SampleTests.test_bad" in text
    assert "AssertionError: 1 != 2" in text
    assert "ERROR in test_sbut_sample.SampleTests.test_boom" in text
    assert "RuntimeError: kaboom" in text
    assert "Ran 6 tests (skipped=1)" in text


def test_unknown_module_raises_load_error(registry: ModuleRegistry):
    with pytest.raises(LoadError):
        UnittestLibrary(registry).run_tests([ModuleRef("test-sbut-missing")], RecordingListener())


def test_factory_returns_unittest_library(registry: ModuleRegistry):
    library = get_test_library("unittest", registry)
    assert isinstance(library, UnittestLibrary)
    assert library.name == "unittest"


def test_factory_rejects_unknown_library(registry: ModuleRegistry):
    with pytest.raises(UnsupportedLibraryError, match="nose"):
        get_test_library("nose", registry)
