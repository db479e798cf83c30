#
# src/seatbelt/testing/__init__.py
#
"""
Test library integration sub-package for seatbelt.
"""
from .factory import get_test_library
from .listeners import ListenerChain, LoopListener
from .modules import ModuleRef, ModuleRegistry, find_files, path_to_module_ref
from .protocols import RunListener, RunSummary, TestInfo, TestLibrary
from .unittest_library import UnittestLibrary

__all__ = [
    "ListenerChain",
    "LoopListener",
    "ModuleRef",
    "ModuleRegistry",
    "RunListener",
    "RunSummary",
    "TestInfo",
    "TestLibrary",
    "UnittestLibrary",
    "find_files",
    "get_test_library",
    "path_to_module_ref",
]

# 🔼⚙️
