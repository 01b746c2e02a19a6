"""Test discovery, grouping, execution and result interpretation."""

from cestplane.testing.command import build_command
from cestplane.testing.controller import TestController
from cestplane.testing.executor import CommandExecutor, ExecutionResult
from cestplane.testing.grouping import GroupingEngine, find_suite_for_path
from cestplane.testing.models import (
    NodeId,
    NodeKind,
    RunStatus,
    TestClass,
    TestCommandData,
    TestMethod,
    TestState,
    TreeNode,
)
from cestplane.testing.parser import EntityParser, PhpTestParser
from cestplane.testing.registry import TestRegistry
from cestplane.testing.results import parse_test_status
from cestplane.testing.run import TestRun
from cestplane.testing.runner import RunRequest, TestRunner, decide_outcome

__all__ = [
    "CommandExecutor",
    "EntityParser",
    "ExecutionResult",
    "GroupingEngine",
    "NodeId",
    "NodeKind",
    "PhpTestParser",
    "RunRequest",
    "RunStatus",
    "TestClass",
    "TestCommandData",
    "TestController",
    "TestMethod",
    "TestRegistry",
    "TestRun",
    "TestRunner",
    "TestState",
    "TreeNode",
    "build_command",
    "decide_outcome",
    "find_suite_for_path",
    "parse_test_status",
]
