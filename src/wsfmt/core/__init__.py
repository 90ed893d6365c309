"""Core / service layer — project selection and invocation building.

Rules
-----
* No ``print()`` calls.
* No filesystem or subprocess I/O; paths are only compared.
* No imports from ``cli`` or ``infra``.
"""

from wsfmt.core.dispatch_service import DispatchService
from wsfmt.core.invocation import build_invocation, tool_executable
from wsfmt.core.models import (
    DispatchRequest,
    ExecutionResult,
    InvocationSpec,
    OutputMode,
    ProjectDescriptor,
    SelectionFilter,
    SubProject,
)
from wsfmt.core.output_mode import resolve_output_mode
from wsfmt.core.protocols import CommandRunner, DescriptorLoader, EnvironmentProvisioner
from wsfmt.core.selection import select_projects

__all__: list[str] = [
    "CommandRunner",
    "DescriptorLoader",
    "DispatchRequest",
    "DispatchService",
    "EnvironmentProvisioner",
    "ExecutionResult",
    "InvocationSpec",
    "OutputMode",
    "ProjectDescriptor",
    "SelectionFilter",
    "SubProject",
    "build_invocation",
    "resolve_output_mode",
    "select_projects",
    "tool_executable",
]
