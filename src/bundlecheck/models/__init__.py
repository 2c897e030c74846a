"""Pydantic data models for the bundle configuration document."""

from bundlecheck.models.spec import (
    Device,
    Hook,
    Hooks,
    IDMapping,
    Linux,
    Mount,
    Namespace,
    Platform,
    Process,
    Rlimit,
    Root,
    Seccomp,
    Spec,
    Syscall,
    SyscallArg,
    User,
)

__all__ = [
    "Spec",
    "Platform",
    "Root",
    "Process",
    "User",
    "Rlimit",
    "Mount",
    "Hook",
    "Hooks",
    "Linux",
    "IDMapping",
    "Namespace",
    "Device",
    "Seccomp",
    "Syscall",
    "SyscallArg",
]
