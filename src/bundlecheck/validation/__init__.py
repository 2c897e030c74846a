"""Validation layer for bundle configuration documents.

A generic mandatory-field walker followed by semantic rules for version,
platform, process, Linux-specific settings and lifecycle hooks.
"""

from .framework import (
    ValidationFramework,
    ValidationIssue,
    ValidationResult,
    ValidationRule,
    ValidationStatus,
    validate_bundle,
)
from .mandatory import FieldRequirement, check_mandatory, describe_fields
from .rules import (
    HooksRule,
    LinuxRule,
    MandatoryFieldsRule,
    PlatformRule,
    ProcessRule,
    VersionRule,
)

__all__ = [
    "ValidationFramework",
    "ValidationIssue",
    "ValidationResult",
    "ValidationRule",
    "ValidationStatus",
    "validate_bundle",
    "FieldRequirement",
    "check_mandatory",
    "describe_fields",
    "MandatoryFieldsRule",
    "VersionRule",
    "PlatformRule",
    "ProcessRule",
    "LinuxRule",
    "HooksRule",
]
