"""Core validation framework for bundle configuration documents.

Runs the mandatory-field walker and the semantic rules in a fixed order and
aggregates every issue into a single result. No rule can stop the ones after it.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..bundle import load_bundle
from ..config import BundlecheckConfig, create_default_config
from ..models.spec import Spec

logger = logging.getLogger(__name__)


class ValidationStatus(str, Enum):
    """Verdict of a validation run."""
    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation error found during validation."""
    rule: str
    message: str

    def __str__(self) -> str:
        return f"[FAIL] {self.rule}: {self.message}"


@dataclass
class ValidationResult:
    """Results of a validation run."""
    status: ValidationStatus = ValidationStatus.PASS
    issues: list[ValidationIssue] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)

    @property
    def compliant(self) -> bool:
        return self.status == ValidationStatus.PASS

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = compliant, 1 = non-compliant."""
        return 0 if self.compliant else 1

    @property
    def messages(self) -> list[str]:
        """Error messages in the order they were found."""
        return [issue.message for issue in self.issues]

    def add_issue(self, rule: str, message: str) -> None:
        """Add a validation issue. Any issue makes the bundle non-compliant."""
        self.issues.append(ValidationIssue(rule, message))
        self.status = ValidationStatus.FAIL

    def increment_counter(self, name: str, value: int = 1) -> None:
        """Increment a counter."""
        self.counters[name] = self.counters.get(name, 0) + value

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "status": self.status.value,
            "compliant": self.compliant,
            "exit_code": self.exit_code,
            "counters": self.counters,
            "issues": [
                {"rule": issue.rule, "message": issue.message}
                for issue in self.issues
            ]
        }


class ValidationRule(ABC):
    """Base class for validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @abstractmethod
    def validate(self, spec: Spec, rootfs: Path, config: BundlecheckConfig) -> list[str]:
        """Execute validation rule.

        Args:
            spec: Parsed bundle configuration document
            rootfs: Resolved root filesystem directory of the bundle
            config: bundlecheck configuration

        Returns:
            Error messages, in the order they were found
        """
        pass


class ValidationFramework:
    """Runs an ordered list of validation rules against a document."""

    def __init__(self, config: BundlecheckConfig | None = None):
        self.config = config or create_default_config()
        self.rules: list[ValidationRule] = []

    def add_rule(self, rule: ValidationRule) -> None:
        """Add a validation rule."""
        self.rules.append(rule)

    def validate(self, spec: Spec, rootfs: Path) -> ValidationResult:
        """Run every rule against a parsed document.

        Args:
            spec: Parsed bundle configuration document
            rootfs: Resolved root filesystem directory of the bundle

        Returns:
            ValidationResult with verdict, issues, and counters
        """
        result = ValidationResult()

        logger.info(f"Running {len(self.rules)} validation rules against {rootfs}")

        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            try:
                messages = rule.validate(spec, rootfs, self.config)
            except Exception as e:
                logger.error(f"Rule {rule.name} failed with error: {e}")
                result.add_issue(rule.name, f"Rule execution failed: {e}")
                continue

            for message in messages:
                result.add_issue(rule.name, message)
            result.increment_counter("rules_executed")
            if messages:
                result.increment_counter(f"{rule.name}_errors", len(messages))

        logger.info(f"Validation completed with status: {result.status.value}")
        logger.info(f"Found {len(result.issues)} issues")

        return result

    def create_default_rules(self) -> None:
        """Register the default rules in their fixed execution order."""
        from .rules import (
            HooksRule,
            LinuxRule,
            MandatoryFieldsRule,
            PlatformRule,
            ProcessRule,
            VersionRule,
        )

        self.add_rule(MandatoryFieldsRule())
        self.add_rule(VersionRule())
        self.add_rule(PlatformRule())
        self.add_rule(ProcessRule())
        self.add_rule(LinuxRule())
        self.add_rule(HooksRule())


def validate_bundle(bundle_path: str | Path, config: BundlecheckConfig | None = None) -> ValidationResult:
    """Load a bundle from disk and validate it with the default rules.

    Raises:
        BundleError: If the bundle cannot be loaded
    """
    bundle = load_bundle(bundle_path)
    framework = ValidationFramework(config)
    framework.create_default_rules()
    return framework.validate(bundle.spec, bundle.rootfs)
