"""Validation rules for bundle configuration documents.

Each rule validates one concern and returns its error messages without
raising. Only the process and hooks rules touch the filesystem.
"""

import logging
import os
import re
from pathlib import Path, PurePosixPath

from ..config import BundlecheckConfig
from ..constants import (
    CAPABILITIES,
    DEVICE_TYPES,
    HOOK_KINDS,
    NAMESPACE_TYPES,
    RLIMITS,
    ROOTFS_PROPAGATION_MODES,
    SECCOMP_ACTIONS,
    SECCOMP_ARCHITECTURES,
    SECCOMP_OPERATORS,
    UTS_NAMESPACE,
    VALID_PLATFORMS,
)
from ..models.spec import Device, Hook, Namespace, Seccomp, Spec, Syscall
from .framework import ValidationRule
from .mandatory import check_mandatory

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"^([0-9]+)?\.([0-9]+)?\.([0-9]+)?$")


def env_valid(env: str) -> bool:
    """Check an environment entry has the form KEY=VALUE.

    The key (surrounding whitespace ignored) must be non-empty and consist
    solely of letters, digits and underscores.
    """
    key, sep, _ = env.partition("=")
    if not sep:
        return False
    key = key.strip()
    if not key:
        return False
    return all(ch.isalpha() or ch.isdecimal() or ch == "_" for ch in key)


def capability_valid(capability: str) -> bool:
    return capability in CAPABILITIES


def rlimit_valid(rlimit: str) -> bool:
    return rlimit in RLIMITS


def namespace_valid(namespace: Namespace) -> bool:
    return namespace.type in NAMESPACE_TYPES


def device_valid(device: Device) -> bool:
    """Check the device type and its major/minor numbers.

    Unbuffered character devices need positive numbers; FIFOs must leave them unset.
    """
    if device.type not in DEVICE_TYPES:
        return False
    if device.type == "u":
        return device.major > 0 and device.minor > 0
    if device.type == "p":
        return device.major <= 0 and device.minor <= 0
    return True


def seccomp_action_valid(action: str) -> bool:
    return action in SECCOMP_ACTIONS


def syscall_valid(syscall: Syscall) -> bool:
    if not seccomp_action_valid(syscall.action):
        return False
    return all(arg.op in SECCOMP_OPERATORS for arg in syscall.args)


def check_seccomp(seccomp: Seccomp) -> list[str]:
    """Validate a seccomp profile's actions, operators and architectures."""
    logger.debug("check seccomp")
    errors = []

    if not seccomp_action_valid(seccomp.default_action):
        errors.append(f'seccomp defaultAction "{seccomp.default_action}" is invalid.')

    for syscall in seccomp.syscalls:
        if not syscall_valid(syscall):
            errors.append(f'syscall "{syscall.name}" is invalid.')

    for arch in seccomp.architectures:
        if arch not in SECCOMP_ARCHITECTURES:
            errors.append(f'seccomp architecture "{arch}" is invalid')

    return errors


class MandatoryFieldsRule(ValidationRule):
    """Validate that every required field is present and non-empty."""

    @property
    def name(self) -> str:
        return "mandatory_fields"

    def validate(self, spec: Spec, rootfs: Path, config: BundlecheckConfig) -> list[str]:
        logger.debug("check mandatory fields")
        return check_mandatory(spec)


class VersionRule(ValidationRule):
    """Validate the schema version has the major.minor.patch shape."""

    @property
    def name(self) -> str:
        return "version"

    def validate(self, spec: Spec, rootfs: Path, config: BundlecheckConfig) -> list[str]:
        logger.debug("check version")
        if not VERSION_PATTERN.fullmatch(spec.version):
            return [f"\"{spec.version}\" is not a valid version format, please read 'SemVer v2.0.0'"]
        return []


class PlatformRule(ValidationRule):
    """Validate the operating system and architecture combination."""

    @property
    def name(self) -> str:
        return "platform"

    def validate(self, spec: Spec, rootfs: Path, config: BundlecheckConfig) -> list[str]:
        logger.debug("check platform")
        platform = spec.platform

        archs = VALID_PLATFORMS.get(platform.os)
        if archs is None:
            return [f'Operation system "{platform.os}" of the bundle is not supported yet.']
        if platform.arch not in archs:
            return [f'Combination of "{platform.os}" and "{platform.arch}" is invalid.']
        return []


class ProcessRule(ValidationRule):
    """Validate cwd, environment, capabilities, rlimits and the apparmor profile."""

    @property
    def name(self) -> str:
        return "process"

    def validate(self, spec: Spec, rootfs: Path, config: BundlecheckConfig) -> list[str]:
        logger.debug("check process")
        process = spec.process
        errors = []

        if not PurePosixPath(process.cwd).is_absolute():
            errors.append(f'cwd "{process.cwd}" is not an absolute path')

        for env in process.env:
            if not env_valid(env):
                errors.append(
                    f"env \"{env}\" should be in the form of 'key=value'. The left hand side "
                    "must consist solely of letters, digits, and underscores '_'."
                )

        for capability in process.capabilities:
            if not capability_valid(capability):
                errors.append(f'capability "{capability}" is not valid, man capabilities(7)')

        for rlimit in process.rlimits:
            if not rlimit_valid(rlimit.type):
                errors.append(f'rlimit type "{rlimit.type}" is invalid.')

        if process.apparmor_profile:
            profile_path = Path(rootfs, "etc", "apparmor.d", process.apparmor_profile.lstrip("/"))
            if not profile_path.exists():
                errors.append(f'apparmor profile "{process.apparmor_profile}" not found at {profile_path}')

        return errors


class LinuxRule(ValidationRule):
    """Validate id mappings, namespaces, devices, seccomp and rootfs propagation."""

    @property
    def name(self) -> str:
        return "linux"

    def validate(self, spec: Spec, rootfs: Path, config: BundlecheckConfig) -> list[str]:
        logger.debug("check linux")
        linux = spec.linux
        limit = config.validation.max_id_mappings
        errors = []

        if len(linux.uid_mappings) > limit:
            errors.append(f"Only {limit} UID mappings are allowed (linux kernel restriction).")
        if len(linux.gid_mappings) > limit:
            errors.append(f"Only {limit} GID mappings are allowed (linux kernel restriction).")

        uts_exists = False
        for namespace in linux.namespaces:
            if not namespace_valid(namespace):
                errors.append(f'namespace "{namespace.type}" is invalid.')
            elif namespace.type == UTS_NAMESPACE:
                uts_exists = True

        if spec.platform.os == "linux" and spec.hostname and not uts_exists:
            errors.append("On Linux, hostname requires a new UTS namespace to be specified as well")

        for device in linux.devices:
            if not device_valid(device):
                errors.append(
                    f'device "{device.path}" of type "{device.type}" '
                    f"(major {device.major}, minor {device.minor}) is invalid."
                )

        if linux.seccomp is not None:
            errors.extend(check_seccomp(linux.seccomp))

        if linux.rootfs_propagation not in ROOTFS_PROPAGATION_MODES:
            modes = "|".join(mode for mode in ROOTFS_PROPAGATION_MODES if mode)
            errors.append(f'rootfsPropagation must be empty or one of "{modes}"')

        return errors


class HooksRule(ValidationRule):
    """Validate hook paths and environments, optionally probing the host."""

    @property
    def name(self) -> str:
        return "hooks"

    def validate(self, spec: Spec, rootfs: Path, config: BundlecheckConfig) -> list[str]:
        logger.debug("check hooks")
        verify_on_host = config.validation.verify_hooks
        errors = []

        for kind, field_name in HOOK_KINDS:
            for hook in getattr(spec.hooks, field_name):
                errors.extend(self._check_hook(kind, hook, verify_on_host))

        return errors

    def _check_hook(self, kind: str, hook: Hook, verify_on_host: bool) -> list[str]:
        errors = []

        if not PurePosixPath(hook.path).is_absolute():
            errors.append(f"The {kind} hook {hook.path}: is not absolute path")

        if verify_on_host:
            try:
                mode = os.stat(hook.path).st_mode
            except OSError:
                errors.append(f"Cannot find {kind} hook: {hook.path}")
            else:
                if mode & 0o111 == 0:
                    errors.append(f"The {kind} hook {hook.path}: is not executable")

        for env in hook.env:
            if not env_valid(env):
                errors.append(f'Env "{env}" for hook {hook.path} is in the invalid form.')

        return errors
