"""Shared fixtures for bundlecheck tests."""

import copy
import json
from pathlib import Path

import pytest

from bundlecheck.models.spec import Spec

VALID_CONFIG = {
    "ociVersion": "1.0.0",
    "platform": {"os": "linux", "arch": "amd64"},
    "process": {
        "terminal": False,
        "user": {"uid": 0, "gid": 0},
        "args": ["sh"],
        "env": ["PATH=/usr/local/bin:/usr/bin:/bin", "TERM=xterm"],
        "cwd": "/",
        "capabilities": ["CAP_AUDIT_WRITE", "CAP_KILL", "CAP_NET_BIND_SERVICE"],
        "rlimits": [{"type": "RLIMIT_NOFILE", "hard": 1024, "soft": 1024}],
    },
    "root": {"path": "rootfs", "readonly": True},
    "hostname": "myhost",
    "mounts": [
        {"destination": "/proc", "type": "proc", "source": "proc"},
        {"destination": "/dev", "type": "tmpfs", "source": "tmpfs", "options": ["nosuid"]},
    ],
    "hooks": {},
    "linux": {
        "namespaces": [
            {"type": "pid"},
            {"type": "network"},
            {"type": "ipc"},
            {"type": "uts"},
            {"type": "mount"},
        ],
        "devices": [
            {"path": "/dev/fuse", "type": "c", "major": 10, "minor": 229},
        ],
        "rootfsPropagation": "rprivate",
    },
}


@pytest.fixture
def config_data():
    """A compliant config.json document as a dict (safe to mutate)."""
    return copy.deepcopy(VALID_CONFIG)


@pytest.fixture
def valid_spec(config_data):
    """A compliant parsed document."""
    return Spec.model_validate(config_data)


@pytest.fixture
def rootfs(tmp_path):
    """An empty root filesystem directory."""
    path = tmp_path / "rootfs"
    path.mkdir()
    return path


@pytest.fixture
def make_bundle(tmp_path):
    """Factory writing a bundle directory from a config dict."""

    def _make_bundle(data: dict, name: str = "bundle", create_rootfs: bool = True) -> Path:
        bundle_dir = tmp_path / name
        bundle_dir.mkdir()
        with open(bundle_dir / "config.json", "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        if create_rootfs:
            (bundle_dir / data.get("root", {}).get("path", "rootfs")).mkdir(parents=True, exist_ok=True)
        return bundle_dir

    return _make_bundle
