"""Bundle discovery and loading.

A bundle is a directory holding ``config.json`` and the root filesystem it
points at. Any problem found here is structural: validation cannot start.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from bundlecheck.models.spec import Spec

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


class BundleError(Exception):
    """Raised when a bundle cannot be loaded for validation."""
    pass


class BundleNotFoundError(BundleError):
    """Raised when the bundle directory does not exist."""
    pass


class BundleEncodingError(BundleError):
    """Raised when config.json is not valid UTF-8."""
    pass


class BundleParseError(BundleError):
    """Raised when config.json cannot be parsed into a document."""
    pass


@dataclass(frozen=True)
class Bundle:
    """A loaded bundle ready for validation."""
    path: Path
    spec: Spec
    rootfs: Path

    @property
    def config_path(self) -> Path:
        return self.path / CONFIG_FILENAME


def parse_spec(content: bytes, source: str = CONFIG_FILENAME) -> Spec:
    """Decode and parse the raw bytes of a configuration document.

    Raises:
        BundleEncodingError: If the content is not UTF-8
        BundleParseError: If the content is not a valid document
    """
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BundleEncodingError(f"{source} is not encoded in UTF-8") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise BundleParseError(f"Invalid JSON in {source}: {e}") from e

    if not isinstance(data, dict):
        raise BundleParseError(f"{source} must contain a JSON object")

    try:
        return Spec.model_validate(data)
    except ValidationError as e:
        raise BundleParseError(f"Invalid configuration in {source}: {e}") from e


def resolve_rootfs(bundle_path: Path, spec: Spec) -> Path:
    """Resolve the root filesystem directory declared by the document.

    ``root.path`` is always taken relative to the bundle directory, even
    when it is written as an absolute path.

    Raises:
        BundleError: If the root path is missing or not a directory
    """
    rootfs = bundle_path / spec.root.path.lstrip("/")
    if not rootfs.exists():
        raise BundleError(f"Cannot find the root path {str(rootfs)!r}")
    if not rootfs.is_dir():
        raise BundleError(f"The root path {str(rootfs)!r} is not a directory.")
    return rootfs


def load_bundle(bundle_path: str | Path) -> Bundle:
    """Load config.json from a bundle directory and resolve its rootfs.

    Args:
        bundle_path: Path to the bundle directory

    Returns:
        Bundle with the parsed document and resolved rootfs

    Raises:
        BundleError: If the bundle cannot be loaded
    """
    if not str(bundle_path):
        raise BundleError("Bundle path shouldn't be empty")

    path = Path(bundle_path)
    if not path.exists():
        raise BundleNotFoundError(f"Bundle not found: {path}")

    config_path = path / CONFIG_FILENAME
    try:
        content = config_path.read_bytes()
    except OSError as e:
        raise BundleError(f"Cannot read {config_path}: {e}") from e

    spec = parse_spec(content, str(config_path))
    rootfs = resolve_rootfs(path, spec)

    logger.debug(f"Loaded bundle {path} with rootfs {rootfs}")
    return Bundle(path=path, spec=spec, rootfs=rootfs)
