"""bundlecheck - Compliance checker for container runtime bundles.

bundlecheck validates a bundle's config.json and root filesystem against the
container runtime specification: mandatory fields, version format, platform,
process settings, Linux-specific settings and lifecycle hooks.
"""

__version__ = "0.1.0"
__author__ = "bundlecheck contributors"
__description__ = "Compliance checker for container runtime bundles"

from bundlecheck.config import BundlecheckConfig

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "BundlecheckConfig",
]
