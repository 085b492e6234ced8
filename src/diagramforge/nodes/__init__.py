"""Provider icon families.

Each family bundles default node options (provider tag, shape, icon) that
callers can extend with their own options.
"""

from . import gcp

PROVIDERS = {
    "gcp": gcp,
}

__all__ = ["gcp", "PROVIDERS"]
