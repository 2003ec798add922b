"""
Root-level pytest configuration for the jsonscrub monorepo.

This file exists to establish proper pytest boundaries between the package
test directories (packages/core/tests/, packages/cli/tests/) and to make
both packages importable from a plain checkout.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure packages/core and packages/cli are importable
root = Path(__file__).parent
for package_path in (root / "packages" / "core", root / "packages" / "cli"):
    if str(package_path) not in sys.path:
        sys.path.insert(0, str(package_path))
