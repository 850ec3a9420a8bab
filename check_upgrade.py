#!/usr/bin/env python3
"""upgradecheck — thin shim.

Lets ``python check_upgrade.py <groupId> <artifactId> <version>`` work from
a checkout without installing the package.

The real implementation lives in ``upgradecheck/``.
"""

from upgradecheck.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
