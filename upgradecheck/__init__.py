"""upgradecheck — safe same-major upgrade checks for Maven components.

This package finds the latest release that shares the current major
version, downloads its jar, and gates the recommendation on an OWASP
Dependency-Check scan.
"""

__version__ = "0.1.0"
