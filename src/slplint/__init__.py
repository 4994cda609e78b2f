"""slplint - Pre-commit validator for SnapLogic pipeline exports.

slplint checks .slp pipeline documents for structural and referential
integrity (snap/link counts, snap identifiers, link endpoints) before they
are committed, and scaffolds new pipelines that pass those checks.
"""

__version__ = "0.1.0"
__author__ = "slplint contributors"
__description__ = "Pre-commit validator for SnapLogic pipeline exports"

from slplint.config import SlplintConfig

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "SlplintConfig",
]
