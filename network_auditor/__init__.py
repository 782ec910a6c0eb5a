"""Network auditor package.

Reports which plugins and themes are active on which sites of a
WordPress multisite network, so unused ones can be found and removed.
Sites are read through the WordPress REST API.
"""

__all__ = [
    "WordPressClient",
    "WordPressSite",
    "Network",
    "FilterCriteria",
    "OrderBy",
    "ReportRow",
    "aggregate",
    "build_report",
    "generate_report",
    "NetworkAuditorError",
    "WordPressError",
]

from .errors import NetworkAuditorError, WordPressError
from .wordpress_client import WordPressClient, WordPressSite
from .network import Network
from .auditor import FilterCriteria, OrderBy, ReportRow, aggregate, build_report
from .report import generate_report
