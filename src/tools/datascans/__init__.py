"""
Dataplex data scan tools for BigQuery Data Scout.

This package provides tools for BigQuery table profiling:
- listing.py: List data scans of a project/location
- info.py: View a data scan and its data profile result
- profile.py: Create (and start) a data profile scan for a table
- models.py: Result objects returned by the tools
"""

# Import all tools for MCP auto-discovery
from .listing import list_data_scans
from .info import get_data_scan_info
from .profile import create_data_profile_scan

# Export for MCP auto-discovery
__all__ = [
    "list_data_scans",
    "get_data_scan_info",
    "create_data_profile_scan",
]
