"""GeoKit — AI visibility scoring for web pages."""

from geokit.scanner import FetchError, ScanResult, scan, scan_url

__all__ = ["scan", "scan_url", "FetchError", "ScanResult"]
