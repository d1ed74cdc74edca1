"""
Static country centers, used when no boundary outline is available.
"""
from __future__ import annotations

from typing import Dict, Optional

from moodglobe.models import Center

# (lat, lng) of well-known country centers
COUNTRY_CENTERS: Dict[str, Center] = {
    "US": Center(39.8283, -98.5795),
    "CA": Center(56.1304, -106.3468),
    "GB": Center(55.3781, -3.4360),
    "DE": Center(51.1657, 10.4515),
    "FR": Center(46.2276, 2.2137),
    "IT": Center(41.8719, 12.5674),
    "ES": Center(40.4637, -3.7492),
    "NL": Center(52.1326, 5.2913),
    "BE": Center(50.5039, 4.4699),
    "CH": Center(46.8182, 8.2275),
    "AT": Center(47.5162, 14.5501),
    "SE": Center(60.1282, 18.6435),
    "NO": Center(60.4720, 8.4689),
    "DK": Center(56.2639, 9.5018),
    "FI": Center(61.9241, 25.7482),
    "PL": Center(51.9194, 19.1451),
    "CZ": Center(49.8175, 15.4730),
    "GR": Center(39.0742, 21.8243),
    "PT": Center(39.3999, -8.2245),
    "IE": Center(53.4129, -8.2439),
    "JP": Center(36.2048, 138.2529),
    "CN": Center(35.8617, 104.1954),
    "IN": Center(20.5937, 78.9629),
    "KR": Center(35.9078, 127.7669),
    "AU": Center(-25.2744, 133.7751),
    "NZ": Center(-40.9006, 174.8860),
    "BR": Center(-14.2350, -51.9253),
    "MX": Center(23.6345, -102.5528),
    "AR": Center(-38.4161, -63.6167),
    "CL": Center(-35.6751, -71.5430),
    "CO": Center(4.5709, -74.2973),
    "ZA": Center(-30.5595, 22.9375),
    "EG": Center(26.0975, 30.0444),
    "NG": Center(9.0820, 8.6753),
    "KE": Center(-0.0236, 37.9062),
    "RU": Center(61.5240, 105.3188),
    "TR": Center(38.9637, 35.2433),
    "SA": Center(23.8859, 45.0792),
    "AE": Center(23.4241, 53.8478),
    "IL": Center(31.0461, 34.8516),
    "TH": Center(15.8700, 100.9925),
    "VN": Center(14.0583, 108.2772),
    "PH": Center(12.8797, 121.7740),
    "ID": Center(-0.7893, 113.9213),
    "MY": Center(4.2105, 101.9758),
    "SG": Center(1.3521, 103.8198),
    "PK": Center(30.3753, 69.3451),
    "BD": Center(23.6850, 90.3563),
}

# Display names for the table above, used by the fallback dataset
COUNTRY_NAMES: Dict[str, str] = {
    "US": "United States",
    "CA": "Canada",
    "GB": "United Kingdom",
    "DE": "Germany",
    "FR": "France",
    "JP": "Japan",
    "AU": "Australia",
    "BR": "Brazil",
    "IN": "India",
    "CN": "China",
}


def lookup_center(code: str) -> Optional[Center]:
    """Static center for ``code`` (case-insensitive), or None."""
    return COUNTRY_CENTERS.get(code.strip().upper())
