"""
GreenTrack India: Static Reference Tables
City→state lookup, Indian state names, state grid carbon intensity (gCO₂/kWh)
and installed renewable capacity per state (MW).

Tables are read-only and bundled into a frozen ReferenceData that components
receive as a parameter; DEFAULT_REFERENCE is built once at import.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

UNKNOWN_STATE = "Unknown"
NCT_DELHI     = "National Capital Territory of Delhi"

# Order matters: the first city found in a display name wins.
CITY_TO_STATE = MappingProxyType({
    "Delhi":              "Delhi",
    "New Delhi":          "Delhi",
    "Mumbai":             "Maharashtra",
    "Bombay":             "Maharashtra",
    "Bangalore":          "Karnataka",
    "Bengaluru":          "Karnataka",
    "Chennai":            "Tamil Nadu",
    "Madras":             "Tamil Nadu",
    "Kolkata":            "West Bengal",
    "Calcutta":           "West Bengal",
    "Hyderabad":          "Telangana",
    "Pune":               "Maharashtra",
    "Ahmedabad":          "Gujarat",
    "Jaipur":             "Rajasthan",
    "Lucknow":            "Uttar Pradesh",
    "Surat":              "Gujarat",
    "Kanpur":             "Uttar Pradesh",
    "Nagpur":             "Maharashtra",
    "Indore":             "Madhya Pradesh",
    "Bhopal":             "Madhya Pradesh",
    "Visakhapatnam":      "Andhra Pradesh",
    "Vizag":              "Andhra Pradesh",
    "Vadodara":           "Gujarat",
    "Baroda":             "Gujarat",
    "Coimbatore":         "Tamil Nadu",
    "Kochi":              "Kerala",
    "Cochin":             "Kerala",
    "Thiruvananthapuram": "Kerala",
    "Trivandrum":         "Kerala",
    "Patna":              "Bihar",
    "Ranchi":             "Jharkhand",
    "Bhubaneswar":        "Odisha",
    "Chandigarh":         "Punjab",
    "Ludhiana":           "Punjab",
    "Amritsar":           "Punjab",
    "Gurgaon":            "Haryana",
    "Gurugram":           "Haryana",
    "Noida":              "Uttar Pradesh",
    "Ghaziabad":          "Uttar Pradesh",
    "Agra":               "Uttar Pradesh",
    "Varanasi":           "Uttar Pradesh",
    "Meerut":             "Uttar Pradesh",
    "Dehradun":           "Uttarakhand",
    "Shimla":             "Himachal Pradesh",
    "Panaji":             "Goa",
    "Srinagar":           "Jammu and Kashmir",
    "Jammu":              "Jammu and Kashmir",
    "Raipur":             "Chhattisgarh",
    "Guwahati":           "Assam",
    "Imphal":             "Manipur",
    "Shillong":           "Meghalaya",
    "Aizawl":             "Mizoram",
    "Gangtok":            "Sikkim",
})

INDIAN_STATES = (
    "Maharashtra", "Tamil Nadu", "Gujarat", "Karnataka", "Rajasthan",
    "Andhra Pradesh", "Telangana", "Madhya Pradesh", "Uttar Pradesh",
    "West Bengal", "Kerala", "Bihar", "Odisha", "Punjab", "Haryana",
    "Jharkhand", "Chhattisgarh", "Assam", "Delhi", "Uttarakhand",
    "Himachal Pradesh", "Goa", "Manipur", "Meghalaya", "Tripura",
    "Nagaland", "Arunachal Pradesh", "Mizoram", "Sikkim", "Jammu and Kashmir",
    NCT_DELHI,
)

# ── State grid carbon intensity (gCO₂/kWh), driven by each state's energy mix ─
STATE_CARBON_INTENSITY = MappingProxyType({
    "Delhi":            580,
    "Maharashtra":      650,
    "Karnataka":        620,
    "Tamil Nadu":       590,
    "Gujarat":          710,
    "Rajasthan":        520,
    "Andhra Pradesh":   680,
    "Telangana":        670,
    "Madhya Pradesh":   720,
    "Uttar Pradesh":    730,
    "West Bengal":      740,
    "Kerala":           480,
    "Punjab":           640,
    "Haryana":          690,
    "Bihar":            700,
    "Odisha":           710,
    "Jharkhand":        750,
    "Chhattisgarh":     760,
    "Assam":            550,
    "Uttarakhand":      530,
    "Himachal Pradesh": 420,
    "Goa":              490,
    UNKNOWN_STATE:      630,   # national average
})

# ── Installed renewable capacity by state (MW) ──────────────────────────────
#   (solar, wind, total, potential, utilisation %)
STATE_RENEWABLE_CAPACITY = MappingProxyType({
    "Rajasthan":      (17800, 4300,  22100, 142000, 15.6),
    "Karnataka":      (7800,  6900,  14700, 95000,  15.5),
    "Tamil Nadu":     (5800,  10500, 16300, 127000, 12.8),
    "Gujarat":        (10500, 9800,  20300, 113000, 18.0),
    "Maharashtra":    (4900,  7800,  12700, 98000,  13.0),
    "Andhra Pradesh": (5600,  4100,  9700,  89000,  10.9),
    "Telangana":      (5300,  150,   5450,  25000,  21.8),
    "Madhya Pradesh": (3600,  2800,  6400,  78000,  8.2),
})

GENERIC_POTENTIAL_MW = 50000


@dataclass(frozen=True)
class ReferenceData:
    city_to_state: Mapping[str, str] = field(default_factory=lambda: CITY_TO_STATE)
    states: tuple = field(default_factory=lambda: INDIAN_STATES)
    carbon_intensity: Mapping[str, int] = field(default_factory=lambda: STATE_CARBON_INTENSITY)
    renewable_capacity: Mapping[str, tuple] = field(default_factory=lambda: STATE_RENEWABLE_CAPACITY)

    def base_intensity(self, state: str) -> int:
        """State baseline, falling back to the national average."""
        return self.carbon_intensity.get(state, self.carbon_intensity[UNKNOWN_STATE])

    @property
    def national_average_intensity(self) -> int:
        return self.carbon_intensity[UNKNOWN_STATE]


DEFAULT_REFERENCE = ReferenceData()
