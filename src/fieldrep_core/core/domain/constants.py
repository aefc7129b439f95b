from enum import Enum


class CollectionKind(str, Enum):
    ORDERS = "orders"
    DOCTORS = "doctors"
    UTILITIES = "utilities"
    PRODUCTS = "products"


ORDER_TYPES = [
    "Regular Order",
    "Emergency Order",
    "Sample Order",
    "Bulk Order",
    "Special Request",
]

PRIORITY_TYPES = ["High", "Medium", "Low"]

UTILITY_TYPES = ["Bag", "Visiting Card", "Other"]

DOCTOR_TYPES = ["Doctor", "Chemist", "Stockiest"]

SPECIALITIES = [
    "General Physician",
    "Cardiologist",
    "Neurologist",
    "Pediatrician",
    "Orthopedic",
    "Gynecologist",
    "Dermatologist",
    "ENT Specialist",
    "Ophthalmologist",
    "Dentist",
]

# cities offered in the directory form, by the representative's headquarters
LOCATIONS_CONFIG: dict[str, list[str]] = {
    "BHOPAL": ["Bhopal", "Vidisha", "Itarsi", "Narmadapuram", "Sehore", "Ashta"],
    "INDORE": ["Indore", "Dewas", "Mhow", "Khandwa", "Khargone", "Dhamnod"],
    "GWALIOR": ["Gwalior", "Morena", "Dabra", "Shivpuri", "Bhind"],
    "JABALPUR": ["Jabalpur", "Satna", "Katni", "Rewa", "Bhedaghat"],
}

DEFAULT_LOCATIONS = ["Bhopal", "Indore", "Gwalior", "Jabalpur"]


def locations_for(headquarters: str | None) -> list[str]:
    """Cities available to a representative based at `headquarters`."""
    if headquarters and headquarters.upper() in LOCATIONS_CONFIG:
        return list(LOCATIONS_CONFIG[headquarters.upper()])
    return list(DEFAULT_LOCATIONS)
