"""Curated read-only datasets backing realistic example values."""
from __future__ import annotations

CURRENCIES: tuple[str, ...] = ("USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "CNY", "INR", "BRL")
COMPANIES: tuple[str, ...] = (
    "Apple Inc.",
    "Microsoft Corp.",
    "Amazon.com Inc.",
    "Alphabet Inc.",
    "Tesla Inc.",
)
AMOUNTS: tuple[float, ...] = (99.99, 199.50, 1299.00, 49.95, 2499.99, 19.99, 599.00, 999.99)
ACCOUNT_NUMBERS: tuple[str, ...] = ("1234567890", "9876543210", "5555666677", "1111222233")

TIMEZONES: tuple[str, ...] = ("UTC", "EST", "PST", "GMT", "CET", "JST", "IST", "AEST")
DAY_NAMES: tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
MONTH_NAMES: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

FIRST_NAMES: tuple[str, ...] = (
    "James", "Mary", "John", "Patricia", "Robert",
    "Jennifer", "Michael", "Linda", "William", "Elizabeth",
)
LAST_NAMES: tuple[str, ...] = (
    "Smith", "Johnson", "Williams", "Brown", "Jones",
    "Garcia", "Miller", "Davis", "Rodriguez", "Martinez",
)
TITLES: tuple[str, ...] = ("Mr.", "Ms.", "Mrs.", "Dr.", "Prof.", "Rev.")
# '#' is replaced by a random digit
PHONE_FORMATS: tuple[str, ...] = (
    "+1-###-###-####",
    "+44-##-####-####",
    "+33-#-##-##-##-##",
    "+49-###-#######",
)

COUNTRIES: tuple[str, ...] = (
    "United States", "Canada", "United Kingdom", "Germany", "France",
    "Australia", "Japan", "China", "India", "Brazil",
)
COUNTRY_CODES: tuple[str, ...] = ("US", "CA", "GB", "DE", "FR", "AU", "JP", "CN", "IN", "BR")
CITIES: tuple[str, ...] = (
    "New York", "London", "Tokyo", "Paris", "Berlin",
    "Sydney", "Toronto", "Mumbai", "São Paulo", "Beijing",
)
COORDINATES: tuple[tuple[float, float, str], ...] = (
    (40.7128, -74.0060, "New York"),
    (51.5074, -0.1278, "London"),
    (35.6762, 139.6503, "Tokyo"),
)
STREET_NAMES: tuple[str, ...] = ("Main St", "Oak Ave", "First St", "Second Ave", "Park Blvd", "Broadway")

PROTOCOLS: tuple[str, ...] = ("HTTP", "HTTPS", "FTP", "SFTP", "SSH", "TCP", "UDP")
DOMAINS: tuple[str, ...] = ("example.com", "test.org", "demo.net", "sample.io", "api.dev", "staging.app")
STATUS_CODES: tuple[int, ...] = (200, 201, 400, 401, 403, 404, 422, 500, 502, 503)

DEPARTMENTS: tuple[str, ...] = (
    "Engineering", "Marketing", "Sales", "Human Resources",
    "Finance", "Operations", "Customer Support",
)
ROLES: tuple[str, ...] = (
    "Manager", "Director", "Engineer", "Analyst", "Specialist",
    "Coordinator", "Lead", "Senior", "Junior",
)
INDUSTRIES: tuple[str, ...] = (
    "Technology", "Healthcare", "Finance", "Education",
    "Retail", "Manufacturing", "Real Estate", "Media",
)

LOREM_WORDS: tuple[str, ...] = (
    "lorem", "ipsum", "dolor", "sit", "amet",
    "consectetur", "adipiscing", "elit", "sed", "do",
)
