"""Field layout of an IATA Bar-Coded Boarding Pass (BCBP)."""

# Standard imports
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

class CharClass(Enum):
    """Character classes a field's content is checked against."""
    # Codes are left-justified and padded with spaces.
    ALPHA = re.compile(r"[A-Z]* *")
    ALPHANUMERIC = re.compile(r"[A-Z0-9]* *")
    DIGIT = re.compile(r"[0-9]*")
    # Four digits with an optional suffix (e.g. flight number "0834A").
    NUMERIC_SUFFIX = re.compile(r"[0-9]{4}[0-9A-Z ]")
    HEX = re.compile(r"[0-9A-Fa-f]*")
    PRINTABLE = re.compile(r"[\x20-\x7E]*")

    def matches(self, value: str) -> bool:
        """Checks whether every character of value belongs to the class."""
        return self.value.fullmatch(value) is not None


@dataclass(frozen=True)
class FieldSpec:
    """Describes one BCBP field."""
    key: str
    length: int | None  # None for "rest of the declared block"
    char_class: CharClass
    item: int
    strip: bool = False
    allowed: frozenset | None = None


FORMAT_CODE = "M"
VERSION_NUMBER_BEGIN = ">"
SECURITY_DATA_BEGIN = "^"

def _field(
    key: str,
    length: int | None,
    char_class: CharClass,
    item: int,
    strip: bool = False,
    allowed=None,
) -> FieldSpec:
    """Builds a FieldSpec, freezing its allowed values."""
    if allowed is not None:
        allowed = frozenset(allowed)
    return FieldSpec(key, length, char_class, item, strip, allowed)

FIELDS = MappingProxyType({
    'mandatory_unique': (
        # 1. Format Code
        _field('format_code', 1, CharClass.ALPHA, 1,
            allowed={FORMAT_CODE}),
        # 5. Number of Legs Encoded
        _field('leg_count', 1, CharClass.DIGIT, 5),
        # 11. Passenger Name
        _field('passenger_name', 20, CharClass.PRINTABLE, 11, strip=True),
        # 253. Electronic Ticket Indicator
        _field('electronic_ticket_indicator', 1, CharClass.ALPHA, 253,
            allowed={"E", " "}),
    ),
    'mandatory_repeated': (
        # 7. Operating carrier PNR Code
        _field('operating_carrier_pnr', 7, CharClass.ALPHANUMERIC, 7,
            strip=True),
        # 26. From City Airport Code
        _field('from_airport', 3, CharClass.ALPHA, 26, strip=True),
        # 38. To City Airport Code
        _field('to_airport', 3, CharClass.ALPHA, 38, strip=True),
        # 42. Operating Carrier Designator
        _field('operating_carrier_designator', 3, CharClass.ALPHANUMERIC, 42,
            strip=True),
        # 43. Flight Number
        _field('flight_number', 5, CharClass.NUMERIC_SUFFIX, 43, strip=True),
        # 46. Date of Flight (Julian Date)
        _field('julian_date_of_flight', 3, CharClass.DIGIT, 46),
        # 71. Compartment Code
        _field('compartment_code', 1, CharClass.ALPHA, 71),
        # 104. Seat Number
        _field('seat_number', 4, CharClass.ALPHANUMERIC, 104, strip=True),
        # 107. Check-in Sequence Number
        _field('check_in_sequence_number', 5, CharClass.NUMERIC_SUFFIX, 107,
            strip=True),
        # 113. Passenger Status
        _field('passenger_status', 1, CharClass.ALPHANUMERIC, 113),
        # 6. Field size of variable size field (Conditional + Airline
        # item 4) in hexadecimal
        _field('conditional_size', 2, CharClass.HEX, 6),
    ),
    'conditional_unique': (
        # 8. Beginning of Version Number
        _field('version_number_begin', 1, CharClass.PRINTABLE, 8,
            allowed={VERSION_NUMBER_BEGIN}),
        # 9. Version Number
        _field('version_number', 1, CharClass.DIGIT, 9),
        # 10. Field Size of Following Structured Message - Unique
        _field('conditional_unique_size', 2, CharClass.HEX, 10),
        # 15. Passenger Description
        _field('passenger_description', 1, CharClass.ALPHANUMERIC, 15),
        # 12. Source of Check-in
        _field('check_in_source', 1, CharClass.ALPHANUMERIC, 12),
        # 14. Source of Boarding Pass Issuance
        _field('boarding_pass_source', 1, CharClass.ALPHANUMERIC, 14),
        # 22. Date of Issue of Boarding Pass (Julian Date)
        _field('date_of_pass_issuance', 4, CharClass.DIGIT, 22),
        # 16. Document Type
        _field('document_type', 1, CharClass.ALPHANUMERIC, 16),
        # 21. Airline Designator of Boarding Pass Issuer
        _field('boarding_pass_issuer', 3, CharClass.ALPHANUMERIC, 21,
            strip=True),
        # 23. Baggage Tag License Plate Number
        _field('baggage_tag_number', 13, CharClass.PRINTABLE, 23,
            strip=True),
        # 31. 1st Non-Consecutive Baggage Tag License Plate Number
        _field('baggage_tag_number_nonconsecutive_1', 13,
            CharClass.PRINTABLE, 31, strip=True),
        # 32. 2nd Non-Consecutive Baggage Tag License Plate Number
        _field('baggage_tag_number_nonconsecutive_2', 13,
            CharClass.PRINTABLE, 32, strip=True),
    ),
    'conditional_repeated': (
        # 17. Field Size of Following Structured Message - Repeated
        _field('conditional_repeated_size', 2, CharClass.HEX, 17),
        # 142. Airline Numeric Code
        _field('airline_numeric_code', 3, CharClass.DIGIT, 142),
        # 143. Document Form/Serial Number
        _field('document_form_serial_number', 10, CharClass.ALPHANUMERIC,
            143, strip=True),
        # 18. Selectee Indicator
        _field('selectee_indicator', 1, CharClass.ALPHANUMERIC, 18),
        # 108. International Documentation Verification
        _field('international_doc_verification', 1, CharClass.ALPHANUMERIC,
            108),
        # 19. Marketing Carrier Designator
        _field('marketing_carrier_designator', 3, CharClass.ALPHANUMERIC, 19,
            strip=True),
        # 20. Frequent Flier Airline Designator
        _field('frequent_flyer_airline_designator', 3,
            CharClass.ALPHANUMERIC, 20, strip=True),
        # 236. Frequent Flier Number
        _field('frequent_flyer_number', 16, CharClass.ALPHANUMERIC, 236,
            strip=True),
        # 89. ID/AD Indicator
        _field('id_ad_indicator', 1, CharClass.ALPHANUMERIC, 89),
        # 118. Free Baggage Allowance
        _field('free_baggage_allowance', 3, CharClass.PRINTABLE, 118,
            strip=True),
        # 254. Fast Track
        _field('fast_track', 1, CharClass.ALPHANUMERIC, 254),
    ),
    'airline_repeated': (
        # 4. For Individual Airline Use (variable length)
        _field('airline_individual_use', None, CharClass.PRINTABLE, 4),
    ),
    'security': (
        # 25. Beginning of Security Data
        _field('security_data_begin', 1, CharClass.PRINTABLE, 25,
            allowed={SECURITY_DATA_BEGIN}),
        # 28. Type of Security Data
        _field('security_data_type', 1, CharClass.ALPHANUMERIC, 28),
        # 29. Length of Security Data
        _field('security_data_length', 2, CharClass.HEX, 29),
        # 30. Security Data (variable length)
        _field('security_data', None, CharClass.PRINTABLE, 30),
    ),
})

def field(phase: str, key: str) -> FieldSpec:
    """Looks up a field by phase and key."""
    for spec in FIELDS[phase]:
        if spec.key == key:
            return spec
    raise KeyError(f"{key} is not a {phase} field.")

def block_length(phase: str) -> int:
    """Sums the lengths of the fixed-length fields in a phase."""
    return sum(f.length for f in FIELDS[phase] if f.length is not None)
