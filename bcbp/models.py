"""Decoded boarding pass records."""

# Standard imports
from dataclasses import dataclass
from datetime import date

# Project imports
from bcbp.errors import DecodeError

@dataclass(frozen=True)
class Leg():
    """Represents one flight leg of a boarding pass."""
    operating_carrier_pnr: str
    from_airport: str
    to_airport: str
    operating_carrier_designator: str
    flight_number: str
    julian_date_of_flight: int | None
    date_of_flight: date | None
    compartment_code: str
    seat_number: str
    check_in_sequence_number: str
    passenger_status: str

    # Conditional items, None when the leg's conditional block omits them.
    airline_numeric_code: str | None = None
    document_form_serial_number: str | None = None
    selectee_indicator: str | None = None
    international_doc_verification: str | None = None
    marketing_carrier_designator: str | None = None
    frequent_flyer_airline_designator: str | None = None
    frequent_flyer_number: str | None = None
    id_ad_indicator: str | None = None
    free_baggage_allowance: str | None = None
    fast_track: str | None = None
    airline_individual_use: str | None = None

    def __repr__(self):
        return (
            f"Leg({self.date_of_flight} {self.operating_carrier_designator} "
            f"{self.flight_number} {self.from_airport} → {self.to_airport})"
        )

    def __str__(self):
        return (
            f"{self.date_of_flight} {self.operating_carrier_designator} "
            f"{self.flight_number} {self.from_airport} → {self.to_airport}"
        )


@dataclass(frozen=True)
class BoardingPass():
    """
    Represents a decoded Bar-Coded Boarding Pass (BCBP).

    Items from the unique conditional block (version number through
    baggage tags) are only present when the first leg carries that
    block. The security items are only present when the pass ends with
    a security block.
    """
    passenger_name: str
    electronic_ticket_indicator: str
    legs: tuple[Leg, ...]
    format_code: str = "M"

    version_number: str | None = None
    passenger_description: str | None = None
    check_in_source: str | None = None
    boarding_pass_source: str | None = None
    date_of_pass_issuance: str | None = None
    pass_issuance_date: date | None = None
    document_type: str | None = None
    boarding_pass_issuer: str | None = None
    baggage_tag_numbers: tuple[str, ...] = ()

    security_data_type: str | None = None
    security_data: str | None = None

    # Lenient mode only: trailing text that is not a security block.
    unstructured_data: str | None = None

    def __str__(self):
        return f"{self.passenger_name}: " + ", ".join(
            str(leg) for leg in self.legs
        )

    @property
    def leg_count(self) -> int:
        """Number of legs encoded in the pass."""
        return len(self.legs)


@dataclass(frozen=True)
class DecodeResult():
    """Outcome of a decode call: either a boarding pass or an error."""
    boarding_pass: BoardingPass | None = None
    error: DecodeError | None = None

    @property
    def valid(self) -> bool:
        """Whether the boarding pass was decoded."""
        return self.error is None
