"""Functions for CLI commands."""

# Standard imports
import os
import sys
from datetime import date
from pathlib import Path

# Third-party imports
import colorama
from dateutil.parser import isoparse
from tabulate import tabulate

# Project imports
from bcbp.decoder import decode
from bcbp.errors import DecodeError
from bcbp.models import BoardingPass
from bcbp.pkpass import PKPass, PKPassError
from bcbp.validator import Mode

colorama.init()

def decode_bcbp(
    bcbp_str: str,
    mode: Mode | str | None = None,
    reference_date: date | None = None,
) -> None:
    """Decodes a Bar-Coded Boarding Pass string and prints it."""
    mode = Mode.from_value(mode or default_mode())
    today = reference_date or default_reference_date()
    try:
        bp = decode(bcbp_str, mode, today)
    except DecodeError as e:
        _warn(f"The boarding pass data is not valid: {e}")
        sys.exit(1)
    print_boarding_pass(bp)

def decode_pkpass(path: Path | str, mode: Mode | str | None = None) -> None:
    """Decodes the boarding pass in a PKPass file and prints it."""
    mode = Mode.from_value(mode or default_mode())
    try:
        pkpass = PKPass(path)
        bp = pkpass.boarding_pass(mode)
    except (PKPassError, DecodeError) as e:
        _warn(f"{path}: {e}")
        sys.exit(1)
    if bp is None:
        _warn(f"{path} has no barcode message.")
        sys.exit(1)
    print(f"Relevant date: {pkpass.relevant_date}")
    print(f"Archive filename: {pkpass.archive_filename(mode)}")
    print_boarding_pass(bp)

def import_pkpasses(mode: Mode | str | None = None) -> None:
    """Decodes every PKPass file in the import folder."""
    mode = Mode.from_value(mode or default_mode())
    import_folder = os.getenv("BCBP_IMPORT_PATH")
    if import_folder is None:
        raise KeyError(
            "Environment variable BCBP_IMPORT_PATH is missing."
        )
    import_path = Path(import_folder)
    if not import_path.is_dir():
        raise KeyError(
            "Environment variable BCBP_IMPORT_PATH is not a directory."
        )
    print(f"Importing digital boarding passes from {import_path}")
    paths = sorted(f for f in import_path.glob("*.pkpass") if f.is_file())
    if len(paths) == 0:
        print("ℹ️ No .pkpass files found.")
        return
    decoded = 0
    for path in paths:
        print(f"Processing {path.name}")
        try:
            pkpass = PKPass(path)
            bp = pkpass.boarding_pass(mode)
        except (PKPassError, DecodeError) as e:
            _warn(f"{e} Skipping this pass.")
            continue
        if bp is None:
            _warn(f"{path.name} has no barcode message. Skipping this pass.")
            continue
        print(f"{pkpass.archive_filename(mode)}: {bp}")
        decoded += 1
    print(f"✅ Decoded {decoded} of {len(paths)} pass(es).")

def print_boarding_pass(bp: BoardingPass) -> None:
    """Prints a decoded boarding pass as tables."""
    header = [
        ["Passenger", bp.passenger_name],
        ["E-ticket", bp.electronic_ticket_indicator],
        ["Legs", bp.leg_count],
    ]
    if bp.version_number is not None:
        header.append(["Version", bp.version_number])
    if bp.pass_issuance_date is not None:
        header.append(["Issued", bp.pass_issuance_date])
    if bp.boarding_pass_issuer:
        header.append(["Issuer", bp.boarding_pass_issuer])
    if len(bp.baggage_tag_numbers) > 0:
        header.append(["Bag tags", ", ".join(bp.baggage_tag_numbers)])
    if bp.security_data is not None:
        header.append(["Security data", f"type {bp.security_data_type}, "
            f"{len(bp.security_data)} characters"])
    if bp.unstructured_data is not None:
        header.append(["Unstructured data", bp.unstructured_data])
    print(tabulate(header, tablefmt="plain", disable_numparse=True))

    table = [
        [
            i + 1,
            leg.date_of_flight or "NODATE",
            leg.operating_carrier_designator,
            leg.flight_number,
            leg.from_airport,
            leg.to_airport,
            leg.operating_carrier_pnr,
            leg.compartment_code,
            leg.seat_number,
            leg.check_in_sequence_number,
            leg.frequent_flyer_number or "",
        ]
        for i, leg in enumerate(bp.legs)
    ]
    print(tabulate(table, headers=[
        "Leg", "Date", "Airline", "Flight", "Orig", "Dest", "PNR", "Class",
        "Seat", "Seq", "FF Number",
    ], disable_numparse=True))

def default_mode() -> Mode:
    """Gets the decode mode from the environment."""
    return Mode.from_value(os.getenv("BCBP_MODE", Mode.LENIENT.value))

def default_reference_date() -> date | None:
    """Gets the reference date for Julian dates from the environment."""
    value = os.getenv("BCBP_REFERENCE_DATE")
    if not value:
        return None
    try:
        return isoparse(value).date()
    except ValueError:
        raise KeyError(
            "Environment variable BCBP_REFERENCE_DATE is not an ISO date."
        ) from None

def _warn(message: str) -> None:
    """Prints a warning."""
    print(
        colorama.Fore.YELLOW
        + f"⚠️ {message}"
        + colorama.Style.RESET_ALL
    )
