"""Reads boarding passes from Apple Wallet PKPass archives."""

# Standard imports
import json
from datetime import datetime
from pathlib import Path
from zipfile import ZipFile
from zoneinfo import ZoneInfo

# Third-party imports
from dateutil.parser import isoparse

# Project imports
from bcbp.decoder import decode
from bcbp.models import BoardingPass
from bcbp.validator import Mode

class PKPassError(Exception):
    """Raised when a PKPass archive has no usable pass data."""


class PKPass():
    """Represents an Apple Wallet PKPass boarding pass."""
    PASS_FILE = "pass.json"

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.pass_json: dict = self._load_pass_json()
        self.relevant_date: datetime | None = self._parse_relevant_date()
        self.message: str | None = self._parse_message()

    def __repr__(self):
        return f"PKPass({self.path.name})"

    def boarding_pass(
        self, mode: Mode | str = Mode.LENIENT
    ) -> BoardingPass | None:
        """
        Decodes the pass's barcode message.

        The relevant date, when the pass has one, is the reference date
        for resolving the years of Julian dates.
        """
        if self.message is None:
            return None
        today = None
        if self.relevant_date is not None:
            today = self.relevant_date.date()
        return decode(self.message, mode, today)

    def archive_filename(self, mode: Mode | str = Mode.LENIENT) -> str:
        """Creates an archive filename."""
        fields = []
        bp = self.boarding_pass(mode)
        if self.relevant_date is not None:
            fields.append(self.relevant_date.strftime("%Y%m%dT%H%MZ"))
        elif bp is not None and bp.legs[0].date_of_flight is not None:
            fields.append(bp.legs[0].date_of_flight.strftime("%Y%m%d"))
        else:
            fields.append("NODATE")
        if bp is not None:
            leg = bp.legs[0]
            fields.append(leg.operating_carrier_designator)
            fields.append(leg.flight_number)
            fields.append("-".join([leg.from_airport, leg.to_airport]))
            if bp.leg_count > 1:
                fields.append(f"{bp.leg_count}LEGS")
        fields = [f for f in fields if f]
        return "_".join(fields) + ".pkpass"

    def _load_pass_json(self) -> dict:
        """Gets boarding pass JSON."""
        with ZipFile(self.path, 'r') as zf:
            if PKPass.PASS_FILE not in zf.namelist():
                raise PKPassError(
                    f"{PKPass.PASS_FILE} not found in {self.path}."
                )
            with zf.open(PKPass.PASS_FILE) as pf:
                return json.loads(pf.read().decode('utf-8'))

    def _parse_message(self) -> str | None:
        """Gets the barcode message."""
        # Newer passes list barcodes; older ones have a single barcode.
        barcodes = self.pass_json.get('barcodes') or []
        if len(barcodes) > 0:
            return barcodes[0].get('message')
        return self.pass_json.get('barcode', {}).get('message')

    def _parse_relevant_date(self) -> datetime | None:
        """Gets the PKPass date."""
        try:
            pass_date = isoparse(self.pass_json.get('relevantDate'))
            return pass_date.astimezone(ZoneInfo("UTC"))
        except (TypeError, ValueError):
            return None
