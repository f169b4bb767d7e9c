"""Decodes Bar-Coded Boarding Pass (BCBP) text."""

# Standard imports
from collections.abc import Callable
from datetime import date

# Project imports
from bcbp.cursor import Cursor
from bcbp.dates import parse_issuance_date, resolve_flight_date
from bcbp.errors import (
    DecodeError, ExcessData, FieldValidationFailed, InsufficientData,
    InvalidFormatCode, StructuralMismatch,
)
from bcbp.fields import (
    FIELDS, FORMAT_CODE, SECURITY_DATA_BEGIN, VERSION_NUMBER_BEGIN,
    CharClass, FieldSpec,
)
from bcbp.models import BoardingPass, DecodeResult, Leg
from bcbp.validator import Mode, parse_hex, parse_number, validate

class Decoder():
    """
    Decodes BCBP text into a BoardingPass.

    The text is read in a single pass:

    1. Mandatory unique block (format code, leg count, name, e-ticket)
    2. For each leg:
       a. Mandatory repeated block, ending with the size of the rest of
          the leg
       b. Conditional unique block (first leg only, when it starts with
          the version number marker)
       c. Conditional repeated block
       d. Individual airline use data (the rest of the leg)
    3. Security block
    4. Nothing else

    A decoder keeps no state between calls. The clock is only read to
    get the reference date for resolving Julian dates.
    """

    def __init__(
        self,
        mode: Mode | str = Mode.LENIENT,
        clock: Callable[[], date] = date.today,
    ):
        self.mode: Mode = Mode.from_value(mode)
        self.clock: Callable[[], date] = clock

    def __repr__(self):
        return f"Decoder(mode={self.mode.value})"

    def decode(self, bcbp_str: str) -> BoardingPass:
        """Decodes BCBP text, raising DecodeError on failure."""
        cursor = Cursor(bcbp_str)
        today = self.clock()

        # MANDATORY UNIQUE
        mand_u = self._parse_mand_u(cursor)
        leg_count = mand_u['leg_count']

        cond_u = {}
        legs = []
        for leg_index in range(leg_count):
            if cursor.at_end():
                raise StructuralMismatch(
                    'leg_count', cursor.position,
                    f"{leg_count} legs declared but only {leg_index} present"
                )

            # MANDATORY REPEATED
            mand_r = self._parse_mand_r(cursor)
            leg_end = cursor.position + mand_r.pop('conditional_size')
            if leg_end > len(bcbp_str):
                raise InsufficientData(
                    'conditional_size', cursor.position - 2,
                    f"Leg {leg_index + 1} runs {leg_end - len(bcbp_str)} "
                    "characters past the end of the data"
                )

            # CONDITIONAL UNIQUE
            if (leg_index == 0 and cursor.position < leg_end
                    and cursor.peek() == VERSION_NUMBER_BEGIN):
                cond_u = self._parse_conditional(
                    cursor, 'conditional_unique', 'conditional_unique_size',
                    leg_end,
                )

            # CONDITIONAL REPEATED
            cond_r = {}
            if cursor.position < leg_end:
                cond_r = self._parse_conditional(
                    cursor, 'conditional_repeated',
                    'conditional_repeated_size', leg_end,
                )

            # AIRLINE REPEATED
            if cursor.position < leg_end:
                spec = FIELDS['airline_repeated'][0]
                cond_r[spec.key] = cursor.take(
                    leg_end - cursor.position, spec.key
                )

            legs.append(self._leg(mand_r, cond_r, today))

        # SECURITY
        security = {}
        unstructured = None
        if not cursor.at_end():
            if cursor.peek() == SECURITY_DATA_BEGIN:
                security = self._parse_security(cursor)
            elif self.mode == Mode.STRICT:
                raise ExcessData(
                    'security_data_begin', cursor.position,
                    f"{cursor.remaining()} characters follow the last leg"
                )
            else:
                unstructured = cursor.take(cursor.remaining())

        # LEFTOVER DATA
        if not cursor.at_end():
            raise ExcessData(
                'security_data', cursor.position,
                f"{cursor.remaining()} characters follow the security data"
            )

        bag_tags = tuple(
            cond_u[key] for key in (
                'baggage_tag_number',
                'baggage_tag_number_nonconsecutive_1',
                'baggage_tag_number_nonconsecutive_2',
            ) if cond_u.get(key)
        )
        return BoardingPass(
            format_code=mand_u['format_code'],
            passenger_name=mand_u['passenger_name'],
            electronic_ticket_indicator=mand_u['electronic_ticket_indicator'],
            legs=tuple(legs),
            version_number=cond_u.get('version_number'),
            passenger_description=cond_u.get('passenger_description'),
            check_in_source=cond_u.get('check_in_source'),
            boarding_pass_source=cond_u.get('boarding_pass_source'),
            date_of_pass_issuance=cond_u.get('date_of_pass_issuance'),
            pass_issuance_date=parse_issuance_date(
                cond_u.get('date_of_pass_issuance'), today
            ),
            document_type=cond_u.get('document_type'),
            boarding_pass_issuer=cond_u.get('boarding_pass_issuer'),
            baggage_tag_numbers=bag_tags,
            security_data_type=security.get('security_data_type'),
            security_data=security.get('security_data'),
            unstructured_data=unstructured,
        )

    def _parse_mand_u(self, cursor: Cursor) -> dict:
        """Parses the mandatory unique block."""
        mand_u = {}
        for spec in FIELDS['mandatory_unique']:
            start = cursor.position
            raw = cursor.take(spec.length, spec.key)
            match spec.key:
                case 'format_code':
                    if raw != FORMAT_CODE:
                        raise InvalidFormatCode(
                            spec.key, start,
                            f"Expected format code {FORMAT_CODE!r}, "
                            f"got {raw!r}"
                        )
                    mand_u[spec.key] = raw
                case 'leg_count':
                    # Every following block depends on the leg count, so
                    # it is checked in every mode.
                    leg_count = parse_number(spec, raw, Mode.STRICT, start)
                    if leg_count < 1:
                        raise StructuralMismatch(
                            spec.key, start, "A pass must have 1 to 9 legs"
                        )
                    mand_u[spec.key] = leg_count
                case _:
                    mand_u[spec.key] = validate(spec, raw, self.mode, start)
        return mand_u

    def _parse_mand_r(self, cursor: Cursor) -> dict:
        """Parses a mandatory repeated block."""
        mand_r = {}
        for spec in FIELDS['mandatory_repeated']:
            start = cursor.position
            raw = cursor.take(spec.length, spec.key)
            if spec.char_class is CharClass.HEX:
                mand_r[spec.key] = parse_hex(spec, raw, start)
            elif spec.key == 'julian_date_of_flight':
                validate(spec, raw, self.mode, start)
                mand_r[spec.key] = self._parse_julian_date(spec, raw, start)
            else:
                mand_r[spec.key] = validate(spec, raw, self.mode, start)
        return mand_r

    def _parse_julian_date(
        self, spec: FieldSpec, raw: str, offset: int
    ) -> int | None:
        """Parses a day of year, which must be 1 through 366."""
        day_of_year = parse_number(spec, raw, self.mode, offset)
        if day_of_year is None or 1 <= day_of_year <= 366:
            return day_of_year
        if self.mode == Mode.STRICT:
            raise FieldValidationFailed(
                spec.key, offset, f"{day_of_year} is not a day of the year"
            )
        return None

    def _parse_conditional(
        self, cursor: Cursor, phase: str, size_key: str, block_end: int
    ) -> dict:
        """
        Parses a conditional block.

        Conditional blocks have a field (identified by size_key)
        indicating the size of the block after it. Fields are populated
        in order until that size is used up. A size that ends partway
        through a field, or that runs past block_end, is a structural
        error. Characters left over after the last known field belong
        to newer versions of the standard: they are skipped in lenient
        mode and rejected in strict mode.
        """
        cond = {}
        sub_end = None # End of the sized part of the block
        for spec in FIELDS[phase]:
            start = cursor.position
            end = block_end if sub_end is None else sub_end
            if start == sub_end:
                break
            if start + spec.length > end:
                raise StructuralMismatch(
                    spec.key, start,
                    f"Declared size ends {end - start} characters into "
                    f"the {spec.length}-character field"
                )
            raw = cursor.take(spec.length, spec.key)
            if spec.key == size_key:
                sub_end = cursor.position + parse_hex(spec, raw, start)
                if sub_end > block_end:
                    raise StructuralMismatch(
                        spec.key, start,
                        f"Declared size runs {sub_end - block_end} "
                        "characters past the end of the leg"
                    )
                continue
            cond[spec.key] = validate(spec, raw, self.mode, start)
        if cursor.position < sub_end:
            if self.mode == Mode.STRICT:
                raise StructuralMismatch(
                    phase, cursor.position,
                    f"{sub_end - cursor.position} unknown characters at "
                    "the end of the block"
                )
            cursor.take(sub_end - cursor.position, phase)
        return cond

    def _parse_security(self, cursor: Cursor) -> dict:
        """Parses the security block."""
        security = {}
        data_len = None
        for spec in FIELDS['security']:
            start = cursor.position
            if spec.length is None:
                # Opaque; only its length is checked.
                security[spec.key] = cursor.take(data_len, spec.key)
                continue
            raw = cursor.take(spec.length, spec.key)
            if spec.char_class is CharClass.HEX:
                data_len = parse_hex(spec, raw, start)
            else:
                security[spec.key] = validate(spec, raw, self.mode, start)
        return security

    def _leg(self, mand_r: dict, cond_r: dict, today: date) -> Leg:
        """Builds a Leg from its parsed blocks."""
        day_of_year = mand_r['julian_date_of_flight']
        return Leg(
            **mand_r,
            date_of_flight=(
                None if day_of_year is None
                else resolve_flight_date(day_of_year, today)
            ),
            **cond_r,
        )


def decode(
    bcbp_str: str,
    mode: Mode | str = Mode.LENIENT,
    today: date | None = None,
) -> BoardingPass:
    """
    Decodes BCBP text.

    Julian dates are resolved relative to today, which defaults to the
    current date.
    """
    if today is None:
        return Decoder(mode).decode(bcbp_str)
    return Decoder(mode, clock=lambda: today).decode(bcbp_str)

def decode_result(
    bcbp_str: str,
    mode: Mode | str = Mode.LENIENT,
    today: date | None = None,
) -> DecodeResult:
    """Decodes BCBP text, returning the error instead of raising it."""
    try:
        return DecodeResult(boarding_pass=decode(bcbp_str, mode, today))
    except DecodeError as e:
        return DecodeResult(error=e)
