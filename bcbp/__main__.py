"""Tools for decoding IATA Bar-Coded Boarding Passes."""

# Standard imports
import argparse

# Third-party imports
from dateutil.parser import isoparse
from dotenv import load_dotenv

# Project imports
import bcbp.tools as bt
from bcbp.validator import Mode

def main(argv=None):
    """Runs the command line interface."""
    # Load environment variables from .env file.
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="bcbp",
        description="Tools for decoding IATA Bar-Coded Boarding Passes."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    mode_parser = argparse.ArgumentParser(add_help=False)
    mode_parser.add_argument("--strict",
        action="store_const",
        const=Mode.STRICT,
        dest="mode",
        help="Check field content as well as field lengths",
    )

    # decode
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode a BCBP-coded text string",
        parents=[mode_parser],
    )
    decode_parser.add_argument("bcbp",
        metavar="BCBP_TEXT",
        type=str,
    )
    decode_parser.add_argument("--date",
        dest="reference_date",
        help="Resolve Julian dates relative to this date (YYYY-MM-DD)",
        metavar="DATE",
        type=lambda s: isoparse(s).date(),
    )

    # pkpass
    pkpass_parser = subparsers.add_parser(
        "pkpass",
        help="Decode the boarding pass in a .pkpass file",
        parents=[mode_parser],
    )
    pkpass_parser.add_argument("path",
        metavar="PATH",
        type=str,
    )

    # import-pkpasses
    subparsers.add_parser(
        "import-pkpasses",
        help="Decode .pkpass files in the import folder",
        parents=[mode_parser],
    )

    # Parse arguments
    args = parser.parse_args(argv)
    match args.command:
        case "decode":
            bt.decode_bcbp(args.bcbp, args.mode, args.reference_date)
        case "pkpass":
            bt.decode_pkpass(args.path, args.mode)
        case "import-pkpasses":
            bt.import_pkpasses(args.mode)

if __name__ == "__main__":
    main()
