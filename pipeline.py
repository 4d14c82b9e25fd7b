"""
Main pipeline runner for the Daily Puzzle Stats project.
"""
import argparse
import logging

from config.paths import DATA_PATH, OUTPUT_PATH
from config.settings import ALL_PARTICIPANTS, LOG_LEVEL
from src.analysis.entries import load_entries
from src.analysis.filter_state import filter_options
from src.utils.logging import setup_logging
from src.visualization.site import build_site, show_dashboard

def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Daily Puzzle Stats dashboard builder')

    parser.add_argument('--data', default=DATA_PATH,
                        help='Path or http(s) URL of the puzzle log (CSV or XLSX)')
    parser.add_argument('--output-dir', default=OUTPUT_PATH,
                        help='Directory the dashboards are written to')
    parser.add_argument('--participant', default=None,
                        help=f'Only render this participant ("{ALL_PARTICIPANTS}" for everyone); '
                             'by default every filter option is rendered')
    parser.add_argument('--show', action='store_true',
                        help='Open an interactive window with hover labels instead of writing files')
    parser.add_argument('--log-level', default=LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level')

    return parser.parse_args(argv)

def main(argv=None) -> int:
    """Main function to run the pipeline."""
    args = parse_args(argv)

    logger = setup_logging(log_level=args.log_level, log_type="build")
    logger.info("Starting Daily Puzzle Stats pipeline")
    logger.info(f"Parsed arguments: data={args.data}, output_dir={args.output_dir}, "
                f"participant={args.participant}, show={args.show}")

    # A dataset that cannot be loaded still produces placeholder dashboards
    load_errors = []
    entries = load_entries(args.data, on_error=load_errors.append)
    load_failed = bool(load_errors)
    logger.info(f"Loaded {len(entries)} entries")

    if args.show:
        show_dashboard(entries, args.participant or ALL_PARTICIPANTS, load_failed=load_failed)
        return 0

    if args.participant and args.participant not in filter_options(entries):
        logger.warning(f"Participant '{args.participant}' has no entries; rendering placeholders")

    participants = [args.participant] if args.participant else None
    results = build_site(entries, args.output_dir, participants=participants, load_failed=load_failed)

    print("\nBuild complete.")
    print(f"- Dashboards for {len(results)} filter options saved to: '{args.output_dir}'")
    return 0

if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).warning("Program interrupted by user. Exiting gracefully...")
