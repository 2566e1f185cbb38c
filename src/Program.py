import sys
import os
import argparse
import logging

from render.renderers import RENDERER_REGISTRY, parse_year_range
from scenario_loader import load_program, program_exists, list_programs


BASE_PATH = os.path.normpath(os.path.join(os.path.dirname(__file__), '..'))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Scenario comparison for financial trajectories',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  Summary      Print the key insight, summary deltas and key years (default)
  YearDeltas   Print the year-by-year delta table

Examples:
  python src/Program.py quickexample
  python src/Program.py quickexample --mode YearDeltas
  python src/Program.py quickexample --mode YearDeltas --years 2030-2040
  python src/Program.py --list
        """
    )
    parser.add_argument('program_name', nargs='?', help='Name of the program (folder in input-parameters)')
    parser.add_argument('--mode', '-m',
                        choices=list(RENDERER_REGISTRY.keys()),
                        default='Summary',
                        help='Output mode: Summary (default) or YearDeltas')
    parser.add_argument('--years', '-y',
                        help="Year range to display: '2030-2040', '2030-', '-2040' or '2030'")
    parser.add_argument('--list', '-l',
                        action='store_true',
                        help='List available programs and exit')
    parser.add_argument('--verbose', '-v',
                        action='store_true',
                        help='Enable informational logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.list:
        for name in list_programs(BASE_PATH):
            print(name)
        return

    if not args.program_name:
        parser.error("program_name is required (or use --list to see available programs)")

    if not program_exists(BASE_PATH, args.program_name):
        program_dir = os.path.join(BASE_PATH, 'input-parameters', args.program_name)
        print(f"Program not found: {program_dir} must contain baseline.json and alternate.json")
        sys.exit(1)

    comparison = load_program(BASE_PATH, args.program_name)

    start_year, end_year = None, None
    if args.years:
        start_year, end_year = parse_year_range(args.years, comparison)

    renderer = RENDERER_REGISTRY[args.mode](start_year, end_year)
    renderer.render(comparison)


if __name__ == "__main__":
    main()
