#!/usr/bin/env python3
import argparse
import logging
import sys
from get_configs import get_config
from pipeline_state import PipelineState
from synthese_importer import SyntheseImporter, EmptyTableError
from synthese_extractor import SyntheseExtractor
from synthese_exporter import SyntheseExporter
args = None
logger = None


def parse_command_line(argv=None):
    parser = argparse.ArgumentParser(
        description="""
             Tool to extract the additional fields of a GeoNature synthese export
             (caste, station, annee_determination, methode, plante) and resolve
             visited plants against TaxRef.

             Commands: import, extract, run.
             """,
        formatter_class=argparse.RawTextHelpFormatter, add_help=True)

    parser.add_argument('-v', '--verbosity',
                        help='verbosity level. repeat flag for more detail',
                        default=0,
                        dest='verbose',
                        action='count')

    parser.add_argument('-c', '--config', help='config name, loads config_files/<config>_config.py',
                        default='geonature')

    subparsers = parser.add_subparsers(help='import checks the inputs, extract also derives the columns, '
                                            'run does both and writes the export', dest="subcommand")
    import_parser = subparsers.add_parser('import')
    extract_parser = subparsers.add_parser('extract')
    run_parser = subparsers.add_parser('run')

    for sub_parser in [import_parser, extract_parser, run_parser]:
        sub_parser.add_argument('-p', '--path', help='folder holding the synthese and taxref files', default=None)
        sub_parser.add_argument('-g', '--geonature', help='file name pattern of the synthese export', default=None)
        sub_parser.add_argument('-t', '--taxref', help='file name pattern of the taxref table', default=None)

    for sub_parser in [extract_parser, run_parser]:
        sub_parser.add_argument('--col', nargs='+', default=None,
                                help='columns to extract: plante caste station annee_determination methode')
        sub_parser.add_argument('--precision', default=None,
                                help='taxonomic precision kept for plants: famille, genre or sp')
        sub_parser.add_argument('--corrections', default=None,
                                help='json correction table replacing the bundled one')

    run_parser.add_argument('-o', '--output_path', help='destination folder', default=None)
    run_parser.add_argument('-f', '--fichier', help='output file name, .xlsx for excel', default=None)
    run_parser.add_argument('-u', '--unmatched_report', default=None,
                            help='csv file name listing plant names without taxref match')

    return parser.parse_args(argv)


def main(args):
    config = get_config(config=args.config)

    logging_level = logger.getEffectiveLevel()

    state = PipelineState()

    importer = SyntheseImporter(config=config, path=args.path, geonature=args.geonature, taxref=args.taxref,
                                logging_level=logging_level)
    state = importer.run_all(state)

    if args.subcommand == 'import':
        print(f"synthese: {len(state.observations)} rows, taxref: {len(state.taxref)} rows")
        return state

    extractor = SyntheseExtractor(state=state,
                                  columns=args.col if args.col else getattr(config, 'EXTRACT_COLUMNS', None),
                                  precision_taxo=args.precision or getattr(config, 'PRECISION_TAXO', None),
                                  corrections_path=args.corrections or getattr(config, 'CORRECTIONS_PATH', None),
                                  logging_level=logging_level)
    state = extractor.run_all()

    if args.subcommand == 'extract':
        print(f"extracted {extractor.columns} on {len(state.export_frame)} rows")
        return state

    exporter = SyntheseExporter(config=config, path=args.output_path, file_name=args.fichier,
                                unmatched_report=args.unmatched_report, logging_level=logging_level)
    file_path = exporter.run_all(state)
    print(f"export written to {file_path}")

    return state


def setup_logging(verbosity: int):
    """
    Set the logging level, between 0 (critical only) to 4 (debug)

    Args:
        verbosity: The level of logging to set

    """
    global logger
    logger = logging.getLogger('Client')
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter("%(name)s — %(levelname)s — %(funcName)s:%(lineno)d - %(message)s")
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # with this pattern, it's rarely necessary to propagate the error up to parent

    logger.propagate = False

    if verbosity == 0:
        logger.setLevel(logging.CRITICAL)
    elif verbosity == 1:
        logger.setLevel(logging.ERROR)
    elif verbosity == 2:
        logger.setLevel(logging.WARN)
    elif verbosity == 3:
        logger.setLevel(logging.INFO)
    elif verbosity >= 4:
        logger.setLevel(logging.DEBUG)


def run_cli(argv=None):
    """entry point of the geonature-extract script, returns the exit status"""
    global args
    args = parse_command_line(argv)

    setup_logging(args.verbose)

    if args.subcommand is None:
        print("No command specified; use import, extract or run.")
        print(f"Run {sys.argv[0]} --help for more info.")
        return 1

    try:
        main(args)
    except (EmptyTableError, FileNotFoundError, ValueError) as e:
        logger.critical(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(run_cli())
