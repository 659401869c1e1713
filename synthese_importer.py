"""synthese_importer: import stage. Finds the GeoNature synthese export and the TaxRef
   table in a folder, reads them and checks they are not empty before extraction.
   When several exports are present in the folder, the most recent one is used."""
import logging
import os
import pandas as pd
from pandas.errors import EmptyDataError
from constants import DEFAULT_GEONATURE_PATTERN, DEFAULT_TAXREF_PATTERN
from gen_import_utils import get_newest_file
from pipeline_state import PipelineState
from taxon_tools.taxref_index import TaxrefIndex


class EmptyTableError(Exception):
    pass


class SyntheseImporter:
    """
    SyntheseImporter:
    Loads the two input tables into a PipelineState.

    Args:
        config: config module, see config_files/geonature_config.template.py
        path (str): folder holding both files, overrides config DATA_FOLDER
        geonature (str): file name pattern of the synthese export, overrides config
        taxref (str): file name pattern of the taxref table, overrides config
        logging_level: logging level INFO, WARNING , DEBUG etc ....
    """

    def __init__(self, config=None, path=None, geonature=None, taxref=None, logging_level=logging.INFO):
        self.config = config
        self.logger = logging.getLogger(f"Client.{self.__class__.__name__}")
        self.logger.setLevel(logging_level)

        self.path = path or getattr(config, 'DATA_FOLDER', '.')
        self.geonature_pattern = geonature or getattr(config, 'GEONATURE_PATTERN', DEFAULT_GEONATURE_PATTERN)
        self.taxref_pattern = taxref or getattr(config, 'TAXREF_PATTERN', DEFAULT_TAXREF_PATTERN)
        self.geonature_sep = getattr(config, 'GEONATURE_SEP', ';')
        self.taxref_sep = getattr(config, 'TAXREF_SEP', ',')
        self.taxref_columns = getattr(config, 'TAXREF_COLUMNS', None)

    def file_present(self, pattern: str, label: str):
        """file_present:
           checks that a file matching pattern exists in the import folder,
           returns the newest one.
           args:
                pattern: file name pattern
                label: table name used in messages
        """
        file_path = get_newest_file(self.path, pattern)

        if file_path is None:
            raise FileNotFoundError(f"no {label} file matching '{pattern}' in {os.path.abspath(self.path)}")

        self.logger.info(f"{label} file: {file_path}")

        return file_path

    def read_table(self, file_path: str, sep: str, label: str, pattern: str):
        """read_table: reads a delimited file, raising EmptyTableError if it holds no data
            args:
                file_path: path to the file
                sep: field separator
                label: table name used in messages
                pattern: file name pattern, reported when the table is empty
        """
        try:
            frame = pd.read_csv(file_path, sep=sep, low_memory=False)
        except EmptyDataError as e:
            raise EmptyTableError(self.empty_message(label, pattern)) from e

        self.check_not_empty(frame, label, pattern)

        self.logger.info(f"{label}: {len(frame)} rows, {len(frame.columns)} columns")

        return frame

    def empty_message(self, label: str, pattern: str):
        return (f"Error: {label} not imported. Please re-run the import; if the problem persists, "
                f"check the file name pattern '{pattern}' and the folder '{self.path}'.")

    def check_not_empty(self, frame: pd.DataFrame, label: str, pattern: str):
        """raises EmptyTableError if frame has no rows or no columns"""
        if frame.empty:
            raise EmptyTableError(self.empty_message(label, pattern))

    def run_all(self, state: PipelineState = None):
        """run_all: runs all methods in the class in order
            returns:
                the pipeline state holding observations, taxref and the taxref index
        """
        state = state or PipelineState()

        state.geonature_path = self.file_present(self.geonature_pattern, label="GeoNature synthese")
        state.observations = self.read_table(state.geonature_path, sep=self.geonature_sep,
                                             label="GeoNature synthese", pattern=self.geonature_pattern)

        state.taxref_path = self.file_present(self.taxref_pattern, label="TaxRef reference")
        state.taxref = self.read_table(state.taxref_path, sep=self.taxref_sep,
                                       label="TaxRef reference", pattern=self.taxref_pattern)

        state.taxref_index = TaxrefIndex(state.taxref, column_map=self.taxref_columns,
                                         logging_level=self.logger.getEffectiveLevel())

        return state
