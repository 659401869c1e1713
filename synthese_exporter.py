"""synthese_exporter: export stage, writes the enriched synthese to disk."""
import logging
import os
import pandas as pd
from constants import DEFAULT_EXPORT_FILE
from pipeline_state import PipelineState


class SyntheseExporter:
    """
    SyntheseExporter:
    Writes the export frame of a PipelineState, as csv or as an excel workbook
    when the file name ends in .xlsx.

    Args:
        config: config module, see config_files/geonature_config.template.py
        path (str): destination folder, overrides config EXPORT_FOLDER
        file_name (str): output file name, overrides config EXPORT_FILE
        unmatched_report (str): optional csv name for the unmatched plant names
        logging_level: logging level INFO, WARNING , DEBUG etc ....
    """

    def __init__(self, config=None, path=None, file_name=None, unmatched_report=None, logging_level=logging.INFO):
        self.logger = logging.getLogger(f"Client.{self.__class__.__name__}")
        self.logger.setLevel(logging_level)

        self.path = path or getattr(config, 'EXPORT_FOLDER', '.')
        self.file_name = file_name or getattr(config, 'EXPORT_FILE', DEFAULT_EXPORT_FILE)
        self.unmatched_report = unmatched_report or getattr(config, 'UNMATCHED_REPORT', None)

    def write_frame(self, frame: pd.DataFrame, file_name: str):
        """write_frame: writes frame in the destination folder, creating it if needed
            args:
                frame: dataframe to write
                file_name: name of the file, .xlsx for excel
            returns:
                the path written
        """
        os.makedirs(self.path, exist_ok=True)

        file_path = os.path.join(self.path, file_name)

        if file_name.lower().endswith(".xlsx"):
            frame.to_excel(file_path, index=False, engine="openpyxl")
        else:
            frame.to_csv(file_path, index=False)

        self.logger.info(f"DataFrame has been saved as: {file_path}")

        return file_path

    def run_all(self, state: PipelineState):
        """run_all: writes the export frame, then the unmatched names report if requested
            returns:
                path of the export file
        """
        if state.export_frame is None:
            raise ValueError("extraction stage must run before export")

        file_path = self.write_frame(state.export_frame, self.file_name)

        if self.unmatched_report and state.unmatched_names is not None:
            self.write_frame(state.unmatched_names, self.unmatched_report)

        return file_path
