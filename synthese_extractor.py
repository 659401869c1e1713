"""synthese_extractor: extract stage. Derives the requested columns from the
   champs_additionnels of the GeoNature synthese, resolves the visited plant against
   TaxRef and optionally keeps only plants resolved to a given precision.
   Derived columns are appended to a copy of the synthese, in its original row order."""
import logging
import pandas as pd
from champs_parser import ChampsParser
from gen_import_utils import is_missing
from constants import (EXTRACT_ALIASES, EXTRACT_ORDER, EXTRACT_PLANTE, EXTRACT_CASTE, EXTRACT_STATION,
                       EXTRACT_ANNEE, EXTRACT_METHODE, GN_ID, GN_CHAMPS, COL_CASTE, COL_STATION,
                       COL_ANNEE, COL_METHODE, COL_PLANTE_SP, COL_PLANTE_CD_REF, PLANT_COLUMNS)
from pipeline_state import PipelineState
from taxon_tools.plant_name_normalizer import PlantNameNormalizer, load_correction_table
from taxon_tools.precision_filter import PrecisionFilter, normalize_precision
from taxon_tools.rank_cascade import RankCascadeMatcher, MATCH_PASS


def normalize_columns(columns):
    """normalize_columns: validates the requested columns and returns them in the
        order they are appended. None selects every column.
        args:
            columns: a column name or a list of column names
    """
    if columns is None:
        return list(EXTRACT_ORDER)

    if isinstance(columns, str):
        columns = [columns]

    requested = set()
    for col in columns:
        key = str(col).strip().lower()
        if key not in EXTRACT_ALIASES:
            raise ValueError(f"unknown column '{col}', expected one of {EXTRACT_ORDER}")
        requested.add(EXTRACT_ALIASES[key])

    return [col for col in EXTRACT_ORDER if col in requested]


class SyntheseExtractor:
    """
    SyntheseExtractor:
    Extraction of the champs_additionnels columns.

    Args:
        state (PipelineState): state filled by the import stage
        columns: columns to derive among plante, caste, station, annee_determination, methode;
                 None derives all of them
        precision_taxo: "famille", "genre", "sp" or None; needs the plante column
        corrections_path (str): json correction table, None for the bundled one
        logging_level: logging level INFO, WARNING , DEBUG etc ....
    """

    def __init__(self, state: PipelineState, columns=None, precision_taxo=None, corrections_path=None,
                 logging_level=logging.INFO):
        self.state = state
        self.logger = logging.getLogger(f"Client.{self.__class__.__name__}")
        self.logger.setLevel(logging_level)

        self.columns = normalize_columns(columns)
        self.precision_taxo = normalize_precision(precision_taxo)
        self.corrections_path = corrections_path

        self.record_full = None
        self.plant_result = None

    def check_input(self):
        """check_input: verifies the state holds a synthese with unique id_synthese"""
        observations = self.state.observations

        if observations is None or self.state.taxref_index is None:
            raise ValueError("import stage must run before extraction")

        missing = [col for col in [GN_ID, GN_CHAMPS] if col not in observations.columns]
        if missing:
            raise ValueError(f"GeoNature synthese is missing columns: {missing}")

        duplicated = observations[GN_ID].duplicated()
        if duplicated.any():
            raise ValueError(f"{int(duplicated.sum())} duplicate id_synthese values in synthese")

    def extract_plante(self, parser: ChampsParser):
        """extract_plante: normalizes the plant names and runs the rank cascade,
            then maps the result back onto record_full by id_synthese."""
        corrections, genus_exclusions = load_correction_table(self.corrections_path)

        taxref_index = self.state.taxref_index

        normalizer = PlantNameNormalizer(corrections=corrections, taxref_index=taxref_index,
                                         logging_level=self.logger.getEffectiveLevel())

        raw_plants, raw_lb_nom = parser.raw_plants()

        plants = normalizer.normalize_frame(raw_plants, raw_lb_nom)
        plants[GN_ID] = self.record_full[GN_ID].values

        matcher = RankCascadeMatcher(taxref_index=taxref_index, genus_exclusions=genus_exclusions,
                                     logging_level=self.logger.getEffectiveLevel())

        self.plant_result = matcher.run(plants)

        result = self.plant_result.set_index(GN_ID)

        for col in PLANT_COLUMNS:
            values = self.record_full[GN_ID].map(result[col])
            self.record_full[col] = pd.Series([pd.NA if is_missing(value) else value for value in values],
                                              index=self.record_full.index, dtype=object)

        # keep nullable Int64 for reference codes
        if taxref_index.cd_ref_is_integer():
            self.record_full[COL_PLANTE_CD_REF] = pd.array(
                [None if is_missing(value) else int(value) for value in self.record_full[COL_PLANTE_CD_REF]],
                dtype=pd.Int64Dtype())

    def unmatched_names(self):
        """unmatched_names: distinct plant names no rank matched, with their number of
            observations, most frequent first. Used to extend the correction table."""
        if self.plant_result is None:
            return None

        unmatched = self.plant_result[self.plant_result[MATCH_PASS].isna() &
                                      self.plant_result[COL_PLANTE_SP].notna()]

        counts = unmatched.groupby(COL_PLANTE_SP).size().reset_index(name='observations')

        return counts.sort_values(['observations', COL_PLANTE_SP], ascending=[False, True]).reset_index(drop=True)

    def apply_precision(self):
        """apply_precision: filters on plant precision, only when the plant column was extracted"""
        if self.precision_taxo is None:
            return

        if EXTRACT_PLANTE not in self.columns:
            self.logger.warning("column 'plante' missing, taxonomic precision cannot be applied. "
                                "Add 'plante' to the extracted columns.")
            return

        precision_filter = PrecisionFilter(taxref_index=self.state.taxref_index,
                                           logging_level=self.logger.getEffectiveLevel())

        self.record_full = precision_filter.apply(self.record_full, self.precision_taxo)

    def run_all(self):
        """run_all: runs all methods in the class in order
            returns:
                the pipeline state with export_frame and unmatched_names filled in
        """
        self.check_input()

        self.record_full = self.state.observations.copy()

        parser = ChampsParser(self.record_full[GN_CHAMPS], logging_level=self.logger.getEffectiveLevel())

        for col in self.columns:
            if col == EXTRACT_CASTE:
                self.record_full[COL_CASTE] = parser.caste()
            elif col == EXTRACT_STATION:
                self.record_full[COL_STATION] = parser.station()
            elif col == EXTRACT_ANNEE:
                self.record_full[COL_ANNEE] = parser.annee_determination()
            elif col == EXTRACT_METHODE:
                self.record_full[COL_METHODE] = parser.methode_capture()
            elif col == EXTRACT_PLANTE:
                self.extract_plante(parser)

        self.apply_precision()

        self.state.export_frame = self.record_full
        self.state.unmatched_names = self.unmatched_names()

        self.logger.info(f"extraction done: {len(self.record_full)} rows, columns {self.columns}")

        return self.state
