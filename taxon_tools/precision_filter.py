"""precision_filter: keeps the observations whose plant is resolved at least at
   the requested taxonomic rank."""
import logging
import pandas as pd
from constants import (PRECISION_ALIASES, PRECISION_FAMILLE, PRECISION_GENRE, PRECISION_SP,
                       SPECIES_RANKS, GENUS_OR_FINER_RANKS,
                       COL_PLANTE_SP, COL_PLANTE_GENRE, COL_PLANTE_CD_REF)
from gen_import_utils import is_missing


def normalize_precision(precision):
    """normalize_precision: maps french and english precision names to
        "famille", "genre" or "sp". None or an empty value disables filtering.
        args:
            precision: requested precision
    """
    if is_missing(precision):
        return None

    key = str(precision).strip().lower()

    if key in ("none", ""):
        return None

    if key not in PRECISION_ALIASES:
        raise ValueError(f"unknown taxonomic precision '{precision}', "
                         f"expected one of {sorted(PRECISION_ALIASES.keys())}")

    return PRECISION_ALIASES[key]


class PrecisionFilter:
    """
    PrecisionFilter:
    Row filter on the enriched synthese.

    "famille" keeps rows with a reference code or a genus candidate, which also keeps
    unresolved names that merely start with a word. "genre" keeps rows whose reference
    code belongs to a genus or finer taxon, "sp" rows whose plant name is a species
    level taxref name.

    Args:
        taxref_index (TaxrefIndex): the reference taxonomy
        logging_level: logging level INFO, WARNING , DEBUG etc ....
    """

    def __init__(self, taxref_index, logging_level=logging.INFO):
        self.taxref_index = taxref_index
        self.logger = logging.getLogger(f"Client.{self.__class__.__name__}")
        self.logger.setLevel(logging_level)

    def keep_mask(self, frame: pd.DataFrame, precision: str):
        """returns the boolean mask of rows kept at precision"""
        if precision == PRECISION_FAMILLE:
            return frame[COL_PLANTE_CD_REF].notna() | frame[COL_PLANTE_GENRE].notna()

        if precision == PRECISION_GENRE:
            genus_or_finer = self.taxref_index.cd_refs_at_ranks(GENUS_OR_FINER_RANKS)
            return frame[COL_PLANTE_CD_REF].isin(genus_or_finer)

        if precision == PRECISION_SP:
            species_names = self.taxref_index.names_at_ranks(SPECIES_RANKS)
            return frame[COL_PLANTE_SP].notna() & frame[COL_PLANTE_SP].isin(species_names)

        raise ValueError(f"unknown taxonomic precision '{precision}'")

    def apply(self, frame: pd.DataFrame, precision):
        """apply: filters frame at precision, leaving the row order unchanged
            args:
                frame: synthese with the plante_* columns
                precision: famille, genre, sp (or an english alias), None keeps every row
        """
        precision = normalize_precision(precision)

        if precision is None:
            return frame

        upload_length = len(frame.index)

        frame = frame[self.keep_mask(frame, precision).astype(bool)]

        records_dropped = upload_length - len(frame.index)

        if records_dropped > 0:
            self.logger.info(f"{records_dropped} rows dropped below '{precision}' precision")

        return frame
