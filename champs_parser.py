"""champs_parser: extraction of the sub-fields GeoNature serializes into the
   `champs_additionnels` column, e.g.
   "{'caste': 'Femelle', 'station': 'S01', 'annee_determination': 2021, 'plante': 'Salvia pratensis', ...}"
   A key missing from a blob gives a missing value, never an error.
"""
import logging
from functools import lru_cache
import pandas as pd
import regex as re
from constants import (CH_CASTE, CH_STATION, CH_ANNEE, CH_METH_COLLECTE, CH_TYPE_PIEGEAGE,
                       CH_TRAPPING_TYPE, CH_PLANTE, CH_LB_NOM, TRAPPING_MARKER, PAN_TRAP_MARKER)
from gen_import_utils import is_missing

NONE_TOKEN = "None"


@lru_cache(maxsize=None)
def field_pattern(key: str, quoted: bool = True):
    """field_pattern: compiles the pattern of one key of the blob.
        quoted keys look like  'key': 'value', '
        bare keys look like    'key': value, '
        args:
            key: name of the key in the blob
            quoted: whether the value is wrapped in single quotes
    """
    if quoted:
        return re.compile(rf"'{re.escape(key)}': '(.*?)', '")
    return re.compile(rf"'{re.escape(key)}': (.*?), '")


def extract_field(blob, key: str, quoted: bool = True):
    """extract_field: returns the value of key in blob, or None if the blob is missing
        or does not hold the key.
        args:
            blob: one champs_additionnels value
            key: key to extract
            quoted: False for bare values such as years
    """
    if is_missing(blob):
        return None

    match = field_pattern(key, quoted).search(str(blob))

    if match is None:
        return None

    return match.group(1)


def extract_year(blob):
    """extract_year: annee_determination is stored bare, with None for unknown years"""
    year = extract_field(blob, CH_ANNEE, quoted=False)
    if year == NONE_TOKEN:
        return None
    return year


def derive_capture_method(meth_collecte, type_piegeage, trapping_type):
    """derive_capture_method: chooses the capture method of an observation.
        If the collection method is not trapping it is used as is. For trapping, the trap
        type is only trusted when there is no second trap field to check it against, or
        when it is a pan trap ("Coupelle") confirmed by the second field.
        args:
            meth_collecte: value of meth_collecte
            type_piegeage: value of type_piegeage
            trapping_type: value of trapping_type
        returns:
            the capture method, or None
    """
    if is_missing(meth_collecte):
        return None

    if TRAPPING_MARKER not in meth_collecte:
        return meth_collecte

    if is_missing(trapping_type):
        return None if is_missing(type_piegeage) else type_piegeage

    if not is_missing(type_piegeage) and PAN_TRAP_MARKER in type_piegeage and type_piegeage == trapping_type:
        return type_piegeage

    return None


class ChampsParser:
    """
    ChampsParser:
    Column level extraction from the champs_additionnels series of the synthese.

    Args:
        blobs (pd.Series): champs_additionnels column
        logging_level: logging level INFO, WARNING , DEBUG etc ....
    """

    def __init__(self, blobs: pd.Series, logging_level=logging.INFO):
        self.blobs = blobs
        self.logger = logging.getLogger(f"Client.{self.__class__.__name__}")
        self.logger.setLevel(logging_level)

    def field_series(self, key: str, quoted: bool = True):
        """returns the values of key for every record, as an object series"""
        values = pd.Series([extract_field(blob, key, quoted) for blob in self.blobs],
                           index=self.blobs.index, dtype=object)
        self.logger.debug(f"'{key}' present in {values.notna().sum()} of {len(values)} records")
        return values

    def caste(self):
        return self.field_series(CH_CASTE)

    def station(self):
        return self.field_series(CH_STATION)

    def annee_determination(self):
        return pd.Series([extract_year(blob) for blob in self.blobs], index=self.blobs.index, dtype=object)

    def methode_capture(self):
        """methode_capture: derives the capture method of every record from
            meth_collecte, type_piegeage and trapping_type"""
        meth_collecte = self.field_series(CH_METH_COLLECTE)
        type_piegeage = self.field_series(CH_TYPE_PIEGEAGE)
        trapping_type = self.field_series(CH_TRAPPING_TYPE)

        methods = [derive_capture_method(meth, trap, trapping)
                   for meth, trap, trapping in zip(meth_collecte, type_piegeage, trapping_type)]

        return pd.Series(methods, index=self.blobs.index, dtype=object)

    def raw_plants(self):
        """returns the raw plante and lb_nom values, the input of the plant name normalizer"""
        return self.field_series(CH_PLANTE), self.field_series(CH_LB_NOM)
