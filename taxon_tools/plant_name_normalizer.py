"""plant_name_normalizer: cleans the free text plant names typed in GeoNature
   before they are matched against TaxRef. Spelling mistakes and vernacular names are
   rewritten through a static correction table, kept in plant_name_corrections.json
   so it can be extended without touching the matching code."""
import logging
import os
import pandas as pd
import regex as re
from constants import COL_PLANTE_SP, COL_PLANTE_GENRE
from gen_import_utils import read_json_asset, is_missing

DEFAULT_CORRECTIONS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                                        "plant_name_corrections.json")

# qualifiers and codes left in the plant field by observers, "L." for Linnaeus,
# "NA" only as a whole word
NOISE_PATTERN = re.compile(r"\bNA\b|N\. arvernus|Problematicus ssp\. Arvernus|Ssp\. Arvenus"
                           r"|\s\(S\)|\s\(PF\)|\sL\.")

# names that cannot yield a genus: accession numbers and glued "...Sol" fragments
NO_GENUS_PATTERN = re.compile(r"\wSol|[0-9]")

MISSING_TOKEN = "NA"


def load_correction_table(path: str = None):
    """load_correction_table: reads the correction mapping and the list of names
        excluded from genus matching.
        args:
            path: json file with "corrections" and "genus_exclusions" entries,
                  defaults to the table shipped with taxon_tools.
        returns:
            corrections dict with trimmed keys, set of genus exclusions
    """
    asset = read_json_asset(path or DEFAULT_CORRECTIONS_PATH)

    corrections = {}
    for raw, canonical in asset.get("corrections", {}).items():
        # first entry wins, as in a case_when chain
        corrections.setdefault(raw.strip(), canonical.strip())

    genus_exclusions = set(asset.get("genus_exclusions", []))

    return corrections, genus_exclusions


def capitalize_first(text: str):
    """uppercases the first character only, leaving the rest untouched"""
    return text[:1].upper() + text[1:]


class PlantNameNormalizer:
    """
    PlantNameNormalizer:
    Turns the raw `plante` and `lb_nom` values of a record into a candidate species
    name and a candidate genus.

    Args:
        corrections (dict): raw string -> canonical name
        taxref_index (TaxrefIndex): used to detect plant family names
        logging_level: logging level INFO, WARNING , DEBUG etc ....
    """

    def __init__(self, corrections, taxref_index, logging_level=logging.INFO):
        self.corrections = corrections
        self.taxref_index = taxref_index
        self.logger = logging.getLogger(f"Client.{self.__class__.__name__}")
        self.logger.setLevel(logging_level)

    @staticmethod
    def clean(text: str):
        """clean: capitalizes and strips noise tokens until the string no longer changes,
            so that removing one token cannot reveal another on a second pass."""
        previous = None
        text = capitalize_first(text)
        while text != previous:
            previous = text
            text = capitalize_first(NOISE_PATTERN.sub("", text).strip())
        return text

    def normalize(self, raw, secondary=None):
        """normalize: builds the candidate species name of a record
            args:
                raw: the `plante` value, may be missing
                secondary: the `lb_nom` value, may be missing
            returns:
                the normalized name, or None when nothing is left
        """
        text = ("" if is_missing(raw) else str(raw)) + ("" if is_missing(secondary) else str(secondary))

        text = self.clean(text)

        text = self.corrections.get(text, text)

        if text == "" or text == MISSING_TOKEN:
            return None

        return text

    def genus_candidate(self, name):
        """genus_candidate: first word of the normalized name, unless the name holds a
            plant family name or looks like an accession code.
            args:
                name: normalized species name
        """
        if is_missing(name):
            return None

        if self.taxref_index.contains_family(name) or NO_GENUS_PATTERN.search(name):
            return None

        genus = name.split(" ")[0]

        if genus == "" or genus == MISSING_TOKEN:
            return None

        return genus

    def normalize_frame(self, raw_plants: pd.Series, raw_lb_nom: pd.Series):
        """normalize_frame: applies normalize and genus_candidate to every record
            args:
                raw_plants: series of raw `plante` values
                raw_lb_nom: series of raw `lb_nom` values, same index
            returns:
                dataframe with plante_sp and plante_genre columns
        """
        species = pd.Series([self.normalize(raw, secondary) for raw, secondary in zip(raw_plants, raw_lb_nom)],
                            index=raw_plants.index, dtype=object)

        genus = pd.Series([self.genus_candidate(name) for name in species], index=species.index, dtype=object)

        corrected = sum(1 for raw, name in zip(raw_plants, species)
                        if not is_missing(raw) and name is not None and name != str(raw).strip())

        self.logger.debug(f"{corrected} plant names rewritten by normalization")

        return pd.DataFrame({COL_PLANTE_SP: species, COL_PLANTE_GENRE: genus})
