"""taxref_index: read-only lookup structure over the TaxRef reference table,
   used by the plant name normalizer, the rank cascade and the precision filter."""
import logging
import pandas as pd
import regex as re
from constants import TAXREF_COLUMNS, TR_NAME, TR_RANK, TR_FAMILY, TR_KINGDOM, TR_CD_REF, PLANT_KINGDOM
from gen_import_utils import unique_ordered_list, is_missing

REF_ORDER = 'ref_order'


class TaxrefIndex:
    """
    TaxrefIndex:
    Answers rank membership and name -> (family, cd_ref) queries over the taxonomic
    reference table. Built once per run, never modified.

    Args:
        taxref (pd.DataFrame): the reference table as read from file
        column_map (dict): maps canonical column names (lb_nom, id_rang, famille, regne, cd_ref)
                           to the headers of the file, when they differ
        logging_level: logging level INFO, WARNING , DEBUG etc ....
    """

    def __init__(self, taxref: pd.DataFrame, column_map=None, logging_level=logging.INFO):
        self.logger = logging.getLogger(f"Client.{self.__class__.__name__}")
        self.logger.setLevel(logging_level)

        self.taxref = self.standardize_columns(taxref, column_map)

        self._rank_cache = {}

        self.plant_families = self.family_names_of_kingdom(PLANT_KINGDOM)
        self.family_pattern = self.build_family_pattern(self.plant_families)

        self.logger.info(f"taxref index built on {len(self.taxref)} rows, "
                         f"{len(self.plant_families)} plant families")

    @staticmethod
    def standardize_columns(taxref: pd.DataFrame, column_map=None):
        """standardize_columns: renames the file headers to the canonical taxref names,
            keeps only the columns needed for matching, and records the row order
            of the reference file used for tie-breaking.
            args:
                taxref: the raw reference dataframe
                column_map: canonical name -> file header
        """
        column_map = column_map or {}
        rename_dict = {column_map.get(col, col): col for col in TAXREF_COLUMNS}

        missing = [header for header in rename_dict if header not in taxref.columns]
        if missing:
            raise ValueError(f"taxref table is missing columns: {missing}")

        frame = taxref[list(rename_dict.keys())].rename(columns=rename_dict).reset_index(drop=True)

        frame[REF_ORDER] = range(len(frame))

        return frame

    @staticmethod
    def build_family_pattern(family_names):
        """compiles an alternation of family names, in the order given,
           or None if there is no family to detect"""
        if not family_names:
            return None
        return re.compile("|".join(re.escape(name) for name in family_names))

    def names_at_ranks(self, rank_codes):
        """names_at_ranks: all canonical names whose rank code is in rank_codes
            args:
                rank_codes: iterable of taxref rank codes e.g. {"ES", "SSES"}
            returns:
                a set of taxon names
        """
        key = frozenset(rank_codes)
        if key not in self._rank_cache:
            rank_mask = self.taxref[TR_RANK].isin(key)
            self._rank_cache[key] = set(self.taxref.loc[rank_mask, TR_NAME].dropna())
        return self._rank_cache[key]

    def cd_refs_at_ranks(self, rank_codes):
        """returns the set of reference codes of rows whose rank code is in rank_codes"""
        rank_mask = self.taxref[TR_RANK].isin(frozenset(rank_codes))
        return set(self.taxref.loc[rank_mask, TR_CD_REF].dropna())

    def family_names_of_kingdom(self, kingdom: str):
        """family_names_of_kingdom: distinct non empty family names of a kingdom,
            in order of first appearance in the reference table.
            args:
                kingdom: e.g. "Plantae"
        """
        families = self.taxref.loc[self.taxref[TR_KINGDOM] == kingdom, TR_FAMILY]
        return unique_ordered_list([f for f in families if not is_missing(f)])

    def find_family(self, text):
        """find_family: returns the first plant family name found inside text,
            leftmost match first, ties going to the family listed first in taxref.
            None when text is missing or holds no family name.
        """
        if self.family_pattern is None or is_missing(text):
            return None
        match = self.family_pattern.search(str(text))
        return match.group(0) if match else None

    def contains_family(self, text):
        """returns True if text contains any plant family name"""
        return self.find_family(text) is not None

    def reference_rows(self):
        """returns name, family, cd_ref and reference order for every taxref row,
           the right hand side of the cascade joins"""
        return self.taxref[[TR_NAME, TR_FAMILY, TR_CD_REF, REF_ORDER]]

    def lookup(self, name, by_family=False):
        """lookup: every reference row whose name equals name.
            RankCascadeMatcher.join_reference performs the same join in bulk over
            reference_rows(), keeping the last tuple of this list per record.
            args:
                name: taxon name used as join key
                by_family: if True, name is a matched family name and is returned
                           as the family of every row, as in the family pass.
            returns:
                list of (family, cd_ref) tuples in reference order, possibly empty
        """
        rows = self.taxref[self.taxref[TR_NAME] == name]
        if by_family:
            return [(name, cd_ref) for cd_ref in rows[TR_CD_REF]]
        return list(zip(rows[TR_FAMILY], rows[TR_CD_REF]))

    def cd_ref_is_integer(self):
        """True when the reference code column holds integers"""
        return pd.api.types.is_integer_dtype(self.taxref[TR_CD_REF])
