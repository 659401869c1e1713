"""rank_cascade: matches normalized plant names against TaxRef, first at species rank,
   then at genus rank, then by family name found inside the plant name.
   A record resolved by one pass is never touched by a later pass, and each record
   keeps exactly one reference row however many TaxRef rows share its name."""
import logging
import pandas as pd
from constants import (GN_ID, COL_PLANTE_SP, COL_PLANTE_GENRE, COL_PLANTE_FAMILLE, COL_PLANTE_CD_REF,
                       PLANT_COLUMNS, SPECIES_RANKS, GENUS_RANKS, TR_NAME, TR_FAMILY, TR_CD_REF)
from taxon_tools.taxref_index import REF_ORDER

MATCH_PASS = 'match_pass'
JOIN_KEY = 'join_key'
CANDIDATE_ORDER = 'candidate_order'

PASS_SPECIES = 'species'
PASS_GENUS = 'genus'
PASS_FAMILY = 'family'

CASCADE_ORDER = [PASS_SPECIES, PASS_GENUS, PASS_FAMILY]


class RankCascadeMatcher:
    """
    RankCascadeMatcher:
    Resolves plante_sp / plante_genre into plante_famille / plante_cd_ref.

    Args:
        taxref_index (TaxrefIndex): the reference taxonomy
        genus_exclusions (set): names never matched at genus rank, e.g. garden hybrids
        logging_level: logging level INFO, WARNING , DEBUG etc ....
    """

    def __init__(self, taxref_index, genus_exclusions=None, logging_level=logging.INFO):
        self.taxref_index = taxref_index
        self.genus_exclusions = set(genus_exclusions or [])
        self.logger = logging.getLogger(f"Client.{self.__class__.__name__}")
        self.logger.setLevel(logging_level)

        self.species_names = self.taxref_index.names_at_ranks(SPECIES_RANKS)
        self.genus_names = self.taxref_index.names_at_ranks(GENUS_RANKS)

        self.pass_counts = {}

    def init_accumulator(self, plants: pd.DataFrame):
        """init_accumulator: copy of the normalized records without taxonomy,
            sorted on id_synthese.
            args:
                plants: dataframe with id_synthese, plante_sp and plante_genre columns
        """
        accumulator = plants[[GN_ID, COL_PLANTE_SP, COL_PLANTE_GENRE]].copy()

        if accumulator[GN_ID].duplicated().any():
            duplicates = sorted(set(accumulator.loc[accumulator[GN_ID].duplicated(), GN_ID]))
            raise ValueError(f"id_synthese values are not unique: {duplicates}")

        accumulator[COL_PLANTE_FAMILLE] = pd.Series(pd.NA, index=accumulator.index, dtype=object)
        accumulator[COL_PLANTE_CD_REF] = pd.Series(pd.NA, index=accumulator.index, dtype=object)
        accumulator[MATCH_PASS] = pd.Series(pd.NA, index=accumulator.index, dtype=object)

        return accumulator.sort_values(GN_ID, kind='stable').reset_index(drop=True)

    def species_candidates(self, accumulator):
        """records whose plant name is a species level taxref name"""
        mask = accumulator[COL_PLANTE_SP].isin(self.species_names)
        candidates = accumulator.loc[mask, [GN_ID]].copy()
        candidates[JOIN_KEY] = accumulator.loc[mask, COL_PLANTE_SP]
        return candidates

    def genus_candidates(self, accumulator):
        """records not resolved at species rank, not excluded, holding no family name,
           whose first word is a genus level taxref name"""
        species = accumulator[COL_PLANTE_SP]

        has_family = species.apply(self.taxref_index.contains_family).astype(bool)

        mask = accumulator[MATCH_PASS].isna() & \
            ~species.isin(self.genus_exclusions) & \
            ~species.isin(self.species_names) & \
            ~has_family & \
            accumulator[COL_PLANTE_GENRE].isin(self.genus_names)

        candidates = accumulator.loc[mask, [GN_ID]].copy()
        candidates[JOIN_KEY] = accumulator.loc[mask, COL_PLANTE_GENRE]
        return candidates

    def family_candidates(self, accumulator):
        """records whose plant name contains a plant family name, keyed on the first family found"""
        families = pd.Series([self.taxref_index.find_family(name) for name in accumulator[COL_PLANTE_SP]],
                             index=accumulator.index, dtype=object)
        mask = families.notna()
        candidates = accumulator.loc[mask, [GN_ID]].copy()
        candidates[JOIN_KEY] = families[mask]
        return candidates

    def join_reference(self, candidates, by_family=False):
        """join_reference: joins candidates to every taxref row sharing their key,
            then keeps the last reference row of each record, in taxref order.
            args:
                candidates: dataframe with id_synthese and join_key
                by_family: family pass, where the key itself is the family and a key
                           without a taxref row still resolves the family
            returns:
                one row per candidate record with plante_famille and plante_cd_ref
        """
        candidates = candidates.reset_index(drop=True)
        candidates[CANDIDATE_ORDER] = range(len(candidates))

        reference = self.taxref_index.reference_rows()

        joined = pd.merge(candidates, reference, left_on=JOIN_KEY, right_on=TR_NAME,
                          how='left' if by_family else 'inner')

        # fan-out rows of a record stay in taxref order, the last one is kept
        joined = joined.sort_values([CANDIDATE_ORDER, REF_ORDER], kind='stable', na_position='first')
        joined = joined.drop_duplicates(subset=GN_ID, keep='last')

        if by_family:
            joined[COL_PLANTE_FAMILLE] = joined[JOIN_KEY]
        else:
            joined[COL_PLANTE_FAMILLE] = joined[TR_FAMILY]

        joined[COL_PLANTE_CD_REF] = joined[TR_CD_REF]

        return joined[[GN_ID, COL_PLANTE_FAMILLE, COL_PLANTE_CD_REF]]

    def merge_pass(self, accumulator, matches, pass_name):
        """merge_pass: writes the matches of one pass into the accumulator,
            only for records no earlier pass resolved.
            args:
                accumulator: running result, one row per record
                matches: output of join_reference
                pass_name: species, genus or family
        """
        matches = matches.set_index(GN_ID)

        open_mask = accumulator[MATCH_PASS].isna() & accumulator[GN_ID].isin(matches.index)

        open_ids = accumulator.loc[open_mask, GN_ID]

        for col in [COL_PLANTE_FAMILLE, COL_PLANTE_CD_REF]:
            accumulator.loc[open_mask, col] = open_ids.map(matches[col]).astype(object).values

        accumulator.loc[open_mask, MATCH_PASS] = pass_name

        self.pass_counts[pass_name] = int(open_mask.sum())

        return accumulator.sort_values(GN_ID, kind='stable').reset_index(drop=True)

    def run(self, plants: pd.DataFrame):
        """run: executes the species, genus and family passes in that order.
            args:
                plants: dataframe with id_synthese, plante_sp and plante_genre columns
            returns:
                accumulator sorted on id_synthese with the four plant columns and match_pass
        """
        accumulator = self.init_accumulator(plants)

        self.pass_counts = {}

        for pass_name in CASCADE_ORDER:
            if pass_name == PASS_SPECIES:
                candidates = self.species_candidates(accumulator)
            elif pass_name == PASS_GENUS:
                candidates = self.genus_candidates(accumulator)
            else:
                candidates = self.family_candidates(accumulator)

            self.logger.debug(f"{pass_name} pass: {len(candidates)} candidate records")

            matches = self.join_reference(candidates, by_family=(pass_name == PASS_FAMILY))

            accumulator = self.merge_pass(accumulator, matches, pass_name)

            self.logger.info(f"{self.pass_counts[pass_name]} records resolved at {pass_name} rank")

        unresolved = int(accumulator[MATCH_PASS].isna().sum())
        self.logger.info(f"{unresolved} records without taxref match")

        return accumulator[[GN_ID] + PLANT_COLUMNS + [MATCH_PASS]]
