"""tests for the species, genus, family matching cascade"""
import unittest
import pandas as pd
from taxon_tools.rank_cascade import RankCascadeMatcher, MATCH_PASS, PASS_SPECIES, PASS_GENUS, PASS_FAMILY
from taxon_tools.taxref_index import TaxrefIndex
from tests.testing_tools import TestingTools


class RankCascadeTests(unittest.TestCase, TestingTools):

    def setUp(self):
        self.taxref_index = TaxrefIndex(self.taxref_frame())
        self.matcher = RankCascadeMatcher(taxref_index=self.taxref_index,
                                          genus_exclusions={'Salvia hybride'})

    def plants(self, ids, species, genus):
        return pd.DataFrame({'id_synthese': ids, 'plante_sp': species, 'plante_genre': genus})

    def test_passes(self):
        """one record per pass plus an unresolved one, returned sorted on id"""
        plants = self.plants([4, 2, 3, 1],
                             ['Plante inconnue', 'Cirsium sp.', 'Lamiaceae indet.', 'Salvia pratensis'],
                             ['Plante', 'Cirsium', None, 'Salvia'])
        result = self.matcher.run(plants)

        self.assertEqual(list(result['id_synthese']), [1, 2, 3, 4])
        self.assertEqual(list(result['plante_famille'][:3]), ['Lamiaceae', 'Asteraceae', 'Lamiaceae'])
        self.assertEqual(list(result['plante_cd_ref'][:3]), [101, 400, 500])
        self.assertEqual(list(result[MATCH_PASS][:3]), [PASS_SPECIES, PASS_GENUS, PASS_FAMILY])
        self.assertTrue(pd.isna(result['plante_cd_ref'][3]))
        self.assertTrue(pd.isna(result[MATCH_PASS][3]))
        self.assertEqual(result['plante_genre'][3], 'Plante')
        self.assertEqual(self.matcher.pass_counts, {PASS_SPECIES: 1, PASS_GENUS: 1, PASS_FAMILY: 1})

    def test_agrees_with_lookup(self):
        """each resolved record holds the last taxref row the index lookup gives for its key"""
        plants = self.plants([1, 2, 3], ['Salvia pratensis', 'Cirsium sp.', 'Lamiaceae indet.'],
                             ['Salvia', 'Cirsium', None])
        result = self.matcher.run(plants).set_index('id_synthese')
        expected = {1: self.taxref_index.lookup('Salvia pratensis')[-1],
                    2: self.taxref_index.lookup('Cirsium')[-1],
                    3: self.taxref_index.lookup('Lamiaceae', by_family=True)[-1]}
        for record_id, (famille, cd_ref) in expected.items():
            self.assertEqual(result.loc[record_id, 'plante_famille'], famille)
            self.assertEqual(result.loc[record_id, 'plante_cd_ref'], cd_ref)

    def test_no_fan_out(self):
        """a name shared by several taxref rows gives one record, with the last row"""
        plants = self.plants([1, 2], ['Salvia pratensis', 'Salvia pratensis'], ['Salvia', 'Salvia'])
        result = self.matcher.run(plants)
        self.assertEqual(len(result), 2)
        self.assertEqual(list(result['plante_cd_ref']), [101, 101])

    def test_species_not_overwritten_by_family(self):
        """a species whose name holds a family name keeps its species match"""
        taxref = pd.concat([self.taxref_frame(),
                            pd.DataFrame({'lb_nom': ['Lamiaceae fictiva'], 'id_rang': ['ES'],
                                          'famille': ['Asteraceae'], 'regne': ['Plantae'], 'cd_ref': [555]})],
                           ignore_index=True)
        matcher = RankCascadeMatcher(taxref_index=TaxrefIndex(taxref))
        result = matcher.run(self.plants([1], ['Lamiaceae fictiva'], [None]))
        self.assertEqual(result['plante_cd_ref'][0], 555)
        self.assertEqual(result['plante_famille'][0], 'Asteraceae')
        self.assertEqual(result[MATCH_PASS][0], PASS_SPECIES)

    def test_genus_exclusions(self):
        result = self.matcher.run(self.plants([1, 2], ['Salvia hybride', 'Salvia sp.'], ['Salvia', 'Salvia']))
        self.assertTrue(pd.isna(result['plante_cd_ref'][0]))
        self.assertEqual(result['plante_cd_ref'][1], 200)

    def test_missing_names(self):
        result = self.matcher.run(self.plants([1], [None], [None]))
        self.assertTrue(result[['plante_famille', 'plante_cd_ref', MATCH_PASS]].isna().all(axis=None))

    def test_duplicate_ids(self):
        with self.assertRaises(ValueError):
            self.matcher.run(self.plants([1, 1], ['Salvia pratensis', 'Cirsium'], ['Salvia', 'Cirsium']))


if __name__ == '__main__':
    unittest.main()
