"""tests for the champs_additionnels field extraction"""
import unittest
import pandas as pd
from champs_parser import ChampsParser, extract_field, extract_year, derive_capture_method
from tests.testing_tools import TestingTools


class ChampsParserTests(unittest.TestCase, TestingTools):

    def setUp(self):
        self.parser = ChampsParser(self.synthese_frame()['champs_additionnels'])

    def test_extract_field(self):
        """tests quoted and bare keys, and keys missing from the blob"""
        blob = self.make_blob(caste='Femelle', annee_determination=(2020,))
        self.assertEqual(extract_field(blob, 'caste'), 'Femelle')
        self.assertEqual(extract_field(blob, 'annee_determination', quoted=False), '2020')
        self.assertIsNone(extract_field(blob, 'station'))
        self.assertIsNone(extract_field(pd.NA, 'caste'))
        self.assertIsNone(extract_field(None, 'caste'))

    def test_missing_keys(self):
        """every supported key absent from a blob gives None, quoted or bare"""
        blob = self.make_blob(nom_valide='Bombus terrestris')
        for key in ['caste', 'station', 'annee_determination', 'meth_collecte', 'type_piegeage',
                    'trapping_type', 'plante', 'lb_nom']:
            self.assertIsNone(extract_field(blob, key), msg=key)
            self.assertIsNone(extract_field(blob, key, quoted=False), msg=key)

        parser = ChampsParser(pd.Series([blob, blob]))
        for values in [parser.caste(), parser.station(), parser.annee_determination(),
                       parser.methode_capture()] + list(parser.raw_plants()):
            self.assertEqual(values.dtype, object)
            self.assertEqual(list(values), [None, None])

    def test_last_key_not_extracted(self):
        """a key closing the blob has no following key and is not read"""
        self.assertIsNone(extract_field("{'caste': 'Femelle'}", 'caste'))

    def test_extract_year(self):
        self.assertEqual(extract_year(self.make_blob(annee_determination=(2019,))), '2019')
        self.assertIsNone(extract_year(self.make_blob(annee_determination=(None,))))
        self.assertIsNone(extract_year(self.make_blob(caste='Femelle')))

    def test_derive_capture_method(self):
        """tests every branch of the capture method rule"""
        self.assertIsNone(derive_capture_method(None, 'Coupelle', 'Coupelle'))
        self.assertEqual(derive_capture_method('Filet', 'Coupelle', None), 'Filet')
        self.assertEqual(derive_capture_method('Piégeage', 'Tente Malaise', None), 'Tente Malaise')
        self.assertIsNone(derive_capture_method('Piégeage', None, None))
        self.assertEqual(derive_capture_method('Piégeage', 'Coupelle jaune', 'Coupelle jaune'), 'Coupelle jaune')
        self.assertIsNone(derive_capture_method('Piégeage', 'Coupelle jaune', 'Coupelle bleue'))
        self.assertIsNone(derive_capture_method('Piégeage', 'Tente Malaise', 'Tente Malaise'))
        self.assertIsNone(derive_capture_method('Piégeage', None, 'Coupelle jaune'))

    def test_columns(self):
        """tests the column level extraction on the shared synthese rows"""
        self.assertEqual(self.parser.caste().dtype, object)
        self.assertEqual(list(self.parser.caste()), ['Femelle', 'Ouvrière', 'Mâle', None, None])
        self.assertEqual(list(self.parser.station()), ['S01', 'S02', 'S01', 'S03', None])
        self.assertEqual(list(self.parser.annee_determination()), ['2021', None, '2022', None, None])
        self.assertEqual(list(self.parser.methode_capture()),
                         ['Filet', 'Coupelle jaune', 'Tente Malaise', None, None])

    def test_raw_plants(self):
        plants, lb_nom = self.parser.raw_plants()
        self.assertEqual(list(plants), ['Salvia pratensis', 'Ciscium sp.', 'Lamiaceae indet.',
                                        'Plante inconnue', None])
        self.assertTrue(all(value is None for value in lb_nom))


if __name__ == '__main__':
    unittest.main()
