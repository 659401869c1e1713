"""runs the command line on files written to a temporary folder"""
import os
import shutil
import tempfile
import unittest
import pandas as pd
from client_tools import run_cli
from tests.testing_tools import TestingTools


class EndToEndTests(unittest.TestCase, TestingTools):

    def setUp(self):
        self.directory = self.write_test_files()
        self.output = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.directory)
        self.addCleanup(shutil.rmtree, self.output)

    def test_run(self):
        status = run_cli(['run', '-p', self.directory, '-o', self.output, '-f', 'export.csv',
                          '-u', 'unmatched.csv'])
        self.assertEqual(status, 0)

        export = pd.read_csv(os.path.join(self.output, 'export.csv'))
        self.assertEqual(list(export['id_synthese']), [1, 2, 3, 4, 5])
        self.assertEqual(list(export['methode_capture'][:3]), ['Filet', 'Coupelle jaune', 'Tente Malaise'])
        self.assertEqual(list(export['plante_cd_ref'][:3]), [101, 400, 500])
        self.assertEqual(list(export['annee_determination'][[0, 2]]), [2021, 2022])

        unmatched = pd.read_csv(os.path.join(self.output, 'unmatched.csv'))
        self.assertEqual(list(unmatched['plante_sp']), ['Plante inconnue'])

    def test_run_precision_xlsx(self):
        status = run_cli(['run', '-p', self.directory, '-o', self.output, '-f', 'export.xlsx',
                          '--col', 'plante', 'caste', '--precision', 'sp'])
        self.assertEqual(status, 0)
        export = pd.read_excel(os.path.join(self.output, 'export.xlsx'), engine="openpyxl")
        self.assertEqual(list(export['id_synthese']), [1])
        self.assertNotIn('station', export.columns)

    def test_extract_only(self):
        self.assertEqual(run_cli(['extract', '-p', self.directory]), 0)
        self.assertEqual(os.listdir(self.output), [])

    def test_errors(self):
        """missing inputs and bad options give a non zero status"""
        self.assertEqual(run_cli(['import', '-p', os.path.join(self.directory, 'absent')]), 1)
        self.assertEqual(run_cli(['extract', '-p', self.directory, '--precision', 'ordre']), 1)
        self.assertEqual(run_cli([]), 1)


if __name__ == '__main__':
    unittest.main()
