"""tests for the export stage"""
import os
import shutil
import tempfile
import unittest
import pandas as pd
from pipeline_state import PipelineState
from synthese_exporter import SyntheseExporter


class SyntheseExporterTests(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.directory)
        self.state = PipelineState(export_frame=pd.DataFrame({'id_synthese': [1, 2],
                                                              'caste': ['Femelle', None]}),
                                   unmatched_names=pd.DataFrame({'plante_sp': ['Plante inconnue'],
                                                                 'observations': [3]}))

    def test_csv(self):
        """the destination folder is created when missing"""
        exporter = SyntheseExporter(path=os.path.join(self.directory, "out"))
        file_path = exporter.run_all(self.state)
        self.assertTrue(file_path.endswith("export_final_GeoNature.csv"))
        written = pd.read_csv(file_path)
        self.assertEqual(list(written.columns), ['id_synthese', 'caste'])
        self.assertEqual(len(written), 2)

    def test_xlsx(self):
        exporter = SyntheseExporter(path=self.directory, file_name="export.xlsx")
        file_path = exporter.run_all(self.state)
        written = pd.read_excel(file_path, engine="openpyxl")
        self.assertEqual(list(written['id_synthese']), [1, 2])

    def test_unmatched_report(self):
        exporter = SyntheseExporter(path=self.directory, unmatched_report="unmatched.csv")
        exporter.run_all(self.state)
        report = pd.read_csv(os.path.join(self.directory, "unmatched.csv"))
        self.assertEqual(report['plante_sp'][0], 'Plante inconnue')

    def test_nothing_to_export(self):
        with self.assertRaises(ValueError):
            SyntheseExporter(path=self.directory).run_all(PipelineState())


if __name__ == '__main__':
    unittest.main()
