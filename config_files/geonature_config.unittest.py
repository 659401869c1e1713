from os import path
sla = path.sep

DATA_FOLDER = f"tests{sla}test_data"

GEONATURE_PATTERN = "synthese_observations"
TAXREF_PATTERN = "taxref"

GEONATURE_SEP = ";"
TAXREF_SEP = ","

TAXREF_COLUMNS = {"lb_nom": "lb_nom",
                  "id_rang": "id_rang",
                  "famille": "famille",
                  "regne": "regne",
                  "cd_ref": "cd_ref"}

EXTRACT_COLUMNS = ["plante", "caste", "station", "annee_determination", "methode"]

PRECISION_TAXO = None

CORRECTIONS_PATH = None

EXPORT_FOLDER = f"tests{sla}test_output"
EXPORT_FILE = "export_unittest.csv"

UNMATCHED_REPORT = None
