# import : folder holding the GeoNature synthese export and the TaxRef table
DATA_FOLDER = "."

# file name patterns, searched anywhere in the file name.
# when several files match, the most recently modified one is used.
GEONATURE_PATTERN = "synthese_observations"
TAXREF_PATTERN = "taxref"

GEONATURE_SEP = ";"
TAXREF_SEP = ","

# maps canonical taxref names to the headers of the taxref file,
# e.g. {"lb_nom": "LB_NOM", "id_rang": "RANG", ...} for a raw TaxRef download
TAXREF_COLUMNS = {"lb_nom": "lb_nom",
                  "id_rang": "id_rang",
                  "famille": "famille",
                  "regne": "regne",
                  "cd_ref": "cd_ref"}

# extract : any of "plante", "caste", "station", "annee_determination", "methode"
EXTRACT_COLUMNS = ["plante", "caste", "station", "annee_determination", "methode"]

# "famille", "genre", "sp" or None to keep every observation
PRECISION_TAXO = None

# None uses the correction table shipped in taxon_tools/plant_name_corrections.json
CORRECTIONS_PATH = None

# export
EXPORT_FOLDER = "."
# a name ending in .xlsx is written as an excel workbook, anything else as csv
EXPORT_FILE = "export_final_GeoNature.csv"

# csv listing the plant names no taxref rank matched, None to disable
UNMATCHED_REPORT = None
