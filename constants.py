# constants.py

# Constants for taxref rank codes
SPECIES_RANKS = frozenset({"ES", "SMES", "MES", "SSES", "NAT", "VAR",
                           "SVAR", "FO", "SSFO", "FOES", "LIN",
                           "CLO", "RACE", "CAR", "MO"})

GENUS_RANKS = frozenset({"GN", "SSGN", "SC", "SBSC", "SER", "SSER", "AGES"})

FAMILY_RANKS = frozenset({"FM"})

# genus level or finer, used by the "genre" precision filter
GENUS_OR_FINER_RANKS = GENUS_RANKS | SPECIES_RANKS

PLANT_KINGDOM = "Plantae"

# Constants for taxref column nomenclature
TR_NAME = 'lb_nom'
TR_RANK = 'id_rang'
TR_FAMILY = 'famille'
TR_KINGDOM = 'regne'
TR_CD_REF = 'cd_ref'

TAXREF_COLUMNS = [TR_NAME, TR_RANK, TR_FAMILY, TR_KINGDOM, TR_CD_REF]

# Constants for GeoNature synthese nomenclature
GN_ID = 'id_synthese'
GN_CHAMPS = 'champs_additionnels'

# derived columns
COL_CASTE = 'caste'
COL_STATION = 'station'
COL_ANNEE = 'annee_determination'
COL_METHODE = 'methode_capture'
COL_PLANTE_SP = 'plante_sp'
COL_PLANTE_GENRE = 'plante_genre'
COL_PLANTE_FAMILLE = 'plante_famille'
COL_PLANTE_CD_REF = 'plante_cd_ref'

PLANT_COLUMNS = [COL_PLANTE_SP, COL_PLANTE_GENRE, COL_PLANTE_FAMILLE, COL_PLANTE_CD_REF]

# extraction options, in the order derived columns are appended
EXTRACT_PLANTE = 'plante'
EXTRACT_CASTE = 'caste'
EXTRACT_STATION = 'station'
EXTRACT_ANNEE = 'annee_determination'
EXTRACT_METHODE = 'methode'

EXTRACT_ORDER = [EXTRACT_CASTE, EXTRACT_STATION, EXTRACT_ANNEE, EXTRACT_METHODE, EXTRACT_PLANTE]

EXTRACT_ALIASES = {'plante': EXTRACT_PLANTE,
                   'plant': EXTRACT_PLANTE,
                   'caste': EXTRACT_CASTE,
                   'station': EXTRACT_STATION,
                   'site': EXTRACT_STATION,
                   'annee_determination': EXTRACT_ANNEE,
                   'annee': EXTRACT_ANNEE,
                   'year': EXTRACT_ANNEE,
                   'methode': EXTRACT_METHODE,
                   'method': EXTRACT_METHODE}

# taxonomic precision options
PRECISION_FAMILLE = 'famille'
PRECISION_GENRE = 'genre'
PRECISION_SP = 'sp'

PRECISION_ALIASES = {'famille': PRECISION_FAMILLE,
                     'family': PRECISION_FAMILLE,
                     'genre': PRECISION_GENRE,
                     'genus': PRECISION_GENRE,
                     'sp': PRECISION_SP,
                     'species': PRECISION_SP}

# keys of the champs_additionnels blob
CH_CASTE = 'caste'
CH_STATION = 'station'
CH_ANNEE = 'annee_determination'
CH_METH_COLLECTE = 'meth_collecte'
CH_TYPE_PIEGEAGE = 'type_piegeage'
CH_TRAPPING_TYPE = 'trapping_type'
CH_PLANTE = 'plante'
CH_LB_NOM = 'lb_nom'

TRAPPING_MARKER = 'Piégeage'
PAN_TRAP_MARKER = 'Coupelle'

# defaults for the import and export stages
DEFAULT_GEONATURE_PATTERN = 'synthese_observations'
DEFAULT_TAXREF_PATTERN = 'taxref'
DEFAULT_EXPORT_FILE = 'export_final_GeoNature.csv'
