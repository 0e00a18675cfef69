"""
Configuration for the volcano type classification analysis.
"""
# =============================================================================
# Data
# =============================================================================
DATA_URL = ('https://raw.githubusercontent.com/rfordatascience/tidytuesday/'
            'master/data/2020/2020-05-12/volcano.csv')

# Substring rule order matters: first match wins
VOLCANO_TYPES = ['Stratovolcano', 'Shield', 'Other']
CLASSES = sorted(VOLCANO_TYPES)

ID_COL = 'id'
TARGET = 'volcano_type'
CATEGORICAL_COLS = ['tectonic_setting', 'major_rock']
NUMERIC_COLS = ['latitude', 'longitude', 'elevation']
MODEL_COLS = [ID_COL] + NUMERIC_COLS + CATEGORICAL_COLS + [TARGET]

# raw column -> modeling column
RAW_COLUMNS = {
    'volcano_number': ID_COL,
    'latitude': 'latitude',
    'longitude': 'longitude',
    'elevation': 'elevation',
    'tectonic_settings': 'tectonic_setting',
    'major_rock_1': 'major_rock',
}
RAW_TYPE_COL = 'primary_volcano_type'

# =============================================================================
# Modeling
# =============================================================================
N_RESAMPLES = 25
N_TREES = 1000
OTHER_THRESHOLD = 0.05  # categories below this training frequency are pooled
OTHER_LABEL = 'other'
SMOTE_NEIGHBORS = 5
PERMUTATION_REPEATS = 10
RANDOM_STATE = 42

# =============================================================================
# Reporting
# =============================================================================
HEX_GRIDSIZE = 12
OUTPUT_DIRS = ['plots_classification_outputs', 'models_classification_outputs']
