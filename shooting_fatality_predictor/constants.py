from __future__ import annotations

# Incident schema (one row per reported shooting incident)
INCIDENT_KEY = "INCIDENT_KEY"
OCCUR_DATE = "OCCUR_DATE"
OCCUR_TIME = "OCCUR_TIME"
BORO = "BORO"
MURDER_FLAG = "STATISTICAL_MURDER_FLAG"

PERP_AGE_GROUP = "PERP_AGE_GROUP"
PERP_SEX = "PERP_SEX"
PERP_RACE = "PERP_RACE"
VIC_AGE_GROUP = "VIC_AGE_GROUP"
VIC_SEX = "VIC_SEX"
VIC_RACE = "VIC_RACE"

REQUIRED_COLUMNS = [
    INCIDENT_KEY,
    OCCUR_DATE,
    OCCUR_TIME,
    BORO,
    MURDER_FLAG,
    PERP_AGE_GROUP,
    PERP_SEX,
    PERP_RACE,
    VIC_AGE_GROUP,
    VIC_SEX,
    VIC_RACE,
]

# Columns read as raw text so parsing and the flag comparison see the file content
TEXT_COLUMNS = [OCCUR_DATE, OCCUR_TIME, MURDER_FLAG]

# Directional fill groups (filled independently of each other)
PERP_COLUMNS = [PERP_AGE_GROUP, PERP_SEX, PERP_RACE]
VIC_COLUMNS = [VIC_AGE_GROUP, VIC_SEX, VIC_RACE]

# Demographic columns cast to a fixed set of levels
CATEGORICAL_COLUMNS = [PERP_AGE_GROUP, PERP_SEX, VIC_AGE_GROUP, VIC_SEX]

PREDICTORS = [BORO] + CATEGORICAL_COLUMNS

# Columns whose evaluation levels are restricted to the training levels
ALIGNED_COLUMNS = PREDICTORS

TARGET_COLUMN = "FATAL"
YEAR_COLUMN = "YEAR"

MURDER_FLAG_TRUE = "TRUE"

DATE_FORMAT = "%m/%d/%Y"
TIME_FORMAT = "%H:%M:%S"

FORMULA = f"{TARGET_COLUMN} ~ " + " + ".join(PREDICTORS)

LABELS = [0, 1]

DEFAULT_SEED = 42
DEFAULT_TRAIN_FRACTION = 0.7
DEFAULT_THRESHOLD = 0.5
DEFAULT_BUCKET_DAYS = 30


# Display labels for report output
ENGLISH_LABELS = {
    BORO: "Borough",
    OCCUR_DATE: "Occurrence Date",
    PERP_RACE: "Perpetrator Race",
    VIC_RACE: "Victim Race",
    TARGET_COLUMN: "Fatal",
    YEAR_COLUMN: "Year",
}
