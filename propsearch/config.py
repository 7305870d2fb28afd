"""
Property Search — Configuration: paths, table names, column maps, model settings.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with PROPSEARCH_DATA_DIR env var for deployment
# ---------------------------------------------------------------------------
DATA_DIR = Path(os.environ.get("PROPSEARCH_DATA_DIR", str(Path.cwd() / "data")))

# ---------------------------------------------------------------------------
# Source tables (one CSV per table, header row + data rows)
# ---------------------------------------------------------------------------
PROJECT_TABLE = "project"
ADDRESS_TABLE = "project_address"
CONFIGURATION_TABLE = "project_configuration"
VARIANT_TABLE = "project_configuration_variant"

TABLE_FILES = {
    PROJECT_TABLE: "project.csv",
    ADDRESS_TABLE: "ProjectAddress.csv",
    CONFIGURATION_TABLE: "ProjectConfiguration.csv",
    VARIANT_TABLE: "ProjectConfigurationVariant.csv",
}

# ---------------------------------------------------------------------------
# Column mapping from raw CSV headers → internal names
# ---------------------------------------------------------------------------
PROJECT_COLUMNS = {
    "id": "project_id",
    "projectName": "project_name",
    "projectType": "project_type",
    "projectCategory": "project_category",
    "status": "status",
    "possessionDate": "possession_date",
    "cityId": "city_id",
}

ADDRESS_COLUMNS = {
    "id": "address_id",
    "projectId": "project_id",
    "fullAddress": "full_address",
    "pincode": "pincode",
    "landmark": "landmark",
}

CONFIGURATION_COLUMNS = {
    "id": "configuration_id",
    "projectId": "project_id",
    "type": "unit_type",
    "customBHK": "custom_bhk",
}

VARIANT_COLUMNS = {
    "id": "id",
    "configurationId": "configuration_id",
    "bathrooms": "bathrooms",
    "floorPlanImage": "floor_plan_image",
    "carpetArea": "carpet_area",
    "price": "price",
    "propertyImages": "property_images",
    "aboutProperty": "about_property",
}

TABLE_COLUMNS = {
    PROJECT_TABLE: PROJECT_COLUMNS,
    ADDRESS_TABLE: ADDRESS_COLUMNS,
    CONFIGURATION_TABLE: CONFIGURATION_COLUMNS,
    VARIANT_TABLE: VARIANT_COLUMNS,
}

# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
MAX_RESULTS = int(os.environ.get("PROPSEARCH_MAX_RESULTS", "10"))

# Print every per-property check while filtering (noisy, local debugging only)
DEBUG_FILTER = os.environ.get("PROPSEARCH_DEBUG_FILTER", "").lower() in ("1", "true", "yes")

# ---------------------------------------------------------------------------
# Language model (any OpenAI-compatible endpoint; Groq by default)
# ---------------------------------------------------------------------------
LLM_API_KEY = os.environ.get("GROQ_API_KEY", "")
LLM_BASE_URL = os.environ.get("PROPSEARCH_LLM_BASE_URL", "https://api.groq.com/openai/v1")
LLM_MODEL = os.environ.get("PROPSEARCH_LLM_MODEL", "llama-3.1-8b-instant")

PARSE_TEMPERATURE = 0.1
SUMMARY_TEMPERATURE = 0.5
