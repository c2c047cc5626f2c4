"""Project-wide constants."""

# -- NVC API ----------------------------------------------------------------
DEFAULT_API_URL: str = "https://nvc-cnv.canada.ca"
BUNDLE_PATH: str = "/v1/Bundle/NVC"
FHIR_JSON_ACCEPT: str = "application/json+fhir"
APP_DESC: str = "PHAC-PDIR-IIB"
DEFAULT_TIMEOUT: float = 30.0

# -- Extensions and designations ---------------------------------------------
STRUCTURE_DEFINITION_BASE: str = "https://nvc-cnv.canada.ca/v1/StructureDefinition"
DISEASE_EXTENSION_URL: str = (
    f"{STRUCTURE_DEFINITION_BASE}/nvc-protects-against-disease"
)
MAH_EXTENSION_URL: str = (
    f"{STRUCTURE_DEFINITION_BASE}/nvc-linked-to-market-authorization-holder"
)
NAMING_SYSTEM_URL: str = (
    "https://nvc-cnv.canada.ca/v1/NamingSystem/nvc-display-terms-designation"
)
# Extension trees are tiny; anything deeper than this is not walked.
MAX_EXTENSION_DEPTH: int = 32

# -- Value sets (Bundle entry resource ids) ----------------------------------
VACCINE_VALUE_SETS: tuple[str, ...] = ("Generic", "Tradename", "AntigenIgAntitoxin")
DISEASE_VALUE_SET: str = "Disease"
MAH_VALUE_SET: str = "MarketAuthorizationHolder"

# -- Languages ----------------------------------------------------------------
DEFAULT_LANGUAGES: tuple[str, ...] = ("en", "fr")

# -- Output files -------------------------------------------------------------
TABLE_DIR: str = "vaccine-table"
BUNDLE_TABLE_FILE: str = "nvc-bundle.json"
DISEASE_FILE: str = "disease.json"
MAH_FILE: str = "mah.json"
VERSION_FILE: str = "nvc-version.json"
JSON_INDENT: int = 2
