"""
Configuration for the RV spec scraper.

Static tables (canonical schema, selector names, scraper settings) live here as
module-level constants. Environment-driven paths are exposed through
get_settings().
"""
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Unit tags understood by converters.format_value
UNIT_TAGS = (
    "number",
    "string",
    "boolean",
    "inches",
    "feet",
    "feetinches",
    "gallons",
    "cubic feet",
    "btu",
    "poundfeet",
)

# Canonical schema: field name -> unit tag.
# Field names match the labels on the target database form.
STANDARDIZED_SCHEMA = {
    # Identity
    "Name": "string",
    "URL": "string",
    "Year": "number",
    "Make": "string",
    "Model": "string",
    "Trim": "string",
    "Type": "string",
    "Description": "string",
    "Web features": "string",
    "Floor plan": "string",
    "MSRP usd": "number",

    # Exterior dimensions
    "Length ftin": "feetinches",
    "Length ft": "feet",
    "Interior length ft": "feet",
    "Length in": "inches",
    "Width inmm": "inches",
    "Height closed ftin": "feetinches",
    "Height open ftin": "feetinches",
    "Height in": "inches",
    "Hitch height in": "inches",
    "Ground clearance in": "inches",
    "Wheelbase in": "inches",
    "Interior height in": "inches",
    "Interior width in": "inches",
    "Box length ftin": "feetinches",
    "Step height in": "inches",

    # Weights
    "Dry weight lbs": "number",
    "Gvwr lbskgs": "number",
    "CCC": "number",
    "Hitch weight lbs": "number",
    "Pin weight lbs": "number",
    "Axle weight lbs": "number",
    "Gross axle weight rating lbs": "number",
    "Gcwr lbs": "number",
    "Towing capacity lbs": "number",
    "Garage cargo capacity lbs": "number",

    # Chassis and drivetrain
    "Chassis": "string",
    "Engine": "string",
    "Engine horsepower hp": "number",
    "Engine torque lbft": "poundfeet",
    "Fuel type": "string",
    "Fuel tank capacity gall": "gallons",
    "Def tank capacity gall": "gallons",
    "Transmission": "string",
    "Drive type": "string",
    "Brakes": "string",
    "Suspension": "string",
    "Leveling system": "boolean",
    "Number of axles": "number",
    "Axle type": "string",
    "Frame": "string",
    "Hitch type": "string",

    # Tires and wheels
    "Tire code": "string",
    "Front tire diameter in": "number",
    "Rear tire diameter in": "number",
    "Rear wheel width in": "number",
    "Rear wheel diameter in": "number",
    "Wheel material": "string",
    "Spare tire": "boolean",

    # Tanks
    "Total fresh water tank capacity gall": "gallons",
    "Total gray water tank capacity gall": "gallons",
    "Total black water tank capacity gall": "gallons",
    "Number of gray water tanks": "number",
    "Number of black water tanks": "number",
    "Number of propane tanks": "number",
    "Total propane tank capacity gallbs": "number",
    "Water heater tank capacity gl": "gallons",
    "Water heater type": "string",
    "Tankless water heater": "boolean",
    "Heated holding tanks": "boolean",
    "Black tank flush": "boolean",
    "Water filtration system": "boolean",
    "Outside shower": "boolean",

    # Climate
    "Air conditioning": "btu",
    "Number of air conditioners": "number",
    "Second air conditioner": "boolean",
    "Heat pump": "boolean",
    "Heater": "btu",
    "Furnace type": "string",
    "Fireplace": "boolean",
    "Ducted heat": "boolean",
    "Ceiling fan": "boolean",
    "Powered roof vent": "boolean",
    "Insulation": "string",
    "Four season package": "boolean",

    # Electrical
    "Converter amps": "number",
    "Shore power amps": "number",
    "Generator": "boolean",
    "Generator output w": "number",
    "Generator prep": "boolean",
    "Inverter": "boolean",
    "Inverter output w": "number",
    "Solar panel": "boolean",
    "Solar prep": "boolean",
    "Solar output w": "number",
    "Number of batteries": "number",
    "Battery type": "string",
    "Backup camera": "boolean",
    "Side cameras": "boolean",
    "Wifi prep": "boolean",
    "Usb outlets": "boolean",
    "Exterior speakers": "boolean",
    "Led lighting": "boolean",

    # Living area
    "Max sleeping count": "number",
    "Number of queen size beds": "number",
    "Number of king size beds": "number",
    "Number of bunk beds": "number",
    "Sofa bed": "boolean",
    "Dinette bed": "boolean",
    "Loft": "boolean",
    "Bed length in": "inches",
    "Bed width in": "inches",
    "Theater seating": "boolean",
    "Free standing dinette": "boolean",
    "Tv": "boolean",
    "Number of tvs": "number",
    "Entertainment center": "boolean",
    "Washer dryer prep": "boolean",
    "Number of entry doors": "number",
    "Entry door width in": "inches",
    "Patio door": "boolean",
    "Garage length ftin": "feetinches",
    "Ramp door": "boolean",
    "Ramp door length ftin": "feetinches",

    # Kitchen
    "Refrigerator size": "cubic feet",
    "Refrigerator type": "string",
    "Residential refrigerator": "boolean",
    "Microwave": "boolean",
    "Convection microwave": "boolean",
    "Oven": "boolean",
    "Number of cooktop burners": "number",
    "Kitchen island": "boolean",
    "Outdoor kitchen": "boolean",
    "Pantry": "boolean",
    "Dishwasher": "boolean",

    # Bathroom
    "Number of bathrooms": "number",
    "Shower": "boolean",
    "Shower size in": "inches",
    "Bathtub": "boolean",
    "Toilet type": "string",
    "Skylight": "boolean",

    # Slideouts, awnings and exterior features
    "Number of slideouts": "number",
    "Slideout type": "string",
    "Number of awnings": "number",
    "Awning length ftm": "string",
    "Power awning": "boolean",
    "Led awning lights": "boolean",
    "Exterior storage cu ft": "cubic feet",
    "Pass through storage": "boolean",
    "Roof material": "string",
    "Walkable roof": "boolean",
    "Roof ladder": "boolean",
    "Exterior construction": "string",
    "Fiberglass sidewalls": "boolean",
    "Stabilizer jacks": "boolean",
    "Bike rack": "boolean",
    "Warranty": "string",
}

# Fields filled in by the record transformer rather than by key resolution
NAME_FIELD = "Name"
URL_FIELD = "URL"
YEAR_FIELD = "Year"
MAKE_FIELD = "Make"
MODEL_FIELD = "Model"
TRIM_FIELD = "Trim"
TYPE_FIELD = "Type"
DESCRIPTION_FIELD = "Description"
WEB_FEATURES_FIELD = "Web features"
FLOOR_PLAN_FIELD = "Floor plan"

# Derived-field inputs and outputs
AWNING_LENGTH_FIELD = "Awning length ftm"
DRY_WEIGHT_FIELD = "Dry weight lbs"
GVWR_FIELD = "Gvwr lbskgs"
CCC_FIELD = "CCC"
TIRE_CODE_FIELD = "Tire code"
REAR_TIRE_DIAMETER_FIELD = "Rear tire diameter in"
REAR_WHEEL_DIAMETER_FIELD = "Rear wheel diameter in"

# Per-record annotation listing fields that need a human look
VERIFY_MANUALLY_KEY = "verifyManually"

# Literal answers that explicitly decline a prompted value
DECLINE_ANSWERS = ("null", "undefined")

# Selector fields prompted for when a new domain is seen, in prompt order
SELECTOR_FIELDS = [
    "makeSelector",
    "yearSelector",
    "typeSelector",
    "modelSelector",
    "trimSelector",
    "imageSelector",
    "descriptionSelector",
    "rowSelector",
    "dlSelector",
    "optionsSelector",
    "webFeaturesSelector",
]

# Named extraction strategies a domain may use for model / web features text
STRATEGY_FIELDS = [
    "modelStrategy",
    "webFeaturesStrategy",
]

DEFAULT_ROW_SELECTOR = "tbody tr"

# Scraper settings
SCRAPER_SETTINGS = {
    "max_workers": 6,               # Parallel link-discovery workers (pipeline itself is sequential)
    "max_retries": 2,               # Retry attempts per page
    "retry_backoff": 5,             # Seconds before the first retry, doubled each time
    "page_load_timeout": 30,        # Page load timeout
    "script_timeout": 15,           # Script execution time
    "page_load_strategy": "normal", # Spec tables are often rendered by JavaScript
    "element_timeout": 5,           # Element wait time
    "image_timeout": 30,            # Floor plan download timeout
    "delay_between_pages": (0.5, 1.5),
    "delay_before_navigate": (0.3, 0.7),
    "max_restart_attempts": 2,      # Supervisor restarts after a non-zero exit
    "restart_delay": 1,
}


class Settings:
    """File locations and run defaults loaded from environment variables."""

    OUTPUT_DIR: str = os.getenv("RV_OUTPUT_DIR", "output")
    IMAGE_DIR: str = os.getenv("RV_IMAGE_DIR", os.path.join(OUTPUT_DIR, "images"))
    DOMAIN_MAPPINGS_FILE: str = os.getenv("RV_DOMAIN_MAPPINGS_FILE", "data/domain-mappings.json")
    SYNONYMS_FILE: str = os.getenv("RV_SYNONYMS_FILE", "data/synonyms.json")
    BACKUP_DIR: str = os.getenv("RV_BACKUP_DIR", "backups")
    DEFAULT_YEAR: str = os.getenv("RV_DEFAULT_YEAR", "")
    HEADLESS: bool = os.getenv("RV_HEADLESS", "true").lower() not in ("0", "false", "no")

    # Target database form for autopopulate
    FORM_PAGE_URL: str = os.getenv("RV_FORM_PAGE_URL", "")

    def validate(self) -> list[str]:
        """Validate settings. Returns a list of problems."""
        problems = []
        if not Path(self.SYNONYMS_FILE).exists():
            problems.append(f"RV_SYNONYMS_FILE not found: {self.SYNONYMS_FILE}")
        if self.DEFAULT_YEAR and not self.DEFAULT_YEAR.isdigit():
            problems.append(f"RV_DEFAULT_YEAR must be a year, got {self.DEFAULT_YEAR!r}")
        return problems


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
