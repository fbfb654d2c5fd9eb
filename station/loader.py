"""
YAML data loader with schema validation.

Loads the world configuration and item catalog from YAML files
and validates them against JSON schemas.
"""

import yaml
import json
from pathlib import Path
from typing import Dict, Optional
import jsonschema

from .data_types import (
    ItemDefinition, World, StationConfig, SimulationConfig, CrewConfig
)
from .items import ItemType
from .inhabitant import CREW_TYPES

CREW_ROLES = {t.value for t in CREW_TYPES}


class DataLoadError(Exception):
    """Raised when data loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Load YAML file and return parsed dict"""
    file_path = Path(file_path)
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataLoadError(f"YAML parse error in {file_path}: {e}")
    except UnicodeDecodeError as e:
        raise DataLoadError(f"{file_path} is not UTF-8 text: {e}")

    if not isinstance(data, dict):
        raise DataLoadError(f"Expected a mapping at top level of {file_path}")

    return data


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Validate data dict against JSON schema"""
    if not schema_path.exists():
        # Schema validation optional (a data pack may ship without schemas)
        return

    try:
        with open(schema_path, 'r') as f:
            schema = json.load(f)
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise DataLoadError(f"Validation error in {data_path}: {e.message}")
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}")


def load_world(file_path: Path, schema_dir: Optional[Path] = None) -> World:
    """Load world configuration from YAML"""
    data = load_yaml(file_path)

    # Validate if schema available
    if schema_dir:
        schema_path = Path(schema_dir) / "world.schema.json"
        validate_against_schema(data, schema_path, file_path)

    try:
        station = StationConfig(**data.get('station', {}))
        simulation = SimulationConfig(**data.get('simulation', {}))
        crew = CrewConfig(**data.get('crew', {}))

        # Roles and starting items must name known types, schema or not
        for variant in station.starting_items:
            ItemType.from_variant(variant)
        for role in crew.roles or []:
            if role not in CREW_ROLES:
                raise ValueError(f"Unknown crew role: {role}")

        return World(
            world_id=data['world_id'],
            name=data['name'],
            seed=data['seed'],
            station=station,
            simulation=simulation,
            crew=crew,
            description=data.get('description')
        )
    except (KeyError, TypeError, ValueError) as e:
        raise DataLoadError(f"Malformed world config {file_path}: {e}")


def load_item_catalog(file_path: Path, schema_dir: Optional[Path] = None) -> Dict[str, ItemDefinition]:
    """Load item definitions from YAML, keyed by variant"""
    data = load_yaml(file_path)

    # Validate if schema available
    if schema_dir:
        schema_path = Path(schema_dir) / "items.schema.json"
        validate_against_schema(data, schema_path, file_path)

    catalog = {}
    try:
        for item_data in data['items']:
            definition = ItemDefinition(**item_data)
            catalog[definition.variant] = definition
    except (KeyError, TypeError) as e:
        raise DataLoadError(f"Malformed item catalog {file_path}: {e}")

    return catalog


def load_all_data(data_root: Path, schema_dir: Optional[Path] = None) -> dict:
    """Load all simulation data from data directory

    Returns dict with keys: world, items
    """
    data_root = Path(data_root)
    if not data_root.exists():
        raise DataLoadError(f"Data directory not found: {data_root}")

    # Load world
    world = load_world(data_root / "world" / "station.yaml", schema_dir)

    # Load item catalog (optional, defaults cover every variant)
    items_path = data_root / "items" / "catalog.yaml"
    items = load_item_catalog(items_path, schema_dir) if items_path.exists() else {}

    return {
        'world': world,
        'items': items
    }
