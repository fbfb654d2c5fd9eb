"""
Test data loading system

Verifies YAML -> Python dataclass conversion and schema validation.
"""

import sys
import pytest
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from station.loader import (
    load_world, load_item_catalog, load_all_data, load_yaml, DataLoadError
)
from station.data_types import World

DATA_ROOT = Path(__file__).parent.parent.parent / "data"
SCHEMA_DIR = DATA_ROOT / "schemas"


def test_load_world():
    """Test loading the Station Alpha world"""
    world = load_world(DATA_ROOT / "world" / "station.yaml", SCHEMA_DIR)

    print(f"[OK] Loaded world: {world.name} ({world.world_id})")
    print(f"  Seed: {world.seed}")
    print(f"  Station: {world.station.width}x{world.station.height}, origin={world.station.origin}")
    print(f"  Crew: {world.crew.count}")

    assert world.world_id == "station-alpha"
    assert world.seed == 42
    assert world.station.width == 21
    assert world.station.height == 13
    assert world.station.floor_probability == 0.70
    assert world.station.smoothing_passes == 2
    assert world.station.origin == [325.0, 165.0]
    assert world.station.starting_items == ["fridge"]
    assert world.simulation.seconds_per_tile == 2.0
    assert abs(world.simulation.tick_delta_seconds - 1.0 / 60.0) < 1e-12
    assert world.crew.count == 3
    assert world.crew.roles is None

    print("[OK] World config loaded correctly\n")


def test_load_item_catalog():
    """Test loading item definitions"""
    catalog = load_item_catalog(DATA_ROOT / "items" / "catalog.yaml", SCHEMA_DIR)

    print(f"[OK] Loaded {len(catalog)} item definitions")

    assert set(catalog) == {"energy_bar", "meal_ready_to_eat", "water", "coffee", "fridge", "locker"}
    assert catalog["energy_bar"].energy == 10
    assert catalog["meal_ready_to_eat"].energy == 50
    assert catalog["coffee"].hydration == 8
    assert catalog["coffee"].energy == 3
    assert catalog["fridge"].capacity == 10
    assert catalog["fridge"].stock == ["energy_bar", "water"]
    assert catalog["locker"].stock == []


def test_load_all_data():
    """Test loading complete data pack"""
    data = load_all_data(DATA_ROOT, SCHEMA_DIR)

    assert data['world'].world_id == "station-alpha"
    assert len(data['items']) == 6

    print("[OK] Data pack loaded\n")


def test_world_round_trips_through_dict():
    world = load_world(DATA_ROOT / "world" / "station.yaml", SCHEMA_DIR)

    restored = World.from_dict(world.to_dict())
    assert restored == world


def test_missing_file():
    with pytest.raises(DataLoadError):
        load_yaml(DATA_ROOT / "world" / "does-not-exist.yaml")

    with pytest.raises(DataLoadError):
        load_all_data(DATA_ROOT / "nowhere")


def test_missing_item_catalog_is_optional(tmp_path):
    (tmp_path / "world").mkdir()
    (tmp_path / "world" / "station.yaml").write_text(
        "world_id: tiny\nname: Tiny\nseed: 1\n"
    )

    data = load_all_data(tmp_path, SCHEMA_DIR)
    assert data['world'].world_id == "tiny"
    assert data['world'].station.width == 21  # defaults fill the gaps
    assert data['items'] == {}


def test_schema_violation(tmp_path):
    bad = tmp_path / "station.yaml"
    bad.write_text(
        "world_id: bad\nname: Bad\nseed: 1\nstation:\n  floor_probability: 1.5\n"
    )

    with pytest.raises(DataLoadError) as excinfo:
        load_world(bad, SCHEMA_DIR)
    assert "Validation error" in str(excinfo.value)

    print("[OK] Schema violation rejected\n")


def test_unknown_field_without_schema(tmp_path):
    """Without schemas, unknown keys surface as DataLoadError instead of TypeError"""
    bad = tmp_path / "station.yaml"
    bad.write_text(
        "world_id: bad\nname: Bad\nseed: 1\nstation:\n  wings: 4\n"
    )

    with pytest.raises(DataLoadError):
        load_world(bad)


def test_not_utf8_yaml(tmp_path):
    bad = tmp_path / "binary.yaml"
    bad.write_bytes(b'world_id: \xff\xfe\n')

    with pytest.raises(DataLoadError):
        load_yaml(bad)


def test_unknown_role_without_schema(tmp_path):
    bad = tmp_path / "station.yaml"
    bad.write_text(
        "world_id: bad\nname: Bad\nseed: 1\ncrew:\n  count: 1\n  roles: [janitor]\n"
    )

    with pytest.raises(DataLoadError) as excinfo:
        load_world(bad)
    assert "janitor" in str(excinfo.value)


def test_ghost_role_rejected(tmp_path):
    bad = tmp_path / "station.yaml"
    bad.write_text(
        "world_id: bad\nname: Bad\nseed: 1\ncrew:\n  roles: [ghost]\n"
    )

    with pytest.raises(DataLoadError):
        load_world(bad)


def test_unknown_starting_item_without_schema(tmp_path):
    bad = tmp_path / "station.yaml"
    bad.write_text(
        "world_id: bad\nname: Bad\nseed: 1\nstation:\n  starting_items: [vending_machine]\n"
    )

    with pytest.raises(DataLoadError) as excinfo:
        load_world(bad)
    assert "vending_machine" in str(excinfo.value)

    print("[OK] Unknown roles and items rejected\n")


def test_non_mapping_yaml(tmp_path):
    bad = tmp_path / "list.yaml"
    bad.write_text("- just\n- a list\n")

    with pytest.raises(DataLoadError):
        load_yaml(bad)


if __name__ == '__main__':
    test_load_world()
    test_load_item_catalog()
    test_load_all_data()
    test_world_round_trips_through_dict()
    test_missing_file()
    print("All loader tests passed!")
