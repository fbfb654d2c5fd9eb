"""
Save games.

A save is one JSON file holding everything needed to resume a simulation
exactly: world config, item catalog, random stream state, station tiles
with their items, and every inhabitant.
"""

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .data_types import World, ItemDefinition
from .simulation import StationSimulation
from .station import Station
from .inhabitant import Inhabitant
from .constants import SAVE_FORMAT_VERSION, SAVE_NAME_FORMAT


class SaveFormatError(Exception):
    """Raised when a save file can't be read or doesn't match the format"""
    pass


def save_game(sim: StationSimulation, saves_dir: Path, name: Optional[str] = None) -> Path:
    """
    Save the simulation state to a file, overwriting if it exists.

    Args:
        sim: Simulation to save
        saves_dir: Directory for save files (created if missing)
        name: Save name (defaults to the current local time)

    Returns:
        Path of the written file
    """
    saves_dir = Path(saves_dir)
    saves_dir.mkdir(parents=True, exist_ok=True)

    if name is None:
        name = datetime.now().strftime(SAVE_NAME_FORMAT)

    state = {
        'version': SAVE_FORMAT_VERSION,
        'tick_count': sim.tick_count,
        'rng_state': sim.rng.get_state(),
        'world': sim.world.to_dict(),
        'items': {variant: asdict(d) for variant, d in sim.item_catalog.items()},
        'station': sim.station.to_dict(),
        'inhabitants': [i.to_dict() for i in sim.inhabitants],
    }

    path = saves_dir / f"{name}.json"
    print(f"Saving game to {path}")
    with open(path, 'w') as f:
        json.dump(state, f)

    return path


def list_saves(saves_dir: Path) -> List[Path]:
    """Saved games, oldest name first (empty if the directory doesn't exist)"""
    saves_dir = Path(saves_dir)
    if not saves_dir.exists():
        return []
    return sorted(saves_dir.glob("*.json"))


def load_game(path: Path, verbose: bool = False) -> StationSimulation:
    """
    Load a simulation from a save file.

    Raises:
        SaveFormatError: unreadable file, bad JSON, wrong version, missing fields
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            state = json.load(f)
    except OSError as e:
        raise SaveFormatError(f"Can't read save {path}: {e}")
    except UnicodeDecodeError as e:
        raise SaveFormatError(f"Save {path} is not UTF-8 text: {e}")
    except json.JSONDecodeError as e:
        raise SaveFormatError(f"Invalid JSON in save {path}: {e}")

    if not isinstance(state, dict) or state.get('version') != SAVE_FORMAT_VERSION:
        raise SaveFormatError(f"Unsupported save version in {path}")

    try:
        world = World.from_dict(state['world'])
        catalog = {variant: ItemDefinition(**d) for variant, d in state.get('items', {}).items()}

        sim = StationSimulation(world=world, item_catalog=catalog, verbose=verbose, generate=False)
        sim.rng.set_state(state['rng_state'])
        sim.tick_count = state['tick_count']
        sim.station = Station.from_dict(state['station'])

        for data in state['inhabitants']:
            inhabitant = Inhabitant.from_dict(data)
            sim.attach(inhabitant)
            sim.inhabitants.append(inhabitant)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SaveFormatError(f"Malformed save {path}: {e}")

    print(f"[OK] Loaded {path.name}: tick {sim.tick_count}, {len(sim.inhabitants)} inhabitants")
    return sim
