import json
import logging
from pathlib import Path

from .body_store import BodyStore
from .config import SimulationConfig

logger = logging.getLogger(__name__)


def save_state(filepath, sim):
    """Serialize the configuration and live bodies of ``sim`` to JSON."""
    data = {
        "config": sim.config.to_dict(),
        "time": sim.time,
        "bodies": [
            {
                "kind": b.kind,
                "mass": b.mass,
                "pos": b.pos.tolist(),
                "vel": b.vel.tolist(),
                "color": list(b.color),
                "age": b.age,
            }
            for b in sim.store.alive_bodies()
        ],
    }
    Path(filepath).write_text(json.dumps(data))
    logger.info("saved %d bodies to %s", len(data["bodies"]), filepath)


def load_state(filepath, sim):
    """Replace the contents of ``sim`` with a state saved by :func:`save_state`.

    The saved bodies are rebuilt into a fresh store first, so a file that
    fails validation or exceeds its own ``max_bodies`` raises without
    touching ``sim``.  Bodies keep their saved order and receive new ids.
    """
    data = json.loads(Path(filepath).read_text())
    config = SimulationConfig.from_dict(data["config"]) if "config" in data else sim.config
    store = BodyStore(config.max_bodies)
    for item in data.get("bodies", []):
        body_id = store.add(
            item.get("kind", "planet"),
            item.get("mass", 1.0),
            item.get("pos", [0, 0, 0]),
            item.get("vel", [0, 0, 0]),
            color=tuple(item["color"]) if "color" in item else None,
        )
        store.get(body_id).age = float(item.get("age", 0.0))

    sim.clear_all()
    if "config" in data:
        sim.configure(**config.to_dict())
    sim.store = store
    sim.time = float(data.get("time", 0.0))
    ids = [b.id for b in store]
    logger.info("loaded %d bodies from %s", len(ids), filepath)
    return ids
