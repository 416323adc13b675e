"""Headless command line driver."""
import argparse
import logging

from .analysis import EnergyMonitor
from .config import SimulationConfig
from .errors import SandboxError
from .events import CollisionEvent
from .presets import PRESETS
from .simulation import Simulation
from .state_io import load_state, save_state

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description="Gravity sandbox (headless)")
    parser.add_argument("--preset", default="binary", choices=sorted(PRESETS), help="Preset system")
    parser.add_argument("--load", help="Start from a saved JSON state instead of a preset")
    parser.add_argument("--ticks", type=int, default=1000, help="Number of ticks to run")
    parser.add_argument("--seed", type=int, help="Seed for presets and breakup debris")
    parser.add_argument("--G", dest="g", type=float, help="Gravitational constant")
    parser.add_argument("--time-scale", type=float, help="Multiplier on the base timestep")
    parser.add_argument("--dt", type=float, help="Base timestep")
    parser.add_argument("--theta", type=float, help="Barnes-Hut opening angle")
    parser.add_argument("--direct-sum-threshold", type=int, help="Largest population summed directly")
    parser.add_argument("--max-bodies", type=int, help="Body capacity")
    parser.add_argument("--softening", type=float, help="Softening length")
    parser.add_argument("--roche-factor", type=float, help="Roche limit factor")
    parser.add_argument("--save", help="Write the final state to this JSON file")
    parser.add_argument("--energy-csv", help="Write the energy drift history to this CSV file")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging")
    return parser


def _config_from_args(args):
    options = {
        "gravitational_constant": args.g,
        "time_scale": args.time_scale,
        "base_timestep": args.dt,
        "opening_angle": args.theta,
        "direct_sum_threshold": args.direct_sum_threshold,
        "max_bodies": args.max_bodies,
        "softening_length": args.softening,
        "roche_factor": args.roche_factor,
        "seed": args.seed,
    }
    return SimulationConfig().replace(**{k: v for k, v in options.items() if v is not None})


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        sim = Simulation(_config_from_args(args))
        if args.load:
            load_state(args.load, sim)
        else:
            sim.load_preset(args.preset)
    except (SandboxError, OSError, ValueError) as exc:
        parser.error(str(exc))

    cfg = sim.config
    monitor = EnergyMonitor(max_points=max(2, args.ticks))
    monitor.set_initial_energy(sim.store, cfg.gravitational_constant, cfg.softening_length)

    logger.info("running %d ticks with %d bodies", args.ticks, sim.count())
    collisions = disruptions = 0
    for _ in range(args.ticks):
        for event in sim.step():
            if isinstance(event, CollisionEvent):
                collisions += 1
            else:
                disruptions += 1
        monitor.update(sim.store, cfg.gravitational_constant, cfg.softening_length)

    _, _, total = sim.energy()
    print(f"ticks: {sim.tick_count}  time: {sim.time:.2f}")
    print(f"bodies: {sim.count()}  collisions: {collisions}  disruptions: {disruptions}")
    print(f"energy: {total:.6g}  max drift: {monitor.max_drift():.3e} %")

    if args.save:
        save_state(args.save, sim)
    if args.energy_csv:
        monitor.export_csv(args.energy_csv)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual tool
    raise SystemExit(main())
