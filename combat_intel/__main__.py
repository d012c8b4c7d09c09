"""Entry point: ``python -m combat_intel``.

Supports two modes:
  - ``python -m combat_intel``          -> FastAPI server around one engine
  - ``python -m combat_intel cli``      -> Headless scenario run on a manual clock
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Combat Decision Engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless scenario ---
    cli = sub.add_parser("cli", help="Run a deterministic headless scenario")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=60)
    cli.add_argument("--hostiles", type=int, default=6)
    cli.add_argument("--tick-ms", type=int, default=250, help="Clock advance per tick")
    cli.add_argument("--vocation", type=int, default=3, help="Client vocation id (1-4, +10 promoted)")
    cli.add_argument("--replay", type=str, default=None, help="Write decisions to this JSON file")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from combat_intel.api.app import create_app
    from combat_intel.config import CombatConfig

    app = create_app(CombatConfig(log_level=args.log_level))
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from combat_intel.config import CombatConfig
    from combat_intel.core.enums import Direction
    from combat_intel.core.models import PlayerState, Position
    from combat_intel.core.snapshot import SnapshotWorld
    from combat_intel.engine.actions import describe
    from combat_intel.engine.arbiter import CombatEngine
    from combat_intel.engine.summary import format_summary
    from combat_intel.systems.clock import ManualClock
    from combat_intel.systems.rng import DeterministicRNG
    from combat_intel.systems.scenario import PackScenario
    from combat_intel.utils.logging import setup_logging
    from combat_intel.utils.replay import DecisionRecorder

    config = CombatConfig(log_level=args.log_level)
    setup_logging(config.log_level)

    player = PlayerState(Position(100, 100, 7), Direction.NORTH, 100, args.vocation)
    scenario = PackScenario(DeterministicRNG(args.seed), player, hostile_count=args.hostiles)
    clock = ManualClock(start_ms=0)
    world = SnapshotWorld(scenario.snapshot())
    engine = CombatEngine(world, config, clock)
    recorder = DecisionRecorder(args.replay, args.seed) if args.replay else None

    logger.info("Scenario seed=%d hostiles=%d ticks=%d", args.seed, args.hostiles, args.ticks)
    for _ in range(args.ticks):
        snapshot = scenario.step()
        clock.advance(args.tick_ms)
        world.update(snapshot)

        action = engine.get_recommended_action()
        spell = engine.next_spell()
        if spell is not None:
            engine.record_cast(spell)
        logger.info("tick %3d | %-40s | spell=%s", snapshot.tick, describe(action), spell or "-")
        if recorder is not None:
            recorder.record_tick(snapshot, action, spell)
        if scenario.finished:
            logger.info("All hostiles down at tick %d", snapshot.tick)
            break

    logger.info("\n%s", format_summary(engine, refresh=False))
    if recorder is not None:
        recorder.flush()


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
