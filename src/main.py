"""Main entry point: runs a scripted incentive engine bench session"""
import logging

from src.config import LOG_LEVEL, get_bench_settings, validate_config
from src.gamification.achievement_system import get_achievement_progress
from src.gamification.simulation import SimulationBench

logger = logging.getLogger(__name__)


def run_demo(bench: SimulationBench) -> SimulationBench:
    """Chain a combo, break it, level up and unlock every achievement"""
    bench.execute_task("B", 100)
    bench.execute_task("B", 100)
    bench.execute_task("A", 300)
    bench.advance_time(31000)  # break combo
    bench.execute_task("S", 500)
    bench.execute_task("S", 500)
    bench.execute_task("A", 300)
    bench.execute_task("S", 500)
    bench.execute_task("S", 500)
    return bench


def main() -> None:
    """Main application entry point"""
    # LOG_LEVEL must be valid before logging can be configured with it, so a
    # ConfigurationError raised here logs through the unconfigured root logger
    # (stderr, WARNING and above) and then propagates.
    validate_config()

    # Configure logging
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, LOG_LEVEL)
    )

    logger.info("Running scripted bench session...")

    bench = run_demo(SimulationBench(**get_bench_settings()))

    for entry in reversed(bench.logs):
        print(f"[T+{(entry.time - bench.start_time_ms) // 1000}s] {entry.message}")

    state = bench.state
    print(
        f"\nLevel {state.level} | {state.current_xp}/{state.xp_needed_for_next_level} XP | "
        f"{state.completed_task_count} tasks | combo {state.combo.count}x"
    )
    for achievement in get_achievement_progress(state):
        mark = achievement["icon"] if achievement["unlocked"] else "🔒"
        print(f"  {mark} {achievement['name']}")


if __name__ == "__main__":
    main()
