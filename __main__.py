#!/usr/bin/env python3
"""
Long Range - Ballistic Simulation Trainer
Entry Point Module
Parses the command line, checks dependencies and runs one of the console
commands (range card, level listing, single shot).
"""
import argparse
import random
import sys
import time
import traceback
from pathlib import Path
from typing import Optional, List
def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Long Range - Ballistic Simulation Trainer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python . range-table --temperature 35
  python . levels
  python . shoot --mode training --level 0 --elevation 2.4
  python . --check-deps
        """
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version="Long Range 1.0.0"
    )
    parser.add_argument(
        "--check-deps", "-c",
        action="store_true",
        help="Check dependencies and exit"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        help="Custom directory for log files"
    )
    subparsers = parser.add_subparsers(dest="command")
    table = subparsers.add_parser("range-table", help="Print the range card")
    table.add_argument("--temperature", "-t", type=float, default=15.0,
                       help="Air temperature in Celsius (default: 15)")
    subparsers.add_parser("levels", help="List and validate the level tables")
    shoot = subparsers.add_parser("shoot", help="Fire one shot and print the instructor feedback")
    shoot.add_argument("--mode", choices=["training", "campaign"], default="training")
    shoot.add_argument("--level", type=int, default=0, help="Zero-based level index")
    shoot.add_argument("--elevation", type=float, default=0.0, help="Elevation in MIL")
    shoot.add_argument("--windage", type=float, default=0.0, help="Windage in MIL")
    shoot.add_argument("--seed", type=int, help="Seed for the environment generator")
    return parser.parse_args(argv)
def check_dependencies() -> bool:
    """Check if required dependencies are available."""
    required_packages = {
        'PySide6': ('PySide6', 'Turret repeat timers'),
        'numpy': ('numpy', 'Range table calculations'),
    }
    missing_required = []
    print(f"Python version: {sys.version}")
    for display_name, (import_name, description) in required_packages.items():
        try:
            module = __import__(import_name)
            if import_name == 'PySide6':
                from PySide6 import QtCore
            print(f"OK {display_name}: {description} (version: {getattr(module, '__version__', 'unknown')})")
        except ImportError as e:
            missing_required.append(f"{display_name} ({description})")
            print(f"ERROR {display_name}: {description} - MISSING")
            print(f"   Import error: {e}")
    if missing_required:
        print("\nMissing required dependencies:")
        for package in missing_required:
            print(f"   - {package}")
        print("\nTry installing with:")
        print("   pip install " + " ".join(p.split()[0] for p in missing_required))
        return False
    return True
def setup_environment():
    """Make the project modules importable when run as ``python .``."""
    current_dir = Path(__file__).parent
    if str(current_dir) not in sys.path:
        sys.path.insert(0, str(current_dir))
def print_range_table(temperature: float) -> int:
    from ballistics import build_range_table
    from logger import get_logger
    with get_logger().timer("range table"):
        table = build_range_table(temperature)
    print(f"Range Card @ {temperature:g}°C")
    print(f"{'Meters':>8}  {'MIL':>5}")
    for row in table:
        print(f"{row.distance:>7}m  {row.elevation:>5.1f}")
    return 0
def print_levels() -> int:
    from level_validation import validate_levels
    from levels import GameMode, levels_for
    from logger import LogCategory, get_logger
    exit_code = 0
    for mode in GameMode:
        print(f"\n{mode.name}")
        levels = levels_for(mode)
        for index, level in enumerate(levels):
            c = level.constraints
            factors = ", ".join(level.active_factors()) or "none"
            print(f"  [{index}] {level.id}: {level.text.title} "
                  f"({c.min_dist}-{c.max_dist}m, wind {c.min_wind:g}-{c.max_wind:g}m/s; {factors})")
        issues = validate_levels(levels)
        for issue in issues:
            print(f"  ERROR {issue.level_id}.{issue.field}: {issue.title} - {issue.message}")
            get_logger().warning(f"Level {issue.level_id}: {issue.title}",
                                 category=LogCategory.CONFIG, field=issue.field)
        if issues:
            exit_code = 1
    return exit_code
def run_shot(args: argparse.Namespace) -> int:
    from feedback import is_divider
    from levels import GameMode
    from session import TrainingSession
    session = TrainingSession(rng=random.Random(args.seed))
    if not session.start_briefing(GameMode(args.mode), args.level):
        print(f"No level {args.level} in {args.mode} mode")
        return 2
    env = session.state.environment
    print(f"{session.level.text.title}")
    print(f"DIST {env.distance:g}m | Wind {env.wind_speed:g}m/s @ {env.wind_direction:g}° | "
          f"Temp {env.temperature:g}°C | Humidity {env.humidity:g}%")
    session.start_aiming()
    session.adjust_turret("elevation", args.elevation)
    session.adjust_turret("windage", args.windage)
    result, mastery = session.fire()
    print(f"\n{'HIT' if result.hit else 'MISS'}"
          + (f" - {result.rings} RINGS" if result.hit else ""))
    for line in session.feedback:
        print("" if is_divider(line) else f"> {line}")
    print(f"\nMastery: {mastery}")
    return 0
def main(argv: Optional[List[str]] = None):
    """Main entry point for the Long Range trainer."""
    args = None
    try:
        args = parse_arguments(argv)
        setup_environment()
        if args.check_deps:
            if check_dependencies():
                print("\nAll dependencies are satisfied!")
                return 0
            print("\nSome dependencies are missing!")
            return 1
        from logger import setup_logger
        setup_logger(log_dir=Path(args.log_dir) if args.log_dir else None, debug=args.debug)
        if args.command == "range-table":
            return print_range_table(args.temperature)
        if args.command == "levels":
            return print_levels()
        if args.command == "shoot":
            return run_shot(args)
        print("No command given. Use --help for usage.")
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception as e:
        print(f"\nCritical error: {type(e).__name__}: {e}")
        if args is not None and args.debug:
            traceback.print_exc()
        else:
            print("Run with --debug for detailed error information")
        return 1
if __name__ == "__main__":
    start_time = time.time()
    exit_code = main()
    if exit_code:
        print(f"\nExited after {time.time() - start_time:.2f} seconds")
    sys.exit(exit_code)
