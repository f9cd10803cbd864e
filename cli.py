"""
Party Turn Order Calculator - CLI Entry Point
===============================================
Usage:
    python cli.py calc [--battle megamon] [--slot 3] [--speed 1000] [--buffs 100,120,100,100]
    python cli.py calc --config data/parties/default.yaml [--export-json out.json]
    python cli.py table [--speed 1000] [--buffs ...]
    python cli.py interactive
    python cli.py web [--port 8080]
"""

import argparse
import sys

import yaml

from party_order.constants import (
    BATTLE_FACTORS, DEFAULT_BASE_POSITION, DEFAULT_BASE_SPEED, PARTY_SIZE,
)
from party_order.errors import PartyOrderError
from party_order.format import print_result, print_table
from party_order.io import (
    export_result_json, list_presets, load_party_config, parse_battle_type,
    parse_buff_string, save_party_config,
)
from party_order.models import PartyConfig
from party_order.speed import calculate


def _build_config(args) -> PartyConfig:
    """Start from --config (or defaults) and apply CLI overrides."""
    if args.config:
        config = load_party_config(args.config)
        print(f"[config] Loaded {config.name}")
    else:
        config = PartyConfig()

    if args.battle:
        config.battle_type = parse_battle_type(args.battle)
        config.custom_factor = None
    if args.factor is not None:
        config.custom_factor = args.factor
    if args.slot is not None:
        config.anchor_slot = args.slot
    if args.speed is not None:
        config.anchor_speed = args.speed
    if args.buffs:
        config.buff_percents = parse_buff_string(args.buffs)
    if args.buff:
        for entry in args.buff:
            slot, _, pct = entry.partition("=")
            try:
                slot_i, pct_f = int(slot), float(pct.rstrip("%"))
            except ValueError:
                raise PartyOrderError(f"Bad --buff '{entry}', expected SLOT=PERCENT") from None
            if not 1 <= slot_i <= PARTY_SIZE:
                raise PartyOrderError(f"Bad --buff '{entry}', slot must be 1-{PARTY_SIZE}")
            config.buff_percents[slot_i - 1] = int(pct_f) if pct_f.is_integer() else pct_f
    return config


def cmd_calc(args):
    config = _build_config(args)
    result = calculate(config)
    print_result(result, config)

    if args.save:
        save_party_config(config, args.save)
        print(f"\nSaved config to {args.save}")

    if args.export_json:
        export_result_json(config, result, args.export_json)
        print(f"\nExported JSON to {args.export_json}")


def cmd_table(args):
    config = _build_config(args)
    results = []
    for slot in range(1, PARTY_SIZE + 1):
        config.anchor_slot = slot
        results.append(calculate(config))
    print(f"[config] {config.summary()}")
    print_table(results)


def cmd_interactive(args):
    from party_order.repl import PartyOrderREPL
    config = load_party_config(args.config) if args.config else None
    repl = PartyOrderREPL(config)
    repl.cmdloop()


def cmd_presets(args):
    presets = list_presets()
    print(f"Bundled presets: {len(presets)}")
    print(f"{'File':<24} {'Name':<28} {'Battle':<8} {'Slot':>4} {'Speed':>6}")
    print("-" * 74)
    for p in presets:
        c = load_party_config(str(p))
        print(f"{p.name:<24} {c.name[:27]:<28} {c.battle_type.value:<8} "
              f"{c.anchor_slot:>4} {c.anchor_speed:>6}")


def _add_party_args(p):
    p.add_argument("--config", "-c", default=None,
                   help="Load party config from YAML (CLI flags override it)")
    p.add_argument("--battle", "-b", choices=sorted(BATTLE_FACTORS), default=None,
                   help="Battle type: normal (x1.14) or megamon (x1.2)")
    p.add_argument("--factor", "-f", type=float, default=None,
                   help="Custom stability factor (overrides --battle)")
    p.add_argument("--slot", "-s", type=int, default=None,
                   help=f"Anchor slot 1-{PARTY_SIZE} (default: {DEFAULT_BASE_POSITION})")
    p.add_argument("--speed", type=int, default=None,
                   help=f"Anchor member's speed before buffs (default: {DEFAULT_BASE_SPEED})")
    p.add_argument("--buffs", default=None,
                   help="Buff percent per slot: '100,120,100,100'")
    p.add_argument("--buff", action="append", default=None,
                   help="Single slot buff (repeatable): '2=150'")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Party Turn Order Calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", help="Command to run")

    # calc
    p_calc = sub.add_parser("calc", aliases=["c"],
                            help="Calculate speeds for one anchor")
    _add_party_args(p_calc)
    p_calc.add_argument("--save", default=None,
                        help="Save the resulting party config to YAML")
    p_calc.add_argument("--export-json", default=None,
                        help="Export config and result as JSON")

    # table
    p_tab = sub.add_parser("table", aliases=["t"],
                           help="Compare speeds for every anchor slot")
    _add_party_args(p_tab)

    # interactive
    p_int = sub.add_parser("interactive", aliases=["repl", "i"],
                           help="Interactive REPL mode")
    p_int.add_argument("--config", "-c", default=None,
                       help="Start from a party config YAML")

    # presets
    sub.add_parser("presets", help="List bundled party configs")

    # web
    p_web = sub.add_parser("web", aliases=["serve"],
                           help="Start the web API")
    p_web.add_argument("--port", type=int, default=8080,
                       help="Port to serve on (default: 8080)")

    args = parser.parse_args(argv)

    try:
        if args.command in ("calc", "c"):
            cmd_calc(args)
        elif args.command in ("table", "t"):
            cmd_table(args)
        elif args.command in ("interactive", "repl", "i"):
            cmd_interactive(args)
        elif args.command == "presets":
            cmd_presets(args)
        elif args.command in ("web", "serve"):
            from party_order.web import start_server
            start_server(port=args.port)
        else:
            parser.print_help()
    except (PartyOrderError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
