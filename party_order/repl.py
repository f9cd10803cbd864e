"""
Party Order Speed Calculator - Interactive REPL
=================================================
Every change to the party recalculates and redisplays the speeds.
"""

import cmd
from typing import Optional

import yaml

from party_order.constants import BUFF_PERCENT_MAX, BUFF_PERCENT_MIN, PARTY_SIZE
from party_order.errors import PartyOrderError
from party_order.format import print_result
from party_order.io import (
    export_result_json, load_party_config, parse_battle_type, parse_buff_string,
    save_party_config,
)
from party_order.models import PartyConfig, SpeedResult
from party_order.speed import calculate


class PartyOrderREPL(cmd.Cmd):
    intro = (
        "\n"
        "================================================\n"
        "  Party Turn Order Calculator - Interactive Mode\n"
        "================================================\n"
        "Type 'help' for commands.\n"
    )
    prompt = "order> "

    def __init__(self, config: Optional[PartyConfig] = None, **kwargs):
        super().__init__(**kwargs)
        self.config = config or PartyConfig()
        self.last_result: Optional[SpeedResult] = None

    def preloop(self):
        self._recalculate()

    def _recalculate(self):
        try:
            self.last_result = calculate(self.config)
        except PartyOrderError as e:
            self.last_result = None
            print(f"Error: {e}")
            return
        print_result(self.last_result, self.config)

    def _parse_int(self, arg, usage) -> Optional[int]:
        try:
            return int(arg.strip())
        except ValueError:
            print(f"Usage: {usage}")
            return None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def do_battle(self, arg):
        """Set battle type: battle normal|megamon"""
        try:
            self.config.battle_type = parse_battle_type(arg)
        except PartyOrderError as e:
            print(f"Error: {e}")
            return
        self.config.custom_factor = None
        self._recalculate()

    def do_factor(self, arg):
        """Set a custom factor, or clear it: factor <value>|clear"""
        arg = arg.strip()
        if arg in ("", "clear", "none"):
            self.config.custom_factor = None
        else:
            try:
                self.config.custom_factor = float(arg)
            except ValueError:
                print("Usage: factor <value>|clear")
                return
        self._recalculate()

    def do_slot(self, arg):
        """Set the anchor slot: slot <1-4>"""
        slot = self._parse_int(arg, f"slot <1-{PARTY_SIZE}>")
        if slot is None:
            return
        self.config.anchor_slot = slot
        self._recalculate()

    def do_speed(self, arg):
        """Set the anchor member's speed: speed <value>"""
        speed = self._parse_int(arg, "speed <value>")
        if speed is None:
            return
        self.config.anchor_speed = speed
        self._recalculate()

    def do_buff(self, arg):
        """Set one slot's buff: buff <slot> <percent>"""
        usage = f"buff <slot> <{BUFF_PERCENT_MIN}-{BUFF_PERCENT_MAX}>"
        parts = arg.split()
        if len(parts) != 2:
            print(f"Usage: {usage}")
            return
        try:
            slot = int(parts[0])
            pct = float(parts[1].rstrip("%"))
        except ValueError:
            print(f"Usage: {usage}")
            return
        if not 1 <= slot <= PARTY_SIZE:
            print(f"Error: Slot must be between 1 and {PARTY_SIZE}")
            return
        self.config.buff_percents[slot - 1] = int(pct) if pct.is_integer() else pct
        self._recalculate()

    def do_buffs(self, arg):
        """Set all buffs: buffs 100,120,100,100"""
        try:
            self.config.buff_percents = parse_buff_string(arg)
        except PartyOrderError as e:
            print(f"Error: {e}")
            return
        self._recalculate()

    def do_reset(self, arg):
        """Reset to the default party"""
        self.config = PartyConfig()
        self._recalculate()

    # ------------------------------------------------------------------
    # Output / files
    # ------------------------------------------------------------------

    def do_show(self, arg):
        """Show the current party and speeds"""
        print(f"\n{self.config.summary()}")
        self._recalculate()

    def do_load(self, arg):
        """Load party config from YAML: load <filepath>"""
        if not arg:
            print("Usage: load <filepath>")
            return
        try:
            self.config = load_party_config(arg.strip())
        except (OSError, PartyOrderError, yaml.YAMLError) as e:
            print(f"Error: {e}")
            return
        print(f"Loaded: {self.config.name}")
        self._recalculate()

    def do_save(self, arg):
        """Save party config to YAML: save <filepath>"""
        if not arg:
            print("Usage: save <filepath>")
            return
        try:
            save_party_config(self.config, arg.strip())
            print(f"Saved to {arg.strip()}")
        except OSError as e:
            print(f"Error: {e}")

    def do_export(self, arg):
        """Export the last result as JSON: export <filepath>"""
        if not arg:
            print("Usage: export <filepath>")
            return
        if self.last_result is None:
            print("Nothing to export, fix the inputs first")
            return
        try:
            export_result_json(self.config, self.last_result, arg.strip())
            print(f"Exported JSON to {arg.strip()}")
        except OSError as e:
            print(f"Error: {e}")

    def do_quit(self, arg):
        """Exit"""
        return True

    do_exit = do_quit
    do_EOF = do_quit

    def emptyline(self):
        pass
