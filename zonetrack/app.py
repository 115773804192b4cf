"""Tracker - application state and command dispatch.

Owns the progress matrix and the cursor. Every user-facing command goes
through here; nothing in zonetrack keeps state at module level.

Key map (one key, optional argument):

  y / Y   progress +1 / -1        u / U   target +1 / -1
  i       progress := target      I       target := progress
  o       target := 0             O       progress := 0
  q w e r new map / zone / ability / usage
  a s d f select map / zone / ability / usage
  z x c v remove map / zone / ability / usage
  h j k l prev usage / next zone / prev zone / next usage
  Q       save and quit           !       quit without saving
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from zonetrack.model.entities import DEFAULT_TARGET, Ability, Map, Target, Usage, Zone
from zonetrack.model.store import ProgressStore
from zonetrack.selection.cursor import Selection
from zonetrack.selection.selector import Name, Selector


logger = logging.getLogger(__name__)

_NUMERIC_NAME = re.compile(r"^\+?[0-9]+$")


class KeyResult(Enum):
    """What the input loop should do after a key."""

    CONTINUE = "continue"
    SAVE_AND_QUIT = "save_and_quit"
    QUIT = "quit"


class Subject(Enum):
    MAP = "map"
    ZONE = "zone"
    ABILITY = "ability"
    USAGE = "usage"


TARGET_KEYS: dict[str, tuple[str, tuple]] = {
    "y": ("change_progress", (1,)),
    "Y": ("change_progress", (-1,)),
    "u": ("change_target", (1,)),
    "U": ("change_target", (-1,)),
    "i": ("match_progress_to_target", ()),
    "I": ("match_target_to_progress", ()),
    "o": ("zero_target", ()),
    "O": ("zero_progress", ()),
}

NEW_KEYS: dict[str, Subject] = {
    "q": Subject.MAP,
    "w": Subject.ZONE,
    "e": Subject.ABILITY,
    "r": Subject.USAGE,
}

SELECT_KEYS: dict[str, Subject] = {
    "a": Subject.MAP,
    "s": Subject.ZONE,
    "d": Subject.ABILITY,
    "f": Subject.USAGE,
}

REMOVE_KEYS: dict[str, Subject] = {
    "z": Subject.MAP,
    "x": Subject.ZONE,
    "c": Subject.ABILITY,
    "v": Subject.USAGE,
}

NAV_KEYS: dict[str, str] = {
    "h": "prev_usage",
    "j": "next_zone",
    "k": "prev_zone",
    "l": "next_usage",
}

# Keys whose command needs a text argument
ARGUMENT_KEYS = frozenset(NEW_KEYS) | frozenset(SELECT_KEYS) | frozenset(REMOVE_KEYS)


@dataclass
class Tracker:
    """Progress matrix plus the cursor that addresses it."""

    store: ProgressStore = field(default_factory=ProgressStore)
    selection: Selection = field(default_factory=Selection)

    @classmethod
    def create(cls, title: str = "Progress", default_target: int = DEFAULT_TARGET) -> "Tracker":
        return cls(store=ProgressStore(name=title, default_target=default_target))

    # --- current target ---

    def current_target(self) -> Target | None:
        return self.store.get_target(self.selection)

    def apply_to_target(self, op: str, *args) -> bool:
        """Call a Target mutation primitive on the selected entry."""
        target = self.current_target()
        if target is None:
            logger.debug("No target under cursor %s; %s ignored", self.selection, op)
            return False
        getattr(target, op)(*args)
        return True

    # --- new ---

    @staticmethod
    def _valid_new_name(name: str) -> bool:
        if not name or _NUMERIC_NAME.match(name):
            logger.warning("Rejected name %r: names must be non-empty and non-numeric", name)
            return False
        return True

    def new_map(self, name: str) -> bool:
        if not self._valid_new_name(name) or not self.store.add_map(Map(name)):
            return False
        self.selection.map = Name(name)
        self.selection.zone = None
        return True

    def new_zone(self, name: str) -> bool:
        if self.selection.map is None or not self._valid_new_name(name):
            return False
        if not self.store.add_zone(self.selection.map, Zone(name)):
            return False
        self.selection.zone = Name(name)
        return True

    def new_ability(self, name: str) -> bool:
        if not self._valid_new_name(name) or not self.store.add_ability(Ability(name)):
            return False
        self.selection.ability = Name(name)
        self.selection.usage = None
        return True

    def new_usage(self, name: str) -> bool:
        if self.selection.ability is None or not self._valid_new_name(name):
            return False
        if not self.store.add_usage(self.selection.ability, Usage(name)):
            return False
        self.selection.usage = Name(name)
        return True

    # --- select ---

    def select(self, subject: Subject, text: str) -> None:
        """Point one axis at ``text`` and commit the cursor to name-form."""
        setattr(self.selection, subject.value, Selector.parse(text))
        self.selection.make_relative(self.store.maps, self.store.abilities)

    # --- remove ---

    def _selected_name(self, sel: Selector | None, collection) -> str | None:
        if sel is None:
            return None
        entity = sel.resolve(collection)
        return entity.name if entity is not None else None

    def remove_map(self, name: str) -> bool:
        if self._selected_name(self.selection.map, self.store.maps) == name:
            self.selection = Selection.first()
        return self.store.remove_map(name)

    def remove_zone(self, name: str) -> bool:
        map_name = self._selected_name(self.selection.map, self.store.maps)
        if map_name is None:
            return False
        m = self.selection.map.resolve(self.store.maps)
        if self._selected_name(self.selection.zone, m.zones) == name:
            self.selection = Selection.first()
        return self.store.remove_zone(map_name, name)

    def remove_ability(self, name: str) -> bool:
        if self._selected_name(self.selection.ability, self.store.abilities) == name:
            self.selection = Selection.first()
        return self.store.remove_ability(name)

    def remove_usage(self, name: str) -> bool:
        ability_name = self._selected_name(self.selection.ability, self.store.abilities)
        if ability_name is None:
            return False
        a = self.selection.ability.resolve(self.store.abilities)
        if self._selected_name(self.selection.usage, a.usages) == name:
            self.selection = Selection.first()
        return self.store.remove_usage(ability_name, name)

    # --- navigation ---

    def next_zone(self) -> None:
        self.selection.next_zone(self.store.maps)

    def prev_zone(self) -> None:
        self.selection.prev_zone(self.store.maps)

    def next_usage(self) -> None:
        self.selection.next_usage(self.store.abilities)

    def prev_usage(self) -> None:
        self.selection.prev_usage(self.store.abilities)

    # --- dispatch ---

    def handle_key(self, key: str, argument: str = "") -> KeyResult:
        """Run the command bound to ``key``. Unknown keys are ignored."""
        if key == "Q":
            return KeyResult.SAVE_AND_QUIT
        if key == "!":
            return KeyResult.QUIT

        if key in TARGET_KEYS:
            op, args = TARGET_KEYS[key]
            self.apply_to_target(op, *args)
        elif key in NAV_KEYS:
            getattr(self, NAV_KEYS[key])()
        elif key in NEW_KEYS:
            getattr(self, f"new_{NEW_KEYS[key].value}")(argument)
        elif key in SELECT_KEYS:
            self.select(SELECT_KEYS[key], argument)
        elif key in REMOVE_KEYS:
            getattr(self, f"remove_{REMOVE_KEYS[key].value}")(argument)
        else:
            logger.debug("Unbound key %r", key)
        return KeyResult.CONTINUE
