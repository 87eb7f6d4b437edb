"""
Session controller - screen state machine.

Glues the menu, map, combat and draw-reveal screens to discrete input
triggers and to the progression and combat engines. The front end
calls the trigger methods and reads `state` / `context` to render.

States:
    MENU   --start_run-->  COMBAT  --(encounter over)-->  MENU
    MENU   --draw------->  REVEAL  --dismiss_reveal--->   MENU
    MENU   --open_map--->  MAP     --back_to_menu----->   MENU
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from kcengine.core.events import EventBus
from kcengine.input.keys import KeyState
from kcengine.resources.storage import KeyValueStore
from kcgame.battle.system import (
    CombatOutcome,
    CombatSession,
    EncounterBuilder,
    EncounterResolver,
    FirstEnemyEncounter,
    build_party,
)
from kcgame.config import SessionConfig
from kcgame.content.catalog import ContentCatalog
from kcgame.progression.gacha import DrawResult, GachaService
from kcgame.save.manager import SaveManager, SaveRecord

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Active screen."""
    MENU = auto()
    MAP = auto()
    COMBAT = auto()
    REVEAL = auto()


class SessionEvent(Enum):
    """Session events."""
    STATE_CHANGED = auto()
    RUN_STARTED = auto()
    RUN_ENDED = auto()


@dataclass
class SessionContext:
    """
    Everything mutable a session owns.

    Attributes:
        record: The player's save record (always reconciled)
        keys: Activation key flags fed by the front end
        combat: The active combat, None outside COMBAT
        last_draw: Result shown on the REVEAL screen
        last_outcome: How the previous run ended
    """
    record: SaveRecord
    keys: KeyState = field(default_factory=KeyState)
    combat: Optional[CombatSession] = None
    last_draw: Optional[DrawResult] = None
    last_outcome: Optional[CombatOutcome] = None


class SessionController:
    """
    Drives one player's session.

    Usage:
        session = SessionController(load_catalog(), JsonFileStore("saves"))
        session.draw()
        session.dismiss_reveal()
        session.start_run()
        session.press_key("y")
        session.update()
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        store: KeyValueStore,
        config: Optional[SessionConfig] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
        encounters: Optional[EncounterBuilder] = None,
        resolver: Optional[EncounterResolver] = None,
    ):
        catalog.validate()

        self.catalog = catalog
        self.config = config or SessionConfig()
        self.event_bus = event_bus
        self.encounters = encounters or FirstEnemyEncounter()
        self.resolver = resolver

        self.saves = SaveManager(store, catalog, key=self.config.save_key, event_bus=event_bus)
        self.gacha = GachaService(
            self.saves,
            catalog,
            rng=rng,
            config=self.config.progression,
            event_bus=event_bus,
        )

        self.context = SessionContext(record=self.saves.load(), keys=KeyState(event_bus))
        self._state = SessionState.MENU

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def record(self) -> SaveRecord:
        return self.context.record

    # Triggers

    def start_run(self) -> bool:
        """Build the party and encounter and enter combat."""
        if not self._expect(SessionState.MENU, "start_run"):
            return False

        party = build_party(
            self.context.record,
            self.catalog,
            self.config.party_size,
            self.config.progression,
        )
        enemies = self.encounters.build(self.catalog)
        self.context.combat = CombatSession(
            party,
            enemies,
            resolver=self.resolver,
            event_bus=self.event_bus,
        )
        self.context.keys.reset()
        logger.info(
            f"Run started: {', '.join(h.hero_id for h in party)} "
            f"vs {', '.join(e.enemy_id for e in enemies)}"
        )
        if self.event_bus:
            self.event_bus.publish(SessionEvent.RUN_STARTED, party=party, enemies=enemies)
        self._set_state(SessionState.COMBAT)
        return True

    def draw(self) -> Optional[DrawResult]:
        """Perform a gacha draw and show the reveal screen."""
        if not self._expect(SessionState.MENU, "draw"):
            return None

        result = self.gacha.draw(self.context.record)
        self.context.last_draw = result
        self._set_state(SessionState.REVEAL)
        return result

    def dismiss_reveal(self) -> bool:
        if not self._expect(SessionState.REVEAL, "dismiss_reveal"):
            return False
        self._set_state(SessionState.MENU)
        return True

    def open_map(self) -> bool:
        if not self._expect(SessionState.MENU, "open_map"):
            return False
        self._set_state(SessionState.MAP)
        return True

    def back_to_menu(self) -> bool:
        if not self._expect(SessionState.MAP, "back_to_menu"):
            return False
        self._set_state(SessionState.MENU)
        return True

    def press_key(self, key: str) -> None:
        self.context.keys.press(key)

    def release_key(self, key: str) -> None:
        self.context.keys.release(key)

    def trigger_ultimate(self, key: str, charge_fraction: float = 1.0) -> int:
        """Fire a hero's ultimate. Returns damage dealt."""
        combat = self.context.combat
        if self._state is not SessionState.COMBAT or combat is None:
            logger.debug(f"Ignoring ultimate for '{key}' in {self._state.name}")
            return 0
        damage = combat.ultimate(key, charge_fraction)
        self._finish_run_if_over()
        return damage

    def update(self) -> None:
        """One logical tick."""
        if self._state is SessionState.COMBAT and self.context.combat is not None:
            self.context.combat.process_keys(self.context.keys)
            self._finish_run_if_over()

    # Internals

    def _finish_run_if_over(self) -> None:
        combat = self.context.combat
        if combat is None or not combat.is_over:
            return
        self.context.last_outcome = combat.outcome
        self.context.combat = None
        self.context.keys.reset()
        if self.event_bus:
            self.event_bus.publish(SessionEvent.RUN_ENDED, outcome=combat.outcome)
        self._set_state(SessionState.MENU)

    def _expect(self, state: SessionState, trigger: str) -> bool:
        if self._state is state:
            return True
        logger.debug(f"Ignoring {trigger} in {self._state.name}")
        return False

    def _set_state(self, state: SessionState) -> None:
        previous, self._state = self._state, state
        if self.event_bus:
            self.event_bus.publish(SessionEvent.STATE_CHANGED, previous=previous, current=state)
