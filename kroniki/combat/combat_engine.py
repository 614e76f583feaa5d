"""Combat Engine for Kroniki Mroku.

Turn-based 1v1 fight loop:
- Turn 0 ranged opening shots
- Turn order each round (Elf opener, then agility)
- Mana regeneration per action phase
- Repeated sub-attacks per phase, plus class powers
- Win condition and the turn cap
"""

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Optional

from kroniki.core.constants import (
    BERSERKER_FRENZY_HEALTH_THRESHOLD,
    HUNTER_BONUS_SHOT_DAMAGE_RATIO,
    MAX_COMBAT_TURNS,
)
from kroniki.data.models.character import CharacterClass, Race
from .attack import AttackSystem, FightState, Slot
from .combat_log import CombatAction, CombatLogEntry, serialize_log
from .combatant import Combatant

logger = logging.getLogger(__name__)


@dataclass
class FightResult:
    """Outcome of a fight, seen from the initiator."""

    log: list[CombatLogEntry] = field(default_factory=list)
    is_victory: bool = False
    final_attacker_health: int = 0
    final_attacker_mana: int = 0
    final_defender_health: int = 0
    final_defender_mana: int = 0
    turns: int = 0
    timed_out: bool = False

    def log_dicts(self) -> list[dict]:
        return serialize_log(self.log)


class CombatEngine:
    """
    Turn-based combat simulation engine.

    The initiator occupies the "player" side of every log snapshot,
    whichever kind of combatant it is.

    Usage:
        engine = CombatEngine(rng=random.Random(42))
        result = engine.resolve(player, enemy)
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        """
        Initialize combat engine.

        Args:
            rng: Random source shared by every roll in the fight.
            seed: Seed for a fresh random source when `rng` is not given.
        """
        self.rng = rng if rng is not None else random.Random(seed)
        self.attack_system = AttackSystem(rng=self.rng)

    def resolve(self, attacker: Combatant, defender: Combatant) -> FightResult:
        """
        Run a fight to completion.

        Args:
            attacker: Initiator (player slot in the log)
            defender: Target (enemy slot in the log)

        Returns:
            FightResult; `is_victory` is True only if the defender fell
            and the attacker is still standing.
        """
        state = FightState(
            player_health=attacker.stats.current_health,
            player_mana=attacker.stats.current_mana,
            enemy_health=defender.stats.current_health,
            enemy_mana=defender.stats.current_mana,
            turn=0,
        )
        log: list[CombatLogEntry] = [
            CombatLogEntry(
                turn=0,
                attacker=attacker.name,
                defender=defender.name,
                action=CombatAction.START,
                **state.snapshot(),
            )
        ]
        sides = {Slot.PLAYER: attacker, Slot.ENEMY: defender}

        for slot in (Slot.PLAYER, Slot.ENEMY):
            state = self._opening_shots(sides[slot], sides[slot.other], state, slot, log)

        timed_out = False
        while state.both_alive:
            if state.turn >= MAX_COMBAT_TURNS:
                timed_out = True
                break
            state = replace(state, turn=state.turn + 1)

            first = self._first_to_act(attacker, defender, state.turn)
            for slot in (first, first.other):
                if not state.both_alive:
                    break
                state = self._take_phase(sides[slot], sides[slot.other], state, slot, log)

        is_victory = state.enemy_health <= 0 < state.player_health
        final = state.snapshot()

        logger.debug(
            "%s vs %s: %s after %d turns%s",
            attacker.name,
            defender.name,
            "victory" if is_victory else "defeat",
            state.turn,
            " (timeout)" if timed_out else "",
        )

        return FightResult(
            log=log,
            is_victory=is_victory,
            final_attacker_health=final["player_health"],
            final_attacker_mana=final["player_mana"],
            final_defender_health=final["enemy_health"],
            final_defender_mana=final["enemy_mana"],
            turns=state.turn,
            timed_out=timed_out,
        )

    @staticmethod
    def _first_to_act(attacker: Combatant, defender: Combatant, turn: int) -> Slot:
        """Elf initiators open the fight; afterwards agility decides, ties to the initiator."""
        if turn == 1 and attacker.race == Race.ELF:
            return Slot.PLAYER
        if defender.stats.agility > attacker.stats.agility:
            return Slot.ENEMY
        return Slot.PLAYER

    def _take_phase(
        self,
        actor: Combatant,
        target: Combatant,
        state: FightState,
        slot: Slot,
        log: list[CombatLogEntry],
    ) -> FightState:
        """Mana regeneration followed by the actor's sub-attacks."""
        regen = actor.stats.mana_regen
        if regen > 0:
            mana = state.mana(slot)
            new_mana = min(actor.stats.max_mana, mana + regen)
            if new_mana > mana:
                state = state.with_pools(slot, mana=new_mana)
                log.append(
                    CombatLogEntry(
                        turn=state.turn,
                        attacker=actor.name,
                        defender=target.name,
                        action=CombatAction.MANA_REGEN,
                        mana_gained=new_mana - mana,
                        **state.snapshot(),
                    )
                )

        for index in range(actor.stats.attack_count):
            if not state.both_alive:
                break
            state, entries = self.attack_system.execute(
                actor, target, state, slot, **self._warrior_opener(actor, index)
            )
            log.extend(entries)

        if (
            state.both_alive
            and actor.has_class(CharacterClass.BERSERKER)
            and state.health(slot) < actor.stats.max_health * BERSERKER_FRENZY_HEALTH_THRESHOLD
        ):
            log.append(
                CombatLogEntry(
                    turn=state.turn,
                    attacker=actor.name,
                    defender=target.name,
                    action=CombatAction.BERSERKER_FRENZY,
                    **state.snapshot(),
                )
            )
            state, entries = self.attack_system.execute(actor, target, state, slot)
            log.extend(entries)

        return state

    def _opening_shots(
        self,
        actor: Combatant,
        target: Combatant,
        state: FightState,
        slot: Slot,
        log: list[CombatLogEntry],
    ) -> FightState:
        """Turn 0 free shot for ranged weapons; Hunters follow with a half-damage shot."""
        if not (actor.is_player and actor.weapon.is_ranged and state.both_alive):
            return state

        state, entries = self.attack_system.execute(
            actor, target, state, slot, **self._warrior_opener(actor, 0)
        )
        log.extend(entries)

        if state.both_alive and actor.has_class(CharacterClass.HUNTER):
            state, entries = self.attack_system.execute(
                actor,
                target,
                state,
                slot,
                damage_ratio=HUNTER_BONUS_SHOT_DAMAGE_RATIO,
                action=CombatAction.HUNTER_BONUS_SHOT,
            )
            log.extend(entries)
        return state

    @staticmethod
    def _warrior_opener(actor: Combatant, index: int) -> dict:
        """A Warrior's first hit of a phase cannot be dodged and always crits."""
        if index == 0 and actor.has_class(CharacterClass.WARRIOR):
            return {"ignore_dodge": True, "crit_chance": 100.0}
        return {}


def resolve_fight(
    attacker: Combatant,
    defender: Combatant,
    rng: Optional[random.Random] = None,
) -> FightResult:
    """Run a single fight with a throwaway engine."""
    return CombatEngine(rng=rng).resolve(attacker, defender)
