# apps/goals/domain/services.py
from typing import Dict, Iterable, List, Optional, Tuple

from apps.core.exceptions import Forbidden, NotFound, ValidationFailed
from apps.goals.domain.entities import FocusStatus, GoalEntity
from apps.goals.ports.repositories import IGoalRepository


class FocusService:
    """
    Keeps the focused goals of one owner ranked 1..N without gaps.

    Every operation loads and locks all of the owner's goals, rebuilds the
    ranked list in memory and writes back only the rows whose focus changed.
    """

    def __init__(self, repository: IGoalRepository):
        self.repository = repository

    def promote(self, owner_id: int, goal_id: int, desired_rank: Optional[int] = None) -> List[GoalEntity]:
        """
        Puts a goal into the focus at `desired_rank` (end of the list when omitted).
        Goals at or behind that rank move one place down.
        """
        with self.repository.locked_goals(owner_id) as goals:
            snapshot = self._snapshot(goals)
            target = self._find(goals, goal_id)

            ranked = [g for g in self._ranked(goals) if g.id != target.id]
            if desired_rank is None:
                position = len(ranked)
            else:
                # Out-of-range ranks are clamped to 1..N+1
                position = min(max(int(desired_rank), 1), len(ranked) + 1) - 1

            target.focus_status = FocusStatus.ACTIVE_FOCUS
            ranked.insert(position, target)

            self._apply(goals, ranked)
            self.repository.save_focus(self._changed(goals, snapshot))
            return ranked

    def demote(self, owner_id: int, goal_id: int, new_status: Optional[FocusStatus] = None) -> List[GoalEntity]:
        """Takes a goal out of the focus; goals behind it move one place up."""
        if new_status == FocusStatus.ACTIVE_FOCUS:
            raise ValidationFailed("Demotion needs a non-focus status")

        with self.repository.locked_goals(owner_id) as goals:
            snapshot = self._snapshot(goals)
            target = self._find(goals, goal_id)

            ranked = [g for g in self._ranked(goals) if g.id != target.id]
            target.focus_status = new_status

            self._apply(goals, ranked)
            self.repository.save_focus(self._changed(goals, snapshot))
            return ranked

    def reorder(self, owner_id: int, goal_ids: Iterable) -> List[GoalEntity]:
        """
        Ranks the listed goals 1..N in list order and puts all of them in focus.
        Focused goals missing from the list keep their relative order after them.
        """
        try:
            ids = [int(i) for i in goal_ids]
        except (TypeError, ValueError):
            raise ValidationFailed("goalIds must be a list of ids")
        if not ids:
            raise ValidationFailed("goalIds must not be empty")
        if len(set(ids)) != len(ids):
            raise ValidationFailed("goalIds contains duplicates")

        with self.repository.locked_goals(owner_id) as goals:
            snapshot = self._snapshot(goals)
            by_id = {g.id: g for g in goals}

            if any(i not in by_id for i in ids):
                raise Forbidden("Some goals do not belong to you")

            listed = [by_id[i] for i in ids]
            rest = [g for g in self._ranked(goals) if g.id not in set(ids)]
            for goal in listed:
                goal.focus_status = FocusStatus.ACTIVE_FOCUS

            ranked = listed + rest
            self._apply(goals, ranked)
            self.repository.save_focus(self._changed(goals, snapshot))
            return ranked

    def set_focus(self, owner_id: int, goal_id: int, focus_status, focus_order=None) -> List[GoalEntity]:
        """Promote or demote depending on the requested status (None = no focus)."""
        if focus_status is None:
            return self.demote(owner_id, goal_id, None)
        try:
            status = FocusStatus(focus_status)
        except ValueError:
            raise ValidationFailed(f"Invalid focusStatus: {focus_status}")

        if status == FocusStatus.ACTIVE_FOCUS:
            if focus_order is not None:
                try:
                    focus_order = int(focus_order)
                except (TypeError, ValueError):
                    raise ValidationFailed("focusOrder must be a number")
            return self.promote(owner_id, goal_id, focus_order)
        return self.demote(owner_id, goal_id, status)

    # --- helpers ---

    def _find(self, goals: List[GoalEntity], goal_id) -> GoalEntity:
        for goal in goals:
            if goal.id == goal_id:
                return goal
        raise NotFound("Goal not found")

    def _ranked(self, goals: List[GoalEntity]) -> List[GoalEntity]:
        ranked = [g for g in goals if g.is_ranked]
        # Rows without an order (legacy data) go last, ties broken by id
        ranked.sort(key=lambda g: (g.focus_order is None, g.focus_order or 0, g.id))
        return ranked

    def _apply(self, goals: List[GoalEntity], ranked: List[GoalEntity]) -> None:
        ranked_ids = set()
        for position, goal in enumerate(ranked, start=1):
            goal.focus_status = FocusStatus.ACTIVE_FOCUS
            goal.focus_order = position
            ranked_ids.add(goal.id)

        for goal in goals:
            if goal.id in ranked_ids:
                continue
            if goal.focus_status == FocusStatus.ACTIVE_FOCUS:
                goal.focus_status = None
            goal.focus_order = None

    def _snapshot(self, goals: List[GoalEntity]) -> Dict[int, Tuple]:
        return {g.id: g.focus_state() for g in goals}

    def _changed(self, goals: List[GoalEntity], snapshot: Dict[int, Tuple]) -> List[GoalEntity]:
        return [g for g in goals if snapshot.get(g.id) != g.focus_state()]
