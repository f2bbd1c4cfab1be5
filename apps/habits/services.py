from datetime import date, timedelta
from .models import Habit, HabitCompletion


class HabitService:
    def complete_habit(self, habit: Habit, day: date) -> bool:
        """Records the completion; False if the day was already done."""
        # 1. Already done that day?
        if HabitCompletion.objects.filter(habit=habit, date=day).exists():
            return False

        # 2. Record it
        HabitCompletion.objects.create(habit=habit, date=day)

        # 3. Streak: yesterday -> +1, older -> restart at 1
        yesterday = day - timedelta(days=1)

        if habit.last_completed_date == yesterday:
            habit.current_streak += 1
        elif habit.last_completed_date and habit.last_completed_date > day:
            # Back-filled older day; the streak is rebuilt from the log
            self.recalculate_streaks(habit)
            return True
        else:
            habit.current_streak = 1

        if habit.current_streak > habit.longest_streak:
            habit.longest_streak = habit.current_streak

        habit.last_completed_date = day
        habit.save()
        return True

    def uncomplete_habit(self, habit: Habit, day: date) -> bool:
        deleted, _ = HabitCompletion.objects.filter(habit=habit, date=day).delete()
        if deleted:
            self.recalculate_streaks(habit)
        return bool(deleted)

    def recalculate_streaks(self, habit: Habit):
        """Rebuilds current/longest streak from the completion log."""
        days = list(habit.completions.order_by('date').values_list('date', flat=True))

        longest = current = 0
        previous = None
        for d in days:
            current = current + 1 if previous and d - previous == timedelta(days=1) else 1
            longest = max(longest, current)
            previous = d

        habit.current_streak = current
        habit.longest_streak = longest
        habit.last_completed_date = previous
        habit.save()

    def completed_ids(self, habits, day: date) -> set:
        return set(HabitCompletion.objects.filter(
            habit__in=habits, date=day
        ).values_list('habit_id', flat=True))
