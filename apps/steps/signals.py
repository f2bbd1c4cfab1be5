# apps/steps/signals.py
from django.db.models import Count, Q
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver
from .models import DailyStep


@receiver(post_save, sender=DailyStep)
@receiver(post_delete, sender=DailyStep)
def update_goal_progress(sender, instance, **kwargs):
    """Goals measured by steps take their progress from completed steps."""
    if not instance.goal_id:
        return

    from apps.goals.models import Goal

    goal = Goal.objects.filter(pk=instance.goal_id).first()
    if goal is None or goal.progress_type != Goal.ProgressTypeChoices.STEPS:
        return

    # Templates are not to-dos, only their instances count
    stats = DailyStep.objects.filter(goal_id=goal.id, frequency__isnull=True).aggregate(
        total=Count('id'),
        done=Count('id', filter=Q(completed=True))
    )

    total = stats['total']
    new_progress = int((stats['done'] / total) * 100) if total > 0 else 0

    if goal.progress_percentage != new_progress:
        Goal.objects.filter(pk=goal.pk).update(progress_percentage=new_progress)
