from django.conf import settings
from django.db import models


class WorkSchedule(models.Model):
    store = models.ForeignKey(
        'stores.Store', on_delete=models.CASCADE, related_name='schedules')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='schedules')
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    memo = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['start_time']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F('start_time')),
                name='schedule_ends_after_start'),
        ]

    def __str__(self):
        return f"{self.user} {self.start_time:%m/%d %H:%M}-{self.end_time:%H:%M}"


class WorkLog(models.Model):
    STATUS_CHOICES = [
        ('working', 'Working'),
        ('completed', 'Completed'),
    ]

    store = models.ForeignKey(
        'stores.Store', on_delete=models.CASCADE, related_name='work_logs')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='work_logs')
    clock_in = models.DateTimeField()
    clock_out = models.DateTimeField(null=True, blank=True)
    # Hourly wage at clock-in; later wage changes do not touch old logs
    wage_snapshot = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default='working')

    class Meta:
        ordering = ['-clock_in']
        indexes = [
            models.Index(fields=['store', 'clock_in']),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['store', 'user'],
                condition=models.Q(clock_out__isnull=True),
                name='one_open_work_log_per_member'),
        ]

    def __str__(self):
        return f"{self.user} @ {self.store} {self.clock_in:%Y-%m-%d %H:%M} ({self.status})"

    @property
    def hours(self):
        if not self.clock_out:
            return 0
        return (self.clock_out - self.clock_in).total_seconds() / 3600
