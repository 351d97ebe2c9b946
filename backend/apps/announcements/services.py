"""
Announcement service: live pop-ups for visitors and admin management.
"""

import logging

from django.db.models import Count, Q
from django.utils import timezone

from apps.core.exceptions import NotFoundError, ValidationError
from .models import Announcement, AnnouncementView

logger = logging.getLogger(__name__)

MAX_ACTIVE = 3

FIELDS = (
    ('title', 'title'),
    ('content', 'content'),
    ('image_url', 'imageUrl'),
    ('summary', 'summary'),
    ('link_url', 'linkUrl'),
    ('show_image', 'showImage'),
    ('show_summary', 'showSummary'),
    ('show_link', 'showLink'),
    ('start_date', 'startDate'),
    ('end_date', 'endDate'),
    ('is_active', 'isActive'),
    ('priority', 'priority'),
)


def live_filter(now) -> Q:
    return Q(is_active=True, start_date__lte=now, end_date__gte=now)


class AnnouncementService:
    """
    Announcements and per-day dismissals
    """

    def active_announcements(self, user=None) -> list[Announcement]:
        """
        Up to three live announcements by priority; for a logged-in user,
        those already viewed today are left out
        """
        queryset = Announcement.objects.filter(live_filter(timezone.now()))
        if user and user.is_authenticated:
            viewed = AnnouncementView.objects.filter(
                user=user,
                view_date=timezone.localdate(),
            ).values('announcement_id')
            queryset = queryset.exclude(id__in=viewed)
        return list(queryset.order_by('-priority', '-created_at', '-id')[:MAX_ACTIVE])

    def mark_viewed(self, user, announcement_id: int) -> None:
        """
        Raises:
            NotFoundError: unknown announcement
        """
        if not Announcement.objects.filter(id=announcement_id).exists():
            raise NotFoundError('公告不存在')
        AnnouncementView.objects.get_or_create(
            user=user,
            announcement_id=announcement_id,
            view_date=timezone.localdate(),
        )

    def get_public(self, announcement_id: int) -> Announcement:
        try:
            return Announcement.objects.get(id=announcement_id)
        except Announcement.DoesNotExist:
            raise NotFoundError('公告不存在')

    # Admin

    def get_announcement(self, announcement_id: int) -> Announcement:
        try:
            return Announcement.objects.annotate(view_count=Count('views')).get(id=announcement_id)
        except Announcement.DoesNotExist:
            raise NotFoundError(f'ID为{announcement_id}的公告不存在')

    def list_announcements(self, filters: dict):
        queryset = Announcement.objects.annotate(view_count=Count('views'))
        search = (filters.get('search') or '').strip()
        if search:
            queryset = queryset.filter(Q(title__icontains=search) | Q(summary__icontains=search))
        if filters.get('isActive') is not None:
            queryset = queryset.filter(is_active=filters['isActive'])
        return queryset.order_by('-priority', '-created_at', '-id')

    def _check_dates(self, start_date, end_date) -> None:
        if start_date and end_date and end_date < start_date:
            raise ValidationError('结束时间不能早于开始时间')

    def create_announcement(self, data: dict) -> Announcement:
        self._check_dates(data['startDate'], data['endDate'])
        announcement = Announcement.objects.create(
            **{field: data[key] for field, key in FIELDS if key in data}
        )
        logger.info(f'Announcement {announcement.id} created')
        return self.get_announcement(announcement.id)

    def update_announcement(self, announcement_id: int, data: dict) -> Announcement:
        announcement = self.get_announcement(announcement_id)
        for field, key in FIELDS:
            if key in data:
                setattr(announcement, field, data[key])
        self._check_dates(announcement.start_date, announcement.end_date)
        announcement.save()
        return self.get_announcement(announcement.id)

    def delete_announcement(self, announcement_id: int) -> None:
        self.get_announcement(announcement_id).delete()
        logger.info(f'Announcement {announcement_id} deleted')

    def stats(self) -> dict:
        now = timezone.now()
        return {
            'totalAnnouncements': Announcement.objects.count(),
            'activeAnnouncements': Announcement.objects.filter(live_filter(now)).count(),
            'expiredAnnouncements': Announcement.objects.filter(end_date__lt=now).count(),
            'scheduledAnnouncements': Announcement.objects.filter(is_active=True, start_date__gt=now).count(),
        }


# Create singleton instance
announcement_service = AnnouncementService()
