"""
AI platform and model management.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from apps.core.exceptions import ConflictError, NotFoundError
from .models import AIPlatform, AIModel

logger = logging.getLogger(__name__)


class AIPlatformService:
    """
    CRUD over platforms and their models
    """

    def list_platforms(self, platform_type: str = None):
        queryset = AIPlatform.objects.prefetch_related('models')
        if platform_type:
            queryset = queryset.filter(type=platform_type)
        return queryset

    def get_platform(self, platform_id: int) -> AIPlatform:
        """
        Raises:
            NotFoundError: no such platform
        """
        try:
            return AIPlatform.objects.prefetch_related('models').get(id=platform_id)
        except AIPlatform.DoesNotExist:
            raise NotFoundError('AI平台不存在')

    def create_platform(self, data: dict) -> AIPlatform:
        if AIPlatform.objects.filter(name=data['name']).exists():
            raise ConflictError('平台名称已存在')
        platform = AIPlatform.objects.create(
            name=data['name'],
            type=data['type'],
            logo_url=data.get('logoUrl') or '',
        )
        logger.info(f'Created AI platform {platform.id} ({platform.name})')
        return platform

    def update_platform(self, platform_id: int, data: dict) -> AIPlatform:
        platform = self.get_platform(platform_id)
        if 'name' in data and data['name'] != platform.name:
            if AIPlatform.objects.filter(name=data['name']).exclude(id=platform.id).exists():
                raise ConflictError('平台名称已存在')
            platform.name = data['name']
        if 'type' in data:
            platform.type = data['type']
        if 'logoUrl' in data:
            platform.logo_url = data['logoUrl'] or ''
        platform.save()
        return platform

    def delete_platform(self, platform_id: int) -> None:
        """
        Raises:
            ConflictError: posts still reference the platform
        """
        platform = self.get_platform(platform_id)
        try:
            platform.delete()
        except ProtectedError:
            raise ConflictError('该平台下还有作品，无法删除', code='PLATFORM_IN_USE')
        logger.info(f'Deleted AI platform {platform_id}')

    def list_models(self, platform_id: int):
        return self.get_platform(platform_id).models.all()

    def create_model(self, platform_id: int, name: str) -> AIModel:
        platform = self.get_platform(platform_id)
        try:
            with transaction.atomic():
                return AIModel.objects.create(platform=platform, name=name)
        except IntegrityError:
            raise ConflictError('该平台下已存在同名模型')

    def get_model(self, model_id: int) -> AIModel:
        try:
            return AIModel.objects.select_related('platform').get(id=model_id)
        except AIModel.DoesNotExist:
            raise NotFoundError('模型不存在')

    def update_model(self, model_id: int, name: str) -> AIModel:
        model = self.get_model(model_id)
        if AIModel.objects.filter(platform_id=model.platform_id, name=name).exclude(id=model.id).exists():
            raise ConflictError('该平台下已存在同名模型')
        model.name = name
        model.save(update_fields=['name'])
        return model

    def delete_model(self, model_id: int) -> None:
        self.get_model(model_id).delete()


# Create singleton instance
ai_platform_service = AIPlatformService()
