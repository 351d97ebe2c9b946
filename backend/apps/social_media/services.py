"""
Social media link management.
"""

import logging

from django.db import transaction

from apps.core.exceptions import NotFoundError, ValidationError
from apps.storage.services import storage_service
from .models import SocialMedia

logger = logging.getLogger(__name__)

UPLOAD_FOLDER = 'social-media'


class SocialMediaService:

    def list_active(self):
        return SocialMedia.objects.filter(is_active=True)

    def list_all(self):
        return SocialMedia.objects.all()

    def get(self, item_id: int) -> SocialMedia:
        try:
            return SocialMedia.objects.get(id=item_id)
        except SocialMedia.DoesNotExist:
            raise NotFoundError('社交媒体不存在')

    def _check_image(self, upload) -> None:
        if not (getattr(upload, 'content_type', '') or '').startswith('image/'):
            raise ValidationError('只能上传图片文件', code='INVALID_FILE_TYPE')

    def _store_images(self, uploads: dict) -> dict:
        """Check every upload first, then store them; {field: url}"""
        for upload in uploads.values():
            self._check_image(upload)
        urls = {}
        try:
            for field, upload in uploads.items():
                urls[field] = storage_service.upload_file(upload, UPLOAD_FOLDER)['url']
        except Exception:
            self._discard(urls.values())
            raise
        return urls

    def _discard(self, urls) -> None:
        for url in urls:
            storage_service.delete_file(url)

    def create(self, data: dict) -> SocialMedia:
        urls = self._store_images({'logo_url': data['logo'], 'qr_code_url': data['qrCode']})
        try:
            item = SocialMedia.objects.create(
                name=data['name'],
                sort_order=data.get('sortOrder', 0),
                is_active=data.get('isActive', True),
                **urls,
            )
        except Exception:
            self._discard(urls.values())
            raise
        logger.info(f'Created social media {item.id} ({item.name})')
        return item

    def update(self, item_id: int, data: dict) -> SocialMedia:
        """Uploaded files replace the URL fields; replaced files are removed"""
        item = self.get(item_id)
        uploads = {
            field: data[key]
            for field, key in (('logo_url', 'logo'), ('qr_code_url', 'qrCode'))
            if data.get(key)
        }
        urls = self._store_images(uploads)
        replaced = [getattr(item, field) for field in urls]

        for field, key in (('logo_url', 'logoUrl'), ('qr_code_url', 'qrCodeUrl')):
            if field in urls:
                setattr(item, field, urls[field])
            elif key in data:
                setattr(item, field, data[key])

        for field, key in (('name', 'name'), ('sort_order', 'sortOrder'), ('is_active', 'isActive')):
            if key in data:
                setattr(item, field, data[key])
        try:
            item.save()
        except Exception:
            self._discard(urls.values())
            raise

        self._discard(replaced)
        return item

    def delete(self, item_id: int) -> None:
        item = self.get(item_id)
        files = [item.logo_url, item.qr_code_url]
        item.delete()
        self._discard(files)
        logger.info(f'Deleted social media {item_id}')

    @transaction.atomic
    def sort(self, items) -> None:
        """Bulk-update sort_order from [{id, sortOrder}]"""
        for entry in items:
            SocialMedia.objects.filter(id=entry['id']).update(sort_order=entry['sortOrder'])


# Create singleton instance
social_media_service = SocialMediaService()
