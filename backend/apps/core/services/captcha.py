"""
Image captcha for the login form.

The answer lives in the cache for CAPTCHA_TTL seconds and is single-use.
"""

import base64
import logging
import random
import uuid

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

# Ambiguous glyphs (0/O, 1/l/I) are left out
CAPTCHA_CHARS = 'ABCDEFGHJKMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz23456789'
CAPTCHA_LENGTH = 4
CAPTCHA_WIDTH = 120
CAPTCHA_HEIGHT = 40
NOISE_LINES = 2


class CaptchaService:
    """
    Generates SVG captchas and verifies answers
    """

    key_prefix = 'captcha'

    def _key(self, captcha_id: str) -> str:
        return f'{self.key_prefix}:{captcha_id}'

    def random_text(self, length: int = CAPTCHA_LENGTH) -> str:
        return ''.join(random.choice(CAPTCHA_CHARS) for _ in range(length))

    def render_svg(self, text: str) -> str:
        """Draw the text with per-glyph jitter and a few noise lines"""
        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{CAPTCHA_WIDTH}" '
            f'height="{CAPTCHA_HEIGHT}" viewBox="0 0 {CAPTCHA_WIDTH} {CAPTCHA_HEIGHT}">',
            f'<rect width="100%" height="100%" fill="#f0f0f0"/>',
        ]

        for _ in range(NOISE_LINES):
            x1, y1 = random.randint(0, CAPTCHA_WIDTH // 3), random.randint(0, CAPTCHA_HEIGHT)
            x2, y2 = random.randint(2 * CAPTCHA_WIDTH // 3, CAPTCHA_WIDTH), random.randint(0, CAPTCHA_HEIGHT)
            color = f'#{random.randint(0, 0xFFFFFF):06x}'
            parts.append(f'<path d="M{x1} {y1} L{x2} {y2}" stroke="{color}" stroke-width="1" fill="none"/>')

        step = CAPTCHA_WIDTH / (len(text) + 1)
        for index, char in enumerate(text):
            x = int(step * (index + 1))
            y = random.randint(26, 32)
            angle = random.randint(-25, 25)
            color = f'#{random.randint(0, 0x999999):06x}'
            parts.append(
                f'<text x="{x}" y="{y}" fill="{color}" font-size="{random.randint(22, 28)}" '
                f'font-family="Arial, sans-serif" text-anchor="middle" '
                f'transform="rotate({angle} {x} {y})">{char}</text>'
            )

        parts.append('</svg>')
        return ''.join(parts)

    def generate(self) -> dict:
        """
        Create a new captcha

        Returns:
            Dict with captchaId and captchaImage (SVG data URI)
        """
        captcha_id = str(uuid.uuid4())
        text = self.random_text()
        cache.set(self._key(captcha_id), text.lower(), timeout=settings.CAPTCHA_TTL)

        svg = self.render_svg(text)
        encoded = base64.b64encode(svg.encode('utf-8')).decode('ascii')
        return {
            'captchaId': captcha_id,
            'captchaImage': f'data:image/svg+xml;base64,{encoded}',
        }

    def verify(self, captcha_id: str, answer: str) -> bool:
        """
        Check an answer; the stored captcha is consumed either way
        """
        if not captcha_id or not answer:
            return False

        key = self._key(captcha_id)
        expected = cache.get(key)
        cache.delete(key)

        if expected is None:
            logger.info(f'Captcha {captcha_id} missing or expired')
            return False

        return expected == answer.strip().lower()


# Create singleton instance
captcha_service = CaptchaService()
