"""
Core services module.
"""

from .captcha import captcha_service, CaptchaService

__all__ = [
    'captcha_service',
    'CaptchaService',
]
