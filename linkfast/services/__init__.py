from linkfast.services.shortcode_generator import ShortcodeGenerator
from linkfast.services.click_tracker import ClickTracker
from linkfast.services.shorten_service import ShortenService
from linkfast.services.redirect_service import RedirectService


__all__ = [
    'ShortcodeGenerator',
    'ClickTracker',
    'ShortenService',
    'RedirectService',
]
