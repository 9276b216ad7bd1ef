"""
Consent Dismisser.

Best-effort removal of cookie/consent interstitials that block the review
listing. Tries a fixed list of dismissal attempts in order; a page without
a consent dialog is the normal case, not an error.
"""

import logging
import re
from typing import Callable, List

import config.settings as settings
from src.utils.renderer import ElementHandle, RenderingSession

logger = logging.getLogger(__name__)

# Visible button texts, most specific first
ACCEPT_PHRASES = [
    "Accept all",
    "Alle accepteren",
    "Alles accepteren",
    "Alle akzeptieren",
    "Tout accepter",
    "Aceptar todo",
    "Accetta tutto",
    "I agree",
    "Akkoord",
    "Accept",
    "Agree",
    "OK",
    "Got it",
]

ACCEPT_ATTRIBUTE_DESCRIPTORS = [
    'button[id*="accept"]',
    'button[aria-label*="Accept"]',
    'button[aria-label*="accept"]',
    'button[data-value="accept"]',
    '[data-value="accept"]',
    'button[jsname="b3VHJd"]',  # Google consent page "Accept all"
    'button[jsname*="accept"]',
]

DIALOG_BUTTON_DESCRIPTOR = 'div[role="dialog"] button, div[class*="dialog"] button, div[class*="cookie"] button'

_ACCEPT_WORDS = re.compile(r"accept|agree|akkoord|\bok\b", re.IGNORECASE)


class ConsentDismisser:
    """
    Clicks through a cookie consent dialog if one is showing.

    Attempts, in order:
    1. Button whose visible text is exactly a known accept phrase
    2. Button with an accept-like id / aria-label / vendor marker
    3. Any button inside a dialog-like container whose text says accept/agree/ok
    """

    def __init__(self, settle_ms: int = settings.CONSENT_SETTLE_MS):
        """
        Args:
            settle_ms: Delay before looking for the dialog and after clicking it
        """
        self.settle_ms = settle_ms
        self.attempts: List[Callable[[RenderingSession], bool]] = [
            self._accept_by_text,
            self._accept_by_attribute,
            self._accept_in_dialog,
        ]

    def dismiss(self, session: RenderingSession) -> bool:
        """
        Try each dismissal attempt until one clicks something.

        Returns:
            True if a consent button was clicked
        """
        session.wait(self.settle_ms)

        for attempt in self.attempts:
            try:
                if attempt(session):
                    session.wait(self.settle_ms)
                    logger.info("Cookie consent accepted")
                    return True
            except Exception as e:
                logger.debug(f"Consent attempt {attempt.__name__} failed: {e}")

        logger.info("No cookie consent dialog found or could not click it - continuing anyway")
        return False

    def _click_first_visible(self, buttons: List[ElementHandle], label: str) -> bool:
        for button in buttons:
            try:
                if button.is_visible():
                    button.click()
                    logger.debug(f"Clicked consent button via {label}")
                    return True
            except Exception as e:
                logger.debug(f"Could not click consent button via {label}: {e}")
        return False

    def _accept_by_text(self, session: RenderingSession) -> bool:
        for phrase in ACCEPT_PHRASES:
            buttons = session.locate(f'button:text-is("{phrase}")')
            if self._click_first_visible(buttons, f"text {phrase!r}"):
                return True
        return False

    def _accept_by_attribute(self, session: RenderingSession) -> bool:
        for descriptor in ACCEPT_ATTRIBUTE_DESCRIPTORS:
            if self._click_first_visible(session.locate(descriptor), descriptor):
                return True
        return False

    def _accept_in_dialog(self, session: RenderingSession) -> bool:
        for button in session.locate(DIALOG_BUTTON_DESCRIPTOR):
            try:
                text = button.read_visible_text() or ""
            except Exception as e:
                logger.debug(f"Could not read dialog button text: {e}")
                continue
            if _ACCEPT_WORDS.search(text) and self._click_first_visible([button], f"dialog text {text!r}"):
                return True
        return False
