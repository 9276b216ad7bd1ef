"""
Unit tests for the Consent Dismisser.
"""

from src.agents.consent import DIALOG_BUTTON_DESCRIPTOR, ConsentDismisser
from tests.fakes import FakeElement, FakeSession


def test_no_dialog_is_not_an_error():
    session = FakeSession()
    assert ConsentDismisser(settle_ms=0).dismiss(session) is False


def test_accepts_by_visible_text_skipping_hidden_buttons():
    hidden = FakeElement(text="Accept all", visible=False)
    shown = FakeElement(text="Accept all")
    session = FakeSession(elements={'button:text-is("Accept all")': [hidden, shown]})

    assert ConsentDismisser(settle_ms=5).dismiss(session) is True
    assert hidden.clicks == 0
    assert shown.clicks == 1
    assert session.waits == [5, 5]


def test_multilingual_phrase_matches():
    button = FakeElement(text="Alle accepteren")
    session = FakeSession(elements={'button:text-is("Alle accepteren")': [button]})

    assert ConsentDismisser(settle_ms=0).dismiss(session) is True
    assert button.clicks == 1


def test_falls_back_to_attribute_heuristics():
    button = FakeElement(attributes={"jsname": "b3VHJd"})
    session = FakeSession(elements={'button[jsname="b3VHJd"]': [button]})

    assert ConsentDismisser(settle_ms=0).dismiss(session) is True
    assert button.clicks == 1


def test_falls_back_to_dialog_button_text():
    settings_button = FakeElement(text="Cookie settings")
    ok_button = FakeElement(text="OK, got it")
    session = FakeSession(elements={DIALOG_BUTTON_DESCRIPTOR: [settings_button, ok_button]})

    assert ConsentDismisser(settle_ms=0).dismiss(session) is True
    assert settings_button.clicks == 0
    assert ok_button.clicks == 1


def test_click_failure_moves_on_to_next_candidate():
    broken = FakeElement(text="Accept all", click_error=RuntimeError("intercepted"))
    fallback = FakeElement(attributes={"id": "accept-btn"})
    session = FakeSession(elements={
        'button:text-is("Accept all")': [broken],
        'button[id*="accept"]': [fallback],
    })

    assert ConsentDismisser(settle_ms=0).dismiss(session) is True
    assert fallback.clicks == 1


def test_attempt_that_raises_does_not_stop_dismissal():
    button = FakeElement(text="Agree")
    session = FakeSession(elements={DIALOG_BUTTON_DESCRIPTOR: [button]})
    dismisser = ConsentDismisser(settle_ms=0)

    def exploding(_session):
        raise RuntimeError("boom")

    dismisser.attempts.insert(0, exploding)

    assert dismisser.dismiss(session) is True
    assert button.clicks == 1


class TextMatchingSession(FakeSession):
    """Resolves button text selectors against a flat list of page buttons."""

    def __init__(self, buttons):
        super().__init__()
        self.buttons = buttons

    def locate(self, descriptor):
        for prefix, matches in (
            ('button:has-text("', lambda text, phrase: phrase.lower() in text.lower()),
            ('button:text-is("', lambda text, phrase: text.strip() == phrase),
        ):
            if descriptor.startswith(prefix):
                phrase = descriptor[len(prefix):-2]
                return [b for b in self.buttons if matches(b.text, phrase)]
        return []


def test_button_merely_containing_accept_word_is_not_clicked():
    book = FakeElement(text="Book online")
    session = TextMatchingSession([book])

    assert ConsentDismisser(settle_ms=0).dismiss(session) is False
    assert book.clicks == 0


def test_exact_phrase_clicked_among_page_buttons():
    book = FakeElement(text="Book online")
    ok_button = FakeElement(text="OK")
    session = TextMatchingSession([book, ok_button])

    assert ConsentDismisser(settle_ms=0).dismiss(session) is True
    assert book.clicks == 0
    assert ok_button.clicks == 1
