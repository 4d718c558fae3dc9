"""Controlled vocabularies for the accessibility properties.

The terms follow the schema.org accessibility vocabularies.
"""

from typing import Any

from ..diagnostics import Diagnostics
from ..utils import as_list

ACCESS_MODE_TERMS = (
    "auditory",
    "tactile",
    "textual",
    "visual",
    "colorDependent",
    "chartOnVisual",
    "chemOnVisual",
    "diagramOnVisual",
    "mathOnVisual",
    "musicOnVisual",
    "textOnVisual",
)

ACCESS_MODE_SUFFICIENT_TERMS = ("auditory", "tactile", "textual", "visual")

ACCESSIBILITY_API_TERMS = (
    "AndroidAccessibility",
    "ARIA",
    "ATK",
    "AT-SPI",
    "BlackberryAccessibility",
    "iAccessible2",
    "iOSAccessibility",
    "JavaAccessibility",
    "MacOSXAccessibility",
    "MSAA",
    "UIAutomation",
)

ACCESSIBILITY_CONTROL_TERMS = (
    "fullKeyboardControl",
    "fullMouseControl",
    "fullSwitchControl",
    "fullTouchControl",
    "fullVideoControl",
    "fullVoiceControl",
)

ACCESSIBILITY_FEATURE_TERMS = (
    "alternativeText",
    "annotations",
    "audioDescription",
    "bookmarks",
    "braille",
    "captions",
    "ChemML",
    "describedMath",
    "displayTransformability",
    "highContrastAudio",
    "highContrastDisplay",
    "index",
    "largePrint",
    "latex",
    "longDescription",
    "MathML",
    "none",
    "printPageNumbers",
    "readingOrder",
    "rubyAnnotations",
    "signLanguage",
    "structuralNavigation",
    "synchronizedAudioText",
    "tableOfContents",
    "taggedPDF",
    "tactileGraphic",
    "tactileObject",
    "timingControl",
    "transcript",
    "ttsMarkup",
    "unlocked",
)

ACCESSIBILITY_HAZARD_TERMS = (
    "flashing",
    "noFlashingHazard",
    "motionSimulation",
    "noMotionSimulationHazard",
    "sound",
    "noSoundHazard",
    "unknown",
    "none",
)

# Manifest term -> allowed values
VOCABULARIES: dict[str, tuple[str, ...]] = {
    "accessMode": ACCESS_MODE_TERMS,
    "accessModeSufficient": ACCESS_MODE_SUFFICIENT_TERMS,
    "accessibilityAPI": ACCESSIBILITY_API_TERMS,
    "accessibilityControl": ACCESSIBILITY_CONTROL_TERMS,
    "accessibilityFeature": ACCESSIBILITY_FEATURE_TERMS,
    "accessibilityHazard": ACCESSIBILITY_HAZARD_TERMS,
}


def filter_terms(
    diagnostics: Diagnostics, term: str, allowed: tuple[str, ...], values: Any
) -> list[str] | None:
    """Keep the values that belong to a controlled vocabulary.

    Every rejected value is reported with one warning.

    Args:
        diagnostics: Log receiving the warnings
        term: Manifest term being checked, used in the messages
        allowed: The controlled vocabulary
        values: A single value or an array of values

    Returns:
        The accepted values in input order, or None if none are accepted
    """
    accepted = [
        item
        for item in as_list(values)
        if diagnostics.warning(item in allowed, f'"{item}" is not a valid term for {term}')
    ]
    return accepted or None
