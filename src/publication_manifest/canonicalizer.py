"""Structural canonicalization of a publication manifest.

The canonicalizer takes a freshly parsed manifest and returns a copy in
which every polymorphic value has one fixed shape:

1. a missing name is taken from the entry page's <title>;
2. missing inLanguage/inDirection are filled from the defaults;
3. inLanguage is checked against the language tag grammar;
4. a missing reading order defaults to the entry page;
5. array-valued terms are wrapped into arrays;
6. bare-string contributors become Person objects;
7. bare-string links become link objects;
8. bare strings of localizable terms become value/language objects;
9. URL-valued terms are resolved against the base URL;
10. the profile's extension hook, if any, runs last.

Each step assumes the shapes produced by the previous ones. Steps 5, 8 and
9 apply at the top level and inside every contributor and link object.
"""

import copy
import logging
from collections.abc import Callable
from typing import Any

from schemas.entry_page import EntryPage

from .diagnostics import Diagnostics
from .profiles import CORE_PROFILE, Profile
from .utils import absolutize, is_language_tag

logger = logging.getLogger(__name__)


def canonicalize(
    diagnostics: Diagnostics,
    manifest: dict[str, Any],
    base: str,
    entry_page: EntryPage | None = None,
    language: str = "",
    direction: str = "",
    profile: Profile = CORE_PROFILE,
) -> dict[str, Any]:
    """Canonicalize a manifest.

    The input is never modified. Failures are recorded in ``diagnostics``
    and never raised; on an unexpected error the partially canonicalized
    manifest is returned.

    Args:
        diagnostics: Log receiving warnings and errors
        manifest: The manifest object, as parsed from JSON
        base: Base URL for relative references
        entry_page: The primary entry page, if the manifest was found through one
        language: Default language (e.g., from an embedding <script>)
        direction: Default base direction
        profile: Term classification to apply

    Returns:
        The canonical manifest
    """
    canonical: dict[str, Any] = {}
    default_language = ""

    def map_objects(terms: tuple[str, ...], func: Callable[[Any], Any]) -> None:
        # Values of these terms are arrays by virtue of step 5
        for term in terms:
            if isinstance(canonical.get(term), list):
                canonical[term] = [func(item) for item in canonical[term]]

    def on_dicts(func: Callable[[dict], dict]) -> Callable[[Any], Any]:
        return lambda item: func(item) if isinstance(item, dict) else item

    def localize(value: Any) -> Any:
        if not isinstance(value, str):
            return value
        localized = {"value": value}
        if default_language:
            localized["language"] = default_language
        return localized

    def convert_to_arrays(obj: dict) -> dict:
        for term in profile.array_values:
            if obj.get(term) and not isinstance(obj[term], list):
                obj[term] = [obj[term]]
        return obj

    def localize_text_values(obj: dict) -> dict:
        for term in profile.local_string_values:
            if obj.get(term):
                if isinstance(obj[term], list):
                    obj[term] = [localize(item) for item in obj[term]]
                else:
                    obj[term] = localize(obj[term])
        return obj

    def absolutize_urls(obj: dict) -> dict:
        for term in profile.url_values:
            if obj.get(term):
                if isinstance(obj[term], list):
                    obj[term] = [absolutize(item, base) for item in obj[term]]
                else:
                    obj[term] = absolutize(obj[term], base)
        return obj

    def contributor_object(item: Any) -> Any:
        if isinstance(item, str):
            return {"type": ["Person"], "name": [item]}
        return item

    def link_object(item: Any) -> Any:
        if isinstance(item, str):
            return {"type": ["LinkedResource"], "url": item}
        return item

    try:
        canonical = copy.deepcopy(manifest)

        # Step 1: title of the entry page
        if not canonical.get("name") and entry_page is not None and entry_page.title:
            if entry_page.title_language:
                canonical["name"] = {
                    "value": entry_page.title,
                    "language": entry_page.title_language,
                }
            else:
                canonical["name"] = entry_page.title

        # Step 2: language and base direction
        if language and not canonical.get("inLanguage"):
            canonical["inLanguage"] = language
        if direction and not canonical.get("inDirection"):
            canonical["inDirection"] = direction

        # Step 3: the default language for all localizable strings
        if canonical.get("inLanguage"):
            if diagnostics.warning(
                is_language_tag(canonical["inLanguage"]),
                f'"{canonical["inLanguage"]}" is not a valid language tag',
            ):
                default_language = canonical["inLanguage"]
            else:
                del canonical["inLanguage"]

        # Step 4: default reading order
        if not canonical.get("readingOrder") and entry_page is not None:
            canonical["readingOrder"] = {
                "type": ["LinkedResource"],
                "url": entry_page.url,
            }

        # Step 5: arrays
        convert_to_arrays(canonical)
        map_objects(profile.object_values, on_dicts(convert_to_arrays))

        # Step 6: contributors are objects
        map_objects(profile.entity_values, contributor_object)

        # Step 7: links are objects
        map_objects(profile.link_values, link_object)

        # Step 8: localizable strings
        localize_text_values(canonical)
        map_objects(profile.object_values, on_dicts(localize_text_values))

        # Step 9: absolute URLs
        absolutize_urls(canonical)
        map_objects(profile.object_values, on_dicts(absolutize_urls))

    except Exception as e:
        logger.error(f"Canonicalization failed: {e}")
        diagnostics.error(False, f"Canonicalization failed: {e}")
        return canonical

    # Step 10: profile specific canonicalization
    if profile.extension is not None:
        try:
            canonical = profile.extension(
                canonical, base, entry_page, default_language, direction
            )
        except Exception as e:
            logger.warning(f"Profile {profile.name} extension failed: {e}")
            diagnostics.warning(False, f"Profile {profile.name} extension failed: {e}")

    return canonical
