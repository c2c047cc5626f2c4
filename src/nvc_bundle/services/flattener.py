"""
Flattens the NVC Bundle into a lookup table keyed by vaccine code.

Only concepts of the vaccine value sets (Generic, Tradename,
AntigenIgAntitoxin) become records. With no languages the record keeps the
raw shape::

    {"displayName": ..., "disease": [{code: display}], "MAH": [{code: display}]}

where ``disease`` / ``MAH`` are omitted when empty. With languages, each
language adds ``display<LANG>``, ``disease<LANG>`` (always present, one
``{code: name}`` entry per referenced disease) and ``MAH<LANG>`` (only when a
MAH extension resolved and the MAH lookup is not empty).

A code seen again in a later value set replaces the earlier record.
"""

import logging
from typing import Any

from nvc_bundle.constants import (
    DISEASE_EXTENSION_URL,
    MAH_EXTENSION_URL,
    NAMING_SYSTEM_URL,
    VACCINE_VALUE_SETS,
)
from nvc_bundle.helpers.designation_helpers import select_display
from nvc_bundle.models.model_nvc import Bundle, Concept
from nvc_bundle.services.extensions import get_extension_values
from nvc_bundle.services.lookups import NameLookup

logger = logging.getLogger(__name__)

LookupTable = dict[str, dict[str, Any]]


def is_vaccine_value_set(value_set_id: str) -> bool:
    return value_set_id in VACCINE_VALUE_SETS


def _raw_record(concept: Concept) -> dict[str, Any]:
    record: dict[str, Any] = {"displayName": concept.display}
    disease = get_extension_values(concept, DISEASE_EXTENSION_URL)
    mah = get_extension_values(concept, MAH_EXTENSION_URL)
    if disease:
        record["disease"] = disease
    if mah:
        record["MAH"] = mah
    return record


def _localized_record(
    concept: Concept,
    languages: tuple[str, ...],
    disease_lookup: NameLookup,
    mah_lookup: NameLookup,
    naming_system: str,
) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for lang in languages:
        record[f"display{lang.upper()}"] = select_display(concept, lang, naming_system)

    disease = get_extension_values(concept, DISEASE_EXTENSION_URL)
    disease_codes = list(disease[0]) if disease else []
    for lang in languages:
        record[f"disease{lang.upper()}"] = [
            {code: disease_lookup.get(code, {}).get(lang) or code}
            for code in disease_codes
        ]

    mah = get_extension_values(concept, MAH_EXTENSION_URL)
    if mah and mah_lookup:
        mah_code, mah_display = next(iter(mah[0].items()))
        names = mah_lookup.get(mah_code, {})
        for lang in languages:
            record[f"MAH{lang.upper()}"] = names.get(lang) or mah_display

    return record


def flatten_bundle(
    bundle: Bundle,
    languages: tuple[str, ...] = (),
    disease_lookup: NameLookup | None = None,
    mah_lookup: NameLookup | None = None,
    naming_system: str = NAMING_SYSTEM_URL,
) -> LookupTable:
    """Build the vaccine lookup table from *bundle*."""
    disease_lookup = disease_lookup or {}
    mah_lookup = mah_lookup or {}
    table: LookupTable = {}

    for value_set in bundle.value_sets():
        if not is_vaccine_value_set(value_set.id):
            continue
        for concept in value_set.concepts():
            if concept.code is None:
                logger.debug("Skipping concept without a code in '%s'", value_set.id)
                continue
            if languages:
                record = _localized_record(
                    concept, languages, disease_lookup, mah_lookup, naming_system
                )
            else:
                record = _raw_record(concept)
            table[concept.code] = record

    logger.info("Flattened %d vaccine concepts", len(table))
    return table
