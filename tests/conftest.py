"""Pytest configuration and fixtures."""

import pytest

from nvc_bundle.constants import (
    DISEASE_EXTENSION_URL,
    MAH_EXTENSION_URL,
    NAMING_SYSTEM_URL,
)


def _designation(language: str, value: str) -> dict:
    return {
        "language": language,
        "use": {"system": NAMING_SYSTEM_URL, "code": f"{language}DisplayTerm"},
        "value": value,
    }


def _coded_extension(url: str, code: str, display: str) -> dict:
    return {
        "url": url,
        "valueCodeableConcept": {
            "coding": [
                {
                    "system": "https://nvc-cnv.canada.ca/v1/CodeSystem/NVC",
                    "code": code,
                    "display": display,
                }
            ]
        },
    }


def _value_set(value_set_id: str, concepts: list[dict]) -> dict:
    return {
        "fullUrl": f"https://nvc-cnv.canada.ca/v1/ValueSet/{value_set_id}",
        "resource": {
            "resourceType": "ValueSet",
            "id": value_set_id,
            "meta": {"versionId": "7", "lastUpdated": "2024-05-01T00:00:00Z"},
            "status": "active",
            "compose": {
                "include": [
                    {
                        "system": "https://nvc-cnv.canada.ca/v1/CodeSystem/NVC",
                        "version": "7",
                        "concept": concepts,
                    }
                ]
            },
        },
    }


@pytest.fixture
def sample_bundle() -> dict:
    """Small NVC bundle: two vaccine value sets, Disease and MAH value sets."""
    return {
        "resourceType": "Bundle",
        "id": "NVC",
        "type": "collection",
        "meta": {"versionId": "42", "lastUpdated": "2024-05-01T00:00:00Z"},
        "entry": [
            _value_set(
                "Generic",
                [
                    {
                        "code": "V001",
                        "display": "Vaccine A",
                        "designation": [_designation("en", "Vaccine Alpha")],
                    },
                    {
                        "code": "V002",
                        "display": "MMR vaccine",
                        "designation": [
                            _designation("en", "MMR"),
                            _designation("fr", "RRO"),
                        ],
                        "extension": [
                            {
                                "url": "https://nvc-cnv.canada.ca/v1/StructureDefinition/nvc-vaccine-info",
                                "extension": [
                                    _coded_extension(DISEASE_EXTENSION_URL, "D1", "Measles"),
                                    _coded_extension(DISEASE_EXTENSION_URL, "D2", "Mumps"),
                                ],
                            },
                            _coded_extension(MAH_EXTENSION_URL, "M1", "Merck raw"),
                        ],
                    },
                ],
            ),
            _value_set(
                "Tradename",
                [
                    {
                        "code": "T001",
                        "display": "M-M-R II",
                        "extension": [
                            _coded_extension(DISEASE_EXTENSION_URL, "D1", "Measles"),
                            _coded_extension(MAH_EXTENSION_URL, "M2", "Unknown Pharma"),
                        ],
                    }
                ],
            ),
            _value_set(
                "Disease",
                [
                    {
                        "code": "D1",
                        "display": "Measles",
                        "designation": [
                            _designation("en", "Measles"),
                            _designation("fr", "Rougeole"),
                        ],
                    },
                    {
                        "code": "D2",
                        "display": "Mumps",
                        "designation": [
                            _designation("en", "Mumps"),
                            _designation("fr", "Oreillons"),
                        ],
                    },
                ],
            ),
            _value_set(
                "MarketAuthorizationHolder",
                [
                    {
                        "code": "M1",
                        "display": "Merck Canada Inc.",
                        "designation": [
                            _designation("en", "Merck Canada Inc."),
                            _designation("fr", "Merck Canada Inc. (FR)"),
                        ],
                    }
                ],
            ),
        ],
    }


@pytest.fixture
def bundle_without_mah(sample_bundle: dict) -> dict:
    """The sample bundle with the MarketAuthorizationHolder value set removed."""
    sample_bundle["entry"] = [
        entry
        for entry in sample_bundle["entry"]
        if entry["resource"]["id"] != "MarketAuthorizationHolder"
    ]
    return sample_bundle
