"""Unit tests for flatten_bundle."""

from nvc_bundle.constants import DISEASE_EXTENSION_URL, MAH_EXTENSION_URL, NAMING_SYSTEM_URL
from nvc_bundle.models.model_nvc import Bundle
from nvc_bundle.services.flattener import flatten_bundle, is_vaccine_value_set
from nvc_bundle.utils.json_files import dump_json

DISEASE_LOOKUP = {
    "D1": {"en": "Measles", "fr": "Rougeole"},
    "D2": {"en": "Mumps", "fr": "Oreillons"},
}
MAH_LOOKUP = {"M1": {"en": "Merck Canada Inc.", "fr": "Merck Canada Inc. (FR)"}}


def _bundle(entries: list[tuple[str, list[dict]]]) -> Bundle:
    return Bundle.model_validate(
        {
            "meta": {"versionId": "1"},
            "entry": [
                {"resource": {"id": vs_id, "compose": {"include": [{"concept": concepts}]}}}
                for vs_id, concepts in entries
            ],
        }
    )


def _coded(url: str, code: str, display: str) -> dict:
    return {"url": url, "valueCodeableConcept": {"coding": [{"code": code, "display": display}]}}


def test_is_vaccine_value_set():
    assert is_vaccine_value_set("Generic")
    assert is_vaccine_value_set("Tradename")
    assert is_vaccine_value_set("AntigenIgAntitoxin")
    assert not is_vaccine_value_set("Disease")
    assert not is_vaccine_value_set("MarketAuthorizationHolder")
    assert not is_vaccine_value_set("generic")


def test_french_falls_back_to_raw_display():
    bundle = _bundle(
        [
            (
                "Generic",
                [
                    {
                        "code": "V001",
                        "display": "Vaccine A",
                        "designation": [
                            {
                                "language": "en",
                                "use": {"code": "enDisplayTerm", "system": NAMING_SYSTEM_URL},
                                "value": "Vaccine Alpha",
                            }
                        ],
                    }
                ],
            )
        ]
    )

    table = flatten_bundle(bundle, ("en", "fr"))

    assert table == {
        "V001": {
            "displayEN": "Vaccine Alpha",
            "displayFR": "Vaccine A",
            "diseaseEN": [],
            "diseaseFR": [],
        }
    }


def test_disease_codes_translated_through_lookup():
    bundle = _bundle(
        [("Generic", [{"code": "V1", "display": "V", "extension": [_coded(DISEASE_EXTENSION_URL, "D1", "x")]}])]
    )

    record = flatten_bundle(bundle, ("en", "fr"), disease_lookup=DISEASE_LOOKUP)["V1"]

    assert record["diseaseEN"] == [{"D1": "Measles"}]
    assert record["diseaseFR"] == [{"D1": "Rougeole"}]


def test_unknown_disease_code_falls_back_to_code():
    bundle = _bundle(
        [("Generic", [{"code": "V1", "display": "V", "extension": [_coded(DISEASE_EXTENSION_URL, "D404", "Lost")]}])]
    )

    record = flatten_bundle(bundle, ("en", "fr"), disease_lookup=DISEASE_LOOKUP)["V1"]

    assert record["diseaseEN"] == [{"D404": "D404"}]
    assert record["diseaseFR"] == [{"D404": "D404"}]


def test_bilingual_sample_bundle(sample_bundle):
    table = flatten_bundle(
        Bundle.model_validate(sample_bundle),
        ("en", "fr"),
        disease_lookup=DISEASE_LOOKUP,
        mah_lookup=MAH_LOOKUP,
    )

    assert table["V002"] == {
        "displayEN": "MMR",
        "displayFR": "RRO",
        "diseaseEN": [{"D1": "Measles"}, {"D2": "Mumps"}],
        "diseaseFR": [{"D1": "Rougeole"}, {"D2": "Oreillons"}],
        "MAHEN": "Merck Canada Inc.",
        "MAHFR": "Merck Canada Inc. (FR)",
    }
    # M2 is not in the MAH lookup: the extension's own display is used
    assert table["T001"]["MAHEN"] == "Unknown Pharma"
    assert table["T001"]["MAHFR"] == "Unknown Pharma"
    assert "MAHEN" not in table["V001"]


def test_every_vaccine_concept_has_a_record(sample_bundle):
    table = flatten_bundle(Bundle.model_validate(sample_bundle), ("en", "fr"))

    assert set(table) == {"V001", "V002", "T001"}


def test_disease_and_mah_concepts_are_not_records(sample_bundle):
    table = flatten_bundle(Bundle.model_validate(sample_bundle), ("en", "fr"))

    assert "D1" not in table
    assert "D2" not in table
    assert "M1" not in table


def test_mah_fields_omitted_without_mah_lookup(bundle_without_mah):
    table = flatten_bundle(
        Bundle.model_validate(bundle_without_mah),
        ("en", "fr"),
        disease_lookup=DISEASE_LOOKUP,
        mah_lookup={},
    )

    for record in table.values():
        assert "MAHEN" not in record
        assert "MAHFR" not in record


def test_raw_shape_without_languages(sample_bundle):
    table = flatten_bundle(Bundle.model_validate(sample_bundle))

    assert table["V001"] == {"displayName": "Vaccine A"}
    assert table["V002"] == {
        "displayName": "MMR vaccine",
        "disease": [{"D1": "Measles", "D2": "Mumps"}],
        "MAH": [{"M1": "Merck raw"}],
    }
    assert table["T001"] == {
        "displayName": "M-M-R II",
        "disease": [{"D1": "Measles"}],
        "MAH": [{"M2": "Unknown Pharma"}],
    }


def test_single_language_profile():
    bundle = _bundle([("Generic", [{"code": "V1", "display": "Vaccine"}])])

    assert flatten_bundle(bundle, ("en",)) == {"V1": {"displayEN": "Vaccine", "diseaseEN": []}}


def test_repeated_code_later_value_set_wins():
    bundle = _bundle(
        [
            ("Generic", [{"code": "X1", "display": "From Generic", "extension": [_coded(MAH_EXTENSION_URL, "M1", "m")]}]),
            ("Tradename", [{"code": "X1", "display": "From Tradename"}]),
        ]
    )

    table = flatten_bundle(bundle)

    assert table == {"X1": {"displayName": "From Tradename"}}


def test_concept_without_code_is_skipped():
    bundle = _bundle([("Generic", [{"display": "No code"}, {"code": "V1", "display": "Ok"}])])

    assert list(flatten_bundle(bundle)) == ["V1"]


def test_value_set_without_compose_is_skipped():
    bundle = Bundle.model_validate(
        {"meta": {"versionId": "1"}, "entry": [{"resource": {"id": "Generic"}}, {"fullUrl": "x"}]}
    )

    assert flatten_bundle(bundle, ("en", "fr")) == {}


def test_flatten_is_idempotent(sample_bundle):
    bundle = Bundle.model_validate(sample_bundle)

    first = flatten_bundle(bundle, ("en", "fr"), DISEASE_LOOKUP, MAH_LOOKUP)
    second = flatten_bundle(
        Bundle.model_validate(sample_bundle), ("en", "fr"), DISEASE_LOOKUP, MAH_LOOKUP
    )

    assert dump_json(first) == dump_json(second)
