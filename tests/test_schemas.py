from propsearch.data.normalize import parse_image_list
from propsearch.data.schemas import FilterCriteria, MergeReport

from conftest import make_property


class TestFilterCriteria:
    """Normalization of parser payloads into criteria"""

    def test_language_model_field_names(self):
        criteria = FilterCriteria.from_mapping({
            "city": " Pune ",
            "bhk": 3,
            "budget": 12000000,
            "possessionStatus": "Ready",
            "locality": "Baner",
        })
        assert criteria == FilterCriteria(
            city="pune", unit_type="3", max_price=12000000, possession_status="ready", locality="baner",
        )

    def test_alternate_field_names(self):
        criteria = FilterCriteria.from_mapping({"unitType": "2", "maxBudget": "5000000"})
        assert criteria.unit_type == "2"
        assert criteria.max_price == 5000000

    def test_float_bhk_becomes_digit_string(self):
        assert FilterCriteria.from_mapping({"bhk": 2.0}).unit_type == "2"

    def test_absent_and_blank_values_are_unconstrained(self):
        criteria = FilterCriteria.from_mapping({"city": "", "locality": None, "bhk": "  "})
        assert criteria.is_empty
        assert criteria.as_dict() == {}

    def test_zero_or_garbage_budget_is_unconstrained(self):
        assert FilterCriteria.from_mapping({"budget": 0}).max_price is None
        assert FilterCriteria.from_mapping({"budget": "a lot"}).max_price is None

    def test_zero_bhk_is_unconstrained_as_int_or_text(self):
        assert FilterCriteria.from_mapping({"bhk": 0}).unit_type is None
        assert FilterCriteria(unit_type="0").unit_type is None
        assert FilterCriteria(unit_type=" 00 ").unit_type is None
        assert FilterCriteria(unit_type="10").unit_type == "10"

    def test_text_is_case_folded(self):
        assert FilterCriteria(city="STRASSE").city == "strasse"
        assert FilterCriteria(locality="Straße").locality == "strasse"

    def test_unknown_keys_ignored(self):
        assert FilterCriteria.from_mapping({"amenities": ["pool"]}).is_empty

    def test_none_payload(self):
        assert FilterCriteria.from_mapping(None).is_empty

    def test_as_dict_only_present_fields(self):
        assert FilterCriteria(city="Pune", max_price=100).as_dict() == {"city": "pune", "max_price": 100}


def test_merge_report_skipped_sums_missing_links():
    report = MergeReport(variants=10, merged=6, missing_configuration=1, missing_project=2, missing_address=1)
    assert report.skipped == 4
    assert report.to_dict()["skipped"] == 4


def test_property_to_dict_lists_images():
    data = make_property(property_images=("a.jpg",)).to_dict()
    assert data["property_images"] == ["a.jpg"]


def test_parse_image_list():
    assert parse_image_list("") == ((), True)
    assert parse_image_list(None) == ((), True)
    assert parse_image_list('["a", "b"]') == (("a", "b"), True)
    assert parse_image_list("nope") == ((), False)
