from preparedness.models import Household
from preparedness.supplies import build_supply_list, purchase_links, supplies_from_preparations


def _names(supplies):
    return [c["category"] for c in supplies]


def test_purchase_links_encode_name_and_append_suffix():
    links = purchase_links("Water Storage Containers")
    assert links == {
        "amazon": "https://www.amazon.com/s?k=Water+Storage+Containers+emergency",
        "walmart": "https://www.walmart.com/search?q=Water+Storage+Containers+emergency",
    }
    assert purchase_links("Water Storage Containers") == links


def test_purchase_links_escape_reserved_characters():
    links = purchase_links("Pet Food & Treats")
    assert links["amazon"].endswith("Pet+Food+%26+Treats+emergency")


def test_base_categories_always_present():
    supplies = build_supply_list(Household(), [])
    assert _names(supplies) == ["Water & Food", "First Aid", "Communication & Lighting"]
    for category in supplies:
        assert category["items"]
        for item in category["items"]:
            assert set(item["purchase_links"]) == {"amazon", "walmart"}


def test_household_and_risk_driven_categories():
    household = Household(size=4, pets=True, special_needs=True)
    supplies = build_supply_list(household, ["winter", "tornado"])
    assert _names(supplies) == [
        "Water & Food",
        "First Aid",
        "Communication & Lighting",
        "Pet Supplies",
        "Special Needs",
        "Winter Weather",
        "Storm Protection",
    ]


def test_hurricane_alone_adds_storm_protection():
    assert "Storm Protection" in _names(build_supply_list(Household(), ["hurricane"]))
    assert "Storm Protection" not in _names(build_supply_list(Household(), ["flood"]))


def test_water_scales_with_household_size():
    water = build_supply_list(Household(size=4), [])[0]
    assert water["items"][0]["name"] == "Water Storage Containers (12 gallons)"
    assert "4 people" in water["reason"]


def test_mobility_items_go_into_special_needs():
    supplies = build_supply_list(Household(mobility_issues=True), [])
    special = [c for c in supplies if c["category"] == "Special Needs"]
    assert len(special) == 1
    assert "Evacuation Chair" in [i["name"] for i in special[0]["items"]]


def test_extracted_supply_groups_get_links_and_priority():
    groups = [
        {"category": "Water", "items": [
            {"name": "Bottled water (essential)", "priority": "high"},
            {"name": "Cooler", "priority": "low"},
        ]},
        {"category": "Empty", "items": []},
    ]
    supplies = supplies_from_preparations(groups)
    assert len(supplies) == 1
    assert supplies[0]["priority"] == "high"
    assert supplies[0]["items"][1]["purchase_links"]["amazon"].endswith("Cooler+emergency")
