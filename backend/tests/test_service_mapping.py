from nanny_booking.pricing import DurationType, ServiceSelection, canonical_service_key, map_services


def test_long_term_flags_and_household_tags():
    raw = {
        "cooking": True,
        "drivingSupport": "yes",
        "ecdTraining": 1,
        "montessori": False,
        "householdSupport": ["Light Housekeeping", "errands"],
    }
    sel = map_services(raw, DurationType.LONG_TERM)
    assert sel.cooking and sel.driving_support and sel.ecd_training
    assert sel.light_housekeeping and sel.errand_runs
    assert not sel.montessori
    assert sel.selected() == [
        "cooking",
        "driving_support",
        "ecd_training",
        "light_housekeeping",
        "errand_runs",
    ]


def test_short_term_ignores_long_term_only_flags():
    raw = {"cooking": True, "backupNanny": True, "montessori": True, "petCare": True}
    sel = map_services(raw, "short_term")
    assert sel.cooking and sel.pet_care
    assert not sel.backup_nanny
    assert not sel.montessori


def test_snake_case_keys_are_accepted():
    sel = map_services({"special_needs": True, "household_support": "light_housekeeping"}, "long_term")
    assert sel.special_needs
    assert sel.light_housekeeping


def test_unrecognized_input_maps_to_nothing():
    assert map_services(None, DurationType.LONG_TERM) == ServiceSelection()
    assert map_services({"householdSupport": 42, "cooking": "nope"}, None) == ServiceSelection()
    assert map_services("garbage", "long_term") == ServiceSelection()


def test_canonical_service_key_folds_aliases():
    assert canonical_service_key("specialNeeds") == "special_needs"
    assert canonical_service_key("drivingSupport") == "driving_support"
    assert canonical_service_key(" Light Housekeeping ") == "light_housekeeping"
    assert canonical_service_key("montessori") == "montessori"
    assert canonical_service_key("yoga") == "yoga"
