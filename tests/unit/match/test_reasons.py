"""Unit tests for reason rendering."""

from rmm.match.reasons import Reason, ReasonCode, ReasonRenderer


def test_default_templates():
    renderer = ReasonRenderer()
    assert renderer.render(Reason(ReasonCode.OVERLAP, {"minutes": 90.0})) == "90 min overlap"
    assert renderer.render(Reason(ReasonCode.SOCIAL_FRIEND)) == "Friends with requester"
    assert renderer.render(Reason(ReasonCode.LEVEL_CLOSE, {"delta": 0.25})) == "Level: Close match (Δ0.2)"
    assert renderer.render(Reason(ReasonCode.LOCATION_SAME_CITY, {"city": "Nantes"})) == "Same city (Nantes)"


def test_custom_templates_override_defaults():
    renderer = ReasonRenderer({ReasonCode.SOCIAL_FRIEND: "Vous êtes amis"})
    assert renderer.render(Reason(ReasonCode.SOCIAL_FRIEND)) == "Vous êtes amis"
    # untouched codes keep their default wording
    assert renderer.render(Reason(ReasonCode.SOCIAL_NONE)) == "No social connection"


def test_missing_params_fall_back_to_code():
    renderer = ReasonRenderer()
    assert renderer.render(Reason(ReasonCode.LOCATION_DISTANCE)) == "location_distance"


def test_to_dict_flattens_params():
    reason = Reason(ReasonCode.EXCLUDED_OVERLAP, {"minutes": 30, "required": 60})
    assert reason.to_dict() == {"code": "excluded_overlap", "minutes": 30, "required": 60}


def test_render_all_preserves_order():
    renderer = ReasonRenderer()
    texts = renderer.render_all([Reason(ReasonCode.SURFACE_UNKNOWN), Reason(ReasonCode.SOCIAL_NONE)])
    assert texts == ["Surface preference unknown", "No social connection"]
