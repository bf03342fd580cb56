from skilltrack.components.catalog import (
    ASSESSMENTS,
    AssessmentsCatalog,
    CloudSandboxCatalog,
    PLAYGROUNDS,
)


def test_assessments_catalog_renders_one_card_per_record_in_order():
    catalog = AssessmentsCatalog()
    assert [c.identifier for c in catalog.cards] == [r.identifier for r in ASSESSMENTS]
    assert [s.value for s in catalog.summary] == ["150+", "25K+", "92%", "Real-time"]
    assert len(catalog.features) == 4


def test_assessment_start_reaches_callback():
    started = []
    card = AssessmentsCatalog(on_start=started.append).find("cloud-architecture-design")
    card.activate()
    assert started == ["cloud-architecture-design"]
    assert AssessmentsCatalog().find("missing") is None


def test_cloud_sandbox_catalog():
    catalog = CloudSandboxCatalog()
    cards = catalog.cards
    assert len(cards) == len(PLAYGROUNDS) == 8
    assert [c.marker for c in cards[:3]] == ["1", "2", "3"]
    assert len(catalog.benefits) == 7
    assert len(catalog.faqs) == 5
    assert catalog.get("jupyter").title == "Jupyter Sandbox"
    assert catalog.get("nope") is None
