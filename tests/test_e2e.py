"""
End-to-end pipeline runs through the public entry points.

Each test builds its stages from the default container, exactly as the
CLI does.
"""

import orjson
import pytest

from uismith import OrchestratorOptions, create_orchestrator, generate_ui
from uismith.agents import ExportFormat, ExportOptions, PipelineState


@pytest.mark.e2e
def test_pricing_page():
    result = generate_ui("Create a SaaS pricing page")

    assert result.success
    assert result.state == PipelineState.DONE
    spec = result.specification
    assert spec.name == "Pricing Page"
    assert spec.kinds() == ["PricingTable"]
    assert spec.components[0].properties["size"] == "lg"
    assert result.design_feedback.score == 100
    assert result.accessibility_report.score == 98
    assert result.accessibility_report.passed

    page = result.export_package.files[0]
    assert page.name == "page.tsx"
    assert "<PricingTable" in page.content
    assert 'import { PricingTable } from "@/components/generative";' in page.content


@pytest.mark.e2e
def test_unrecognised_request_falls_back_to_card_and_button():
    result = generate_ui("asdf")

    assert result.success
    assert result.specification.kinds() == ["Card", "Button"]
    assert result.design_feedback.score == 100
    assert result.accessibility_report.score == 98


@pytest.mark.e2e
def test_icon_only_button_is_blocked():
    result = generate_ui("Create an icon-only button")

    assert not result.success
    assert result.state == PipelineState.ERRORED
    assert result.design_feedback.score == 90
    assert result.accessibility_report.score == 73
    assert result.error_codes() == ["A11Y_BUTTON_NAME"]
    assert result.export_package is None
    assert result.specification.components[1].properties["ariaLabel"] == "arrow-right button"


@pytest.mark.e2e
def test_conversation_with_revisions():
    orchestrator = create_orchestrator()

    first = orchestrator.process_request("Create a SaaS pricing page")
    second = orchestrator.process_request("add a chart")
    third = orchestrator.modify_ui("remove the chart")

    assert [r.success for r in (first, second, third)] == [True, True, True]
    assert second.specification.kinds() == ["PricingTable", "Chart"]
    assert third.specification.kinds() == ["PricingTable"]
    assert first.specification.metadata.version == 2
    assert third.specification.metadata.version == 4
    assert len({r.specification.id for r in (first, second, third)}) == 3
    assert len({r.conversation_id for r in (first, second, third)}) == 1


@pytest.mark.e2e
def test_json_export_describes_specification():
    options = OrchestratorOptions(export_options=ExportOptions(format=ExportFormat.JSON))
    result = generate_ui("Create a contact form", options)

    assert result.success
    (schema,) = result.export_package.files
    document = orjson.loads(schema.content)
    assert [c["type"] for c in document["components"]] == result.specification.kinds()
    assert document["metadata"]["fingerprint"] == result.specification.fingerprint()
