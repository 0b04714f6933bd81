import json

import pytest

from sowgen.core.config import ProjectInfo, ProposalConfig, load_project, validate_config
from sowgen.core.errors import ConfigurationError
from sowgen.core.models import SectionStatus
from sowgen.core.prompts import populate_prompt_template
from sowgen.utils.paths import export_filename


def test_load_project(project_file):
    config, sections = load_project(project_file)
    assert config.your_company.name == "Acme Corp"
    assert config.project.service_description == "Marketplace marketing"
    assert [s.id for s in sections] == ["intro", "draft", "scope", "signoff", "broken"]
    assert sections[2].status is SectionStatus.MODIFIED

def test_validate_config_reports_missing_fields():
    problems = validate_config(ProposalConfig())
    assert any(p.startswith("yourCompany.name: ") for p in problems)
    assert any(p.startswith("clientCompany.description: ") for p in problems)
    assert any(p.startswith("project.title: ") for p in problems)
    assert any(p.startswith("project.serviceDescription: ") for p in problems)
    assert any(p.startswith("sections: ") for p in problems)

def test_validate_config_ignores_surrounding_whitespace(sample_config):
    assert validate_config(sample_config) == []
    sample_config.client_company.name = "   "
    assert [p.split(":")[0] for p in validate_config(sample_config)] == ["clientCompany.name"]

def test_config_reads_camel_case_keys():
    config = ProposalConfig.model_validate({
        "yourCompany": {"name": "A", "logoUrl": "https://a.test/logo.png", "website": None},
        "project": {"serviceDescription": "Ads", "annualBudget": "$10k", "targetGeo": "EU"},
    })
    assert config.your_company.logo_url == "https://a.test/logo.png"
    assert config.your_company.website == ""
    assert config.project.service_description == "Ads"
    assert config.project.annual_budget == "$10k"
    assert config.project.target_geo == "EU"

def test_strict_load_rejects_incomplete_config(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"project": {"title": "X"}}), encoding="utf-8")
    with pytest.raises(ConfigurationError) as exc:
        load_project(str(path))
    assert any(p.startswith("yourCompany: ") for p in exc.value.problems)
    assert any(p.startswith("project.serviceDescription: ") for p in exc.value.problems)

    config, sections = load_project(str(path), strict=False)
    assert config.project.title == "X"
    assert sections == []

def test_wrong_value_types_are_rejected_even_when_lenient(tmp_path):
    path = tmp_path / "typed.json"
    path.write_text(json.dumps({"yourCompany": {"name": 42}}), encoding="utf-8")
    with pytest.raises(ConfigurationError) as exc:
        load_project(str(path), strict=False)
    assert any(p.startswith("yourCompany.name: ") for p in exc.value.problems)

def test_unknown_status_is_rejected(tmp_path):
    path = tmp_path / "p.json"
    data = {
        "yourCompany": {"name": "A", "description": "a"},
        "clientCompany": {"name": "B", "description": "b"},
        "project": {"title": "T", "serviceDescription": "S"},
        "sections": ["One"],
        "sectionContents": [{"id": "1", "title": "One", "content": "", "status": "done"}],
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid project file") as exc:
        load_project(str(path))
    assert any(p.startswith("sectionContents.0.status: ") for p in exc.value.problems)

def test_section_records_coerce_ids_and_null_content(tmp_path):
    path = tmp_path / "p.json"
    data = {"sectionContents": [{"id": 7, "title": "One", "content": None, "status": "success",
                                 "errorMessage": None}]}
    path.write_text(json.dumps(data), encoding="utf-8")
    _, sections = load_project(str(path), strict=False)
    assert sections[0].id == "7"
    assert sections[0].content == ""
    assert sections[0].status is SectionStatus.SUCCESS

def test_unreadable_project_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_project(str(path))
    with pytest.raises(ConfigurationError):
        load_project(str(tmp_path / "missing.json"))

def test_export_filename(sample_config):
    assert export_filename(sample_config, ".docx") == "Globex_Marketplace Launch_SOW.docx"
    assert export_filename(ProposalConfig(), "md") == "Client_Project_SOW.md"
    sample_config.project.title = "Q1/Q2: Growth"
    assert export_filename(sample_config, ".md") == "Globex_Q1_Q2_ Growth_SOW.md"

def test_populate_prompt_template(sample_config):
    template = (
        "Write {sectionTitle} for {clientCompany.name} by {yourCompany.name} "
        "about {project.title}. {clientCompany.website}\n"
        "{project.annualBudget ? `Annual Project Budget: ${project.annualBudget}` : ''}"
    )
    sample_config.project = ProjectInfo(title="Launch", service_description="Ads", annual_budget="$50k")
    text = populate_prompt_template(template, sample_config, "Scope")
    assert text == (
        "Write Scope for Globex by Acme Corp about Launch. [Client Company Website]\n"
        "Annual Project Budget: $50k"
    )

def test_populate_prompt_template_defaults():
    text = populate_prompt_template(
        "{sectionTitle}|{project.targetGeo ? `Target Geographic Area: ${project.targetGeo}` : ''}|",
        ProposalConfig(),
    )
    assert text == "[Section Title]||"
