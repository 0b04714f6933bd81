import json
from datetime import date

import pytest

from sowgen.core.config import CompanyInfo, ProjectInfo, ProposalConfig
from sowgen.core.models import Section, SectionStatus
from sowgen.i18n.i18n import i18n

SIGNATURE_CONTENT = """IN WITNESS WHEREOF, the parties have signed this agreement.

**ACME CORP**
By: ____
Name: Jane Doe
Title: CEO"""


@pytest.fixture(autouse=True)
def default_locale():
    i18n.set_locale("en-US")
    yield
    i18n.set_locale("en-US")


@pytest.fixture
def export_date():
    return date(2024, 3, 5)


@pytest.fixture
def sample_config():
    return ProposalConfig(
        your_company=CompanyInfo(
            name="Acme Corp",
            description="Digital services firm",
            address="1 Main St",
            email="sales@acme.test",
            phone="555-0100",
        ),
        client_company=CompanyInfo(name="Globex", description="Retail brand"),
        project=ProjectInfo(title="Marketplace Launch", service_description="Marketplace marketing"),
        sections=["Introduction", "Scope", "Pricing", "Sign-off"],
    )


@pytest.fixture
def sample_sections():
    return [
        Section(
            id="intro",
            title="Introduction",
            content="# Overview\n\nAcme Corp helps **brands** grow.\nIt works globally.\n\n---\nThis trailer is dropped",
            status=SectionStatus.SUCCESS,
        ),
        Section(id="draft", title="Draft Notes", content="Not ready", status=SectionStatus.IDLE),
        Section(
            id="scope",
            title="Scope",
            content="- Campaigns\n  - Search ads\n- Reporting\n\n| Item | Cost |\n|---|---|\n| Setup | 100 |",
            status=SectionStatus.MODIFIED,
        ),
        Section(id="signoff", title="Sign-off", content=SIGNATURE_CONTENT, status=SectionStatus.SUCCESS),
        Section(id="broken", title="Pricing", content="partial", status=SectionStatus.ERROR),
    ]


@pytest.fixture
def project_file(tmp_path, sample_sections):
    data = {
        "yourCompany": {"name": "Acme Corp", "description": "Digital services firm"},
        "clientCompany": {"name": "Globex", "description": "Retail brand"},
        "project": {"title": "Marketplace Launch", "serviceDescription": "Marketplace marketing"},
        "sections": [s.title for s in sample_sections],
        "sectionContents": [
            {"id": s.id, "title": s.title, "content": s.content, "status": s.status.value}
            for s in sample_sections
        ],
    }
    path = tmp_path / "project.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return str(path)
