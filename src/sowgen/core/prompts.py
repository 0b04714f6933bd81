"""Fill `{placeholder}` variables in section prompt templates."""

from typing import Dict, Optional

from sowgen.core.config import ProposalConfig

_BUDGET_EXPR = "{project.annualBudget ? `Annual Project Budget: ${project.annualBudget}` : ''}"
_GEO_EXPR = "{project.targetGeo ? `Target Geographic Area: ${project.targetGeo}` : ''}"


def template_values(config: ProposalConfig, section_title: Optional[str] = None) -> Dict[str, str]:
    you, client, project = config.your_company, config.client_company, config.project
    return {
        "{sectionTitle}": section_title or "[Section Title]",
        "{yourCompany.name}": you.name or "[Your Company Name]",
        "{yourCompany.description}": you.description or "[Your Company Description]",
        "{yourCompany.website}": you.website or "[Your Company Website]",
        "{clientCompany.name}": client.name or "[Client Company Name]",
        "{clientCompany.description}": client.description or "[Client Company Description]",
        "{clientCompany.website}": client.website or "[Client Company Website]",
        "{project.title}": project.title or "[Project Title]",
        "{project.serviceDescription}": project.service_description or "[Service Description]",
        _BUDGET_EXPR: f"Annual Project Budget: {project.annual_budget}" if project.annual_budget else "",
        _GEO_EXPR: f"Target Geographic Area: {project.target_geo}" if project.target_geo else "",
    }


def populate_prompt_template(template: str, config: ProposalConfig, section_title: Optional[str] = None) -> str:
    text = template
    for key, value in template_values(config, section_title).items():
        text = text.replace(key, value)
    return text
