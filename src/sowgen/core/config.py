"""Proposal configuration and project-file loading."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sowgen.core.errors import ConfigurationError
from sowgen.core.models import Section, SectionStatus

logger = logging.getLogger(__name__)


class CompanyInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    description: str = ""
    website: str = ""
    logo_url: str = Field(default="", alias="logoUrl")
    address: str = ""
    email: str = ""
    phone: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class ProjectInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    service_description: str = Field(default="", alias="serviceDescription")
    annual_budget: str = Field(default="", alias="annualBudget")
    target_geo: str = Field(default="", alias="targetGeo")

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class ProposalConfig(BaseModel):
    """What the generator knows about the proposal. Every field may be blank."""

    model_config = ConfigDict(populate_by_name=True)

    your_company: CompanyInfo = Field(default_factory=CompanyInfo, alias="yourCompany")
    client_company: CompanyInfo = Field(default_factory=CompanyInfo, alias="clientCompany")
    project: ProjectInfo = Field(default_factory=ProjectInfo)
    sections: List[str] = Field(default_factory=list)


# Required-field rules, checked separately so a lenient load can still export
# an incomplete configuration.
class _RequiredCompany(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)


class _RequiredProject(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    service_description: str = Field(min_length=1, alias="serviceDescription")


class _RequiredConfig(BaseModel):
    your_company: _RequiredCompany = Field(alias="yourCompany")
    client_company: _RequiredCompany = Field(alias="clientCompany")
    project: _RequiredProject
    sections: List[str] = Field(min_length=1)


class SectionRecord(BaseModel):
    """One entry of `sectionContents` as the web client stores it."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    content: str = ""
    status: SectionStatus = SectionStatus.IDLE
    error_message: Optional[str] = Field(default=None, alias="errorMessage")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, v: Any) -> Any:
        return "" if v is None else v

    def to_section(self) -> Section:
        return Section(
            id=self.id,
            title=self.title,
            content=self.content,
            status=self.status,
            error_message=self.error_message,
        )


class ProjectFile(ProposalConfig):
    section_contents: List[SectionRecord] = Field(default_factory=list, alias="sectionContents")


def error_messages(err: ValidationError) -> List[str]:
    """Flatten a pydantic error into `location: message` lines."""
    return [
        f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}"
        for e in err.errors()
    ]


def validate_config(config: Union[ProposalConfig, Dict[str, Any]]) -> List[str]:
    """Return human-readable problems with `config`; empty when it is usable."""
    if isinstance(config, ProposalConfig):
        config = config.model_dump(by_alias=True)
    try:
        _RequiredConfig.model_validate(config)
    except ValidationError as e:
        return error_messages(e)
    return []


def load_project(path: str, strict: bool = True) -> Tuple[ProposalConfig, List[Section]]:
    """
    Load a project file written by the web client.

    The file holds the configuration keys at the top level and the section
    records under `sectionContents`. With `strict` off, missing required
    fields are logged instead of raised; malformed values always raise.
    """
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read project file '{p}': {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Project file '{p}' must contain a JSON object")

    problems = validate_config(data)
    if problems:
        if strict:
            raise ConfigurationError(f"Invalid configuration in '{p}'", problems)
        for problem in problems:
            logger.warning("%s: %s", p.name, problem)

    try:
        project = ProjectFile.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid project file '{p}'", error_messages(e)) from e

    sections = [record.to_section() for record in project.section_contents]
    return project, sections
