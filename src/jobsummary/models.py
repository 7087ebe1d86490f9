from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

Length = Literal["short", "medium", "detailed"]
Focus = Literal["skills", "qualifications", "responsibilities", "balanced"]
Format = Literal["bullets", "paragraph"]

VALID_LENGTHS = ("short", "medium", "detailed")
VALID_FOCUS = ("skills", "qualifications", "responsibilities", "balanced")
VALID_FORMATS = ("bullets", "paragraph")

DEFAULT_LENGTH: Length = "medium"
DEFAULT_FOCUS: Focus = "balanced"
DEFAULT_FORMAT: Format = "bullets"

DEFAULT_TITLE = "Job Posting"
NO_OVERVIEW = "No overview available"


class WireModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ExtractionResult(WireModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = DEFAULT_TITLE
    content: str = ""
    url: str = ""
    extracted_at: datetime = Field(alias="extractedAt")


class SummaryOptions(WireModel):
    length: Length = DEFAULT_LENGTH
    focus: Focus = DEFAULT_FOCUS
    format: Format = DEFAULT_FORMAT


class SummaryRequest(SummaryOptions):
    job_text: str = Field(alias="jobText")

    @property
    def options(self) -> SummaryOptions:
        return SummaryOptions(length=self.length, focus=self.focus, format=self.format)


class TechStack(WireModel):
    languages: List[str] = Field(default_factory=list)
    frameworks: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)
    cloud: List[str] = Field(default_factory=list)

    def all_items(self) -> List[str]:
        return [*self.languages, *self.frameworks, *self.tools, *self.cloud]


class SummaryResult(WireModel):
    role_overview: str = Field(default=NO_OVERVIEW, alias="roleOverview")
    required_skills: List[str] = Field(default_factory=list, alias="requiredSkills")
    qualifications: List[str] = Field(default_factory=list)
    nice_to_have: List[str] = Field(default_factory=list, alias="niceToHave")
    tech_stack: TechStack = Field(default_factory=TechStack, alias="techStack")


class SummaryMetadata(SummaryOptions):
    timestamp: datetime


class SummaryResponse(WireModel):
    summary: SummaryResult
    metadata: SummaryMetadata
