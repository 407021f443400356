from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class Contact(BaseModel):
    kind: Literal["url", "phone"]
    value: str


class NormalizedRecord(BaseModel):
    type: Optional[str] = None
    status: Optional[str] = None
    state: Optional[str] = None
    program: Optional[str] = None
    name: Optional[str] = None
    county: Optional[str] = None
    url: Optional[str] = None
    phone: Optional[str] = None


class ResultSet(BaseModel):
    geographic: List[NormalizedRecord] = Field(default_factory=list)
    tribal: List[NormalizedRecord] = Field(default_factory=list)


class Diagnostics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    no_contact: List[str] = Field(default_factory=list, alias="noContact")
    no_county: List[str] = Field(default_factory=list, alias="noCounty")
    no_url: List[str] = Field(default_factory=list, alias="noURL")
    bad_status: List[str] = Field(default_factory=list, alias="badStatus")

    def messages(self) -> List[str]:
        """All diagnostics in report order: county, contact, URL, status."""
        return [*self.no_county, *self.no_contact, *self.no_url, *self.bad_status]


class BatchResult(BaseModel):
    programs: ResultSet = Field(default_factory=ResultSet)
    diagnostics: Diagnostics = Field(default_factory=Diagnostics)
    suppressed: int = 0


class ReportSummary(BaseModel):
    rows: int = 0
    geographic: int = 0
    tribal: int = 0
    suppressed: int = 0
    diagnostics: int = 0
    encoding: Optional[str] = Field(default=None, examples=["utf-8-sig"])
    deterministic: bool = True


class NormalizeResponse(BaseModel):
    programs: ResultSet
    diagnostics: Diagnostics
    summary: ReportSummary


class HealthResponse(BaseModel):
    ok: bool = True
