from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Applicant(BaseModel):
    # Applicant payloads vary by source system; unknown keys are carried through untouched.
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    name: str
    email: str
    total_loan: Optional[Union[int, float]] = Field(default=None, alias="totalLoan")


class LoanRecord(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    id: str
    status: str
    maturity_date: date = Field(alias="maturityDate")
    applicant: Applicant


class LoanListData(BaseModel):
    loans: list[dict]


class LoanListResponse(BaseModel):
    status: str = "success"
    results: int
    data: LoanListData


class MessageResponse(BaseModel):
    status: str = "success"
    message: str
