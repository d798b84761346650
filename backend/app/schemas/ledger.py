"""
Pydantic value types exchanged with the reconciliation engine.

Amounts are integer minor units of the project's currency.
"""
from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator


class ExpenseRecord(BaseModel):
    """One payment made by a participant."""
    model_config = ConfigDict(frozen=True)

    payer_id: str
    amount: StrictInt = Field(ge=0)


class Settlement(BaseModel):
    """A transfer from a debtor to a creditor."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    amount: StrictInt = Field(gt=0)

    @model_validator(mode="after")
    def check_distinct_parties(self):
        if self.from_ == self.to:
            raise ValueError("A participant cannot settle with themselves")
        return self
