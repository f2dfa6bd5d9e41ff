from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ListingState(str, Enum):
    EMPTY = "empty"
    POPULATING = "populating"
    POPULATED = "populated"
    FAILED = "failed"


class Price(BaseModel):
    # Not filled by any extractor yet.
    currency: str = ""
    amount: int = 0


class Address(BaseModel):
    value: str = Field("", description="Raw address string as found on the page")
    street: str = ""
    postal_code: str = ""
    locality: str = ""
    region: str = ""


class OpenHouse(BaseModel):
    start: Optional[datetime] = Field(None, description="None when the source date did not parse")
    end: Optional[datetime] = None
    name: str = ""


class Listing(BaseModel):
    url: str
    canonical_url: str = ""
    description: str = ""
    address: Address = Field(default_factory=Address)
    photo_url: str = ""
    price: Price = Field(default_factory=Price)
    open_houses: List[OpenHouse] = Field(default_factory=list)
    state: ListingState = ListingState.EMPTY
    diagnostics: List[str] = Field(default_factory=list, description="Reasons extracted items were discarded")
